"""Coaching domain model tests."""

import pytest
from pydantic import ValidationError

from forge_ai.domain.coaching.models import (
    CoachingRequest,
    FeedbackIntensity,
    FocusArea,
    Formality,
    PointOfView,
    StyleContext,
    Tense,
)


class TestCoachingRequest:
    """CoachingRequest parsing."""

    def test_literals_are_parsed(self) -> None:
        """String literals become enum members."""
        # When
        request = CoachingRequest("Some passage.", "DEEP_DIVE", ["PACING", "VOICE"])

        # Then
        assert request.intensity is FeedbackIntensity.DEEP_DIVE
        assert request.focus_areas == [FocusArea.PACING, FocusArea.VOICE]

    def test_duplicate_focus_areas_keep_first_order(self) -> None:
        """Duplicates are dropped, order of first appearance is kept."""
        # When
        request = CoachingRequest(
            "Some passage.",
            FeedbackIntensity.STANDARD,
            [FocusArea.VOICE, "PACING", FocusArea.VOICE, "PACING"],
        )

        # Then
        assert request.focus_areas == [FocusArea.VOICE, FocusArea.PACING]

    def test_missing_focus_areas_is_empty(self) -> None:
        """None means no focus areas."""
        # When
        request = CoachingRequest("Some passage.", "LIGHT_TOUCH")

        # Then
        assert request.focus_areas == []

    def test_unknown_intensity_is_rejected(self) -> None:
        """Intensity outside the enumeration raises ValueError."""
        # When & Then
        with pytest.raises(ValueError):
            CoachingRequest("Some passage.", "EXTREME")

    def test_unknown_focus_area_is_rejected(self) -> None:
        """Focus area outside the enumeration raises ValueError."""
        # When & Then
        with pytest.raises(ValueError):
            CoachingRequest("Some passage.", "STANDARD", ["PLOT_HOLES"])


class TestStyleContext:
    """StyleContext defaults and immutability."""

    def test_defaults(self) -> None:
        """Defaults are third limited, past and literary with no rules."""
        # When
        style = StyleContext()

        # Then
        assert style.pov is PointOfView.THIRD_LIMITED
        assert style.tense is Tense.PAST
        assert style.formality is Formality.LITERARY
        assert style.custom_rules == ()

    def test_is_frozen(self) -> None:
        """Style snapshots cannot be mutated."""
        # Given
        style = StyleContext()

        # When & Then
        with pytest.raises(ValidationError):
            style.pov = PointOfView.FIRST  # type: ignore[misc]

    def test_parses_json_payload(self) -> None:
        """API payloads with literals and rule objects validate."""
        # When
        style = StyleContext.model_validate(
            {
                "pov": "FIRST",
                "tense": "PRESENT",
                "formality": "COMMERCIAL",
                "custom_rules": [{"rule": "Short chapters", "example": "Under 2k words"}],
            }
        )

        # Then
        assert style.pov is PointOfView.FIRST
        assert style.custom_rules[0].rule == "Short chapters"


class TestFocusAreaLabels:
    """Readable focus area labels."""

    def test_every_focus_area_has_a_label(self) -> None:
        """Labels exist for the whole enumeration."""
        # Then
        assert all(area.label for area in FocusArea)
        assert FocusArea.SHOW_VS_TELL.label == "Show vs. tell"
