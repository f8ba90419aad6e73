"""Coaching domain models.

Core models shared by the coaching workflow: style context, coaching
requests, logged interactions and usage reporting.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PointOfView(str, Enum):
    """Narrative point of view."""

    FIRST = "FIRST"
    SECOND = "SECOND"
    THIRD_LIMITED = "THIRD_LIMITED"
    THIRD_OMNISCIENT = "THIRD_OMNISCIENT"
    MULTIPLE = "MULTIPLE"


class Tense(str, Enum):
    """Narrative tense."""

    PAST = "PAST"
    PRESENT = "PRESENT"
    MIXED = "MIXED"


class Formality(str, Enum):
    """Style register."""

    LITERARY = "LITERARY"
    COMMERCIAL = "COMMERCIAL"
    GENRE = "GENRE"
    EXPERIMENTAL = "EXPERIMENTAL"


class FeedbackIntensity(str, Enum):
    """Requested depth of coaching feedback."""

    LIGHT_TOUCH = "LIGHT_TOUCH"
    STANDARD = "STANDARD"
    DEEP_DIVE = "DEEP_DIVE"


class FocusArea(str, Enum):
    """Craft dimension the coach should address."""

    SENTENCE_RHYTHM = "SENTENCE_RHYTHM"
    SHOW_VS_TELL = "SHOW_VS_TELL"
    PACING = "PACING"
    WORD_ECONOMY = "WORD_ECONOMY"
    DIALOGUE = "DIALOGUE"
    DESCRIPTION = "DESCRIPTION"
    VOICE = "VOICE"
    REVISION = "REVISION"

    @property
    def label(self) -> str:
        """Human-readable name used in prompts."""
        return FOCUS_AREA_LABELS[self]


FOCUS_AREA_LABELS: dict[FocusArea, str] = {
    FocusArea.SENTENCE_RHYTHM: "Sentence rhythm",
    FocusArea.SHOW_VS_TELL: "Show vs. tell",
    FocusArea.PACING: "Pacing",
    FocusArea.WORD_ECONOMY: "Word economy",
    FocusArea.DIALOGUE: "Dialogue",
    FocusArea.DESCRIPTION: "Description",
    FocusArea.VOICE: "Voice",
    FocusArea.REVISION: "Revision",
}


class RequestType(str, Enum):
    """Kind of logged coaching exchange."""

    PASSAGE_ANALYSIS = "PASSAGE_ANALYSIS"
    CRAFT_QA = "CRAFT_QA"


class SubscriptionTier(str, Enum):
    """User subscription tier."""

    FREE = "FREE"
    PRO = "PRO"
    STUDIO = "STUDIO"


class InteractionFlag(str, Enum):
    """Post-hoc flags on an interaction. Each maps to one boolean column."""

    ACKNOWLEDGED = "acknowledged"
    DISMISSED = "dismissed"
    FLAGGED = "flagged"


class CustomRule(BaseModel):
    """A project-specific style rule with an example."""

    model_config = ConfigDict(frozen=True)

    rule: str = Field(..., description="Rule text")
    example: str = Field(..., description="Example illustrating the rule")


class StyleContext(BaseModel):
    """Immutable style snapshot of a project used for prompting."""

    model_config = ConfigDict(frozen=True)

    pov: PointOfView = Field(default=PointOfView.THIRD_LIMITED, description="Point of view")
    tense: Tense = Field(default=Tense.PAST, description="Narrative tense")
    formality: Formality = Field(default=Formality.LITERARY, description="Style register")
    custom_rules: tuple[CustomRule, ...] = Field(
        default=(), description="Ordered custom style rules"
    )


class CoachingRequest:
    """Passage coaching request.

    Validates the enumerated literals and removes duplicate focus areas
    while keeping their original order. Passage length is checked by the
    coaching workflow, not here.
    """

    def __init__(
        self,
        passage: str,
        intensity: FeedbackIntensity | str,
        focus_areas: list[FocusArea | str] | None = None,
    ) -> None:
        """Builds the request.

        Args:
            passage: Selected passage text
            intensity: One of the FeedbackIntensity literals
            focus_areas: Zero or more FocusArea literals

        Raises:
            ValueError: An intensity or focus area literal is not recognised
        """
        self.passage = passage
        self.intensity = FeedbackIntensity(intensity)

        seen: list[FocusArea] = []
        for area in focus_areas or []:
            parsed = FocusArea(area)
            if parsed not in seen:
                seen.append(parsed)
        self.focus_areas = seen

    def __repr__(self) -> str:
        return (
            f"<CoachingRequest intensity={self.intensity.value} "
            f"focus_areas={[a.value for a in self.focus_areas]}>"
        )


class Interaction(BaseModel):
    """Logged exchange with the coaching model.

    Request and response text never change after creation; only the three
    flags do, and only through the repository's flag update.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Interaction id")
    user_id: str = Field(..., description="Owning user id")
    project_id: str | None = Field(default=None, description="Related project id")
    document_id: str | None = Field(default=None, description="Related document id")
    request_type: RequestType = Field(..., description="Request type")
    request_text: str = Field(..., description="Passage or question sent by the author")
    response_text: str = Field(..., description="Model response text")
    feedback_intensity: FeedbackIntensity = Field(..., description="Intensity used")
    created_at: datetime = Field(..., description="Creation timestamp")
    dismissed: bool = Field(default=False)
    acknowledged: bool = Field(default=False)
    flagged: bool = Field(default=False)


class NewInteraction(BaseModel):
    """Fields supplied when logging a successful model call."""

    user_id: str
    project_id: str | None = None
    document_id: str | None = None
    request_type: RequestType
    request_text: str
    response_text: str
    feedback_intensity: FeedbackIntensity


class UsageSummary(BaseModel):
    """Coaching usage report for a user."""

    tier: SubscriptionTier = Field(..., description="Subscription tier")
    daily_coaching_requests: int = Field(..., ge=0, description="Interactions today")
    monthly_coaching_requests: int = Field(
        ..., ge=0, description="Interactions this month"
    )
    daily_limit: int | None = Field(
        default=None, description="Daily ceiling, None when unlimited"
    )


class TemperatureCheckReport(BaseModel):
    """Coarse chapter aggregate over stored scene word counts."""

    chapter_id: str
    scene_count: int = Field(..., ge=0)
    total_words: int = Field(..., ge=0)
    analysis: str
