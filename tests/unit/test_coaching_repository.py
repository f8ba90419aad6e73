"""Coaching repository tests against an in-memory SQLite database."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.domain.coaching.models import (
    CustomRule,
    FeedbackIntensity,
    Formality,
    InteractionFlag,
    NewInteraction,
    PointOfView,
    RequestType,
    StyleContext,
    SubscriptionTier,
    Tense,
)
from forge_ai.infrastructure.database.models import (
    InteractionORM,
    StyleProfileORM,
    SubscriptionORM,
)
from forge_ai.infrastructure.database.repository import CoachingRepository
from tests.unit.conftest import SeededManuscript
from tests.unit.factories import OTHER_USER_ID, OWNER_ID


def new_interaction(user_id: str = OWNER_ID, **overrides) -> NewInteraction:
    data = {
        "user_id": user_id,
        "project_id": "project-1",
        "document_id": "document-1",
        "request_type": RequestType.PASSAGE_ANALYSIS,
        "request_text": "The passage.",
        "response_text": "An observation.",
        "feedback_intensity": FeedbackIntensity.STANDARD,
    }
    data.update(overrides)
    return NewInteraction(**data)


@pytest.fixture
def repository(db_session: AsyncSession) -> CoachingRepository:
    return CoachingRepository(db_session)


class TestManuscriptLookups:
    """Ownership chain resolution."""

    async def test_document_resolves_to_project(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Document -> scene -> chapter -> project with no style profile."""
        # When
        document = await repository.get_document_with_project("document-1")

        # Then
        assert document is not None
        assert document.scene_id == "scene-1"
        assert document.chapter_id == "chapter-1"
        assert document.project.id == seeded.project_id
        assert document.project.user_id == OWNER_ID
        assert document.project.genre == "Fantasy"
        assert document.project.style is None

    async def test_missing_document_is_none(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Unknown ids return None."""
        # When & Then
        assert await repository.get_document_with_project("missing") is None

    async def test_project_carries_style_profile(
        self,
        repository: CoachingRepository,
        db_session: AsyncSession,
        seeded: SeededManuscript,
    ) -> None:
        """A stored style profile is attached to the project."""
        # Given
        db_session.add(
            StyleProfileORM(
                project_id=seeded.project_id,
                pov="FIRST",
                tense="PRESENT",
                formality="COMMERCIAL",
                custom_rules=[{"rule": "No semicolons", "example": "Use a period"}],
            )
        )
        await db_session.commit()

        # When
        project = await repository.get_project(seeded.project_id)

        # Then
        assert project is not None
        assert project.style == StyleContext(
            pov=PointOfView.FIRST,
            tense=Tense.PRESENT,
            formality=Formality.COMMERCIAL,
            custom_rules=(CustomRule(rule="No semicolons", example="Use a period"),),
        )

    async def test_chapter_lists_scene_word_counts(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Scenes come back in order with their stored counts."""
        # When
        chapter = await repository.get_chapter_with_scenes(seeded.chapter_id)

        # Then
        assert chapter is not None
        assert chapter.project.user_id == OWNER_ID
        assert [s.scene_id for s in chapter.scenes] == ["scene-1", "scene-2"]
        assert [s.word_count for s in chapter.scenes] == [1200, 800]

    async def test_subscription_tier(
        self,
        repository: CoachingRepository,
        db_session: AsyncSession,
        seeded: SeededManuscript,
    ) -> None:
        """Tier is read from the subscription row, None without one."""
        # Given
        db_session.add(SubscriptionORM(user_id=OWNER_ID, tier="PRO"))
        await db_session.commit()

        # When & Then
        assert await repository.get_subscription_tier(OWNER_ID) is SubscriptionTier.PRO
        assert await repository.get_subscription_tier(OTHER_USER_ID) is None


class TestInteractions:
    """Interaction log."""

    async def test_create_and_fetch(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Created interactions start with all flags false."""
        # When
        created = await repository.create_interaction(new_interaction())
        fetched = await repository.get_interaction(created.id)

        # Then
        assert fetched == created
        assert created.request_type is RequestType.PASSAGE_ANALYSIS
        assert created.created_at.tzinfo is not None
        assert (created.dismissed, created.acknowledged, created.flagged) == (
            False,
            False,
            False,
        )

    async def test_count_since_window_start(
        self,
        repository: CoachingRepository,
        db_session: AsyncSession,
        seeded: SeededManuscript,
    ) -> None:
        """Only the user's interactions at or after the window start are counted."""
        # Given
        await repository.create_interaction(new_interaction())
        await repository.create_interaction(new_interaction())
        await repository.create_interaction(new_interaction(user_id=OTHER_USER_ID))
        db_session.add(
            InteractionORM(
                user_id=OWNER_ID,
                request_type="CRAFT_QA",
                request_text="Old question",
                response_text="Old answer",
                feedback_intensity="STANDARD",
                created_at=datetime.now(UTC) - timedelta(days=3),
            )
        )
        await db_session.commit()

        # When
        since_yesterday = await repository.count_interactions_since(
            OWNER_ID, datetime.now(UTC) - timedelta(days=1)
        )
        since_last_week = await repository.count_interactions_since(
            OWNER_ID, datetime.now(UTC) - timedelta(days=7)
        )
        in_future = await repository.count_interactions_since(
            OWNER_ID, datetime.now(UTC) + timedelta(hours=1)
        )

        # Then
        assert since_yesterday == 2
        assert since_last_week == 3
        assert in_future == 0

    async def test_set_flag_keeps_text(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Raising a flag changes only that flag."""
        # Given
        created = await repository.create_interaction(new_interaction())

        # When
        updated = await repository.set_interaction_flag(created.id, InteractionFlag.DISMISSED)

        # Then
        assert updated is not None
        assert updated.dismissed is True
        assert updated.acknowledged is False
        assert updated.flagged is False
        assert updated.request_text == created.request_text
        assert updated.response_text == created.response_text

    async def test_set_flag_on_missing_interaction(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Unknown ids return None."""
        # When & Then
        assert await repository.set_interaction_flag("missing", InteractionFlag.FLAGGED) is None

    async def test_list_is_scoped_and_newest_first(
        self,
        repository: CoachingRepository,
        db_session: AsyncSession,
        seeded: SeededManuscript,
    ) -> None:
        """Listing filters by user and project, newest first, with a limit."""
        # Given
        base = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)
        for offset, text in enumerate(["first", "second", "third"]):
            db_session.add(
                InteractionORM(
                    user_id=OWNER_ID,
                    project_id="project-1",
                    request_type="CRAFT_QA",
                    request_text=text,
                    response_text="answer",
                    feedback_intensity="STANDARD",
                    created_at=base + timedelta(minutes=offset),
                )
            )
        db_session.add(
            InteractionORM(
                user_id=OTHER_USER_ID,
                project_id="project-1",
                request_type="CRAFT_QA",
                request_text="foreign",
                response_text="answer",
                feedback_intensity="STANDARD",
                created_at=base + timedelta(minutes=10),
            )
        )
        await db_session.commit()

        # When
        listed = await repository.list_interactions(OWNER_ID, "project-1", limit=2)

        # Then
        assert [i.request_text for i in listed] == ["third", "second"]


class TestStyleProfiles:
    """Style profile storage."""

    async def test_default_profile_is_created(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Default profile is third limited, past, literary."""
        # Given
        assert await repository.get_style_profile(seeded.project_id) is None

        # When
        profile = await repository.create_default_style_profile(seeded.project_id)

        # Then
        assert profile == StyleContext()
        assert await repository.get_style_profile(seeded.project_id) == StyleContext()

    async def test_upsert_replaces_existing_profile(
        self,
        repository: CoachingRepository,
        db_session: AsyncSession,
        seeded: SeededManuscript,
    ) -> None:
        """A second upsert updates the single row in place."""
        # Given
        await repository.create_default_style_profile(seeded.project_id)
        style = StyleContext(
            pov=PointOfView.SECOND,
            tense=Tense.MIXED,
            formality=Formality.EXPERIMENTAL,
            custom_rules=(CustomRule(rule="Lowercase only", example="she said nothing"),),
        )

        # When
        saved = await repository.upsert_style_profile(seeded.project_id, style)

        # Then
        assert saved == style
        count = (
            await db_session.execute(select(func.count()).select_from(StyleProfileORM))
        ).scalar_one()
        assert count == 1

    async def test_upsert_without_rules_keeps_stored_rules(
        self, repository: CoachingRepository, seeded: SeededManuscript
    ) -> None:
        """Leaving custom_rules unset updates POV, tense and register only."""
        # Given
        rules = (CustomRule(rule="No semicolons", example="Use a period"),)
        await repository.upsert_style_profile(
            seeded.project_id, StyleContext(custom_rules=rules)
        )

        # When
        saved = await repository.upsert_style_profile(
            seeded.project_id, StyleContext(pov=PointOfView.FIRST)
        )

        # Then
        assert saved.pov is PointOfView.FIRST
        assert saved.custom_rules == rules

    async def test_upsert_with_empty_rules_clears_them(
        self,
        repository: CoachingRepository,
        db_session: AsyncSession,
        seeded: SeededManuscript,
    ) -> None:
        """An explicit empty rule list removes stored rules."""
        # Given
        await repository.upsert_style_profile(
            seeded.project_id,
            StyleContext(custom_rules=(CustomRule(rule="Short", example="Yes."),)),
        )

        # When
        saved = await repository.upsert_style_profile(
            seeded.project_id, StyleContext(custom_rules=())
        )

        # Then
        assert saved.custom_rules == ()
        count = (
            await db_session.execute(select(func.count()).select_from(StyleProfileORM))
        ).scalar_one()
        assert count == 1
