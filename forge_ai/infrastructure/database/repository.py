"""Coaching repository - database access layer.

Resolves manuscript ownership chains, counts and writes coaching
interactions, and manages project style profiles.
"""

from datetime import UTC, datetime

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.domain.coaching.manuscript import (
    ChapterRef,
    DocumentRef,
    ProjectRef,
    SceneWordCount,
)
from forge_ai.domain.coaching.models import (
    CustomRule,
    FeedbackIntensity,
    Formality,
    Interaction,
    InteractionFlag,
    NewInteraction,
    PointOfView,
    RequestType,
    StyleContext,
    SubscriptionTier,
    Tense,
)
from forge_ai.infrastructure.database.models import (
    ChapterORM,
    DocumentORM,
    InteractionORM,
    ProjectORM,
    SceneORM,
    StyleProfileORM,
    SubscriptionORM,
)

logger = structlog.get_logger(__name__)


class CoachingRepository:
    """Storage collaborator for the coaching workflow."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialises the repository.

        Args:
            session: Async database session
        """
        self.session = session

    # =========================================================================
    # Manuscript lookups
    # =========================================================================

    async def get_project(self, project_id: str) -> ProjectRef | None:
        """Fetches a project with its style profile.

        Args:
            project_id: Project id

        Returns:
            Project read model, or None when missing
        """
        stmt = (
            select(ProjectORM, StyleProfileORM)
            .outerjoin(StyleProfileORM, StyleProfileORM.project_id == ProjectORM.id)
            .where(ProjectORM.id == project_id)
        )
        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None
        project, profile = row
        return self._project_to_domain(project, profile)

    async def get_document_with_project(self, document_id: str) -> DocumentRef | None:
        """Resolves document -> scene -> chapter -> project -> style profile.

        Args:
            document_id: Document id

        Returns:
            Document read model with its project, or None if any link is missing
        """
        stmt = (
            select(DocumentORM, SceneORM, ChapterORM, ProjectORM, StyleProfileORM)
            .join(SceneORM, SceneORM.id == DocumentORM.scene_id)
            .join(ChapterORM, ChapterORM.id == SceneORM.chapter_id)
            .join(ProjectORM, ProjectORM.id == ChapterORM.project_id)
            .outerjoin(StyleProfileORM, StyleProfileORM.project_id == ProjectORM.id)
            .where(DocumentORM.id == document_id)
        )
        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None
        document, scene, chapter, project, profile = row
        return DocumentRef(
            id=document.id,
            scene_id=scene.id,
            chapter_id=chapter.id,
            project=self._project_to_domain(project, profile),
        )

    async def get_chapter_with_scenes(self, chapter_id: str) -> ChapterRef | None:
        """Fetches a chapter, its project and each scene's stored word count.

        Args:
            chapter_id: Chapter id

        Returns:
            Chapter read model, or None when missing
        """
        chapter_stmt = (
            select(ChapterORM, ProjectORM)
            .join(ProjectORM, ProjectORM.id == ChapterORM.project_id)
            .where(ChapterORM.id == chapter_id)
        )
        row = (await self.session.execute(chapter_stmt)).first()
        if row is None:
            return None
        chapter, project = row

        scenes_stmt = (
            select(SceneORM.id, DocumentORM.word_count)
            .outerjoin(DocumentORM, DocumentORM.scene_id == SceneORM.id)
            .where(SceneORM.chapter_id == chapter_id)
            .order_by(SceneORM.order_index)
        )
        scenes = [
            SceneWordCount(scene_id=scene_id, word_count=word_count)
            for scene_id, word_count in (await self.session.execute(scenes_stmt)).all()
        ]
        return ChapterRef(
            id=chapter.id,
            project=self._project_to_domain(project, None),
            scenes=scenes,
        )

    async def get_subscription_tier(self, user_id: str) -> SubscriptionTier | None:
        """Returns the user's subscription tier, None without a subscription row."""
        result = await self.session.execute(
            select(SubscriptionORM.tier).where(SubscriptionORM.user_id == user_id)
        )
        tier = result.scalar_one_or_none()
        return SubscriptionTier(tier) if tier else None

    # =========================================================================
    # Interactions
    # =========================================================================

    async def count_interactions_since(self, user_id: str, since: datetime) -> int:
        """Counts a user's interactions created at or after the given time.

        Args:
            user_id: User id
            since: Window start (timezone-aware)

        Returns:
            Number of interactions in the window
        """
        stmt = (
            select(func.count())
            .select_from(InteractionORM)
            .where(InteractionORM.user_id == user_id)
            .where(InteractionORM.created_at >= since.astimezone(UTC))
        )
        return int((await self.session.execute(stmt)).scalar_one())

    async def create_interaction(self, data: NewInteraction) -> Interaction:
        """Persists a new interaction.

        Args:
            data: Interaction fields

        Returns:
            The stored interaction
        """
        orm = InteractionORM(
            user_id=data.user_id,
            project_id=data.project_id,
            document_id=data.document_id,
            request_type=data.request_type.value,
            request_text=data.request_text,
            response_text=data.response_text,
            feedback_intensity=data.feedback_intensity.value,
            created_at=datetime.now(UTC),
        )
        self.session.add(orm)
        await self.session.commit()
        await self.session.refresh(orm)

        logger.info(
            "interaction_created",
            interaction_id=orm.id,
            user_id=orm.user_id,
            request_type=orm.request_type,
        )
        return self._interaction_to_domain(orm)

    async def get_interaction(self, interaction_id: str) -> Interaction | None:
        """Fetches an interaction by id."""
        result = await self.session.execute(
            select(InteractionORM).where(InteractionORM.id == interaction_id)
        )
        orm = result.scalar_one_or_none()
        return self._interaction_to_domain(orm) if orm else None

    async def set_interaction_flag(
        self, interaction_id: str, flag: InteractionFlag
    ) -> Interaction | None:
        """Sets one flag column to true. Text columns are never touched.

        Args:
            interaction_id: Interaction id
            flag: Flag to raise

        Returns:
            The updated interaction, or None when missing
        """
        column = InteractionFlag(flag).value
        await self.session.execute(
            update(InteractionORM)
            .where(InteractionORM.id == interaction_id)
            .values({column: True})
        )
        await self.session.commit()

        logger.info("interaction_flag_set", interaction_id=interaction_id, flag=column)
        return await self.get_interaction(interaction_id)

    async def list_interactions(
        self, user_id: str, project_id: str, limit: int
    ) -> list[Interaction]:
        """Lists a user's interactions for a project, newest first."""
        stmt = (
            select(InteractionORM)
            .where(InteractionORM.user_id == user_id)
            .where(InteractionORM.project_id == project_id)
            .order_by(InteractionORM.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._interaction_to_domain(orm) for orm in result.scalars().all()]

    # =========================================================================
    # Style profiles
    # =========================================================================

    async def get_style_profile(self, project_id: str) -> StyleContext | None:
        """Fetches the project's style profile, None when it was never created."""
        orm = await self._get_style_profile_orm(project_id)
        return self._style_to_domain(orm) if orm else None

    async def create_default_style_profile(self, project_id: str) -> StyleContext:
        """Creates the default THIRD_LIMITED / PAST / LITERARY profile."""
        return await self.upsert_style_profile(project_id, StyleContext())

    async def upsert_style_profile(
        self, project_id: str, style: StyleContext
    ) -> StyleContext:
        """Creates or replaces the project's style profile.

        Args:
            project_id: Project id
            style: New style context; custom_rules is kept when not set explicitly

        Returns:
            The stored style context
        """
        orm = await self._get_style_profile_orm(project_id)
        if orm is None:
            orm = StyleProfileORM(project_id=project_id)
            self.session.add(orm)

        orm.pov = style.pov.value
        orm.tense = style.tense.value
        orm.formality = style.formality.value
        # Stored rules survive an update that does not set custom_rules.
        if "custom_rules" in style.model_fields_set or orm.custom_rules is None:
            orm.custom_rules = [rule.model_dump() for rule in style.custom_rules]

        await self.session.commit()
        await self.session.refresh(orm)

        logger.info("style_profile_saved", project_id=project_id)
        return self._style_to_domain(orm)

    async def _get_style_profile_orm(self, project_id: str) -> StyleProfileORM | None:
        result = await self.session.execute(
            select(StyleProfileORM).where(StyleProfileORM.project_id == project_id)
        )
        return result.scalar_one_or_none()

    # =========================================================================
    # ORM -> domain
    # =========================================================================

    def _project_to_domain(
        self, project: ProjectORM, profile: StyleProfileORM | None
    ) -> ProjectRef:
        return ProjectRef(
            id=project.id,
            user_id=project.user_id,
            title=project.title,
            genre=project.genre,
            style=self._style_to_domain(profile) if profile else None,
        )

    def _style_to_domain(self, orm: StyleProfileORM) -> StyleContext:
        return StyleContext(
            pov=PointOfView(orm.pov),
            tense=Tense(orm.tense),
            formality=Formality(orm.formality),
            custom_rules=tuple(CustomRule(**rule) for rule in orm.custom_rules or []),
        )

    def _interaction_to_domain(self, orm: InteractionORM) -> Interaction:
        created_at = orm.created_at
        # SQLite hands back naive values; they were written in UTC.
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)

        return Interaction(
            id=orm.id,
            user_id=orm.user_id,
            project_id=orm.project_id,
            document_id=orm.document_id,
            request_type=RequestType(orm.request_type),
            request_text=orm.request_text,
            response_text=orm.response_text,
            feedback_intensity=FeedbackIntensity(orm.feedback_intensity),
            created_at=created_at,
            dismissed=orm.dismissed,
            acknowledged=orm.acknowledged,
            flagged=orm.flagged,
        )
