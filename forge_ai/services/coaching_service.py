"""Coaching service - application layer.

Runs the passage analysis and craft Q&A workflows: ownership check, daily
quota, prompt synthesis, a single model call and interaction logging.
An interaction is written only after the model has answered, so a stored
interaction always means a successful call.

The quota read-check-write sequence is not atomic. Concurrent requests
from one user can pass the daily ceiling by the number in flight.
"""

import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.core.config.settings import settings
from forge_ai.domain.coaching.manuscript import ProjectRef
from forge_ai.domain.coaching.models import (
    CoachingRequest,
    FeedbackIntensity,
    FocusArea,
    Interaction,
    NewInteraction,
    RequestType,
    SubscriptionTier,
    TemperatureCheckReport,
)
from forge_ai.domain.coaching.quota import check_quota, start_of_day
from forge_ai.infrastructure.database.repository import CoachingRepository
from forge_ai.infrastructure.llm.coach_client import OpenAICoachClient
from forge_ai.infrastructure.llm.coaching_prompts import (
    build_craft_qa_prompt,
    build_passage_prompt,
)
from forge_ai.services.errors import (
    CoachingValidationError,
    NotFoundError,
    QuotaExceededError,
    ServiceUnavailableError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

MIN_PASSAGE_WORDS = 50
MAX_PASSAGE_WORDS = 2000
MIN_QUESTION_CHARS = 10

TEMPERATURE_CHECK_NOTE = (
    "Aggregate of stored scene word counts. "
    "Run text metrics on scene text for a detailed temperature check."
)


class CoachModel(Protocol):
    """Narrow interface to the external coaching model."""

    async def complete(self, prompt: str) -> str: ...


class CoachingService:
    """Prose coaching workflow.

    Usage:
        service = CoachingService(db)
        interaction = await service.analyze_passage(user_id, document_id, ...)
    """

    def __init__(self, db_session: AsyncSession, llm_client: CoachModel | None = None) -> None:
        """Initialises the service.

        Args:
            db_session: Async database session
            llm_client: Coaching model client, OpenAI-backed when None
        """
        self.repository = CoachingRepository(db_session)
        self.llm_client = llm_client or OpenAICoachClient()

    async def analyze_passage(
        self,
        user_id: str,
        document_id: str,
        passage: str,
        intensity: FeedbackIntensity | str,
        focus_areas: list[FocusArea | str] | None = None,
    ) -> Interaction:
        """Requests craft observations on a passage from a scene document.

        Args:
            user_id: Requesting user
            document_id: Document the passage was selected from
            passage: Selected passage (50-2000 words)
            intensity: Feedback intensity literal
            focus_areas: Focus area literals, may be empty

        Returns:
            The logged PASSAGE_ANALYSIS interaction

        Raises:
            CoachingValidationError: Unknown literal or passage length out of bounds
            NotFoundError: Document or its chain is missing
            UnauthorizedError: Document belongs to another user
            QuotaExceededError: Daily ceiling reached
            ServiceUnavailableError: Model call failed
        """
        try:
            request = CoachingRequest(passage, intensity, focus_areas)
        except ValueError as e:
            raise CoachingValidationError(str(e)) from e

        # 1. Resolve document -> scene -> chapter -> project
        document = await self.repository.get_document_with_project(document_id)
        if document is None:
            raise NotFoundError("Document not found")

        # 2. Ownership
        project = document.project
        self._ensure_owner(project, user_id, "Document")

        # 3. Daily quota
        await self._enforce_quota(user_id)

        # 4. Passage length
        word_count = len(request.passage.split())
        if not MIN_PASSAGE_WORDS <= word_count <= MAX_PASSAGE_WORDS:
            raise CoachingValidationError(
                f"Passage must be between {MIN_PASSAGE_WORDS} and "
                f"{MAX_PASSAGE_WORDS} words (got {word_count})"
            )

        # 5. Prompt
        prompt = build_passage_prompt(
            passage=request.passage,
            style_context=project.style,
            intensity=request.intensity,
            focus_areas=request.focus_areas,
            genre=project.genre,
        )

        logger.info(
            "Passage analysis requested",
            extra={
                "user_id": user_id,
                "document_id": document_id,
                "intensity": request.intensity.value,
                "focus_areas": [area.value for area in request.focus_areas],
                "word_count": word_count,
            },
        )

        # 6. Model call
        response_text = await self._complete(prompt, user_id)

        # 7. Log interaction
        return await self.repository.create_interaction(
            NewInteraction(
                user_id=user_id,
                project_id=project.id,
                document_id=document.id,
                request_type=RequestType.PASSAGE_ANALYSIS,
                request_text=request.passage,
                response_text=response_text,
                feedback_intensity=request.intensity,
            )
        )

    async def craft_qa(
        self,
        user_id: str,
        project_id: str,
        question: str,
        context: str | None = None,
    ) -> Interaction:
        """Answers a free-form craft question about a project.

        Args:
            user_id: Requesting user
            project_id: Project the question is about
            question: Author's question (at least 10 characters)
            context: Optional passage the question refers to

        Returns:
            The logged CRAFT_QA interaction

        Raises:
            CoachingValidationError: Question too short
            NotFoundError: Project is missing
            UnauthorizedError: Project belongs to another user
            QuotaExceededError: Daily ceiling reached
            ServiceUnavailableError: Model call failed
        """
        project = await self._get_owned_project(user_id, project_id)
        await self._enforce_quota(user_id)

        question = (question or "").strip()
        if len(question) < MIN_QUESTION_CHARS:
            raise CoachingValidationError(
                f"Question must be at least {MIN_QUESTION_CHARS} characters"
            )

        prompt = build_craft_qa_prompt(
            question=question,
            project_title=project.title,
            genre=project.genre,
            context=context.strip() if context and context.strip() else None,
        )

        logger.info(
            "Craft question requested",
            extra={"user_id": user_id, "project_id": project_id},
        )

        response_text = await self._complete(prompt, user_id)

        return await self.repository.create_interaction(
            NewInteraction(
                user_id=user_id,
                project_id=project.id,
                request_type=RequestType.CRAFT_QA,
                request_text=question,
                response_text=response_text,
                feedback_intensity=FeedbackIntensity.STANDARD,
            )
        )

    async def temperature_check(self, user_id: str, chapter_id: str) -> TemperatureCheckReport:
        """Sums stored scene word counts for a chapter.

        Reads persisted counts only; neither the metrics analyzer nor the
        model is involved.

        Raises:
            NotFoundError: Chapter is missing or belongs to another user
        """
        chapter = await self.repository.get_chapter_with_scenes(chapter_id)
        if chapter is None:
            raise NotFoundError("Chapter not found")
        self._ensure_owner(chapter.project, user_id, "Chapter")

        total_words = sum(scene.word_count or 0 for scene in chapter.scenes)
        return TemperatureCheckReport(
            chapter_id=chapter.id,
            scene_count=len(chapter.scenes),
            total_words=total_words,
            analysis=TEMPERATURE_CHECK_NOTE,
        )

    async def list_interactions(self, user_id: str, project_id: str) -> list[Interaction]:
        """Returns the user's latest interactions for a project, newest first."""
        await self._get_owned_project(user_id, project_id)
        return await self.repository.list_interactions(
            user_id=user_id,
            project_id=project_id,
            limit=settings.interaction_list_limit,
        )

    async def _get_owned_project(self, user_id: str, project_id: str) -> ProjectRef:
        project = await self.repository.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        self._ensure_owner(project, user_id, "Project")
        return project

    def _ensure_owner(self, project: ProjectRef, user_id: str, resource: str) -> None:
        if project.user_id != user_id:
            logger.warning(
                "Ownership check failed",
                extra={"user_id": user_id, "project_id": project.id, "resource": resource},
            )
            raise UnauthorizedError(f"{resource} not found")

    async def _enforce_quota(self, user_id: str) -> None:
        tier = await self.repository.get_subscription_tier(user_id) or SubscriptionTier.FREE
        daily_count = await self.repository.count_interactions_since(user_id, start_of_day())

        decision = check_quota(tier, daily_count)
        if not decision.allowed:
            logger.info(
                "Coaching quota exceeded",
                extra={"user_id": user_id, "tier": tier.value, "daily_count": daily_count},
            )
            raise QuotaExceededError(
                decision.reason or "Daily coaching limit reached",
                daily_limit=decision.daily_limit,
            )

    async def _complete(self, prompt: str, user_id: str) -> str:
        try:
            return await self.llm_client.complete(prompt)
        except Exception as e:
            logger.error(
                "Coaching model call failed",
                extra={"user_id": user_id, "error": str(e)},
            )
            raise ServiceUnavailableError("Coaching service is temporarily unavailable") from e
