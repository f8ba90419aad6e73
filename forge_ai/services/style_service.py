"""Project style profile service."""

from sqlalchemy.ext.asyncio import AsyncSession

from forge_ai.domain.coaching.models import StyleContext
from forge_ai.infrastructure.database.repository import CoachingRepository
from forge_ai.services.errors import NotFoundError, UnauthorizedError


class StyleService:
    """Reads and updates the style profile attached to a project."""

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialises the service.

        Args:
            db_session: Async database session
        """
        self.repository = CoachingRepository(db_session)

    async def get_profile(self, user_id: str, project_id: str) -> StyleContext:
        """Returns the project's style profile, creating the default when absent.

        Raises:
            NotFoundError: Project missing or owned by another user
        """
        await self._ensure_owned_project(user_id, project_id)

        profile = await self.repository.get_style_profile(project_id)
        if profile is None:
            profile = await self.repository.create_default_style_profile(project_id)
        return profile

    async def upsert_profile(
        self, user_id: str, project_id: str, style: StyleContext
    ) -> StyleContext:
        """Creates or replaces the project's style profile.

        Raises:
            NotFoundError: Project missing or owned by another user
        """
        await self._ensure_owned_project(user_id, project_id)
        return await self.repository.upsert_style_profile(project_id, style)

    async def _ensure_owned_project(self, user_id: str, project_id: str) -> None:
        project = await self.repository.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if project.user_id != user_id:
            raise UnauthorizedError("Project not found")
