"""Shared fixtures for unit tests."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from forge_ai.infrastructure.database.models import (
    Base,
    ChapterORM,
    DocumentORM,
    ProjectORM,
    SceneORM,
    UserORM,
)
from tests.unit.factories import OTHER_USER_ID, OWNER_ID

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@dataclass
class SeededManuscript:
    """Ids of a seeded project tree."""

    project_id: str
    chapter_id: str
    scene_ids: list[str]
    document_ids: list[str]


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """In-memory SQLite session with the full schema."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(db_session: AsyncSession) -> SeededManuscript:
    """Owner with one project, one chapter and two scenes with documents."""
    db_session.add_all(
        [
            UserORM(id=OWNER_ID, email="owner@example.com", name="Owner"),
            UserORM(id=OTHER_USER_ID, email="other@example.com", name="Other"),
            ProjectORM(id="project-1", user_id=OWNER_ID, title="The Salt Road", genre="Fantasy"),
            ChapterORM(id="chapter-1", project_id="project-1", title="Chapter One", order_index=0),
            SceneORM(id="scene-1", chapter_id="chapter-1", title="Arrival", order_index=0),
            SceneORM(id="scene-2", chapter_id="chapter-1", title="Market", order_index=1),
            DocumentORM(id="document-1", scene_id="scene-1", word_count=1200),
            DocumentORM(id="document-2", scene_id="scene-2", word_count=800),
        ]
    )
    await db_session.commit()

    return SeededManuscript(
        project_id="project-1",
        chapter_id="chapter-1",
        scene_ids=["scene-1", "scene-2"],
        document_ids=["document-1", "document-2"],
    )
