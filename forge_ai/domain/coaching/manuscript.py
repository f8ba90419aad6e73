"""Read models for the manuscript records the coaching workflow touches.

Manuscript storage belongs to the main backend; these carry only the
fields needed for ownership checks, prompting and aggregates.
"""

from pydantic import BaseModel, Field

from forge_ai.domain.coaching.models import StyleContext


class ProjectRef(BaseModel):
    """Project owned by a user."""

    id: str
    user_id: str
    title: str
    genre: str | None = None
    style: StyleContext | None = Field(
        default=None, description="Style profile, None when never created"
    )


class DocumentRef(BaseModel):
    """Scene document resolved up to its project."""

    id: str
    scene_id: str
    chapter_id: str
    project: ProjectRef


class SceneWordCount(BaseModel):
    """Stored word count of one scene's document."""

    scene_id: str
    word_count: int | None = None


class ChapterRef(BaseModel):
    """Chapter with its scenes' stored word counts."""

    id: str
    project: ProjectRef
    scenes: list[SceneWordCount] = Field(default_factory=list)
