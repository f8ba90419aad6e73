"""API request/response models (DTOs)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from forge_ai.domain.coaching.models import FeedbackIntensity, FocusArea, Interaction

MIN_SELECTION_WORDS = 50
MAX_SELECTION_WORDS = 2000


class AnalyzePassageRequestDTO(BaseModel):
    """Passage analysis request DTO.

    Intensity and focus areas must be one of the enumerated literals.
    """

    document_id: str = Field(..., min_length=1, description="Document the passage belongs to")
    selected_text: str = Field(
        ...,
        description="Selected passage (50-2000 words)",
        examples=["The rain had not stopped for three days, and Mara ..."],
    )
    intensity: FeedbackIntensity = Field(..., description="Feedback intensity")
    focus_areas: list[FocusArea] = Field(
        default_factory=list, description="Requested focus areas"
    )

    @field_validator("selected_text")
    @classmethod
    def _check_word_count(cls, value: str) -> str:
        words = len(value.split())
        if not MIN_SELECTION_WORDS <= words <= MAX_SELECTION_WORDS:
            raise ValueError(
                f"Selection must be between {MIN_SELECTION_WORDS} and "
                f"{MAX_SELECTION_WORDS} words"
            )
        return value


class CraftQARequestDTO(BaseModel):
    """Craft question request DTO."""

    project_id: str = Field(..., min_length=1, description="Project id")
    question: str = Field(..., min_length=10, description="Author's craft question")
    context: str | None = Field(default=None, description="Optional context passage")


class CoachingResponseDTO(BaseModel):
    """Coaching response DTO."""

    id: str = Field(description="Interaction id")
    response: str = Field(description="Coach response text")
    timestamp: datetime = Field(description="Interaction creation time")

    @classmethod
    def from_interaction(cls, interaction: Interaction) -> "CoachingResponseDTO":
        return cls(
            id=interaction.id,
            response=interaction.response_text,
            timestamp=interaction.created_at,
        )


class InteractionListResponseDTO(BaseModel):
    """Interaction history response DTO."""

    interactions: list[Interaction] = Field(description="Interactions, newest first")


class TextMetricsRequestDTO(BaseModel):
    """Raw text metrics request DTO."""

    text: str = Field(..., max_length=500_000, description="Raw prose to measure")


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    status: str = Field(default="healthy", description="Service status")
    version: str = Field(description="Application version")
    service: str = Field(description="Service name")
