"""Prose metrics domain model."""

from pydantic import BaseModel, Field


class TemperatureMetrics(BaseModel):
    """Quantitative prose-style metrics derived from raw text.

    passive_voice_estimate and dialogue_ratio come from pattern heuristics
    and are approximate.
    """

    word_count: int = Field(default=0, ge=0, description="Whitespace-delimited tokens")
    sentence_count: int = Field(default=0, ge=0, description="Non-blank sentence fragments")
    paragraph_count: int = Field(default=0, ge=0, description="Blank-line separated blocks")
    avg_words_per_sentence: float = Field(default=0.0, ge=0.0)
    sentence_length_variance: float = Field(
        default=0.0,
        ge=0.0,
        description="Population standard deviation of sentence word counts",
    )
    short_sentence_ratio: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Share of sentences under 8 words"
    )
    long_sentence_ratio: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Share of sentences over 30 words"
    )
    passive_voice_estimate: float = Field(
        default=0.0,
        ge=0.0,
        description="Heuristic passive constructions per sentence",
    )
    dialogue_ratio: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Share of characters inside quoted spans (estimate)",
    )
    avg_words_per_paragraph: float = Field(default=0.0, ge=0.0)
    unique_word_ratio: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Distinct normalised tokens per word"
    )
