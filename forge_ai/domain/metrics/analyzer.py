"""Prose temperature metrics.

Pure text statistics used for a chapter or scene "temperature check".
Sentence, passive-voice and dialogue detection are regex heuristics, not
grammatical parsing; treat those numbers as estimates.
"""

import math
import re

from forge_ai.domain.metrics.models import TemperatureMetrics

SHORT_SENTENCE_WORDS = 8
LONG_SENTENCE_WORDS = 30

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n{2,}")
_PASSIVE_PATTERN = re.compile(r"\b(?:is|are|was|were|be|been|being)\s+\w+ed\b", re.IGNORECASE)
# Same quote character on both ends, shortest span, single line. A quote
# glued to a letter on the outside (It's, James') is an apostrophe, not a
# delimiter; inside a span it may appear before a letter ('Don't,').
_QUOTED_SPAN = re.compile(r"(?<!\w)([\"'])(?:\1(?=\w)|(?!\1).)*?\1(?!\w)")


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def _normalise_token(token: str) -> str:
    return "".join(ch for ch in token.casefold() if ch.isalnum())


def analyze(text: str) -> TemperatureMetrics:
    """Computes prose metrics for a block of text.

    Never raises; empty or blank input gives all-zero metrics.

    Args:
        text: Raw prose

    Returns:
        TemperatureMetrics for the text
    """
    if not text or not text.strip():
        return TemperatureMetrics()

    words = text.split()
    word_count = len(words)

    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    sentence_count = len(sentences)

    paragraphs = [p for p in _PARAGRAPH_SPLIT.split(text) if p.strip()]
    paragraph_count = len(paragraphs)

    avg_words_per_sentence = _ratio(word_count, sentence_count)
    avg_words_per_paragraph = _ratio(word_count, paragraph_count)

    sentence_lengths = [len(s.split()) for s in sentences]
    if sentence_lengths:
        mean_square = sum(
            (length - avg_words_per_sentence) ** 2 for length in sentence_lengths
        ) / len(sentence_lengths)
        sentence_length_variance = math.sqrt(mean_square)
    else:
        sentence_length_variance = 0.0

    short_count = sum(1 for length in sentence_lengths if length < SHORT_SENTENCE_WORDS)
    long_count = sum(1 for length in sentence_lengths if length > LONG_SENTENCE_WORDS)

    passive_matches = len(_PASSIVE_PATTERN.findall(text))

    dialogue_chars = sum(len(m.group(0)) for m in _QUOTED_SPAN.finditer(text))

    unique_words = {token for token in map(_normalise_token, words) if token}

    return TemperatureMetrics(
        word_count=word_count,
        sentence_count=sentence_count,
        paragraph_count=paragraph_count,
        avg_words_per_sentence=avg_words_per_sentence,
        sentence_length_variance=sentence_length_variance,
        short_sentence_ratio=_ratio(short_count, sentence_count),
        long_sentence_ratio=_ratio(long_count, sentence_count),
        passive_voice_estimate=_ratio(passive_matches, sentence_count),
        dialogue_ratio=_ratio(dialogue_chars, len(text)),
        avg_words_per_paragraph=avg_words_per_paragraph,
        unique_word_ratio=_ratio(len(unique_words), word_count),
    )
