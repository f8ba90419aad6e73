"""Prompt templates for the prose coach.

Every prompt opens with COACH_CONSTRAINT and closes with NEVER_REWRITE_REMINDER.
Both are module constants assembled by plain string composition; nothing a
caller passes in can replace or drop them.
"""

from collections.abc import Iterable

from forge_ai.domain.coaching.models import (
    FeedbackIntensity,
    FocusArea,
    StyleContext,
)

COACH_CONSTRAINT = """You are a prose coach for The Forge writing platform. Your role is to observe and comment on writing craft. You do NOT write prose, rewrite sentences, or generate story content under any circumstances.

Your responses must:
- Describe what you observe in the text (patterns, tendencies, effects)
- Ask questions that help the author think about their choices
- Reference specific craft principles (sentence rhythm, show vs. tell, pacing, word economy)
- Never provide a rewritten version of any sentence or passage
- Never complete an unfinished passage or fill in missing content
- Treat the author as the sole author of all prose

If the author explicitly asks you to rewrite something, respond: "The Forge is designed to help you write better, not to write for you. Here's what I observe about this passage: [observation]\""""

NEVER_REWRITE_REMINDER = "Remember: observe only, never rewrite."

DEFAULT_GENRE = "General Fiction"
GENERAL_FOCUS = "General prose craft"

INTENSITY_INSTRUCTIONS: dict[FeedbackIntensity, str] = {
    FeedbackIntensity.LIGHT_TOUCH: (
        "Identify the 1-2 most notable observations. Keep feedback brief and affirming."
    ),
    FeedbackIntensity.STANDARD: (
        "Identify 2-4 observations across the requested focus areas. "
        "Balance affirmation with constructive craft notes."
    ),
    FeedbackIntensity.DEEP_DIVE: (
        "Provide thorough analysis across all requested focus areas. "
        "Be specific about patterns and their effects on the reader experience."
    ),
}

RESPONSE_SHAPE = """Provide your coaching observations. Structure your response as:
1. What you observe (2-3 sentences per focus area)
2. A craft question for the author to consider
3. One specific element this passage does well"""


def _fence_for(text: str) -> str:
    """Backtick fence longer than any backtick run inside the text."""
    longest = run = 0
    for ch in text:
        run = run + 1 if ch == "`" else 0
        longest = max(longest, run)
    return "`" * max(3, longest + 1)


def _fenced(text: str) -> str:
    fence = _fence_for(text)
    return f"{fence}\n{text}\n{fence}"


def _dedupe(focus_areas: Iterable[FocusArea]) -> list[FocusArea]:
    ordered: list[FocusArea] = []
    for area in focus_areas:
        area = FocusArea(area)
        if area not in ordered:
            ordered.append(area)
    return ordered


def format_focus_areas(focus_areas: Iterable[FocusArea]) -> str:
    """Joins focus area labels, or returns the general-craft phrase when empty."""
    areas = _dedupe(focus_areas)
    if not areas:
        return GENERAL_FOCUS
    return ", ".join(area.label for area in areas)


def _project_context(style: StyleContext, genre: str | None) -> str:
    lines = [
        "PROJECT CONTEXT:",
        f"- Genre: {genre or DEFAULT_GENRE}",
        f"- POV: {style.pov.value}",
        f"- Tense: {style.tense.value}",
        f"- Style register: {style.formality.value}",
    ]
    if style.custom_rules:
        lines.append("- Custom style rules:")
        for rule in style.custom_rules:
            lines.append(f"  * {rule.rule} (e.g. {rule.example})")
    return "\n".join(lines)


def build_passage_prompt(
    passage: str,
    style_context: StyleContext | None,
    intensity: FeedbackIntensity,
    focus_areas: Iterable[FocusArea] = (),
    genre: str | None = None,
) -> str:
    """Builds the passage analysis prompt.

    Sections, always in this order: constraint block, fenced passage,
    project context, focus areas, intensity instruction, response shape
    with the closing reminder.

    Args:
        passage: Author's selected passage
        style_context: Project style profile, defaults when None
        intensity: Requested feedback depth
        focus_areas: Requested craft dimensions, may be empty
        genre: Project genre, "General Fiction" when missing

    Returns:
        Complete prompt text
    """
    style = style_context or StyleContext()
    sections = [
        COACH_CONSTRAINT,
        f"PASSAGE FOR ANALYSIS:\n{_fenced(passage)}",
        _project_context(style, genre),
        f"FOCUS AREAS: {format_focus_areas(focus_areas)}\n"
        f"INTENSITY: {INTENSITY_INSTRUCTIONS[FeedbackIntensity(intensity)]}",
        f"{RESPONSE_SHAPE}\n\n{NEVER_REWRITE_REMINDER}",
    ]
    return "\n\n".join(sections)


def build_craft_qa_prompt(
    question: str,
    project_title: str,
    genre: str | None = None,
    context: str | None = None,
) -> str:
    """Builds the free-form craft question prompt.

    Args:
        question: Author's craft question
        project_title: Title of the project the question is about
        genre: Project genre, "General Fiction" when missing
        context: Optional passage the question refers to

    Returns:
        Complete prompt text
    """
    sections = [
        COACH_CONSTRAINT,
        "Answer the author's craft question with observations and guidance.",
        f"PROJECT CONTEXT:\n- Genre: {genre or DEFAULT_GENRE}\n- Title: {project_title}",
        f"AUTHOR'S QUESTION:\n{_fenced(question)}",
    ]
    if context:
        sections.append(f"CONTEXT PASSAGE:\n{_fenced(context)}")
    sections.append(
        "Provide a thoughtful response that helps the author think about their craft. "
        "Observe patterns, ask questions that promote thinking, and reference specific "
        "craft principles. Never rewrite or generate prose.\n\n"
        f"{NEVER_REWRITE_REMINDER}"
    )
    return "\n\n".join(sections)
