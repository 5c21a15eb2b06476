"""
Study note summaries backed by the Gemini API.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from studydeck.core.exceptions import GenerationError
from studydeck.models.enums import NoteComplexity
from studydeck.services.gemini_client import GeminiClient
from studydeck.services.prompt_service import (
    generate_note_summary_prompt,
    generate_note_summary_system_instruction,
)
from studydeck.utils.text_utils import clean_text, normalize_tags

logger = logging.getLogger(__name__)


@dataclass
class NoteSummary:
    """Analysis of a note produced by the summarizer."""
    summary: str
    key_points: List[str] = field(default_factory=list)
    complexity: Optional[NoteComplexity] = None
    tags: List[str] = field(default_factory=list)


def parse_note_summary(llm_data: Any) -> NoteSummary:
    """
    Validate LLM output for note summaries.

    Unknown complexity values are dropped rather than rejected.

    Raises:
        GenerationError: If the output is not an object with a non-empty summary
    """
    if not isinstance(llm_data, dict):
        raise GenerationError("LLM output must be a JSON object")

    summary = llm_data.get('summary')
    summary = clean_text(summary) if isinstance(summary, str) else None
    if not summary:
        raise GenerationError("LLM output is missing the summary")

    key_points = llm_data.get('keyPoints')
    key_points = [
        point.strip() for point in key_points
        if isinstance(point, str) and point.strip()
    ] if isinstance(key_points, list) else []

    complexity = None
    raw_complexity = llm_data.get('complexity')
    if isinstance(raw_complexity, str):
        try:
            complexity = NoteComplexity(raw_complexity.strip().lower())
        except ValueError:
            logger.warning(f"Ignoring unknown complexity from LLM: {raw_complexity!r}")

    tags = llm_data.get('tags')
    return NoteSummary(
        summary=summary,
        key_points=key_points,
        complexity=complexity,
        tags=normalize_tags(tags if isinstance(tags, list) else None)
    )


class GeminiNoteSummarizer(GeminiClient):
    """Summarizes study notes with the Gemini generateContent API."""

    def summarize_text(self, text: str) -> NoteSummary:
        """
        Summarize note content.

        Args:
            text: Note content (only the first 10,000 characters are used)

        Returns:
            NoteSummary with summary, key points, complexity and suggested tags

        Raises:
            GenerationError: If the call fails or the answer has the wrong shape
        """
        llm_data = self.generate_json(
            generate_note_summary_prompt(text),
            generate_note_summary_system_instruction()
        )
        result = parse_note_summary(llm_data)
        logger.info(f"Gemini ({self.model_name}) summarized note text into {len(result.key_points)} key point(s)")
        return result
