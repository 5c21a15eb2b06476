"""
Flashcard generation backed by the Gemini API.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, List

from studydeck.core.exceptions import GenerationError
from studydeck.services.gemini_client import GeminiClient
from studydeck.services.prompt_service import (
    generate_flashcard_prompt,
    generate_flashcard_system_instruction,
)
from studydeck.utils.text_utils import clean_text, normalize_tags

logger = logging.getLogger(__name__)


@dataclass
class GeneratedFlashcard:
    """Raw flashcard content produced by the generator."""
    front: str
    back: str
    tags: List[str] = field(default_factory=list)


def parse_flashcards(llm_data: Any, count: int) -> List[GeneratedFlashcard]:
    """
    Validate LLM output for flashcard generation.

    Args:
        llm_data: Parsed JSON output (should be a list of objects)
        count: Maximum number of cards to keep

    Returns:
        List of GeneratedFlashcard

    Raises:
        GenerationError: If the output does not have the expected shape
    """
    # Some responses wrap the array in an object
    if isinstance(llm_data, dict) and isinstance(llm_data.get('flashcards'), list):
        llm_data = llm_data['flashcards']

    if not isinstance(llm_data, list):
        raise GenerationError("LLM output must be a JSON array of flashcards")

    cards = []
    for index, item in enumerate(llm_data[:count]):
        if not isinstance(item, dict):
            raise GenerationError(f"Flashcard {index} is not a JSON object")
        front = clean_text(item.get('front')) if isinstance(item.get('front'), str) else None
        back = clean_text(item.get('back')) if isinstance(item.get('back'), str) else None
        if not front or not back:
            raise GenerationError(f"Flashcard {index} is missing front or back")
        tags = item.get('tags')
        cards.append(GeneratedFlashcard(
            front=front,
            back=back,
            tags=normalize_tags(tags if isinstance(tags, list) else None)
        ))
    return cards


class GeminiFlashcardGenerator(GeminiClient):
    """Generates flashcards from source text with the Gemini generateContent API."""

    def generate_flashcards(self, text: str, count: int = 10) -> List[GeneratedFlashcard]:
        """
        Generate flashcards from study material.

        Args:
            text: Source text (only the first 10,000 characters are used)
            count: Number of flashcards to request

        Returns:
            Up to `count` generated flashcards

        Raises:
            GenerationError: If the API key is missing, the call fails or the
                response cannot be parsed into flashcards
        """
        llm_data = self.generate_json(
            generate_flashcard_prompt(text, count),
            generate_flashcard_system_instruction()
        )

        cards = parse_flashcards(llm_data, count)
        logger.info(f"Gemini ({self.model_name}) generated {len(cards)} flashcard(s), {count} requested")
        return cards
