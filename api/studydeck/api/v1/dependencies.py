"""
Shared FastAPI dependencies.
"""
from fastapi import Depends
from sqlmodel import Session

from studydeck.core.config import settings
from studydeck.core.database import get_session
from studydeck.services.card_store import CardStore
from studydeck.services.flashcard_generation_service import GeminiFlashcardGenerator
from studydeck.services.note_summary_service import GeminiNoteSummarizer


def get_card_store(session: Session = Depends(get_session)) -> CardStore:
    """Card store bound to the request's database session."""
    return CardStore(session)


def get_flashcard_generator() -> GeminiFlashcardGenerator:
    """Flashcard generator configured from settings."""
    return GeminiFlashcardGenerator(
        api_key=settings.google_gemini_api_key,
        model_name=settings.gemini_model_name,
        timeout=settings.gemini_timeout_seconds,
    )


def get_note_summarizer() -> GeminiNoteSummarizer:
    """Note summarizer configured from settings."""
    return GeminiNoteSummarizer(
        api_key=settings.google_gemini_api_key,
        model_name=settings.gemini_model_name,
        timeout=settings.gemini_timeout_seconds,
    )
