"""
Shared test fixtures.

Provides:
- An isolated in-memory SQLite database per test
- A CardStore bound to it
- Fake flashcard generator and note summarizer (bypass the Gemini API)
- A FastAPI TestClient wired to the test database and the fakes
"""
import os

# Settings refuse to load without a database URL
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from studydeck import models  # noqa: F401
from studydeck.api.v1.dependencies import get_flashcard_generator, get_note_summarizer
from studydeck.core.database import build_engine, get_session
from studydeck.core.exceptions import GenerationError
from studydeck.main import app
from studydeck.models.enums import NoteComplexity
from studydeck.services import deck_service
from studydeck.services.card_store import CardStore
from studydeck.services.flashcard_generation_service import GeneratedFlashcard
from studydeck.services.note_summary_service import NoteSummary


OWNER_ID = 1
OTHER_USER_ID = 2


class FakeGenerator:
    """Stands in for GeminiFlashcardGenerator and records its calls."""

    def __init__(self, cards: List[GeneratedFlashcard] = None, error: Exception = None):
        self.cards = cards if cards is not None else [
            GeneratedFlashcard(front="What is ATP?", back="The cell's energy currency", tags=["biology"]),
            GeneratedFlashcard(front="Where is ATP made?", back="Mostly in mitochondria", tags=["biology", "cells"]),
        ]
        self.error = error
        self.calls = []

    def generate_flashcards(self, text: str, count: int = 10) -> List[GeneratedFlashcard]:
        self.calls.append((text, count))
        if self.error is not None:
            raise self.error
        return self.cards[:count]


class FakeSummarizer:
    """Stands in for GeminiNoteSummarizer and records the texts it was given."""

    def __init__(self, result: NoteSummary = None, error: Exception = None):
        self.result = result or NoteSummary(
            summary="Cells turn glucose into ATP.",
            key_points=["Glycolysis happens in the cytoplasm", "The Krebs cycle runs in mitochondria"],
            complexity=NoteComplexity.INTERMEDIATE,
            tags=["biology", "metabolism"],
        )
        self.error = error
        self.calls = []

    def summarize_text(self, text: str) -> NoteSummary:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session) -> CardStore:
    return CardStore(session)


@pytest.fixture
def deck(store):
    return deck_service.create_deck(store, OWNER_ID, "Biology", subject="biology", tags=["cells"])


@pytest.fixture
def card(store, deck):
    return deck_service.create_card(store, OWNER_ID, deck.id, "What is a cell?", "The basic unit of life")


@pytest.fixture
def review_time() -> datetime:
    return datetime(2024, 3, 10, 9, 30)


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def failing_generator() -> FakeGenerator:
    return FakeGenerator(error=GenerationError("LLM returned invalid JSON"))


@pytest.fixture
def client(session, fake_generator, fake_summarizer):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_flashcard_generator] = lambda: fake_generator
    app.dependency_overrides[get_note_summarizer] = lambda: fake_summarizer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def generator_factory():
    return FakeGenerator


@pytest.fixture
def fake_summarizer() -> FakeSummarizer:
    return FakeSummarizer()


@pytest.fixture
def failing_summarizer() -> FakeSummarizer:
    return FakeSummarizer(error=GenerationError("Gemini API request failed"))
