"""
Deck service for deck and flashcard lifecycle operations.

Creation, owner-scoped lookup, cascading deletion and bulk generation of
flashcards. Lookups of records owned by someone else fail exactly like lookups
of missing records.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from studydeck.core.config import settings
from studydeck.core.exceptions import (
    BulkCreationError,
    InvalidInputError,
    NotFoundError,
    StudyDeckException,
)
from studydeck.models.deck import Deck
from studydeck.models.flashcard import Flashcard
from studydeck.services.card_store import CardStore
from studydeck.services.srs_service import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL
from studydeck.utils.text_utils import clean_text, normalize_tags

logger = logging.getLogger(__name__)


@dataclass
class DeckSummary:
    """A deck together with its derived card count."""
    deck: Deck
    card_count: int


def _require_deck(store: CardStore, deck_id: int, user_id: int) -> Deck:
    deck = store.get_deck(deck_id, user_id)
    if deck is None:
        raise NotFoundError("Deck not found")
    return deck


def create_deck(
    store: CardStore,
    user_id: int,
    name: str,
    description: Optional[str] = None,
    subject: Optional[str] = None,
    tags: Optional[Sequence[str]] = None
) -> Deck:
    """
    Create a new deck for a user.

    Raises:
        InvalidInputError: If name is missing or blank
    """
    clean_name = clean_text(name)
    if not clean_name:
        raise InvalidInputError("Deck name is required")

    deck = Deck(
        user_id=user_id,
        name=clean_name,
        description=clean_text(description),
        subject=clean_text(subject),
        tags=normalize_tags(tags),
        last_studied=None
    )
    deck = store.save_deck(deck)
    logger.info(f"Created deck {deck.id} ('{deck.name}') for user {user_id}")
    return deck


def get_deck(store: CardStore, deck_id: int, user_id: int) -> DeckSummary:
    """
    Get one of the user's decks with its card count.

    Raises:
        NotFoundError: If the deck does not exist or is not owned by user_id
    """
    deck = _require_deck(store, deck_id, user_id)
    counts = store.count_cards([deck.id])
    return DeckSummary(deck=deck, card_count=counts.get(deck.id, 0))


def list_decks(store: CardStore, user_id: int) -> List[DeckSummary]:
    """List the user's decks, most recently studied first, with card counts."""
    decks = store.list_decks(user_id)
    counts = store.count_cards(deck.id for deck in decks)
    return [DeckSummary(deck=deck, card_count=counts.get(deck.id, 0)) for deck in decks]


def delete_deck(store: CardStore, deck_id: int, user_id: int) -> int:
    """
    Delete a deck and all of its cards.

    The deck row is deleted first, then its cards, in two separate commits. If
    the second step fails the deck stays deleted and StoreError is raised.

    Returns:
        Number of cards deleted

    Raises:
        NotFoundError: If the deck does not exist or is not owned by user_id
        StoreError: If either deletion fails
    """
    deck = _require_deck(store, deck_id, user_id)
    store.delete_deck(deck)
    cards_deleted = store.delete_cards_by_deck(deck_id)
    logger.info(f"Deleted deck {deck_id} of user {user_id} and {cards_deleted} card(s)")
    return cards_deleted


def create_card(
    store: CardStore,
    user_id: int,
    deck_id: int,
    front: str,
    back: str,
    tags: Optional[Sequence[str]] = None
) -> Flashcard:
    """
    Create a flashcard in one of the user's decks with the default scheduling state.

    Raises:
        InvalidInputError: If front or back is missing or blank
        NotFoundError: If the deck does not exist or is not owned by user_id
    """
    clean_front = clean_text(front)
    clean_back = clean_text(back)
    if not clean_front or not clean_back:
        raise InvalidInputError("Card front and back are required")

    _require_deck(store, deck_id, user_id)

    now = datetime.utcnow()
    card = Flashcard(
        user_id=user_id,
        deck_id=deck_id,
        front=clean_front,
        back=clean_back,
        tags=normalize_tags(tags),
        created_at=now,
        interval=DEFAULT_INTERVAL,
        ease_factor=DEFAULT_EASE_FACTOR,
        repetitions=0,
        next_review=now,
    )
    return store.save_card(card)


def get_card(store: CardStore, card_id: int, user_id: int) -> Flashcard:
    """
    Raises:
        NotFoundError: If the card does not exist or is not owned by user_id
    """
    card = store.get_card(card_id, user_id)
    if card is None:
        raise NotFoundError("Card not found")
    return card


def list_cards(store: CardStore, deck_id: int, user_id: int) -> List[Flashcard]:
    """List the cards of one of the user's decks."""
    _require_deck(store, deck_id, user_id)
    return store.list_cards(deck_id, user_id)


def list_due_cards(
    store: CardStore,
    user_id: int,
    deck_id: Optional[int] = None,
    now: Optional[datetime] = None,
    limit: Optional[int] = None
) -> List[Flashcard]:
    """List the user's cards whose next review is due, earliest first."""
    if limit is not None and limit < 1:
        raise InvalidInputError("Limit must be a positive integer")
    if deck_id is not None:
        _require_deck(store, deck_id, user_id)
    if now is None:
        now = datetime.utcnow()
    return store.list_due_cards(user_id, now, deck_id=deck_id, limit=limit)


def delete_card(store: CardStore, card_id: int, user_id: int) -> None:
    """
    Raises:
        NotFoundError: If the card does not exist or is not owned by user_id
    """
    card = get_card(store, card_id, user_id)
    store.delete_card(card)
    logger.info(f"Deleted card {card_id} of user {user_id}")


def bulk_generate_cards(
    store: CardStore,
    generator,
    user_id: int,
    deck_id: int,
    source_text: str,
    count: int
) -> List[Flashcard]:
    """
    Generate flashcards from text and add them to one of the user's decks.

    Every generated card is attempted. If some of them cannot be created, the
    ones already persisted are kept and a single BulkCreationError is raised
    once all attempts are done.

    Args:
        store: Card store
        generator: Content generator exposing generate_flashcards(text, count)
        user_id: Owner of the deck
        deck_id: Target deck
        source_text: Study material to generate cards from
        count: Number of cards to request

    Returns:
        The created flashcards

    Raises:
        NotFoundError: If the deck does not exist or is not owned by user_id
        InvalidInputError: If the text is blank or count is out of range
        GenerationError: If the generator fails (nothing is created)
        BulkCreationError: If some cards could not be created
    """
    _require_deck(store, deck_id, user_id)

    if not clean_text(source_text):
        raise InvalidInputError("Source text is required")
    max_cards = settings.max_generated_cards
    if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= max_cards:
        raise InvalidInputError(f"Count must be an integer between 1 and {max_cards}")

    generated = generator.generate_flashcards(source_text, count)

    created: List[Flashcard] = []
    failures: List[Exception] = []
    for item in generated:
        try:
            created.append(create_card(store, user_id, deck_id, item.front, item.back, item.tags))
        except StudyDeckException as e:
            logger.warning(f"Failed to create generated card in deck {deck_id}: {e}")
            failures.append(e)

    if failures:
        raise BulkCreationError(
            f"Created {len(created)} of {len(generated)} generated flashcards; {len(failures)} failed",
            created=created,
            failures=failures
        )

    logger.info(f"Generated {len(created)} card(s) in deck {deck_id} for user {user_id}")
    return created
