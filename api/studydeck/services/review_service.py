"""
Review service: applies the SRS scheduler to a stored flashcard.

A review overwrites the card's scheduling state, updates its performance
counters, persists it and then touches the owning deck's last_studied
timestamp. The deck touch is best-effort: its failure is logged and ignored.
"""
import logging
from datetime import datetime
from typing import Optional

from studydeck.core.exceptions import NotFoundError, StudyDeckException
from studydeck.models.flashcard import Flashcard
from studydeck.services.card_store import CardStore
from studydeck.services.srs_service import (
    calculate_next_review,
    compute_next_state,
    is_successful_recall,
    validate_quality,
)

logger = logging.getLogger(__name__)


def apply_review(card: Flashcard, quality: int, now: datetime) -> Flashcard:
    """
    Apply one review to a card in memory.

    Args:
        card: Flashcard to update
        quality: Validated recall quality (0-5)
        now: Review time (UTC)

    Returns:
        The same card, updated
    """
    state = compute_next_state(quality, card.interval, card.ease_factor)

    card.interval = state.interval
    card.ease_factor = state.ease_factor
    # Counts every review, not only consecutive successes
    card.repetitions += 1
    card.last_reviewed = now
    card.last_review_quality = quality
    card.next_review = calculate_next_review(state.interval, now)

    card.total_reviews += 1
    if is_successful_recall(quality):
        card.correct_reviews += 1
        card.streak += 1
    else:
        card.streak = 0

    return card


def review_card(
    store: CardStore,
    card_id: int,
    user_id: int,
    quality: int,
    now: Optional[datetime] = None
) -> Flashcard:
    """
    Record a recall attempt for a card and reschedule it.

    Args:
        store: Card store
        card_id: ID of the card being reviewed
        user_id: Owner of the card
        quality: Recall quality (0-5)
        now: Review time (defaults to now, UTC)

    Returns:
        The updated flashcard

    Raises:
        InvalidInputError: If quality is outside [0, 5]
        NotFoundError: If the card does not exist or is not owned by user_id
        StoreError: If the card cannot be saved
    """
    validate_quality(quality)

    card = store.get_card(card_id, user_id)
    if card is None:
        raise NotFoundError("Card not found")

    if now is None:
        now = datetime.utcnow()

    previous_interval = card.interval
    apply_review(card, quality, now)
    card = store.save_card(card)

    logger.info(
        f"Reviewed card {card_id} for user {user_id}: quality={quality}, "
        f"interval {previous_interval} -> {card.interval}, ease={card.ease_factor:.2f}, "
        f"next_review={card.next_review}"
    )

    try:
        store.touch_deck(card.deck_id, now)
    except StudyDeckException as e:
        logger.warning(f"Could not update last_studied for deck {card.deck_id} after reviewing card {card_id}: {e}")

    return card
