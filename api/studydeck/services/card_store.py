"""
Card store: data access for decks and flashcards.

Every lookup that takes a user_id is owner-scoped: the owner is part of the same
query as the id, so records of other users are indistinguishable from missing
ones. No scheduling logic lives here.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from studydeck.core.exceptions import StoreError
from studydeck.models.deck import Deck
from studydeck.models.flashcard import Flashcard

logger = logging.getLogger(__name__)


class CardStore:
    """Deck and flashcard persistence over a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while trying to {action}: {str(e)}")
            raise StoreError(f"Failed to {action}") from e

    # --- Decks ---

    def get_deck(self, deck_id: int, user_id: int) -> Optional[Deck]:
        return self.session.exec(
            select(Deck).where(Deck.id == deck_id, Deck.user_id == user_id)
        ).first()

    def save_deck(self, deck: Deck) -> Deck:
        self.session.add(deck)
        self._commit("save deck")
        self.session.refresh(deck)
        return deck

    def touch_deck(self, deck_id: int, when: datetime) -> None:
        """Set last_studied on a deck. Not owner-scoped: callers pass a card's own deck."""
        try:
            deck = self.session.get(Deck, deck_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while loading deck {deck_id}: {str(e)}")
            raise StoreError(f"Failed to load deck {deck_id}") from e
        if deck is None:
            raise StoreError(f"Deck {deck_id} no longer exists")
        deck.last_studied = when
        self.session.add(deck)
        self._commit("update deck last_studied")

    def delete_deck(self, deck: Deck) -> None:
        self.session.delete(deck)
        self._commit("delete deck")

    def list_decks(self, user_id: int) -> List[Deck]:
        """Owner's decks, most recently studied first, never-studied decks last."""
        query = (
            select(Deck)
            .where(Deck.user_id == user_id)
            .order_by(
                Deck.last_studied.desc().nulls_last(),  # type: ignore
                Deck.created_at.desc(),  # type: ignore
                Deck.id.desc(),  # type: ignore
            )
        )
        return list(self.session.exec(query).all())

    def count_cards(self, deck_ids: Iterable[int]) -> Dict[int, int]:
        """Card counts keyed by deck id. Decks without cards are absent from the result."""
        deck_ids = list(deck_ids)
        if not deck_ids:
            return {}
        rows = self.session.exec(
            select(Flashcard.deck_id, func.count(Flashcard.id))
            .where(Flashcard.deck_id.in_(deck_ids))  # type: ignore
            .group_by(Flashcard.deck_id)
        ).all()
        return {deck_id: count for deck_id, count in rows}

    # --- Flashcards ---

    def get_card(self, card_id: int, user_id: int) -> Optional[Flashcard]:
        return self.session.exec(
            select(Flashcard).where(Flashcard.id == card_id, Flashcard.user_id == user_id)
        ).first()

    def save_card(self, card: Flashcard) -> Flashcard:
        self.session.add(card)
        self._commit("save flashcard")
        self.session.refresh(card)
        return card

    def delete_card(self, card: Flashcard) -> None:
        self.session.delete(card)
        self._commit("delete flashcard")

    def delete_cards_by_deck(self, deck_id: int) -> int:
        """Delete every card of a deck. Returns the number of deleted rows."""
        try:
            result = self.session.execute(
                delete(Flashcard).where(Flashcard.deck_id == deck_id)  # type: ignore
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while deleting cards of deck {deck_id}: {str(e)}")
            raise StoreError(f"Failed to delete cards of deck {deck_id}") from e
        self._commit(f"delete cards of deck {deck_id}")
        return result.rowcount or 0

    def list_cards(self, deck_id: int, user_id: int) -> List[Flashcard]:
        return list(self.session.exec(
            select(Flashcard)
            .where(Flashcard.deck_id == deck_id, Flashcard.user_id == user_id)
            .order_by(Flashcard.created_at, Flashcard.id)  # type: ignore
        ).all())

    def list_due_cards(
        self,
        user_id: int,
        now: datetime,
        deck_id: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Flashcard]:
        query = select(Flashcard).where(
            Flashcard.user_id == user_id,
            Flashcard.next_review <= now
        )
        if deck_id is not None:
            query = query.where(Flashcard.deck_id == deck_id)
        query = query.order_by(Flashcard.next_review, Flashcard.id)  # type: ignore
        if limit is not None:
            query = query.limit(limit)
        return list(self.session.exec(query).all())
