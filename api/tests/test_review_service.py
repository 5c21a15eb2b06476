"""
Tests for reviewing flashcards.
"""
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from sqlalchemy.exc import OperationalError

from studydeck.core.exceptions import InvalidInputError, NotFoundError, StoreError
from studydeck.services import deck_service
from studydeck.services.card_store import CardStore
from studydeck.services.review_service import review_card


OWNER_ID = 1
OTHER_USER_ID = 2


class TouchFailingStore(CardStore):
    """Card store whose deck timestamp update always fails."""

    def __init__(self, session):
        super().__init__(session)
        self.touch_attempts = 0

    def touch_deck(self, deck_id, when):
        self.touch_attempts += 1
        raise StoreError("connection reset")


class SaveFailingStore(CardStore):
    def save_card(self, card):
        raise StoreError("Failed to save flashcard")


class TestReviewCard:
    def test_first_successful_review(self, store, card, review_time):
        reviewed = review_card(store, card.id, OWNER_ID, 5, now=review_time)

        assert reviewed.interval == 6
        assert reviewed.ease_factor == pytest.approx(2.6)
        assert reviewed.repetitions == 1
        assert reviewed.last_reviewed == review_time
        assert reviewed.last_review_quality == 5
        assert reviewed.next_review == review_time + timedelta(days=6)
        assert reviewed.total_reviews == 1
        assert reviewed.correct_reviews == 1
        assert reviewed.streak == 1

    def test_changes_are_persisted(self, store, session, card, review_time):
        review_card(store, card.id, OWNER_ID, 4, now=review_time)
        session.expire_all()

        stored = store.get_card(card.id, OWNER_ID)
        assert stored.interval == 6
        assert stored.total_reviews == 1
        assert stored.last_reviewed == review_time

    def test_sequence_of_reviews(self, store, card, review_time):
        review_card(store, card.id, OWNER_ID, 5, now=review_time)
        second = review_card(store, card.id, OWNER_ID, 4, now=review_time + timedelta(days=6))

        assert second.interval == 16
        assert second.ease_factor == pytest.approx(2.6)
        assert second.next_review == review_time + timedelta(days=22)

        third = review_card(store, card.id, OWNER_ID, 2, now=review_time + timedelta(days=22))

        assert third.interval == 1
        assert third.ease_factor == pytest.approx(2.6)

    def test_failed_review_resets_streak(self, store, card, review_time):
        for offset in range(3):
            review_card(store, card.id, OWNER_ID, 4, now=review_time + timedelta(days=offset))

        reviewed = review_card(store, card.id, OWNER_ID, 2, now=review_time + timedelta(days=10))

        assert reviewed.streak == 0
        assert reviewed.correct_reviews == 3
        assert reviewed.total_reviews == 4
        assert reviewed.last_review_quality == 2

    def test_passing_review_increments_streak_and_correct_by_one(self, store, card, review_time):
        review_card(store, card.id, OWNER_ID, 5, now=review_time)
        before_streak = card.streak
        before_correct = card.correct_reviews

        reviewed = review_card(store, card.id, OWNER_ID, 3, now=review_time + timedelta(days=6))

        assert reviewed.streak == before_streak + 1
        assert reviewed.correct_reviews == before_correct + 1

    def test_repetitions_count_every_review(self, store, card, review_time):
        review_card(store, card.id, OWNER_ID, 1, now=review_time)
        reviewed = review_card(store, card.id, OWNER_ID, 0, now=review_time)

        assert reviewed.repetitions == 2
        assert reviewed.correct_reviews == 0

    def test_next_review_rolls_over_year(self, store, card):
        reviewed = review_card(store, card.id, OWNER_ID, 5, now=datetime(2023, 12, 30, 22, 0))

        assert reviewed.next_review == datetime(2024, 1, 5, 22, 0)

    def test_touches_deck_last_studied(self, store, session, deck, card, review_time):
        review_card(store, card.id, OWNER_ID, 3, now=review_time)
        session.expire_all()

        assert store.get_deck(deck.id, OWNER_ID).last_studied == review_time


class TestReviewPreconditions:
    def test_unknown_card(self, store, review_time):
        with pytest.raises(NotFoundError):
            review_card(store, 999, OWNER_ID, 4, now=review_time)

    def test_card_of_another_user_is_not_found(self, store, session, card, review_time):
        with pytest.raises(NotFoundError):
            review_card(store, card.id, OTHER_USER_ID, 4, now=review_time)

        session.expire_all()
        stored = store.get_card(card.id, OWNER_ID)
        assert stored.total_reviews == 0
        assert stored.repetitions == 0
        assert stored.last_reviewed is None

    @pytest.mark.parametrize("quality", [6, -1])
    def test_out_of_range_quality_leaves_card_untouched(self, store, session, card, review_time, quality):
        original_next_review = card.next_review

        with pytest.raises(InvalidInputError):
            review_card(store, card.id, OWNER_ID, quality, now=review_time)

        session.expire_all()
        stored = store.get_card(card.id, OWNER_ID)
        assert stored.interval == 1
        assert stored.ease_factor == 2.5
        assert stored.repetitions == 0
        assert stored.next_review == original_next_review

    def test_quality_is_checked_before_loading_the_card(self):
        store = MagicMock(spec=CardStore)

        with pytest.raises(InvalidInputError):
            review_card(store, 1, OWNER_ID, 7)

        store.get_card.assert_not_called()
        store.save_card.assert_not_called()

    def test_save_failure_propagates_and_skips_deck_touch(self, session, deck, card, review_time):
        failing_store = SaveFailingStore(session)

        with pytest.raises(StoreError):
            review_card(failing_store, card.id, OWNER_ID, 4, now=review_time)

        session.expire_all()
        assert failing_store.get_deck(deck.id, OWNER_ID).last_studied is None


class TestDeckTouchIsBestEffort:
    def test_touch_failure_does_not_fail_review(self, session, deck, card, review_time):
        failing_store = TouchFailingStore(session)

        reviewed = review_card(failing_store, card.id, OWNER_ID, 5, now=review_time)

        assert reviewed.interval == 6
        assert failing_store.touch_attempts == 1

        session.expire_all()
        assert failing_store.get_card(card.id, OWNER_ID).total_reviews == 1
        assert failing_store.get_deck(deck.id, OWNER_ID).last_studied is None

    def test_review_succeeds_when_deck_row_is_gone(self, store, session, deck, card, review_time):
        # Deck removed but its cards not yet cleaned up
        store.delete_deck(deck)

        reviewed = review_card(store, card.id, OWNER_ID, 4, now=review_time)

        assert reviewed.total_reviews == 1
        assert reviewed.next_review == review_time + timedelta(days=6)

    def test_deck_lookup_failure_does_not_fail_review(self, store, session, card, review_time, monkeypatch):
        def lost_connection(*args, **kwargs):
            raise OperationalError("SELECT decks", {}, Exception("server closed the connection"))

        monkeypatch.setattr(session, "get", lost_connection)

        reviewed = review_card(store, card.id, OWNER_ID, 5, now=review_time)

        assert reviewed.interval == 6
        monkeypatch.undo()
        session.expire_all()
        assert store.get_card(card.id, OWNER_ID).total_reviews == 1


class TestTouchDeck:
    def test_lookup_failure_is_store_error(self, store, session, deck, review_time, monkeypatch):
        def lost_connection(*args, **kwargs):
            raise OperationalError("SELECT decks", {}, Exception("server closed the connection"))

        monkeypatch.setattr(session, "get", lost_connection)

        with pytest.raises(StoreError):
            store.touch_deck(deck.id, review_time)
