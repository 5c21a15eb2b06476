"""
Deck endpoints.
"""
from fastapi import APIRouter, Depends, status

from studydeck.api.v1.dependencies import get_card_store
from studydeck.schemas.deck import (
    CreateDeckRequest,
    DeckResponse,
    DecksResponse,
    DeleteDeckResponse,
)
from studydeck.services import deck_service
from studydeck.services.card_store import CardStore

router = APIRouter(prefix="/decks", tags=["decks"])


def to_deck_response(summary: deck_service.DeckSummary) -> DeckResponse:
    return DeckResponse(**summary.deck.model_dump(), card_count=summary.card_count)


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
def create_deck(
    request: CreateDeckRequest,
    store: CardStore = Depends(get_card_store)
):
    """Create a new deck."""
    deck = deck_service.create_deck(
        store,
        user_id=request.user_id,
        name=request.name,
        description=request.description,
        subject=request.subject,
        tags=request.tags
    )
    return to_deck_response(deck_service.DeckSummary(deck=deck, card_count=0))


@router.get("", response_model=DecksResponse)
def get_decks(
    user_id: int,
    store: CardStore = Depends(get_card_store)
):
    """Get the user's decks with card counts, most recently studied first."""
    summaries = deck_service.list_decks(store, user_id)
    return DecksResponse(decks=[to_deck_response(summary) for summary in summaries])


@router.get("/{deck_id}", response_model=DeckResponse)
def get_deck(
    deck_id: int,
    user_id: int,
    store: CardStore = Depends(get_card_store)
):
    """Get a deck by ID."""
    return to_deck_response(deck_service.get_deck(store, deck_id, user_id))


@router.delete("/{deck_id}", response_model=DeleteDeckResponse)
def delete_deck(
    deck_id: int,
    user_id: int,
    store: CardStore = Depends(get_card_store)
):
    """Delete a deck and all of its cards."""
    cards_deleted = deck_service.delete_deck(store, deck_id, user_id)
    return DeleteDeckResponse(message="Deck deleted successfully", cards_deleted=cards_deleted)
