"""
Flashcard endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from studydeck.api.v1.dependencies import get_card_store, get_flashcard_generator
from studydeck.schemas.flashcard import (
    CreateFlashcardRequest,
    FlashcardResponse,
    FlashcardsResponse,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    ReviewFlashcardRequest,
)
from studydeck.services import deck_service
from studydeck.services.card_store import CardStore
from studydeck.services.review_service import review_card

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


@router.post("", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
def create_card(
    request: CreateFlashcardRequest,
    store: CardStore = Depends(get_card_store)
):
    """Create a flashcard in one of the user's decks."""
    card = deck_service.create_card(
        store,
        user_id=request.user_id,
        deck_id=request.deck_id,
        front=request.front,
        back=request.back,
        tags=request.tags
    )
    return FlashcardResponse.model_validate(card)


@router.post("/generate", response_model=GenerateFlashcardsResponse, status_code=status.HTTP_201_CREATED)
def generate_cards(
    request: GenerateFlashcardsRequest,
    store: CardStore = Depends(get_card_store),
    generator=Depends(get_flashcard_generator)
):
    """Generate flashcards from study material with the LLM and add them to a deck."""
    cards = deck_service.bulk_generate_cards(
        store,
        generator,
        user_id=request.user_id,
        deck_id=request.deck_id,
        source_text=request.text,
        count=request.count
    )
    return GenerateFlashcardsResponse(
        message="Flashcards generated successfully",
        count=len(cards),
        cards=[FlashcardResponse.model_validate(card) for card in cards]
    )


@router.get("/due", response_model=FlashcardsResponse)
def get_due_cards(
    user_id: int,
    deck_id: Optional[int] = None,
    limit: Optional[int] = Query(None, ge=1),
    store: CardStore = Depends(get_card_store)
):
    """Get the user's cards that are due for review, earliest first."""
    cards = deck_service.list_due_cards(store, user_id, deck_id=deck_id, limit=limit)
    return FlashcardsResponse(cards=[FlashcardResponse.model_validate(card) for card in cards])


@router.get("/deck/{deck_id}", response_model=FlashcardsResponse)
def get_cards(
    deck_id: int,
    user_id: int,
    store: CardStore = Depends(get_card_store)
):
    """Get all cards of a deck."""
    cards = deck_service.list_cards(store, deck_id, user_id)
    return FlashcardsResponse(cards=[FlashcardResponse.model_validate(card) for card in cards])


@router.get("/{card_id}", response_model=FlashcardResponse)
def get_card(
    card_id: int,
    user_id: int,
    store: CardStore = Depends(get_card_store)
):
    """Get a flashcard by ID."""
    return FlashcardResponse.model_validate(deck_service.get_card(store, card_id, user_id))


@router.delete("/{card_id}", status_code=status.HTTP_200_OK)
def delete_card(
    card_id: int,
    user_id: int,
    store: CardStore = Depends(get_card_store)
):
    """Delete a flashcard."""
    deck_service.delete_card(store, card_id, user_id)
    return {"message": "Card deleted successfully"}


@router.post("/{card_id}/review", response_model=FlashcardResponse)
def review(
    card_id: int,
    request: ReviewFlashcardRequest,
    store: CardStore = Depends(get_card_store)
):
    """
    Record a recall attempt (quality 0-5) and reschedule the card.

    Returns the card with its new interval, ease factor and next review date.
    """
    card = review_card(store, card_id, request.user_id, request.quality)
    return FlashcardResponse.model_validate(card)
