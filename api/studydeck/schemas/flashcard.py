"""
Flashcard schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CreateFlashcardRequest(BaseModel):
    """Request schema for creating a flashcard."""
    user_id: int = Field(..., description="Owner user ID")
    deck_id: int = Field(..., description="Deck the card belongs to")
    front: str = Field(..., description="Question / prompt")
    back: str = Field(..., description="Answer / explanation")
    tags: List[str] = Field(default_factory=list, description="Free-text tags")


class ReviewFlashcardRequest(BaseModel):
    """Request schema for reviewing a flashcard."""
    user_id: int = Field(..., description="Owner user ID")
    # Range is checked by the review service so that it maps to a 400
    quality: int = Field(..., description="Recall quality from 0 (blackout) to 5 (perfect)")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "quality": 4
            }
        }


class GenerateFlashcardsRequest(BaseModel):
    """Request schema for generating flashcards from text."""
    user_id: int = Field(..., description="Owner user ID")
    deck_id: int = Field(..., description="Deck to add the generated cards to")
    text: str = Field(..., description="Study material to generate cards from")
    count: int = Field(10, description="Number of flashcards to generate")


class FlashcardResponse(BaseModel):
    """Flashcard response schema."""
    id: int
    user_id: int
    deck_id: int
    front: str
    back: str
    tags: List[str] = []
    created_at: datetime

    interval: int
    ease_factor: float
    repetitions: int
    next_review: datetime
    last_reviewed: Optional[datetime] = None

    total_reviews: int = 0
    correct_reviews: int = 0
    streak: int = 0
    last_review_quality: Optional[int] = None

    class Config:
        from_attributes = True


class FlashcardsResponse(BaseModel):
    """Response schema for flashcard lists."""
    cards: List[FlashcardResponse]


class GenerateFlashcardsResponse(BaseModel):
    """Response schema for flashcard generation."""
    message: str
    count: int
    cards: List[FlashcardResponse]
