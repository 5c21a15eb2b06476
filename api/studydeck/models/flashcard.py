"""
Flashcard model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime
from sqlalchemy import Column, JSON


class Flashcard(SQLModel, table=True):
    """Flashcard table - card content plus its spaced-repetition state."""
    __tablename__ = "flashcards"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)  # Owner
    # No FK constraint: the deck row is removed before its cards
    deck_id: int = Field(index=True)
    front: str
    back: str
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Scheduling state (SM-2)
    interval: int = Field(default=1)  # Days until next review
    ease_factor: float = Field(default=2.5)
    repetitions: int = Field(default=0)  # Every review, regardless of quality
    next_review: datetime = Field(default_factory=datetime.utcnow, index=True)
    last_reviewed: Optional[datetime] = None

    # Performance counters, never used for scheduling
    total_reviews: int = Field(default=0)
    correct_reviews: int = Field(default=0)
    streak: int = Field(default=0)
    last_review_quality: Optional[int] = None  # 0-5
