"""
Deck model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime
from sqlalchemy import Column, JSON


class Deck(SQLModel, table=True):
    """Deck table - a named, owned collection of flashcards."""
    __tablename__ = "decks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)  # Owner
    name: str
    description: Optional[str] = None
    subject: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_studied: Optional[datetime] = None  # Touched on every card review
