"""
Deck schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CreateDeckRequest(BaseModel):
    """Request schema for creating a deck."""
    user_id: int = Field(..., description="Owner user ID")
    name: str = Field(..., description="Deck name")
    description: Optional[str] = Field(None, description="What this deck covers")
    subject: Optional[str] = Field(None, description="Subject of the deck")
    tags: List[str] = Field(default_factory=list, description="Free-text tags")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "name": "Cell Biology",
                "description": "Organelles and their functions",
                "subject": "biology",
                "tags": ["cells", "exam"]
            }
        }


class DeckResponse(BaseModel):
    """Deck response schema."""
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    subject: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    last_studied: Optional[datetime] = None
    card_count: int = 0

    class Config:
        from_attributes = True


class DecksResponse(BaseModel):
    """Response schema for decks list."""
    decks: List[DeckResponse]


class DeleteDeckResponse(BaseModel):
    """Response schema for deck deletion."""
    message: str
    cards_deleted: int
