"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from studydeck.api.v1.endpoints import decks, flashcards, study_notes, study_sessions

api_router = APIRouter()

# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(decks.router)
api_router.include_router(flashcards.router)
api_router.include_router(study_sessions.router)
api_router.include_router(study_notes.router)
