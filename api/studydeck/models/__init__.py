"""
Models package - imports all models so they register with SQLModel.
"""
from studydeck.models.enums import SessionType, AnalyticsPeriod, NoteComplexity, AttachmentType
from studydeck.models.deck import Deck
from studydeck.models.flashcard import Flashcard
from studydeck.models.study_session import StudySession
from studydeck.models.study_note import StudyNote

__all__ = [
    'SessionType',
    'AnalyticsPeriod',
    'Deck',
    'Flashcard',
    'StudySession',
    'NoteComplexity',
    'AttachmentType',
    'StudyNote',
]
