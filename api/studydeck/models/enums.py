"""
Model enums.
"""
from enum import Enum


class SessionType(str, Enum):
    """Kind of study session."""
    POMODORO = "pomodoro"
    DEEP_WORK = "deep_work"
    REVIEW = "review"
    PRACTICE = "practice"


class AnalyticsPeriod(str, Enum):
    """Look-back window for study session analytics."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class NoteComplexity(str, Enum):
    """Difficulty of a note as judged by the summarizer."""
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class AttachmentType(str, Enum):
    """Kind of resource attached to a note."""
    IMAGE = "image"
    AUDIO = "audio"
    LINK = "link"
    FILE = "file"
