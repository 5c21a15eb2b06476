"""
Custom exceptions for the application.
"""


class StudyDeckException(Exception):
    """Base exception for all StudyDeck application exceptions."""
    pass


class InvalidInputError(StudyDeckException):
    """Raised when arguments are malformed or out of range."""
    pass


class NotFoundError(StudyDeckException):
    """Raised when a requested resource is not found or not owned by the caller."""
    pass


class StoreError(StudyDeckException):
    """Raised when the persistence layer fails."""
    pass


class BulkCreationError(StoreError):
    """Raised after a bulk creation in which some items could not be persisted.

    Items persisted before and after the failures are kept; ``created`` holds them
    and ``failures`` holds the exceptions for the rest.
    """

    def __init__(self, message: str, created=None, failures=None):
        super().__init__(message)
        self.created = list(created or [])
        self.created_ids = [getattr(item, "id", None) for item in self.created]
        self.failures = list(failures or [])


class GenerationError(StudyDeckException):
    """Raised when the content-generation collaborator fails."""
    pass
