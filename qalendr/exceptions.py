"""Exception hierarchy for date resolution, data access and selection errors."""

from typing import Optional


class QalendrError(Exception):
    """Base exception for all qalendr errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DateResolutionError(QalendrError):
    """Raised when a date pattern has no concrete date for the requested year."""


class UnknownPatternError(DateResolutionError):
    """Raised when a pattern string matches none of the recognized grammars."""

    def __init__(self, pattern: str):
        super().__init__(f"Unknown date pattern: {pattern!r}")
        self.pattern = pattern


class MissingDataError(QalendrError):
    """Raised when no table backs a requested country, category or year.

    Event loaders treat this as "zero results"; it never reaches the caller.
    """


class DataLoadError(QalendrError):
    """Raised when a record table on disk is unreadable or malformed."""


class InvalidSelectionError(QalendrError):
    """Raised when a calendar selection is rejected before any event loading.

    Should result in HTTP 400 Bad Request response.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=400)
