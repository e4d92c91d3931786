"""
Error types raised while loading the dataset and looking up verses.
"""

from typing import Optional


class QuranMapError(Exception):
    """Base error. The message is shown to the user as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DatasetLoadFailed(QuranMapError):
    """The verse dataset could not be retrieved at startup."""


class FetchFailed(QuranMapError):
    """Network or HTTP failure while fetching verse text."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MalformedResponse(QuranMapError):
    """The text service answered with an unexpected shape."""


class SelectionParseFailed(QuranMapError):
    """A selection value does not point at a loaded record."""
