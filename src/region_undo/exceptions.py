"""Exceptions for region history operations."""


class RegionUndoError(Exception):
    """Base exception for all region-undo operations."""


class NoMappingError(RegionUndoError):
    """Raised when a selection has no counterpart in the committed snapshot."""


class HistoryExhaustedError(RegionUndoError):
    """Raised when a walk has no older revision left to apply."""


class QueryFailedError(RegionUndoError):
    """Raised when a git query fails or its output cannot be parsed."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command or []
        self.stderr = stderr


class MalformedPatchError(QueryFailedError):
    """Raised when a hunk in git output is not well formed."""


class SessionError(RegionUndoError):
    """Raised when an undo session is driven out of order."""
