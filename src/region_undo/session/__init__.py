"""Undo sessions and the history browser."""

from region_undo.session.browser import browse_history
from region_undo.session.buffer import LineBuffer, TextSurface
from region_undo.session.undo_session import UndoSession, build_walk_queue

__all__ = [
    "LineBuffer",
    "TextSurface",
    "UndoSession",
    "browse_history",
    "build_walk_queue",
]
