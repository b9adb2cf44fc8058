"""Data models for region-undo."""

from region_undo.models.patch_models import EditHunk, HunkHeader, HunkKind, PatchUnit
from region_undo.models.range_models import LineRange
from region_undo.models.walk_models import (
    Revision,
    SessionStatus,
    StepResult,
    WalkState,
)

__all__ = [
    "EditHunk",
    "HunkHeader",
    "HunkKind",
    "LineRange",
    "PatchUnit",
    "Revision",
    "SessionStatus",
    "StepResult",
    "WalkState",
]
