"""Walk state and result models for undo sessions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from region_undo.models.patch_models import PatchUnit
from region_undo.models.range_models import LineRange


class SessionStatus(str, Enum):
    """Lifecycle of an undo session."""

    FRESH = "fresh"
    WALKING = "walking"
    EXHAUSTED = "exhausted"


class WalkState(BaseModel):
    """Mutable state of one walk backward through a region's history."""

    model_config = ConfigDict(frozen=False)

    file_path: str
    region_start: int = Field(ge=1)  # live coordinates
    region_lines: int = Field(ge=0)  # 0 once a step removed the region entirely
    remaining_patches: list[PatchUnit] = Field(default_factory=list)
    exhausted: bool = False

    @property
    def region_bounds(self) -> LineRange | None:
        if self.region_lines == 0:
            return None
        return LineRange(
            start_line=self.region_start,
            end_line=self.region_start + self.region_lines - 1,
        )


class StepResult(BaseModel):
    """Outcome of one step of a walk."""

    model_config = ConfigDict(frozen=True)

    patch: PatchUnit | None  # None when there was nothing to apply
    text: str
    region_start: int
    region_lines: int
    remaining: int
    status: SessionStatus


class Revision(BaseModel):
    """One older revision of a region, as listed by the history browser."""

    model_config = ConfigDict(frozen=True)

    position: int
    commit: str | None
    summary: str = ""
    text: str
    diff_text: str = ""  # unified diff from this revision to the next newer one
