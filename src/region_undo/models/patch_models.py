"""Models for hunks and the patch units replayed by a walk."""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HunkKind(str, Enum):
    """Kind of a line in a unified diff hunk body."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


class HunkHeader(BaseModel):
    """Parsed ``@@ -old_start,old_count +new_start,new_count @@`` line."""

    model_config = ConfigDict(frozen=True)

    old_start: int = Field(ge=0)
    old_count: int = Field(ge=0)
    new_start: int = Field(ge=0)
    new_count: int = Field(ge=0)

    @property
    def first_old_line(self) -> int:
        # An empty side is written as "-N,0" where N is the line *before* the hunk
        return self.old_start if self.old_count else self.old_start + 1

    @property
    def first_new_line(self) -> int:
        return self.new_start if self.new_count else self.new_start + 1


class EditHunk(BaseModel):
    """One contiguous run of diff lines sharing a kind."""

    model_config = ConfigDict(frozen=True)

    kind: HunkKind
    lines: tuple[str, ...]  # without prefix character or newline
    no_newline_at_end: bool = False  # last line had "\ No newline at end of file"

    def iter_lines(self) -> Iterator[tuple[HunkKind, str, bool]]:
        last = len(self.lines) - 1
        for idx, text in enumerate(self.lines):
            yield self.kind, text, self.no_newline_at_end and idx == last


class PatchUnit(BaseModel):
    """The change to a region between one revision and the next newer one."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=0)  # 0 = most recent step of the walk
    commit: str | None = None  # None for uncommitted working copy edits
    summary: str = ""
    header: HunkHeader | None = None
    hunks: tuple[EditHunk, ...] = ()

    @property
    def is_uncommitted(self) -> bool:
        return self.commit is None

    @property
    def added_count(self) -> int:
        return sum(len(h.lines) for h in self.hunks if h.kind == HunkKind.ADDED)

    @property
    def removed_count(self) -> int:
        return sum(len(h.lines) for h in self.hunks if h.kind == HunkKind.REMOVED)

    def iter_lines(self) -> Iterator[tuple[HunkKind, str, bool]]:
        for hunk in self.hunks:
            yield from hunk.iter_lines()
