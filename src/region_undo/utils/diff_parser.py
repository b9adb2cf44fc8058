"""Parsing of unified diff hunks as emitted by git diff and git log -L."""

import re
from collections.abc import Iterable, Sequence

from region_undo.exceptions import MalformedPatchError, QueryFailedError
from region_undo.models.patch_models import EditHunk, HunkHeader, HunkKind

HUNK_MARKER = "@@"
NO_NEWLINE_PREFIX = "\\"
HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

_PREFIX_KINDS = {
    "+": HunkKind.ADDED,
    "-": HunkKind.REMOVED,
    " ": HunkKind.CONTEXT,
}


def split_lines(text: str) -> list[str]:
    """Split git output into lines, keeping carriage returns that belong to content."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def split_keepends(text: str) -> list[str]:
    """Split text after each newline only; a final partial line is kept as is."""
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def classify_line(line: str) -> HunkKind | None:
    """Return the kind of a hunk body line, or None for a terminator."""
    if not line:
        return None
    return _PREFIX_KINDS.get(line[0])


def parse_hunk_header(line: str) -> HunkHeader:
    """Parse an ``@@`` line.

    Raises:
        MalformedPatchError: If the line is not a unified diff hunk header.
    """
    match = HUNK_HEADER_RE.match(line)
    if match is None:
        raise MalformedPatchError(f"Invalid hunk header: {line!r}")
    old_start, old_count, new_start, new_count = match.groups()
    return HunkHeader(
        old_start=int(old_start),
        old_count=int(old_count) if old_count is not None else 1,
        new_start=int(new_start),
        new_count=int(new_count) if new_count is not None else 1,
    )


def find_first_hunk(diff_text: str) -> tuple[HunkHeader, list[str]]:
    """Locate the first hunk in diff output.

    Everything before the first ``@@`` line is discarded.

    Returns:
        Tuple of (header, lines following the header).

    Raises:
        QueryFailedError: If the output contains no hunk marker.
    """
    lines = split_lines(diff_text)
    for idx, line in enumerate(lines):
        if line.startswith(HUNK_MARKER):
            return parse_hunk_header(line), lines[idx + 1:]
    raise QueryFailedError("No hunk marker found in diff output")


def parse_hunk_body(header: HunkHeader, lines: Sequence[str]) -> tuple[EditHunk, ...]:
    """Classify hunk body lines into runs of EditHunks.

    The body ends at the first line that is neither ``+``, ``-``, space nor a
    no-newline marker, or once the line counts from the header are used up.

    Raises:
        MalformedPatchError: If the body ends before the header's counts are
            met, or a count is exceeded.
    """
    old_left = header.old_count
    new_left = header.new_count
    entries: list[tuple[HunkKind, str, bool]] = []

    for line in lines:
        if line.startswith(NO_NEWLINE_PREFIX):
            if not entries:
                raise MalformedPatchError("No-newline marker without a preceding line")
            kind, text, _ = entries[-1]
            entries[-1] = (kind, text, True)
            continue
        if old_left == 0 and new_left == 0:
            break
        kind = classify_line(line)
        if kind is None:
            break
        if kind != HunkKind.ADDED:
            old_left -= 1
        if kind != HunkKind.REMOVED:
            new_left -= 1
        if old_left < 0 or new_left < 0:
            raise MalformedPatchError(
                f"Hunk body exceeds header counts "
                f"(-{header.old_count} +{header.new_count})"
            )
        entries.append((kind, line[1:], False))

    if old_left or new_left:
        raise MalformedPatchError(
            f"Hunk body ended early: {old_left} old and {new_left} new lines missing"
        )
    return group_runs(entries)


def group_runs(entries: Iterable[tuple[HunkKind, str, bool]]) -> tuple[EditHunk, ...]:
    """Group classified lines into contiguous same-kind EditHunks."""
    hunks: list[EditHunk] = []
    run_kind: HunkKind | None = None
    run_lines: list[str] = []

    for kind, text, no_newline in entries:
        if run_lines and kind != run_kind:
            hunks.append(EditHunk(kind=run_kind, lines=tuple(run_lines)))
            run_lines = []
        run_kind = kind
        run_lines.append(text)
        if no_newline:
            hunks.append(
                EditHunk(kind=run_kind, lines=tuple(run_lines), no_newline_at_end=True)
            )
            run_lines = []

    if run_lines:
        hunks.append(EditHunk(kind=run_kind, lines=tuple(run_lines)))
    return tuple(hunks)
