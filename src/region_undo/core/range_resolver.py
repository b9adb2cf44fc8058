"""Mapping of a working copy line range onto the HEAD snapshot."""

from region_undo.exceptions import NoMappingError
from region_undo.models.patch_models import HunkKind, PatchUnit
from region_undo.models.range_models import LineRange
from region_undo.utils.diff_parser import find_first_hunk, group_runs, parse_hunk_body


def resolve_range(live_start: int, live_end: int, working_diff: str) -> LineRange:
    """Translate a live line range into HEAD coordinates.

    A boundary on an unchanged line maps to that line. A boundary on an
    edited line (added lines following removed ones in the same change
    block) maps to the block's removed lines: the start to the first of
    them, the end to the last.

    Args:
        live_start: First selected line in the working copy (1-based).
        live_end: Last selected line in the working copy (inclusive).
        working_diff: Whole-file ``git diff HEAD`` output; empty when the
            working copy is clean.

    Returns:
        The equivalent LineRange in the HEAD snapshot.

    Raises:
        NoMappingError: If a boundary falls on a purely inserted line.
        QueryFailedError: If the diff is non-empty but has no hunk.
    """
    live = LineRange(start_line=live_start, end_line=live_end)
    if not working_diff.strip():
        return live

    header, body = find_first_hunk(working_diff)
    live_line = header.first_new_line
    consumed = header.first_old_line - 1
    # HEAD line of the first removed line in the current change block
    block_removed_from = None
    start = end = None

    for kind, _text, _no_newline in _iter_body(header, body):
        if kind == HunkKind.REMOVED:
            if block_removed_from is None:
                block_removed_from = 1 + consumed
            consumed += 1
            continue

        if kind == HunkKind.ADDED:
            if live_line in (live.start_line, live.end_line) and block_removed_from is None:
                break
            if start is None and live_line == live.start_line:
                start = block_removed_from
            if live_line == live.end_line:
                end = consumed
                break
            live_line += 1
            continue

        block_removed_from = None
        if start is None and live_line == live.start_line:
            start = 1 + consumed
        consumed += 1
        if live_line == live.end_line:
            end = consumed
            break
        live_line += 1

    if start is None or end is None:
        raise NoMappingError(
            f"Lines {live_start}-{live_end} are not found in the committed file"
        )
    return LineRange(start_line=start, end_line=end)


def extract_uncommitted_patch(
    working_diff: str,
    live_range: LineRange,
    head_range: LineRange,
) -> PatchUnit | None:
    """Build the patch unit that takes the region back to its HEAD text.

    Keeps the diff lines whose working copy line (added, context) falls in
    ``live_range`` or whose HEAD line (removed) falls in ``head_range``.

    Returns:
        A position-0 PatchUnit with no commit, or None when the region is
        unchanged from HEAD.
    """
    if not working_diff.strip():
        return None

    header, body = find_first_hunk(working_diff)
    live_no = header.first_new_line
    head_no = header.first_old_line
    selected: list[tuple[HunkKind, str, bool]] = []

    for kind, text, no_newline in _iter_body(header, body):
        if kind == HunkKind.ADDED:
            inside = live_range.contains(live_no)
            live_no += 1
        elif kind == HunkKind.REMOVED:
            inside = head_range.contains(head_no)
            head_no += 1
        else:
            inside = live_range.contains(live_no)
            live_no += 1
            head_no += 1
        if inside:
            selected.append((kind, text, no_newline))

    if not any(kind != HunkKind.CONTEXT for kind, _, _ in selected):
        return None
    return PatchUnit(position=0, summary="Uncommitted changes", hunks=group_runs(selected))


def _iter_body(header, body):
    for hunk in parse_hunk_body(header, body):
        yield from hunk.iter_lines()
