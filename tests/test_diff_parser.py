"""Tests for unified diff hunk parsing."""

import pytest

from region_undo.exceptions import MalformedPatchError, QueryFailedError
from region_undo.models import EditHunk, HunkHeader, HunkKind
from region_undo.utils.diff_parser import (
    classify_line,
    find_first_hunk,
    group_runs,
    parse_hunk_body,
    parse_hunk_header,
    split_lines,
)

from conftest import WORKING_DIFF_EDIT


@pytest.mark.parametrize(
    "line, expected",
    [
        ("+added", HunkKind.ADDED),
        ("-removed", HunkKind.REMOVED),
        (" context", HunkKind.CONTEXT),
        (" ", HunkKind.CONTEXT),
        ("", None),
        ("commit 1234abcd", None),
        ("@@ -1 +1 @@", None),
    ],
)
def test_classify_line(line, expected):
    assert classify_line(line) == expected


def test_parse_hunk_header_with_counts():
    header = parse_hunk_header("@@ -3,4 +5,6 @@ def foo():")
    assert header == HunkHeader(old_start=3, old_count=4, new_start=5, new_count=6)


def test_parse_hunk_header_omitted_counts_default_to_one():
    header = parse_hunk_header("@@ -7 +8 @@")
    assert header.old_count == 1
    assert header.new_count == 1


def test_parse_hunk_header_rejects_garbage():
    with pytest.raises(MalformedPatchError):
        parse_hunk_header("@@ nonsense @@")


def test_split_lines_keeps_carriage_returns():
    assert split_lines(" a\r\n b\r\n") == [" a\r", " b\r"]


def test_find_first_hunk_discards_preamble():
    header, body = find_first_hunk(WORKING_DIFF_EDIT)
    assert header.old_count == 2
    assert body == [" foo", "-bar", "+BAR"]


def test_find_first_hunk_without_marker_fails():
    with pytest.raises(QueryFailedError):
        find_first_hunk("Binary files a/logo.png and b/logo.png differ\n")


def test_parse_hunk_body_groups_runs():
    header = HunkHeader(old_start=1, old_count=4, new_start=1, new_count=4)
    hunks = parse_hunk_body(header, [" a", "-b", "-c", "+B", "+C", " d"])
    assert hunks == (
        EditHunk(kind=HunkKind.CONTEXT, lines=("a",)),
        EditHunk(kind=HunkKind.REMOVED, lines=("b", "c")),
        EditHunk(kind=HunkKind.ADDED, lines=("B", "C")),
        EditHunk(kind=HunkKind.CONTEXT, lines=("d",)),
    )


def test_parse_hunk_body_stops_at_terminator_after_counts():
    """Lines after a complete body belong to something else and are ignored."""
    header = HunkHeader(old_start=1, old_count=1, new_start=1, new_count=1)
    hunks = parse_hunk_body(header, ["-old", "+new", "", "commit abcdef0", " stray"])
    assert [h.kind for h in hunks] == [HunkKind.REMOVED, HunkKind.ADDED]


def test_parse_hunk_body_ended_early_is_malformed():
    header = HunkHeader(old_start=1, old_count=3, new_start=1, new_count=3)
    with pytest.raises(MalformedPatchError):
        parse_hunk_body(header, [" a", "garbage", " c"])


def test_parse_hunk_body_no_newline_marker():
    header = HunkHeader(old_start=1, old_count=2, new_start=1, new_count=2)
    hunks = parse_hunk_body(
        header, [" a", "-b", "\\ No newline at end of file", "+b"]
    )
    assert hunks == (
        EditHunk(kind=HunkKind.CONTEXT, lines=("a",)),
        EditHunk(kind=HunkKind.REMOVED, lines=("b",), no_newline_at_end=True),
        EditHunk(kind=HunkKind.ADDED, lines=("b",)),
    )


def test_parse_hunk_body_marker_without_line_is_malformed():
    header = HunkHeader(old_start=1, old_count=1, new_start=1, new_count=1)
    with pytest.raises(MalformedPatchError):
        parse_hunk_body(header, ["\\ No newline at end of file", " a"])


def test_group_runs_empty():
    assert group_runs([]) == ()
