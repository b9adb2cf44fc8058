"""Utilities for region-undo."""

from region_undo.utils.diff_generator import render_region_diff
from region_undo.utils.diff_parser import (
    classify_line,
    find_first_hunk,
    group_runs,
    parse_hunk_body,
    parse_hunk_header,
    split_keepends,
    split_lines,
)

__all__ = [
    "classify_line",
    "find_first_hunk",
    "group_runs",
    "parse_hunk_body",
    "parse_hunk_header",
    "render_region_diff",
    "split_keepends",
    "split_lines",
]
