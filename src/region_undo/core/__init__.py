"""Range resolution, history extraction and patch replay."""

from region_undo.core.history_extractor import HistoryExtractor, parse_log_output
from region_undo.core.patch_applier import apply_patch, count_lines
from region_undo.core.range_resolver import extract_uncommitted_patch, resolve_range

__all__ = [
    "HistoryExtractor",
    "apply_patch",
    "count_lines",
    "extract_uncommitted_patch",
    "parse_log_output",
    "resolve_range",
]
