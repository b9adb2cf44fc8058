"""Extraction of per-commit patch units from ``git log -L`` output."""

import logging
import re
from pathlib import Path

from region_undo.exceptions import QueryFailedError
from region_undo.models.patch_models import PatchUnit
from region_undo.models.range_models import LineRange
from region_undo.utils.diff_parser import (
    HUNK_MARKER,
    parse_hunk_body,
    parse_hunk_header,
    split_lines,
)
from region_undo.vcs.git_client import GitClient

logger = logging.getLogger(__name__)

COMMIT_MARKER_RE = re.compile(r"^commit ([0-9a-f]{4,64})(?: (.*))?$")


def split_commit_blocks(log_text: str) -> list[tuple[str, str, list[str]]]:
    """Partition log output at commit marker lines.

    Returns:
        List of (commit id, summary, lines after the marker) in log order.

    Raises:
        QueryFailedError: If non-empty output contains no commit marker.
    """
    blocks: list[tuple[str, str, list[str]]] = []
    for line in split_lines(log_text):
        match = COMMIT_MARKER_RE.match(line)
        if match:
            blocks.append((match.group(1), match.group(2) or "", []))
        elif blocks:
            blocks[-1][2].append(line)
        elif line.strip():
            raise QueryFailedError(f"Unexpected line before first commit marker: {line!r}")

    if not blocks and log_text.strip():
        raise QueryFailedError("No commit marker found in log output")
    return blocks


def parse_log_output(log_text: str, first_position: int = 0) -> list[PatchUnit]:
    """Turn ``git log -L`` output into PatchUnits, newest first.

    Args:
        log_text: Raw log output.
        first_position: Walk position assigned to the first unit.

    Returns:
        One PatchUnit per commit that carries a hunk, in log order. Empty
        when the range has no committed history.
    """
    units: list[PatchUnit] = []
    for commit, summary, lines in split_commit_blocks(log_text):
        hunk_idx = next(
            (i for i, line in enumerate(lines) if line.startswith(HUNK_MARKER)),
            None,
        )
        if hunk_idx is None:
            logger.warning("Commit %s has no hunk for the range; skipping", commit)
            continue
        header = parse_hunk_header(lines[hunk_idx])
        hunks = parse_hunk_body(header, lines[hunk_idx + 1:])
        units.append(
            PatchUnit(
                position=first_position + len(units),
                commit=commit,
                summary=summary,
                header=header,
                hunks=hunks,
            )
        )
    return units


class HistoryExtractor:
    """Builds the ordered list of historical patch units for a range."""

    def __init__(self, git: GitClient | None = None) -> None:
        self.git: GitClient = git or GitClient()

    def build_history(
        self,
        path: str | Path,
        resolved_range: LineRange,
        first_position: int = 0,
    ) -> list[PatchUnit]:
        """Query the line-range history of ``path`` and parse it.

        Args:
            path: File whose history is walked.
            resolved_range: Range in HEAD coordinates.
            first_position: Walk position of the newest commit's unit.

        Raises:
            QueryFailedError: If git fails or its output is malformed.
        """
        log_text = self.git.log_line_range(path, resolved_range)
        units = parse_log_output(log_text, first_position=first_position)
        logger.debug(
            "Found %d commits touching lines %s of %s",
            len(units),
            resolved_range.log_spec(),
            path,
        )
        return units
