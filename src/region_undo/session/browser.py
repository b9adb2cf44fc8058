"""Read-only listing of every older revision of a region."""

from pathlib import Path

from region_undo.core.history_extractor import HistoryExtractor
from region_undo.core.patch_applier import apply_patch
from region_undo.models.patch_models import PatchUnit
from region_undo.models.range_models import LineRange
from region_undo.models.walk_models import Revision
from region_undo.session.buffer import LineBuffer
from region_undo.session.undo_session import build_walk_queue
from region_undo.utils.diff_generator import render_region_diff
from region_undo.vcs.git_client import GitClient


def browse_history(
    path: str | Path,
    start_line: int,
    end_line: int,
    git: GitClient | None = None,
) -> list[Revision]:
    """List the revisions an undo walk over the range would visit.

    The file on disk is read but never modified.

    Returns:
        Revisions newest first; each carries the region text before that
        step and a diff from it to the newer text.

    Raises:
        NoMappingError: If the selection is not found in history.
        QueryFailedError: If a git query fails.
    """
    file_path = Path(path)
    git = git or GitClient()
    buffer = LineBuffer.from_file(file_path)
    live_range = LineRange(start_line=start_line, end_line=end_line)
    queue = build_walk_queue(
        git, HistoryExtractor(git), file_path, live_range, buffer.line_count()
    )

    revisions: list[Revision] = []
    newer_text = buffer.region_text(live_range.start_line, live_range.line_count)
    for patch in queue:
        older_text = apply_patch(patch)
        revisions.append(
            Revision(
                position=patch.position,
                commit=patch.commit,
                summary=patch.summary,
                text=older_text,
                diff_text=render_region_diff(
                    older_text, newer_text, *revision_labels(file_path.name, patch)
                ),
            )
        )
        newer_text = older_text
    return revisions


def revision_labels(name: str, patch: PatchUnit) -> tuple[str, str]:
    """Diff header labels for the older and newer side of one walk step."""
    if patch.is_uncommitted:
        return f"{name}@HEAD", f"{name} (working copy)"
    short = patch.commit[:12]
    return f"{name}@{short}^", f"{name}@{short}"
