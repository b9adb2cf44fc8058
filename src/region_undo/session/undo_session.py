"""Undo session: walks a region backward through its history one step at a time.

Lifecycle::

    fresh --start()--> walking --step()--> walking ... --step()--> exhausted

``start()`` always discards the current walk and rebuilds it from the current
state of the file, so repeating a walk after an interruption begins again at
the newest revision.
"""

import logging
from pathlib import Path

from region_undo.core.history_extractor import HistoryExtractor
from region_undo.core.patch_applier import apply_patch, count_lines
from region_undo.core.range_resolver import extract_uncommitted_patch, resolve_range
from region_undo.exceptions import HistoryExhaustedError, SessionError
from region_undo.models.patch_models import PatchUnit
from region_undo.models.range_models import LineRange
from region_undo.models.walk_models import SessionStatus, StepResult, WalkState
from region_undo.session.buffer import TextSurface
from region_undo.vcs.git_client import GitClient

logger = logging.getLogger(__name__)


def build_walk_queue(
    git: GitClient,
    extractor: HistoryExtractor,
    path: str | Path,
    live_range: LineRange,
    live_line_count: int,
) -> list[PatchUnit]:
    """Collect every patch unit of a walk, newest first.

    The uncommitted step comes first when the working copy differs from HEAD
    inside the range, followed by one unit per commit touching the range.
    A file without committed history yields an empty list.

    Raises:
        NoMappingError: If the range cannot be located in HEAD.
        QueryFailedError: If a git query fails.
    """
    if not git.has_history(path):
        logger.info("%s has no committed history", path)
        return []

    working_diff = git.diff_working_copy(path, context_lines=live_line_count)
    head_range = resolve_range(live_range.start_line, live_range.end_line, working_diff)
    pending = extract_uncommitted_patch(working_diff, live_range, head_range)

    queue: list[PatchUnit] = [pending] if pending is not None else []
    queue.extend(
        extractor.build_history(path, head_range, first_position=len(queue))
    )
    logger.debug(
        "Walk for %s lines %s (HEAD %s): %d steps",
        path,
        live_range.log_spec(),
        head_range.log_spec(),
        len(queue),
    )
    return queue


class UndoSession:
    """Drives one region-undo walk against a text surface."""

    def __init__(
        self,
        surface: TextSurface,
        path: str | Path,
        git: GitClient | None = None,
        extractor: HistoryExtractor | None = None,
    ) -> None:
        self.surface = surface
        self.path = Path(path)
        self.git: GitClient = git or GitClient()
        self.extractor: HistoryExtractor = extractor or HistoryExtractor(self.git)
        self.state: WalkState | None = None

    @property
    def status(self) -> SessionStatus:
        if self.state is None:
            return SessionStatus.FRESH
        if self.state.exhausted:
            return SessionStatus.EXHAUSTED
        return SessionStatus.WALKING

    def start(self, start_line: int, end_line: int) -> StepResult:
        """Begin a new walk over live lines ``start_line``..``end_line``.

        Any walk in progress is discarded. The first step is applied
        immediately. With no history at all nothing is replaced, the session
        is exhausted at once and the next ``step()`` raises
        HistoryExhaustedError.

        Raises:
            NoMappingError: If the selection is not found in history.
            QueryFailedError: If a git query fails.
        """
        self.discard()
        live_range = LineRange(start_line=start_line, end_line=end_line)
        queue = build_walk_queue(
            self.git,
            self.extractor,
            self.path,
            live_range,
            self.surface.line_count(),
        )
        self.state = WalkState(
            file_path=str(self.path),
            region_start=live_range.start_line,
            region_lines=live_range.line_count,
            remaining_patches=queue,
        )
        if not queue:
            self.state.exhausted = True
            return StepResult(
                patch=None,
                text="",
                region_start=self.state.region_start,
                region_lines=self.state.region_lines,
                remaining=0,
                status=self.status,
            )
        return self.step()

    def step(self) -> StepResult:
        """Replace the region with the next older revision.

        Raises:
            HistoryExhaustedError: If no revision is left; the region is
                left unchanged.
            SessionError: If no walk was started.
        """
        state = self.state
        if state is None:
            raise SessionError("No walk in progress; call start() first")
        if not state.remaining_patches:
            state.exhausted = True
            raise HistoryExhaustedError(f"No further history for {state.file_path}")

        patch = state.remaining_patches.pop(0)
        text = apply_patch(patch)
        self.surface.replace_lines(state.region_start, state.region_lines, text)
        state.region_lines = count_lines(text)
        logger.debug(
            "Applied step %d (%s) to %s; %d left",
            patch.position,
            patch.commit or "working copy",
            state.file_path,
            len(state.remaining_patches),
        )
        return StepResult(
            patch=patch,
            text=text,
            region_start=state.region_start,
            region_lines=state.region_lines,
            remaining=len(state.remaining_patches),
            status=self.status,
        )

    def invoke(self, start_line: int, end_line: int, repeat: bool = False) -> StepResult:
        """Entry point for a host command: continue on repeat, restart otherwise."""
        if repeat and self.state is not None:
            return self.step()
        return self.start(start_line, end_line)

    def discard(self) -> None:
        """Forget the current walk."""
        self.state = None
