"""Read-only git queries used to reconstruct a region's history."""

import logging
import subprocess
from pathlib import Path

from region_undo.exceptions import QueryFailedError
from region_undo.models.range_models import LineRange

logger = logging.getLogger(__name__)

DEFAULT_GIT_BINARY = "git"
LOG_FORMAT = "commit %H %s"


class GitClient:
    """Runs git against the directory holding a file.

    Every query is invoked with the file's directory as working directory and
    the bare file name as path argument.
    """

    def __init__(self, git_binary: str = DEFAULT_GIT_BINARY) -> None:
        self.git_binary: str = git_binary

    def has_history(self, path: str | Path) -> bool:
        """Return True if the file exists in the HEAD commit.

        Raises:
            QueryFailedError: If the file is not inside a git work tree or
                git cannot be run.
        """
        file_path = Path(path)
        self._check(["rev-parse", "--git-dir"], cwd=file_path.parent)
        result = self._run(
            ["rev-parse", "--verify", "--quiet", f"HEAD:./{file_path.name}"],
            cwd=file_path.parent,
        )
        return result.returncode == 0

    def diff_working_copy(self, path: str | Path, context_lines: int) -> str:
        """Return the unified diff of the working copy against HEAD.

        Args:
            path: File to diff.
            context_lines: Context window; the working file's line count keeps
                the whole file in a single hunk.

        Raises:
            QueryFailedError: If git exits abnormally.
        """
        file_path = Path(path)
        return self._check(
            [
                "--no-pager",
                "diff",
                "--no-color",
                "--no-ext-diff",
                f"-U{max(1, context_lines)}",
                "HEAD",
                "--",
                file_path.name,
            ],
            cwd=file_path.parent,
        )

    def log_line_range(self, path: str | Path, line_range: LineRange) -> str:
        """Return ``git log -L`` output for a range in HEAD coordinates.

        Raises:
            QueryFailedError: If git exits abnormally.
        """
        file_path = Path(path)
        return self._check(
            [
                "--no-pager",
                "log",
                "--no-color",
                f"--format={LOG_FORMAT}",
                f"-L{line_range.log_spec()}:{file_path.name}",
            ],
            cwd=file_path.parent,
        )

    def _check(self, args: list[str], cwd: Path) -> str:
        result = self._run(args, cwd=cwd)
        if result.returncode != 0:
            raise QueryFailedError(
                f"{' '.join(result.args)} exited with status "
                f"{result.returncode}: {result.stderr.strip()}",
                command=list(result.args),
                stderr=result.stderr,
            )
        return result.stdout

    def _run(self, args: list[str], cwd: Path) -> subprocess.CompletedProcess:
        # Raw bytes decoded without newline translation; "\r" stays inside its line
        cmd = [self.git_binary, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            result = subprocess.run(cmd, cwd=str(cwd), capture_output=True)
        except OSError as exc:
            raise QueryFailedError(
                f"Could not run {self.git_binary}: {exc}", command=cmd
            ) from exc
        return subprocess.CompletedProcess(
            result.args,
            result.returncode,
            stdout=result.stdout.decode("utf-8", errors="replace"),
            stderr=result.stderr.decode("utf-8", errors="replace"),
        )
