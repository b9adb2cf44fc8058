"""Editing surfaces an undo session writes region text into."""

from pathlib import Path
from typing import Protocol

from region_undo.utils.diff_parser import split_keepends


class TextSurface(Protocol):
    """The host editor's view of a file, addressed by 1-based lines."""

    def line_count(self) -> int:
        ...

    def replace_lines(self, start_line: int, count: int, text: str) -> None:
        ...


class LineBuffer:
    """In-memory file contents implementing TextSurface."""

    def __init__(self, text: str = "") -> None:
        self._lines: list[str] = split_keepends(text)

    @classmethod
    def from_file(cls, path: str | Path) -> "LineBuffer":
        with open(path, encoding="utf-8", newline="") as fh:
            return cls(fh.read())

    def text(self) -> str:
        return "".join(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def region_text(self, start_line: int, count: int) -> str:
        return "".join(self._lines[start_line - 1:start_line - 1 + count])

    def replace_lines(self, start_line: int, count: int, text: str) -> None:
        """Replace ``count`` lines starting at ``start_line`` with ``text``.

        Raises:
            ValueError: If the lines are outside the buffer.
        """
        if start_line < 1 or start_line - 1 + count > len(self._lines):
            raise ValueError(
                f"Lines {start_line}..{start_line + count - 1} are outside the buffer "
                f"({len(self._lines)} lines)"
            )
        new_lines = split_keepends(text)
        following = self._lines[start_line - 1 + count:]
        if new_lines and following and not new_lines[-1].endswith("\n"):
            new_lines[-1] += "\n"
        self._lines[start_line - 1:start_line - 1 + count] = new_lines

    def write(self, path: str | Path) -> None:
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(self.text())
