"""Rendering of the change between two revisions of a region."""

import difflib

from region_undo.utils.diff_parser import HUNK_MARKER, split_keepends

NO_NEWLINE_MARKER = "\\ No newline at end of file"
FILE_HEADER_LINES = 2


def render_region_diff(
    older_text: str,
    newer_text: str,
    older_label: str,
    newer_label: str,
) -> str:
    """Render a unified diff from an older to a newer region text.

    Lines are split on "\\n" only, so carriage returns and form feeds stay
    part of their line. A last line without a newline is followed by git's
    no-newline marker.

    Args:
        older_text: Region content before the change.
        newer_text: Region content after the change.
        older_label: ``---`` header, e.g. "notes.txt@1a2b3c4d5e6f^".
        newer_label: ``+++`` header, e.g. "notes.txt@1a2b3c4d5e6f".

    Returns:
        The diff without a trailing newline, or "" when the texts are equal.
    """
    if older_text == newer_text:
        return ""

    rendered: list[str] = []
    diff = difflib.unified_diff(
        split_keepends(older_text),
        split_keepends(newer_text),
        fromfile=older_label,
        tofile=newer_label,
        lineterm="",
    )
    for index, line in enumerate(diff):
        if index < FILE_HEADER_LINES or line.startswith(HUNK_MARKER):
            rendered.append(line)
        elif line.endswith("\n"):
            rendered.append(line[:-1])
        else:
            rendered.extend([line, NO_NEWLINE_MARKER])
    return "\n".join(rendered)
