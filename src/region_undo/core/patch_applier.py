"""Replay of a patch unit into the older text of a region."""

from region_undo.models.patch_models import HunkKind, PatchUnit


def apply_patch(patch: PatchUnit) -> str:
    """Return the region text as it was before ``patch`` was made.

    Added lines exist only in the newer revision and are dropped. Removed and
    context lines make up the older revision and are emitted without their
    prefix. A unit with nothing but added lines yields an empty string.
    """
    parts: list[str] = []
    for kind, text, no_newline in patch.iter_lines():
        if kind == HunkKind.ADDED:
            continue
        parts.append(text)
        if not no_newline:
            parts.append("\n")
    return "".join(parts)


def count_lines(text: str) -> int:
    """Number of lines the text occupies in a buffer."""
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)
