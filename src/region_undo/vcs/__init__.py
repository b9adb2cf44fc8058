"""Version-control access for region-undo."""

from region_undo.vcs.git_client import GitClient

__all__ = ["GitClient"]
