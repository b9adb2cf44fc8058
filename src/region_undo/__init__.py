"""Step backward through the git history of a range of lines."""

__version__ = "0.1.0"
