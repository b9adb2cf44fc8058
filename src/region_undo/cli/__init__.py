"""Command line interface for region-undo."""
