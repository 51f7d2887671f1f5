"""Command-line interface for CraftCut."""
