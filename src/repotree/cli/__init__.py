"""Command-line interface for repotree."""
