"""Command-line interface for text-itemizer."""

from text_itemizer.cli.main import cli

__all__ = ["cli"]
