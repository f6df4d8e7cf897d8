"""CLI commands for text-itemizer."""

from text_itemizer.cli.commands.itemize import itemize
from text_itemizer.cli.commands.batch import batch
from text_itemizer.cli.commands.shape import shape

__all__ = ["itemize", "batch", "shape"]
