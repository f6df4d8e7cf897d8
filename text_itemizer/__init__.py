"""text-itemizer: split Unicode text into bidi/script runs for shaping.

This library provides:
- Script extension lookup and script-homogeneous interval scanning
- Unicode BiDi analysis with one reusable engine per worker thread
- Itemization of single-line text into TextRuns (UTF-16 offsets)
- Visual reordering of runs for left-to-right rendering
- A HarfBuzz adapter that shapes the resulting runs

Example:
    >>> from text_itemizer import itemize_text, reorder_visual
    >>> runs = itemize_text("abcدef")
    >>> reorder_visual(runs)
"""

from text_itemizer.config import Config
from text_itemizer.exceptions import (
    BidiAnalysisError,
    ConfigError,
    InvalidTextError,
    InvariantError,
    ShapingError,
    TextItemizerError,
)
from text_itemizer.shaping.bidi import BidiContext, LogicalRun, get_thread_context
from text_itemizer.shaping.itemizer import Direction, TextRun, TextRuns, itemize_text
from text_itemizer.shaping.reorder import reorder_visual, visual_runs

__version__ = "0.1.0"

__all__ = [
    # Itemization
    "itemize_text",
    "reorder_visual",
    "visual_runs",
    "TextRun",
    "TextRuns",
    "Direction",
    # BiDi
    "BidiContext",
    "LogicalRun",
    "get_thread_context",
    # Configuration
    "Config",
    # Exceptions
    "TextItemizerError",
    "InvalidTextError",
    "InvariantError",
    "BidiAnalysisError",
    "ConfigError",
    "ShapingError",
    # Metadata
    "__version__",
]
