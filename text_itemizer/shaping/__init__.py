"""Text itemization and shaping for text-itemizer.

This subpackage provides:
- Script extension lookup and script interval scanning
- BiDi (bidirectional) paragraph analysis
- Itemization into TextRuns and visual run reordering
- HarfBuzz shaping of the resulting runs
"""

from text_itemizer.shaping.bidi import BidiContext, LogicalRun, get_thread_context
from text_itemizer.shaping.harfbuzz import (
    ShapedGlyph,
    ShapingResult,
    create_hb_font,
    shape_run,
    shape_text,
)
from text_itemizer.shaping.itemizer import Direction, TextRun, TextRuns, itemize_text
from text_itemizer.shaping.language import harfbuzz_language, language_index
from text_itemizer.shaping.reorder import reorder_visual, visual_runs
from text_itemizer.shaping.scripts import (
    MAX_SCRIPTS,
    harfbuzz_script,
    script_extensions,
    script_interval,
)

__all__ = [
    "BidiContext",
    "LogicalRun",
    "get_thread_context",
    "itemize_text",
    "reorder_visual",
    "visual_runs",
    "Direction",
    "TextRun",
    "TextRuns",
    "script_extensions",
    "script_interval",
    "harfbuzz_script",
    "MAX_SCRIPTS",
    "harfbuzz_language",
    "language_index",
    "shape_run",
    "shape_text",
    "create_hb_font",
    "ShapedGlyph",
    "ShapingResult",
]
