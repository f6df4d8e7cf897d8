"""HarfBuzz shaping of itemized runs.

Runs are shaped one at a time against the whole text buffer, so HarfBuzz
sees the surrounding context (joining, kerning across run edges) while only
producing glyphs for the run itself. Fonts are scaled in 16.16 fixed point:
positions come back as pixels multiplied by 65536.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import uharfbuzz as hb
from fontTools.ttLib import TTFont, TTLibError

from text_itemizer.exceptions import ShapingError
from text_itemizer.shaping.itemizer import Direction, TextRun, TextRuns, itemize_text
from text_itemizer.shaping.language import harfbuzz_language, language_index
from text_itemizer.shaping.reorder import reorder_visual

logger = logging.getLogger(__name__)

HB_UNIT_ONE = 1 << 16


def float_to_harfbuzz_units(value: float) -> int:
    return int(value * HB_UNIT_ONE)


def harfbuzz_units_to_float(value: int) -> float:
    return value / HB_UNIT_ONE


@dataclass(frozen=True)
class ShapedGlyph:
    """One positioned glyph, in pixels."""

    glyph_id: int
    cluster: int
    x_advance: float
    y_advance: float
    x_offset: float
    y_offset: float


@dataclass
class ShapingResult:
    run: TextRun
    glyphs: list[ShapedGlyph] = field(default_factory=list)
    width: float = 0.0

    @property
    def missing_glyph_count(self) -> int:
        return sum(1 for g in self.glyphs if g.glyph_id == 0)


def create_hb_font(font_path: Path | str, face_index: int = 0, pixel_size: float = 16.0) -> hb.Font:
    """Load a font file into a HarfBuzz font scaled to ``pixel_size``.

    Raises:
        ShapingError: the file is missing or is not a usable font.
    """
    font_path = Path(font_path)
    try:
        font_blob = font_path.read_bytes()
        # Validate the face up front; HarfBuzz silently accepts garbage.
        TTFont(font_path, fontNumber=face_index, lazy=True).close()
    except (OSError, TTLibError) as e:
        raise ShapingError(f"Cannot load font {font_path}: {e}", str(font_path)) from e

    hb_face = hb.Face(hb.Blob(font_blob), face_index)
    hb_font = hb.Font(hb_face)
    scale = float_to_harfbuzz_units(pixel_size)
    hb_font.scale = (scale, scale)
    return hb_font


def _resolve_language(language: int | str | None) -> str | None:
    if language is None:
        return None
    if isinstance(language, str):
        language = language_index(language)
    return harfbuzz_language(language)


def shape_run(
    hb_font: hb.Font,
    runs: TextRuns,
    run: TextRun,
    language: int | str | None = None,
) -> ShapingResult:
    """Shape a single run of ``runs`` with ``hb_font``."""
    offset, length = runs.codepoint_range(run)
    buf = hb.Buffer()
    buf.add_str(runs.text, offset, length)
    if run.direction is Direction.INVALID:
        buf.guess_segment_properties()
    else:
        buf.direction = run.direction.value
        buf.script = run.script
    hb_language = _resolve_language(language)
    if hb_language:
        buf.language = hb_language

    hb.shape(hb_font, buf)

    result = ShapingResult(run=run)
    for info, pos in zip(buf.glyph_infos, buf.glyph_positions):
        glyph = ShapedGlyph(
            glyph_id=info.codepoint,
            cluster=info.cluster,
            x_advance=harfbuzz_units_to_float(pos.x_advance),
            y_advance=harfbuzz_units_to_float(pos.y_advance),
            x_offset=harfbuzz_units_to_float(pos.x_offset),
            y_offset=harfbuzz_units_to_float(pos.y_offset),
        )
        result.glyphs.append(glyph)
        result.width += glyph.x_advance
    if result.missing_glyph_count:
        logger.debug("%d missing glyphs in run %s", result.missing_glyph_count, run)
    return result


def shape_text(
    hb_font: hb.Font,
    text: str,
    language: int | str | None = None,
    visual: bool = True,
) -> list[ShapingResult]:
    """Itemize ``text``, optionally reorder it visually, and shape every run."""
    runs = itemize_text(text)
    if visual:
        reorder_visual(runs)
    return [shape_run(hb_font, runs, run, language) for run in runs]
