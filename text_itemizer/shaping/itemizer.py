"""Itemization of single-line text into bidi/script runs."""

from __future__ import annotations

import logging
from array import array
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from text_itemizer.exceptions import BidiAnalysisError, InvalidTextError, InvariantError
from text_itemizer.shaping.bidi import BidiContext, get_thread_context
from text_itemizer.shaping.scripts import SCRIPT_UNKNOWN, harfbuzz_script, script_interval
from text_itemizer.shaping.utf16 import from_utf16, iter_code_points, to_utf16

logger = logging.getLogger(__name__)

LINE_BREAKS = "\r\n"


class Direction(Enum):
    """Run direction, valued with the strings HarfBuzz buffers accept."""

    LTR = "ltr"
    RTL = "rtl"
    INVALID = "invalid"

    @classmethod
    def from_level(cls, level: int) -> Direction:
        return cls.RTL if level & 1 else cls.LTR


@dataclass(frozen=True)
class TextRun:
    """A span of the owning TextRuns buffer, in UTF-16 code units."""

    start: int
    length: int
    script: str
    direction: Direction

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_rtl(self) -> bool:
        return self.direction is Direction.RTL


@dataclass
class TextRuns:
    """Owns the UTF-16 buffer of a text and the runs that index into it."""

    text: str
    buffer: array = field(repr=False)
    runs: list[TextRun] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> TextRuns:
        return cls(text=text, buffer=to_utf16(text))

    @property
    def length(self) -> int:
        return len(self.buffer)

    @property
    def degraded(self) -> bool:
        """True when bidi analysis failed and the runs are a single sentinel."""
        return any(run.direction is Direction.INVALID for run in self.runs)

    def run_text(self, run: TextRun) -> str:
        return from_utf16(self.buffer, run.start, run.end)

    def codepoint_range(self, run: TextRun) -> tuple[int, int]:
        """Return ``(offset, length)`` of ``run`` in code points instead of units."""
        before = sum(1 for _ in iter_code_points(self.buffer, 0, run.start))
        inside = sum(1 for _ in iter_code_points(self.buffer, run.start, run.end))
        return before, inside

    def __iter__(self) -> Iterator[TextRun]:
        return iter(self.runs)

    def __len__(self) -> int:
        return len(self.runs)


def _check_text(text: str | bytes) -> str:
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidTextError(f"Text is not valid UTF-8: {e}") from e
    if not text:
        raise InvalidTextError("Shaping of empty strings is not supported")
    if any(ch in text for ch in LINE_BREAKS):
        raise InvalidTextError(f"Shaping with line breaks is not supported: {text!r}")
    return text


def _check_tiling(runs: TextRuns) -> None:
    cursor = 0
    for run in runs.runs:
        if run.start != cursor or run.length <= 0:
            raise InvariantError(f"Run {run} does not continue at offset {cursor}")
        cursor = run.end
    if cursor != runs.length:
        raise InvariantError(f"Runs cover {cursor} of {runs.length} code units")


def itemize_text(text: str | bytes, context: BidiContext | None = None) -> TextRuns:
    """Split one line of text into runs of a single bidi level and script.

    Each logical (same-level) run from the bidi analysis is subdivided into
    script-homogeneous runs, so that ``bidi_start <= script_start <
    script_end <= bidi_end`` holds for every emitted run. Runs are returned
    in logical order and tile the whole buffer.

    Args:
        text: A non-empty line without ``\\r`` or ``\\n``; bytes are decoded
            as UTF-8.
        context: Bidi engine state to reuse; defaults to the calling thread's.

    Raises:
        InvalidTextError: empty input or embedded line breaks.
    """
    text = _check_text(text)
    if context is None:
        context = get_thread_context()

    result = TextRuns.from_text(text)
    try:
        logical_runs = context.logical_runs(text)
    except BidiAnalysisError as e:
        logger.error("Itemization degraded for %r: %s", text, e)
        result.runs.append(TextRun(0, result.length, SCRIPT_UNKNOWN, Direction.INVALID))
        return result

    for bidi_start, bidi_end, level in logical_runs:
        direction = Direction.from_level(level)
        script_start = bidi_start
        while script_start < bidi_end:
            length, script = script_interval(result.buffer, script_start, bidi_end - script_start)
            if length <= 0:
                raise InvariantError(f"Empty script run at offset {script_start}")
            if script is None:
                logger.debug("No script for code point at offset %d", script_start)
            result.runs.append(TextRun(script_start, length, harfbuzz_script(script), direction))
            script_start += length

    _check_tiling(result)
    return result
