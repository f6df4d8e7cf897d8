"""UTF-16 code-unit buffers.

Runs address text by UTF-16 offsets, which is what shaping engines and most
platform text APIs expect. The buffer is an ``array("H")`` in native byte
order, built once per itemization.
"""

from __future__ import annotations

import sys
from array import array
from collections.abc import Iterator

UTF16_CODEC = "utf-16-le" if sys.byteorder == "little" else "utf-16-be"

_LEAD_MIN, _LEAD_MAX = 0xD800, 0xDBFF
_TRAIL_MIN, _TRAIL_MAX = 0xDC00, 0xDFFF


def to_utf16(text: str) -> array:
    """Encode ``text`` into a buffer of 16-bit code units."""
    return array("H", text.encode(UTF16_CODEC, "surrogatepass"))


def from_utf16(units: array, start: int = 0, end: int | None = None) -> str:
    return units[start:end].tobytes().decode(UTF16_CODEC, "surrogatepass")


def utf16_width(char: str) -> int:
    """Number of code units ``char`` occupies (2 for astral code points)."""
    return 2 if ord(char) > 0xFFFF else 1


def iter_code_points(units: array, start: int, end: int) -> Iterator[tuple[int, int]]:
    """Yield ``(offset, codepoint)`` pairs for ``units[start:end]``.

    Surrogate pairs are combined. A lone surrogate, or a pair cut by ``end``,
    is yielded as the bare surrogate value.
    """
    pos = start
    while pos < end:
        unit = units[pos]
        next_pos = pos + 1
        if (
            _LEAD_MIN <= unit <= _LEAD_MAX
            and next_pos < end
            and _TRAIL_MIN <= units[next_pos] <= _TRAIL_MAX
        ):
            codepoint = 0x10000 + ((unit - _LEAD_MIN) << 10) + (units[next_pos] - _TRAIL_MIN)
            next_pos += 1
        else:
            codepoint = unit
        yield pos, codepoint
        pos = next_pos
