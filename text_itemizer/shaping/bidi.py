"""BiDi paragraph analysis.

Wraps the stages of python-bidi's reference implementation up to resolved
embedding levels (no reordering, no mirroring) and reports maximal runs of
one level in UTF-16 offsets. The paragraph level is auto-detected from the
first strong character, defaulting to LTR.

The engine keeps per-paragraph storage. A ``BidiContext`` owns one such
storage and resets it on every call, so each worker thread should hold its
own context; ``get_thread_context()`` hands out one per thread.
"""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple

from bidi.algorithm import (
    explicit_embed_and_overrides,
    get_base_level,
    get_embedding_levels,
    get_empty_storage,
    resolve_implicit_levels,
    resolve_neutral_types,
    resolve_weak_types,
)

from text_itemizer.exceptions import BidiAnalysisError, InvariantError
from text_itemizer.shaping.utf16 import utf16_width

logger = logging.getLogger(__name__)

# The staged engine predates isolates (UAX#9 6.3) and rejects them in rule
# I1; they are resolved as other neutrals instead.
ISOLATE_TYPES = frozenset({"LRI", "RLI", "FSI", "PDI"})


class LogicalRun(NamedTuple):
    """A maximal span ``[start, end)`` of UTF-16 units at one embedding level."""

    start: int
    end: int
    level: int

    @property
    def is_rtl(self) -> bool:
        return bool(self.level & 1)


class BidiContext:
    """Reusable bidi engine state for a single worker thread.

    Not safe for concurrent use: create one per thread, or call
    ``get_thread_context()``.
    """

    def __init__(self) -> None:
        self._storage = get_empty_storage()
        self.base_level: int | None = None
        self.paragraphs = 0

    def reset(self) -> None:
        """Clear per-paragraph state while keeping the storage object."""
        storage = self._storage
        storage["base_level"] = None
        storage["base_dir"] = None
        storage["chars"].clear()
        storage["runs"].clear()
        self.base_level = None

    def _resolve_levels(self, text: str) -> list[tuple[str, int]]:
        storage = self._storage
        base_level = get_base_level(text, False)
        storage["base_level"] = base_level
        storage["base_dir"] = ("L", "R")[base_level]
        self.base_level = base_level

        get_embedding_levels(text, storage, False, False)
        for ch in storage["chars"]:
            if ch["type"] in ISOLATE_TYPES:
                ch["type"] = "ON"
        chars = list(storage["chars"])

        explicit_embed_and_overrides(storage, False)
        resolve_weak_types(storage, False)
        resolve_neutral_types(storage, False)
        resolve_implicit_levels(storage, False)

        # Rule X9 drops embedding controls and boundary neutrals from the
        # engine storage; they take the level of the preceding character.
        retained = {id(ch) for ch in storage["chars"]}
        resolved = []
        level = base_level
        for ch in chars:
            if id(ch) in retained:
                level = ch["level"]
            resolved.append((ch["ch"], level))
        return resolved

    def logical_runs(self, text: str) -> list[LogicalRun]:
        """Split ``text`` into maximal same-level runs.

        Raises:
            BidiAnalysisError: the engine failed on this paragraph.
        """
        self.reset()
        self.paragraphs += 1
        try:
            resolved = self._resolve_levels(text)
        except Exception as e:
            raise BidiAnalysisError(f"BiDi analysis failed: {e}", text) from e

        runs: list[LogicalRun] = []
        run_start = offset = 0
        run_level = None
        for char, level in resolved:
            if run_level is not None and level != run_level:
                runs.append(LogicalRun(run_start, offset, run_level))
                run_start = offset
            run_level = level
            offset += utf16_width(char)
        if run_level is not None:
            runs.append(LogicalRun(run_start, offset, run_level))

        for run in runs:
            if run.start >= run.end:
                raise InvariantError(f"Empty logical run {run}")
        logger.debug("Paragraph level %s, %d logical runs", self.base_level, len(runs))
        return runs


_thread_state = threading.local()


def get_thread_context() -> BidiContext:
    """Return this thread's BidiContext, creating it on first use."""
    context = getattr(_thread_state, "context", None)
    if context is None:
        context = BidiContext()
        _thread_state.context = context
    return context
