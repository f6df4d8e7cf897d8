"""Visual reordering of itemized runs.

The line direction is taken from the first run. Stretches of runs running
against it are reversed among themselves, and an RTL line is then reversed
as a whole. This covers single-level embeddings; deeper nesting is not
resolved the way full UAX #9 would.
"""

from __future__ import annotations

from text_itemizer.shaping.itemizer import Direction, TextRun, TextRuns


def reorder_visual(runs: TextRuns | list[TextRun]) -> None:
    """Reorder runs from logical to visual order, in place.

    Only the order of runs changes, never their content. The transform is
    one-way: applying it to already visual runs does not restore logical
    order.
    """
    items = runs.runs if isinstance(runs, TextRuns) else runs
    if not items:
        return

    line_direction = items[0].direction
    i, count = 0, len(items)
    while i < count:
        if items[i].direction == line_direction:
            i += 1
            continue
        start = i
        while i < count and items[i].direction != line_direction:
            i += 1
        items[start:i] = items[start:i][::-1]

    if line_direction is not Direction.LTR:
        items.reverse()


def visual_runs(runs: TextRuns | list[TextRun]) -> list[TextRun]:
    """Return the runs in visual order without modifying ``runs``."""
    items = list(runs.runs if isinstance(runs, TextRuns) else runs)
    reorder_visual(items)
    return items
