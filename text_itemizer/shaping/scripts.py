"""Script extensions and script-homogeneous intervals.

Each code point has a Script property and a Script_Extensions (scx) property.
The implicit scripts Common (``Zyyy``) and Inherited (``Zinh``) mark code
points shared by many scripts, and scx narrows some of them down to the
scripts that actually borrow them (see Unicode TR24, table 7):

    Script       Script Extensions        Result
    Common       {Zyyy}                -> {Zyyy}
    Inherited    {Zinh}                -> {Zinh}
    Latin        {Latn}                -> {Latn}
    Common       {Hira Kana}           -> {Hira Kana}
    Devanagari   {Deva Dogr Kthi Mahj} -> {Deva Dogr Kthi Mahj}

Most code points have a single script; CJK punctuation typically has three or
four; a few rare ones go above twenty. Considering the whole set keeps
{Kana}, {Hira, Kana}, {Kana} in one run instead of three.
"""

from __future__ import annotations

import functools
import logging
from array import array

from fontTools import unicodedata as ft_unicodedata
from fontTools.unicodedata import Scripts

from text_itemizer.exceptions import InvariantError
from text_itemizer.shaping.utf16 import iter_code_points

logger = logging.getLogger(__name__)

# Upper bound on the scripts kept for one code point. Lookups reporting more
# are truncated to the first MAX_SCRIPTS entries.
MAX_SCRIPTS = 32

SCRIPT_COMMON = "Zyyy"
SCRIPT_INHERITED = "Zinh"
SCRIPT_UNKNOWN = "Zzzz"

ScriptSet = tuple[str, ...]


@functools.lru_cache(maxsize=None)
def _script_ranks() -> dict[str, int]:
    """Rank scripts by where they first appear in the code space."""
    ranks: dict[str, int] = {}
    for code in Scripts.VALUES:
        ranks.setdefault(code, len(ranks))
    return ranks


def _rank(code: str) -> tuple[int, str]:
    ranks = _script_ranks()
    return ranks.get(code, len(ranks)), code


@functools.lru_cache(maxsize=4096)
def script_extensions(codepoint: int) -> ScriptSet:
    """Return the Script_Extensions of ``codepoint`` as an ordered tuple.

    The order is stable: scripts are ranked by their first appearance in the
    Unicode code space, so Latin precedes Greek precedes Arabic and so on.
    Any lookup failure yields an empty tuple, which callers treat as a
    mandatory run boundary.
    """
    try:
        scripts = ft_unicodedata.script_extension(chr(codepoint))
    except Exception as e:
        logger.debug("Script lookup failed for %r: %s", codepoint, e)
        return ()
    return tuple(sorted(scripts, key=_rank)[:MAX_SCRIPTS])


def is_inherited(scripts: ScriptSet) -> bool:
    """True when the set is exactly {Inherited}: the code point adds no constraint."""
    return len(scripts) == 1 and scripts[0] == SCRIPT_INHERITED


def intersect_scripts(current: ScriptSet, codepoint: int) -> ScriptSet:
    """Narrow ``current`` to the scripts ``codepoint`` can also be used with.

    The result keeps the order of ``current`` and is always a subset of it.
    Inherited-only code points take their script from what precedes them and
    leave ``current`` untouched.
    """
    scripts = script_extensions(codepoint)
    if is_inherited(scripts):
        return current
    return tuple(code for code in current if code in scripts)


def script_interval(units: array, start: int, max_length: int) -> tuple[int, str | None]:
    """Find the longest run from ``start`` whose code points share a script.

    Scans at most ``max_length`` code units. Returns the run length in code
    units and the first script of the surviving set, or None if the first
    code point had no scripts at all. The code point that would empty the
    set is not part of the run.
    """
    if max_length <= 0:
        raise InvariantError(f"script_interval needs a positive length, got {max_length}")
    if start < 0 or start + max_length > len(units):
        raise InvariantError(
            f"script_interval range [{start}, {start + max_length}) outside buffer of {len(units)}"
        )

    code_points = iter_code_points(units, start, start + max_length)
    _, first = next(code_points)
    scripts = script_extensions(first)
    length = max_length

    for offset, codepoint in code_points:
        narrowed = intersect_scripts(scripts, codepoint)
        if not narrowed:
            length = offset - start
            break
        scripts = narrowed

    return length, (scripts[0] if scripts else None)


def harfbuzz_script(code: str | None) -> str:
    """Map an internal script code to a HarfBuzz script tag.

    HarfBuzz uses ISO 15924 tags, so known codes pass through unchanged.
    Anything unresolvable maps to ``Zzzz``.
    """
    if not code or ft_unicodedata.script_name(code, default=None) is None:
        return SCRIPT_UNKNOWN
    return code
