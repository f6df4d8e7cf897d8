"""Language hints for shaping.

Map labels carry names in many languages, each addressed by a small integer
index into ``LANGUAGE_CODES``. The shaping engine wants a BCP-47 tag, so the
index is translated here. Unknown indexes and pseudo languages map to
``None``, which means "use the engine default language".
"""

from __future__ import annotations

import re

DEFAULT_LANGUAGE_INDEX = 0
UNSUPPORTED_LANGUAGE_INDEX = -1

# Index -> code. The order is part of the stored data format and must not change.
LANGUAGE_CODES: tuple[str, ...] = (
    "default", "en", "ja", "fr", "ko_rm", "ar", "de", "int_name",
    "ru", "sv", "zh", "fi", "be", "ka", "ko", "he",
    "nl", "ga", "ja_rm", "el", "it", "es", "zh_pinyin", "th",
    "cy", "sr", "uk", "ca", "hu", "hsb", "eu", "fa",
    "br", "pl", "hy", "kn", "sl", "ro", "sq", "am",
    "fy", "cs", "gd", "sk", "af", "ja_kana", "lb", "pt",
    "hr", "fur", "vi", "tr", "bg", "eo", "lt", "la",
    "kk", "gsw", "et", "ku", "mn", "mk", "lv", "hi",
)

# Codes that name a transliteration or a label slot, not a language.
_PSEUDO_LANGUAGES = frozenset({"default", "int_name", "ko_rm", "ja_rm", "zh_pinyin", "ja_kana"})

_BCP47_RE = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,8})*$")

_INDEX_BY_CODE = {code: i for i, code in enumerate(LANGUAGE_CODES)}


def language_index(code: str) -> int:
    """Return the table index of ``code``, or -1 when it is not in the table."""
    return _INDEX_BY_CODE.get(code, UNSUPPORTED_LANGUAGE_INDEX)


def language_code(index: int) -> str | None:
    if 0 <= index < len(LANGUAGE_CODES):
        return LANGUAGE_CODES[index]
    return None


def harfbuzz_language(index: int) -> str | None:
    """Translate a language index into a HarfBuzz language tag.

    Returns None for anything HarfBuzz cannot use as a real language, in which
    case the caller leaves the buffer language unset.
    """
    code = language_code(index)
    if code is None or code in _PSEUDO_LANGUAGES:
        return None
    tag = code.replace("_", "-").lower()
    if not _BCP47_RE.match(tag):
        return None
    return tag
