"""Glyph naming convention shared by every component.

Glyph images are named after the character they draw:

- ``upper_A`` .. ``upper_Z`` and ``lower_a`` .. ``lower_z`` for letters
- ``0`` .. ``9`` for digits
- a mnemonic from SYMBOL_CODEPOINTS for punctuation and the space

SYMBOL_CODEPOINTS and EXPECTED_GLYPHS are the single source of truth for the
resolver, the build script and the inventory report.
"""

import string
from collections.abc import Iterable
from types import MappingProxyType

import structlog

logger = structlog.get_logger("rasterfont.naming")

SPACE_GLYPH = "space"
UPPER_PREFIX = "upper_"
LOWER_PREFIX = "lower_"

SYMBOL_CODEPOINTS: MappingProxyType[str, int] = MappingProxyType(
    {
        "space": 32,
        "exclamation": 33,
        "questionmark": 63,
        "period": 46,
        "comma": 44,
        "colon": 58,
        "semicolon": 59,
        "hyphen": 45,
        "plus": 43,
        "equal": 61,
        "at": 64,
        "hash": 35,
        "dollar": 36,
        "percent": 37,
        "caret": 94,
        "ampersand": 38,
        "asterisk": 42,
        "leftparenthesis": 40,
        "rightparenthesis": 41,
        "underscore": 95,
        "backtick": 96,
        "tilde": 126,
        "leftbracket": 91,
        "rightbracket": 93,
        "leftbrace": 123,
        "rightbrace": 125,
        "backslash": 92,
        "forwardslash": 47,
        "verticalbar": 124,
        "lessthan": 60,
        "greaterthan": 62,
        "singlequote": 39,
        "doublequote": 34,
    }
)

EXPECTED_GLYPHS: tuple[str, ...] = (
    *(f"{UPPER_PREFIX}{c}" for c in string.ascii_uppercase),
    *(f"{LOWER_PREFIX}{c}" for c in string.ascii_lowercase),
    *string.digits,
    *SYMBOL_CODEPOINTS,
)

_CANONICAL = {name.lower(): name for name in EXPECTED_GLYPHS}


def canonical_name(name: str) -> str | None:
    """Match a file base name against EXPECTED_GLYPHS, ignoring case.

    Returns:
        The expected spelling (e.g. "upper_A" for "UPPER_a"), or None
    """
    return _CANONICAL.get(name.lower())


def resolve_codepoint(name: str) -> int | None:
    """Map a glyph base name to its Unicode code point.

    Args:
        name: Glyph base name without extension

    Returns:
        Code point, or None if the name follows no known convention
    """
    lowered = name.lower()

    if lowered.startswith(UPPER_PREFIX) and len(name) == len(UPPER_PREFIX) + 1:
        return ord(name[-1].upper())
    if lowered.startswith(LOWER_PREFIX) and len(name) == len(LOWER_PREFIX) + 1:
        return ord(name[-1].lower())
    if len(name) == 1 and name in string.digits:
        return ord(name)
    return SYMBOL_CODEPOINTS.get(lowered)


def describe_codepoint(codepoint: int) -> str:
    """Printable form of a code point for log and progress messages."""
    if 32 <= codepoint < 127:
        return chr(codepoint)
    return hex(codepoint)


class GlyphNameResolver:
    """Resolves glyph names to code points, warning once per unknown name."""

    def __init__(self) -> None:
        self._unresolved: list[str] = []

    def resolve(self, name: str) -> int | None:
        """Resolve a name; unknown names are logged and recorded, never raised."""
        codepoint = resolve_codepoint(name)
        if codepoint is None and name not in self._unresolved:
            self._unresolved.append(name)
            logger.warning("Skipping glyph with unrecognized name", glyph=name)
        return codepoint

    def resolve_all(self, names: Iterable[str]) -> dict[str, int]:
        """Resolve many names, dropping the unresolvable ones."""
        resolved: dict[str, int] = {}
        for name in names:
            codepoint = self.resolve(name)
            if codepoint is not None:
                resolved[name] = codepoint
        return resolved

    @property
    def unresolved(self) -> list[str]:
        """Names that could not be resolved, in first-seen order."""
        return list(self._unresolved)
