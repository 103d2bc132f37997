"""Cleaning of raw drawing labels before they are grouped into rows."""

from __future__ import annotations

import re
from collections.abc import Iterable

from harness_extract.domain import TextToken

# --- MTEXT inline formatting ------------------------------------------------
# \P line break, \H height, \W width, \S stack, \T tracking, \L/\O/\U toggles,
# \A alignment, \C colour, \F font. Each run ends at the next ';' (or the end).
_MT_CODE_RE = re.compile(r"\\(P|H|W|S|T|L|O|U|A|C|F)[^;]*;?")
_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")

# Drawing frame, BOM legend and terminal/seal part callouts.
NOISE_FRAGMENTS: frozenset[str] = frozenset(
    {
        "SEAL",
        "CLIP",
        "AMP",
        "YAZAKI",
        "KET",
        "KUM",
        "SWS",
        "NOTE",
        "SPECIFICATION",
        "ASSY",
        "DESCRIPTION",
    }
)
NOISE_PREFIX = "PIN"
NOISE_SUFFIX = ":"


def clean_text(raw: str | None) -> str:
    """Strip MTEXT control codes and line breaks; ``""`` means discard."""

    if raw is None or not raw.strip():
        return ""
    cleaned = raw
    while True:
        stripped = _MT_CODE_RE.sub("", cleaned)
        if stripped == cleaned:
            break
        cleaned = stripped
    cleaned = _LINE_BREAK_RE.sub(" ", cleaned)
    return cleaned.strip()


def is_noise(value: str) -> bool:
    upper = value.upper()
    if upper.startswith(NOISE_PREFIX) or upper.endswith(NOISE_SUFFIX):
        return True
    return any(fragment in upper for fragment in NOISE_FRAGMENTS)


def normalize_token(raw: str | None, x: float, y: float) -> TextToken | None:
    """Return a cleaned token, or ``None`` when the label carries no wire data."""

    value = clean_text(raw)
    if not value or is_noise(value):
        return None
    return TextToken(value, float(x), float(y))


def normalize_tokens(items: Iterable[tuple[str | None, float, float]]) -> list[TextToken]:
    tokens: list[TextToken] = []
    for raw, x, y in items:
        token = normalize_token(raw, x, y)
        if token is not None:
            tokens.append(token)
    return tokens


__all__ = [
    "NOISE_FRAGMENTS",
    "clean_text",
    "is_noise",
    "normalize_token",
    "normalize_tokens",
]
