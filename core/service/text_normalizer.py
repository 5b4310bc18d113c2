from __future__ import annotations

import re

# Section marker some answering services prepend to the callback number.
SECTION_MARKER = "§"

_DASH_RUN_RE = re.compile(r"-{2,}")
_COMMA_RUN_RE = re.compile(r",{2,}")
_WS_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Strip noise markers and collapse whitespace.

    Runs of dashes become a space and runs of commas a single comma, so
    applying this twice gives the same result as applying it once.
    """
    normalized = text.replace(SECTION_MARKER, "")
    normalized = _DASH_RUN_RE.sub(" ", normalized)
    normalized = _COMMA_RUN_RE.sub(",", normalized)
    normalized = _WS_RE.sub(" ", normalized)
    return normalized.strip()


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def remove_span(text: str, start: int, end: int) -> str:
    """Cut ``text[start:end]`` out and re-collapse the surrounding whitespace."""
    return collapse_whitespace(text[:start] + text[end:])
