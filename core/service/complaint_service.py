from __future__ import annotations

import re
from typing import Optional, Tuple

from core.service.text_normalizer import collapse_whitespace, normalize_text

BOILERPLATE_RE = re.compile(r"CONCERNS FOR|CONCERN FOR|PATIENT NAME REDACTED", re.I)

# Concatenations and misspellings answering services produce often enough.
CORRECTIONS: Tuple[Tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(wrong, re.I), right)
    for wrong, right in (
        (r"MASTITIST", "mastitis"),
        (r"SEVEREPAIN", "severe pain"),
        (r"CHESTPAIN", "chest pain"),
        (r"ABDPAIN", "abdominal pain"),
        (r"HEADACH\b", "headache"),
        (r"\bNAUSEUS\b", "nauseous"),
    )
)

_COMMA_RE = re.compile(r"\s*,\s*")
_REPEATED_COMMA_RE = re.compile(r"(?:,\s*){2,}")
_EDGE_PUNCT = " ,-"
# Leftover terminators of removed fields; only stripped from the front.
_LEADING_PUNCT = _EDGE_PUNCT + ".;:"


def sentence_case(text: str) -> str:
    return text[:1].upper() + text[1:].lower()


def cleanup_complaint(text: str) -> str:
    complaint = BOILERPLATE_RE.sub(" ", text)
    complaint = _COMMA_RE.sub(", ", complaint)
    complaint = _REPEATED_COMMA_RE.sub(", ", complaint)
    complaint = collapse_whitespace(complaint)
    for pattern, right in CORRECTIONS:
        complaint = pattern.sub(right, complaint)
    complaint = complaint.lstrip(_LEADING_PUNCT).rstrip(_EDGE_PUNCT)
    return sentence_case(complaint) if complaint else ""


def finalize_complaint(residual: str, raw_message: str) -> Optional[str]:
    """Chief complaint from what the field stages left over.

    Never returns an empty complaint for a message with visible content: when
    cleanup removes everything, the whole raw message is used instead.
    """
    complaint = cleanup_complaint(residual)
    if complaint:
        return complaint
    if not raw_message.strip():
        return None
    whole = normalize_text(raw_message)
    if whole:
        return sentence_case(whole)
    return raw_message.strip()
