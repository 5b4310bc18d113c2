"""Pattern stages for the rule-based triage parser.

Every stage takes the current residual text and returns a stage outcome
(see ``core.domain.schemas.stage_outcome``). On ``Matched`` the matched span
is cut out of the remainder; otherwise the text is handed back unchanged.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Callable, Optional, Tuple

from core.domain.schemas.stage_outcome import (
    Matched,
    MatchedButInvalid,
    NoMatch,
    StageOutcome,
)
from core.lib.logger import get_logger
from core.service.date_disambiguator import DateRejected, disambiguate_date
from core.service.text_normalizer import remove_span

logger = get_logger("rules")

DOCTOR_RE = re.compile(r"^DR\.?\s+([A-Z][A-Z'-]+)", re.I)

# Priority order: the first pattern with any match wins.
PHONE_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"),
    re.compile(r"\d{3}[-.\s]\d{3}[-.\s]\d{4}"),
    re.compile(r"\d{10}"),
)

DOB_RE = re.compile(r"DOB:?\s*(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})", re.I)

POSTPARTUM_RE = re.compile(r"POST\s*PARTUM\s*(\d+)\s*(?:WEEKS?|WKS?)", re.I)
NOT_OB_RE = re.compile(r"NOT OB", re.I)
OB_RE = re.compile(r"\bOB\b", re.I)
GESTATION_RE = re.compile(r"(\d{1,2})\s*(?:WEEKS?|WKS?)\s*(?:GA|GESTATION)?", re.I)


def format_doctor_name(name: str) -> str:
    # LABERGE -> Laberge
    lowered = name.lower()
    return lowered[:1].upper() + lowered[1:]


def format_phone_number(raw: str) -> str:
    digits = re.sub(r"\D", "", raw)
    if len(digits) != 10:
        return raw
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def extract_doctor(text: str) -> StageOutcome:
    """Attending doctor, only when the message starts with ``DR``."""
    m = DOCTOR_RE.match(text)
    if not m:
        return NoMatch(text)
    name = format_doctor_name(m.group(1))
    remainder = text[m.end():].strip()
    logger.debug("doctor: matched span=%s", m.span())
    return Matched(name, m.span(), remainder)


def extract_phone(text: str) -> StageOutcome:
    for idx, pattern in enumerate(PHONE_PATTERNS, start=1):
        m = pattern.search(text)
        if not m:
            continue
        logger.debug("phone: pattern #%d matched span=%s", idx, m.span())
        return Matched(format_phone_number(m.group(0)), m.span(), remove_span(text, *m.span()))
    return NoMatch(text)


def extract_date_of_birth(text: str, today: Optional[date] = None) -> StageOutcome:
    m = DOB_RE.search(text)
    if not m:
        return NoMatch(text)
    resolved = disambiguate_date(m.group(1), today=today)
    if isinstance(resolved, DateRejected):
        logger.debug("dob: label matched but date rejected (%s)", resolved.reason)
        return MatchedButInvalid(resolved.reason, m.span(), text)
    return Matched(resolved, m.span(), remove_span(text, *m.span()))


def _postpartum(m: re.Match[str]) -> str:
    return f"Postpartum {m.group(1)} weeks"


def _gestation(m: re.Match[str]) -> str:
    return f"{m.group(1)} weeks GA"


# Postpartum wins over "NOT OB" even when both appear in one message.
OB_RULES: Tuple[Tuple[re.Pattern[str], Callable[[re.Match[str]], str]], ...] = (
    (POSTPARTUM_RE, _postpartum),
    (NOT_OB_RE, lambda m: "Not OB"),
    (OB_RE, lambda m: "OB"),
    (GESTATION_RE, _gestation),
)


def extract_ob_status(text: str) -> StageOutcome:
    for pattern, describe in OB_RULES:
        m = pattern.search(text)
        if m:
            return Matched(describe(m), m.span(), remove_span(text, *m.span()))
    return NoMatch(text)
