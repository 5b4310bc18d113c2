from __future__ import annotations

import re
from typing import List, Optional

from core.lib.logger import get_logger

REDACTED_MARKER = "[REDACTED]"

# Two or more ALL-CAPS tokens; labels around them match in any case.
_CAPS_NAME = r"([A-Z][A-Z'-]+(?:\s+[A-Z][A-Z'-]+)+)"

LABELED_PATTERNS = tuple(
    re.compile(r"(?<![A-Za-z])(?i:" + label + r")[:\s]+" + _CAPS_NAME)
    for label in (r"PATIENT\s*NAME", r"PT", r"NAME", r"PATIENT")
)

# Words that never start or end a patient name.
STOPWORDS = frozenset(
    {
        "DR", "DOB", "OB", "NOT", "PATIENT", "PT", "NAME", "PHONE", "CALL", "BACK",
        "CALLBACK", "MSG", "MESSAGE", "URGENT", "ROUTINE", "EMERGENT", "POSTPARTUM",
        "CONCERNS", "CONCERN", "FOR", "COMPLAINT", "CHIEF", "STATUS", "PREGNANT",
        "WKS", "WEEKS", "GA", "GESTATION", "THE", "AND", "WITH", "HAS", "HAVING",
        "BREAST", "PAIN", "SEVERE", "FEVER", "BLEEDING", "LABOR", "REDACTED",
    }
)

_LABEL_WORDS_RE = re.compile(r"PATIENT\s*NAME|PATIENT", re.I)
_GENERIC_NAME_RE = re.compile(r"(?=\b([A-Z][a-z]+)\s+([A-Z][a-z]+)(?:\s+([A-Z][a-z]+))?\b)")


class PatientNameService:
    """Find the patient's name in a normalized triage message.

    Three strategies, first hit wins:

    1. an explicit label (``PATIENT NAME:``, ``PT:``, ``NAME:``, ``PATIENT``)
       followed by ALL-CAPS words;
    2. ALL-CAPS words right after ``DR <doctor>``, ending before a phone
       number, a ``DOB`` label, a double comma or the end of the text;
    3. two or three Capitalized words that are not triage vocabulary.

    The resolver always reads the whole normalized message, not the residual
    left by the field stages.
    """

    def __init__(self) -> None:
        self.logger = get_logger("patient_name")

    def resolve(self, text: str, doctor: Optional[str] = None) -> Optional[str]:
        name = self._labeled(text)
        strategy = "labeled"
        if name is None and doctor:
            name = self._after_doctor(text, doctor)
            strategy = "after_doctor"
        if name is None:
            name = self._inferred(text)
            strategy = "inferred"
        if name is None:
            return None
        self.logger.debug("patient name: strategy=%s", strategy)
        return format_patient_name(name)

    # -------- strategies --------
    def _labeled(self, text: str) -> Optional[str]:
        for pattern in LABELED_PATTERNS:
            m = pattern.search(text)
            if not m:
                continue
            name = m.group(1)
            if "REDACTED" in name.upper():
                return name
            name = _trim_trailing_stopwords(name)
            if len(name.split()) >= 2:
                return name
        return None

    def _after_doctor(self, text: str, doctor: str) -> Optional[str]:
        prefix = r"(?i:DR\.?\s+" + re.escape(doctor.upper()) + r")"
        patterns = (
            re.compile(prefix + r"\s+" + _CAPS_NAME + r"(?=\s*\(?\d{3}|\s*(?i:DOB)|\s*,\s*,|$)"),
            re.compile(prefix + r",?\s*" + _CAPS_NAME),
        )
        for pattern in patterns:
            m = pattern.search(text)
            if not m:
                continue
            name = _LABEL_WORDS_RE.sub("", m.group(1))
            name = name.strip(" ,.")
            if name:
                return name
        return None

    def _inferred(self, text: str) -> Optional[str]:
        for m in _GENERIC_NAME_RE.finditer(text):
            first, second, third = m.group(1), m.group(2), m.group(3)
            if first.upper() in STOPWORDS:
                continue
            if third and second.upper() not in STOPWORDS and third.upper() not in STOPWORDS:
                return f"{first} {second} {third}"
            if second.upper() not in STOPWORDS:
                return f"{first} {second}"
        return None


def _trim_trailing_stopwords(name: str) -> str:
    words: List[str] = name.split()
    while words and words[-1].upper() in STOPWORDS:
        words.pop()
    return " ".join(words)


def format_patient_name(name: str) -> str:
    cleaned = name.strip(" ,.")
    if "REDACTED" in cleaned.upper():
        return REDACTED_MARKER
    # JANE DOE -> Jane Doe
    return " ".join(w[:1].upper() + w[1:].lower() for w in cleaned.split())
