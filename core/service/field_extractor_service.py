from __future__ import annotations

from datetime import date
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from core.domain.ports.Field_extractor_provider import Field_extractor_provider
from core.domain.schemas.result_data import ParsedTriageFields
from core.domain.schemas.stage_outcome import StageOutcome, outcome_value
from core.lib.logger import get_logger
from core.service.complaint_service import finalize_complaint
from core.service.field_rules import (
    extract_date_of_birth,
    extract_doctor,
    extract_ob_status,
    extract_phone,
)
from core.service.patient_name_service import PatientNameService
from core.service.text_normalizer import normalize_text

Stage = Callable[[str], StageOutcome]


class FieldExtractorService(Field_extractor_provider):
    """Rule-based extractor for answering-service triage messages.

    Key points:
    - The message is normalized once; doctor, phone, DOB and OB status then
      run in that fixed order, each on the residual text of the previous one.
    - The patient name is resolved beside the chain, from the whole
      normalized message plus the doctor found by the chain.
    - Whatever text is left becomes the chief complaint.

    Holds no per-call state, so one instance can serve concurrent callers.
    """

    def __init__(self, today: Optional[date] = None) -> None:
        self.logger = get_logger("extract")
        self.names = PatientNameService()
        self.stages: Tuple[Tuple[str, Stage], ...] = (
            ("attending_doctor", extract_doctor),
            ("callback_number", extract_phone),
            ("date_of_birth", partial(extract_date_of_birth, today=today)),
            ("ob_status", extract_ob_status),
        )

    def extract(self, message: str) -> ParsedTriageFields:
        text = normalize_text(message)
        values, residual, outcomes = self.run_stages(text)

        patient_name = self.names.resolve(text, doctor=values.get("attending_doctor"))
        complaint = finalize_complaint(residual, message)

        result = ParsedTriageFields(
            patient_name=patient_name,
            chief_complaint=complaint,
            **values,
        )
        self.logger.debug(
            "extracted: %s",
            ", ".join(f"{name}={type(o).__name__}" for name, o in outcomes),
        )
        return result

    def run_stages(self, text: str) -> Tuple[Dict[str, object], str, List[Tuple[str, StageOutcome]]]:
        """Thread ``text`` through the stages; return values, residual and outcomes."""
        values: Dict[str, object] = {}
        outcomes: List[Tuple[str, StageOutcome]] = []
        residual = text
        for name, stage in self.stages:
            outcome = stage(residual)
            outcomes.append((name, outcome))
            value = outcome_value(outcome)
            if value is not None:
                values[name] = value
            residual = outcome.remainder
        return values, residual, outcomes
