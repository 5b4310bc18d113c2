from datetime import date
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .specialty import MedicalSpecialty, Priority


class ExtractionPath(str, Enum):
    MODEL = "model"
    RULES = "rules"


class SpecialtyFields(BaseModel):
    """Free-text fields only the model path fills, gated by specialty."""

    model_config = ConfigDict(frozen=True)

    gestational_age: Optional[str] = None  # OB/GYN, e.g. "32w4d"
    patient_age: Optional[str] = None  # Pediatrics, e.g. "18 months"
    safety_concerns: Optional[str] = None  # Psychiatry, e.g. "SI without plan"


class ParsedTriageFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    attending_doctor: Optional[str] = None  # surname only, "Laberge"
    patient_name: Optional[str] = None  # "Jane Doe" or "[REDACTED]"
    callback_number: Optional[str] = None  # "(713) 854-9439" when 10 digits
    date_of_birth: Optional[date] = None
    ob_status: Optional[str] = None
    chief_complaint: Optional[str] = None

    extended: SpecialtyFields = Field(default_factory=SpecialtyFields)


class MetaInfo(BaseModel):
    request_id: Optional[str] = None
    timings_ms: Dict[str, int] = Field(default_factory=dict)
    extraction_path: ExtractionPath = ExtractionPath.RULES
    specialty: MedicalSpecialty = MedicalSpecialty.OTHER
    fallback_reason: Optional[str] = None


class ResultData(BaseModel):
    meta: MetaInfo = Field(default_factory=MetaInfo)
    result: ParsedTriageFields = Field(default_factory=ParsedTriageFields)
    suggested_priority: Priority = Priority.ROUTINE
