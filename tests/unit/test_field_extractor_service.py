# ============================================================================
# FILE: tests/unit/test_field_extractor_service.py
# ============================================================================
"""
End-to-end tests for the rule-based extraction chain
"""

from datetime import date

import pytest
from pydantic import ValidationError

from core.domain.schemas.stage_outcome import MatchedButInvalid, NoMatch
from core.service.complaint_service import sentence_case
from core.service.field_extractor_service import FieldExtractorService
from core.service.text_normalizer import normalize_text


@pytest.fixture
def extractor():
    return FieldExtractorService()


def test_laberge_message(extractor, laberge_message):
    """Full answering-service message with every field present"""
    result = extractor.extract(laberge_message)

    assert result.attending_doctor == "Laberge"
    assert result.patient_name == "[REDACTED]"
    assert result.callback_number == "(713) 854-9439"
    assert result.date_of_birth == date(1993, 6, 30)
    assert result.ob_status == "Postpartum 1 weeks"

    complaint = result.chief_complaint.lower()
    assert "mastitis" in complaint
    assert "severe pain" in complaint
    assert "concerns for" not in complaint


@pytest.mark.parametrize(
    "message",
    [
        "feeling dizzy since this morning,  wants call back",
        "Feeling dizzy since this morning.",
        "wants a refill; pharmacy closes at 5:",
    ],
)
def test_message_with_no_structured_fields(extractor, message):
    result = extractor.extract(message)

    assert result.attending_doctor is None
    assert result.patient_name is None
    assert result.callback_number is None
    assert result.date_of_birth is None
    assert result.ob_status is None
    assert result.chief_complaint == sentence_case(normalize_text(message))


def test_generic_name_inference(extractor):
    result = extractor.extract("Patient John Smith called about refill")
    assert result.patient_name == "John Smith"


def test_doctor_name_and_phone_positional(extractor):
    result = extractor.extract("DR. NGUYEN JANE DOE (713) 854-9439 DOB 1/2/85 32WKS GA CRAMPING")

    assert result.attending_doctor == "Nguyen"
    assert result.patient_name == "Jane Doe"
    assert result.callback_number == "(713) 854-9439"
    assert result.date_of_birth == date(1985, 1, 2)
    assert result.ob_status == "32 weeks GA"
    assert "cramping" in result.chief_complaint.lower()


def test_invalid_dob_leaves_text_for_complaint(extractor):
    result = extractor.extract("DR SMITH DOB 13/45/1990 HEADACH")
    assert result.date_of_birth is None
    assert "13/45/1990" in result.chief_complaint
    assert "headache" in result.chief_complaint


def test_stage_outcomes_are_reported(extractor):
    text = normalize_text("DR SMITH DOB 13/45/1990 fever")
    values, residual, outcomes = extractor.run_stages(text)

    names = [name for name, _ in outcomes]
    assert names == ["attending_doctor", "callback_number", "date_of_birth", "ob_status"]
    assert isinstance(dict(outcomes)["date_of_birth"], MatchedButInvalid)
    assert isinstance(dict(outcomes)["callback_number"], NoMatch)
    assert values == {"attending_doctor": "Smith"}
    assert residual == "DOB 13/45/1990 fever"


def test_today_is_injectable():
    extractor = FieldExtractorService(today=date(2000, 1, 1))
    assert extractor.extract("DOB 01/01/05 fever").date_of_birth is None


@pytest.mark.parametrize(
    "message",
    [
        "DR SMITH",
        "7138549439",
        "DOB:01/01/1990",
        "NOT OB",
        "CONCERNS FOR",
        "§",
        ",,--,,",
        "POST PARTUM 2 WKS",
        "DR LABERGE 713-854-9439 DOB:06/30/1993 OB",
    ],
)
def test_chief_complaint_never_empty(extractor, message):
    """Raw text with visible content is never silently discarded"""
    assert extractor.extract(message).chief_complaint


def test_empty_message(extractor):
    result = extractor.extract("")
    assert result.chief_complaint is None
    assert result.attending_doctor is None


def test_result_is_immutable(extractor, laberge_message):
    result = extractor.extract(laberge_message)
    with pytest.raises(ValidationError):
        result.attending_doctor = "Someone"
