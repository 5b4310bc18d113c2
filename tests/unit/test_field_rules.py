# ============================================================================
# FILE: tests/unit/test_field_rules.py
# ============================================================================
"""
Unit tests for the doctor, phone, DOB and OB status stages
"""

import re
from datetime import date

import pytest

from core.domain.schemas.stage_outcome import Matched, MatchedButInvalid, NoMatch, outcome_value
from core.service.field_rules import (
    extract_date_of_birth,
    extract_doctor,
    extract_ob_status,
    extract_phone,
    format_phone_number,
)


# ============================================================================
# DOCTOR
# ============================================================================

def test_doctor_at_start():
    outcome = extract_doctor("DR LABERGE PATIENT NAME REDACTED")
    assert isinstance(outcome, Matched)
    assert outcome.value == "Laberge"
    assert outcome.remainder == "PATIENT NAME REDACTED"


def test_doctor_with_period_and_lowercase():
    outcome = extract_doctor("Dr. o'neil called")
    assert outcome_value(outcome) == "O'neil"
    assert outcome.remainder == "called"


def test_doctor_must_be_at_start():
    """DR in the middle of the message is not the attending doctor"""
    text = "PATIENT DR SMITH CALLED"
    outcome = extract_doctor(text)
    assert isinstance(outcome, NoMatch)
    assert outcome.remainder == text


def test_doctor_requires_space_after_prefix():
    assert isinstance(extract_doctor("DRSMITH FEVER"), NoMatch)


# ============================================================================
# PHONE
# ============================================================================

def test_phone_dashed():
    outcome = extract_phone("NAME REDACTED. ,713-854-9439,DOB:06/30/1993")
    assert outcome_value(outcome) == "(713) 854-9439"
    assert outcome.remainder == "NAME REDACTED. ,,DOB:06/30/1993"


def test_phone_parenthesized():
    assert outcome_value(extract_phone("call (713)854-9439 asap")) == "(713) 854-9439"


def test_phone_bare_digits():
    outcome = extract_phone("cb 7138549439 fever")
    assert outcome_value(outcome) == "(713) 854-9439"
    assert outcome.remainder == "cb fever"


def test_phone_only_first_number_is_taken():
    """A second number stays in the residual text"""
    outcome = extract_phone("CALL 713-854-9439 ALT 5551234567")
    assert outcome_value(outcome) == "(713) 854-9439"
    assert "5551234567" in outcome.remainder


def test_phone_none():
    outcome = extract_phone("no number here 12345")
    assert isinstance(outcome, NoMatch)
    assert outcome.remainder == "no number here 12345"


def test_format_phone_keeps_raw_when_not_ten_digits():
    assert format_phone_number("+1 713 854 9439") == "+1 713 854 9439"
    assert format_phone_number("854-9439") == "854-9439"


def test_format_phone_digits_round_trip():
    digits = "7138549439"
    assert re.sub(r"\D", "", format_phone_number(digits)) == digits


# ============================================================================
# DATE OF BIRTH
# ============================================================================

def test_dob_concatenated():
    outcome = extract_date_of_birth("NAME REDACTED. ,,DOB:06/30/1993NOT OB")
    assert isinstance(outcome, Matched)
    assert outcome.value == date(1993, 6, 30)
    assert outcome.remainder == "NAME REDACTED. ,,NOT OB"


def test_dob_lowercase_two_digit_year():
    assert outcome_value(extract_date_of_birth("dob: 3-4-85 fever")) == date(1985, 3, 4)


def test_dob_matched_but_invalid_keeps_text():
    """Label matched but content invalid is its own outcome"""
    text = "DOB 13/45/1990 PAIN"
    outcome = extract_date_of_birth(text)
    assert isinstance(outcome, MatchedButInvalid)
    assert outcome.remainder == text
    assert outcome_value(outcome) is None


def test_dob_future_year_is_invalid():
    outcome = extract_date_of_birth("DOB 01/01/2030", today=date(2026, 1, 1))
    assert isinstance(outcome, MatchedButInvalid)


def test_dob_absent():
    assert isinstance(extract_date_of_birth("born in june"), NoMatch)


# ============================================================================
# OB STATUS
# ============================================================================

@pytest.mark.parametrize(
    "text,status,remainder",
    [
        ("SEVEREPAIN ,POST PARTUM 1WKS,", "Postpartum 1 weeks", "SEVEREPAIN ,,"),
        ("POSTPARTUM 3 WEEKS fever", "Postpartum 3 weeks", "fever"),
        ("NOT OB cough", "Not OB", "cough"),
        ("OB patient bleeding", "OB", "patient bleeding"),
        ("32 WKS GA cramping", "32 weeks GA", "cramping"),
        ("PREGNANT 28WEEKS", "28 weeks GA", "PREGNANT"),
    ],
)
def test_ob_status_rules(text, status, remainder):
    outcome = extract_ob_status(text)
    assert outcome_value(outcome) == status
    assert outcome.remainder == remainder


def test_postpartum_wins_over_not_ob():
    outcome = extract_ob_status("NOT OB POSTPARTUM 2 WKS mastitis")
    assert outcome_value(outcome) == "Postpartum 2 weeks"
    assert outcome.remainder == "NOT OB mastitis"


def test_ob_word_boundary():
    assert isinstance(extract_ob_status("knob on door hurt hand"), NoMatch)
