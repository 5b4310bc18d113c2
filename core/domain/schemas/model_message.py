from typing import Optional

from pydantic import BaseModel, Field


class ModelTriageMessage(BaseModel):
    """Schema the language model is asked to fill, as returned (unvalidated)."""

    attending_doctor: Optional[str] = Field(
        default=None,
        description="The attending physician's last name, extracted from DR or DR. prefix. "
        "Return just the name without 'Dr.' prefix.",
    )
    patient_name: Optional[str] = Field(
        default=None,
        description="The patient's full name, properly capitalized. Look for names after "
        "'DR [DOCTOR]' or labeled as 'PATIENT NAME:', 'PT:', or 'NAME:'. Remove any labels. "
        "Format as 'First Last' with proper capitalization.",
    )
    callback_number: Optional[str] = Field(
        default=None,
        description="The callback phone number, formatted as (###) ###-####. "
        "Remove any special characters like § before the number.",
    )
    date_of_birth: Optional[str] = Field(
        default=None,
        description="Date of birth in MM/DD/YYYY format (four-digit year). If the source has a "
        "two-digit year, convert it: YY <= 25 becomes 20YY (e.g., 01 -> 2001), "
        "YY > 25 becomes 19YY (e.g., 97 -> 1997).",
    )
    chief_complaint: Optional[str] = Field(
        default=None,
        description="The patient's chief complaint and symptoms. Clean up abbreviations, fix "
        "misspellings, normalize spacing, convert to sentence case. Remove any field labels.",
    )
    ob_status: Optional[str] = Field(
        default=None,
        description="OB status if mentioned: 'OB', 'Not OB', 'Postpartum X weeks', "
        "'Pregnant XX weeks'.",
    )
    gestational_age: Optional[str] = Field(
        default=None,
        description="Gestational age if pregnant, in weeks+days format like '32w4d' or '32 weeks'.",
    )
    patient_age: Optional[str] = Field(
        default=None,
        description="Patient's age if pediatric, e.g. '3 years', '18 months', '6 weeks', 'newborn'.",
    )
    safety_concerns: Optional[str] = Field(
        default=None,
        description="Safety concerns mentioned: suicidal ideation (SI), homicidal ideation (HI), "
        "self-harm, overdose, etc.",
    )
