from __future__ import annotations

import re
from enum import Enum
from typing import FrozenSet, Optional


class Priority(str, Enum):
    ROUTINE = "Routine"
    URGENT = "Urgent"
    EMERGENT = "Emergent"


class MedicalSpecialty(str, Enum):
    OBGYN = "OB/GYN"
    FAMILY_MEDICINE = "Family Medicine"
    INTERNAL_MEDICINE = "Internal Medicine"
    PEDIATRICS = "Pediatrics"
    EMERGENCY_MEDICINE = "Emergency Medicine"
    CARDIOLOGY = "Cardiology"
    ORTHOPEDICS = "Orthopedics"
    PSYCHIATRY = "Psychiatry"
    NEUROLOGY = "Neurology"
    GENERAL_SURGERY = "General Surgery"
    UROLOGY = "Urology"
    PULMONOLOGY = "Pulmonology"
    GASTROENTEROLOGY = "Gastroenterology"
    NEPHROLOGY = "Nephrology"
    ONCOLOGY = "Oncology"
    OTHER = "Other"

    @classmethod
    def from_loose(cls, value: Optional[str]) -> "MedicalSpecialty":
        """Resolve "obgyn", "OB/GYN", "ob-gyn", "OBGYN" etc. Unknown -> OTHER."""
        if not value:
            return cls.OTHER
        key = re.sub(r"[^a-z]", "", value.lower())
        for member in cls:
            if key in (re.sub(r"[^a-z]", "", member.value.lower()), member.name.lower().replace("_", "")):
                return member
        return cls.OTHER

    @property
    def extended_fields(self) -> FrozenSet[str]:
        return _EXTENDED_FIELDS.get(self, frozenset())

    @property
    def parser_instructions(self) -> str:
        base = (
            f"You are a medical triage message parser for a {self.value} on-call service.\n"
            "Extract structured data from unformatted answering service text messages.\n"
            "Fix misspellings and normalize formatting."
        )
        context = _SPECIALTY_CONTEXT.get(self, _DEFAULT_CONTEXT)
        return base + "\n\n" + context


_EXTENDED_FIELDS = {
    MedicalSpecialty.OBGYN: frozenset({"gestational_age"}),
    MedicalSpecialty.PEDIATRICS: frozenset({"patient_age"}),
    MedicalSpecialty.PSYCHIATRY: frozenset({"safety_concerns"}),
}

_GENERAL_MEDICINE_CONTEXT = """General medicine patterns:
- Broad range of complaints: acute illness, chronic disease management
- Medication refills and side effects
- Test results and referral questions
- Common abbreviations for vital signs and symptoms"""

_DEFAULT_CONTEXT = """General medical patterns:
- Common symptoms and complaints
- Standard medical abbreviations
- Medication names and dosages"""

_SPECIALTY_CONTEXT = {
    MedicalSpecialty.OBGYN: """OBGYN-specific patterns:
- OB status: "OB", "NOT OB", "POSTPARTUM", "PP", "PREGNANT"
- Gestational ages: "32WKS", "32 WEEKS", "32W", "GA 32"
- Common complaints: labor, contractions, bleeding, leaking fluid,
  decreased fetal movement, preeclampsia symptoms, mastitis
- Abbreviations: PP = postpartum, ROM = rupture of membranes,
  PIH = pregnancy-induced hypertension, PPROM, SROM, AROM""",
    MedicalSpecialty.PEDIATRICS: """Pediatrics-specific patterns:
- Age formats: "3yo", "3 year old", "18mo", "6 week old", "newborn"
- Weight may be mentioned: "22 lbs", "10 kg"
- Common complaints: fever, rash, vomiting, diarrhea, cough,
  difficulty breathing, ear pain, not eating
- Abbreviations: yo = year old, mo = months old, FTT = failure to thrive""",
    MedicalSpecialty.CARDIOLOGY: """Cardiology-specific patterns:
- Cardiac symptoms: chest pain, palpitations, syncope, dyspnea, edema
- Device mentions: pacemaker, ICD, AICD, stent
- Medications: anticoagulants, beta blockers, ACE inhibitors
- Abbreviations: CP = chest pain, SOB = shortness of breath,
  STEMI, NSTEMI, AFib, CHF, EF""",
    MedicalSpecialty.PSYCHIATRY: """Psychiatry-specific patterns:
- Safety concerns: SI (suicidal ideation), HI (homicidal ideation),
  self-harm, overdose
- Symptoms: anxiety, panic, psychosis, mania, depression, insomnia
- Medication issues: ran out of meds, side effects, need refill
- Abbreviations: SI = suicidal ideation, HI = homicidal ideation,
  AH = auditory hallucinations, VH = visual hallucinations""",
    MedicalSpecialty.ORTHOPEDICS: """Orthopedics-specific patterns:
- Injury descriptions: fracture, dislocation, sprain, post-op
- Body parts: specific joint/bone names
- Symptoms: pain, swelling, inability to bear weight, numbness
- Abbreviations: fx = fracture, ORIF, TKA, THA, ROM = range of motion""",
    MedicalSpecialty.NEUROLOGY: """Neurology-specific patterns:
- Stroke symptoms: sudden weakness, speech difficulty, facial droop
- Seizure descriptions: type, duration, post-ictal state
- Headache: worst of life, sudden onset, associated symptoms
- Abbreviations: CVA = stroke, TIA, LOC = loss of consciousness,
  AMS = altered mental status""",
    MedicalSpecialty.PULMONOLOGY: """Pulmonology-specific patterns:
- Respiratory symptoms: dyspnea, cough, wheezing, hemoptysis
- Oxygen requirements: home O2, BiPAP, CPAP
- Conditions: COPD, asthma, pneumonia, PE
- Abbreviations: SOB = shortness of breath, DOE = dyspnea on exertion,
  O2 sat, FEV1""",
    MedicalSpecialty.GASTROENTEROLOGY: """Gastroenterology-specific patterns:
- GI symptoms: abdominal pain, nausea, vomiting, diarrhea, constipation
- Bleeding: hematemesis, melena, hematochezia
- Conditions: GERD, IBD, cirrhosis, pancreatitis
- Abbreviations: N/V = nausea/vomiting, BM = bowel movement,
  BRBPR = bright red blood per rectum""",
    MedicalSpecialty.FAMILY_MEDICINE: _GENERAL_MEDICINE_CONTEXT,
    MedicalSpecialty.INTERNAL_MEDICINE: _GENERAL_MEDICINE_CONTEXT,
    MedicalSpecialty.EMERGENCY_MEDICINE: """Emergency medicine patterns:
- Trauma: mechanism of injury, vital signs
- Acuity indicators: altered mental status, hemodynamic instability
- Time-sensitive conditions: chest pain, stroke symptoms
- Triage categories and disposition planning""",
}
