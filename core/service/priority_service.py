from __future__ import annotations

from typing import Dict, Optional, Tuple

from core.domain.schemas.specialty import MedicalSpecialty, Priority

# (emergent keywords, urgent keywords) per specialty; matched on lower-cased text.
PRIORITY_KEYWORDS: Dict[MedicalSpecialty, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    MedicalSpecialty.CARDIOLOGY: (
        ("chest pain", "stemi", "syncope", "cardiac arrest"),
        ("palpitations", "shortness of breath"),
    ),
    MedicalSpecialty.OBGYN: (
        ("heavy bleeding", "decreased fetal movement", "contractions", "water broke",
         "preeclampsia", "eclampsia"),
        ("bleeding", "pain"),
    ),
    MedicalSpecialty.PSYCHIATRY: (
        ("suicidal", "overdose", "homicidal", "self-harm", "psychosis"),
        ("crisis", "panic"),
    ),
    MedicalSpecialty.PEDIATRICS: (
        ("difficulty breathing", "not responsive", "seizure", "unresponsive", "blue", "choking"),
        ("high fever", "dehydration"),
    ),
    MedicalSpecialty.NEUROLOGY: (
        ("stroke", "seizure", "sudden weakness", "altered", "worst headache"),
        (),
    ),
    MedicalSpecialty.ORTHOPEDICS: (
        ("open fracture", "compartment", "no pulse", "neurovascular"),
        ("fracture", "dislocation"),
    ),
    MedicalSpecialty.EMERGENCY_MEDICINE: (
        ("cardiac arrest", "unresponsive", "not breathing", "severe bleeding"),
        (),
    ),
    MedicalSpecialty.PULMONOLOGY: (
        ("can't breathe", "severe sob", "respiratory failure", "coughing blood"),
        (),
    ),
    MedicalSpecialty.GASTROENTEROLOGY: (
        ("gi bleed", "vomiting blood", "black stool", "severe abdominal"),
        (),
    ),
}


def suggest_priority(specialty: MedicalSpecialty, complaint: Optional[str]) -> Priority:
    if not complaint:
        return Priority.ROUTINE
    emergent, urgent = PRIORITY_KEYWORDS.get(specialty, ((), ()))
    lowered = complaint.lower()
    if any(k in lowered for k in emergent):
        return Priority.EMERGENT
    if any(k in lowered for k in urgent):
        return Priority.URGENT
    return Priority.ROUTINE
