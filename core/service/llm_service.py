from __future__ import annotations

import asyncio
import json
import re
from typing import Any, Dict, List, Optional

from ollama import AsyncClient

from core.domain.errors import ModelInvocationError, ModelUnavailableError
from core.domain.ports.LLM_provider import LLM_provider
from core.domain.ports.Settings_provider import Settings_provider
from core.domain.schemas.model_message import ModelTriageMessage
from core.domain.schemas.result_data import ParsedTriageFields, SpecialtyFields
from core.domain.schemas.specialty import MedicalSpecialty
from core.lib.logger import get_logger
from core.service.complaint_service import finalize_complaint
from core.service.date_disambiguator import parse_date
from core.service.settings_service import EnvSettingsService

MESSAGE_LAYOUT_HINT = """
Message format is typically: DR [DOCTOR] [PATIENT NAME] [PHONE] DOB [DATE] [COMPLAINT]

Patient names usually appear after the doctor's name and before the phone number.
Look for patterns like "PATIENT NAME:", "PT:", or names in ALL CAPS.
Names may be 2-3 words (First Last or First Middle Last)."""

_DR_PREFIX_RE = re.compile(r"^DR\.?\s+", re.I)


class LLMService(LLM_provider):
    """Model-based extractor that parses a raw triage message via Ollama.

    Controlled by settings:
      - LLM_ENABLED (default: 0)
      - OLLAMA_HOST (default: http://localhost:11434)
      - OLLAMA_MODEL (default: llama3.1:8b)
      - OLLAMA_API_KEY (optional bearer token)
      - LLM_TIMEOUT_S (default: 30)
    """

    def __init__(self, settings: Optional[Settings_provider] = None, client: Optional[Any] = None) -> None:
        self.logger = get_logger("llm")
        settings = settings or EnvSettingsService()
        self.enabled = settings.get_bool("LLM_ENABLED", False)
        self.host = settings.get("OLLAMA_HOST", "http://localhost:11434")
        self.model = settings.get("OLLAMA_MODEL", "llama3.1:8b")
        self.timeout = settings.get_float("LLM_TIMEOUT_S", 30.0)
        api_key = settings.get("OLLAMA_API_KEY")
        if client is None:
            headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
            client = AsyncClient(host=self.host, headers=headers)
        self.client = client
        self._available: Optional[bool] = None
        self._status = "AI parsing status unknown"

    # -------- availability --------
    @property
    def status_message(self) -> str:
        return self._status

    async def is_available(self) -> bool:
        if self._available is None:
            self._available = await self._probe()
        return self._available

    def refresh_availability(self) -> None:
        self._available = None

    async def _probe(self) -> bool:
        if not self.enabled:
            self._status = "AI parsing disabled"
            return False
        try:
            await asyncio.wait_for(self.client.list(), timeout=self.timeout)
        except Exception as e:
            self.logger.warning("llm: model server %s unreachable: %s", self.host, e)
            self._status = "AI model server unreachable"
            return False
        self._status = "AI parsing active"
        return True

    # -------- extraction --------
    async def extract(self, raw_message: str, specialty: MedicalSpecialty) -> ParsedTriageFields:
        if not await self.is_available():
            raise ModelUnavailableError(self._status)

        messages = self._build_messages(raw_message, specialty)
        self.logger.info(
            "llm: sending %d chars to model=%s specialty=%s", len(raw_message), self.model, specialty.value
        )
        try:
            response = await asyncio.wait_for(
                self.client.chat(
                    model=self.model,
                    messages=messages,
                    format=ModelTriageMessage.model_json_schema(),
                    options={"temperature": 0},
                ),
                timeout=self.timeout,
            )
            raw = response["message"]["content"] or ""
        except asyncio.TimeoutError as e:
            raise ModelInvocationError(f"model request timed out after {self.timeout}s") from e
        except Exception as e:
            raise ModelInvocationError(f"ollama request failed: {e}") from e

        data = self._json_from_text(raw)
        if data is None:
            raise ModelInvocationError("model did not return valid JSON")
        try:
            return self._to_fields(self._coerce_to_message(data), raw_message, specialty)
        except Exception as e:
            raise ModelInvocationError(f"model answer could not be mapped: {e}") from e

    # -------- helpers --------
    def _build_messages(self, raw_message: str, specialty: MedicalSpecialty) -> List[Dict[str, str]]:
        instructions = (
            specialty.parser_instructions
            + "\n"
            + MESSAGE_LAYOUT_HINT
            + "\n\nReturn only valid JSON matching the schema. Use null for anything not present."
        )
        return [
            {"role": "system", "content": instructions},
            {"role": "user", "content": f"Parse this triage message:\n\n{raw_message}"},
        ]

    def _json_from_text(self, text: str) -> Optional[dict]:
        if not text:
            return None
        start = text.find("{")
        if start == -1:
            return None
        last = text.rfind("}")
        if last == -1 or last <= start:
            return None
        snippet = text[start : last + 1]
        try:
            data = json.loads(snippet)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None

    def _coerce_to_message(self, data: dict) -> ModelTriageMessage:
        # Accept snake_case or camelCase keys; scalars are stringified, nested values ignored
        def get(*keys: str) -> Optional[str]:
            for key in keys:
                value = data.get(key)
                if value is None or isinstance(value, (dict, list)):
                    continue
                return str(value)
            return None

        return ModelTriageMessage(
            attending_doctor=get("attending_doctor", "attendingDoctor", "doctor"),
            patient_name=get("patient_name", "patientName"),
            callback_number=get("callback_number", "callbackNumber", "phone"),
            date_of_birth=get("date_of_birth", "dateOfBirth", "dob"),
            chief_complaint=get("chief_complaint", "chiefComplaint"),
            ob_status=get("ob_status", "obStatus"),
            gestational_age=get("gestational_age", "gestationalAge"),
            patient_age=get("patient_age", "patientAge"),
            safety_concerns=get("safety_concerns", "safetyConcerns"),
        )

    def _to_fields(
        self, parsed: ModelTriageMessage, raw_message: str, specialty: MedicalSpecialty
    ) -> ParsedTriageFields:
        def clean(value: Optional[str]) -> Optional[str]:
            value = (value or "").strip()
            return value or None

        doctor = clean(parsed.attending_doctor)
        if doctor:
            doctor = clean(_DR_PREFIX_RE.sub("", doctor))

        dob_token = clean(parsed.date_of_birth)
        extended = SpecialtyFields(
            **{name: clean(getattr(parsed, name)) for name in specialty.extended_fields}
        )
        return ParsedTriageFields(
            attending_doctor=doctor,
            patient_name=clean(parsed.patient_name),
            callback_number=clean(parsed.callback_number),
            date_of_birth=parse_date(dob_token) if dob_token else None,
            ob_status=clean(parsed.ob_status),
            chief_complaint=clean(parsed.chief_complaint) or finalize_complaint("", raw_message),
            extended=extended,
        )
