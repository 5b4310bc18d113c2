from abc import ABC, abstractmethod

from core.domain.schemas.result_data import ParsedTriageFields
from core.domain.schemas.specialty import MedicalSpecialty


class LLM_provider(ABC):
    @abstractmethod
    async def is_available(self) -> bool:
        """Whether model extraction can be attempted right now."""
        pass

    @property
    @abstractmethod
    def status_message(self) -> str:
        pass

    @abstractmethod
    async def extract(self, raw_message: str, specialty: MedicalSpecialty) -> ParsedTriageFields:
        """Extract triage fields straight from the raw message.

        Raises ``ModelUnavailableError`` or ``ModelInvocationError``.
        """
        pass
