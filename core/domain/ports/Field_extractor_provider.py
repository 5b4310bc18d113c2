from abc import ABC, abstractmethod

from core.domain.schemas.result_data import ParsedTriageFields


class Field_extractor_provider(ABC):
    @abstractmethod
    def extract(self, message: str) -> ParsedTriageFields:
        """Extract all triage fields from one raw answering-service message.

        Implementations must not raise for any string input and must fill
        ``chief_complaint`` whenever the message has visible content.
        """
        pass
