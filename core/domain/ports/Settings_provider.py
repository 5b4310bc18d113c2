from abc import ABC, abstractmethod
from typing import Any, Optional


class Settings_provider(ABC):
    @abstractmethod
    def get(self, key: str, default: Optional[Any] = None) -> Any:
        pass

    @abstractmethod
    def get_bool(self, key: str, default: bool = False) -> bool:
        pass

    @abstractmethod
    def get_int(self, key: str, default: int) -> int:
        pass

    @abstractmethod
    def get_float(self, key: str, default: float) -> float:
        pass
