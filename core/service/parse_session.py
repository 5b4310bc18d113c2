from __future__ import annotations

from typing import Optional

from core.domain.ports.Pipeline_interface import Pipeline_interface
from core.domain.schemas.input_data import InputData, ProcessingOptions, RequestContext
from core.domain.schemas.result_data import ResultData
from core.domain.schemas.specialty import MedicalSpecialty
from core.lib.logger import get_logger


class ParseSession:
    """One editing session: one paste, one parse.

    A newer ``submit`` supersedes the one in flight, and ``abandon`` drops
    whatever is in flight. Superseded calls run to completion but their
    result is discarded and ``submit`` returns None for them.
    """

    def __init__(
        self,
        pipeline: Pipeline_interface,
        specialty: MedicalSpecialty = MedicalSpecialty.OTHER,
        session_id: Optional[str] = None,
    ) -> None:
        self.logger = get_logger("session")
        self.pipeline = pipeline
        self.specialty = specialty
        self.session_id = session_id
        self.current: Optional[ResultData] = None
        self._generation = 0
        self._abandoned = False

    async def submit(
        self,
        message: str,
        specialty: Optional[MedicalSpecialty] = None,
        use_model: Optional[bool] = None,
    ) -> Optional[ResultData]:
        self._generation += 1
        ticket = self._generation
        input_data = InputData(
            message=message,
            options=ProcessingOptions(specialty=specialty or self.specialty, use_model=use_model),
            context=RequestContext(request_id=f"{self.session_id}:{ticket}" if self.session_id else None),
        )
        result = await self.pipeline.run(input_data)
        if self._abandoned or ticket != self._generation:
            self.logger.info("session: discarding stale parse #%d", ticket)
            return None
        self.current = result
        return result

    def abandon(self) -> None:
        self._abandoned = True
        self._generation += 1

    @property
    def abandoned(self) -> bool:
        return self._abandoned
