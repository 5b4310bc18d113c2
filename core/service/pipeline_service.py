from __future__ import annotations

import time
from typing import Optional

from core.domain.errors import ModelParserError
from core.domain.ports.Field_extractor_provider import Field_extractor_provider
from core.domain.ports.LLM_provider import LLM_provider
from core.domain.ports.Pipeline_interface import Pipeline_interface
from core.domain.ports.Settings_provider import Settings_provider
from core.domain.schemas.input_data import InputData
from core.domain.schemas.result_data import (
    ExtractionPath,
    MetaInfo,
    ParsedTriageFields,
    ResultData,
)
from core.lib.logger import get_logger
from .field_extractor_service import FieldExtractorService
from .llm_service import LLMService
from .priority_service import suggest_priority
from .settings_service import EnvSettingsService


class PipelineService(Pipeline_interface):
    """Pick an extraction strategy per call.

    The model path goes first when requested and available; the rule chain
    is the unconditional fallback, so ``run`` never fails for a message.
    """

    def __init__(
        self,
        settings: Optional[Settings_provider] = None,
        extractor: Optional[Field_extractor_provider] = None,
        llm: Optional[LLM_provider] = None,
    ) -> None:
        self.logger = get_logger("pipeline")
        self.settings = settings or EnvSettingsService()
        self.extractor = extractor or FieldExtractorService()
        self.llm = llm if llm is not None else LLMService(self.settings)
        self.model_by_default = self.settings.get_bool("LLM_ENABLED", False)

    async def run(self, input_data: InputData) -> ResultData:
        t0 = time.perf_counter()
        options = input_data.options
        meta = MetaInfo(request_id=input_data.context.request_id or None, specialty=options.specialty)
        use_model = self.model_by_default if options.use_model is None else options.use_model

        self.logger.info(
            "start pipeline: specialty=%s use_model=%s chars=%d",
            options.specialty.value,
            use_model,
            len(input_data.message),
        )

        result: Optional[ParsedTriageFields] = None
        if use_model:
            t1 = time.perf_counter()
            result = await self._try_model(input_data, meta)
            meta.timings_ms["model"] = int((time.perf_counter() - t1) * 1000)

        if result is None:
            t2 = time.perf_counter()
            result = self.run_rules(input_data.message)
            meta.timings_ms["rules"] = int((time.perf_counter() - t2) * 1000)
            meta.extraction_path = ExtractionPath.RULES

        total_ms = int((time.perf_counter() - t0) * 1000)
        meta.timings_ms["total"] = total_ms
        self.logger.info("done: path=%s total=%d ms", meta.extraction_path.value, total_ms)

        return ResultData(
            meta=meta,
            result=result,
            suggested_priority=suggest_priority(options.specialty, result.chief_complaint),
        )

    async def _try_model(self, input_data: InputData, meta: MetaInfo) -> Optional[ParsedTriageFields]:
        """Model result, or None with ``meta.fallback_reason`` set.

        Nothing raised by the model provider escapes; the rules take over.
        """
        try:
            if not await self.llm.is_available():
                meta.fallback_reason = self.llm.status_message
                self.logger.info("model extraction unavailable (%s), using rules", meta.fallback_reason)
                return None
            result = await self.llm.extract(input_data.message, input_data.options.specialty)
        except ModelParserError as e:
            meta.fallback_reason = str(e)
            self.logger.warning("model extraction failed, falling back to rules: %s", e)
            return None
        except Exception as e:
            meta.fallback_reason = f"model provider error: {type(e).__name__}"
            self.logger.warning("model provider raised %s, falling back to rules: %s", type(e).__name__, e)
            return None
        meta.extraction_path = ExtractionPath.MODEL
        return result

    def run_rules(self, message: str) -> ParsedTriageFields:
        return self.extractor.extract(message)
