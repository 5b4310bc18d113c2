from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .specialty import MedicalSpecialty


class ProcessingOptions(BaseModel):
    """Flags that control how the pipeline should process the message."""

    specialty: MedicalSpecialty = MedicalSpecialty.OTHER
    # None means "use the LLM_ENABLED setting".
    use_model: Optional[bool] = None


class RequestContext(BaseModel):
    """Request-scoped metadata propagated through the pipeline."""

    request_id: Optional[str] = None
    client_tags: List[str] = Field(default_factory=list)
    extra: Dict[str, Any] = Field(default_factory=dict)


class InputData(BaseModel):
    """Full payload consumed by the pipeline orchestrator."""

    message: str
    options: ProcessingOptions = Field(default_factory=ProcessingOptions)
    context: RequestContext = Field(default_factory=RequestContext)
