from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from core.domain.schemas.input_data import InputData, ProcessingOptions, RequestContext
from core.domain.schemas.result_data import ResultData
from core.domain.schemas.specialty import MedicalSpecialty
from core.service.pipeline_service import PipelineService


router = APIRouter()


class ParseRequest(BaseModel):
    message: str = Field(..., description="Raw triage message as relayed by the answering service")
    specialty: Optional[str] = Field(default=None, description="Specialty profile, e.g. 'OB/GYN' or 'obgyn'")
    use_model: Optional[bool] = Field(default=None, description="Try model-based extraction first")
    request_id: Optional[str] = None


@router.post("/parse", summary="Parse a triage message into structured fields", response_model=ResultData)
async def parse(request: Request, body: ParseRequest) -> ResultData:
    default_specialty = getattr(request.app.state, "default_specialty", MedicalSpecialty.OTHER)
    specialty = MedicalSpecialty.from_loose(body.specialty) if body.specialty else default_specialty
    input_data = InputData(
        message=body.message,
        options=ProcessingOptions(specialty=specialty, use_model=body.use_model),
        context=RequestContext(request_id=body.request_id),
    )

    # Use pre-initialized pipeline from app state when available
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = PipelineService()
    try:
        return await pipeline.run(input_data)
    except Exception as e:
        # Keep message short for client; details are in server logs
        raise HTTPException(status_code=500, detail=f"processing failed: {e}") from e


@router.get("/specialties", summary="Known specialty profiles")
def specialties() -> List[Dict[str, object]]:
    return [
        {"name": s.value, "extended_fields": sorted(s.extended_fields)}
        for s in MedicalSpecialty
    ]
