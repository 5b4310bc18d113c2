from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

from core.domain.schemas.input_data import InputData, ProcessingOptions
from core.domain.schemas.specialty import MedicalSpecialty
from core.service.pipeline_service import PipelineService

from dotenv import load_dotenv
load_dotenv()


def _as_bool(v: object, default: bool = False) -> bool:
    if v is None:
        return default
    return str(v).lower() in ("1", "true", "yes")


def build_input(message: str, *, specialty: Optional[str] = None, rules_only: bool = False) -> InputData:
    options = ProcessingOptions(
        specialty=MedicalSpecialty.from_loose(specialty or os.getenv("DEFAULT_SPECIALTY")),
        use_model=False if rules_only else None,
    )
    return InputData(message=message, options=options)


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse an answering-service triage message")
    parser.add_argument("file", nargs="?", help="file holding the message; '-' or omitted reads stdin")
    parser.add_argument("--specialty", default=None, help="specialty profile, e.g. obgyn")
    parser.add_argument("--rules-only", action="store_true", help="skip model-based extraction")
    return parser.parse_args(argv)


def main() -> None:
    serve = _as_bool(os.getenv("SERVE", "0"))
    if serve and len(sys.argv) <= 1:
        # Run HTTP server; host/port from env
        import uvicorn
        host = os.getenv("DOMAIN", "0.0.0.0")
        port = int(os.getenv("PORT", "8080"))
        uvicorn.run("core.transport.http.server:app", host=host, port=port, reload=False)
        return

    args = _parse_args(sys.argv[1:])
    if args.file and args.file != "-":
        message = Path(args.file).read_text(encoding="utf-8")
    elif not sys.stdin.isatty():
        message = sys.stdin.read()
    else:
        print("Usage: python main.py <file> [--specialty NAME] [--rules-only]  # or set SERVE=1", flush=True)
        sys.exit(2)

    input_data = build_input(message, specialty=args.specialty, rules_only=args.rules_only)
    pipeline = PipelineService()
    result = asyncio.run(pipeline.run(input_data))
    print(result.model_dump_json(indent=2), flush=True)


if __name__ == "__main__":
    main()
