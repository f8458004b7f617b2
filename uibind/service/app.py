"""FastAPI application entrypoint for uibind service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..errors import NotConfiguredError, UIBindError
from ..models import GenerationShape
from ..orchestrator import GenerationOutcome, Orchestrator

T = TypeVar("T")


class PreviewRequest(BaseModel):
    markup: str
    name: str
    shape: GenerationShape = GenerationShape.DOCUMENT
    namespace: str = ""
    file_prefix: str = ""
    file_suffix: str = ""
    script: bool = False


class PreviewResponse(BaseModel):
    source: str


class GenerateRequest(BaseModel):
    path: str
    dry_run: bool = False


class GenerateResponse(BaseModel):
    status: str
    output_path: str
    diff: Optional[str] = None
    dry_run: bool = False


class HealthResponse(BaseModel):
    status: str


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = Orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing uibind operations."""

    app = FastAPI(title="uibind Service", version=__version__)

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request so settings edits on disk are picked up.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/preview", response_model=PreviewResponse)
    async def preview(
        payload: PreviewRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> PreviewResponse:
        source = await _run_blocking(
            lambda: orchestrator.preview(
                payload.markup,
                name=payload.name,
                shape=payload.shape,
                namespace=payload.namespace,
                file_prefix=payload.file_prefix,
                file_suffix=payload.file_suffix,
                script=payload.script,
            )
        )
        return PreviewResponse(source=source)

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        outcome = await _run_blocking(
            lambda: orchestrator.generate_bindings(payload.path, dry_run=payload.dry_run)
        )
        return _to_response(outcome)

    @app.post("/script", response_model=GenerateResponse)
    async def script(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        outcome = await _run_blocking(
            lambda: orchestrator.generate_script(payload.path, dry_run=payload.dry_run)
        )
        return _to_response(outcome)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotConfiguredError)
    async def not_configured_handler(_: Any, exc: NotConfiguredError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UIBindError)
    async def uibind_error_handler(_: Any, exc: UIBindError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


async def _run_blocking(action: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, action)


def _to_response(outcome: GenerationOutcome) -> GenerateResponse:
    if outcome.dry_run:
        status = "dry-run"
    elif outcome.written:
        status = "written"
    else:
        status = "unchanged"
    return GenerateResponse(
        status=status,
        output_path=str(outcome.path),
        diff=outcome.diff or None,
        dry_run=outcome.dry_run,
    )


def run_service(
    project_root: Path = Path("."), host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app(lambda: Orchestrator(project_root))
    uvicorn.run(app, host=host, port=port)
