"""FastAPI application entrypoint for eventmeta service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..orchestrator import GenerateOutcome, Orchestrator
from ..validators import UnresolvedArgumentError


class ScanRequest(BaseModel):
    path: str
    source_dir: Optional[str] = None
    annotation_name: Optional[str] = None
    annotation_fqn: Optional[str] = None
    container_name: Optional[str] = None
    fail_on_missing: Optional[bool] = None
    includes: Optional[List[str]] = None
    excludes: Optional[List[str]] = None


class ScanResponse(BaseModel):
    status: str
    metadata: Optional[Dict[str, Any]] = None
    warnings: List[str] = []


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing eventmeta scans."""

    app = FastAPI(title="Event Metadata Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/scan", response_model=ScanResponse)
    async def scan(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ScanResponse:
        def _run_scan() -> GenerateOutcome | None:
            return orchestrator.run_generate(
                payload.path,
                source_dir=payload.source_dir,
                annotation_name=payload.annotation_name,
                annotation_fqn=payload.annotation_fqn,
                container_name=payload.container_name,
                fail_on_missing=payload.fail_on_missing,
                includes=payload.includes,
                excludes=payload.excludes,
                dry_run=True,
            )

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run_scan)

        if outcome is None:
            return ScanResponse(status="skipped")
        return ScanResponse(
            status="ok",
            metadata=outcome.metadata.to_dict(),
            warnings=outcome.warnings,
        )

    @app.exception_handler(UnresolvedArgumentError)
    async def unresolved_argument_handler(
        _: Any, exc: UnresolvedArgumentError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "detail": str(exc),
                "sourceFile": exc.source_file,
                "target": exc.target,
                "line": exc.line,
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
