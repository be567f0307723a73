"""FastAPI application exposing the import checker as a service."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import DEFAULT_EXTENSION, DEFAULT_EXTENSIONS
from ..formatters import build_payload
from ..models import SourceFile
from ..orchestrator import AnalysisResult, Orchestrator
from ..resolver import PathResolver


class FilePayload(BaseModel):
    path: str
    content: str


class CheckRequest(BaseModel):
    files: List[FilePayload]
    default_extension: str = DEFAULT_EXTENSION


class CheckResponse(BaseModel):
    diagnostics: List[Dict[str, Any]]
    summary: Dict[str, int]
    parsers: Dict[str, str]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator(default_extension: str) -> Orchestrator:
    return Orchestrator(resolver=PathResolver(default_extension, DEFAULT_EXTENSIONS))


def create_app(
    orchestrator_factory: Callable[[str], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing proofreader checks."""

    app = FastAPI(title="Proofreader Service", version="1.0.0")

    async def get_factory() -> Callable[[str], Orchestrator]:
        return orchestrator_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/check", response_model=CheckResponse)
    async def check(
        payload: CheckRequest,
        factory: Callable[[str], Orchestrator] = Depends(get_factory),
    ) -> CheckResponse:
        extension = payload.default_extension
        if not extension.startswith("."):
            extension = f".{extension}"
        # A fresh orchestrator per request keeps the module graph request-scoped.
        orchestrator = factory(extension.lower())
        files = [SourceFile(path=item.path, text=item.content) for item in payload.files]

        def _run() -> AnalysisResult:
            return orchestrator.analyze(files)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return CheckResponse(**build_payload(result))

    @app.exception_handler(ValueError)
    async def value_error_handler(
        _: Any, exc: ValueError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000, app: Optional[FastAPI] = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(app or create_app(), host=host, port=port)
