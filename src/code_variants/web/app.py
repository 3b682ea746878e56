"""FastAPI app exposing the rewrite and validation agents over HTTP."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Request

from code_variants.errors import CodeVariantsError
from code_variants.web.schemas import RewriteRequest, RewriteResponse, ValidateRequest, ValidateResponse
from code_variants.web.service import WebRuntime, initialize_runtime, run_rewrite, run_validation

LOGGER = logging.getLogger(__name__)


def _resolve_env_file(env_file: str | None) -> str:
    if env_file is not None:
        return env_file
    return os.getenv("CV_ENV_FILE", ".env")


def _get_runtime(app: FastAPI) -> WebRuntime:
    runtime = getattr(app.state, "runtime", None)
    if runtime is None:
        raise RuntimeError("Web runtime is not initialized.")
    return runtime


def _http_error(exc: CodeVariantsError) -> HTTPException:
    status_code = 503 if exc.overloaded else 502
    return HTTPException(status_code=status_code, detail=str(exc))


def create_app(
    *,
    env_file: str | None = None,
    runtime: WebRuntime | None = None,
) -> FastAPI:
    """Create a configured FastAPI app instance."""

    selected_env_file = _resolve_env_file(env_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.runtime = runtime or initialize_runtime(env_file=selected_env_file)
        yield

    app = FastAPI(
        title="Code Variants API",
        description="Generate equivalent Python variants and analyse how they differ.",
        lifespan=lifespan,
    )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/rewrite", response_model=RewriteResponse)
    async def rewrite_endpoint(payload: RewriteRequest, request: Request) -> RewriteResponse:
        try:
            return await run_rewrite(request_payload=payload, runtime=_get_runtime(request.app))
        except CodeVariantsError as exc:
            raise _http_error(exc) from exc

    @app.post("/api/validate", response_model=ValidateResponse)
    async def validate_endpoint(payload: ValidateRequest, request: Request) -> ValidateResponse:
        try:
            return await run_validation(request_payload=payload, runtime=_get_runtime(request.app))
        except CodeVariantsError as exc:
            raise _http_error(exc) from exc

    return app


app = create_app()
