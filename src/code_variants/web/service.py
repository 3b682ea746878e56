"""Service layer for web routes that invoke the agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from code_variants.agents import AgentSignals, rewrite_code, validate_code
from code_variants.config import AppConfig, log_startup_diagnostics
from code_variants.logging_config import configure_logging
from code_variants.web.schemas import RewriteRequest, RewriteResponse, ValidateRequest, ValidateResponse

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebRuntime:
    """Runtime objects reused across requests."""

    config: AppConfig
    signals: AgentSignals


def initialize_runtime(env_file: str = ".env") -> WebRuntime:
    """Load config and agent settings for the web server."""

    config = AppConfig.from_env(env_file=env_file)
    configure_logging(config.log_level)
    log_startup_diagnostics(config)
    return WebRuntime(config=config, signals=AgentSignals.from_config(config))


def _elapsed_ms(started_at: float) -> int:
    return max(int((perf_counter() - started_at) * 1000), 0)


async def run_rewrite(request_payload: RewriteRequest, runtime: WebRuntime) -> RewriteResponse:
    started_at = perf_counter()
    code = await rewrite_code(
        request_payload.code,
        request_payload.instructions,
        request_payload.seed,
        signals=runtime.signals,
    )
    return RewriteResponse(code=code, runtime_ms=_elapsed_ms(started_at))


async def run_validation(request_payload: ValidateRequest, runtime: WebRuntime) -> ValidateResponse:
    started_at = perf_counter()
    analysis = await validate_code(
        request_payload.original_code,
        request_payload.generated_code,
        signals=runtime.signals,
    )
    return ValidateResponse(
        **analysis.model_dump(),
        runtime_ms=_elapsed_ms(started_at),
    )
