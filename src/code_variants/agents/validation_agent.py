"""Validation agent: asks Gemini how a generated variant relates to the original script."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from pydantic import ValidationError

from code_variants.agents.prompts import build_validation_prompt
from code_variants.agents.signals import AgentSignals
from code_variants.constants import FailureKind
from code_variants.errors import CodeVariantsError
from code_variants.models import VALIDATION_RESPONSE_SCHEMA, ValidationAnalysis
from code_variants.utils.gemini import GenerationConfig, generate_content
from code_variants.utils.messages import translate_error, user_message
from code_variants.utils.retry import SleepFn

LOGGER = logging.getLogger(__name__)


def parse_validation_analysis(raw_text: str) -> ValidationAnalysis:
    try:
        payload = json.loads(raw_text.strip())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Gemini validation response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Gemini validation response must be a JSON object.")
    return ValidationAnalysis.model_validate(payload)


async def validate_code(
    original_code: str,
    generated_code: str,
    *,
    signals: AgentSignals | None = None,
    urlopen_fn: Callable[..., Any] | None = None,
    sleep: SleepFn | None = None,
) -> ValidationAnalysis:
    """Compare two scripts and return the structured analysis.

    Only the remote call is retried; a response that fails to parse is a
    terminal failure. Raises ``CodeVariantsError`` with a user-facing message.
    """

    signals = signals or AgentSignals()
    prompt = build_validation_prompt(original_code, generated_code)
    config = GenerationConfig(
        response_mime_type="application/json",
        response_schema=VALIDATION_RESPONSE_SCHEMA,
    )

    async def _call() -> str:
        return await generate_content(
            api_key=signals.gemini_api_key,
            model=signals.gemini_model,
            prompt=prompt,
            timeout_seconds=signals.gemini_timeout_seconds,
            config=config,
            urlopen_fn=urlopen_fn,
        )

    try:
        raw_text = await signals.retry_policy.run(_call, sleep=sleep)
    except Exception as exc:
        LOGGER.exception("Error calling Gemini API for validation.")
        raise translate_error(exc, FailureKind.VALIDATION_FAILED, signals.ui_language) from exc

    try:
        return parse_validation_analysis(raw_text)
    except (ValueError, ValidationError) as exc:
        # Parser messages carry offsets (e.g. "char 503") that must not read as overload.
        LOGGER.exception("Error parsing Gemini API response for validation.")
        raise CodeVariantsError(
            user_message(FailureKind.VALIDATION_FAILED, signals.ui_language),
            kind=FailureKind.VALIDATION_FAILED,
        ) from exc
