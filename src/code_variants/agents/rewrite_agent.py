"""Rewrite agent: asks Gemini for a behaviorally equivalent variant of a script."""

from __future__ import annotations

import logging
from typing import Any, Callable

from code_variants.agents.prompts import build_rewrite_prompt
from code_variants.agents.signals import AgentSignals
from code_variants.constants import FailureKind
from code_variants.utils.code_fences import strip_code_fences
from code_variants.utils.gemini import GenerationConfig, generate_content
from code_variants.utils.messages import translate_error
from code_variants.utils.retry import SleepFn

LOGGER = logging.getLogger(__name__)


async def rewrite_code(
    original_code: str,
    instructions: str = "",
    seed: int | None = None,
    *,
    signals: AgentSignals | None = None,
    urlopen_fn: Callable[..., Any] | None = None,
    sleep: SleepFn | None = None,
) -> str:
    """Return a rewritten version of ``original_code`` with markdown fences removed.

    Raises ``CodeVariantsError`` with a user-facing message on any failure.
    """

    signals = signals or AgentSignals()
    prompt = build_rewrite_prompt(original_code, instructions)
    config = GenerationConfig(seed=seed)

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
        LOGGER.exception("Error calling Gemini API for rewrite.")
        raise translate_error(exc, FailureKind.REWRITE_FAILED, signals.ui_language) from exc

    return strip_code_fences(raw_text)
