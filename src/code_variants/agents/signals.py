"""Per-call settings shared by the rewrite and validation agents."""

from __future__ import annotations

from dataclasses import dataclass

from code_variants.config import AppConfig
from code_variants.constants import DEFAULT_MODEL_NAME, UiLanguage
from code_variants.utils.retry import RetryPolicy

# Both remote calls use 3 attempts starting at a 2 second backoff.
DEFAULT_AGENT_RETRY_POLICY = RetryPolicy(max_attempts=3, initial_delay_ms=2000)


@dataclass(frozen=True)
class AgentSignals:
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_MODEL_NAME
    gemini_timeout_seconds: int = 60
    retry_policy: RetryPolicy = DEFAULT_AGENT_RETRY_POLICY
    ui_language: UiLanguage = UiLanguage.ES

    @classmethod
    def from_config(cls, config: AppConfig) -> "AgentSignals":
        return cls(
            gemini_api_key=config.gemini_api_key or None,
            gemini_model=config.model_name,
            gemini_timeout_seconds=config.request_timeout_seconds,
            retry_policy=RetryPolicy(
                max_attempts=config.retry_max_attempts,
                initial_delay_ms=config.retry_initial_delay_ms,
            ),
            ui_language=config.ui_language,
        )
