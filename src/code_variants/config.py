"""Configuration loading for the code variants service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from code_variants.constants import DEFAULT_MODEL_NAME, UiLanguage

LOGGER = logging.getLogger(__name__)


def read_api_key_from_env() -> str:
    # API_KEY is the name older deployments used for the same secret.
    return (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()


def _read_ui_language() -> UiLanguage:
    raw = os.getenv("CV_UI_LANGUAGE", UiLanguage.ES.value).strip().upper()
    try:
        return UiLanguage(raw)
    except ValueError:
        LOGGER.warning("Unknown CV_UI_LANGUAGE %r, falling back to %s.", raw, UiLanguage.ES.value)
        return UiLanguage.ES


@dataclass(frozen=True)
class AppConfig:
    gemini_api_key: str
    model_name: str = DEFAULT_MODEL_NAME
    retry_max_attempts: int = 3
    retry_initial_delay_ms: int = 2000
    request_timeout_seconds: int = 60
    ui_language: UiLanguage = UiLanguage.ES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        return cls(
            gemini_api_key=read_api_key_from_env(),
            model_name=os.getenv("CV_MODEL_NAME", DEFAULT_MODEL_NAME).strip() or DEFAULT_MODEL_NAME,
            retry_max_attempts=int(os.getenv("CV_RETRY_MAX_ATTEMPTS", "3")),
            retry_initial_delay_ms=int(os.getenv("CV_RETRY_INITIAL_DELAY_MS", "2000")),
            request_timeout_seconds=int(os.getenv("CV_REQUEST_TIMEOUT_SECONDS", "60")),
            ui_language=_read_ui_language(),
            log_level=os.getenv("CV_LOG_LEVEL", "INFO").upper(),
        )


def log_startup_diagnostics(config: AppConfig, logger: logging.Logger | None = None) -> bool:
    """Report a missing credential without stopping the process.

    Requests made without a key still go through and fail at the remote call.
    """

    if config.gemini_api_key:
        return True
    (logger or LOGGER).error("GEMINI_API_KEY environment variable not set.")
    return False
