"""Shared Gemini request helpers used by the rewrite and validation agents."""

from __future__ import annotations

import asyncio
import json
import re
from dataclasses import dataclass
from typing import Any, Callable
from urllib import error, parse, request

from code_variants.config import read_api_key_from_env

GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")


@dataclass(frozen=True)
class GenerationConfig:
    """Optional generation settings; unset fields are left out of the request."""

    seed: int | None = None
    temperature: float | None = None
    response_mime_type: str | None = None
    response_schema: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.seed is not None:
            payload["seed"] = self.seed
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.response_mime_type is not None:
            payload["responseMimeType"] = self.response_mime_type
        if self.response_schema is not None:
            payload["responseSchema"] = self.response_schema
        return payload


def resolve_gemini_api_key(explicit_api_key: str | None, missing_key_error: str) -> str:
    if explicit_api_key and explicit_api_key.strip():
        return explicit_api_key.strip()
    env_key = read_api_key_from_env()
    if env_key:
        return env_key
    raise RuntimeError(missing_key_error)


def generate_content_url(model: str) -> str:
    return f"{GEMINI_API_BASE_URL}/models/{parse.quote(model, safe='.-_')}:generateContent"


def build_generate_content_body(prompt: str, config: GenerationConfig | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
    }
    generation_config = (config or GenerationConfig()).to_payload()
    if generation_config:
        body["generationConfig"] = generation_config
    return body


def _error_detail(exc: error.HTTPError) -> str:
    """Return ``status: message`` from a Gemini error body, or an empty string."""

    try:
        payload = json.loads(exc.read().decode("utf-8", errors="replace"))
    except (OSError, ValueError):
        return ""
    details = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(details, dict):
        return ""
    status = str(details.get("status", "")).strip()
    # Numbers in the message (retry delays, quota values) must not match status-code markers.
    message = NUMBER_PATTERN.sub("#", str(details.get("message", ""))).strip()
    return ": ".join(part for part in (status, message) if part)


def extract_response_text(parsed_response: object) -> str:
    """Join the text parts of the first candidate."""

    if not isinstance(parsed_response, dict):
        raise TypeError("response payload is not a JSON object")
    candidates = parsed_response.get("candidates")
    if not candidates:
        feedback = parsed_response.get("promptFeedback")
        raise ValueError(f"response contained no candidates (promptFeedback={feedback})")
    parts = candidates[0]["content"]["parts"]
    return "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))


def request_generate_content(
    *,
    api_key: str,
    model: str,
    prompt: str,
    timeout_seconds: int,
    config: GenerationConfig | None = None,
    urlopen_fn: Callable[..., Any] | None = None,
    network_error_prefix: str = "Gemini call failed",
    format_error_prefix: str = "Invalid Gemini response format",
) -> str:
    """Send one generateContent request and return the response text."""

    body = build_generate_content_body(prompt, config)
    req = request.Request(
        url=generate_content_url(model),
        data=json.dumps(body).encode("utf-8"),
        headers={
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        },
        method="POST",
    )

    sender = urlopen_fn or request.urlopen
    try:
        with sender(req, timeout=timeout_seconds) as resp:
            raw_response = resp.read().decode("utf-8")
    except error.HTTPError as exc:
        # The error status (e.g. UNAVAILABLE) is kept for retry decisions.
        detail = _error_detail(exc)
        raise RuntimeError(f"{network_error_prefix}: {exc} {detail}".rstrip()) from exc
    except (error.URLError, TimeoutError, OSError) as exc:
        raise RuntimeError(f"{network_error_prefix}: {exc}") from exc

    try:
        parsed_response = json.loads(raw_response)
        return extract_response_text(parsed_response)
    except (json.JSONDecodeError, KeyError, IndexError, TypeError, ValueError) as exc:
        raise RuntimeError(f"{format_error_prefix}: {exc}") from exc


async def generate_content(
    *,
    api_key: str | None,
    model: str,
    prompt: str,
    timeout_seconds: int,
    config: GenerationConfig | None = None,
    urlopen_fn: Callable[..., Any] | None = None,
) -> str:
    """Run ``request_generate_content`` in a worker thread."""

    resolved_key = resolve_gemini_api_key(api_key, "GEMINI_API_KEY is required to call Gemini.")
    return await asyncio.to_thread(
        request_generate_content,
        api_key=resolved_key,
        model=model,
        prompt=prompt,
        timeout_seconds=timeout_seconds,
        config=config,
        urlopen_fn=urlopen_fn,
    )
