"""Tests for the Gemini request helpers."""

from __future__ import annotations

import io
import json
import sys
import unittest
from pathlib import Path
from unittest.mock import patch
from urllib import error

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from code_variants.utils.gemini import (  # noqa: E402
    GenerationConfig,
    build_generate_content_body,
    generate_content,
    generate_content_url,
    request_generate_content,
    resolve_gemini_api_key,
)
from code_variants.utils.retry import is_transient_error  # noqa: E402


def _gemini_payload(*texts: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text} for text in texts]}}]}


class _FakeHTTPResponse:
    def __init__(self, payload: dict | str) -> None:
        raw = payload if isinstance(payload, str) else json.dumps(payload)
        self._raw = raw.encode("utf-8")

    def read(self) -> bytes:
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def _http_error(code: int, reason: str, body: str) -> error.HTTPError:
    return error.HTTPError(
        url="https://generativelanguage.googleapis.com",
        code=code,
        msg=reason,
        hdrs=None,
        fp=io.BytesIO(body.encode("utf-8")),
    )


class TestGenerationConfig(unittest.TestCase):
    def test_empty_config_is_left_out_of_body(self) -> None:
        body = build_generate_content_body("hello")
        self.assertEqual(body, {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]})

    def test_only_set_fields_are_sent(self) -> None:
        payload = GenerationConfig(seed=7).to_payload()
        self.assertEqual(payload, {"seed": 7})

    def test_zero_seed_is_still_sent(self) -> None:
        self.assertEqual(GenerationConfig(seed=0).to_payload(), {"seed": 0})

    def test_structured_output_fields_use_wire_names(self) -> None:
        schema = {"type": "OBJECT"}
        payload = GenerationConfig(response_mime_type="application/json", response_schema=schema).to_payload()
        self.assertEqual(payload, {"responseMimeType": "application/json", "responseSchema": schema})


class TestRequestGenerateContent(unittest.TestCase):
    def test_request_shape_and_text_extraction(self) -> None:
        captured: dict = {}

        def _mock_urlopen(req, timeout=20):
            captured["url"] = req.full_url
            captured["headers"] = dict(req.header_items())
            captured["body"] = json.loads(req.data.decode("utf-8"))
            captured["timeout"] = timeout
            return _FakeHTTPResponse(_gemini_payload("print(", "1)"))

        text = request_generate_content(
            api_key="test-key",
            model="gemini-2.5-flash",
            prompt="rewrite this",
            timeout_seconds=15,
            config=GenerationConfig(seed=3),
            urlopen_fn=_mock_urlopen,
        )

        self.assertEqual(text, "print(1)")
        self.assertEqual(captured["url"], generate_content_url("gemini-2.5-flash"))
        self.assertTrue(captured["url"].endswith("/models/gemini-2.5-flash:generateContent"))
        self.assertEqual(captured["headers"]["X-goog-api-key"], "test-key")
        self.assertEqual(captured["body"]["contents"][0]["parts"][0]["text"], "rewrite this")
        self.assertEqual(captured["body"]["generationConfig"], {"seed": 3})
        self.assertEqual(captured["timeout"], 15)

    def test_http_503_keeps_status_text_for_classification(self) -> None:
        body = json.dumps({"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}})

        def _mock_urlopen(req, timeout=20):
            raise _http_error(503, "Service Unavailable", body)

        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="test-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=_mock_urlopen,
            )

        message = str(ctx.exception)
        self.assertIn("Gemini call failed", message)
        self.assertIn("503", message)
        self.assertIn("UNAVAILABLE", message)
        self.assertTrue(is_transient_error(ctx.exception))

    def test_quota_error_digits_do_not_look_like_overload(self) -> None:
        body = json.dumps(
            {
                "error": {
                    "code": 429,
                    "message": "You exceeded your current quota. Please retry in 41.503217s.",
                    "status": "RESOURCE_EXHAUSTED",
                    "details": [{"retryDelay": "41.503217s", "quotaValue": "1503"}],
                }
            }
        )

        def _mock_urlopen(req, timeout=20):
            raise _http_error(429, "Too Many Requests", body)

        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="test-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=_mock_urlopen,
            )

        message = str(ctx.exception)
        self.assertIn("RESOURCE_EXHAUSTED", message)
        self.assertIn("You exceeded your current quota", message)
        self.assertNotIn("503", message)
        self.assertFalse(is_transient_error(ctx.exception))

    def test_non_json_error_body_is_dropped(self) -> None:
        def _mock_urlopen(req, timeout=20):
            raise _http_error(500, "Internal Server Error", "<html>trace id 5031</html>")

        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="test-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=_mock_urlopen,
            )

        self.assertEqual(str(ctx.exception), "Gemini call failed: HTTP Error 500: Internal Server Error")
        self.assertFalse(is_transient_error(ctx.exception))

    def test_http_400_is_terminal(self) -> None:
        body = json.dumps({"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}})

        def _mock_urlopen(req, timeout=20):
            raise _http_error(400, "Bad Request", body)

        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="bad-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=_mock_urlopen,
            )

        self.assertIn("API key not valid", str(ctx.exception))
        self.assertFalse(is_transient_error(ctx.exception))

    def test_network_error_is_wrapped(self) -> None:
        def _mock_urlopen(req, timeout=20):
            raise error.URLError("connection refused")

        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="test-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=_mock_urlopen,
            )
        self.assertIn("connection refused", str(ctx.exception))

    def test_malformed_payload_raises_format_error(self) -> None:
        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="test-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=lambda req, timeout=20: _FakeHTTPResponse({"unexpected": True}),
            )
        self.assertIn("Invalid Gemini response format", str(ctx.exception))

    def test_non_json_payload_raises_format_error(self) -> None:
        with self.assertRaises(RuntimeError) as ctx:
            request_generate_content(
                api_key="test-key",
                model="gemini-2.5-flash",
                prompt="x",
                timeout_seconds=5,
                urlopen_fn=lambda req, timeout=20: _FakeHTTPResponse("<html>oops</html>"),
            )
        self.assertIn("Invalid Gemini response format", str(ctx.exception))


class TestApiKeyResolution(unittest.TestCase):
    def test_explicit_key_wins(self) -> None:
        with patch.dict("os.environ", {"GEMINI_API_KEY": "env-key"}, clear=False):
            self.assertEqual(resolve_gemini_api_key("  explicit  ", "missing"), "explicit")

    def test_legacy_env_name_is_accepted(self) -> None:
        with patch.dict("os.environ", {"API_KEY": "legacy-key"}, clear=True):
            self.assertEqual(resolve_gemini_api_key(None, "missing"), "legacy-key")

    def test_missing_key_raises(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(RuntimeError) as ctx:
                resolve_gemini_api_key(None, "missing key")
        self.assertEqual(str(ctx.exception), "missing key")


class TestGenerateContentAsync(unittest.IsolatedAsyncioTestCase):
    async def test_async_wrapper_returns_text(self) -> None:
        text = await generate_content(
            api_key="test-key",
            model="gemini-2.5-flash",
            prompt="x",
            timeout_seconds=5,
            urlopen_fn=lambda req, timeout=20: _FakeHTTPResponse(_gemini_payload("done")),
        )
        self.assertEqual(text, "done")


if __name__ == "__main__":
    unittest.main()
