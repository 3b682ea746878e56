"""Utility package exports."""

from code_variants.utils.code_fences import strip_code_fences
from code_variants.utils.gemini import GenerationConfig, generate_content, request_generate_content
from code_variants.utils.messages import translate_error, user_message
from code_variants.utils.retry import RetryPolicy, is_transient_error, retry_with_backoff

__all__ = [
    "strip_code_fences",
    "GenerationConfig",
    "generate_content",
    "request_generate_content",
    "translate_error",
    "user_message",
    "RetryPolicy",
    "is_transient_error",
    "retry_with_backoff",
]
