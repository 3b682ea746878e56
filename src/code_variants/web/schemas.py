"""HTTP request/response schemas for the web API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _reject_blank(value: object) -> object:
    # Non-strings go through untouched so the str type check rejects them.
    if isinstance(value, str) and not value.strip():
        raise ValueError("Field cannot be empty.")
    return value


class RewriteRequest(BaseModel):
    """Payload accepted by the rewrite endpoint."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(min_length=1)
    instructions: str = ""
    seed: int | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _require_code(cls, value: object) -> object:
        return _reject_blank(value)

    @field_validator("instructions", mode="before")
    @classmethod
    def _normalize_instructions(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value


class RewriteResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    runtime_ms: int


class ValidateRequest(BaseModel):
    """Payload accepted by the validation endpoint."""

    model_config = ConfigDict(extra="forbid")

    original_code: str = Field(min_length=1)
    generated_code: str = Field(min_length=1)

    @field_validator("original_code", "generated_code", mode="before")
    @classmethod
    def _require_code(cls, value: object) -> object:
        return _reject_blank(value)


class ValidateResponse(BaseModel):
    """Validation analysis plus timing, keyed the way the UI reads it."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    applied_techniques: list[str] = Field(alias="appliedTechniques")
    functional_equivalence: str = Field(alias="functionalEquivalence")
    implementation_analysis: str = Field(alias="implementationAnalysis")
    runtime_ms: int
