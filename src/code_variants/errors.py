"""Caller-facing errors for the code variants service."""

from __future__ import annotations

from code_variants.constants import FailureKind


class CodeVariantsError(RuntimeError):
    """A failed request, already translated to a message safe to show users."""

    def __init__(self, message: str, kind: FailureKind) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def overloaded(self) -> bool:
        return self.kind is FailureKind.OVERLOADED
