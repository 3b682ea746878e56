"""User-facing failure messages and error translation."""

from __future__ import annotations

from code_variants.constants import FailureKind, UiLanguage
from code_variants.errors import CodeVariantsError
from code_variants.utils.retry import is_transient_error

USER_MESSAGES: dict[UiLanguage, dict[FailureKind, str]] = {
    UiLanguage.ES: {
        FailureKind.OVERLOADED: (
            "El servicio de IA está temporalmente sobrecargado. "
            "Por favor, espera unos momentos e intenta nuevamente."
        ),
        FailureKind.REWRITE_FAILED: (
            "Error al generar el código reescrito. Por favor, verifica tu conexión e intenta de nuevo."
        ),
        FailureKind.VALIDATION_FAILED: (
            "Error al validar el código. Por favor, verifica tu conexión e intenta de nuevo."
        ),
    },
    UiLanguage.EN: {
        FailureKind.OVERLOADED: (
            "The AI service is temporarily overloaded. Please wait a moment and try again."
        ),
        FailureKind.REWRITE_FAILED: (
            "Failed to generate the rewritten code. Please check your connection and try again."
        ),
        FailureKind.VALIDATION_FAILED: (
            "Failed to validate the code. Please check your connection and try again."
        ),
    },
}


def user_message(kind: FailureKind, language: UiLanguage = UiLanguage.ES) -> str:
    return USER_MESSAGES[language][kind]


def translate_error(
    error: BaseException,
    fallback: FailureKind,
    language: UiLanguage = UiLanguage.ES,
) -> CodeVariantsError:
    """Collapse a technical error into the overloaded or generic message."""

    kind = FailureKind.OVERLOADED if is_transient_error(error) else fallback
    return CodeVariantsError(user_message(kind, language), kind=kind)
