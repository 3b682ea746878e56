"""Domain enums and constants for the code variants service."""

from __future__ import annotations

from enum import Enum

DEFAULT_MODEL_NAME = "gemini-2.5-flash"

# Substrings the remote service uses for overload / unavailability errors.
TRANSIENT_ERROR_MARKERS = ("503", "overloaded", "UNAVAILABLE")


class UiLanguage(str, Enum):
    ES = "ES"
    EN = "EN"


class ModificationTechnique(str, Enum):
    LITERAL_COPY = "Copia Literal"
    COMMENT_CHANGES = "Modificación de Comentarios"
    FORMAT_CHANGES = "Cambio de Formato"
    IDENTIFIER_RENAMING = "Renombrado de Identificadores"
    CODE_REORDERING = "Reordenación de Código"
    DATA_TYPE_CHANGES = "Cambio de Tipos de Datos"
    REDUNDANT_STATEMENTS = "Instrucciones Redundantes"
    EQUIVALENT_CONTROL_FLOW = "Estructuras de Control Equivalentes"
    FUNCTIONALITY_CHANGES = "Modificación de Funcionalidad"


class FailureKind(str, Enum):
    OVERLOADED = "OVERLOADED"
    REWRITE_FAILED = "REWRITE_FAILED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
