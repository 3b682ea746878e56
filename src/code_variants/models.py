"""Result contracts returned by the agents."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValidationAnalysis(BaseModel):
    """Structured comparison of an original script and a generated variant."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    applied_techniques: list[str] = Field(alias="appliedTechniques")
    functional_equivalence: str = Field(alias="functionalEquivalence")
    implementation_analysis: str = Field(alias="implementationAnalysis")

    @field_validator("applied_techniques", mode="before")
    @classmethod
    def _strip_techniques(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return [str(item).strip() for item in value if str(item).strip()]


# Gemini structured-output schema mirroring ValidationAnalysis.
VALIDATION_RESPONSE_SCHEMA: dict[str, object] = {
    "type": "OBJECT",
    "properties": {
        "appliedTechniques": {
            "type": "ARRAY",
            "description": "Lista de las técnicas de modificación que fueron aplicadas al código original.",
            "items": {"type": "STRING"},
        },
        "functionalEquivalence": {
            "type": "STRING",
            "description": (
                "Análisis conciso (1-2 frases) sobre si el código generado es "
                "funcionalmente equivalente al original."
            ),
        },
        "implementationAnalysis": {
            "type": "STRING",
            "description": (
                "Evaluación concisa (1-2 frases) de si el cambio es trivial o "
                "representa un enfoque algorítmico diferente."
            ),
        },
    },
    "required": ["appliedTechniques", "functionalEquivalence", "implementationAnalysis"],
}
