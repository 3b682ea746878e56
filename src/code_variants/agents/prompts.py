"""Prompt templates sent to Gemini (kept in Spanish, the language of the UI they were written for)."""

from __future__ import annotations

from code_variants.constants import ModificationTechnique

REWRITE_PROMPT_HEADER = """Actúa como un generador de variantes de código Python. Tu tarea es recibir un script y crear una versión alternativa.

**PROCESO DE DECISIÓN OBLIGATORIO:**

** Elige **una o más** de las siguientes técnicas de modificación para aplicar al código original.

    **Técnicas de Modificación :**
    1.  **Modificación de Comentarios:** Elimina, cambia o agrega nuevos comentarios en el código. Los comentarios deben relacionarse con la lógica del código, no sobre el proceso de generación.
    2.  **Cambio de Formato:** Modifica los espacios en blanco, indentación y formato general (PEP 8) sin afectar la lógica.
    3.  **Renombrado de Identificadores:** Cambia los nombres de variables, funciones, clases y otros identificadores por nombres equivalentes o menos descriptivos.
    4.  **Reordenación de Código:** Cambia el orden de bloques de código o de declaraciones (siempre que la lógica lo permita), (ej. a+b vs b+a o bloques de codigos reordenados).
    5.  **Cambio de Tipos de Datos:** Sustituye tipos de datos por otros que sean funcionalmente equivalentes (ej. una lista por una tupla si no se modificará).
    6.  **Instrucciones Redundantes:** Agrega variables o instrucciones que no afecten el resultado final del programa.
    7.  **Estructuras de Control Equivalentes:** Reemplaza estructuras como `if-elif-else` por un diccionario o múltiples `if` anidados, o un bucle `for` por un `while`.
    8.  **Modificación de Funcionalidad:** Agrega o elimina funciones o comportamiento que no impacten la funcionalidad principal del script, como funciones de registro o impresiones de depuración.

**REGLAS ESTRICTAS DE SALIDA (APLICAN A AMBAS ESTRATEGIAS):**
- El código generado debe ser **sintácticamente correcto** y **ejecutable**.
- **NO** agregues explicaciones, texto introductorio, ni formato markdown como ```python.
- **NO** incluyas comentarios que expliquen las técnicas que usaste o que esta es una versión generada (ej: "# Versión con bucle while", "# Código generado por IA").
- **SOLO** devuelve el código Python puro. Tu respuesta debe ser directamente el código, sin nada más antes o después.
- Genere una versión que no haya generado previamente si se le solicita varias veces.
"""

REWRITE_INSTRUCTIONS_BLOCK = """
**Instrucciones Adicionales del Usuario (estas instrucciones tienen prioridad sobre la selección aleatoria de técnicas):**
{instructions}
"""

VALIDATION_PROMPT_HEADER = """
Eres un ingeniero de software senior experto en Python. Tu tarea es analizar dos fragmentos de código: uno original y una versión generada.

Tu objetivo es identificar qué técnicas de modificación, de la lista provista, se usaron para crear la versión generada. Luego, analiza la equivalencia funcional y la naturaleza de la implementación.


**Técnicas de Modificación Posibles a Identificar:**
** Esta puede aparecer pero sola (no acompañada de otras tecnicas)**
- {literal_copy}
**Estas pueden aparecer solas o en conjunto con otras**
{combinable_techniques}

**Análisis Requerido:**
Devuelve tu análisis en un formato JSON que se ajuste estrictamente al esquema proporcionado. No incluyas explicaciones adicionales fuera del JSON.

1.  **appliedTechniques**: Un array de strings con los nombres exactos de las técnicas que detectaste de la lista anterior.
2.  **functionalEquivalence**: Un string de 1-2 oraciones que resuma si el código generado es funcionalmente idéntico. Menciona errores si los encuentras.
3.  **implementationAnalysis**: Un string de 1-2 oraciones que evalúe si el cambio es trivial o si representa un enfoque algorítmico significativamente diferente.
"""


def _python_block(title: str, code: str) -> str:
    return f"**{title}:**\n```python\n{code}\n```\n"


def build_rewrite_prompt(original_code: str, instructions: str = "") -> str:
    parts = [REWRITE_PROMPT_HEADER, "\n", _python_block("Código Original", original_code)]
    if instructions and instructions.strip():
        parts.append(REWRITE_INSTRUCTIONS_BLOCK.format(instructions=instructions.strip()))
    parts.append("\n**Nuevo Código Python:**\n")
    return "".join(parts)


def build_validation_prompt(original_code: str, generated_code: str) -> str:
    combinable = "\n".join(
        f"- {technique.value}"
        for technique in ModificationTechnique
        if technique is not ModificationTechnique.LITERAL_COPY
    )
    header = VALIDATION_PROMPT_HEADER.format(
        literal_copy=ModificationTechnique.LITERAL_COPY.value,
        combinable_techniques=combinable,
    )
    return "".join(
        [
            header,
            "\n",
            _python_block("Código Original", original_code),
            "\n",
            _python_block("Código Generado", generated_code),
        ]
    )
