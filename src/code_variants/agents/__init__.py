"""Agent package exports."""

from code_variants.agents.rewrite_agent import rewrite_code
from code_variants.agents.signals import AgentSignals
from code_variants.agents.validation_agent import validate_code

__all__ = [
    "AgentSignals",
    "rewrite_code",
    "validate_code",
]
