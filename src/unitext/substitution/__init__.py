"""Substitution package exports."""
from .engines import SubstitutionEngine, gsub
from .strategies import (
    CallbackReplacement,
    LookupReplacement,
    TemplateReplacement,
    apply_directive,
    coerce_replacement,
    resolve_directive,
)

__all__ = [
    "SubstitutionEngine",
    "gsub",
    "CallbackReplacement",
    "LookupReplacement",
    "TemplateReplacement",
    "apply_directive",
    "coerce_replacement",
    "resolve_directive",
]
