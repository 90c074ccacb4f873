"""
gospecialize: turns a generic Go template into concrete, type-specific code.

The public entry point is :func:`generics`, which validates, specializes and
assembles one template against any number of binding sets.
"""

from .assembler import Assembler, generics
from .bindings import TypeBinding, parse_binding_set, parse_type_sets
from .exceptions import (
    BindingParseError,
    GenerationError,
    ImportNormalizationError,
    MalformedSourceError,
    MissingBindingError,
    ProfileValidationError,
)
from .generator import Specializer
from .source import TemplateSource

__all__ = [
    "Assembler",
    "generics",
    "TypeBinding",
    "parse_binding_set",
    "parse_type_sets",
    "BindingParseError",
    "GenerationError",
    "ImportNormalizationError",
    "MalformedSourceError",
    "MissingBindingError",
    "ProfileValidationError",
    "Specializer",
    "TemplateSource",
]
