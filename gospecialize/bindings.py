"""
Type bindings: which concrete type replaces which placeholder.

A binding is written ``"int"`` or ``"int:count"``; the part after the colon,
when present, is used verbatim wherever the placeholder appears inside a
larger identifier. Type-set arguments in the form
``"KeyType=string,int ValueType=int"`` expand to the cartesian product of
their values, one binding set per combination.
"""

import itertools
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Union

from gospecialize.exceptions import BindingParseError


BUILTINS = [
    "bool", "byte", "complex128", "complex64", "error", "float32", "float64",
    "int", "int16", "int32", "int64", "int8", "rune", "string",
    "uint", "uint16", "uint32", "uint64", "uint8", "uintptr",
]

NUMBERS = [
    "float32", "float64",
    "int", "int16", "int32", "int64", "int8",
    "uint", "uint16", "uint32", "uint64", "uint8",
]

_EXPANSIONS = {"BUILTINS": BUILTINS, "NUMBERS": NUMBERS}


@dataclass(frozen=True)
class TypeBinding:
    """
    Concrete type bound to one placeholder.

    Attributes:
        concrete_type: Type spelling pasted where the placeholder stands alone
        override_name: Name used verbatim inside compound identifiers
    """
    concrete_type: str
    override_name: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> 'TypeBinding':
        """Parse ``"Type"`` or ``"Type:name"``."""
        if ":" in text:
            parts = text.split(":")
            return cls(concrete_type=parts[0], override_name=parts[1] or None)
        return cls(concrete_type=text)

    def __str__(self) -> str:
        if self.override_name:
            return f"{self.concrete_type}:{self.override_name}"
        return self.concrete_type


BindingSet = Dict[str, TypeBinding]


def parse_binding_set(mapping: Mapping[str, Union[str, TypeBinding]]) -> BindingSet:
    """Normalize a mapping of placeholder to binding text into a BindingSet."""
    binding_set: BindingSet = {}
    for placeholder, value in mapping.items():
        if isinstance(value, TypeBinding):
            binding_set[placeholder] = value
        else:
            binding_set[placeholder] = TypeBinding.parse(value)
    return binding_set


def parse_type_sets(arg: str) -> List[BindingSet]:
    """
    Parse a type-set argument into binding sets.

    Args:
        arg: Space separated ``Placeholder=Type[,Type...]`` pairs

    Returns:
        One binding set per combination of values, placeholders in order of
        first appearance

    Raises:
        BindingParseError: If a pair is malformed or a placeholder repeats
    """
    choices: Dict[str, List[str]] = {}

    for pair in arg.split():
        if "=" not in pair:
            raise BindingParseError(f"Invalid type set (expected Placeholder=Type): {pair}")
        placeholder, values = pair.split("=", 1)
        if not placeholder:
            raise BindingParseError(f"Missing placeholder in type set: {pair}")
        if placeholder in choices:
            raise BindingParseError(f"Placeholder '{placeholder}' specified more than once")

        types: List[str] = []
        for value in values.split(","):
            value = value.strip()
            if not value:
                raise BindingParseError(f"Missing type for placeholder '{placeholder}': {pair}")
            types.extend(_EXPANSIONS.get(value, [value]))
        choices[placeholder] = types

    if not choices:
        raise BindingParseError("No type sets given")

    placeholders = list(choices)
    return [
        {placeholder: TypeBinding.parse(value) for placeholder, value in zip(placeholders, combo)}
        for combo in itertools.product(*(choices[p] for p in placeholders))
    ]
