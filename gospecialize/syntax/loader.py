"""Syntax profile and bindings file loading with strict validation."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from gospecialize.bindings import BindingSet, TypeBinding
from gospecialize.exceptions import ProfileValidationError, ValidationError
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile


logger = logging.getLogger(__name__)


class ProfileLoader:
    """Loads syntax profiles and binding files from YAML."""

    STRING_FIELDS = {
        'package_keyword', 'import_keyword', 'open_paren', 'close_paren',
        'generic_package', 'line_comment', 'header'
    }
    LIST_FIELDS = {'generic_markers', 'struct_tag_prefixes', 'unwanted_line_prefixes'}
    # Fields that may legitimately be empty
    OPTIONAL_EMPTY = {'header', 'unwanted_line_prefixes', 'struct_tag_prefixes'}

    def __init__(self, base: SyntaxProfile = GO_PROFILE):
        """Initialize loader with the profile that file values override."""
        self.base = base
        self.errors: List[ValidationError] = []

    def load_profile(self, profile_path: Path) -> SyntaxProfile:
        """Load a YAML profile and apply it over the base profile."""
        self.errors = []
        data = self._read_yaml(profile_path)

        if data is None:
            # Empty file: nothing to override
            return self.base

        if not isinstance(data, dict):
            self._add_error("Profile must be a YAML object/dictionary")
            self._raise_validation_errors()

        overrides: Dict[str, Any] = {}
        for key, value in data.items():
            if key in self.STRING_FIELDS:
                if not isinstance(value, str):
                    self._add_error(f"must be a string, got {type(value).__name__}", key)
                elif not value and key not in self.OPTIONAL_EMPTY:
                    self._add_error("cannot be empty", key)
                else:
                    overrides[key] = value
            elif key in self.LIST_FIELDS:
                items = self._validate_string_list(value, key)
                if items is not None:
                    overrides[key] = tuple(items)
            else:
                self._add_error(f"Unknown field '{key}'")

        if self.errors:
            self._raise_validation_errors()

        logger.debug(f"Loaded syntax profile overrides from {profile_path}: {sorted(overrides)}")
        return self.base.with_overrides(**overrides)

    def load_binding_sets(self, bindings_path: Path) -> List[BindingSet]:
        """
        Load binding sets from a YAML file.

        The file holds a list of mappings from placeholder to "Type" or
        "Type:name".

        Args:
            bindings_path: Path to the YAML file

        Returns:
            Binding sets in file order
        """
        self.errors = []
        data = self._read_yaml(bindings_path)

        if not isinstance(data, list) or not data:
            self._add_error("Bindings file must contain a non-empty list of mappings")
            self._raise_validation_errors()

        binding_sets: List[BindingSet] = []
        for i, entry in enumerate(data):
            path = f"[{i}]"
            if not isinstance(entry, dict) or not entry:
                self._add_error("must be a non-empty mapping of placeholder to type", path)
                continue

            binding_set: BindingSet = {}
            for placeholder, value in entry.items():
                if not isinstance(placeholder, str) or not placeholder:
                    self._add_error(f"placeholder names must be non-empty strings, got {placeholder!r}", path)
                    continue
                if not isinstance(value, str) or not value:
                    self._add_error("type must be a non-empty string", f"{path}.{placeholder}")
                    continue
                binding_set[placeholder] = TypeBinding.parse(value)
            binding_sets.append(binding_set)

        if self.errors:
            self._raise_validation_errors()

        return binding_sets

    def _read_yaml(self, path: Path) -> Any:
        try:
            with open(path, 'r') as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse {path}: {e}")
            self._raise_validation_errors()

    def _validate_string_list(self, value: Any, key: str) -> Union[List[str], None]:
        if not isinstance(value, list):
            self._add_error(f"must be a list of strings, got {type(value).__name__}", key)
            return None

        valid = True
        for i, item in enumerate(value):
            if not isinstance(item, str) or not item:
                self._add_error("must be a non-empty string", f"{key}[{i}]")
                valid = False

        if not value and key not in self.OPTIONAL_EMPTY:
            self._add_error("cannot be empty", key)
            valid = False

        return value if valid else None

    def _add_error(self, message: str, path: str = ""):
        """Add a validation error."""
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        """Raise collected validation errors."""
        raise ProfileValidationError(self.errors)


def load_profile(profile_path: Path, base: SyntaxProfile = GO_PROFILE) -> SyntaxProfile:
    """Convenience wrapper around :meth:`ProfileLoader.load_profile`."""
    return ProfileLoader(base).load_profile(profile_path)
