"""Binding validation against a template's generic declarations."""

import logging
from typing import List, Mapping

from gospecialize.exceptions import MalformedSourceError, MissingBindingError
from gospecialize.source import TemplateSource
from gospecialize.syntax.declarations import SourceFile, TypeSpec, parse_source
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile


logger = logging.getLogger(__name__)


class TemplateValidator:
    """Checks that every generic type in a template has a binding."""

    def __init__(self, profile: SyntaxProfile = GO_PROFILE):
        self.profile = profile

    def parse(self, source: TemplateSource) -> SourceFile:
        """Parse the template from the start; raises MalformedSourceError."""
        try:
            text = source.read()
        except UnicodeDecodeError as e:
            raise MalformedSourceError(f"illegal UTF-8 encoding at byte {e.start}", source.filename)
        return parse_source(text, source.filename, self.profile)

    def generic_declarations(self, source_file: SourceFile) -> List[TypeSpec]:
        """Type specs declared as a selector on the generics marker package."""
        return [
            spec for spec in source_file.type_specs()
            if spec.selector_root() == self.profile.generic_package
        ]

    def validate(self, source: TemplateSource, binding_set: Mapping[str, object]) -> SourceFile:
        """
        Validate a binding set against the template.

        Args:
            source: Template to inspect
            binding_set: Bindings keyed by placeholder name

        Returns:
            The parsed declaration tree

        Raises:
            MalformedSourceError: If the template does not parse
            MissingBindingError: For the first generic type without a binding
        """
        source_file = self.parse(source)

        for spec in self.generic_declarations(source_file):
            if spec.name not in binding_set:
                logger.debug(f"No binding for generic type '{spec.name}' declared on line {spec.line}")
                raise MissingBindingError(spec.name)

        return source_file
