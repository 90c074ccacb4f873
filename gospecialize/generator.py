"""
Specialization of one template for one binding set.
"""

import logging
from typing import Mapping, Optional, Union

from gospecialize.bindings import BindingSet, TypeBinding, parse_binding_set
from gospecialize.naming.cache import NameCache
from gospecialize.source import TemplateSource
from gospecialize.substitution.line import LineSpecializer
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile
from gospecialize.validator import TemplateValidator


logger = logging.getLogger(__name__)


class Specializer:
    """
    One generation session.

    Owns the name cache shared by every binding set it specializes, so
    sessions never share mutable state with each other.
    """

    def __init__(
        self,
        profile: SyntaxProfile = GO_PROFILE,
        names: Optional[NameCache] = None,
        preserve_inline_comments: bool = False
    ):
        """
        Initialize a session.

        Args:
            profile: Syntax conventions of the template language
            names: Name cache to use; a fresh one when omitted
            preserve_inline_comments: Keep comments on rewritten lines
        """
        self.profile = profile
        self.names = names if names is not None else NameCache()
        self.validator = TemplateValidator(profile)
        self.lines = LineSpecializer(self.names, profile, preserve_inline_comments)

    def generate_specific(
        self,
        source: TemplateSource,
        binding_set: Mapping[str, Union[str, TypeBinding]]
    ) -> str:
        """
        Produce the specialized fragment for one binding set.

        Validation completes before any line is produced, so a failing
        binding set yields no output at all.

        Args:
            source: Rewindable template
            binding_set: Placeholder to ``"Type"``/``"Type:name"`` or TypeBinding

        Returns:
            The specialized text, one newline-terminated line per kept line

        Raises:
            MalformedSourceError: If the template does not parse
            MissingBindingError: If a generic type has no binding
        """
        bindings: BindingSet = parse_binding_set(binding_set)
        self.validator.validate(source, bindings)

        summary = ", ".join(f"{k}={v}" for k, v in bindings.items())
        logger.info(f"Specializing {source.filename or '<template>'} for {summary}")

        return "".join(self.lines.specialize(source.lines(), bindings))
