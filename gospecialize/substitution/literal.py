"""
Substitution of a placeholder into a single token literal.
"""

from gospecialize.bindings import TypeBinding
from gospecialize.naming.cache import NameCache
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile


class LiteralSubstitutor:
    """
    Rewrites one literal for one placeholder binding.

    Three rules apply, in order:

    - a literal equal to the placeholder becomes the concrete type verbatim
    - a struct tag (``\\`json:...``) gets the snake_case form of the name
    - any other literal containing the placeholder gets the derived word,
      lower-cased at the front when the original identifier was unexported
    """

    def __init__(self, names: NameCache, profile: SyntaxProfile = GO_PROFILE):
        self.names = names
        self.profile = profile

    def substitute(self, literal: str, placeholder: str, binding: TypeBinding) -> str:
        """
        Substitute ``binding`` for ``placeholder`` in ``literal``.

        Args:
            literal: Token text (identifier, string, number)
            placeholder: Generic type name from the template
            binding: Concrete type to put in its place

        Returns:
            The rewritten literal, or the original when it has no placeholder
        """
        if literal == placeholder:
            return binding.concrete_type

        if placeholder not in literal:
            return literal

        if self.profile.is_struct_tag(literal):
            return self._substitute_struct_tag(literal, placeholder, binding)

        capitalized = self.names.wordify(binding.concrete_type, binding.override_name, True)
        result = literal.replace(placeholder, capitalized)

        if result.startswith(capitalized) and not self.profile.is_exported(literal):
            uncapitalized = self.names.wordify(binding.concrete_type, binding.override_name, False)
            return result.replace(capitalized, uncapitalized, 1)

        return result

    def _substitute_struct_tag(self, literal: str, placeholder: str, binding: TypeBinding) -> str:
        capitalized = self.names.wordify(binding.concrete_type, binding.override_name, True)
        return literal.replace(placeholder, self.names.tag_name(capitalized))
