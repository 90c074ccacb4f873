"""
Line-by-line specialization of a template for one binding set.
"""

import logging
from typing import Iterable, Iterator, Optional

from gospecialize.bindings import BindingSet, TypeBinding
from gospecialize.naming.cache import NameCache
from gospecialize.substitution.literal import LiteralSubstitutor
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile
from gospecialize.syntax.tokens import TokenKind, classify_line


logger = logging.getLogger(__name__)

LINE_TERMINATORS = "\r\n"


def make_line(text: str) -> str:
    """Strip any trailing CR/LF and terminate with a single newline."""
    return text.rstrip(LINE_TERMINATORS) + "\n"


class LineSpecializer:
    """
    Applies a binding set to template lines.

    Lines holding a generic marker (``generic.Type``) are dropped together
    with the comment line right above them. Other lines are re-tokenized for
    every placeholder they contain and re-joined with single blanks; leading
    indentation is kept.

    In-line comment tokens met during re-tokenization come out empty unless
    ``preserve_inline_comments`` is set, in which case their words are
    substituted like identifiers.
    """

    def __init__(
        self,
        names: NameCache,
        profile: SyntaxProfile = GO_PROFILE,
        preserve_inline_comments: bool = False
    ):
        self.profile = profile
        self.literals = LiteralSubstitutor(names, profile)
        self.preserve_inline_comments = preserve_inline_comments

    def specialize(self, lines: Iterable[str], binding_set: BindingSet) -> Iterator[str]:
        """
        Specialize template lines.

        Args:
            lines: Template lines, terminators optional
            binding_set: Placeholder to concrete type bindings

        Yields:
            Output lines, each ending in a single newline
        """
        pending_comment: Optional[str] = None

        for line in lines:
            if self.profile.is_generic_marker_line(line):
                if pending_comment is not None:
                    logger.debug(f"Dropping comment above generic declaration: {pending_comment.strip()}")
                pending_comment = None
                continue

            for placeholder, binding in binding_set.items():
                if placeholder in line:
                    line = self.substitute_line(line, placeholder, binding)

            if pending_comment is not None:
                yield make_line(pending_comment)
                pending_comment = None

            if line.startswith(self.profile.line_comment):
                pending_comment = line
                continue

            yield make_line(line)

    def substitute_line(self, line: str, placeholder: str, binding: TypeBinding) -> str:
        """Re-tokenize ``line`` and substitute one placeholder into its tokens."""
        parts = []
        for token in classify_line(line):
            if token.kind == TokenKind.LITERAL:
                parts.append(self.literals.substitute(token.value, placeholder, binding))
            elif token.kind == TokenKind.COMMENT:
                parts.append(self.substitute_comment(token.value, placeholder, binding))
            else:
                parts.append(token.value)

        stripped = line.lstrip(" \t")
        indent = line[:len(line) - len(stripped)]
        return indent + " ".join(part for part in parts if part)

    def substitute_comment(self, comment: str, placeholder: str, binding: TypeBinding) -> str:
        """
        Substitute into a comment word by word.

        Without ``preserve_inline_comments`` this returns an empty string, so
        comments on rewritten lines are removed.
        """
        words = [self.literals.substitute(word, placeholder, binding) for word in comment.split()]
        if not self.preserve_inline_comments:
            # TODO: drop this branch once removing rewritten comments is confirmed unintended
            return ""
        return " ".join(words)
