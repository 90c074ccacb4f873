"""
Go syntax support: the pluggable syntax profile, line tokenization and the
declaration scan used to validate templates.
"""

from .profile import GO_PROFILE, SyntaxProfile
from .tokens import LexToken, TokenKind, classify_line, iter_tokens
from .declarations import SourceFile, TypeDecl, TypeSpec, parse_source

__all__ = [
    "GO_PROFILE",
    "SyntaxProfile",
    "LexToken",
    "TokenKind",
    "classify_line",
    "iter_tokens",
    "SourceFile",
    "TypeDecl",
    "TypeSpec",
    "parse_source",
]
