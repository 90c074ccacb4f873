"""
Token classification for single lines of Go source.

Wraps the Pygments Go lexer and folds its token types into the three kinds the
substitution engine cares about: literals (identifiers, strings, numbers),
comments, and everything else.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from pygments.lexers.go import GoLexer
from pygments.token import Comment, Error, Keyword, Name, Number, String, Token


class TokenKind(str, Enum):
    """Coarse token category."""
    LITERAL = "literal"
    COMMENT = "comment"
    OTHER = "other"
    ERROR = "error"


@dataclass(frozen=True)
class LexToken:
    """
    One classified token.

    Attributes:
        kind: Coarse category of the token
        value: Exact source text of the token
        line: 1-based line number within the lexed text
    """
    kind: TokenKind
    value: str
    line: int = 1


_LEXER = GoLexer(stripnl=False, ensurenl=False)


def _kind_of(ttype) -> TokenKind:
    if ttype in Comment:
        return TokenKind.COMMENT
    if ttype in Error:
        return TokenKind.ERROR
    # Go treats predeclared types and constants (int, nil, true) as identifiers
    if ttype in Name or ttype in String or ttype in Number:
        return TokenKind.LITERAL
    if ttype in Keyword.Type or ttype in Keyword.Constant:
        return TokenKind.LITERAL
    return TokenKind.OTHER


def iter_tokens(text: str, keep_newlines: bool = False) -> Iterator[LexToken]:
    """
    Lex Go text into classified tokens.

    Whitespace is skipped. With ``keep_newlines`` a ``"\\n"`` OTHER token is
    yielded wherever whitespace or a block comment spans a line break, which
    the declaration scanner uses to find the end of a type spec.

    Args:
        text: Go source text
        keep_newlines: Whether to yield line-break markers

    Yields:
        Classified tokens in source order
    """
    line = 1
    for ttype, value in _LEXER.get_tokens(text):
        if not value:
            continue
        newlines = value.count("\n")
        if value.isspace() or ttype in Token.Text.Whitespace:
            if keep_newlines and newlines:
                yield LexToken(TokenKind.OTHER, "\n", line)
            line += newlines
            continue
        kind = _kind_of(ttype)
        yield LexToken(kind, value, line)
        if newlines:
            # A block comment spanning lines still ends the current spec
            if keep_newlines and kind == TokenKind.COMMENT:
                yield LexToken(TokenKind.OTHER, "\n", line)
            line += newlines


def classify_line(line: str) -> List[LexToken]:
    """Tokenize one line of Go source, dropping whitespace."""
    return list(iter_tokens(line))
