"""
Top-level declaration scanning for Go templates.

This is not a Go parser. It walks the token stream far enough to find
top-level ``type`` declarations, including grouped ``type ( ... )`` blocks, and
records each spec's name and type expression. Enough structure is checked on
the way to reject text that is clearly not Go.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from gospecialize.exceptions import MalformedSourceError
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile
from gospecialize.syntax.tokens import LexToken, TokenKind, iter_tokens


logger = logging.getLogger(__name__)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


@dataclass
class TypeSpec:
    """
    A single ``Name Type`` spec inside a type declaration.

    Attributes:
        name: Declared type name
        type_tokens: Tokens of the right-hand type expression
        line: Line of the declared name
        alias: Whether the spec is an alias (``type A = B``)
    """
    name: str
    type_tokens: List[str] = field(default_factory=list)
    line: int = 0
    alias: bool = False

    def selector_root(self) -> Optional[str]:
        """Return ``X`` when the type expression is exactly ``X.Sel``."""
        if len(self.type_tokens) == 3 and self.type_tokens[1] == ".":
            return self.type_tokens[0]
        return None


@dataclass
class TypeDecl:
    """A top-level ``type`` declaration holding one or more specs."""
    line: int
    grouped: bool = False
    specs: List[TypeSpec] = field(default_factory=list)


@dataclass
class SourceFile:
    """Declaration tree of one template file."""
    package: str
    type_decls: List[TypeDecl] = field(default_factory=list)

    def type_specs(self) -> List[TypeSpec]:
        return [spec for decl in self.type_decls for spec in decl.specs]


class _Scanner:
    """Cursor over a token list with bracket tracking."""

    def __init__(self, tokens: List[LexToken], filename: str):
        self.tokens = tokens
        self.pos = 0
        self.filename = filename

    def peek(self) -> Optional[LexToken]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def next(self) -> Optional[LexToken]:
        tok = self.peek()
        if tok is not None:
            self.pos += 1
        return tok

    def skip_newlines(self):
        while self.peek() is not None and self.peek().value == "\n":
            self.pos += 1

    def error(self, message: str, tok: Optional[LexToken] = None) -> MalformedSourceError:
        line = tok.line if tok is not None else None
        return MalformedSourceError(message, self.filename, line)


def _check_tokens(tokens: List[LexToken], filename: str):
    """Reject lexer errors and unbalanced brackets."""
    stack: List[LexToken] = []
    for tok in tokens:
        if tok.kind == TokenKind.ERROR:
            raise MalformedSourceError(f"illegal character {tok.value!r}", filename, tok.line)
        if tok.kind != TokenKind.OTHER:
            continue
        if tok.value in _OPENERS:
            stack.append(tok)
        elif tok.value in _CLOSERS:
            if not stack or stack[-1].value != _CLOSERS[tok.value]:
                raise MalformedSourceError(f"unexpected {tok.value!r}", filename, tok.line)
            stack.pop()
    if stack:
        tok = stack[-1]
        raise MalformedSourceError(f"unclosed {tok.value!r}", filename, tok.line)


def _read_spec(scanner: _Scanner, grouped: bool) -> TypeSpec:
    name_tok = scanner.next()
    if name_tok is None or name_tok.kind != TokenKind.LITERAL or not name_tok.value.isidentifier():
        raise scanner.error("expected type name", name_tok)

    spec = TypeSpec(name=name_tok.value, line=name_tok.line)
    depth = 0
    while True:
        tok = scanner.peek()
        if tok is None:
            break
        if depth == 0:
            if tok.value in ("\n", ";"):
                scanner.next()
                break
            if grouped and tok.value == ")":
                break
        if tok.value == "=" and depth == 0 and not spec.type_tokens:
            spec.alias = True
            scanner.next()
            continue
        if tok.value in _OPENERS:
            depth += 1
        elif tok.value in _CLOSERS:
            depth -= 1
        # Newlines inside brackets (struct bodies) are not part of the type text
        if tok.value != "\n":
            spec.type_tokens.append(tok.value)
        scanner.next()

    if not spec.type_tokens:
        raise scanner.error(f"missing type for '{spec.name}'", name_tok)
    return spec


def _read_type_decl(scanner: _Scanner, type_tok: LexToken) -> TypeDecl:
    scanner.skip_newlines()
    tok = scanner.peek()
    if tok is not None and tok.value == "(":
        scanner.next()
        decl = TypeDecl(line=type_tok.line, grouped=True)
        while True:
            scanner.skip_newlines()
            tok = scanner.peek()
            if tok is None:
                raise scanner.error("unterminated type group", type_tok)
            if tok.value == ")":
                scanner.next()
                return decl
            decl.specs.append(_read_spec(scanner, grouped=True))

    decl = TypeDecl(line=type_tok.line)
    decl.specs.append(_read_spec(scanner, grouped=False))
    return decl


def parse_source(text: str, filename: str = "", profile: SyntaxProfile = GO_PROFILE) -> SourceFile:
    """
    Parse Go text into a declaration tree of its top-level type declarations.

    Args:
        text: Complete template text
        filename: Name used in diagnostics
        profile: Syntax profile supplying the package keyword

    Returns:
        The parsed declaration tree

    Raises:
        MalformedSourceError: If the text is not recognisable Go source
    """
    tokens = list(iter_tokens(text, keep_newlines=True))
    _check_tokens(tokens, filename)

    scanner = _Scanner([t for t in tokens if t.kind != TokenKind.COMMENT], filename)
    scanner.skip_newlines()
    pkg_tok = scanner.next()
    if pkg_tok is None or pkg_tok.value != profile.package_keyword:
        raise scanner.error(f"expected '{profile.package_keyword}' clause", pkg_tok)
    name_tok = scanner.next()
    if name_tok is None or name_tok.kind != TokenKind.LITERAL:
        raise scanner.error("expected package name", name_tok or pkg_tok)

    source_file = SourceFile(package=name_tok.value)
    depth = 0
    while True:
        tok = scanner.next()
        if tok is None:
            break
        if tok.value in _OPENERS:
            depth += 1
        elif tok.value in _CLOSERS:
            depth -= 1
        elif depth == 0 and tok.value == "type":
            source_file.type_decls.append(_read_type_decl(scanner, tok))

    logger.debug(f"Parsed {filename or '<template>'}: {len(source_file.type_specs())} type specs")
    return source_file
