"""Tests for single-line token classification."""

from gospecialize.syntax import TokenKind, classify_line, iter_tokens


def kinds(line):
    return [(t.kind, t.value) for t in classify_line(line)]


def test_identifiers_strings_and_comments():
    tokens = kinds('\tKey KeyType `json:"k"` // the key')

    assert tokens == [
        (TokenKind.LITERAL, "Key"),
        (TokenKind.LITERAL, "KeyType"),
        (TokenKind.LITERAL, '`json:"k"`'),
        (TokenKind.COMMENT, "// the key"),
    ]


def test_keywords_and_punctuation_are_other():
    tokens = kinds("func (l *List) Len() int {")

    assert tokens == [
        (TokenKind.OTHER, "func"),
        (TokenKind.OTHER, "("),
        (TokenKind.LITERAL, "l"),
        (TokenKind.OTHER, "*"),
        (TokenKind.LITERAL, "List"),
        (TokenKind.OTHER, ")"),
        (TokenKind.LITERAL, "Len"),
        (TokenKind.OTHER, "("),
        (TokenKind.OTHER, ")"),
        (TokenKind.LITERAL, "int"),
        (TokenKind.OTHER, "{"),
    ]


def test_predeclared_identifiers_are_literals():
    values = {t.value: t.kind for t in classify_line("x := len(s) + 1; y := nil")}

    assert values["len"] == TokenKind.LITERAL
    assert values["nil"] == TokenKind.LITERAL
    assert values["1"] == TokenKind.LITERAL
    assert values[":="] == TokenKind.OTHER


def test_whitespace_dropped():
    assert all(not t.value.isspace() for t in classify_line("  a   b\t\tc  "))


def test_illegal_character_reported_as_error():
    tokens = classify_line("x # y")
    assert (TokenKind.ERROR, "#") in [(t.kind, t.value) for t in tokens]


def test_line_numbers_and_newline_markers():
    tokens = list(iter_tokens("a\nb /* x\ny */ c\n", keep_newlines=True))
    values = [(t.value, t.line) for t in tokens]

    assert ("a", 1) in values
    assert ("b", 2) in values
    assert ("c", 3) in values
    assert [v for v, _ in values].count("\n") == 3
