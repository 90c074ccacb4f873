"""
Host-language conventions used by the specializer.

Everything that ties the engine to Go's surface syntax lives here: package and
import keywords, the generics marker package, struct tag prefixes, and the
directive comments that must not survive into generated files.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple


DEFAULT_HEADER = """

// This file was automatically generated by gospecialize.
// Any changes will be lost if this file is regenerated.

"""


@dataclass(frozen=True)
class SyntaxProfile:
    """
    Lexical conventions of the template language.

    Attributes:
        package_keyword: Prefix of the package declaration line
        import_keyword: Prefix of import statements and import blocks
        open_paren: Suffix that opens a grouped import block
        close_paren: Suffix that closes a grouped import block
        generic_package: Package name whose selectors mark a generic type
        generic_markers: Spellings whose presence drops a line from the output
        line_comment: Prefix of a full-line comment
        struct_tag_prefixes: Literal prefixes recognised as struct tags
        unwanted_line_prefixes: Lines starting with these are removed on assembly
        header: Text emitted ahead of all specialized fragments
    """
    package_keyword: str = "package"
    import_keyword: str = "import"
    open_paren: str = "("
    close_paren: str = ")"
    generic_package: str = "generic"
    generic_markers: Tuple[str, ...] = ("generic.Type", "generic.Number")
    line_comment: str = "//"
    struct_tag_prefixes: Tuple[str, ...] = ("`db:", "`json:")
    unwanted_line_prefixes: Tuple[str, ...] = (
        "//go:generate genny ",
        "//go:generate gospecialize ",
    )
    header: str = field(default=DEFAULT_HEADER, repr=False)

    def is_exported(self, name: str) -> bool:
        """Go exports an identifier when its first character is upper case."""
        if not name:
            return False
        return name[0].isupper()

    def is_struct_tag(self, literal: str) -> bool:
        return literal.startswith(self.struct_tag_prefixes)

    def is_generic_marker_line(self, line: str) -> bool:
        return any(marker in line for marker in self.generic_markers)

    def with_overrides(self, **overrides) -> "SyntaxProfile":
        """Return a copy of this profile with the given fields replaced."""
        return replace(self, **overrides)


GO_PROFILE = SyntaxProfile()
