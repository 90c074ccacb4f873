"""
Assembly of several specializations into one Go file.

Each fragment is a complete copy of the template with its own package clause,
imports and ``go:generate`` directives. Concatenating them is not valid Go, so
the assembler keeps only the first package clause, strips every import (the
import normalizer re-derives them) and drops generator directives.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from gospecialize.bindings import TypeBinding
from gospecialize.imports.normalizer import ImportNormalizer, PassthroughNormalizer
from gospecialize.naming.cache import NameCache
from gospecialize.generator import Specializer
from gospecialize.source import TemplateSource
from gospecialize.substitution.line import make_line
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile


logger = logging.getLogger(__name__)

BindingInput = Mapping[str, Union[str, TypeBinding]]


def split_lines(text: str) -> List[str]:
    """Split on LF only; a trailing LF does not produce an empty last line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def clean_output(text: str, profile: SyntaxProfile = GO_PROFILE) -> str:
    """
    Remove boilerplate repeated across concatenated fragments.

    Args:
        text: Header plus every fragment
        profile: Syntax conventions for package, import and directive lines

    Returns:
        Text with one package clause, no imports and no unwanted directives
    """
    package_found = False
    inside_import_block = False
    clean_lines: List[str] = []

    for line in split_lines(text):
        # end of imports block?
        if inside_import_block:
            if line.endswith(profile.close_paren):
                inside_import_block = False
            continue

        if line.startswith(profile.package_keyword):
            if package_found:
                continue
            package_found = True
        elif line.startswith(profile.import_keyword):
            if line.endswith(profile.open_paren):
                inside_import_block = True
            continue

        if line.startswith(profile.unwanted_line_prefixes):
            continue

        clean_lines.append(make_line(line))

    return "".join(clean_lines)


def change_package(text: str, package_name: str, profile: SyntaxProfile = GO_PROFILE) -> str:
    """Rename the first package clause, leaving the rest of that line alone."""
    out: List[str] = []
    done = False

    for line in split_lines(text):
        if not done and line.startswith(profile.package_keyword):
            parts = line.split(" ")
            if len(parts) > 1:
                parts[1] = package_name
            else:
                parts.append(package_name)
            line = " ".join(parts)
            done = True
        out.append(line + "\n")

    return "".join(out)


class Assembler:
    """
    Builds one output file from a template and several binding sets.

    Attributes:
        specializer: Session used for every binding set
        normalizer: Final import pass, invoked once per assembly
    """

    def __init__(
        self,
        specializer: Optional[Specializer] = None,
        normalizer: Optional[ImportNormalizer] = None
    ):
        self.specializer = specializer or Specializer()
        self.normalizer = normalizer or PassthroughNormalizer()

    @property
    def profile(self) -> SyntaxProfile:
        return self.specializer.profile

    def concatenate(self, source: TemplateSource, binding_sets: Iterable[BindingInput]) -> str:
        """Header followed by one fragment per binding set, in order."""
        parts = [self.profile.header]
        for binding_set in binding_sets:
            parts.append(self.specializer.generate_specific(source, binding_set))
        return "".join(parts)

    def assemble(
        self,
        source: TemplateSource,
        binding_sets: Sequence[BindingInput],
        package_name: str = ""
    ) -> str:
        """
        Specialize and merge, stopping short of import normalization.

        Args:
            source: Rewindable template
            binding_sets: Binding sets in output order
            package_name: New package name, or empty to keep the template's

        Returns:
            The cleaned text handed to the normalizer

        Raises:
            GenerationError: From the first binding set that fails
        """
        total = self.concatenate(source, binding_sets)
        output = clean_output(total, self.profile)

        if package_name:
            output = change_package(output, package_name, self.profile)

        logger.info(f"Assembled {len(binding_sets)} specialization(s) of {source.filename or '<template>'}")
        return output

    def generate(
        self,
        output_name: str,
        source: TemplateSource,
        binding_sets: Sequence[BindingInput],
        package_name: str = ""
    ) -> str:
        """Assemble then run the import normalizer exactly once."""
        output = self.assemble(source, binding_sets, package_name)
        return self.normalizer.normalize(output, output_name)


def generics(
    template_name: str,
    output_name: str,
    package_name: str,
    source: TemplateSource,
    binding_sets: Sequence[BindingInput],
    normalizer: Optional[ImportNormalizer] = None,
    profile: SyntaxProfile = GO_PROFILE,
    names: Optional[NameCache] = None,
    preserve_inline_comments: bool = False
) -> str:
    """
    Generate the specialized, import-normalized output for a template.

    Args:
        template_name: Template filename, used in diagnostics
        output_name: Output filename hint for the import normalizer
        package_name: Package name override, empty to keep the template's
        source: Rewindable template positioned anywhere
        binding_sets: Binding sets, values ``"Type"`` or ``"Type:name"``
        normalizer: Final import pass; passthrough when omitted
        profile: Syntax conventions of the template language
        names: Name cache to use; fresh per call when omitted
        preserve_inline_comments: Keep comments on rewritten lines

    Returns:
        The generated source text

    Raises:
        MalformedSourceError, MissingBindingError, ImportNormalizationError
    """
    if template_name and not source.filename:
        source = TemplateSource(source.stream, template_name)

    specializer = Specializer(profile, names, preserve_inline_comments)
    assembler = Assembler(specializer, normalizer)
    return assembler.generate(output_name, source, binding_sets, package_name)
