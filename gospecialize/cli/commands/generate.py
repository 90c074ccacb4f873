"""Gen and check command implementations."""

import io
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import List

from gospecialize.assembler import generics
from gospecialize.bindings import BindingSet, parse_type_sets
from gospecialize.exceptions import BindingParseError, GenerationError, ProfileValidationError
from gospecialize.imports.normalizer import GoimportsNormalizer, PassthroughNormalizer
from gospecialize.source import TemplateSource
from gospecialize.syntax.loader import ProfileLoader
from gospecialize.syntax.profile import GO_PROFILE, SyntaxProfile
from gospecialize.validator import TemplateValidator


logger = logging.getLogger(__name__)


def configure_logging(args: Namespace) -> None:
    """Set up logging from --log-level, --debug, --quiet and --verbose."""
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_profile(args: Namespace) -> SyntaxProfile:
    if args.profile:
        return ProfileLoader().load_profile(Path(args.profile))
    return GO_PROFILE


def load_binding_sets(args: Namespace) -> List[BindingSet]:
    """Collect binding sets from the types file and TYPESET arguments."""
    binding_sets: List[BindingSet] = []

    if args.types_file:
        binding_sets.extend(ProfileLoader().load_binding_sets(Path(args.types_file)))

    if args.types:
        binding_sets.extend(parse_type_sets(" ".join(args.types)))

    if not binding_sets:
        raise BindingParseError("No type sets given (pass TYPESET arguments or --types-file)")

    return binding_sets


def open_template(args: Namespace) -> TemplateSource:
    """Open the template; stdin is buffered so it can be rewound."""
    if args.input:
        return TemplateSource.from_path(args.input)
    return TemplateSource(io.BytesIO(sys.stdin.buffer.read()), "stdin")


def _report(e: GenerationError) -> int:
    if isinstance(e, ProfileValidationError):
        for error in e.errors:
            location = f"{error.path}: " if error.path else ""
            logger.error(f"Validation error: {location}{error.message}")
    else:
        logger.error(str(e))
    return e.exit_code


def generate_output(args: Namespace) -> int:
    """
    Generate specialized code and write it out.

    Nothing is written unless generation succeeds for every binding set.
    """
    configure_logging(args)

    try:
        profile = load_profile(args)
        binding_sets = load_binding_sets(args)
        source = open_template(args)

        output_name = args.out or "stdout.go"
        if args.no_imports:
            normalizer = PassthroughNormalizer()
        else:
            normalizer = GoimportsNormalizer(args.goimports)

        output = generics(
            source.filename,
            output_name,
            args.pkg,
            source,
            binding_sets,
            normalizer=normalizer,
            profile=profile,
            preserve_inline_comments=args.preserve_inline_comments
        )

        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(output, encoding='utf-8')
            logger.info(f"Wrote {out_path}")
        else:
            sys.stdout.write(output)

        return 0

    except GenerationError as e:
        return _report(e)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1


def check_template(args: Namespace) -> int:
    """Validate the template against every binding set without generating."""
    configure_logging(args)

    try:
        profile = load_profile(args)
        binding_sets = load_binding_sets(args)
        source = open_template(args)

        validator = TemplateValidator(profile)
        for binding_set in binding_sets:
            validator.validate(source, binding_set)

        logger.info(f"{source.filename}: {len(binding_sets)} type set(s) valid")
        return 0

    except GenerationError as e:
        return _report(e)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
