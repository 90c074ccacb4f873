"""Main CLI entry point for gospecialize."""

import argparse
import sys
from typing import Optional

from .commands import check_template, generate_output


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        'types',
        nargs='*',
        metavar='TYPESET',
        help='Type sets such as "KeyType=string,int ValueType=int"'
    )
    parser.add_argument(
        '--in',
        dest='input',
        type=str,
        help='Path to the template file (default: stdin)'
    )
    parser.add_argument(
        '--types-file',
        type=str,
        help='YAML file with a list of placeholder-to-type mappings'
    )
    parser.add_argument(
        '--profile',
        type=str,
        help='YAML file overriding the Go syntax profile'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the gospecialize CLI."""
    parser = argparse.ArgumentParser(
        prog='gospecialize',
        description='Generate type-specific Go code from generic templates'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Gen command
    gen_parser = subparsers.add_parser('gen', help='Generate specialized code')
    _add_common_arguments(gen_parser)
    gen_parser.add_argument(
        '--out',
        type=str,
        help='Path to the output file (default: stdout)'
    )
    gen_parser.add_argument(
        '--pkg',
        type=str,
        default='',
        help='Package name for the generated file'
    )
    gen_parser.add_argument(
        '--no-imports',
        action='store_true',
        help='Skip the goimports pass'
    )
    gen_parser.add_argument(
        '--goimports',
        type=str,
        default='goimports',
        metavar='PATH',
        help='goimports executable to use'
    )
    gen_parser.add_argument(
        '--preserve-inline-comments',
        action='store_true',
        help='Keep comments on lines where a placeholder was substituted'
    )

    # Check command
    check_parser = subparsers.add_parser('check', help='Validate a template against type sets')
    _add_common_arguments(check_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'gen':
        return generate_output(parsed_args)
    elif parsed_args.command == 'check':
        return check_template(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
