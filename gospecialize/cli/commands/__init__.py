"""CLI command handlers."""

from .generate import check_template, generate_output

__all__ = ['check_template', 'generate_output']
