"""
Placeholder substitution into literals and lines.
"""

from .literal import LiteralSubstitutor
from .line import LineSpecializer, make_line

__all__ = ['LiteralSubstitutor', 'LineSpecializer', 'make_line']
