"""Name derivation and memoization."""

from .cache import NameCache, to_snake

__all__ = ['NameCache', 'to_snake']
