"""
Final import normalization pass.
"""

from .normalizer import GoimportsNormalizer, ImportNormalizer, PassthroughNormalizer

__all__ = [
    "GoimportsNormalizer",
    "ImportNormalizer",
    "PassthroughNormalizer",
]
