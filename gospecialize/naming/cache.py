"""
Derivation of identifier fragments from concrete type spellings.

A concrete type such as ``*big.Int`` cannot be pasted into an identifier like
``NewKeyTypeList`` as-is. ``NameCache`` turns it into a word (``BigInt`` or
``bigInt``) and, for struct tags, into a snake_case spelling (``big_int``).
Results are memoized for the lifetime of the cache object.
"""

import re
from typing import Dict, Optional, Tuple


_SEPARATORS = re.compile(r"[\s\-.]+")
_WORD_BOUNDARY = re.compile(
    r"(?<=[a-z])(?=[A-Z])"          # fooBar
    r"|(?<=[A-Z])(?=[A-Z][a-z])"    # HTTPServer
    r"|(?<=[A-Za-z])(?=\d)"         # Int64
    r"|(?<=\d)(?=[A-Za-z])"         # 64Bit
)
_REPEATED_UNDERSCORES = re.compile(r"_+")


def to_snake(name: str) -> str:
    """Convert an identifier such as ``HTTPServer`` to ``http_server``."""
    name = _SEPARATORS.sub("_", name.strip())
    name = _WORD_BOUNDARY.sub("_", name)
    return _REPEATED_UNDERSCORES.sub("_", name).strip("_").lower()


class NameCache:
    """
    Memoized name derivation for one generation session.

    Entries are write-once and never evicted; the number of distinct concrete
    types in a run is small. Give each concurrent session its own instance.
    """

    def __init__(self):
        self._words: Dict[Tuple[str, bool], str] = {}
        self._snake: Dict[str, str] = {}

    def wordify(self, concrete_type: str, override_name: Optional[str] = None, exported: bool = True) -> str:
        """
        Turn a concrete type into a word usable inside identifiers.

        Args:
            concrete_type: Type spelling, e.g. ``*big.Int`` or ``interface{}``
            override_name: Name to use verbatim instead of deriving one
            exported: Whether the first character should be upper case

        Returns:
            The derived (or overriding) name
        """
        if override_name:
            return override_name

        key = (concrete_type, exported)
        cached = self._words.get(key)
        if cached is not None:
            return cached

        word = concrete_type.rstrip("{}").lstrip("*&").replace(".", "")
        if exported and word:
            word = word[0].upper() + word[1:]

        self._words[key] = word
        return word

    def tag_name(self, capitalized_name: str) -> str:
        """Snake-case spelling of an exported derived name, for struct tags."""
        cached = self._snake.get(capitalized_name)
        if cached is None:
            cached = to_snake(capitalized_name)
            self._snake[capitalized_name] = cached
        return cached

    def __len__(self) -> int:
        return len(self._words) + len(self._snake)
