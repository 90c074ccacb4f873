"""Rewindable access to a template file's text."""

import io
from pathlib import Path
from typing import IO, Iterator, Union


class TemplateSource:
    """
    A template that can be read from the start any number of times.

    Wraps a seekable stream (text or binary). Each call to :meth:`read` or
    :meth:`lines` rewinds first; ``OSError`` from seeking or reading is left
    to propagate.

    Attributes:
        filename: Name used in diagnostics
    """

    def __init__(self, stream: IO, filename: str = ""):
        self.stream = stream
        self.filename = filename

    @classmethod
    def from_text(cls, text: str, filename: str = "") -> 'TemplateSource':
        return cls(io.StringIO(text), filename)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'TemplateSource':
        """Load a template file fully into memory."""
        path = Path(path)
        return cls(io.BytesIO(path.read_bytes()), path.name)

    def rewind(self) -> None:
        self.stream.seek(0)

    def read(self) -> str:
        """Rewind and return the whole template text."""
        self.rewind()
        return self._decode(self.stream.read())

    def lines(self) -> Iterator[str]:
        """Rewind and yield each line without its line terminator."""
        self.rewind()
        for raw in self.stream:
            yield self._decode(raw).rstrip("\r\n")

    @staticmethod
    def _decode(data: Union[str, bytes]) -> str:
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data
