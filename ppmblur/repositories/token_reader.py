from __future__ import annotations
import re
from typing import BinaryIO

from ..models.errors import MalformedIntegerError

# C-locale isspace() set.
_WHITESPACE = rb" \t\n\v\f\r"

_SKIP = re.compile(rb"(?:[" + _WHITESPACE + rb"]+|#[^\n]*\n?)*")
_SPACES = re.compile(rb"[" + _WHITESPACE + rb"]*")
_INT = re.compile(rb"[+-]?[0-9]+")
_WORD = re.compile(rb"[^" + _WHITESPACE + rb"]+")


class TokenReader:
    """
    Cursor over the raw bytes of a P3 file.

    • read_int() skips whitespace and '#' comments, then parses one integer.
    • read_tag() skips whitespace only and returns the format tag.
    """

    def __init__(self, data: bytes, pos: int = 0):
        self.data = data
        self.pos = pos

    @classmethod
    def from_stream(cls, fp: BinaryIO) -> "TokenReader":
        return cls(fp.read())

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def read_tag(self, size: int = 2) -> bytes | None:
        self.pos = _SPACES.match(self.data, self.pos).end()
        if self.at_end():
            return None
        end = min(_WORD.match(self.data, self.pos).end(), self.pos + size)
        tag = self.data[self.pos:end]
        self.pos = end
        return tag

    def read_int(self) -> int | None:
        """
        Returns:
            The next integer, or None if the stream ends first.
        Raises:
            MalformedIntegerError: non-comment content that is not an integer.
        """
        self.pos = _SKIP.match(self.data, self.pos).end()
        if self.at_end():
            return None

        match = _INT.match(self.data, self.pos)
        if match is None:
            snippet = self.data[self.pos:self.pos + 16].split(maxsplit=1)[0]
            raise MalformedIntegerError(
                f"Bad integer in file at byte {self.pos}: {snippet!r}"
            )
        self.pos = match.end()
        return int(match.group())
