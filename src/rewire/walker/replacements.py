# src/rewire/walker/replacements.py
"""Literal FROM:TO patterns and their sequential application to byte buffers."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from rewire.errors import usage_error

SEPARATOR = ":"


@dataclass(frozen=True)
class Replacement:
    from_: str              # literal text to find, never empty
    to: str                 # literal replacement, may be empty

    @property
    def from_bytes(self) -> bytes:
        return self.from_.encode("utf-8")

    @property
    def to_bytes(self) -> bytes:
        return self.to.encode("utf-8")


def parse_pattern(arg: str) -> Replacement:
    """
    Parse a single `FROM:TO` argument.

    The argument must contain exactly one colon and a non-empty FROM.
    """
    parts = arg.split(SEPARATOR)
    if len(parts) != 2:
        raise usage_error(f"invalid argument: {arg}")
    from_, to = parts
    if not from_:
        raise usage_error(f"invalid argument: {arg} (empty FROM)")
    return Replacement(from_, to)


class ReplacementSet:
    """
    Ordered patterns. `apply_all` runs them one after another, each pass
    seeing the output of the previous one, so a later pattern can match text
    produced by an earlier one.
    """

    def __init__(self, replacements: Iterable[Replacement] = ()):
        self._replacements: Tuple[Replacement, ...] = tuple(replacements)

    @classmethod
    def from_args(cls, args: Iterable[str]) -> "ReplacementSet":
        return cls(parse_pattern(arg) for arg in args)

    def __iter__(self) -> Iterator[Replacement]:
        return iter(self._replacements)

    def __len__(self) -> int:
        return len(self._replacements)

    def __bool__(self) -> bool:
        return bool(self._replacements)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{r.from_}{SEPARATOR}{r.to}" for r in self._replacements)
        return f"ReplacementSet([{pairs}])"

    def contains_any(self, buffer: bytes) -> bool:
        return any(r.from_bytes in buffer for r in self._replacements)

    def apply_all(self, buffer: bytes) -> bytes:
        for r in self._replacements:
            buffer = buffer.replace(r.from_bytes, r.to_bytes)
        return buffer
