"""General helpers: version strings, text utilities, a fast PRNG and path helpers."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, MutableSequence
from typing import TypeVar

__all__ = [
    "Prng",
    "engine_version_info",
    "engine_info",
    "split",
    "remove_whitespace",
    "is_whitespace",
    "str_to_size_t",
    "read_file_to_string",
    "mul_hi64",
    "get_working_directory",
    "get_binary_directory",
    "move_to_front",
]

ENGINE_NAME = "Chesscore"
VERSION = "17.1"
AUTHORS = "the chesscore developers"

MASK64 = (1 << 64) - 1
SIZE_MAX = MASK64

# Characters accepted as whitespace by the C locale.
_C_WHITESPACE = frozenset(" \t\n\v\f\r")
_LEADING_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d+)")

T = TypeVar("T")


class Prng:
    """xorshift64* pseudo-random number generator with a 64-bit state."""

    _MULTIPLIER = 2685821657736338717

    def __init__(self, seed: int) -> None:
        seed &= MASK64
        if seed == 0:
            raise ValueError("seed must be non-zero")
        self._state = seed

    def rand64(self) -> int:
        """Return the next 64-bit output."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & MASK64
        s ^= s >> 27
        self._state = s
        return (s * self._MULTIPLIER) & MASK64

    def sparse_rand(self) -> int:
        """Return a value with about one bit in eight set."""
        return self.rand64() & self.rand64() & self.rand64()


def engine_version_info() -> str:
    """Return the engine name followed by its version."""
    return f"{ENGINE_NAME} {VERSION}"


def engine_info(to_uci: bool = False) -> str:
    """Return the version line together with the authors, in UCI form if asked."""
    joiner = "\nid author " if to_uci else " by "
    return engine_version_info() + joiner + AUTHORS


def split(s: str, delimiter: str) -> list[str]:
    """Split ``s`` on ``delimiter``; an empty string gives an empty list."""
    if not s:
        return []
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    return s.split(delimiter)


def remove_whitespace(s: str) -> str:
    """Return ``s`` with every whitespace character removed."""
    return "".join(c for c in s if c not in _C_WHITESPACE)


def is_whitespace(s: str) -> bool:
    """Return True if ``s`` holds nothing but whitespace (or is empty)."""
    return all(c in _C_WHITESPACE for c in s)


def str_to_size_t(s: str) -> int:
    """Parse the leading unsigned integer of ``s``.

    Leading whitespace is skipped and trailing text ignored. A leading minus
    sign wraps the value modulo 2**64. Raises ValueError when no digits are
    found and OverflowError when the value does not fit in 64 bits.
    """
    match = _LEADING_INTEGER.match(s)
    if match is None:
        raise ValueError(f"no unsigned integer in {s!r}")
    sign, digits = match.groups()
    value = int(digits)
    if value > SIZE_MAX:
        raise OverflowError(f"{digits} does not fit in 64 bits")
    if sign == "-":
        value = (-value) & MASK64
    return value


def read_file_to_string(path: str | os.PathLike[str]) -> bytes | None:
    """Return the file's bytes, or None if it cannot be opened."""
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError:
        return None


def mul_hi64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two 64-bit values."""
    return ((a & MASK64) * (b & MASK64)) >> 64


def get_working_directory() -> str:
    """Return the current working directory, or an empty string on failure."""
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Return the directory part of ``argv0``, ending in a separator.

    A bare name gives the working directory; a leading ``./`` is replaced by
    the working directory.
    """
    separator = os.sep
    working_directory = get_working_directory()

    pos = max(argv0.rfind("\\"), argv0.rfind("/"))
    directory = "." + separator if pos < 0 else argv0[: pos + 1]

    if directory.startswith("." + separator):
        directory = working_directory + directory[1:]
    return directory


def move_to_front(items: MutableSequence[T], pred: Callable[[T], bool]) -> None:
    """Move the first item satisfying ``pred`` to the front, keeping the rest in order."""
    for index, item in enumerate(items):
        if pred(item):
            del items[index]
            items.insert(0, item)
            return