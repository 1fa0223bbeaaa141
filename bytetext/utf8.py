"""UTF-8 decoding of byte strings that may not be valid UTF-8.

Invalid sequences are reported using the "maximal subpart" strategy: a
sequence of bytes that is a valid prefix of some UTF-8 encoded codepoint is
treated as a single unit, while every other invalid byte stands on its own.
"""

from __future__ import annotations

from collections.abc import Iterator

__all__ = [
    "ACCEPT",
    "REJECT",
    "CLASSES",
    "STATES_FORWARD",
    "REPLACEMENT",
    "step",
    "decode_step",
    "decode",
    "decode_lossy",
    "decode_last",
    "decode_last_lossy",
    "is_leading_utf8_byte",
    "Chars",
    "CharIndices",
    "chars",
    "char_indices",
]

REPLACEMENT = "\ufffd"

ACCEPT = 12
REJECT = 0

# Byte classes of the decoding automaton. Each class doubles as the shift
# that masks out the payload bits of a leading byte.
CLASSES = bytes(
    [0] * 128  # 0x00-0x7F
    + [1] * 16  # 0x80-0x8F
    + [9] * 16  # 0x90-0x9F
    + [7] * 32  # 0xA0-0xBF
    + [8] * 2  # 0xC0-0xC1
    + [2] * 30  # 0xC2-0xDF
    + [10]  # 0xE0
    + [3] * 12  # 0xE1-0xEC
    + [4]  # 0xED
    + [3] * 2  # 0xEE-0xEF
    + [11]  # 0xF0
    + [6] * 3  # 0xF1-0xF3
    + [5]  # 0xF4
    + [8] * 11  # 0xF5-0xFF
)

# Transition table with pre-multiplied state identifiers (12 per row).
STATES_FORWARD = (
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    12, 0, 24, 36, 60, 96, 84, 0, 0, 0, 48, 72,
    0, 12, 0, 0, 0, 0, 0, 12, 0, 12, 0, 0,
    0, 24, 0, 0, 0, 0, 0, 24, 0, 24, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 24, 0, 0, 0, 0,
    0, 24, 0, 0, 0, 0, 0, 0, 0, 24, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 36, 0, 36, 0, 0,
    0, 36, 0, 0, 0, 0, 0, 36, 0, 36, 0, 0,
    0, 36, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
)


def step(state: int, byte: int) -> int:
    """Return the automaton state reached from ``state`` on ``byte``."""
    return STATES_FORWARD[state + CLASSES[byte]]


def decode_step(state: int, codepoint: int, byte: int) -> tuple[int, int]:
    """Advance the decoder by one byte, returning the new state and codepoint."""
    byte_class = CLASSES[byte]
    if state == ACCEPT:
        codepoint = (0xFF >> byte_class) & byte
    else:
        codepoint = (byte & 0b111111) | (codepoint << 6)
    return STATES_FORWARD[state + byte_class], codepoint


def decode(data: bytes) -> tuple[str | None, int]:
    """Decode one codepoint from the start of ``data``.

    Returns the character (or ``None`` if the bytes are invalid) and the
    number of bytes it spans. The size is 0 only for empty input.
    """
    if not data:
        return None, 0
    first = data[0]
    if first <= 0x7F:
        return chr(first), 1

    state, codepoint = ACCEPT, 0
    for consumed, byte in enumerate(data, 1):
        state, codepoint = decode_step(state, codepoint, byte)
        if state == ACCEPT:
            return chr(codepoint), consumed
        if state == REJECT:
            return None, max(1, consumed - 1)
    return None, len(data)


def decode_lossy(data: bytes) -> tuple[str, int]:
    """Like :func:`decode`, but substitutes U+FFFD for invalid bytes."""
    ch, size = decode(data)
    return (REPLACEMENT if ch is None else ch), size


def decode_last(data: bytes) -> tuple[str | None, int]:
    """Decode one codepoint from the end of ``data``."""
    length = len(data)
    if length == 0:
        return None, 0
    start = length - 1
    limit = max(0, length - 4)
    while start > limit and not is_leading_utf8_byte(data[start]):
        start -= 1
    ch, size = decode(data[start:])
    # Not consuming every trailing byte means at least one stray byte that
    # is never part of a valid prefix, so step back by a single byte.
    if start + size != length:
        return None, 1
    return ch, size


def decode_last_lossy(data: bytes) -> tuple[str, int]:
    """Like :func:`decode_last`, but substitutes U+FFFD for invalid bytes."""
    ch, size = decode_last(data)
    return (REPLACEMENT if ch is None else ch), size


def is_leading_utf8_byte(byte: int) -> bool:
    """Return True unless ``byte`` is a UTF-8 continuation byte."""
    return (byte & 0b1100_0000) != 0b1000_0000


class Chars:
    """Double-ended iterator over the codepoints of a byte string.

    Invalid UTF-8 is replaced by U+FFFD using the maximal subpart strategy.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    @property
    def remaining(self) -> bytes:
        """The bytes not yet consumed from either end."""
        return self._data

    def __iter__(self) -> Chars:
        return self

    def __next__(self) -> str:
        ch, size = decode_lossy(self._data)
        if size == 0:
            raise StopIteration
        self._data = self._data[size:]
        return ch

    def next_back(self) -> str:
        """Consume and return the last remaining codepoint."""
        ch, size = decode_last_lossy(self._data)
        if size == 0:
            raise StopIteration
        self._data = self._data[: len(self._data) - size]
        return ch

    def __reversed__(self) -> Iterator[str]:
        while self._data:
            yield self.next_back()


class CharIndices:
    """Double-ended iterator yielding ``(start, end, char)`` for each codepoint.

    ``start`` and ``end`` are byte offsets into the original data, so a
    replacement character may cover one to three bytes.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._forward_index = 0
        self._reverse_index = len(self._data)

    @property
    def remaining(self) -> bytes:
        """The bytes not yet consumed from either end."""
        return self._data

    def __iter__(self) -> CharIndices:
        return self

    def __next__(self) -> tuple[int, int, str]:
        ch, size = decode_lossy(self._data)
        if size == 0:
            raise StopIteration
        start = self._forward_index
        self._data = self._data[size:]
        self._forward_index += size
        return start, start + size, ch

    def next_back(self) -> tuple[int, int, str]:
        """Consume and return the last remaining codepoint with its offsets."""
        ch, size = decode_last_lossy(self._data)
        if size == 0:
            raise StopIteration
        self._data = self._data[: len(self._data) - size]
        self._reverse_index -= size
        return self._reverse_index, self._reverse_index + size, ch

    def __reversed__(self) -> Iterator[tuple[int, int, str]]:
        while self._data:
            yield self.next_back()


def chars(data: bytes) -> Chars:
    """Return an iterator over the codepoints of ``data``."""
    return Chars(data)


def char_indices(data: bytes) -> CharIndices:
    """Return an iterator over the codepoints of ``data`` with byte offsets."""
    return CharIndices(data)