"""A frequency-based prefilter for single-needle substring search.

The prefilter picks the byte of a needle that is predicted to occur least
often in typical haystacks and jumps between its occurrences, using a second
rare byte as a quick guard. A :class:`PrefilterState` tracks how much the
prefilter actually skips and switches it off when it stops paying for itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice

__all__ = ["BYTE_FREQUENCIES", "rank", "PrefilterState", "Freqy"]

# Heuristic frequency rank of every byte value. A lower rank means the byte
# is believed to occur less often.
BYTE_FREQUENCIES = bytes(
    [
        55, 52, 51, 50, 49, 48, 47, 46, 45, 103, 242, 66, 67, 229, 44, 43,
        42, 41, 40, 39, 38, 37, 36, 35, 34, 33, 56, 32, 31, 30, 29, 28,
        255, 148, 164, 149, 136, 160, 155, 173, 221, 222, 134, 122, 232, 202, 215, 224,
        208, 220, 204, 187, 183, 179, 177, 168, 178, 200, 226, 195, 154, 184, 174, 126,
        120, 191, 157, 194, 170, 189, 162, 161, 150, 193, 142, 137, 171, 176, 185, 167,
        186, 112, 175, 192, 188, 156, 140, 143, 123, 133, 128, 147, 138, 146, 114, 223,
        151, 249, 216, 238, 236, 253, 227, 218, 230, 247, 135, 180, 241, 233, 246, 244,
        231, 139, 245, 243, 251, 235, 201, 196, 240, 214, 152, 182, 205, 181, 127, 27,
        212, 211, 210, 213, 228, 197, 169, 159, 131, 172, 105, 80, 98, 96, 97, 81,
        207, 145, 116, 115, 144, 130, 153, 121, 107, 132, 109, 110, 124, 111, 82, 108,
        118, 141, 113, 129, 119, 125, 165, 117, 92, 106, 83, 72, 99, 93, 65, 79,
        166, 237, 163, 199, 190, 225, 209, 203, 198, 217, 219, 206, 234, 248, 158, 239,
    ]
    + [255] * 64
)


def rank(byte: int) -> int:
    """Return the heuristic frequency rank of ``byte`` (lower is rarer)."""
    return BYTE_FREQUENCIES[byte]


class PrefilterState:
    """Tracks how effective a prefilter is over the course of one search.

    Once the average number of bytes skipped per attempt drops below a
    threshold, the state becomes inert for the rest of its lifetime.
    """

    MIN_SKIPS = 50
    MIN_SKIP_BYTES = 8

    def __init__(self, max_match_len: int) -> None:
        self.skips = 0
        self.skipped = 0
        self.max_match_len = max_match_len
        self._inert = max_match_len == 0

    @classmethod
    def inert(cls) -> PrefilterState:
        """Return a state that never reports the prefilter as effective."""
        return cls(0)

    @property
    def is_inert(self) -> bool:
        """True once the prefilter has been switched off."""
        return self._inert

    def update(self, skipped: int) -> None:
        """Record that the last prefilter call skipped ``skipped`` bytes."""
        self.skips += 1
        self.skipped += skipped

    def is_effective(self) -> bool:
        """Return True while the prefilter is still worth using."""
        if self._inert:
            return False
        if self.skips < self.MIN_SKIPS:
            return True
        if self.skipped >= self.MIN_SKIP_BYTES * self.skips:
            return True
        self._inert = True
        return False

    def __repr__(self) -> str:
        return (
            f"PrefilterState(skips={self.skips}, skipped={self.skipped}, "
            f"max_match_len={self.max_match_len}, inert={self._inert})"
        )


@dataclass(frozen=True)
class Freqy:
    """Prefilter that jumps between occurrences of a needle's rarest byte.

    ``rare1`` is the rarest byte and ``rare1i`` its offset; ``rare2`` and
    ``rare2i`` describe the second rarest. For a forward prefilter offsets
    count from the start of the needle; for a reverse one they count from
    its end, so 0 is the last byte.
    """

    needle_len: int = 0
    rare1: int = 0
    rare1i: int = 0
    rare2: int = 0
    rare2i: int = 0
    is_inert: bool = True

    MAX_RANK = 200

    @classmethod
    def inert(cls) -> Freqy:
        """Return a prefilter that must never be used for searching."""
        return cls()

    @classmethod
    def forward(cls, needle: bytes) -> Freqy:
        """Build a prefilter for searching ``needle`` forwards."""
        if not needle:
            return cls.inert()
        rare1, rare1i = needle[0], 0
        rare2, rare2i = needle[0], 0
        if len(needle) >= 2:
            rare2, rare2i = needle[1], 1
        if rank(rare2) < rank(rare1):
            rare1, rare2 = rare2, rare1
            rare1i, rare2i = rare2i, rare1i
        for i, byte in enumerate(islice(needle, 2, None), 2):
            if rank(byte) < rank(rare1):
                rare2, rare2i = rare1, rare1i
                rare1, rare1i = byte, i
            elif byte != rare1 and rank(byte) < rank(rare2):
                rare2, rare2i = byte, i
        if rank(rare1) > cls.MAX_RANK:
            return cls.inert()
        return cls(len(needle), rare1, rare1i, rare2, rare2i, False)

    @classmethod
    def reverse(cls, needle: bytes) -> Freqy:
        """Build a prefilter for searching ``needle`` backwards."""
        if not needle:
            return cls.inert()
        length = len(needle)
        rare1i = 0
        rare2i = 1 if length >= 2 else 0
        rare1 = needle[length - rare1i - 1]
        rare2 = needle[length - rare2i - 1]
        if rank(rare2) < rank(rare1):
            rare1, rare2 = rare2, rare1
            rare1i, rare2i = rare2i, rare1i
        for i, byte in enumerate(islice(reversed(needle), 2, None), 2):
            if rank(byte) < rank(rare1):
                rare2, rare2i = rare1, rare1i
                rare1, rare1i = byte, i
            elif byte != rare1 and rank(byte) < rank(rare2):
                rare2, rare2i = byte, i
        if rank(rare1) > cls.MAX_RANK:
            return cls.inert()
        return cls(length, rare1, rare1i, rare2, rare2i, False)

    def prefilter_state(self) -> PrefilterState:
        """Return a fresh state to use with this prefilter for one search."""
        if self.is_inert:
            return PrefilterState.inert()
        return PrefilterState(self.needle_len)

    def find_candidate(
        self, prestate: PrefilterState, haystack: bytes
    ) -> int | None:
        """Return a possible start of the needle in ``haystack``, or None.

        Never misses a real occurrence but may return false positives.
        Only valid for a prefilter built with :meth:`forward`.
        """
        i = 0
        while prestate.is_effective():
            found = haystack.find(self.rare1, i)
            if found < 0:
                return None
            prestate.update(found - i)
            i = found

            if i < self.rare1i:
                i += 1
                continue

            aligned = i - self.rare1i + self.rare2i
            if aligned >= len(haystack) or haystack[aligned] != self.rare2:
                i += 1
                continue

            return i - self.rare1i
        return max(0, i - self.rare1i)

    def rfind_candidate(
        self, prestate: PrefilterState, haystack: bytes
    ) -> int | None:
        """Return a possible end (exclusive) of the needle in ``haystack``.

        Searches from the end backwards. Never misses a real occurrence but
        may return false positives. Only valid for a prefilter built with
        :meth:`reverse`.
        """
        length = len(haystack)
        i = length
        while prestate.is_effective():
            found = haystack.rfind(self.rare1, 0, i)
            if found < 0:
                return None
            prestate.update(i - found)
            i = found

            if i + self.rare1i + 1 > length:
                continue

            aligned = i + self.rare1i - self.rare2i
            if aligned < 0 or haystack[aligned] != self.rare2:
                continue

            return i + self.rare1i + 1
        return i + self.rare1i + 1