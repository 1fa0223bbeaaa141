"""Critical factorisation helpers: maximal and minimal suffixes of a needle.

A suffix is found together with its period, which is a lower bound on the
period of the whole needle. Both are needed to set up Two-Way search.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["SuffixOrdering", "SuffixKind", "Suffix"]


class SuffixOrdering(Enum):
    """Outcome of comparing corresponding bytes of two suffixes."""

    #: The candidate suffix supplants the current one.
    ACCEPT = "accept"
    #: The candidate suffix is dropped; try the next candidate.
    SKIP = "skip"
    #: No decision yet; compare the next pair of bytes.
    PUSH = "push"


class SuffixKind(Enum):
    """Which lexicographic extreme of the suffixes to extract.

    ``MINIMAL`` prefers the longer of two suffixes where one is a prefix of
    the other (``aa`` over ``a``), so it is not strictly the smallest suffix.
    ``MAXIMAL`` picks the true lexicographic maximum.
    """

    MINIMAL = "minimal"
    MAXIMAL = "maximal"

    def compare(self, current: int, candidate: int) -> SuffixOrdering:
        """Decide what the ``candidate`` byte means for the current suffix."""
        if self is SuffixKind.MINIMAL:
            if candidate < current:
                return SuffixOrdering.ACCEPT
            if candidate > current:
                return SuffixOrdering.SKIP
            return SuffixOrdering.PUSH
        if candidate > current:
            return SuffixOrdering.ACCEPT
        if candidate < current:
            return SuffixOrdering.SKIP
        return SuffixOrdering.PUSH


@dataclass(frozen=True)
class Suffix:
    """A suffix of a needle together with its period.

    For a forward suffix, ``needle[pos:]`` is the suffix (``pos`` is an
    inclusive start). For a reverse suffix, ``needle[:pos]`` is the suffix
    (``pos`` is an exclusive end). ``period`` is the period of the suffix,
    never greater than the period of the needle itself.
    """

    pos: int
    period: int

    @classmethod
    def forward(cls, needle: bytes, kind: SuffixKind) -> Suffix:
        """Find the minimal or maximal suffix of a non-empty ``needle``."""
        if not needle:
            raise ValueError("needle must not be empty")
        length = len(needle)
        pos, period = 0, 1
        candidate_start = 1
        offset = 0
        while candidate_start + offset < length:
            current = needle[pos + offset]
            candidate = needle[candidate_start + offset]
            ordering = kind.compare(current, candidate)
            if ordering is SuffixOrdering.ACCEPT:
                pos, period = candidate_start, 1
                candidate_start += 1
                offset = 0
            elif ordering is SuffixOrdering.SKIP:
                candidate_start += offset + 1
                offset = 0
                period = candidate_start - pos
            elif offset + 1 == period:
                candidate_start += period
                offset = 0
            else:
                offset += 1
        return cls(pos, period)

    @classmethod
    def reverse(cls, needle: bytes, kind: SuffixKind) -> Suffix:
        """Find the minimal or maximal suffix of the reversed ``needle``.

        The result is expressed in terms of the original, unreversed needle.
        """
        if not needle:
            raise ValueError("needle must not be empty")
        length = len(needle)
        pos, period = length, 1
        if length == 1:
            return cls(pos, period)
        candidate_start = length - 1
        offset = 0
        while offset < candidate_start:
            current = needle[pos - offset - 1]
            candidate = needle[candidate_start - offset - 1]
            ordering = kind.compare(current, candidate)
            if ordering is SuffixOrdering.ACCEPT:
                pos, period = candidate_start, 1
                candidate_start -= 1
                offset = 0
            elif ordering is SuffixOrdering.SKIP:
                candidate_start -= offset + 1
                offset = 0
                period = pos - candidate_start
            elif offset + 1 == period:
                candidate_start -= period
                offset = 0
            else:
                offset += 1
        return cls(pos, period)