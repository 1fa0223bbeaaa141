"""Shift amounts for Two-Way search, derived from a critical factorisation."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Shift"]


@dataclass(frozen=True)
class Shift:
    """How far Two-Way search may move after a mismatch in the right half.

    When ``small`` is true, ``amount`` is the exact period of the needle and
    the search remembers how much of the needle is already known to match.
    Otherwise ``amount`` is ``max(len(u), len(v))`` for the critical
    factorisation ``needle = uv``, which never exceeds the needle's period.
    """

    amount: int
    small: bool

    @classmethod
    def forward(
        cls, needle: bytes, period_lower_bound: int, critical_pos: int
    ) -> Shift:
        """Compute the shift for searching ``needle`` forwards.

        ``critical_pos`` is the start of the chosen suffix (the right-most of
        the minimal and maximal suffixes) and ``period_lower_bound`` its
        period.
        """
        length = len(needle)
        large = cls(max(critical_pos, length - critical_pos), small=False)
        if critical_pos * 2 >= length:
            return large
        u, v = needle[:critical_pos], needle[critical_pos:]
        if period_lower_bound > len(v):
            raise ValueError("period lower bound exceeds the suffix length")
        if not v[:period_lower_bound].endswith(u):
            return large
        return cls(period_lower_bound, small=True)

    @classmethod
    def reverse(
        cls, needle: bytes, period_lower_bound: int, critical_pos: int
    ) -> Shift:
        """Compute the shift for searching ``needle`` backwards.

        ``critical_pos`` is the exclusive end of the chosen reverse suffix
        (the left-most of the minimal and maximal suffixes) and
        ``period_lower_bound`` its period.
        """
        length = len(needle)
        large = cls(max(critical_pos, length - critical_pos), small=False)
        if (length - critical_pos) * 2 >= length:
            return large
        v, u = needle[:critical_pos], needle[critical_pos:]
        start = len(v) - period_lower_bound
        if start < 0:
            raise ValueError("period lower bound exceeds the suffix length")
        if not v[start:].startswith(u):
            return large
        return cls(period_lower_bound, small=True)