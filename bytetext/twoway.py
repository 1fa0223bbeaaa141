"""Two-Way substring search over byte strings, forwards and backwards.

The searcher follows Crochemore and Perrin's Two-Way algorithm with
zero-based indices, accelerated by a frequency-based prefilter that skips
between occurrences of the needle's rarest byte. The prefilter switches
itself off when it proves ineffective, which keeps the search linear in the
lengths of the needle and haystack.
"""

from __future__ import annotations

from dataclasses import dataclass

from bytetext.prefilter import Freqy, PrefilterState
from bytetext.shift import Shift
from bytetext.suffix import Suffix, SuffixKind

__all__ = ["TwoWay"]


@dataclass(frozen=True)
class TwoWay:
    """A Two-Way searcher for one needle, built for one search direction.

    ``critical_pos`` is where each attempt starts comparing: the start of the
    chosen suffix for a forward searcher, or its exclusive end for a reverse
    one. ``shift`` says how far an attempt may move after a mismatch.
    """

    needle: bytes
    freqy: Freqy
    critical_pos: int
    shift: Shift

    @classmethod
    def forward(cls, needle: bytes) -> TwoWay:
        """Create a searcher that finds the first occurrence of ``needle``."""
        needle = bytes(needle)
        freqy = Freqy.forward(needle)
        if not needle:
            return cls(needle, freqy, 0, Shift(0, small=False))
        min_suffix = Suffix.forward(needle, SuffixKind.MINIMAL)
        max_suffix = Suffix.forward(needle, SuffixKind.MAXIMAL)
        chosen = min_suffix if min_suffix.pos > max_suffix.pos else max_suffix
        shift = Shift.forward(needle, chosen.period, chosen.pos)
        return cls(needle, freqy, chosen.pos, shift)

    @classmethod
    def reverse(cls, needle: bytes) -> TwoWay:
        """Create a searcher that finds the last occurrence of ``needle``."""
        needle = bytes(needle)
        freqy = Freqy.reverse(needle)
        if not needle:
            return cls(needle, freqy, 0, Shift(0, small=False))
        min_suffix = Suffix.reverse(needle, SuffixKind.MINIMAL)
        max_suffix = Suffix.reverse(needle, SuffixKind.MAXIMAL)
        chosen = min_suffix if min_suffix.pos < max_suffix.pos else max_suffix
        shift = Shift.reverse(needle, chosen.period, chosen.pos)
        return cls(needle, freqy, chosen.pos, shift)

    def prefilter_state(self) -> PrefilterState:
        """Return a fresh prefilter state for one search or one iteration.

        The state is valid even when this searcher has no usable prefilter.
        """
        return self.freqy.prefilter_state()

    def find(self, haystack: bytes) -> int | None:
        """Return the start of the first occurrence in ``haystack``, or None."""
        return self.find_with(self.prefilter_state(), haystack)

    def rfind(self, haystack: bytes) -> int | None:
        """Return the start of the last occurrence in ``haystack``, or None."""
        return self.rfind_with(self.prefilter_state(), haystack)

    def find_with(
        self, prestate: PrefilterState, haystack: bytes
    ) -> int | None:
        """Like :meth:`find`, reusing the given prefilter state."""
        haystack = bytes(haystack)
        needle = self.needle
        if not needle:
            return 0
        if len(haystack) < len(needle):
            return None
        if len(needle) == 1:
            found = haystack.find(needle[0])
            return None if found < 0 else found
        prefilter = self._use_prefilter(prestate)
        if self.shift.small:
            return self._find_small(prestate, prefilter, haystack)
        return self._find_large(prestate, prefilter, haystack)

    def rfind_with(
        self, prestate: PrefilterState, haystack: bytes
    ) -> int | None:
        """Like :meth:`rfind`, reusing the given prefilter state."""
        haystack = bytes(haystack)
        needle = self.needle
        if not needle:
            return len(haystack)
        if len(haystack) < len(needle):
            return None
        if len(needle) == 1:
            found = haystack.rfind(needle[0])
            return None if found < 0 else found
        prefilter = self._use_prefilter(prestate)
        if self.shift.small:
            return self._rfind_small(prestate, prefilter, haystack)
        return self._rfind_large(prestate, prefilter, haystack)

    def _use_prefilter(self, prestate: PrefilterState) -> bool:
        return not self.freqy.is_inert and prestate.is_effective()

    def _find_small(
        self, prestate: PrefilterState, prefilter: bool, haystack: bytes
    ) -> int | None:
        needle = self.needle
        nlen = len(needle)
        hlen = len(haystack)
        critical = self.critical_pos
        period = self.shift.amount
        pos = 0
        shift = 0
        while pos + nlen <= hlen:
            i = max(critical, shift)
            if prefilter and prestate.is_effective():
                found = self.freqy.find_candidate(prestate, haystack[pos:])
                if found is None:
                    return None
                shift = 0
                i = critical
                pos += found
                if pos + nlen > hlen:
                    return None
            while i < nlen and needle[i] == haystack[pos + i]:
                i += 1
            if i < nlen:
                pos += i - critical + 1
                shift = 0
            else:
                j = critical
                while j > shift and needle[j] == haystack[pos + j]:
                    j -= 1
                if j <= shift and needle[shift] == haystack[pos + shift]:
                    return pos
                pos += period
                shift = nlen - period
        return None

    def _find_large(
        self, prestate: PrefilterState, prefilter: bool, haystack: bytes
    ) -> int | None:
        needle = self.needle
        nlen = len(needle)
        hlen = len(haystack)
        critical = self.critical_pos
        shift = self.shift.amount
        pos = 0
        while pos + nlen <= hlen:
            i = critical
            if prefilter and prestate.is_effective():
                found = self.freqy.find_candidate(prestate, haystack[pos:])
                if found is None:
                    return None
                pos += found
                if pos + nlen > hlen:
                    return None
            while i < nlen and needle[i] == haystack[pos + i]:
                i += 1
            if i < nlen:
                pos += i - critical + 1
            else:
                j = critical
                while j > 0 and needle[j] == haystack[pos + j]:
                    j -= 1
                if j == 0 and needle[0] == haystack[pos]:
                    return pos
                pos += shift
        return None

    def _rfind_small(
        self, prestate: PrefilterState, prefilter: bool, haystack: bytes
    ) -> int | None:
        needle = self.needle
        nlen = len(needle)
        critical = self.critical_pos
        period = self.shift.amount
        pos = len(haystack)
        shift = nlen
        while pos >= nlen:
            i = min(critical, shift)
            if prefilter and prestate.is_effective():
                found = self.freqy.rfind_candidate(prestate, haystack[:pos])
                if found is None:
                    return None
                shift = nlen
                i = critical
                # A candidate end beyond the searched window cannot match.
                pos = min(found, pos)
                if pos < nlen:
                    return None
            base = pos - nlen
            while i > 0 and needle[i - 1] == haystack[base + i - 1]:
                i -= 1
            if i > 0 or needle[0] != haystack[base]:
                pos -= critical - i + 1
                shift = nlen
            else:
                j = critical
                while j < shift and needle[j] == haystack[base + j]:
                    j += 1
                if j == shift:
                    return base
                pos -= period
                shift = period
        return None

    def _rfind_large(
        self, prestate: PrefilterState, prefilter: bool, haystack: bytes
    ) -> int | None:
        needle = self.needle
        nlen = len(needle)
        critical = self.critical_pos
        shift = self.shift.amount
        pos = len(haystack)
        while pos >= nlen:
            if prefilter and prestate.is_effective():
                found = self.freqy.rfind_candidate(prestate, haystack[:pos])
                if found is None:
                    return None
                pos = min(found, pos)
                if pos < nlen:
                    return None
            base = pos - nlen
            i = critical
            while i > 0 and needle[i - 1] == haystack[base + i - 1]:
                i -= 1
            if i > 0 or needle[0] != haystack[base]:
                pos -= critical - i + 1
            else:
                j = critical
                while j < nlen and needle[j] == haystack[base + j]:
                    j += 1
                if j == nlen:
                    return base
                pos -= shift
        return None