import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bytetext.twoway import TwoWay

SEARCH_TESTS = [
    ("", "", 0, 0),
    ("", "a", 0, 1),
    ("", "ab", 0, 2),
    ("", "abc", 0, 3),
    ("a", "", None, None),
    ("a", "a", 0, 0),
    ("a", "aa", 0, 1),
    ("a", "ba", 1, 1),
    ("a", "bba", 2, 2),
    ("a", "bbba", 3, 3),
    ("a", "bbbab", 3, 3),
    ("a", "bbbabb", 3, 3),
    ("a", "bbbabbb", 3, 3),
    ("a", "bbbbbb", None, None),
    ("ab", "", None, None),
    ("ab", "a", None, None),
    ("ab", "b", None, None),
    ("ab", "ab", 0, 0),
    ("ab", "aab", 1, 1),
    ("ab", "aaab", 2, 2),
    ("ab", "abaab", 0, 3),
    ("ab", "baaab", 3, 3),
    ("ab", "acb", None, None),
    ("ab", "abba", 0, 0),
    ("abc", "ab", None, None),
    ("abc", "abc", 0, 0),
    ("abc", "abcz", 0, 0),
    ("abc", "abczz", 0, 0),
    ("abc", "zabc", 1, 1),
    ("abc", "zzabc", 2, 2),
    ("abc", "azbc", None, None),
    ("abc", "abzc", None, None),
    ("abczdef", "abczdefzzzzzzzzzzzzzzzzzzzz", 0, 0),
    ("abczdef", "zzzzzzzzzzzzzzzzzzzzabczdef", 20, 20),
    ("\x00\x15", "\x00\x15\x15\x00", 0, 0),
    ("\x00\x1e", "\x1e\x00", None, None),
]


def _oracle_find(needle: bytes, haystack: bytes):
    found = haystack.find(needle)
    return None if found < 0 else found


def _oracle_rfind(needle: bytes, haystack: bytes):
    found = haystack.rfind(needle)
    return None if found < 0 else found


@pytest.mark.parametrize("needle,haystack,expected_fwd,expected_rev", SEARCH_TESTS)
def test_twoway_forward(needle, haystack, expected_fwd, expected_rev):
    searcher = TwoWay.forward(needle.encode("latin-1"))
    assert searcher.find(haystack.encode("latin-1")) == expected_fwd


@pytest.mark.parametrize("needle,haystack,expected_fwd,expected_rev", SEARCH_TESTS)
def test_twoway_reverse(needle, haystack, expected_fwd, expected_rev):
    searcher = TwoWay.reverse(needle.encode("latin-1"))
    assert searcher.rfind(haystack.encode("latin-1")) == expected_rev


def test_needle_is_kept():
    assert TwoWay.forward(b"needle").needle == b"needle"
    assert TwoWay.reverse(b"needle").needle == b"needle"


def test_periodic_needle_forward_and_reverse():
    haystack = b"aaabaaaab" + b"aaaa" + b"baaa"
    assert TwoWay.forward(b"aaaa").find(haystack) == 4
    assert TwoWay.reverse(b"aaaa").rfind(haystack) == 9


def test_find_with_reused_state():
    searcher = TwoWay.forward(b"XYZ")
    state = searcher.prefilter_state()
    assert searcher.find_with(state, b"abcXYZdef") == 3
    assert searcher.find_with(state, b"XYZ") == 0
    assert searcher.find_with(state, b"XY") is None


def test_rfind_with_reused_state():
    searcher = TwoWay.reverse(b"XYZ")
    state = searcher.prefilter_state()
    assert searcher.rfind_with(state, b"XYZabcXYZdef") == 6
    assert searcher.rfind_with(state, b"XYZ") == 0
    assert searcher.rfind_with(state, b"YZ") is None


def test_pathological_haystack_forward():
    needle = b"QQQQQQQQQQR"
    haystack = b"Q" * 5000 + b"R"
    assert TwoWay.forward(needle).find(haystack) == 5000 - 10


def test_pathological_haystack_reverse():
    needle = b"RQQQQQQQQQQ"
    haystack = b"R" + b"Q" * 5000
    assert TwoWay.reverse(needle).rfind(haystack) == 0


def test_many_rare_candidates_forward():
    needle = b"Z!Z!Zq"
    haystack = b"Z!" * 400 + b"Zq" + b"Z!" * 10
    assert TwoWay.forward(needle).find(haystack) == haystack.find(needle)


def test_many_rare_candidates_reverse():
    needle = b"qZ!Z!Z"
    haystack = b"!Z" * 10 + b"qZ" + b"!Z" * 400
    assert TwoWay.reverse(needle).rfind(haystack) == haystack.rfind(needle)


@settings(max_examples=200)
@given(st.binary(max_size=40))
def test_forward_prefix_is_substring(data):
    for i in range(max(0, len(data) - 1)):
        prefix = data[:i]
        assert TwoWay.forward(prefix).find(data) == _oracle_find(prefix, data)


@settings(max_examples=200)
@given(st.binary(max_size=40))
def test_forward_suffix_is_substring(data):
    for i in range(max(0, len(data) - 1)):
        suffix = data[i:]
        assert TwoWay.forward(suffix).find(data) == _oracle_find(suffix, data)


@settings(max_examples=200)
@given(st.binary(max_size=40))
def test_reverse_prefix_is_substring(data):
    for i in range(max(0, len(data) - 1)):
        prefix = data[:i]
        assert TwoWay.reverse(prefix).rfind(data) == _oracle_rfind(prefix, data)


@settings(max_examples=200)
@given(st.binary(max_size=40))
def test_reverse_suffix_is_substring(data):
    for i in range(max(0, len(data) - 1)):
        suffix = data[i:]
        assert TwoWay.reverse(suffix).rfind(data) == _oracle_rfind(suffix, data)


@settings(max_examples=300)
@given(st.binary(max_size=12), st.binary(max_size=60))
def test_forward_matches_naive(needle, haystack):
    assert TwoWay.forward(needle).find(haystack) == _oracle_find(needle, haystack)


@settings(max_examples=300)
@given(st.binary(max_size=12), st.binary(max_size=60))
def test_reverse_matches_naive(needle, haystack):
    assert TwoWay.reverse(needle).rfind(haystack) == _oracle_rfind(needle, haystack)


@settings(max_examples=300)
@given(
    st.text(alphabet="ab", max_size=8),
    st.text(alphabet="ab", max_size=80),
)
def test_small_alphabet_matches_naive(needle, haystack):
    n, h = needle.encode(), haystack.encode()
    assert TwoWay.forward(n).find(h) == _oracle_find(n, h)
    assert TwoWay.reverse(n).rfind(h) == _oracle_rfind(n, h)