# bytetext

Tools for byte strings that are *mostly* UTF-8 but may not be.

- **`bytetext.utf8`** decodes one code point at a time. `decode` and
  `decode_lossy` read from the front. `decode_last` and `decode_last_lossy`
  read from the back. Invalid sequences become `None` or U+FFFD under the
  "maximal subpart" rule. A byte sequence that is a valid prefix of some
  encoded code point counts as one unit. Every other invalid byte stands
  alone. `chars` returns a `Chars` iterator and `char_indices` returns a
  `CharIndices` iterator. Both work in either direction through
  `reversed(...)` or `next_back()`, and both expose the unconsumed bytes as
  `remaining`.
- **`bytetext.twoway`** provides `TwoWay`, a Two-Way substring searcher.
  `TwoWay.forward(needle).find(haystack)` returns the start of the first
  occurrence. `TwoWay.reverse(needle).rfind(haystack)` returns the start of
  the last one. Both return `None` when there is no match. An empty needle
  matches at `0` going forward and at `len(haystack)` going backward.
- **`bytetext.prefilter`** holds the byte-frequency table (`rank`), the
  `Freqy` prefilter that skips between occurrences of a needle's rarest byte,
  and `PrefilterState`. The state switches the prefilter off once it stops
  skipping enough bytes.
- **`bytetext.suffix`** and **`bytetext.shift`** compute the critical
  factorisation a Two-Way searcher is built on:
  - `Suffix.forward` / `Suffix.reverse` with `SuffixKind.MINIMAL` or
    `SuffixKind.MAXIMAL`;
  - `Shift.forward` / `Shift.reverse`.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install ".[test]"
pytest
```

## Examples

Decoding:

```python
from bytetext.utf8 import char_indices, chars, decode, decode_last

decode(b"\xE2\x98\x83")        # ('☃', 3)
decode(b"\xE2\x98")            # (None, 2)
decode_last(b"a\xF0\x9D\x9C")  # (None, 3)

"".join(chars(b"a\xED\xA0\x80z"))          # 'a\ufffd\ufffd\ufffdz'
"".join(reversed(chars(b"\xCE\xB2\xFF")))  # '\ufffdβ'

list(char_indices(b"a\xFFb"))
# [(0, 1, 'a'), (1, 2, '\ufffd'), (2, 3, 'b')]
```

Searching:

```python
from bytetext.twoway import TwoWay

TwoWay.forward(b"ab").find(b"abaab")    # 0
TwoWay.reverse(b"ab").rfind(b"abaab")   # 3
TwoWay.forward(b"abc").find(b"azbc")    # None
```

You can reuse one searcher across several searches of the same haystack. To
do that, create a prefilter state once with `searcher.prefilter_state()` and
pass it to `find_with` or `rfind_with`.

## What it does not do

The package has no function that checks a whole byte string for UTF-8
validity and reports where it fails. To find the first bad offset, walk the
data with `decode` and look for a `None` result. The package also has no
helpers for reading lines from a stream. It provides no command-line tool.