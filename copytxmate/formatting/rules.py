from __future__ import annotations

import re

from copytxmate.formatting.punctuation import FULLWIDTH_PUNCTUATION, HALFWIDTH_PUNCTUATION

_CJK = r"\u4e00-\u9fff"

# Han ideographs plus the full-width marks of the punctuation table.
_CJK_OR_PUNCT = _CJK + re.escape(FULLWIDTH_PUNCTUATION)

_line_break_re = re.compile(r"\s*[\r\n]\s*")
_cjk_gap_re = re.compile(rf"([{_CJK_OR_PUNCT}])\s+([{_CJK_OR_PUNCT}])")
_whitespace_run_re = re.compile(r"\s+")

_punct_space_res: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"\s*{re.escape(mark)}\s*"), mark) for mark in FULLWIDTH_PUNCTUATION + HALFWIDTH_PUNCTUATION
)

_cjk_then_latin_re = re.compile(rf"(?<=[{_CJK}])(?=[A-Za-z0-9])")
_latin_then_cjk_re = re.compile(rf"(?<=[A-Za-z0-9])(?=[{_CJK}])")


def remove_line_breaks(text: str) -> tuple[str, int]:
    """Join hard-wrapped lines (e.g. pasted from a PDF) into one line.

    The line break and all whitespace around it are dropped, not replaced by a space.
    """

    return _line_break_re.subn("", text)


def collapse_cjk_spaces(text: str) -> tuple[str, int]:
    """Remove whitespace sitting between two CJK characters or CJK marks.

    Runs until nothing changes; each pass only shortens the text, and the pass count
    is capped by its length.
    """

    count = 0
    for _ in range(len(text) + 1):
        text, n = _cjk_gap_re.subn(r"\1\2", text)
        if not n:
            break
        count += n
    return text, count


def collapse_whitespace(text: str) -> tuple[str, int]:
    count = 0

    def _repl(m: re.Match[str]) -> str:
        nonlocal count
        if m.group(0) != " ":
            count += 1
        return " "

    return _whitespace_run_re.sub(_repl, text), count


def trim_punctuation_spaces(text: str) -> tuple[str, int]:
    count = 0
    for pattern, mark in _punct_space_res:
        count += sum(1 for m in pattern.finditer(text) if m.group(0) != mark)
        text = pattern.sub(mark, text)
    return text, count


def space_cjk_latin(text: str) -> tuple[str, int]:
    """Put one space between a Han character and an adjacent ASCII letter/digit run."""

    text, n1 = _cjk_then_latin_re.subn(" ", text)
    text, n2 = _latin_then_cjk_re.subn(" ", text)
    return text, n1 + n2
