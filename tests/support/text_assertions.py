from __future__ import annotations

import re

_HAN = r"\u4e00-\u9fff"
_CJK_OR_PUNCT = _HAN + "，。！？：；（）【】"

_cjk_gap_re = re.compile(rf"[{_CJK_OR_PUNCT}]\s+[{_CJK_OR_PUNCT}]")
_han_latin_touch_re = re.compile(rf"[{_HAN}][A-Za-z0-9]|[A-Za-z0-9][{_HAN}]")
_han_latin_wide_gap_re = re.compile(rf"[{_HAN}]\s{{2,}}[A-Za-z0-9]|[A-Za-z0-9]\s{{2,}}[{_HAN}]")

_CLOSER_FOR = {"(": ")", "（": "）"}


def assert_no_newlines(text: str) -> None:
    if "\n" in text or "\r" in text:
        raise AssertionError(f"line break survived: {text!r}")


def assert_no_space_between_cjk(text: str) -> None:
    m = _cjk_gap_re.search(text)
    if m:
        raise AssertionError(f"space between CJK characters at {m.start()}: {text!r}")


def assert_single_space_at_cjk_latin_boundaries(text: str) -> None:
    m = _han_latin_touch_re.search(text)
    if m:
        raise AssertionError(f"missing space at CJK/Latin boundary {m.group(0)!r}: {text!r}")
    m = _han_latin_wide_gap_re.search(text)
    if m:
        raise AssertionError(f"more than one space at CJK/Latin boundary {m.group(0)!r}: {text!r}")


def assert_bracket_families_match(text: str) -> None:
    """Every opener is closed by the closer of its own width (no nesting in inputs)."""

    open_char: str | None = None
    for ch in text:
        if ch in _CLOSER_FOR:
            open_char = ch
        elif ch in {")", "）"} and open_char is not None:
            if _CLOSER_FOR[open_char] != ch:
                raise AssertionError(f"bracket {open_char!r} closed by {ch!r}: {text!r}")
            open_char = None


def assert_formatted_invariants(text: str) -> None:
    assert_no_newlines(text)
    assert_no_space_between_cjk(text)
    assert_single_space_at_cjk_latin_boundaries(text)
    assert_bracket_families_match(text)
    if text != text.strip():
        raise AssertionError(f"leading/trailing whitespace: {text!r}")
