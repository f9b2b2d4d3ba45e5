from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CharClass(StrEnum):
    CJK = "cjk"
    LATIN = "latin"
    PUNCTUATION = "punctuation"
    OTHER = "other"


class BracketContext(StrEnum):
    NONE = "none"
    OPEN_CJK = "open_cjk"
    OPEN_LATIN = "open_latin"


@dataclass(frozen=True)
class PunctuationPair:
    half: str
    full: str


PUNCTUATION_PAIRS: tuple[PunctuationPair, ...] = (
    PunctuationPair(",", "，"),
    PunctuationPair(".", "。"),
    PunctuationPair("!", "！"),
    PunctuationPair("?", "？"),
    PunctuationPair(":", "："),
    PunctuationPair(";", "；"),
    PunctuationPair("(", "（"),
    PunctuationPair(")", "）"),
    PunctuationPair("[", "【"),
    PunctuationPair("]", "】"),
)

_TO_FULL: dict[str, str] = {p.half: p.full for p in PUNCTUATION_PAIRS}
_TO_HALF: dict[str, str] = {p.full: p.half for p in PUNCTUATION_PAIRS}

HALFWIDTH_PUNCTUATION = "".join(p.half for p in PUNCTUATION_PAIRS)
FULLWIDTH_PUNCTUATION = "".join(p.full for p in PUNCTUATION_PAIRS)

_OPEN_BRACKETS = frozenset("(（")
_CLOSE_BRACKETS = frozenset(")）")


def is_cjk(ch: str | None) -> bool:
    """True when `ch` holds a Han ideograph in U+4E00..U+9FFF."""

    if not ch:
        return False
    return any(0x4E00 <= ord(c) <= 0x9FFF for c in ch)


def is_latin(ch: str | None) -> bool:
    return bool(ch) and len(ch) == 1 and ch.isascii() and ch.isalnum()


def classify_char(ch: str) -> CharClass:
    if is_cjk(ch):
        return CharClass.CJK
    if is_latin(ch):
        return CharClass.LATIN
    if ch in _TO_FULL or ch in _TO_HALF:
        return CharClass.PUNCTUATION
    return CharClass.OTHER


def to_fullwidth(ch: str) -> str:
    return _TO_FULL.get(ch, ch)


def to_halfwidth(ch: str) -> str:
    return _TO_HALF.get(ch, ch)


class PunctuationConverter:
    """Pick half-width or full-width punctuation from the character before each mark.

    Brackets remember which family they were opened in, so the closer matches the
    opener even when the text in between switches script. Only one level is
    tracked: a second opener replaces the first.

    The decision always looks at the source text, never at already-converted output.
    """

    def convert(self, text: str) -> str:
        out: list[str] = []
        previous_char: str | None = None
        context = BracketContext.NONE

        for ch in text:
            if ch in _OPEN_BRACKETS:
                use_cjk = is_cjk(previous_char)
                context = BracketContext.OPEN_CJK if use_cjk else BracketContext.OPEN_LATIN
                out.append("（" if use_cjk else "(")
            elif ch in _CLOSE_BRACKETS:
                if context is BracketContext.OPEN_CJK:
                    out.append("）")
                elif context is BracketContext.OPEN_LATIN:
                    out.append(")")
                else:
                    # Unbalanced closer: fall back to the neighbour.
                    out.append("）" if is_cjk(previous_char) else ")")
                context = BracketContext.NONE
            elif ch in _TO_FULL or ch in _TO_HALF:
                if context is BracketContext.OPEN_CJK:
                    use_cjk = True
                elif context is BracketContext.OPEN_LATIN:
                    use_cjk = False
                else:
                    use_cjk = is_cjk(previous_char)
                out.append(to_fullwidth(ch) if use_cjk else to_halfwidth(ch))
            else:
                out.append(ch)
            previous_char = ch

        return "".join(out)


def convert_punctuation(text: str, converter: PunctuationConverter | None = None) -> tuple[str, int]:
    """Run the converter and count how many marks changed width."""

    converted = (converter or PunctuationConverter()).convert(text)
    changed = sum(1 for a, b in zip(text, converted) if a != b)
    return converted, changed
