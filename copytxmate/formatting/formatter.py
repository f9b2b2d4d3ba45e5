from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from copytxmate.formatting.punctuation import PunctuationConverter, convert_punctuation
from copytxmate.formatting.rules import (
    collapse_cjk_spaces,
    collapse_whitespace,
    remove_line_breaks,
    space_cjk_latin,
    trim_punctuation_spaces,
)

logger = logging.getLogger(__name__)


class EncodingFailure(ValueError):
    """Input is not well-formed text (e.g. it holds lone surrogates)."""


@dataclass
class FormatResult:
    text: str
    stats: dict[str, int] = field(default_factory=dict)


def _ensure_valid_text(text: str) -> str:
    try:
        return text.encode("utf-8").decode("utf-8")
    except UnicodeError as e:
        raise EncodingFailure(str(e)) from e


class TextFormatter:
    """Reformat mixed Chinese/Latin text: whitespace, punctuation width, CJK/Latin spacing.

    Instances hold no per-call state, so one formatter can be shared across threads.
    """

    def __init__(self, converter: PunctuationConverter | None = None) -> None:
        self._converter = converter or PunctuationConverter()

    def _convert_punctuation(self, text: str) -> tuple[str, int]:
        return convert_punctuation(text, self._converter)

    def _stages(self) -> list[tuple[str, Callable[[str], tuple[str, int]]]]:
        # Order matters: each stage relies on the normalization done before it.
        return [
            ("remove_line_breaks", remove_line_breaks),
            ("collapse_cjk_spaces", collapse_cjk_spaces),
            ("collapse_whitespace", collapse_whitespace),
            ("trim_punctuation_spaces", trim_punctuation_spaces),
            ("convert_punctuation", self._convert_punctuation),
            ("space_cjk_latin", space_cjk_latin),
        ]

    def format_with_stats(self, text: str) -> FormatResult:
        if not text:
            return FormatResult(text="")

        try:
            result = _ensure_valid_text(text)
        except EncodingFailure:
            logger.warning("input is not valid text; returning it unchanged")
            return FormatResult(text=text)

        stats: dict[str, int] = {}
        for name, stage in self._stages():
            result, n = stage(result)
            if n:
                stats[name] = stats.get(name, 0) + n

        return FormatResult(text=result.strip(), stats=stats)

    def format_text(self, text: str) -> str:
        return self.format_with_stats(text).text


_DEFAULT_FORMATTER = TextFormatter()


def format_text(text: str) -> str:
    return _DEFAULT_FORMATTER.format_text(text)


def format_text_with_stats(text: str) -> FormatResult:
    return _DEFAULT_FORMATTER.format_with_stats(text)
