from __future__ import annotations

from copytxmate.formatting.rules import (
    collapse_cjk_spaces,
    collapse_whitespace,
    remove_line_breaks,
    space_cjk_latin,
    trim_punctuation_spaces,
)


def test_remove_line_breaks_drops_break_and_surrounding_whitespace() -> None:
    assert remove_line_breaks("这是第一行\n这是第二行") == ("这是第一行这是第二行", 1)
    assert remove_line_breaks("a \r\n b") == ("ab", 1)
    assert remove_line_breaks("一\n\n\n二\n三") == ("一二三", 2)
    assert remove_line_breaks("no breaks here") == ("no breaks here", 0)


def test_collapse_cjk_spaces_reaches_fixed_point() -> None:
    out, n = collapse_cjk_spaces("你 好 世 界")
    assert out == "你好世界"
    assert n == 3


def test_collapse_cjk_spaces_includes_fullwidth_marks() -> None:
    assert collapse_cjk_spaces("你好 ， 世界 。")[0] == "你好，世界。"
    assert collapse_cjk_spaces("（ 注 ）")[0] == "（注）"


def test_collapse_cjk_spaces_leaves_latin_alone() -> None:
    assert collapse_cjk_spaces("Hello  world 你好") == ("Hello  world 你好", 0)
    assert collapse_cjk_spaces("中文 abc 中文") == ("中文 abc 中文", 0)


def test_collapse_whitespace() -> None:
    assert collapse_whitespace("a \t b   c d") == ("a b c d", 2)
    assert collapse_whitespace("a b") == ("a b", 0)
    assert collapse_whitespace("中　文")[0] == "中 文"


def test_trim_punctuation_spaces_both_widths() -> None:
    assert trim_punctuation_spaces("Hello , world .") == ("Hello,world.", 2)
    assert trim_punctuation_spaces("你好 （ 世界 ） ！")[0] == "你好（世界）！"
    assert trim_punctuation_spaces("a [ b ] c")[0] == "a[b]c"
    assert trim_punctuation_spaces("no marks") == ("no marks", 0)


def test_trim_punctuation_spaces_between_adjacent_marks() -> None:
    assert trim_punctuation_spaces("好 ! ? 吗")[0] == "好!?吗"


def test_space_cjk_latin_both_directions() -> None:
    assert space_cjk_latin("这是一个test测试") == ("这是一个 test 测试", 2)
    assert space_cjk_latin("版本2发布")[0] == "版本 2 发布"
    assert space_cjk_latin("Hello世界")[0] == "Hello 世界"


def test_space_cjk_latin_keeps_existing_space_and_punctuation() -> None:
    assert space_cjk_latin("中文 abc 中文") == ("中文 abc 中文", 0)
    assert space_cjk_latin("这是（test）测试") == ("这是（test）测试", 0)
    assert space_cjk_latin("café中文")[0] == "café中文"
