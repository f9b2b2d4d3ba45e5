from __future__ import annotations

from copytxmate.formatting.formatter import format_text

# Demonstration inputs shown by the "run samples" action.
SAMPLE_CASES: tuple[str, ...] = (
    " Hello  world  你好  世界 ",
    "你好,世界.这是一个测试!",
    "Hello，world。This is a test！",
    "这是一个test测试案例",
    "这是(test)测试",
    "Hello世界,这是一个test案例,包含english和中文,以及标点符号(punctuation)!",
)


def run_samples() -> list[tuple[str, str]]:
    return [(case, format_text(case)) for case in SAMPLE_CASES]


def render_samples(results: list[tuple[str, str]]) -> str:
    lines = ["测试结果：", ""]
    for i, (src, out) in enumerate(results, start=1):
        lines.append(f"测试 #{i}")
        lines.append(f"输入：{src}")
        lines.append(f"输出：{out}")
        lines.append("")
    return "\n".join(lines)
