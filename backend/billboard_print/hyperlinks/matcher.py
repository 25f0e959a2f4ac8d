"""
锚点匹配与文本重写

职责：
1. 在文本中查找所有不重叠的锚点标记（全部引号对）
2. 单次前向遍历生成新文本：未匹配片段原样复制，标记替换为标签
3. 记录每个标签在新文本中的区间

偏移累加器：每次替换后 offset += len(标记) - len(标签)。
标记总是包含标签本身，所以增量恒为正，与标签长短无关。
"""

from __future__ import annotations

from typing import NamedTuple

from ..models import LinkToken, TextSpan
from .delimiters import QUOTE_PAIRS, QuotePair


class Placement(NamedTuple):
    """标记与其标签在新文本中的位置"""
    token: LinkToken
    span: TextSpan


def find_link_tokens(text: str, pairs: tuple[QuotePair, ...] = QUOTE_PAIRS) -> list[LinkToken]:
    """查找全部锚点标记，按起始位置排序"""
    candidates: list[LinkToken] = []
    for pair in pairs:
        for m in pair.pattern.finditer(text):
            candidates.append(
                LinkToken(
                    url=m.group(1),
                    label=m.group(2),
                    match_span=TextSpan(start=m.start(), end=m.end()),
                    quote=pair.name,
                )
            )

    candidates.sort(key=lambda t: (t.match_span.start, -t.match_span.end))

    # 不同引号对的匹配可能交叠，保留靠左的
    tokens: list[LinkToken] = []
    cursor = 0
    for token in candidates:
        if token.match_span.start < cursor:
            continue
        tokens.append(token)
        cursor = token.match_span.end
    return tokens


def rewrite_text(text: str, pairs: tuple[QuotePair, ...] = QUOTE_PAIRS) -> tuple[str, list[Placement]]:
    """将全部标记替换为标签，返回 (新文本, 标签位置列表)"""
    parts: list[str] = []
    placements: list[Placement] = []
    offset = 0
    cursor = 0

    for token in find_link_tokens(text, pairs):
        parts.append(text[cursor:token.match_span.start])
        parts.append(token.label)

        start = token.match_span.start - offset
        placements.append(Placement(token, TextSpan(start=start, end=start + len(token.label))))

        offset += token.delta
        cursor = token.match_span.end

    parts.append(text[cursor:])
    return "".join(parts), placements


def strip_links(text: str) -> str:
    """仅返回去除标记后的文本"""
    return rewrite_text(text)[0]
