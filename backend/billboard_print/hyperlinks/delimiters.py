"""
引号定界符 - 锚点标记 href 属性可用的引号对

每个引号对单独编译为一个模式；同一引号对必须开闭一致，
URL中不得出现该对的闭合引号。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class QuotePair:
    """一对引号"""
    name: str
    open: str
    close: str
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.open) != 1 or len(self.close) != 1:
            raise ValueError(f"引号必须为单个字符: {self.name}")
        if self.open == "<" or self.close in ("<", ">"):
            raise ValueError(f"引号与标记符号冲突: {self.name}")
        # <a href=OPEN URL CLOSE>LABEL</a>，URL不含本对闭合引号，LABEL不含'<'
        regex = (
            r"<a href="
            + re.escape(self.open)
            + r"([^" + re.escape(self.close) + r"]*)"
            + re.escape(self.close)
            + r">([^<]*)</a>"
        )
        object.__setattr__(self, "pattern", re.compile(regex))


QUOTE_PAIRS: tuple[QuotePair, ...] = (
    QuotePair("straight", '"', '"'),
    QuotePair("curly", "“", "”"),      # “ ”
    QuotePair("guillemet", "«", "»"),  # « »
)


def get_quote_pair(name: str) -> QuotePair:
    for pair in QUOTE_PAIRS:
        if pair.name == name:
            return pair
    raise KeyError(name)
