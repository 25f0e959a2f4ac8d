"""
超链接模块 - 锚点标记提取

子模块：
- delimiters: 可用引号对
- matcher: 标记匹配与文本重写
- extractor: 文档级扫描与链接创建
- document_model: 内存文档模型
"""

from .delimiters import QUOTE_PAIRS, QuotePair
from .document_model import InMemoryDocument, InMemoryDocumentModel, TextUnit
from .extractor import HyperlinkExtractor
from .matcher import Placement, find_link_tokens, rewrite_text, strip_links

__all__ = [
    "QuotePair",
    "QUOTE_PAIRS",
    "find_link_tokens",
    "rewrite_text",
    "strip_links",
    "Placement",
    "HyperlinkExtractor",
    "InMemoryDocument",
    "InMemoryDocumentModel",
    "TextUnit",
]
