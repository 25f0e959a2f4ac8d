"""
内存文档模型 - IDocumentModel 的默认实现

文档由若干文本单元（story）组成，持有文档级的目标注册表、链接源与链接。
宿主环境没有更丰富的内容模型时直接使用；测试中每个用例一个独立实例。
"""

from __future__ import annotations

from typing import Iterable

from ..interfaces import IDocumentModel, MalformedMatchError
from ..models import Link, LinkDestination, LinkSource, TextSpan


class TextUnit:
    """可变文本单元"""

    def __init__(self, index: int, content: str = ""):
        self.index = index
        self._content = content

    @property
    def content(self) -> str:
        return self._content

    def replace(self, start: int, end: int, text: str) -> None:
        if not 0 <= start <= end <= len(self._content):
            raise IndexError(f"替换区间越界: [{start}, {end}) / {len(self._content)}")
        self._content = self._content[:start] + text + self._content[end:]

    def __repr__(self) -> str:
        return f"TextUnit(index={self.index}, content={self._content!r})"


class InMemoryDocument:
    """内存文档"""

    def __init__(self, stories: Iterable[str] = ()):
        self.units: list[TextUnit] = [TextUnit(i, s) for i, s in enumerate(stories)]
        self.destinations: dict[str, LinkDestination] = {}
        self.sources: list[LinkSource] = []
        self.links: list[Link] = []

    def add_story(self, content: str) -> TextUnit:
        unit = TextUnit(len(self.units), content)
        self.units.append(unit)
        return unit

    @property
    def texts(self) -> list[str]:
        return [u.content for u in self.units]


class InMemoryDocumentModel(IDocumentModel):
    """内存文档模型实现"""

    def get_text_units(self, doc: InMemoryDocument) -> list[TextUnit]:
        return list(doc.units)

    def find_destination_by_name(self, doc: InMemoryDocument, name: str) -> LinkDestination | None:
        return doc.destinations.get(name)

    def create_destination(self, doc: InMemoryDocument, url: str) -> LinkDestination:
        if not url or not url.strip():
            raise MalformedMatchError("URL为空，无法创建链接目标")
        if url in doc.destinations:
            raise MalformedMatchError(f"链接目标已存在: {url}")
        destination = LinkDestination(name=url, url=url)
        doc.destinations[url] = destination
        return destination

    def create_link_source(self, doc: InMemoryDocument, unit: TextUnit, span: TextSpan) -> LinkSource:
        if span.end > len(unit.content):
            raise MalformedMatchError(f"链接源区间越界: [{span.start}, {span.end})")
        source = LinkSource(
            unit_index=unit.index,
            span=span,
            text=unit.content[span.start:span.end],
        )
        doc.sources.append(source)
        return source

    def create_link(
        self, doc: InMemoryDocument, source: LinkSource, destination: LinkDestination
    ) -> Link:
        link = Link(source=source, destination=destination)
        doc.links.append(link)
        return link
