"""
文本与链接模型 - 超链接提取过程中的结构

偏移均以字符计，end为开区间
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class TextSpan(BaseModel):
    """文本区间 [start, end)"""
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> TextSpan:
        if self.end < self.start:
            raise ValueError(f"区间结束早于开始: [{self.start}, {self.end})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def shifted(self, delta: int) -> TextSpan:
        """整体平移"""
        return TextSpan(start=self.start + delta, end=self.end + delta)


class LinkToken(BaseModel):
    """单个锚点标记的解析结果（扫描期间的临时对象）"""
    url: str
    label: str
    match_span: TextSpan = Field(..., description="替换前完整标记的区间")
    quote: str = Field("straight", description="使用的引号对名称")

    @property
    def delta(self) -> int:
        """替换后缓冲区缩短的长度，即标记本身的开销，恒为正"""
        return self.match_span.length - len(self.label)


class LinkDestination(BaseModel):
    """链接目标（文档内按URL去重）"""
    name: str
    url: str


class LinkSource(BaseModel):
    """链接源 - 指向某个文本单元中的区间"""
    unit_index: int
    span: TextSpan
    text: str = ""


class Link(BaseModel):
    """链接对象"""
    source: LinkSource
    destination: LinkDestination


class LinkFailure(BaseModel):
    """单个链接创建失败记录（不中断扫描）"""
    unit_index: int
    url: str
    label: str
    reason: str


class ScanReport(BaseModel):
    """文档级扫描结果"""
    units_scanned: int = 0
    tokens_matched: int = 0
    links_created: int = 0
    destinations_created: int = 0
    destinations_reused: int = 0
    failures: list[LinkFailure] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures
