"""
模块接口契约 - 定义外部协作方的抽象接口

设计原则：
1. 核心逻辑通过接口访问宿主环境（文档模型/设置存储/渲染器），不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和fake替换

使用方式：
    from billboard_print.interfaces import IPrintRenderer

    class MyRenderer(IPrintRenderer):
        def render(self, data: PrintDocumentData, options: dict) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from .models import (
        Link,
        LinkDestination,
        LinkSource,
        PrintDocumentData,
        PrintSettings,
        TextSpan,
    )


# ============================================================================
# 超链接模块接口
# ============================================================================

class ITextUnit(Protocol):
    """文本单元协议（story） - 可读写内容并支持按偏移替换"""

    index: int

    @property
    def content(self) -> str:
        """当前内容"""
        ...

    def replace(self, start: int, end: int, text: str) -> None:
        """将 [start, end) 替换为 text"""
        ...


class IDocumentModel(ABC):
    """文档模型接口 - 宿主环境的内容模型API"""

    @abstractmethod
    def get_text_units(self, doc: Any) -> Sequence[ITextUnit]:
        """获取文档中所有文本单元（按文档顺序）"""
        ...

    @abstractmethod
    def find_destination_by_name(self, doc: Any, name: str) -> LinkDestination | None:
        """按名称查找目标，不存在返回None"""
        ...

    @abstractmethod
    def create_destination(self, doc: Any, url: str) -> LinkDestination:
        """
        按URL创建目标

        Raises:
            MalformedMatchError: URL不可用（如为空）
        """
        ...

    @abstractmethod
    def create_link_source(self, doc: Any, unit: ITextUnit, span: TextSpan) -> LinkSource:
        """在文本单元的指定区间上创建链接源"""
        ...

    @abstractmethod
    def create_link(self, doc: Any, source: LinkSource, destination: LinkDestination) -> Link:
        """创建链接对象"""
        ...


# ============================================================================
# 打印模块接口
# ============================================================================

class ISettingsStore(ABC):
    """打印设置存储接口"""

    @abstractmethod
    def load(self, document_type: str) -> PrintSettings:
        """
        读取指定文档类型的设置

        Raises:
            SettingsUnavailableError: 读取失败
        """
        ...

    @abstractmethod
    def save(self, document_type: str, settings: PrintSettings) -> None:
        """
        保存设置

        Raises:
            SettingsUnavailableError: 保存失败
        """
        ...


class IPrintRenderer(ABC):
    """打印渲染器接口 - 打开可打印视图（fire-and-forget）"""

    @abstractmethod
    def render(self, data: PrintDocumentData, options: dict[str, Any] | None = None) -> None:
        """渲染并打开打印视图"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class BillboardPrintError(Exception):
    """基础异常"""
    pass


class MalformedMatchError(BillboardPrintError):
    """锚点标记无法构造目标或链接（如URL为空）"""
    pass


class SettingsUnavailableError(BillboardPrintError):
    """打印设置无法读取/保存"""
    pass


class InvalidInputError(BillboardPrintError):
    """行数据缺少所需字段"""
    pass


class NoDataError(BillboardPrintError):
    """完全无法获取任何数据"""
    pass


class RenderError(BillboardPrintError):
    """渲染错误"""
    pass
