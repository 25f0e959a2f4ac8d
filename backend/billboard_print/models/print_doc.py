"""
打印文档模型 - 交给渲染器的视图模型

每次打印请求新建，交付渲染后不再修改，不持久化
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from .settings import PrintSettings


class ColumnKind(str, Enum):
    """列的值类型，决定格式化方式"""
    TEXT = "text"
    INDEX = "index"
    MONEY = "money"
    NUMBER = "number"
    PERCENT = "percent"
    DATE = "date"

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnKind.MONEY, ColumnKind.NUMBER, ColumnKind.PERCENT)


class PrintColumn(BaseModel):
    """表格列定义（顺序由调用方决定）"""
    key: str
    header: str
    align: str = "center"
    width: str | None = None
    kind: ColumnKind = ColumnKind.TEXT
    financial: bool = False
    formatter: Callable[[Any], str] | None = Field(default=None, exclude=True)

    def format_value(self, value: Any) -> str:
        if self.formatter is not None:
            return self.formatter(value)
        return "" if value is None else str(value)


class PrintTotalsItem(BaseModel):
    """表格下方的合计项"""
    label: str
    value: float | int | str
    kind: ColumnKind = ColumnKind.MONEY
    highlight: bool = False
    bold: bool = True


class DocumentHeader(BaseModel):
    """文档抬头"""
    title: str = ""
    document_number: str | None = None
    date: str | None = None
    additional_info: list[tuple[str, str]] = Field(default_factory=list)


class PartyInfo(BaseModel):
    """客户/供应方信息"""
    title: str = "العميل"
    name: str
    company: str | None = None
    phone: str | None = None
    email: str | None = None
    additional_fields: list[tuple[str, str]] = Field(default_factory=list)


class SkippedRow(BaseModel):
    """因数据无效被跳过的行"""
    position: int
    reason: str


class PrintDocumentData(BaseModel):
    """打印文档（渲染器的唯一输入）"""

    model_config = ConfigDict(frozen=True)

    document_type: str
    header: DocumentHeader = Field(default_factory=DocumentHeader)
    party: PartyInfo | None = None

    columns: list[PrintColumn] = Field(default_factory=list)
    # 已格式化的显示行（key -> 显示字符串）
    rows: list[dict[str, str]] = Field(default_factory=list)
    totals: list[PrintTotalsItem] = Field(default_factory=list)
    totals_title: str = "الإجماليات"

    settings: PrintSettings = Field(default_factory=PrintSettings)
    notes: str | None = None
    skipped_rows: list[SkippedRow] = Field(default_factory=list)

    @property
    def title(self) -> str:
        return self.header.title or self.document_type

    def get_total(self, label: str) -> PrintTotalsItem | None:
        for item in self.totals:
            if item.label == label:
                return item
        return None
