"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- TextSpan/LinkToken/LinkDestination/Link: 超链接提取
- ContractRecord/WithdrawalRecord/PeriodClosure/ReceiptRecord/Installment: 业务记录
- PrintColumn/PrintTotalsItem/PrintDocumentData: 打印视图模型
- PrintSettings: 打印显示设置
"""

from .print_doc import (
    ColumnKind,
    DocumentHeader,
    PartyInfo,
    PrintColumn,
    PrintDocumentData,
    PrintTotalsItem,
    SkippedRow,
)
from .records import (
    ContractRecord,
    Installment,
    PeriodClosure,
    ReceiptRecord,
    WithdrawalRecord,
)
from .settings import DEFAULT_PRINT_SETTINGS, DigitScript, PrintSettings, default_settings_for
from .text import Link, LinkDestination, LinkFailure, LinkSource, LinkToken, ScanReport, TextSpan

__all__ = [
    "TextSpan",
    "LinkToken",
    "LinkDestination",
    "LinkSource",
    "Link",
    "LinkFailure",
    "ScanReport",
    "ContractRecord",
    "WithdrawalRecord",
    "PeriodClosure",
    "ReceiptRecord",
    "Installment",
    "ColumnKind",
    "PrintColumn",
    "PrintTotalsItem",
    "DocumentHeader",
    "PartyInfo",
    "SkippedRow",
    "PrintDocumentData",
    "PrintSettings",
    "DigitScript",
    "DEFAULT_PRINT_SETTINGS",
    "default_settings_for",
]
