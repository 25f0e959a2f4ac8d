"""
打印模块 - 合同/提款/结算周期/收款的打印文档

子模块：
- formatting: 数字（阿拉伯-印度数字）与日期格式化
- columns: 每种文档类型的列目录
- totals: 排除/结算周期筛选与合计
- grouping: 分期分组
- assembler: 打印文档组装
- service: 设置读取 + 组装 + 渲染
- renderer: HTML打印渲染（jinja2）
- excel_export: Excel导出（openpyxl）
"""

from .assembler import PrintDocumentAssembler
from .columns import COLUMN_CATALOG, DocumentType, build_columns
from .excel_export import ExcelTableExporter
from .formatting import format_cell, format_currency, format_date, format_number, format_percent, to_arabic_indic
from .grouping import PaymentGroup, group_repeating_payments, payment_summary_text
from .renderer import HtmlPrintRenderer
from .service import PrintService

__all__ = [
    "PrintDocumentAssembler",
    "PrintService",
    "HtmlPrintRenderer",
    "ExcelTableExporter",
    "DocumentType",
    "COLUMN_CATALOG",
    "build_columns",
    "format_number",
    "format_currency",
    "format_percent",
    "format_date",
    "format_cell",
    "to_arabic_indic",
    "PaymentGroup",
    "group_repeating_payments",
    "payment_summary_text",
]
