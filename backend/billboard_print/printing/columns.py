"""
列目录 - 每种文档类型的固定列优先级

最终列集合 = 文档类型相关列 ∩ 设置中启用的列，顺序始终按本表，不按设置顺序。
hide_financials 时去掉标记为 financial 的列。
"""

from __future__ import annotations

from enum import Enum

from ..models import ColumnKind, PrintColumn, PrintSettings


class DocumentType(str, Enum):
    """可打印的文档类型"""
    OPERATING_DUES = "operating_dues"        # 合同运营分成
    WITHDRAWALS = "withdrawals"              # 提款记录
    PERIOD_CLOSURES = "period_closures"      # 结算周期
    ACCOUNT_STATEMENT = "account_statement"  # 收款对账单
    PAYMENT_SCHEDULE = "payment_schedule"    # 分期计划


DOCUMENT_TITLES: dict[DocumentType, str] = {
    DocumentType.OPERATING_DUES: "كشف المستحقات التشغيلية",
    DocumentType.WITHDRAWALS: "كشف السحوبات",
    DocumentType.PERIOD_CLOSURES: "كشف إقفال الفترات",
    DocumentType.ACCOUNT_STATEMENT: "كشف حساب",
    DocumentType.PAYMENT_SCHEDULE: "جدول الدفعات",
}


def _col(
    key: str,
    header: str,
    width: str,
    align: str = "center",
    kind: ColumnKind = ColumnKind.TEXT,
    financial: bool = False,
) -> PrintColumn:
    return PrintColumn(key=key, header=header, width=width, align=align, kind=kind, financial=financial)


_M = ColumnKind.MONEY
_P = ColumnKind.PERCENT
_D = ColumnKind.DATE
_I = ColumnKind.INDEX
_N = ColumnKind.NUMBER

COLUMN_CATALOG: dict[DocumentType, tuple[PrintColumn, ...]] = {
    DocumentType.OPERATING_DUES: (
        _col("index", "#", "2%", kind=_I),
        _col("contract_number", "رقم العقد", "5%"),
        _col("customer_name", "اسم العميل", "10%", align="right"),
        _col("ad_type", "نوع الإعلان", "5%"),
        _col("start_date", "تاريخ العقد", "7%", kind=_D),
        _col("fee_percent", "النسبة %", "4%", kind=_P),
        _col("rent_cost", "سعر الإيجار", "7%", kind=_M),
        _col("installation_print", "التركيب والطباعة", "7%", kind=_M),
        _col("total_amount", "الإجمالي", "7%", kind=_M),
        _col("total_paid", "المدفوع", "7%", kind=_M),
        _col("collection_percent", "نسبة التحصيل", "5%", kind=_P),
        _col("full_fee", "النسبة الكاملة", "7%", kind=_M),
        _col("collected_fee", "النسبة المتحصلة", "7%", kind=_M),
        _col("withdrawn_amount", "المسحوب", "7%", kind=_M, financial=True),
        _col("withdrawn_percent", "نسبة السحب", "5%", kind=_P, financial=True),
    ),
    DocumentType.WITHDRAWALS: (
        _col("index", "#", "8%", kind=_I),
        _col("date", "التاريخ", "20%", kind=_D),
        _col("amount", "المبلغ", "25%", kind=_M),
        _col("method", "طريقة السحب", "20%"),
        _col("note", "ملاحظات", "27%", align="right"),
    ),
    DocumentType.PERIOD_CLOSURES: (
        _col("index", "#", "4%", kind=_I),
        _col("closure_date", "تاريخ الإقفال", "12%", kind=_D),
        _col("closure_type", "نوع الإقفال", "10%"),
        _col("scope", "النطاق", "22%"),
        _col("total_contracts", "عدد العقود", "8%", kind=_N),
        _col("total_amount", "إجمالي المستحقات", "12%", kind=_M),
        _col("total_withdrawn", "المسحوب", "12%", kind=_M, financial=True),
        _col("remaining_balance", "الرصيد المتبقي", "12%", kind=_M),
        _col("notes", "ملاحظات", "8%", align="right"),
    ),
    DocumentType.ACCOUNT_STATEMENT: (
        _col("index", "#", "3%", kind=_I),
        _col("date", "التاريخ", "8%", kind=_D),
        _col("customer_name", "العميل", "12%", align="right"),
        _col("type", "النوع", "8%"),
        _col("ad_type", "نوع الإعلان", "8%"),
        _col("amount", "المبلغ", "10%", kind=_M),
        _col("contract", "العقد", "6%"),
        _col("method", "الطريقة", "8%"),
        _col("remaining", "المتبقي", "9%", kind=_M, financial=True),
        _col("notes", "البيان والتفاصيل", "28%", align="right"),
    ),
    DocumentType.PAYMENT_SCHEDULE: (
        _col("index", "#", "5%", kind=_I),
        _col("payment_type", "نوع الدفعة", "20%"),
        _col("period", "الفترة", "30%"),
        _col("count", "عدد الدفعات", "10%", kind=_N),
        _col("amount", "قيمة الدفعة", "15%", kind=_M),
        _col("subtotal", "المجموع", "20%", kind=_M),
    ),
}


def get_document_type(value: DocumentType | str) -> DocumentType:
    """规范化文档类型"""
    try:
        return DocumentType(value)
    except ValueError as e:
        raise ValueError(f"未知文档类型: {value}") from e


def build_columns(document_type: DocumentType | str, settings: PrintSettings) -> list[PrintColumn]:
    """按设置筛选列，保持目录顺序"""
    catalog = COLUMN_CATALOG[get_document_type(document_type)]
    columns = []
    for column in catalog:
        if not settings.is_column_visible(column.key):
            continue
        if settings.hide_financials and column.financial:
            continue
        columns.append(column.model_copy())
    return columns
