"""
打印文档组装器 - 已查询的业务记录 → PrintDocumentData

职责：
1. 按文档类型解析行数据（无效行跳过并记录，不中断打印）
2. 应用排除ID与已关闭结算周期（同时影响显示与合计）
3. 按设置筛选列、格式化单元格（仅显示，不改变原值）
4. 计算合计（使用原始数值）

不做任何I/O：行数据由调用方提供。

测试要点：
- test_excluded_ids: 排除行不参与显示与合计
- test_numeric_formatting: 阿拉伯-印度数字显示，合计保持原值
- test_column_order: 列顺序按目录而非设置
- test_invalid_rows_skipped: 无效行跳过
- test_settings_fallback: 设置缺失/无效时使用默认值
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

from ..config import coerce_settings
from ..interfaces import InvalidInputError, NoDataError
from ..models import (
    ColumnKind,
    ContractRecord,
    DocumentHeader,
    Installment,
    PartyInfo,
    PeriodClosure,
    PrintColumn,
    PrintDocumentData,
    PrintSettings,
    PrintTotalsItem,
    ReceiptRecord,
    SkippedRow,
    WithdrawalRecord,
)
from .columns import DOCUMENT_TITLES, DocumentType, build_columns, get_document_type
from .formatting import format_cell, format_date
from .grouping import group_repeating_payments, payment_summary_text
from .totals import compute_fifo_allocation, filter_excluded, is_contract_closed, sum_field

logger = logging.getLogger(__name__)

RECORD_TYPES = {
    DocumentType.OPERATING_DUES: ContractRecord,
    DocumentType.WITHDRAWALS: WithdrawalRecord,
    DocumentType.PERIOD_CLOSURES: PeriodClosure,
    DocumentType.ACCOUNT_STATEMENT: ReceiptRecord,
    DocumentType.PAYMENT_SCHEDULE: Installment,
}

CLOSURE_TYPE_LABELS = {
    "period": "فترة زمنية",
    "contract_range": "نطاق عقود",
}

ENTRY_TYPE_LABELS = {
    "receipt": "إيصال",
    "payment": "دفعة",
    "invoice": "فاتورة",
    "refund": "مرتجع",
}

_M = ColumnKind.MONEY
_N = ColumnKind.NUMBER


def _parse_records(record_cls, rows: Iterable[Any]) -> tuple[list, list[SkippedRow]]:
    """逐行解析，无效行跳过"""
    records, skipped = [], []
    for position, row in enumerate(rows):
        try:
            records.append(record_cls.from_row(row))
        except InvalidInputError as e:
            logger.warning(f"跳过无效行 #{position}: {e}")
            skipped.append(SkippedRow(position=position, reason=str(e)))
    return records, skipped


def _range_text(start: str, end: str) -> str:
    if start and end:
        return f"{start} – {end}"
    return start or end


class PrintDocumentAssembler:
    """打印文档组装器（无状态，可并发调用）"""

    def assemble(
        self,
        document_type: DocumentType | str,
        rows: Sequence[Any] | None,
        settings: PrintSettings | dict[str, Any] | None = None,
        excluded_ids: set[str] | None = None,
        party: PartyInfo | None = None,
        header: DocumentHeader | None = None,
        closures: Sequence[Any] | None = None,
        withdrawals: Sequence[Any] | None = None,
        display_filter: Callable[[Any], bool] | None = None,
        notes: str | None = None,
    ) -> PrintDocumentData:
        """组装打印文档"""
        doc_type = get_document_type(document_type)
        settings = coerce_settings(settings, doc_type.value)

        if rows is None:
            raise NoDataError(f"没有可打印的数据: {doc_type.value}")

        records, skipped = _parse_records(RECORD_TYPES[doc_type], rows)
        if rows and not records:
            raise NoDataError(f"全部 {len(rows)} 行数据无效: {doc_type.value}")

        records = filter_excluded(records, excluded_ids)

        if doc_type is DocumentType.OPERATING_DUES and closures:
            closure_records, _ = _parse_records(PeriodClosure, closures)
            records = [r for r in records if not is_contract_closed(r, closure_records)]

        # 合计基于排除后的完整记录集；display_filter 只影响显示
        shown = [r for r in records if display_filter is None or display_filter(r)]

        builder = getattr(self, f"_build_{doc_type.value}")
        raw_rows, totals = builder(records, shown, settings, withdrawals or [])

        columns = build_columns(doc_type, settings)
        self._bind_formatters(columns, settings)
        display_rows = [
            {col.key: col.format_value(raw.get(col.key)) for col in columns}
            for raw in raw_rows
        ]

        if notes is None and doc_type is DocumentType.PAYMENT_SCHEDULE and shown:
            notes = payment_summary_text(
                group_repeating_payments(shown, settings.payment_group_threshold), settings
            )

        header = header or DocumentHeader()
        if not header.title:
            header = header.model_copy(update={"title": DOCUMENT_TITLES[doc_type]})

        return PrintDocumentData(
            document_type=doc_type.value,
            header=header,
            party=party,
            columns=columns,
            rows=display_rows,
            totals=totals,
            settings=settings,
            notes=notes,
            skipped_rows=skipped,
        )

    @staticmethod
    def _bind_formatters(columns: list[PrintColumn], settings: PrintSettings) -> None:
        for column in columns:
            if column.formatter is None:
                column.formatter = (
                    lambda value, kind=column.kind: format_cell(value, kind, settings)
                )

    # ------------------------------------------------------------------
    # 各文档类型的原始行与合计
    # ------------------------------------------------------------------

    def _build_operating_dues(
        self,
        records: list[ContractRecord],
        shown: list[ContractRecord],
        settings: PrintSettings,
        withdrawals: Sequence[Any],
    ) -> tuple[list[dict], list[PrintTotalsItem]]:
        withdrawal_records, _ = _parse_records(WithdrawalRecord, withdrawals)
        total_withdrawn = sum_field(withdrawal_records, "amount")
        allocation = compute_fifo_allocation(records, total_withdrawn)

        rows = []
        for index, c in enumerate(shown, start=1):
            withdrawn = allocation.get(c.record_id, 0.0)
            withdrawn_pct = (
                min(100.0, withdrawn / c.collected_fee_amount * 100)
                if c.collected_fee_amount > 0
                else 0.0
            )
            rows.append({
                "index": index,
                "contract_number": c.contract_number,
                "customer_name": c.customer_name,
                "ad_type": c.ad_type or "—",
                "start_date": c.start_date,
                "fee_percent": c.fee_percent,
                "rent_cost": c.rent_cost,
                "installation_print": c.installation_cost + c.print_cost,
                "total_amount": c.total_amount,
                "total_paid": c.total_paid,
                "collection_percent": c.collection_percentage,
                "full_fee": c.full_fee_amount,
                "collected_fee": c.collected_fee_amount,
                "withdrawn_amount": withdrawn,
                "withdrawn_percent": round(withdrawn_pct, 2),
            })

        pool_total = sum_field(records, "collected_fee_amount")
        totals = [PrintTotalsItem(label="عدد العقود", value=len(records), kind=_N)]
        if not settings.hide_financials:
            totals.append(PrintTotalsItem(label="إجمالي النسب المستحقة", value=pool_total))
            totals.append(PrintTotalsItem(label="إجمالي المسحوبات", value=total_withdrawn))
        totals.append(
            PrintTotalsItem(label="الرصيد المتبقي", value=pool_total - total_withdrawn, highlight=True)
        )
        return rows, totals

    def _build_withdrawals(
        self,
        records: list[WithdrawalRecord],
        shown: list[WithdrawalRecord],
        settings: PrintSettings,
        withdrawals: Sequence[Any],
    ) -> tuple[list[dict], list[PrintTotalsItem]]:
        rows = [
            {
                "index": index,
                "date": w.date,
                "amount": w.amount,
                "method": w.method or "نقدي",
                "note": w.note or "—",
            }
            for index, w in enumerate(shown, start=1)
        ]
        totals = [
            PrintTotalsItem(label="عدد السحوبات", value=len(records), kind=_N),
            PrintTotalsItem(label="إجمالي السحوبات", value=sum_field(records, "amount"), highlight=True),
        ]
        return rows, totals

    def _build_period_closures(
        self,
        records: list[PeriodClosure],
        shown: list[PeriodClosure],
        settings: PrintSettings,
        withdrawals: Sequence[Any],
    ) -> tuple[list[dict], list[PrintTotalsItem]]:
        rows = []
        for index, closure in enumerate(shown, start=1):
            if closure.closure_type == "contract_range":
                scope = _range_text(closure.contract_start or "", closure.contract_end or "")
            else:
                scope = _range_text(
                    format_date(closure.period_start, settings.date_format, settings.digit_script),
                    format_date(closure.period_end, settings.date_format, settings.digit_script),
                )
            rows.append({
                "index": index,
                "closure_date": closure.closure_date,
                "closure_type": CLOSURE_TYPE_LABELS.get(closure.closure_type, closure.closure_type),
                "scope": scope,
                "total_contracts": closure.total_contracts,
                "total_amount": closure.total_amount,
                "total_withdrawn": closure.total_withdrawn,
                "remaining_balance": closure.remaining_balance,
                "notes": closure.notes or "",
            })

        totals = [PrintTotalsItem(label="إجمالي المستحقات", value=sum_field(records, "total_amount"))]
        if not settings.hide_financials:
            totals.append(
                PrintTotalsItem(label="إجمالي المسحوبات", value=sum_field(records, "total_withdrawn"))
            )
        totals.append(
            PrintTotalsItem(
                label="الرصيد المتبقي",
                value=sum_field(records, "remaining_balance"),
                highlight=True,
            )
        )
        return rows, totals

    def _build_account_statement(
        self,
        records: list[ReceiptRecord],
        shown: list[ReceiptRecord],
        settings: PrintSettings,
        withdrawals: Sequence[Any],
    ) -> tuple[list[dict], list[PrintTotalsItem]]:
        rows = [
            {
                "index": index,
                "date": r.paid_at,
                "customer_name": r.customer_name,
                "type": ENTRY_TYPE_LABELS.get(r.entry_type, r.entry_type),
                "ad_type": r.ad_type or "—",
                "amount": r.amount,
                "contract": r.contract_number or "—",
                "method": r.method or "—",
                "remaining": r.remaining_debt,
                "notes": r.notes or "",
            }
            for index, r in enumerate(shown, start=1)
        ]
        totals = [
            PrintTotalsItem(label="عدد الدفعات", value=len(records), kind=_N),
            PrintTotalsItem(label="إجمالي المقبوضات", value=sum_field(records, "amount"), highlight=True),
        ]
        return rows, totals

    def _build_payment_schedule(
        self,
        records: list[Installment],
        shown: list[Installment],
        settings: PrintSettings,
        withdrawals: Sequence[Any],
    ) -> tuple[list[dict], list[PrintTotalsItem]]:
        groups = group_repeating_payments(shown, settings.payment_group_threshold)
        rows = []
        for index, group in enumerate(groups, start=1):
            start = format_date(group.start_date, settings.date_format, settings.digit_script)
            end = format_date(group.end_date, settings.date_format, settings.digit_script)
            rows.append({
                "index": index,
                "payment_type": group.payment_type or "—",
                "period": _range_text(start, end) if group.is_grouped else start,
                "count": group.count,
                "amount": group.amount,
                "subtotal": group.subtotal,
            })
        totals = [
            PrintTotalsItem(label="عدد الدفعات", value=len(records), kind=_N),
            PrintTotalsItem(label="إجمالي الدفعات", value=sum_field(records, "amount"), highlight=True),
        ]
        return rows, totals
