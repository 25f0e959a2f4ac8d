"""
分期分组 - 连续相同金额的分期合并显示

例如 "3 دفعات × 1,000 د.ل"；金额差 < 0.01 视为相同，
连续次数达到阈值才合并。
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field

from ..models import Installment, PrintSettings
from .formatting import format_currency, format_date

AMOUNT_TOLERANCE = 0.01


class PaymentGroup(BaseModel):
    """分期分组"""
    amount: float
    count: int
    payment_type: str
    start_date: str | None = None
    end_date: str | None = None
    installments: list[Installment] = Field(default_factory=list)

    @property
    def is_grouped(self) -> bool:
        return self.count > 1

    @property
    def subtotal(self) -> float:
        return sum(i.amount for i in self.installments)


def _date_text(value) -> str | None:
    return None if value is None else str(value)


def group_repeating_payments(
    installments: Sequence[Installment], threshold: int = 2
) -> list[PaymentGroup]:
    """合并连续相同金额的分期"""
    threshold = max(threshold, 2)
    groups: list[PaymentGroup] = []
    i = 0
    while i < len(installments):
        current = installments[i]
        run = 1
        while (
            i + run < len(installments)
            and abs(current.amount - installments[i + run].amount) < AMOUNT_TOLERANCE
        ):
            run += 1

        size = run if run >= threshold else 1
        members = list(installments[i:i + size])
        groups.append(
            PaymentGroup(
                amount=current.amount,
                count=size,
                payment_type=current.payment_type,
                start_date=_date_text(members[0].due_date),
                end_date=_date_text(members[-1].due_date),
                installments=members,
            )
        )
        i += size
    return groups


def payment_summary_text(groups: Sequence[PaymentGroup], settings: PrintSettings) -> str:
    """分期摘要文字"""
    parts: list[str] = []
    for idx, group in enumerate(groups):
        amount = format_currency(group.amount, settings)
        start = format_date(group.start_date, settings.date_format, settings.digit_script)
        if group.is_grouped:
            end = format_date(group.end_date, settings.date_format, settings.digit_script)
            parts.append(f"{group.count} دفعات × {amount} من {start} إلى {end}")
        elif idx == 0:
            parts.append(f"دفعة أولى: {amount} بتاريخ {start}")
        else:
            parts.append(f"دفعة: {amount} بتاريخ {start}")
    return "، ثم ".join(parts)
