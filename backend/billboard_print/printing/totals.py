"""
合计与筛选

- 排除ID集合中的行同时从显示和合计中去掉
- 已结算周期覆盖的合同视为排除
- 合计为简单求和，使用原始数值（不经过显示格式化）
"""

from __future__ import annotations

from typing import Any, Iterable, NamedTuple, Sequence, TypeVar

from ..models import ContractRecord, PeriodClosure, WithdrawalRecord
from .formatting import parse_date

R = TypeVar("R")


class DuesSummary(NamedTuple):
    """运营分成汇总"""
    pool_total: float
    total_withdrawn: float
    remaining_pool: float


def filter_excluded(records: Iterable[R], excluded_ids: set[str] | None) -> list[R]:
    """去掉排除ID集合中的记录"""
    if not excluded_ids:
        return list(records)
    excluded = {str(i) for i in excluded_ids}
    return [r for r in records if r.record_id not in excluded]


def _as_number(value: str | None) -> int | None:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _in_contract_range(contract_number: str, start: str, end: str) -> bool:
    num, lo, hi = _as_number(contract_number), _as_number(start), _as_number(end)
    if num is not None and lo is not None and hi is not None:
        return lo <= num <= hi
    return start <= contract_number <= end


def is_contract_closed(contract: ContractRecord, closures: Sequence[PeriodClosure]) -> bool:
    """合同是否落在已关闭的结算周期内"""
    for closure in closures:
        if closure.closure_type == "period":
            start, end = parse_date(closure.period_start), parse_date(closure.period_end)
            contract_date = parse_date(contract.start_date)
            if start and end and contract_date and start <= contract_date <= end:
                return True
        elif closure.closure_type == "contract_range":
            if closure.contract_start and closure.contract_end and _in_contract_range(
                contract.contract_number, closure.contract_start, closure.contract_end
            ):
                return True
    return False


def sum_field(records: Iterable[Any], key: str) -> float:
    """对字段求和，跳过非数值"""
    total = 0.0
    for record in records:
        value = record.get(key) if isinstance(record, dict) else getattr(record, key, None)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        total += value
    return total


def compute_fifo_allocation(
    contracts: Sequence[ContractRecord], total_withdrawn: float
) -> dict[str, float]:
    """按合同号从旧到新分摊提款总额"""
    allocation: dict[str, float] = {}
    remaining = total_withdrawn
    for contract in sorted(contracts, key=lambda c: c.contract_seq):
        if remaining <= 0 or contract.collected_fee_amount <= 0:
            allocation[contract.record_id] = 0.0
            continue
        allocated = min(remaining, contract.collected_fee_amount)
        allocation[contract.record_id] = allocated
        remaining -= allocated
    return allocation


def dues_summary(
    contracts: Sequence[ContractRecord], withdrawals: Sequence[WithdrawalRecord]
) -> DuesSummary:
    """运营分成池汇总"""
    pool_total = sum_field(contracts, "collected_fee_amount")
    total_withdrawn = sum_field(withdrawals, "amount")
    return DuesSummary(pool_total, total_withdrawn, pool_total - total_withdrawn)
