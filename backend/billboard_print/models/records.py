"""
业务记录模型 - 已查询好的数据库行（合同/提款/结算周期/收款/分期）

打印组装只消费这些结构，不做任何查询。
from_row 在缺少必填字段时抛出 InvalidInputError，由调用方逐行隔离。
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..interfaces import InvalidInputError

DateLike = date | datetime | str | None


class _Record(BaseModel):
    """记录基类"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    @classmethod
    def from_row(cls, row: dict[str, Any] | _Record) -> _Record:
        """从数据库行构造记录"""
        if isinstance(row, cls):
            return row
        if not isinstance(row, dict):
            raise InvalidInputError(f"{cls.__name__} 行数据类型无效: {type(row).__name__}")
        try:
            return cls.model_validate(row)
        except ValidationError as e:
            missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise InvalidInputError(f"{cls.__name__} 行数据无效: {', '.join(missing)}") from e

    @property
    def record_id(self) -> str:
        raise NotImplementedError


class ContractRecord(_Record):
    """合同（运营费用/分成）"""
    id: str | None = None
    contract_number: str
    customer_name: str
    ad_type: str | None = None
    start_date: DateLike = None
    fee_percent: float = Field(0.0, alias="feePercent")
    full_fee_amount: float = Field(0.0, alias="fullFeeAmount")
    collected_fee_amount: float = Field(0.0, alias="collectedFeeAmount")
    rent_cost: float = 0.0
    installation_cost: float = 0.0
    print_cost: float = 0.0
    total_amount: float = 0.0
    total_paid: float = 0.0
    collection_percentage: float = Field(0.0, alias="collectionPercentage")

    @property
    def record_id(self) -> str:
        return str(self.contract_number)

    @property
    def contract_seq(self) -> int:
        """合同号数值（非数字视为0）"""
        try:
            return int(self.contract_number)
        except (TypeError, ValueError):
            return 0


class WithdrawalRecord(_Record):
    """提款"""
    id: str
    amount: float
    date: DateLike = None
    method: str | None = None
    note: str | None = None

    @property
    def record_id(self) -> str:
        return str(self.id)


class PeriodClosure(_Record):
    """结算周期关闭"""
    id: str
    closure_type: str = "period"  # period | contract_range
    closure_date: DateLike = None
    period_start: DateLike = None
    period_end: DateLike = None
    contract_start: str | None = None
    contract_end: str | None = None
    total_contracts: int = 0
    total_amount: float = 0.0
    total_withdrawn: float = 0.0
    remaining_balance: float = 0.0
    notes: str | None = None

    @property
    def record_id(self) -> str:
        return str(self.id)


class ReceiptRecord(_Record):
    """收款（账户对账单行）"""
    id: str
    customer_name: str
    amount: float
    paid_at: DateLike = None
    method: str | None = None
    reference: str | None = None
    notes: str | None = None
    entry_type: str = "receipt"
    contract_number: str | None = None
    remaining_debt: float | None = None
    ad_type: str | None = None

    @property
    def record_id(self) -> str:
        return str(self.id)


class Installment(_Record):
    """合同分期"""
    id: str | None = None
    amount: float
    description: str = ""
    payment_type: str = Field("", alias="paymentType")
    due_date: DateLike = Field(None, alias="dueDate")

    @property
    def record_id(self) -> str:
        return str(self.id) if self.id is not None else ""
