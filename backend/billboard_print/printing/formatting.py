"""
数字与日期格式化（仅用于显示，不改变参与计算的原值）

规则：
- 数字按配置的小数位四舍五入（ROUND_HALF_UP），去掉末尾多余的0，千分位可选
- 阿拉伯-印度数字：0-9 → ٠-٩，小数点 → ٫，千分位 → ٬
- 无效/空日期返回空字符串，不抛异常
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from ..models import ColumnKind, DigitScript, PrintSettings

_ARABIC_INDIC = str.maketrans("0123456789.,", "٠١٢٣٤٥٦٧٨٩٫٬")


def to_arabic_indic(text: str) -> str:
    """西文数字转阿拉伯-印度数字"""
    return text.translate(_ARABIC_INDIC)


def apply_digit_script(text: str, digit_script: DigitScript | str) -> str:
    if DigitScript(digit_script) is DigitScript.ARABIC_INDIC:
        return to_arabic_indic(text)
    return text


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    try:
        # 经 str 转换，避免二进制浮点展开
        return Decimal(str(value).strip().replace(",", ""))
    except (InvalidOperation, ValueError):
        return None


def format_number(
    value: Any,
    decimals: int = 2,
    digit_script: DigitScript | str = DigitScript.WESTERN,
    grouping: bool = True,
    trim_zeros: bool = True,
) -> str:
    """格式化数字"""
    d = _to_decimal(value)
    if d is None or not d.is_finite():
        return apply_digit_script("0", digit_script)

    quantum = Decimal(1).scaleb(-decimals)
    # 默认28位精度不足以容纳大数的小数位
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + decimals + 2)
        d = d.quantize(quantum, rounding=ROUND_HALF_UP)

    text = format(d, ",f" if grouping else "f")
    if trim_zeros and "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return apply_digit_script(text, digit_script)


def format_currency(value: Any, settings: PrintSettings) -> str:
    """金额 + 货币后缀"""
    number = format_number(
        value,
        decimals=settings.decimal_places,
        digit_script=settings.digit_script,
        grouping=settings.thousands_separator,
    )
    suffix = settings.currency_suffix
    return f"{number} {suffix}" if suffix else number


def format_percent(value: Any, digit_script: DigitScript | str = DigitScript.WESTERN) -> str:
    """百分比：整数不带小数，否则两位小数"""
    d = _to_decimal(value)
    if d is None or not d.is_finite():
        d = Decimal(0)
    places = 0 if d == d.to_integral_value() else 2
    return f"{format_number(d, places, digit_script, grouping=False, trim_zeros=False)}%"


def parse_date(value: Any) -> date | None:
    """解析日期，失败返回None"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(
    value: Any,
    date_format: str = "%d/%m/%Y",
    digit_script: DigitScript | str = DigitScript.WESTERN,
) -> str:
    """格式化日期；空值/无效值返回空字符串"""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    try:
        text = parsed.strftime(date_format)
    except (ValueError, TypeError):
        return ""
    return apply_digit_script(text, digit_script)


def format_cell(value: Any, kind: ColumnKind, settings: PrintSettings) -> str:
    """按列类型格式化单元格/合计值"""
    if kind is ColumnKind.MONEY:
        return format_currency(value, settings)
    if kind is ColumnKind.PERCENT:
        return format_percent(value, settings.digit_script)
    if kind is ColumnKind.DATE:
        return format_date(value, settings.date_format, settings.digit_script)
    if kind is ColumnKind.INDEX:
        return format_number(value, 0, settings.digit_script, grouping=False)
    if kind is ColumnKind.NUMBER:
        return format_number(
            value, settings.decimal_places, settings.digit_script, settings.thousands_separator
        )
    return "" if value is None else str(value)
