"""
格式化单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_formatting.py -v
"""

from datetime import date, datetime

import pytest

from billboard_print.models import ColumnKind, DigitScript, PrintSettings
from billboard_print.printing import (
    format_cell,
    format_currency,
    format_date,
    format_number,
    format_percent,
    to_arabic_indic,
)


class TestNumbers:
    """数字格式化测试"""

    def test_arabic_indic_digits(self):
        assert to_arabic_indic("0123456789") == "٠١٢٣٤٥٦٧٨٩"

    def test_arabic_indic_separators(self):
        assert format_number(1234.5, 2, DigitScript.ARABIC_INDIC) == "١٬٢٣٤٫٥"

    @pytest.mark.parametrize("value,expected", [
        (1234.5, "1,234.5"),
        (1000, "1,000"),
        (0.125, "0.13"),
        (2.675, "2.68"),
        (-1500.25, "-1,500.25"),
        ("3,000", "3,000"),
    ])
    def test_western(self, value, expected):
        assert format_number(value, 2) == expected

    def test_no_grouping(self):
        assert format_number(1234567.891, 2, grouping=False) == "1234567.89"

    def test_zero_decimals(self):
        assert format_number(1234.5, 0) == "1,235"

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf"), "abc", True])
    def test_invalid_gives_zero(self, value):
        assert format_number(value) == "0"

    def test_large_values(self):
        """超过默认精度的大数不抛异常"""
        assert format_number(1e30, 2) == "1" + ",000" * 10
        assert format_number("123456789012345678901234567890.125", 2, grouping=False) == (
            "123456789012345678901234567890.13"
        )
        assert format_percent(1e40) == "1" + "0" * 40 + "%"

    def test_large_value_in_document(self, assembler):
        data = assembler.assemble("withdrawals", [{"id": "w-1", "amount": 1e30}])
        assert data.rows[0]["amount"] == "1" + ",000" * 10 + " د.ل"
        assert data.get_total("إجمالي السحوبات").value == 1e30

    def test_input_untouched(self):
        value = 1234.5678
        format_number(value, 2)
        assert value == 1234.5678

    def test_currency(self):
        settings = PrintSettings()
        assert format_currency(1234.5, settings) == "1,234.5 د.ل"

    def test_currency_arabic_no_suffix(self):
        settings = PrintSettings(digit_script=DigitScript.ARABIC_INDIC, currency_suffix="")
        assert format_currency(50, settings) == "٥٠"

    def test_percent(self):
        assert format_percent(60) == "60%"
        assert format_percent(12.5) == "12.50%"
        assert format_percent(None) == "0%"
        assert format_percent(12.5, DigitScript.ARABIC_INDIC) == "١٢٫٥٠%"


class TestDates:
    """日期格式化测试"""

    @pytest.mark.parametrize("value", ["", None, "not a date", "2024-13-45", 20240101])
    def test_invalid_dates_empty(self, value):
        assert format_date(value) == ""

    def test_iso_string(self):
        assert format_date("2024-03-01") == "01/03/2024"

    def test_iso_timestamp(self):
        assert format_date("2024-03-01T10:20:30Z") == "01/03/2024"
        assert format_date("2024-03-01T10:20:30.123456+02:00") == "01/03/2024"

    def test_date_objects(self):
        assert format_date(date(2024, 3, 1)) == "01/03/2024"
        assert format_date(datetime(2024, 3, 1, 8, 0)) == "01/03/2024"

    def test_custom_format_arabic(self):
        assert format_date("2024-03-01", "%Y-%m-%d", DigitScript.ARABIC_INDIC) == "٢٠٢٤-٠٣-٠١"


class TestFormatCell:
    """按列类型格式化"""

    def test_kinds(self):
        settings = PrintSettings()
        assert format_cell(1500, ColumnKind.MONEY, settings) == "1,500 د.ل"
        assert format_cell(40, ColumnKind.PERCENT, settings) == "40%"
        assert format_cell("2024-01-15", ColumnKind.DATE, settings) == "15/01/2024"
        assert format_cell(7, ColumnKind.INDEX, settings) == "7"
        assert format_cell(1234, ColumnKind.NUMBER, settings) == "1,234"
        assert format_cell(None, ColumnKind.TEXT, settings) == ""
        assert format_cell("نص", ColumnKind.TEXT, settings) == "نص"

    def test_index_arabic(self, arabic_settings):
        assert format_cell(12, ColumnKind.INDEX, arabic_settings) == "١٢"
