"""
打印文档组装单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_assembler.py -v
"""

import pytest

from billboard_print.interfaces import NoDataError
from billboard_print.models import DocumentHeader, PartyInfo, PrintSettings
from billboard_print.printing import DocumentType, build_columns


def _withdrawal_keys(data):
    return [col.key for col in data.columns]


class TestExclusionAndTotals:
    """排除与合计测试"""

    def test_excluded_ids(self, assembler, sample_withdrawal_rows):
        """排除的行不显示也不计入合计"""
        data = assembler.assemble(
            "withdrawals", sample_withdrawal_rows, excluded_ids={"w-2"}
        )

        assert len(data.rows) == 1
        assert data.get_total("إجمالي السحوبات").value == 100.0
        assert data.get_total("عدد السحوبات").value == 1

    def test_excluded_flag_alone_does_not_exclude(self, assembler, sample_withdrawal_rows):
        data = assembler.assemble("withdrawals", sample_withdrawal_rows)

        assert len(data.rows) == 2
        assert data.get_total("إجمالي السحوبات").value == 70.0

    def test_last_total_highlighted(self, assembler, sample_withdrawal_rows):
        data = assembler.assemble("withdrawals", sample_withdrawal_rows)
        assert data.totals[-1].highlight
        assert not data.totals[0].highlight

    def test_display_filter_keeps_totals(self, assembler, sample_withdrawal_rows):
        """display_filter 只影响显示"""
        data = assembler.assemble(
            "withdrawals", sample_withdrawal_rows, display_filter=lambda w: w.amount > 0
        )

        assert len(data.rows) == 1
        assert data.get_total("إجمالي السحوبات").value == 70.0


class TestNumericFormatting:
    """显示格式化测试"""

    def test_arabic_display_raw_total(self, assembler, arabic_settings):
        data = assembler.assemble(
            "withdrawals",
            [{"id": "w-1", "amount": 1234.5, "date": "2024-02-01"}],
            settings=arabic_settings,
        )

        row = data.rows[0]
        assert row["amount"] == "١٬٢٣٤٫٥ د.ل"
        assert row["date"] == "٠١/٠٢/٢٠٢٤"
        assert row["index"] == "١"
        assert data.get_total("إجمالي السحوبات").value == 1234.5

    def test_rows_are_strings(self, assembler, sample_contract_rows):
        data = assembler.assemble("operating_dues", sample_contract_rows)
        for row in data.rows:
            assert all(isinstance(v, str) for v in row.values())

    def test_default_texts(self, assembler):
        data = assembler.assemble("withdrawals", [{"id": "w-1", "amount": 5}])
        row = data.rows[0]
        assert row["method"] == "نقدي"
        assert row["note"] == "—"
        assert row["date"] == ""


class TestColumns:
    """列选择测试"""

    def test_column_order_follows_catalog(self, assembler):
        settings = PrintSettings(visible_columns={"note": True, "amount": True, "index": False})
        data = assembler.assemble("withdrawals", [{"id": "w-1", "amount": 5}], settings=settings)

        assert _withdrawal_keys(data) == ["date", "amount", "method", "note"]
        assert set(data.rows[0]) == {"date", "amount", "method", "note"}

    def test_hide_financials(self, assembler, sample_contract_rows):
        data = assembler.assemble(
            "operating_dues", sample_contract_rows, settings={"hide_financials": True}
        )

        keys = _withdrawal_keys(data)
        assert "withdrawn_amount" not in keys
        assert "withdrawn_percent" not in keys
        assert data.get_total("إجمالي المسحوبات") is None
        assert data.totals[-1].label == "الرصيد المتبقي"

    def test_build_columns_copies(self):
        settings = PrintSettings()
        first = build_columns(DocumentType.WITHDRAWALS, settings)
        first[0].formatter = str
        second = build_columns(DocumentType.WITHDRAWALS, settings)
        assert second[0].formatter is None

    def test_unknown_document_type(self, assembler):
        with pytest.raises(ValueError):
            assembler.assemble("invoices", [])


class TestInputHandling:
    """无效输入测试"""

    def test_invalid_rows_skipped(self, assembler):
        data = assembler.assemble(
            "withdrawals",
            [{"id": "w-1", "amount": 100}, {"id": "w-x"}, "junk"],
        )

        assert len(data.rows) == 1
        assert [s.position for s in data.skipped_rows] == [1, 2]
        assert data.get_total("إجمالي السحوبات").value == 100.0

    def test_rows_none(self, assembler):
        with pytest.raises(NoDataError):
            assembler.assemble("withdrawals", None)

    def test_all_rows_invalid(self, assembler):
        with pytest.raises(NoDataError):
            assembler.assemble("withdrawals", [{"id": "a"}, {"amount": 3}])

    def test_empty_rows(self, assembler):
        data = assembler.assemble("withdrawals", [])
        assert data.rows == []
        assert data.get_total("عدد السحوبات").value == 0

    @pytest.mark.parametrize("settings", [None, "garbage", {"decimal_places": 99}])
    def test_settings_fallback(self, assembler, settings):
        data = assembler.assemble("withdrawals", [{"id": "w-1", "amount": 1.005}], settings=settings)

        assert data.settings.decimal_places == 2
        assert data.settings.document_type == "withdrawals"
        assert data.rows[0]["amount"] == "1.01 د.ل"


class TestHeader:
    """抬头与客户信息"""

    def test_default_title(self, assembler):
        data = assembler.assemble("withdrawals", [])
        assert data.title == "كشف السحوبات"

    def test_custom_header_and_party(self, assembler):
        data = assembler.assemble(
            "account_statement",
            [{"id": "r-1", "customer_name": "شركة النور", "amount": 250}],
            header=DocumentHeader(title="كشف حساب العميل", document_number="ST-9"),
            party=PartyInfo(name="شركة النور", phone="0912345678"),
            notes="ملاحظة",
        )

        assert data.title == "كشف حساب العميل"
        assert data.header.document_number == "ST-9"
        assert data.party.name == "شركة النور"
        assert data.notes == "ملاحظة"
        assert data.rows[0]["type"] == "إيصال"
        assert data.get_total("إجمالي المقبوضات").value == 250.0


class TestOperatingDues:
    """合同运营分成测试"""

    def test_fifo_allocation(self, assembler):
        rows = [
            {"contract_number": 1002, "customer_name": "B", "collectedFeeAmount": 50},
            {"contract_number": 1001, "customer_name": "A", "collectedFeeAmount": 100},
        ]
        data = assembler.assemble(
            "operating_dues", rows, withdrawals=[{"id": "w-1", "amount": 120}]
        )

        by_contract = {row["contract_number"]: row for row in data.rows}
        assert by_contract["1001"]["withdrawn_amount"] == "100 د.ل"
        assert by_contract["1001"]["withdrawn_percent"] == "100%"
        assert by_contract["1002"]["withdrawn_amount"] == "20 د.ل"
        assert by_contract["1002"]["withdrawn_percent"] == "40%"

        assert data.get_total("إجمالي النسب المستحقة").value == 150.0
        assert data.get_total("إجمالي المسحوبات").value == 120.0
        assert data.totals[-1].label == "الرصيد المتبقي"
        assert data.totals[-1].value == 30.0

    def test_period_closure_filters_contracts(self, assembler, sample_contract_rows):
        closures = [{
            "id": "p-1",
            "closure_type": "period",
            "period_start": "2024-01-01",
            "period_end": "2024-01-31",
        }]
        data = assembler.assemble("operating_dues", sample_contract_rows, closures=closures)

        assert [row["contract_number"] for row in data.rows] == ["1002"]
        assert data.get_total("عدد العقود").value == 1
        assert data.get_total("إجمالي النسب المستحقة").value == 250.0

    def test_contract_range_closure(self, assembler, sample_contract_rows):
        closures = [{
            "id": 7,
            "closure_type": "contract_range",
            "contract_start": "1002",
            "contract_end": "1010",
        }]
        data = assembler.assemble("operating_dues", sample_contract_rows, closures=closures)

        assert [row["contract_number"] for row in data.rows] == ["1001"]

    def test_contract_cells(self, assembler, sample_contract_rows):
        data = assembler.assemble("operating_dues", sample_contract_rows)
        first, second = data.rows

        assert first["installation_print"] == "1,000 د.ل"
        assert first["fee_percent"] == "10%"
        assert second["fee_percent"] == "12.50%"
        assert first["start_date"] == "15/01/2024"
        assert second["ad_type"] == "—"

    def test_excluded_contract(self, assembler, sample_contract_rows):
        data = assembler.assemble("operating_dues", sample_contract_rows, excluded_ids={"1001"})
        assert [row["contract_number"] for row in data.rows] == ["1002"]


class TestPeriodClosures:
    """结算周期打印测试"""

    @pytest.fixture
    def closure_rows(self):
        return [
            {
                "id": "p-1",
                "closure_type": "period",
                "closure_date": "2024-02-01",
                "period_start": "2024-01-01",
                "period_end": "2024-01-31",
                "total_contracts": 4,
                "total_amount": 1000,
                "total_withdrawn": 600,
                "remaining_balance": 400,
            },
            {
                "id": "p-2",
                "closure_type": "contract_range",
                "contract_start": "1001",
                "contract_end": "1010",
                "total_amount": 500,
                "total_withdrawn": 500,
                "remaining_balance": 0,
            },
        ]

    def test_scope_and_totals(self, assembler, closure_rows):
        data = assembler.assemble("period_closures", closure_rows)

        assert data.rows[0]["scope"] == "01/01/2024 – 31/01/2024"
        assert data.rows[0]["closure_type"] == "فترة زمنية"
        assert data.rows[1]["scope"] == "1001 – 1010"
        assert data.get_total("إجمالي المستحقات").value == 1500.0
        assert data.totals[-1].value == 400.0

    def test_hide_financials(self, assembler, closure_rows):
        data = assembler.assemble("period_closures", closure_rows, settings={"hide_financials": True})

        assert "total_withdrawn" not in _withdrawal_keys(data)
        assert [t.label for t in data.totals] == ["إجمالي المستحقات", "الرصيد المتبقي"]


class TestPaymentSchedule:
    """分期计划测试"""

    def test_grouped_rows(self, assembler):
        rows = [
            {"amount": 1000, "paymentType": "شهري", "dueDate": "2024-01-01"},
            {"amount": 1000, "paymentType": "شهري", "dueDate": "2024-02-01"},
            {"amount": 1000, "paymentType": "شهري", "dueDate": "2024-03-01"},
            {"amount": 500, "paymentType": "شهري", "dueDate": "2024-04-01"},
        ]
        data = assembler.assemble("payment_schedule", rows)

        assert len(data.rows) == 2
        first, second = data.rows
        assert first["count"] == "3"
        assert first["amount"] == "1,000 د.ل"
        assert first["subtotal"] == "3,000 د.ل"
        assert first["period"] == "01/01/2024 – 01/03/2024"
        assert second["period"] == "01/04/2024"
        assert data.get_total("عدد الدفعات").value == 4
        assert data.totals[-1].value == 3500.0

    def test_summary_line_in_notes(self, assembler):
        """未提供备注时，分期摘要写入备注"""
        rows = [
            {"amount": 1000, "paymentType": "شهري", "dueDate": "2024-01-01"},
            {"amount": 1000, "paymentType": "شهري", "dueDate": "2024-02-01"},
            {"amount": 500, "paymentType": "شهري", "dueDate": "2024-03-01"},
        ]
        data = assembler.assemble("payment_schedule", rows)

        assert data.notes == (
            "2 دفعات × 1,000 د.ل من 01/01/2024 إلى 01/02/2024"
            "، ثم دفعة: 500 د.ل بتاريخ 01/03/2024"
        )

    def test_caller_notes_kept(self, assembler):
        data = assembler.assemble(
            "payment_schedule", [{"amount": 1000, "dueDate": "2024-01-01"}], notes="حسب العقد"
        )
        assert data.notes == "حسب العقد"

    def test_empty_schedule_has_no_notes(self, assembler):
        assert assembler.assemble("payment_schedule", []).notes is None
