"""
Excel导出 - 将打印文档的表格写入 xlsx

职责：
1. 写入标题行、表头、明细行
2. 在明细后写入合计行（合计值保持原始数值，单元格用数字格式）
3. 工作表从右到左显示

依赖：
- openpyxl: Excel操作

测试要点：
- test_export_header_and_rows: 表头与明细
- test_export_totals_numeric: 合计单元格为数值
"""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..interfaces import RenderError
from ..models import PrintDocumentData

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill("solid", fgColor="1F2937")
TOTALS_FILL = PatternFill("solid", fgColor="F3F4F6")


class ExcelTableExporter:
    """打印表格导出为Excel"""

    title_row = 1
    header_row = 3

    def export(self, data: PrintDocumentData, output_path: Path) -> Path:
        """导出，返回文件路径"""
        wb = Workbook()
        ws = wb.active
        ws.title = data.document_type[:31]
        ws.sheet_view.rightToLeft = data.settings.direction == "rtl"

        # 标题
        ws.cell(row=self.title_row, column=1, value=data.title).font = Font(bold=True, size=14)

        # 表头
        for col_idx, column in enumerate(data.columns, start=1):
            cell = ws.cell(row=self.header_row, column=col_idx, value=column.header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center")
            ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(column.header) + 4)

        # 明细
        current_row = self.header_row + 1
        for row in data.rows:
            for col_idx, column in enumerate(data.columns, start=1):
                ws.cell(row=current_row, column=col_idx, value=row.get(column.key, ""))
            current_row += 1

        # 合计
        value_col = max(len(data.columns), 2)
        for item in data.totals:
            label_cell = ws.cell(row=current_row, column=1, value=item.label)
            label_cell.font = Font(bold=True)
            value_cell = ws.cell(row=current_row, column=value_col, value=item.value)
            value_cell.font = Font(bold=True)
            if not isinstance(item.value, str):
                decimals = data.settings.decimal_places
                value_cell.number_format = "#,##0" + ("." + "0" * decimals if decimals else "")
            for col_idx in range(1, value_col + 1):
                ws.cell(row=current_row, column=col_idx).fill = TOTALS_FILL
            current_row += 1

        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise RenderError(f"Excel导出失败: {output_path}: {e}") from e

        logger.info(f"Excel已导出: {output_path}")
        return output_path
