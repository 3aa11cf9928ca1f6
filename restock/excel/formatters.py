"""
Reusable Excel cell/row formatting helpers.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from restock.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, THIN_BORDER, ALTERNATE_FILL,
    CENTER, LEFT, RIGHT,
)

NUMBER_FORMATS = {
    "currency": '"$"#,##0.00',
    "number": "#,##0",
}


def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    """Apply header styling to an entire row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def format_data_cell(ws: Worksheet, row_num: int, col_num: int, value, col_type: str = "text") -> None:
    """Write and format a single data cell."""
    cell = ws.cell(row=row_num, column=col_num)
    cell.value = value
    cell.font = DATA_FONT
    cell.border = THIN_BORDER
    cell.alignment = RIGHT if col_type in NUMBER_FORMATS else LEFT
    if col_type in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[col_type]
    if row_num % 2 == 0:
        cell.fill = ALTERNATE_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 45) -> None:
    """Auto-fit column widths based on content length."""
    for column in ws.columns:
        column_letter = get_column_letter(column[0].column)
        max_length = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[column_letter].width = min(max(max_length + 2, min_width), max_width)
