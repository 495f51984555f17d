"""
ExcelWriter — high-level helpers for building styled, printable workbooks.
"""
from __future__ import annotations

import io

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from khitan_board.excel.styles import TITLE_FONT, SUBTITLE_FONT, PRINTED_FONT
from khitan_board.excel.formatters import format_header_row, format_data_cell, auto_column_width


ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Rename and return the workbook's default sheet."""
        ws = self.wb.active
        ws.title = title
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(
        self,
        ws: Worksheet,
        title: str,
        subtitles: list[str],
        printed: str | None = None,
        merge_cols: int = 7,
    ) -> int:
        """Write title, subtitle lines and an optional printed-at line. Returns next available row."""
        lines = [(title, TITLE_FONT)] + [(s, SUBTITLE_FONT) for s in subtitles]
        if printed:
            lines.append((printed, PRINTED_FONT))

        for row, (text, font) in enumerate(lines, 1):
            cell = ws.cell(row=row, column=1)
            cell.value = text
            cell.font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=merge_cols)

        return len(lines) + 2

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: pd.DataFrame,
        placeholder: str = "",
        freeze: bool = True,
    ) -> int:
        """Write a full table with headers + striped data rows.

        Missing or blank values are written as `placeholder`.
        Returns the row number after the last data row.
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = label
        format_header_row(ws, start_row, len(columns))

        row = start_row + 1
        for idx, row_data in enumerate(data.to_dict("records")):
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                val = row_data.get(key)
                if val is None or (isinstance(val, str) and val.strip() == ""):
                    val = placeholder
                format_data_cell(ws, row, col_num, val, col_type, striped=idx % 2 == 1)
            row += 1

        auto_column_width(ws, from_row=start_row)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"

        return row

    def write_total(self, ws: Worksheet, row: int, label: str, num_cols: int) -> int:
        """Write a full-width summary row under a table. Returns next row."""
        format_data_cell(ws, row, 1, label, "text", is_total=True)
        for col_num in range(2, num_cols + 1):
            format_data_cell(ws, row, col_num, None, "text", is_total=True)
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=num_cols)
        return row + 1

    # ------------------------------------------------------------------
    # Print setup
    # ------------------------------------------------------------------

    def set_print_layout(self, ws: Worksheet, header_row: int, footer: str) -> None:
        """Landscape A4, table header repeated on every printed page, footer on each page.

        `footer` may use Excel's &P (page) and &N (page count) codes.
        """
        ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
        ws.page_setup.paperSize = ws.PAPERSIZE_A4
        ws.page_setup.fitToWidth = 1
        ws.page_setup.fitToHeight = 0
        ws.sheet_properties.pageSetUpPr.fitToPage = True
        ws.print_title_rows = f"{header_row}:{header_row}"
        ws.oddFooter.center.text = footer
        ws.oddFooter.center.size = 8

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Serialize the workbook in memory (for HTTP downloads)."""
        buffer = io.BytesIO()
        self.wb.save(buffer)
        return buffer.getvalue()
