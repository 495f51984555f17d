"""
TablePDF — paginated, styled table documents on top of fpdf2.

Rows are laid out by hand so the table header can be repeated on every
page and row heights follow wrapped cell text.
"""
from __future__ import annotations

from typing import Optional, Sequence

from fpdf import FPDF

from khitan_board.excel.styles import DEEP_PURPLE, GOLD, ALTERNATE_ROW, GRAY_666, BORDER_GRAY, BLACK, WHITE, rgb

FONT = "helvetica"


def latin1(text: str) -> str:
    """Core PDF fonts only cover latin-1; anything else becomes '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


class TablePDF(FPDF):
    """Landscape A4 document: title block, one table, a footer on every page."""

    def __init__(
        self,
        footer_template: str = "Halaman {page} dari {pages}",
        margin: float = 14,
        bottom_margin: float = 18,
        font_size: float = 8,
        cell_padding: float = 2,
    ) -> None:
        super().__init__(orientation="L", unit="mm", format="A4")
        self.set_margins(margin, margin, margin)
        self.set_auto_page_break(False, margin=bottom_margin)
        self.footer_template = footer_template
        self.table_font_size = font_size
        self.table_padding = cell_padding
        self.table_line_height = font_size * 0.45

        self._headings: Sequence[str] = ()
        self._widths: list[float] = []
        self._heading_height = 0.0
        self.footer_pages: list[int] = []     # page numbers that received a footer
        self.page_rows: dict[int, list[int]] = {}  # page number → table row indexes

    # ------------------------------------------------------------------
    # Page furniture
    # ------------------------------------------------------------------

    def footer(self) -> None:
        self.set_y(-10)
        self.set_font(FONT, "", 8)
        self.set_text_color(*rgb(GRAY_666))
        text = self.footer_template.format(page=self.page_no(), pages=self.str_alias_nb_pages)
        self.cell(0, 4, latin1(text), align="C")
        self.footer_pages.append(self.page_no())

    def write_title(self, title: str, subtitles: Sequence[str], printed: Optional[str] = None) -> None:
        """Title in brand purple, grey subtitle lines, then the printed-at line."""
        self.set_font(FONT, "", 18)
        self.set_text_color(*rgb(DEEP_PURPLE))
        self.cell(0, 8, latin1(title))
        self.ln(7)

        self.set_font(FONT, "", 12)
        self.set_text_color(*rgb(GRAY_666))
        for line in subtitles:
            self.cell(0, 6, latin1(line))
            self.ln(6)

        if printed:
            self.set_font(FONT, "", 10)
            self.cell(0, 6, latin1(printed))
            self.ln(6)
        self.ln(2)

    # ------------------------------------------------------------------
    # Text wrapping
    # ------------------------------------------------------------------

    def wrap_text(self, text: str, width: float) -> list[str]:
        """Greedy word wrap to `width` mm; words longer than a line are split by character."""
        words = latin1(text).split()
        if not words:
            return [""]

        lines: list[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if self.get_string_width(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = ""
            for ch in word:
                if current and self.get_string_width(current + ch) > width:
                    lines.append(current)
                    current = ""
                current += ch
        lines.append(current)
        return lines

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------

    def _row_height(self, wrapped: list[list[str]]) -> float:
        return max(len(lines) for lines in wrapped) * self.table_line_height + 2 * self.table_padding

    def _max_lines(self, heading: bool) -> int:
        """Most lines a cell can hold and still fit on a fresh page under the heading row."""
        room = self.page_break_trigger - self.t_margin - 2 * self.table_padding
        if not heading:
            room -= self._heading_height
        return max(1, int(room // self.table_line_height))

    def _clip(self, lines: list[str], max_lines: int, width: float) -> list[str]:
        if len(lines) <= max_lines:
            return lines
        last = lines[max_lines - 1]
        while last and self.get_string_width(last + "...") > width:
            last = last[:-1]
        return lines[:max_lines - 1] + [last + "..."]

    def _draw_row(self, cells: Sequence[str], fill: Optional[str], bold: bool = False) -> None:
        self.set_font(FONT, "B" if bold else "", self.table_font_size)
        pad = self.table_padding
        max_lines = self._max_lines(heading=bold)
        wrapped = [
            self._clip(self.wrap_text(text, w - 2 * pad), max_lines, w - 2 * pad)
            for text, w in zip(cells, self._widths)
        ]
        height = self._row_height(wrapped)

        if self.get_y() + height > self.page_break_trigger:
            self.add_page()
            self._draw_headings()
            self.set_font(FONT, "B" if bold else "", self.table_font_size)

        x, y = self.l_margin, self.get_y()
        self.set_draw_color(*rgb(BORDER_GRAY))
        self.set_fill_color(*rgb(fill or WHITE))
        self.set_text_color(*rgb(BLACK))
        for lines, w in zip(wrapped, self._widths):
            self.rect(x, y, w, height, style="DF")
            for i, line in enumerate(lines):
                self.set_xy(x + pad, y + pad + i * self.table_line_height)
                self.cell(w - 2 * pad, self.table_line_height, line)
            x += w
        self.set_xy(self.l_margin, y + height)

    def _draw_headings(self) -> None:
        self._draw_row(self._headings, fill=GOLD, bold=True)

    def write_table(
        self,
        headings: Sequence[str],
        rows: Sequence[Sequence[str]],
        relative_widths: Sequence[float],
    ) -> None:
        """Draw the table from the current position, breaking pages as needed.

        The heading row opens every page the table touches; odd rows are striped.
        """
        total = sum(relative_widths)
        self._widths = [self.epw * w / total for w in relative_widths]
        self._headings = headings
        self.set_font(FONT, "B", self.table_font_size)
        self._heading_height = self._row_height(
            [self.wrap_text(text, w - 2 * self.table_padding) for text, w in zip(headings, self._widths)]
        )
        self._draw_headings()

        for idx, cells in enumerate(rows):
            self._draw_row(cells, fill=ALTERNATE_ROW if idx % 2 == 1 else None)
            self.page_rows.setdefault(self.page_no(), []).append(idx)

    def to_bytes(self) -> bytes:
        return bytes(self.output())
