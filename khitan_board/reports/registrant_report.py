"""
Registrant list report — printable PDF and Excel workbook.

All renderers take the record tuple they are given; a refresh finishing
mid-export never changes what is printed.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from khitan_board.config import (
    MAX_QUOTA, REPORT_COLUMNS, REPORT_PLACEHOLDER, REPORT_TITLE, REPORT_SUBTITLES,
    REPORT_FILE_STEM,
)
from khitan_board.data.schemas import Registrant, quota_remaining
from khitan_board.excel.writer import ExcelWriter
from khitan_board.pdf.writer import TablePDF

COLUMN_KEYS = [key for key, _, _ in REPORT_COLUMNS]
COLUMN_LABELS = [label for _, label, _ in REPORT_COLUMNS]
COLUMN_WIDTHS = [width for _, _, width in REPORT_COLUMNS]

EXCEL_COLS = [
    (key, "number" if key == "sequence_number" else "text", label)
    for key, label, _ in REPORT_COLUMNS
]

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------

def registrants_frame(registrants: Sequence[Registrant], placeholder: str = REPORT_PLACEHOLDER) -> pd.DataFrame:
    """Records as a table in printed column order, blanks replaced by the placeholder."""
    df = pd.DataFrame([r.as_dict() for r in registrants], columns=COLUMN_KEYS)
    text_cols = COLUMN_KEYS[1:]
    df[text_cols] = df[text_cols].replace(r"^\s*$", placeholder, regex=True)
    return df


def report_filename(now: dt.datetime, ext: str) -> str:
    return f"{REPORT_FILE_STEM}_{now:%Y-%m-%d}.{ext}"


def printed_label(now: dt.datetime) -> str:
    return f"Dicetak: {now:%d/%m/%Y %H.%M.%S}"


def footer_template(registered: int, quota: int) -> str:
    """Per-page footer; {page}/{pages} are filled in by the renderer."""
    return f"Halaman {{page}} dari {{pages}} - Total Pendaftar: {registered} dari {quota} kuota"


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

def build_pdf(
    registrants: Sequence[Registrant],
    quota: int = MAX_QUOTA,
    now: Optional[dt.datetime] = None,
    compress: bool = True,
) -> TablePDF:
    """Lay out the printable list; every registrant appears once, in list order."""
    now = now or dt.datetime.now()
    pdf = TablePDF(footer_template=footer_template(len(registrants), quota))
    pdf.set_compression(compress)
    pdf.set_title(REPORT_TITLE)
    pdf.add_page()
    pdf.write_title(REPORT_TITLE, REPORT_SUBTITLES, printed_label(now))

    frame = registrants_frame(registrants).astype(str)
    pdf.write_table(COLUMN_LABELS, frame.values.tolist(), COLUMN_WIDTHS)
    return pdf


def generate_pdf(
    registrants: Sequence[Registrant],
    quota: int = MAX_QUOTA,
    now: Optional[dt.datetime] = None,
) -> bytes:
    return build_pdf(registrants, quota, now).to_bytes()


# ---------------------------------------------------------------------------
# Excel
# ---------------------------------------------------------------------------

def build_workbook(
    registrants: Sequence[Registrant],
    quota: int = MAX_QUOTA,
    now: Optional[dt.datetime] = None,
) -> ExcelWriter:
    now = now or dt.datetime.now()
    ew = ExcelWriter()
    ws = ew.add_sheet("Pendaftar")
    header_row = ew.write_title(ws, REPORT_TITLE, REPORT_SUBTITLES, printed_label(now), merge_cols=len(EXCEL_COLS))

    row = ew.write_table(ws, header_row, EXCEL_COLS, registrants_frame(registrants), placeholder=REPORT_PLACEHOLDER)
    registered = len(registrants)
    ew.write_total(
        ws, row,
        f"Total Pendaftar: {registered} dari {quota} kuota  |  Sisa Kuota: {quota_remaining(registered, quota)}",
        len(EXCEL_COLS),
    )

    ew.set_print_layout(ws, header_row, f"Halaman &P dari &N - Total Pendaftar: {registered} dari {quota} kuota")
    return ew


def generate_excel(
    registrants: Sequence[Registrant],
    quota: int = MAX_QUOTA,
    now: Optional[dt.datetime] = None,
) -> bytes:
    return build_workbook(registrants, quota, now).to_bytes()


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

GENERATORS = {
    "pdf": generate_pdf,
    "xlsx": generate_excel,
}


def save_report(
    registrants: Sequence[Registrant],
    output_dir: str | Path,
    fmt: str = "pdf",
    quota: int = MAX_QUOTA,
    now: Optional[dt.datetime] = None,
) -> Path:
    """Render and write the report; the file name comes from the date."""
    now = now or dt.datetime.now()
    path = Path(output_dir) / report_filename(now, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(GENERATORS[fmt](registrants, quota, now))
    return path
