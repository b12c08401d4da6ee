# src/buku_tamu/reporting/excel_builder.py
from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from buku_tamu.models.guest import ReportTable
from buku_tamu.reporting.guest_report import to_dataframe

SHEET_NAME = "Data Tamu"

# Title on row 1, blank row 2, header on row 3
HEADER_ROW = 3


def _write_title(ws, table: ReportTable):
    """
    Title in A1, merged across every data column.
    """
    ws.cell(row=1, column=1, value=table.title)
    ws.merge_cells(
        start_row=1,
        start_column=1,
        end_row=1,
        end_column=table.column_count,
    )
    cell = ws.cell(row=1, column=1)
    cell.font = Font(bold=True, size=16)
    cell.alignment = Alignment(horizontal="center", vertical="center")


def _size_columns(ws, table: ReportTable):
    for idx, width in enumerate(table.column_widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width


def write_excel_report(
    table: ReportTable,
    output_dir: Path,
    file_stem: str,
) -> Path:
    """
    Write one guest report workbook:
    - single sheet "Data Tamu"
    - merged title row
    - auto-sized columns
    """

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    file_path = output_dir / f"{file_stem}.xlsx"

    df = to_dataframe(table)

    with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
        df.to_excel(
            writer,
            sheet_name=SHEET_NAME,
            startrow=HEADER_ROW - 1,
            startcol=0,
            index=False,
        )

        ws = writer.book[SHEET_NAME]

        _write_title(ws, table)
        _size_columns(ws, table)

    return file_path
