# =============================================================================
# lib/spreadsheet.py - Spreadsheet Summaries for the LLM
# =============================================================================
# Turns Excel workbooks and CSV files into a short plain-text summary:
# headers, a handful of sample rows and the table size, for up to the first
# few sheets. The LLM explains the summary, not the raw file.
#
# Usage:
#   from lib.spreadsheet import summarize_spreadsheet
#   text = summarize_spreadsheet(data, filename="budget.xlsx")
# =============================================================================

from __future__ import annotations

import io
import logging
from pathlib import PurePath

import pandas as pd

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

MAX_SHEETS = 3
MAX_SAMPLE_ROWS = 10
ENCODINGS_TO_TRY = ["utf-8", "utf-8-sig", "latin-1"]

# Name used for the single "sheet" of a CSV file
CSV_SHEET_NAME = "Sheet1"


class SpreadsheetError(ApplicationError):
    """Raised when a workbook or CSV file can't be parsed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="SPREADSHEET_ERROR", **kwargs)


def _read_csv_from_buffer(data: bytes) -> pd.DataFrame:
    """Read a CSV as raw string cells, trying a few encodings."""
    for encoding in ENCODINGS_TO_TRY:
        try:
            return pd.read_csv(
                io.BytesIO(data),
                encoding=encoding,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                on_bad_lines="warn",
            )
        except (UnicodeDecodeError, UnicodeError):
            continue
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
    raise SpreadsheetError("Could not decode CSV file")


def is_csv(filename: str, mime_type: str | None = None) -> bool:
    """CSV by extension or by a MIME type such as text/csv."""
    return PurePath(filename).suffix.lower() == ".csv" or "csv" in (mime_type or "")


def read_sheets(data: bytes, filename: str, mime_type: str | None = None) -> dict[str, pd.DataFrame]:
    """
    Read a workbook or CSV into {sheet_name: DataFrame} without a header row.

    Cells are strings; empty cells are empty strings. CSV is detected by
    extension or MIME type; anything else is read as an Excel workbook.

    Raises:
        SpreadsheetError: If the file can't be parsed
    """
    try:
        if is_csv(filename, mime_type):
            sheets = {CSV_SHEET_NAME: _read_csv_from_buffer(data)}
        else:
            sheets = pd.read_excel(io.BytesIO(data), sheet_name=None, header=None, dtype=str)
    except SpreadsheetError:
        raise
    except Exception as e:
        raise SpreadsheetError(
            f"Failed to read spreadsheet: {e}",
            suggestion="Ensure the file is a valid Excel or CSV file",
        ) from e

    return {
        str(name): df.fillna("")
        for name, df in sheets.items()
    }


def _row_values(row: pd.Series) -> list[str]:
    """Cell values of a row with trailing empty cells dropped."""
    values = [str(v).strip() for v in row.tolist()]
    while values and values[-1] == "":
        values.pop()
    return values


def summarize_sheet(name: str, df: pd.DataFrame) -> str:
    """
    Summarize one sheet.

    The first non-empty row is treated as headers; up to MAX_SAMPLE_ROWS
    following rows are listed as samples.
    """
    rows = [_row_values(row) for _, row in df.iterrows()]
    rows = [values for values in rows if values]
    if not rows:
        return ""

    headers = rows[0]
    lines = [f"=== Sheet: {name} ==="]
    if headers:
        lines.append(f"Headers: {', '.join(headers)}")

    sample_rows = rows[1:MAX_SAMPLE_ROWS + 1]
    if sample_rows:
        lines.append("Sample data:")
        for index, values in enumerate(sample_rows, start=1):
            lines.append(f"Row {index}: {' | '.join(values)}")

    lines.append(f"Total rows: {len(rows) - 1}, Total columns: {len(headers)}")
    return "\n".join(lines)


def summarize_spreadsheet(data: bytes, filename: str, mime_type: str | None = None) -> str:
    """
    Build the text summary for up to MAX_SHEETS sheets.

    Returns:
        Summary text; empty when no sheet has any data

    Raises:
        SpreadsheetError: If the file can't be parsed
    """
    sheets = read_sheets(data, filename, mime_type)
    sections = []

    for name, df in list(sheets.items())[:MAX_SHEETS]:
        section = summarize_sheet(name, df)
        if section:
            sections.append(section)

    logger.info(f"Summarized {len(sections)} of {len(sheets)} sheets from {filename}")
    return "\n\n".join(sections)
