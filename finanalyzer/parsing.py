"""Turn uploaded CSV and Excel files into :class:`Table` objects.

Dispatch is purely extension based. CSV cells are kept as strings so that
numeric coercion happens explicitly where figures are needed; spreadsheet cells
keep the primitive type stored in the workbook.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Literal, Union

import numpy as np
import pandas as pd

from .config import CSV_EXTENSIONS, SPREADSHEET_EXTENSIONS
from .errors import (
    EmptySheetError,
    FileReadError,
    FinAnalyzerError,
    ParseError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)

CellValue = Union[str, int, float]
Row = dict[str, CellValue]
FileFormat = Literal["csv", "spreadsheet"]

UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload a .csv or .xlsx file."
UNEXPECTED_PARSE_MESSAGE = "An unexpected error occurred while parsing the file."
EMPTY_SHEET_MESSAGE = "Excel file is empty or could not be read."


@dataclass(frozen=True)
class Table:
    """Parsed rectangular data: ordered headers plus rows keyed by header."""

    headers: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def head(self, n: int) -> "Table":
        return Table(headers=list(self.headers), rows=self.rows[:n])

    def to_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame(self.rows, columns=self.headers)
        return frame.fillna("")

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "Table":
        headers = _unique_headers(frame.columns)
        rows = [
            {header: _cell_value(value) for header, value in zip(headers, values)}
            for values in frame.itertuples(index=False, name=None)
        ]
        return cls(headers=headers, rows=rows)


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is pd.NaT


def _cell_value(value: object) -> CellValue:
    if _is_missing(value):
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, str)):
        return value
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def _header_name(value: object, position: int) -> str:
    if _is_missing(value) or value == "":
        return f"Unnamed: {position}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _unique_headers(values) -> list[str]:
    """Stringify header cells, suffixing repeats as ``name.1``, ``name.2``."""

    headers: list[str] = []
    seen: dict[str, int] = {}
    for position, value in enumerate(values):
        name = _header_name(value, position)
        if name in seen:
            seen[name] += 1
            name = f"{name}.{seen[name]}"
        seen.setdefault(name, 0)
        headers.append(name)
    return headers


def detect_format(filename: str) -> FileFormat:
    """Return the parser family for ``filename`` or raise before anything is read."""

    lowered = filename.lower()
    if lowered.endswith(CSV_EXTENSIONS):
        return "csv"
    if lowered.endswith(SPREADSHEET_EXTENSIONS):
        return "spreadsheet"
    raise UnsupportedFileTypeError(UNSUPPORTED_MESSAGE)


def parse_csv(text: str) -> Table:
    """Parse comma-separated text whose first record is the header row.

    The header is read as an ordinary record so that its width bounds every row:
    a row with more fields than the header is a parse error, never an implicit
    index column.
    """

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ParseError(f"CSV Parse Error: {exc}") from exc

    body = frame.iloc[1:].copy()
    body.columns = _unique_headers(frame.iloc[0].tolist())
    return Table.from_frame(body)


def parse_spreadsheet(content: bytes, filename: str = "upload.xlsx") -> Table:
    """Parse the first worksheet of an Excel workbook.

    The first row supplies the headers. Rows shorter than the header are padded
    with empty strings, and fully blank rows are dropped. A sheet without any
    data rows is an error rather than an empty table.
    """

    engine = "xlrd" if filename.lower().endswith(".xls") else "openpyxl"
    try:
        sheet = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            engine=engine,
        )
    except Exception as exc:
        raise ParseError(f"Spreadsheet Parse Error: {exc}") from exc

    sheet = sheet.dropna(how="all")
    if len(sheet) < 2:
        raise EmptySheetError(EMPTY_SHEET_MESSAGE)

    # rows are keyed by the header cells only; cells past the last header are ignored
    header = sheet.iloc[0].tolist()
    width = max(index for index, value in enumerate(header) if not _is_missing(value)) + 1
    body = sheet.iloc[1:, :width].copy()
    body.columns = _unique_headers(header[:width])
    return Table.from_frame(body)


def read_upload(filename: str, content: bytes | str) -> Table:
    """Parse an uploaded file, wrapping unexpected failures in :class:`ParseError`."""

    file_format = detect_format(filename)
    try:
        if file_format == "csv":
            text = content.decode("utf-8-sig", errors="replace") if isinstance(content, bytes) else content
            table = parse_csv(text)
        else:
            table = parse_spreadsheet(content, filename=filename)  # type: ignore[arg-type]
    except FinAnalyzerError as exc:
        logger.warning(f"Failed to parse {filename}: {exc}")
        raise
    except Exception as exc:
        logger.exception(f"Unexpected error while parsing {filename}")
        raise ParseError(UNEXPECTED_PARSE_MESSAGE) from exc

    logger.info(f"Parsed {filename}: {len(table):,} rows, {len(table.headers)} columns")
    return table


def load_path(path: str | Path) -> Table:
    """Read and parse a file from disk."""

    path = Path(path)
    detect_format(path.name)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"Failed to read the file: {exc}") from exc
    return read_upload(path.name, content)
