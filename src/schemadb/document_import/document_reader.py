"""Raw document readers for JSON files and Excel workbooks."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

WORKBOOK_SUFFIXES = (".xlsx", ".xlsm")


class DocumentImportError(Exception):
    """Raised when an input file cannot be read as raw documents."""


def read_documents(input_path: Path | str, *, sheet_name: str | None = None) -> tuple[dict, ...]:
    """Read raw documents from a JSON file or a workbook, chosen by file suffix."""
    path = Path(input_path)
    if path.suffix.lower() in WORKBOOK_SUFFIXES:
        return read_workbook_documents(path, sheet_name=sheet_name)
    return read_json_documents(path)


def read_json_documents(input_path: Path | str) -> tuple[dict, ...]:
    """Read one JSON object or an array of objects."""
    path = _require_existing(input_path)
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DocumentImportError(f"Invalid JSON in {path}: {exc}") from exc

    items = [parsed] if isinstance(parsed, Mapping) else parsed
    if not isinstance(items, Sequence) or isinstance(items, str):
        raise DocumentImportError("JSON input must be an object or an array of objects.")
    documents: list[dict] = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, Mapping):
            raise DocumentImportError(f"JSON item {position} is not an object.")
        documents.append(dict(item))
    return tuple(documents)


def read_workbook_documents(
    input_path: Path | str, *, sheet_name: str | None = None
) -> tuple[dict, ...]:
    """Read one document per non-empty row; row 1 holds the property names."""
    path = _require_existing(input_path)
    workbook = load_workbook(path, data_only=True)
    if sheet_name is not None and sheet_name not in workbook.sheetnames:
        raise DocumentImportError(f"Worksheet '{sheet_name}' not found in {path}.")
    sheet = workbook[sheet_name] if sheet_name is not None else workbook.active
    if sheet is None:
        raise DocumentImportError("Workbook has no active sheet.")
    assert isinstance(sheet, Worksheet)

    header_map = _read_header(sheet)
    documents: list[dict] = []
    for row_idx in range(2, sheet.max_row + 1):
        _ensure_no_unnamed_values(sheet, row_idx, header_map)
        row_data = {
            name: _cell_value(sheet.cell(row=row_idx, column=col_index).value)
            for name, col_index in header_map.items()
        }
        if all(value is None for value in row_data.values()):
            continue
        documents.append(row_data)
    return tuple(documents)


def _read_header(sheet: Worksheet) -> dict[str, int]:
    header_map: dict[str, int] = {}
    for column in range(1, sheet.max_column + 1):
        value = sheet.cell(row=1, column=column).value
        if value is None or not str(value).strip():
            continue
        name = str(value).strip()
        if name in header_map:
            raise DocumentImportError(f"Duplicate column '{name}' in header row.")
        header_map[name] = column
    if not header_map:
        raise DocumentImportError("Header row does not name any property.")
    return header_map


def _ensure_no_unnamed_values(
    sheet: Worksheet, row_idx: int, header_map: Mapping[str, int]
) -> None:
    named_columns = set(header_map.values())
    for column in range(1, sheet.max_column + 1):
        if column in named_columns:
            continue
        if _cell_value(sheet.cell(row=row_idx, column=column).value) is not None:
            raise DocumentImportError(f"Row {row_idx}: value in column {column} has no header.")


def _cell_value(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _require_existing(input_path: Path | str) -> Path:
    path = Path(input_path)
    if not path.exists():
        raise DocumentImportError(f"Input file not found: {path}")
    return path
