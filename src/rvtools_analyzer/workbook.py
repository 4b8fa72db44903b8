"""Read RVTools .xlsx exports into the plain ``{sheet: [row, ...]}`` form the engine takes."""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from rvtools_analyzer.errors import AnalyzerError
from rvtools_analyzer.normalization.inventory import KNOWN_SHEETS
from rvtools_analyzer.primitives import is_blank

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 50 * 1024 * 1024

# Corrupt sheet XML surfaces as a SyntaxError subclass (ElementTree and lxml).
_READ_ERRORS = (InvalidFileException, zipfile.BadZipFile, SyntaxError, KeyError, ValueError, OSError)


class WorkbookError(AnalyzerError):
    """The file could not be opened or read as an .xlsx workbook."""


class UploadTooLargeError(WorkbookError):
    """The file exceeds the configured size ceiling; it was not parsed."""


def check_upload_size(path: str | Path, max_bytes: int = DEFAULT_MAX_BYTES) -> int:
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise WorkbookError(f"Cannot read {path}: {exc}") from exc
    if size > max_bytes:
        raise UploadTooLargeError(
            f"{path.name} is {size / 1048576:.1f} MB, larger than the {max_bytes / 1048576:.1f} MB limit"
        )
    return size


def _header(row: Sequence[Any]) -> list[str | None]:
    return [None if is_blank(cell) else str(cell).strip() for cell in row]


def sheet_records(rows: Iterable[Sequence[Any]]) -> list[dict[str, Any]]:
    """Turn raw cell rows into header-keyed records.

    The first row with any non-blank cell is the header. Columns with a blank
    header are dropped, fully blank rows are skipped and order is preserved.
    """
    records: list[dict[str, Any]] = []
    header: list[str | None] | None = None
    for row in rows:
        if row is None:
            continue
        if header is None:
            if any(not is_blank(cell) for cell in row):
                header = _header(row)
            continue
        record = {name: value for name, value in zip(header, row) if name is not None}
        if all(is_blank(v) for v in record.values()):
            continue
        records.append(record)
    return records


def read_workbook(
    path: str | Path,
    max_bytes: int = DEFAULT_MAX_BYTES,
    sheet_names: Sequence[str] = KNOWN_SHEETS,
) -> dict[str, list[dict[str, Any]]]:
    """Load the recognised sheets of an .xlsx file; other sheets are ignored."""
    path = Path(path)
    check_upload_size(path, max_bytes)
    logger.info("Loading workbook: %s", path)

    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except _READ_ERRORS as exc:
        raise WorkbookError(f"Cannot open {path.name} as an .xlsx workbook: {exc}") from exc

    wanted = set(sheet_names)
    data: dict[str, list[dict[str, Any]]] = {}
    try:
        for title in wb.sheetnames:
            name = title.strip()
            if name not in wanted or name in data:
                continue
            data[name] = sheet_records(wb[title].iter_rows(values_only=True))
            logger.debug("Loaded %d rows from %s", len(data[name]), name)
    except _READ_ERRORS as exc:
        raise WorkbookError(f"Cannot read sheet {title!r} of {path.name}: {exc}") from exc
    finally:
        wb.close()

    if not data:
        logger.warning("%s contains none of the sheets %s", path.name, ", ".join(sheet_names))
    return data


def read_workbooks(
    paths: Sequence[str | Path],
    max_bytes: int = DEFAULT_MAX_BYTES,
    max_workers: int = 4,
) -> list[tuple[str, dict[str, list[dict[str, Any]]]]]:
    """Read several workbooks concurrently; results keep the order of *paths*."""
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(len(paths), max_workers))) as pool:
        loaded = list(pool.map(lambda p: read_workbook(p, max_bytes), paths))
    return [(Path(p).name, sheets) for p, sheets in zip(paths, loaded)]
