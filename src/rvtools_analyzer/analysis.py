"""Single-source analysis and multi-source comparison entry points.

Both operate purely on already-parsed sheet data: a mapping of sheet name to a
list of row mappings. Nothing here performs I/O or keeps state between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, NamedTuple

from rvtools_analyzer.aggregation import summarize_hosts, summarize_storage, summarize_vms
from rvtools_analyzer.errors import AnalyzerError, ConfigError, EmptyInputError, MalformedInputError, SourceFailure
from rvtools_analyzer.models.config import AnalyzerConfig
from rvtools_analyzer.models.summary import AnalysisResult, ComparisonResult, utc_now
from rvtools_analyzer.normalization.fields import FIELD_TABLES, FieldSpec, extend_fields
from rvtools_analyzer.normalization.inventory import (
    DATASTORE_SHEET,
    HOST_SHEET,
    KNOWN_SHEETS,
    VM_SHEET,
    normalize_datastores,
    normalize_hosts,
    normalize_vms,
)


class SourceInput(NamedTuple):
    label: str
    sheets: Mapping[str, Any]


def field_tables(config: AnalyzerConfig | None = None) -> dict[str, dict[str, FieldSpec]]:
    """Column tables for each entity kind, with any configured extra columns appended."""
    tables = {kind: dict(table) for kind, table in FIELD_TABLES.items()}
    if config is None:
        return tables
    for kind, extra in config.extra_columns.items():
        try:
            tables[kind] = extend_fields(
                tables[kind],
                {name: [(c.column, c.divisor) for c in cols] for name, cols in extra.items()},
            )
        except ValueError as exc:
            raise ConfigError(f"extra_columns.{kind}: {exc}") from exc
    return tables


def _index_sheets(sheets: Any, source_label: str) -> dict[str, Any]:
    if not isinstance(sheets, Mapping):
        raise MalformedInputError(
            f"sheets must be a mapping of sheet name to rows, got {type(sheets).__name__}",
            source_label=source_label,
        )
    indexed: dict[str, Any] = {}
    for name, rows in sheets.items():
        indexed.setdefault(str(name).strip(), rows)
    return indexed


def compose_analysis(
    sheets: Mapping[str, Any],
    source_label: str,
    *,
    config: AnalyzerConfig | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Build an AnalysisResult without insisting that any sheet is present.

    A summary is attached only when its sheet key exists; an empty sheet still
    yields a summary (with zero totals).
    """
    config = config or AnalyzerConfig()
    tables = field_tables(config)
    indexed = _index_sheets(sheets, source_label)

    try:
        vm_summary = host_summary = storage_summary = None
        if VM_SHEET in indexed:
            vm_summary = summarize_vms(normalize_vms(indexed[VM_SHEET], tables["vm"]), config.preview_limit)
        if HOST_SHEET in indexed:
            host_summary = summarize_hosts(normalize_hosts(indexed[HOST_SHEET], tables["host"]))
        if DATASTORE_SHEET in indexed:
            storage_summary = summarize_storage(
                normalize_datastores(indexed[DATASTORE_SHEET], tables["datastore"])
            )
    except MalformedInputError as exc:
        raise exc.with_source(source_label) from exc

    return AnalysisResult(
        source_label=source_label,
        generated_at=now or utc_now(),
        sheets=tuple(name for name in KNOWN_SHEETS if name in indexed),
        vm_summary=vm_summary,
        host_summary=host_summary,
        storage_summary=storage_summary,
    )


def analyze(
    sheets: Mapping[str, Any],
    source_label: str = "Unknown",
    *,
    config: AnalyzerConfig | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Analyze one export. Raises EmptyInputError when no known sheet is present."""
    result = compose_analysis(sheets, source_label, config=config, now=now)
    if not result.sheets:
        raise EmptyInputError(
            f"{source_label}: no recognised sheets (expected one of: {', '.join(KNOWN_SHEETS)})"
        )
    return result


def _as_source(entry: Any) -> SourceInput:
    if isinstance(entry, SourceInput):
        return entry
    if isinstance(entry, Mapping):
        label = entry.get("sourceLabel") or entry.get("label") or entry.get("name") or "Unknown"
        sheets = entry.get("sheets", entry.get("data"))
        return SourceInput(str(label), sheets)
    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        return SourceInput(str(entry[0]), entry[1])
    raise MalformedInputError(f"comparison entry must be a (label, sheets) pair, got {type(entry).__name__}")


def compare(
    sources: Iterable[Any],
    *,
    config: AnalyzerConfig | None = None,
    now: datetime | None = None,
) -> ComparisonResult:
    """Analyze every source independently and bundle the results in input order.

    All entries are processed even when one fails; the first failure is then
    raised as ``SourceFailure`` with every failure attached.
    """
    entries = list(sources)
    if not entries:
        raise EmptyInputError("comparison requires at least one source")

    # Config errors raise as-is, never wrapped in SourceFailure.
    field_tables(config)

    generated_at = now or utc_now()
    analyses: list[AnalysisResult] = []
    failures: list[tuple[int, str, BaseException]] = []

    for idx, entry in enumerate(entries):
        label = f"source #{idx + 1}"
        try:
            source = _as_source(entry)
            label = source.label
            analyses.append(compose_analysis(source.sheets, source.label, config=config, now=generated_at))
        except AnalyzerError as exc:
            failures.append((idx, label, exc))

    if failures:
        idx, label, cause = failures[0]
        raise SourceFailure(idx, label, cause, failures=failures) from cause

    if not any(a.sheets for a in analyses):
        raise EmptyInputError(
            f"no recognised sheets in any of {len(analyses)} source(s) "
            f"(expected one of: {', '.join(KNOWN_SHEETS)})"
        )

    return ComparisonResult(generated_at=generated_at, analyses=tuple(analyses))
