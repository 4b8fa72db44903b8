"""Console rendering and report-file output for analysis results."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal

import yaml

from rvtools_analyzer.models.summary import AnalysisResult, ComparisonResult

logger = logging.getLogger(__name__)

ReportFormat = Literal["json", "yaml"]

_RULE = "=" * 60
_SUB_RULE = "-" * 30


def _tb(gib: float) -> float:
    return gib / 1024


def report_filename(result: AnalysisResult | ComparisonResult, fmt: ReportFormat = "json") -> str:
    if isinstance(result, ComparisonResult):
        stamp = result.generated_at.strftime("%Y%m%dT%H%M%SZ")
        return f"comparison_{stamp}.{fmt}"
    base = Path(result.source_label).stem or "analysis"
    return f"{base}_analysis.{fmt}"


def write_report(
    result: AnalysisResult | ComparisonResult,
    output_dir: str | Path = ".",
    fmt: ReportFormat = "json",
) -> Path:
    """Serialise *result* into *output_dir* and return the written path."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / report_filename(result, fmt)
    payload = result.to_report()

    with open(path, "w", encoding="utf-8") as f:
        if fmt == "yaml":
            yaml.dump(payload, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(payload, f, indent=2)
            f.write("\n")

    logger.debug("Wrote %s report to %s", fmt, path)
    return path


def format_console_report(result: AnalysisResult) -> str:
    lines = ["", _RULE, f"RVTools Analysis Report: {result.source_label}", _RULE]

    vms = result.vm_summary
    if vms is not None:
        on_pct = (vms.powered_on / vms.total) * 100 if vms.total else 0.0
        lines += [
            "",
            "VIRTUAL MACHINES",
            _SUB_RULE,
            f"Total VMs: {vms.total:,}",
            f"Powered On: {vms.powered_on:,} ({on_pct:.1f}%)",
            f"Total vCPUs: {vms.total_vcpus:,}",
            f"Total Memory: {vms.total_memory:.1f} GB",
            f"Avg vCPUs/VM: {vms.avg_cpus:.1f}",
            f"Avg Memory/VM: {vms.avg_memory:.1f} GB",
            f"Storage Efficiency: {vms.storage_efficiency:.1f}%",
        ]

    hosts = result.host_summary
    if hosts is not None:
        lines += [
            "",
            "HOSTS",
            _SUB_RULE,
            f"Total Hosts: {hosts.total:,}",
            f"Connected: {hosts.connected:,}",
            f"Total CPU Cores: {hosts.total_cores:,}",
            f"Total Memory: {hosts.total_memory:.1f} GB",
            f"Avg VMs/Host: {hosts.avg_vms_per_host:.1f}",
        ]

    storage = result.storage_summary
    if storage is not None:
        lines += [
            "",
            "STORAGE",
            _SUB_RULE,
            f"Total Datastores: {storage.total:,}",
            f"Total Capacity: {_tb(storage.total_capacity):.1f} TB",
            f"Total Used: {_tb(storage.total_used):.1f} TB",
            f"Utilization: {storage.utilization_percent:.1f}%",
        ]

    return "\n".join(lines)


def format_comparison_table(result: ComparisonResult) -> str:
    """Side-by-side table: VMs, hosts and storage TB per source (absent sections show 0)."""
    headers = ("File", "VMs", "Hosts", "Storage (TB)")
    rows = []
    for analysis in result.analyses:
        rows.append((
            analysis.source_label,
            str(analysis.vm_summary.total if analysis.vm_summary else 0),
            str(analysis.host_summary.total if analysis.host_summary else 0),
            f"{_tb(analysis.storage_summary.total_capacity):.1f}" if analysis.storage_summary else "0",
        ))

    widths = [max([len(h)] + [len(r[i]) for r in rows]) for i, h in enumerate(headers)]

    def fmt_row(cells: tuple[str, ...]) -> str:
        first = cells[0].ljust(widths[0])
        rest = "  ".join(c.rjust(w) for c, w in zip(cells[1:], widths[1:]))
        return f"{first}  {rest}"

    lines = [fmt_row(headers), "  ".join("-" * w for w in widths)]
    lines += [fmt_row(r) for r in rows]
    return "\n".join(lines)
