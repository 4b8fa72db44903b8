"""Shared fixtures: raw RVTools-style sheets and on-disk workbooks."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import openpyxl
import pytest


def _vinfo_rows() -> list[dict[str, Any]]:
    return [
        {
            "VM": "app01",
            "Powerstate": "poweredOn",
            "CPUs": 4,
            "Memory": 8192,
            "Provisioned MB": 102400,
            "In Use MB": 51200,
            "Host": "esx01.lab",
            "Cluster": "Prod",
        },
        {
            "VM": "db01",
            "Powerstate": "poweredOff",
            "CPUs": 8,
            "Memory": 16384,
            "Provisioned MB": 204800,
            "In Use MB": 102400,
            "Host": "esx02.lab",
            "Cluster": "Prod",
        },
    ]


def _vhost_rows() -> list[dict[str, Any]]:
    return [
        {"Host": "esx01.lab", "Cluster": "Prod", "# CPU": 32, "Memory": 512, "# VMs": 20, "Status": "Connected"},
        {"Host": "esx02.lab", "Cluster": "Prod", "# CPU": 32, "Memory": 512, "# VMs": 10, "Status": "Maintenance"},
    ]


def _vdatastore_rows() -> list[dict[str, Any]]:
    return [
        {"Name": "ds-ssd-01", "Type": "VMFS", "Capacity GB": 4096, "In Use GB": 1024, "Free GB": 3072, "# VMs": 12},
        {"Name": "nfs-01", "Type": "NFS", "Capacity GB": 4096, "In Use GB": 3072, "Free GB": 1024, "# VMs": 18},
    ]


@pytest.fixture()
def vinfo_rows() -> list[dict[str, Any]]:
    return _vinfo_rows()


@pytest.fixture()
def vhost_rows() -> list[dict[str, Any]]:
    return _vhost_rows()


@pytest.fixture()
def vdatastore_rows() -> list[dict[str, Any]]:
    return _vdatastore_rows()


@pytest.fixture()
def full_sheets() -> dict[str, list[dict[str, Any]]]:
    return {
        "vInfo": _vinfo_rows(),
        "vHost": _vhost_rows(),
        "vDatastore": _vdatastore_rows(),
    }


@pytest.fixture()
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """Write ``{sheet: [row dict, ...]}`` to an .xlsx file and return its path.

    Headers are the union of row keys in first-seen order. ``leading_rows``
    inserts blank rows above each header.
    """

    def _make(sheets: dict[str, list[dict[str, Any]]], name: str = "export.xlsx", leading_rows: int = 0) -> Path:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for title, rows in sheets.items():
            ws = wb.create_sheet(title)
            headers: list[str] = []
            for row in rows:
                for key in row:
                    if key not in headers:
                        headers.append(key)
            for _ in range(leading_rows):
                ws.append([None])
            ws.append(headers)
            for row in rows:
                ws.append([row.get(h) for h in headers])
        path = tmp_path / name
        wb.save(path)
        return path

    return _make
