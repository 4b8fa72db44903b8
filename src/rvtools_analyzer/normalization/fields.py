"""Declarative column tables and the field resolver.

Each canonical field is described by one ``FieldSpec``: an ordered list of
source columns (most preferred first, each with its own unit divisor), a
coercion type and a fallback. Supporting a new export-tool variant means
adding a column to the relevant row.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict

from rvtools_analyzer.primitives import is_blank, parse_number, to_int, to_str

# "raw" hands back the untouched cell; enum fields match it exactly.
Coercion = Literal["str", "int", "float", "raw"]

# MiB/MB columns are divided by this to land in GiB.
MIB = 1024.0


class Column(NamedTuple):
    name: str
    divisor: float = 1.0


def _columns(*items: str | tuple[str, float] | Column) -> tuple[Column, ...]:
    out = []
    for item in items:
        if isinstance(item, Column):
            out.append(item)
        elif isinstance(item, tuple):
            out.append(Column(*item))
        else:
            out.append(Column(item))
    return tuple(out)


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidates: tuple[Column, ...]
    type: Coercion = "str"
    fallback: Any = None

    def extended(self, extra: Iterable[str | tuple[str, float] | Column]) -> "FieldSpec":
        known = {c.name for c in self.candidates}
        added = tuple(c for c in _columns(*extra) if c.name not in known)
        return self.model_copy(update={"candidates": self.candidates + added})


_TYPE_DEFAULTS: dict[str, Any] = {"str": "Unknown", "int": 0, "float": 0.0}


def _spec(*columns: str | tuple[str, float], type: Coercion = "str", fallback: Any = None) -> FieldSpec:
    if fallback is None:
        fallback = _TYPE_DEFAULTS[type]
    return FieldSpec(candidates=_columns(*columns), type=type, fallback=fallback)


def _raw(*columns: str) -> FieldSpec:
    """An unconverted field whose absence stays distinguishable (resolves to None)."""
    return FieldSpec(candidates=_columns(*columns), type="raw", fallback=None)


VM_FIELDS: dict[str, FieldSpec] = {
    "name": _spec("VM", "Name"),
    "host": _spec("Host", "ESX Host", fallback="N/A"),
    "cluster": _spec("Cluster", fallback="N/A"),
    "cpu_count": _spec("CPUs", "Num CPUs", "vCPU", type="int"),
    "memory_gib": _spec(("Memory", MIB), ("Memory MB", MIB), type="float"),
    "provisioned_gib": _spec(
        ("Provisioned MB", MIB),
        ("Provisioned Space", MIB),
        ("Provisioned", MIB),
        ("Provisioned MiB", MIB),
        type="float",
    ),
    "used_gib": _spec(
        ("In Use MB", MIB),
        ("Used Space MB", MIB),
        ("Used", MIB),
        ("In Use MiB", MIB),
        type="float",
    ),
    "power_state": _raw("Powerstate", "Power State"),
}

HOST_FIELDS: dict[str, FieldSpec] = {
    "name": _spec("Host", "Hostname", "ESX Host"),
    "cluster": _spec("Cluster", fallback="N/A"),
    "cpu_core_count": _spec("# CPU", "CPU Cores", "Num CPU", "# Cores", type="int"),
    # vHost "Memory" has always been reported in GiB here; "# Memory" is MiB.
    "memory_gib": _spec("Memory", "Memory GB", ("# Memory", MIB), type="float"),
    "vm_count": _spec("# VMs", "VM Count", "VMs", type="int"),
    "status": _raw("Status", "Connection State", "Connection state"),
}

DATASTORE_FIELDS: dict[str, FieldSpec] = {
    "name": _spec("Datastore", "Name"),
    "type": _spec("Type"),
    "capacity_gib": _spec("Capacity GB", "Capacity", ("Capacity MB", MIB), type="float"),
    "used_gib": _spec("In Use GB", "In Use", "Used GB", ("In Use MB", MIB), type="float"),
    "free_gib": _spec("Free GB", "Free", ("Free MB", MIB), type="float"),
    "vm_count": _spec("# VMs", "VM Count", "VMs", type="int"),
}

FIELD_TABLES: dict[str, dict[str, FieldSpec]] = {
    "vm": VM_FIELDS,
    "host": HOST_FIELDS,
    "datastore": DATASTORE_FIELDS,
}


def clean_record(record: Mapping[Any, Any]) -> dict[str, Any]:
    """Key a row by stripped header text; the first occurrence of a header wins."""
    out: dict[str, Any] = {}
    for key, value in record.items():
        if key is None:
            continue
        out.setdefault(str(key).strip(), value)
    return out


def resolve_field(record: Mapping[str, Any], spec: FieldSpec) -> Any:
    """Return the coerced value of the first non-blank candidate column.

    Never raises: a missing or unparsable value resolves to ``spec.fallback``.
    The first present candidate decides the value even when it is unparsable;
    later candidates are not consulted.
    """
    default = spec.fallback
    for column in spec.candidates:
        value = record.get(column.name)
        if is_blank(value):
            continue
        if spec.type == "int":
            return to_int(value, default)
        if spec.type == "float":
            number = parse_number(value)
            return default if number is None else number / column.divisor
        if spec.type == "raw":
            return value
        return to_str(value, default)
    return default


def resolve_record(record: Mapping[Any, Any], table: Mapping[str, FieldSpec]) -> dict[str, Any]:
    cleaned = clean_record(record)
    return {name: resolve_field(cleaned, spec) for name, spec in table.items()}


def extend_fields(
    table: Mapping[str, FieldSpec],
    extra: Mapping[str, Iterable[str | tuple[str, float] | Column]],
) -> dict[str, FieldSpec]:
    """Return a copy of *table* with extra candidate columns appended per field."""
    out = dict(table)
    for name, columns in extra.items():
        if name not in out:
            raise ValueError(f"Unknown field '{name}' (expected one of: {', '.join(sorted(out))})")
        columns = _columns(*columns)
        spec = out[name]
        if spec.type != "float" and any(c.divisor != 1 for c in columns):
            raise ValueError(f"Field '{name}' is {spec.type}; a divisor only applies to float fields")
        out[name] = spec.extended(columns)
    return out
