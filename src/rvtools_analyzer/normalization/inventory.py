"""Map raw vInfo / vHost / vDatastore rows onto canonical inventory models."""

from collections.abc import Mapping, Sequence
from typing import Any

from rvtools_analyzer.errors import MalformedInputError
from rvtools_analyzer.models.inventory import Datastore, Host, HostStatus, PowerState, VirtualMachine
from rvtools_analyzer.normalization.fields import (
    DATASTORE_FIELDS,
    HOST_FIELDS,
    VM_FIELDS,
    FieldSpec,
    resolve_record,
)

VM_SHEET = "vInfo"
HOST_SHEET = "vHost"
DATASTORE_SHEET = "vDatastore"
CLUSTER_SHEET = "vCluster"

# Canonical order; vCluster is accepted but not aggregated.
KNOWN_SHEETS = (VM_SHEET, HOST_SHEET, DATASTORE_SHEET, CLUSTER_SHEET)

_POWER_STATES = {
    "poweredOn": PowerState.POWERED_ON,
    "poweredOff": PowerState.POWERED_OFF,
}
_CONNECTED_VALUES = {"Connected", "connected"}


def normalize_power_state(value: Any) -> PowerState:
    return _POWER_STATES.get(value, PowerState.UNKNOWN) if isinstance(value, str) else PowerState.UNKNOWN


def normalize_host_status(value: Any) -> HostStatus:
    if value is None:
        return HostStatus.UNKNOWN
    if isinstance(value, str) and value in _CONNECTED_VALUES:
        return HostStatus.CONNECTED
    return HostStatus.OTHER


def sheet_rows(sheet: str, rows: Any) -> list[Mapping[Any, Any]]:
    """Validate the shape of one sheet: a sequence whose items are mappings.

    An absent sheet (None) has no rows. Anything else that is not a list of
    row mappings is a structural problem and raises ``MalformedInputError``.
    """
    if rows is None:
        return []
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Sequence):
        raise MalformedInputError(
            f"sheet '{sheet}' must be a sequence of rows, got {type(rows).__name__}",
            sheet=sheet,
        )
    for idx, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise MalformedInputError(
                f"sheet '{sheet}' row {idx + 1} is {type(row).__name__}, expected a column mapping",
                sheet=sheet,
            )
    return list(rows)


def normalize_vms(rows: Any, fields: Mapping[str, FieldSpec] = VM_FIELDS) -> list[VirtualMachine]:
    vms = []
    for row in sheet_rows(VM_SHEET, rows):
        values = resolve_record(row, fields)
        values["power_state"] = normalize_power_state(values.get("power_state"))
        vms.append(VirtualMachine(**values))
    return vms


def normalize_hosts(rows: Any, fields: Mapping[str, FieldSpec] = HOST_FIELDS) -> list[Host]:
    hosts = []
    for row in sheet_rows(HOST_SHEET, rows):
        values = resolve_record(row, fields)
        values["status"] = normalize_host_status(values.get("status"))
        hosts.append(Host(**values))
    return hosts


def normalize_datastores(rows: Any, fields: Mapping[str, FieldSpec] = DATASTORE_FIELDS) -> list[Datastore]:
    return [Datastore(**resolve_record(row, fields)) for row in sheet_rows(DATASTORE_SHEET, rows)]
