from .fields import DATASTORE_FIELDS, HOST_FIELDS, VM_FIELDS, FieldSpec, extend_fields, resolve_field, resolve_record
from .inventory import KNOWN_SHEETS, normalize_datastores, normalize_hosts, normalize_vms

__all__ = [
    "DATASTORE_FIELDS",
    "HOST_FIELDS",
    "VM_FIELDS",
    "FieldSpec",
    "extend_fields",
    "resolve_field",
    "resolve_record",
    "KNOWN_SHEETS",
    "normalize_datastores",
    "normalize_hosts",
    "normalize_vms",
]
