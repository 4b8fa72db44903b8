from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExtraColumn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    column: str
    # Unit divisor applied to numeric values, e.g. 1024 for a MiB column.
    divisor: float = Field(default=1.0, gt=0)


EntityKind = Literal["vm", "host", "datastore"]


class AnalyzerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    preview_limit: int = Field(default=100, ge=0)
    max_upload_mb: float = Field(default=50.0, gt=0)
    extra_columns: dict[EntityKind, dict[str, list[ExtraColumn]]] = Field(default_factory=dict)

    @field_validator("extra_columns", mode="before")
    @classmethod
    def _expand_bare_columns(cls, value):
        # Allow `memory_gib: ["RAM MB"]` as shorthand for {column: "RAM MB"}.
        if not isinstance(value, dict):
            return value
        expanded = {}
        for kind, fields in value.items():
            if not isinstance(fields, dict):
                expanded[kind] = fields
                continue
            expanded[kind] = {
                name: [{"column": c} if isinstance(c, str) else c for c in (cols or [])]
                for name, cols in fields.items()
            }
        return expanded

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)
