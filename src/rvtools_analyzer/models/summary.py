from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .inventory import Datastore, Host, VirtualMachine


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class SummaryModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class VMSummary(SummaryModel):
    total: int = 0
    powered_on: int = 0
    powered_off: int = 0
    total_vcpus: int = Field(default=0, alias="totalvCPUs")
    total_memory: float = 0.0
    total_provisioned: float = 0.0
    total_used: float = 0.0
    avg_cpus: float = 0.0
    avg_memory: float = 0.0
    storage_efficiency: float = 0.0
    vms: tuple[VirtualMachine, ...] = ()


class HostSummary(SummaryModel):
    total: int = 0
    connected: int = 0
    total_cores: int = 0
    total_memory: float = 0.0
    total_vms: int = Field(default=0, alias="totalVMs")
    avg_vms_per_host: float = Field(default=0.0, alias="avgVMsPerHost")
    avg_cores_per_host: float = 0.0
    vm_to_core_ratio: float = Field(default=0.0, alias="vmToCoreRatio")
    hosts: tuple[Host, ...] = ()


class StorageSummary(SummaryModel):
    total: int = 0
    total_capacity: float = 0.0
    total_used: float = 0.0
    total_free: float = 0.0
    utilization_percent: float = 0.0
    by_type: dict[str, int] = Field(default_factory=dict)
    datastores: tuple[Datastore, ...] = ()


class AnalysisResult(SummaryModel):
    source_label: str
    generated_at: datetime = Field(default_factory=utc_now)
    sheets: tuple[str, ...] = ()
    vm_summary: VMSummary | None = None
    host_summary: HostSummary | None = None
    storage_summary: StorageSummary | None = None

    def summaries(self) -> dict[str, SummaryModel]:
        """Present summaries only, keyed by their serialised field name."""
        out: dict[str, SummaryModel] = {}
        for key, value in (
            ("vmSummary", self.vm_summary),
            ("hostSummary", self.host_summary),
            ("storageSummary", self.storage_summary),
        ):
            if value is not None:
                out[key] = value
        return out

    def to_report(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ComparisonResult(SummaryModel):
    generated_at: datetime = Field(default_factory=utc_now)
    analyses: tuple[AnalysisResult, ...] = ()

    @property
    def files(self) -> list[str]:
        return [a.source_label for a in self.analyses]

    def to_report(self) -> dict:
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload["files"] = self.files
        return payload
