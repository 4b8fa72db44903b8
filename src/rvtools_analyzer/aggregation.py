"""Reduce canonical inventory lists into per-category summaries.

Every statistic is computed over the full list handed in. The VM preview is a
display-only slice and never feeds back into the numbers.
"""

from collections import Counter
from collections.abc import Sequence

from rvtools_analyzer.models.inventory import Datastore, Host, HostStatus, PowerState, VirtualMachine
from rvtools_analyzer.models.summary import HostSummary, StorageSummary, VMSummary

DEFAULT_PREVIEW_LIMIT = 100


def average(total: float, count: int) -> float:
    return total / count if count > 0 else 0.0


def ratio_pct(numerator: float, denominator: float) -> float:
    """numerator / denominator as a percentage; 0 when the denominator is 0."""
    return (numerator / denominator) * 100 if denominator > 0 else 0.0


def summarize_vms(vms: Sequence[VirtualMachine], preview_limit: int = DEFAULT_PREVIEW_LIMIT) -> VMSummary:
    total = len(vms)
    states = Counter(vm.power_state for vm in vms)
    total_vcpus = sum(vm.cpu_count for vm in vms)
    total_memory = sum(vm.memory_gib for vm in vms)
    total_provisioned = sum(vm.provisioned_gib for vm in vms)
    total_used = sum(vm.used_gib for vm in vms)

    return VMSummary(
        total=total,
        powered_on=states[PowerState.POWERED_ON],
        powered_off=states[PowerState.POWERED_OFF],
        total_vcpus=total_vcpus,
        total_memory=total_memory,
        total_provisioned=total_provisioned,
        total_used=total_used,
        avg_cpus=average(total_vcpus, total),
        avg_memory=average(total_memory, total),
        storage_efficiency=ratio_pct(total_used, total_provisioned),
        vms=tuple(vms[: max(preview_limit, 0)]),
    )


def summarize_hosts(hosts: Sequence[Host]) -> HostSummary:
    total = len(hosts)
    total_cores = sum(h.cpu_core_count for h in hosts)
    total_vms = sum(h.vm_count for h in hosts)

    return HostSummary(
        total=total,
        connected=sum(1 for h in hosts if h.status is HostStatus.CONNECTED),
        total_cores=total_cores,
        total_memory=sum(h.memory_gib for h in hosts),
        total_vms=total_vms,
        avg_vms_per_host=average(total_vms, total),
        avg_cores_per_host=average(total_cores, total),
        vm_to_core_ratio=average(total_vms, total_cores),
        hosts=tuple(hosts),
    )


def summarize_storage(datastores: Sequence[Datastore]) -> StorageSummary:
    total_capacity = sum(ds.capacity_gib for ds in datastores)
    total_used = sum(ds.used_gib for ds in datastores)

    return StorageSummary(
        total=len(datastores),
        total_capacity=total_capacity,
        total_used=total_used,
        total_free=sum(ds.free_gib for ds in datastores),
        utilization_percent=ratio_pct(total_used, total_capacity),
        by_type=dict(Counter(ds.type for ds in datastores)),
        datastores=tuple(datastores),
    )
