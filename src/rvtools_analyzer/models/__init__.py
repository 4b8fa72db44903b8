from .config import AnalyzerConfig, ExtraColumn
from .inventory import Datastore, Host, HostStatus, PowerState, VirtualMachine
from .summary import AnalysisResult, ComparisonResult, HostSummary, StorageSummary, VMSummary

__all__ = [
    "AnalyzerConfig",
    "ExtraColumn",
    "Datastore",
    "Host",
    "HostStatus",
    "PowerState",
    "VirtualMachine",
    "AnalysisResult",
    "ComparisonResult",
    "HostSummary",
    "StorageSummary",
    "VMSummary",
]
