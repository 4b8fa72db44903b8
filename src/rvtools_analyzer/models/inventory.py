from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PowerState(str, Enum):
    POWERED_ON = "poweredOn"
    POWERED_OFF = "poweredOff"
    UNKNOWN = "unknown"


class HostStatus(str, Enum):
    CONNECTED = "connected"
    OTHER = "other"
    UNKNOWN = "unknown"


class InventoryModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class VirtualMachine(InventoryModel):
    name: str = "Unknown"
    host: str = "N/A"
    cluster: str = "N/A"
    cpu_count: int = Field(default=0, ge=0)
    memory_gib: float = Field(default=0.0, ge=0, alias="memoryGiB")
    provisioned_gib: float = Field(default=0.0, ge=0, alias="provisionedGiB")
    used_gib: float = Field(default=0.0, ge=0, alias="usedGiB")
    power_state: PowerState = PowerState.UNKNOWN


class Host(InventoryModel):
    name: str = "Unknown"
    cluster: str = "N/A"
    cpu_core_count: int = Field(default=0, ge=0)
    memory_gib: float = Field(default=0.0, ge=0, alias="memoryGiB")
    vm_count: int = Field(default=0, ge=0)
    status: HostStatus = HostStatus.UNKNOWN


class Datastore(InventoryModel):
    name: str = "Unknown"
    type: str = "Unknown"
    capacity_gib: float = Field(default=0.0, ge=0, alias="capacityGiB")
    used_gib: float = Field(default=0.0, ge=0, alias="usedGiB")
    free_gib: float = Field(default=0.0, ge=0, alias="freeGiB")
    vm_count: int = Field(default=0, ge=0)
