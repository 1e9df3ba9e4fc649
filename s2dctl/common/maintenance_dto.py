from dataclasses import (
    dataclass,
    field,
)
from typing import (
    List,
    Optional,
)

from s2dctl.common.interface.dto import (
    DataTransferObject,
    meta,
)
from s2dctl.common.types import (
    ClusterNodeState,
    OperationResult,
    PatchLevelStatus,
    StorageMaintenanceLevel,
)


@dataclass(frozen=True)
class NodeMaintenanceStateDto(DataTransferObject):
    computer_name: str = field(metadata=meta(name="ComputerName"))
    cluster_state: ClusterNodeState = field(metadata=meta(name="ClusterState"))
    storage_state: StorageMaintenanceLevel = field(
        metadata=meta(name="StorageState")
    )

    def __str__(self) -> str:
        return (
            f"{self.computer_name}: ClusterState={self.cluster_state.value} "
            f"StorageState={self.storage_state.value}"
        )


@dataclass(frozen=True)
class ClusterOperationResultDto(DataTransferObject):
    target: str
    operation: str
    result: OperationResult
    failed_step: Optional[str] = None
    reason: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.target}: {self.operation} {self.result.value}"
        if self.failed_step:
            text += f" at step '{self.failed_step}'"
        if self.reason:
            text += f": {self.reason}"
        return text


@dataclass(frozen=True)
class NodePatchLevelDto(DataTransferObject):
    computer_name: str
    current_build: str
    latest_build: Optional[str]
    status: PatchLevelStatus
    missing_updates: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        text = (
            f"{self.computer_name}: build {self.current_build} "
            f"{self.status.value}"
        )
        if self.missing_updates:
            text += " (missing: {0}; latest build {1})".format(
                ", ".join(self.missing_updates), self.latest_build
            )
        return text


@dataclass(frozen=True)
class ClusterLeaseDto(DataTransferObject):
    cluster_name: str
    holder: Optional[str]
    expires: Optional[str]
    expired: bool

    def __str__(self) -> str:
        if not self.holder:
            return f"{self.cluster_name}: no lease held"
        return "{0}: lease held by '{1}' until {2}{3}".format(
            self.cluster_name,
            self.holder,
            self.expires,
            " (expired)" if self.expired else "",
        )
