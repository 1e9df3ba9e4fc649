from collections.abc import Set
from enum import Enum
from typing import (
    MutableSequence,
    Optional,
    Type,
    TypeVar,
    Union,
)

StringSequence = Union[MutableSequence[str], tuple[str, ...]]
StringCollection = Union[StringSequence, Set[str]]

# Every collaborator state enum has an UNKNOWN member. Values which do not
# match any known member are mapped to it instead of failing.
UNKNOWN_VALUE = "UNKNOWN"


class CollaboratorEnum(str, Enum):
    pass


T = TypeVar("T", bound=CollaboratorEnum)


def str_to_enum(enum_type: Type[T], value: Optional[str]) -> T:
    if value:
        value = value.strip().lower()
        for item in enum_type:
            if item.value.lower() == value:
                return item
    return enum_type(UNKNOWN_VALUE)


class ClusterNodeState(CollaboratorEnum):
    UP = "Up"
    PAUSED = "Paused"
    DOWN = "Down"
    JOINING = "Joining"
    UNKNOWN = UNKNOWN_VALUE


class StorageMaintenanceLevel(CollaboratorEnum):
    UP = "Up"
    PARTIAL_MAINTENANCE = "PartialMaintenance"
    IN_MAINTENANCE = "InMaintenance"
    UNKNOWN = UNKNOWN_VALUE


class HealthStatus(CollaboratorEnum):
    HEALTHY = "Healthy"
    WARNING = "Warning"
    UNHEALTHY = "Unhealthy"
    UNKNOWN = UNKNOWN_VALUE


class ResourceState(CollaboratorEnum):
    ONLINE = "Online"
    OFFLINE = "Offline"
    FAILED = "Failed"
    PENDING = "Pending"
    UNKNOWN = UNKNOWN_VALUE


class DrainStatus(CollaboratorEnum):
    NOT_INITIATED = "NotInitiated"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    FAILED = "Failed"
    UNKNOWN = UNKNOWN_VALUE


class OperationResult(str, Enum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class PatchLevelStatus(CollaboratorEnum):
    UP_TO_DATE = "UpToDate"
    UPDATE_AVAILABLE = "UpdateAvailable"
    UNKNOWN = UNKNOWN_VALUE
