"""
Records returned by the cluster management API. They are snapshots of live
state, nothing here is cached or modified locally.
"""

from dataclasses import dataclass
from typing import Optional

from s2dctl.common.types import (
    ClusterNodeState,
    DrainStatus,
    HealthStatus,
    ResourceState,
)

OPERATIONAL_STATUS_OK = "OK"
OPERATIONAL_STATUS_IN_MAINTENANCE = "In Maintenance Mode"


@dataclass(frozen=True)
class ClusterNodeInfo:
    name: str
    state: ClusterNodeState
    drain_status: DrainStatus = DrainStatus.NOT_INITIATED


@dataclass(frozen=True)
class VirtualDiskInfo:
    name: str
    health_status: HealthStatus
    # a disk may report several operational statuses at once
    operational_status: tuple[str, ...] = (OPERATIONAL_STATUS_OK,)

    @property
    def is_healthy(self) -> bool:
        return self.health_status == HealthStatus.HEALTHY and (
            tuple(self.operational_status) == (OPERATIONAL_STATUS_OK,)
        )


@dataclass(frozen=True)
class PhysicalDiskInfo:
    name: str
    node: str
    operational_status: tuple[str, ...] = (OPERATIONAL_STATUS_OK,)

    @property
    def in_maintenance(self) -> bool:
        return OPERATIONAL_STATUS_IN_MAINTENANCE in self.operational_status


@dataclass(frozen=True)
class ClusterResourceInfo:
    name: str
    resource_type: str
    state: ResourceState
    owner_group: Optional[str] = None


@dataclass(frozen=True)
class ClusterGroupInfo:
    name: str
    description: str
