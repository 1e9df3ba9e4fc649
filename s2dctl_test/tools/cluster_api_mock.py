import dataclasses
from collections import defaultdict
from typing import (
    Any,
    Dict,
    List,
    Optional,
    Tuple,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.types import (
    ClusterNodeState,
    DrainStatus,
    HealthStatus,
    ResourceState,
)
from s2dctl.lib.cluster_api.interfaces import ClusterManagementInterface
from s2dctl.lib.cluster_api.types import (
    OPERATIONAL_STATUS_IN_MAINTENANCE,
    OPERATIONAL_STATUS_OK,
    ClusterGroupInfo,
    ClusterNodeInfo,
    ClusterResourceInfo,
    PhysicalDiskInfo,
    VirtualDiskInfo,
)
from s2dctl.lib.errors import LibraryError

POOL_NAME = "Cluster Pool 1"
WITNESS_NAME = "File Share Witness"
CSV_NAME = "Cluster Virtual Disk (Volume1)"


def pool_resource(state=ResourceState.ONLINE, name=POOL_NAME):
    return ClusterResourceInfo(
        name, settings.resource_type_storage_pool, state, "Pool Group"
    )


def witness_resource(state=ResourceState.ONLINE):
    return ClusterResourceInfo(
        WITNESS_NAME, "File Share Witness", state, "Cluster Group"
    )


def vm_resource(name, state=ResourceState.ONLINE):
    return ClusterResourceInfo(
        name, settings.resource_type_virtual_machine, state, name
    )


def csv_resource(name=CSV_NAME, state=ResourceState.ONLINE):
    return ClusterResourceInfo(name, "Physical Disk", state, None)


def virtual_disk(
    name="Volume1",
    health=HealthStatus.HEALTHY,
    status=(OPERATIONAL_STATUS_OK,),
):
    return VirtualDiskInfo(name, health, tuple(status))


class FakeCluster:
    # pylint: disable=too-many-instance-attributes
    def __init__(
        self,
        name: str,
        node_list: List[str],
        disks_per_node: int = 2,
        resources: Optional[List[ClusterResourceInfo]] = None,
        shared_volumes: Optional[List[ClusterResourceInfo]] = None,
        virtual_disks: Optional[List[VirtualDiskInfo]] = None,
        node_state: ClusterNodeState = ClusterNodeState.UP,
    ):
        self.name = name
        self.nodes: Dict[str, ClusterNodeInfo] = {
            node: ClusterNodeInfo(node, node_state) for node in node_list
        }
        self.disks: Dict[str, List[PhysicalDiskInfo]] = {
            node: [
                PhysicalDiskInfo(f"{node}-disk{i}", node)
                for i in range(disks_per_node)
            ]
            for node in node_list
        }
        self.resources = (
            list(resources)
            if resources is not None
            else [pool_resource(), witness_resource()]
        )
        self.shared_volumes = (
            list(shared_volumes)
            if shared_volumes is not None
            else [csv_resource()]
        )
        self.virtual_disks = (
            list(virtual_disks)
            if virtual_disks is not None
            else [virtual_disk()]
        )
        self.groups: Dict[str, str] = {}
        running = node_state != ClusterNodeState.DOWN
        self.services: Dict[str, Dict[str, bool]] = {
            node: {"running": running, "enabled": running}
            for node in node_list
        }

    def set_node(self, node: str, **kwargs: Any) -> None:
        self.nodes[node] = dataclasses.replace(self.nodes[node], **kwargs)

    def set_disk_maintenance(
        self, node: str, in_maintenance: bool, count: Optional[int] = None
    ) -> None:
        disk_list = self.disks[node]
        count = len(disk_list) if count is None else count
        status = (
            (OPERATIONAL_STATUS_IN_MAINTENANCE,)
            if in_maintenance
            else (OPERATIONAL_STATUS_OK,)
        )
        self.disks[node] = [
            dataclasses.replace(disk, operational_status=status)
            if i < count
            else disk
            for i, disk in enumerate(disk_list)
        ]

    def shut_down(self) -> None:
        for node in self.nodes:
            self.set_node(node, state=ClusterNodeState.DOWN)
            self.services[node] = {"running": False, "enabled": False}
        self.resources = [
            dataclasses.replace(resource, state=ResourceState.OFFLINE)
            for resource in self.resources
        ]
        self.shared_volumes = [
            dataclasses.replace(volume, state=ResourceState.OFFLINE)
            for volume in self.shared_volumes
        ]


class FakeClusterApi(ClusterManagementInterface):
    """
    In-memory cluster management API

    Mutating calls are recorded in `actions`. Any call can be made failing by
    `fail`, any query can be given one-shot responses by `queue_response`.
    """

    # pylint: disable=too-many-public-methods
    def __init__(self, *cluster_list: FakeCluster):
        self.clusters: Dict[str, FakeCluster] = {
            cluster.name: cluster for cluster in cluster_list
        }
        self.actions: List[Tuple[str, Tuple[str, ...]]] = []
        self.drain_result = DrainStatus.COMPLETED
        # count of get_nodes calls a started node stays joining
        self.node_join_polls = 0
        self.os_builds: Dict[str, str] = {}
        self._joining: Dict[Tuple[str, str], int] = {}
        self._failures: Dict[Tuple[str, str], str] = {}
        self._responses: Dict[str, List[Any]] = defaultdict(list)

    def fail(self, method: str, target: str, reason: str = "failure") -> None:
        self._failures[(method, target)] = reason

    def queue_response(self, method: str, *responses: Any) -> None:
        self._responses[method].extend(responses)

    def _call(self, method: str, *args: str) -> None:
        if not method.startswith(("get_", "is_")):
            self.actions.append((method, args))
        for arg in args:
            if (method, arg) in self._failures:
                raise LibraryError(
                    ReportItem.error(
                        reports.messages.ClusterApiCommandFailed(
                            method, arg, self._failures[(method, arg)]
                        )
                    )
                )

    def _queued(self, method: str) -> Tuple[bool, Any]:
        if self._responses[method]:
            return True, self._responses[method].pop(0)
        return False, None

    def _cluster(self, cluster: str) -> FakeCluster:
        if cluster not in self.clusters:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.ClusterApiCommandFailed(
                        "get_cluster", cluster, "cluster not found"
                    )
                )
            )
        return self.clusters[cluster]

    def _cluster_of_node(self, node: str) -> FakeCluster:
        for cluster in self.clusters.values():
            for name in cluster.nodes:
                if name.lower() == node.lower():
                    return cluster
        if node in self.clusters:
            return self.clusters[node]
        raise LibraryError(
            ReportItem.error(
                reports.messages.ClusterApiCommandFailed(
                    "get_cluster_name", node, "node not found"
                )
            )
        )

    def get_cluster_name(self, node: str) -> str:
        self._call("get_cluster_name", node)
        return self._cluster_of_node(node).name

    def get_nodes(self, cluster: str) -> List[ClusterNodeInfo]:
        self._call("get_nodes", cluster)
        queued, response = self._queued("get_nodes")
        if queued:
            return response
        fake = self._cluster(cluster)
        for key, polls in list(self._joining.items()):
            if key[0] != cluster:
                continue
            if polls <= 0:
                fake.set_node(key[1], state=ClusterNodeState.UP)
                del self._joining[key]
            else:
                self._joining[key] = polls - 1
        return list(fake.nodes.values())

    def get_virtual_disks(self, target: str) -> List[VirtualDiskInfo]:
        self._call("get_virtual_disks", target)
        queued, response = self._queued("get_virtual_disks")
        if queued:
            return response
        return list(self._cluster_of_node(target).virtual_disks)

    def get_physical_disks(
        self, cluster: str, node: str
    ) -> List[PhysicalDiskInfo]:
        self._call("get_physical_disks", cluster, node)
        return list(self._cluster(cluster).disks.get(node, []))

    def get_resources(self, cluster: str) -> List[ClusterResourceInfo]:
        self._call("get_resources", cluster)
        return list(self._cluster(cluster).resources)

    def get_shared_volumes(self, cluster: str) -> List[ClusterResourceInfo]:
        self._call("get_shared_volumes", cluster)
        return list(self._cluster(cluster).shared_volumes)

    def suspend_node(self, cluster: str, node: str) -> None:
        self._call("suspend_node", cluster, node)
        self._cluster(cluster).set_node(
            node, state=ClusterNodeState.PAUSED, drain_status=self.drain_result
        )

    def resume_node(self, cluster: str, node: str) -> None:
        self._call("resume_node", cluster, node)
        self._cluster(cluster).set_node(
            node,
            state=ClusterNodeState.UP,
            drain_status=DrainStatus.NOT_INITIATED,
        )

    def enable_storage_maintenance(self, cluster: str, node: str) -> None:
        self._call("enable_storage_maintenance", cluster, node)
        self._cluster(cluster).set_disk_maintenance(node, True)

    def disable_storage_maintenance(self, cluster: str, node: str) -> None:
        self._call("disable_storage_maintenance", cluster, node)
        self._cluster(cluster).set_disk_maintenance(node, False)

    def _set_resource_state(
        self, cluster: str, resource: str, state: ResourceState
    ) -> None:
        fake = self._cluster(cluster)
        fake.resources = [
            dataclasses.replace(item, state=state)
            if item.name == resource
            else item
            for item in fake.resources
        ]
        fake.shared_volumes = [
            dataclasses.replace(item, state=state)
            if item.name == resource
            else item
            for item in fake.shared_volumes
        ]

    def start_resource(self, cluster: str, resource: str) -> None:
        self._call("start_resource", cluster, resource)
        self._set_resource_state(cluster, resource, ResourceState.ONLINE)

    def stop_resource(self, cluster: str, resource: str) -> None:
        self._call("stop_resource", cluster, resource)
        self._set_resource_state(cluster, resource, ResourceState.OFFLINE)

    def stop_cluster(self, cluster: str) -> None:
        self._call("stop_cluster", cluster)
        fake = self._cluster(cluster)
        for node in fake.nodes:
            fake.set_node(node, state=ClusterNodeState.DOWN)

    def _start_node(self, node: str) -> None:
        fake = self._cluster_of_node(node)
        fake.services[node]["running"] = True
        if self.node_join_polls > 0:
            fake.set_node(node, state=ClusterNodeState.JOINING)
            self._joining[(fake.name, node)] = self.node_join_polls
        else:
            fake.set_node(node, state=ClusterNodeState.UP)

    def start_cluster_node(self, node: str, fix_quorum: bool = False) -> None:
        self._call(
            "start_cluster_node", node, "fix_quorum" if fix_quorum else ""
        )
        fake = self._cluster_of_node(node)
        fake.services[node]["running"] = True
        fake.set_node(node, state=ClusterNodeState.UP)

    def is_service_running(self, node: str, service: str) -> bool:
        self._call("is_service_running", node, service)
        return self._cluster_of_node(node).services[node]["running"]

    def start_service(self, node: str, service: str) -> None:
        self._call("start_service", node, service)
        self._start_node(node)

    def stop_service(self, node: str, service: str) -> None:
        self._call("stop_service", node, service)
        self._cluster_of_node(node).services[node]["running"] = False

    def enable_service(self, node: str, service: str) -> None:
        self._call("enable_service", node, service)
        self._cluster_of_node(node).services[node]["enabled"] = True

    def disable_service(self, node: str, service: str) -> None:
        self._call("disable_service", node, service)
        self._cluster_of_node(node).services[node]["enabled"] = False

    def get_group(self, cluster: str, group: str) -> Optional[ClusterGroupInfo]:
        self._call("get_group", cluster, group)
        groups = self._cluster(cluster).groups
        if group not in groups:
            return None
        return ClusterGroupInfo(group, groups[group])

    def create_group(self, cluster: str, group: str, description: str) -> bool:
        self._call("create_group", cluster, group)
        groups = self._cluster(cluster).groups
        if group in groups:
            return False
        groups[group] = description
        return True

    def remove_group(self, cluster: str, group: str) -> None:
        self._call("remove_group", cluster, group)
        self._cluster(cluster).groups.pop(group, None)

    def get_os_build(self, node: str) -> str:
        self._call("get_os_build", node)
        return self.os_builds.get(node, "17763.1000")
