from typing import (
    List,
    Optional,
)

from .types import (
    ClusterGroupInfo,
    ClusterNodeInfo,
    ClusterResourceInfo,
    PhysicalDiskInfo,
    VirtualDiskInfo,
)


class ClusterManagementInterface:
    """
    Failover cluster and storage management operations the orchestrator
    depends on. Every method queries or changes live state. Failures are
    reported by raising LibraryError.
    """

    def get_cluster_name(self, node: str) -> str:
        """
        node -- name of a cluster member

        Return the name of the cluster the node is a member of.
        """
        raise NotImplementedError()

    def get_nodes(self, cluster: str) -> List[ClusterNodeInfo]:
        """
        cluster -- name of the cluster or of any of its running members
        """
        raise NotImplementedError()

    def get_virtual_disks(self, target: str) -> List[VirtualDiskInfo]:
        """
        target -- node or cluster the virtual disks are queried from
        """
        raise NotImplementedError()

    def get_physical_disks(
        self, cluster: str, node: str
    ) -> List[PhysicalDiskInfo]:
        """
        cluster -- name of the cluster
        node -- node whose physically connected disks are returned
        """
        raise NotImplementedError()

    def get_resources(self, cluster: str) -> List[ClusterResourceInfo]:
        raise NotImplementedError()

    def get_shared_volumes(self, cluster: str) -> List[ClusterResourceInfo]:
        raise NotImplementedError()

    def suspend_node(self, cluster: str, node: str) -> None:
        """
        Pause the node and start draining its roles. Does not wait for the
        drain to finish, see ClusterNodeInfo.drain_status.
        """
        raise NotImplementedError()

    def resume_node(self, cluster: str, node: str) -> None:
        """
        Resume the node and fail its roles back immediately.
        """
        raise NotImplementedError()

    def enable_storage_maintenance(self, cluster: str, node: str) -> None:
        """
        Put all disks of the node's storage scale unit into maintenance mode.
        """
        raise NotImplementedError()

    def disable_storage_maintenance(self, cluster: str, node: str) -> None:
        raise NotImplementedError()

    def start_resource(self, cluster: str, resource: str) -> None:
        raise NotImplementedError()

    def stop_resource(self, cluster: str, resource: str) -> None:
        raise NotImplementedError()

    def stop_cluster(self, cluster: str) -> None:
        """
        Stop the cluster service on all nodes of the cluster.
        """
        raise NotImplementedError()

    def start_cluster_node(self, node: str, fix_quorum: bool = False) -> None:
        """
        node -- node to start the cluster service on
        fix_quorum -- start the node even if the cluster has no quorum
        """
        raise NotImplementedError()

    def is_service_running(self, node: str, service: str) -> bool:
        raise NotImplementedError()

    def start_service(self, node: str, service: str) -> None:
        raise NotImplementedError()

    def stop_service(self, node: str, service: str) -> None:
        raise NotImplementedError()

    def enable_service(self, node: str, service: str) -> None:
        """
        Set startup type of the service to automatic.
        """
        raise NotImplementedError()

    def disable_service(self, node: str, service: str) -> None:
        raise NotImplementedError()

    def get_group(self, cluster: str, group: str) -> Optional[ClusterGroupInfo]:
        """
        Return the cluster group or None if it does not exist.
        """
        raise NotImplementedError()

    def create_group(self, cluster: str, group: str, description: str) -> bool:
        """
        Create an empty cluster group. Return False if the group already
        exists, True if it has been created.
        """
        raise NotImplementedError()

    def remove_group(self, cluster: str, group: str) -> None:
        raise NotImplementedError()

    def get_os_build(self, node: str) -> str:
        """
        Return the operating system build of the node, e.g. '17763.1879'.
        """
        raise NotImplementedError()
