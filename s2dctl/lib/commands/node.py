from typing import (
    Dict,
    List,
    Optional,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.maintenance_dto import NodeMaintenanceStateDto
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.types import StringCollection
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.health import ensure_volumes_healthy
from s2dctl.lib.lease import ClusterLease
from s2dctl.lib.maintenance import (
    enter_maintenance,
    exit_maintenance,
    get_node,
    get_node_maintenance_state,
)


def _ensure_scope_valid(only_cluster: bool, only_storage: bool) -> None:
    if only_cluster and only_storage:
        raise LibraryError(
            ReportItem.error(
                reports.messages.MutuallyExclusiveOptions(
                    ["only-cluster", "only-storage"]
                )
            )
        )


def enable_maintenance(
    env: LibraryEnvironment,
    node: str,
    only_cluster: bool = False,
    only_storage: bool = False,
    timeout: Optional[int] = None,
) -> NodeMaintenanceStateDto:
    """
    Put a node into maintenance: pause it draining its roles, then enable
    storage maintenance mode on its disks. Nothing is changed if any volume
    is unhealthy. A partially entered maintenance is rolled back.

    node -- name of the node
    only_cluster -- pause and drain the node only
    only_storage -- enable storage maintenance only
    timeout -- seconds to wait for the drain to complete
    """
    _ensure_scope_valid(only_cluster, only_storage)
    api = env.get_cluster_api()
    cluster = api.get_cluster_name(node)
    node = get_node(api, cluster, node).name
    drain_timeout = settings.drain_timeout if timeout is None else timeout
    with ClusterLease(env, cluster, wait_time=drain_timeout):
        ensure_volumes_healthy(api, node)
        enter_maintenance(
            env,
            cluster,
            node,
            pause=not only_storage,
            storage=not only_cluster,
            drain_timeout=drain_timeout,
        )
    return get_node_maintenance_state(api, cluster, node)


def disable_maintenance(
    env: LibraryEnvironment,
    node: str,
    only_cluster: bool = False,
    only_storage: bool = False,
) -> NodeMaintenanceStateDto:
    """
    Take a node out of maintenance: disable storage maintenance mode on its
    disks, then resume it with failback of its roles.

    node -- name of the node
    only_cluster -- resume the node only
    only_storage -- disable storage maintenance only
    """
    _ensure_scope_valid(only_cluster, only_storage)
    api = env.get_cluster_api()
    cluster = api.get_cluster_name(node)
    node = get_node(api, cluster, node).name
    with ClusterLease(env, cluster):
        exit_maintenance(
            env,
            cluster,
            node,
            resume=not only_storage,
            storage=not only_cluster,
        )
    return get_node_maintenance_state(api, cluster, node)


def get_maintenance_state(
    env: LibraryEnvironment,
    node_names: StringCollection = (),
    cluster_name: Optional[str] = None,
) -> List[NodeMaintenanceStateDto]:
    """
    Return maintenance state of the specified nodes. If no node is specified,
    return state of all nodes of the specified cluster.

    node_names -- names of nodes
    cluster_name -- name of the cluster the nodes are members of, it is
        looked up for each node if not specified
    """
    api = env.get_cluster_api()
    if not node_names:
        if not cluster_name:
            return []
        return [
            get_node_maintenance_state(api, cluster_name, node_info.name)
            for node_info in api.get_nodes(cluster_name)
        ]
    node_to_cluster: Dict[str, str] = {}
    for node in node_names:
        node_to_cluster[node] = cluster_name or api.get_cluster_name(node)
    return [
        get_node_maintenance_state(api, cluster, node)
        for node, cluster in node_to_cluster.items()
    ]
