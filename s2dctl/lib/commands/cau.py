from typing import Optional

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.maintenance_dto import NodeMaintenanceStateDto
from s2dctl.common.reports.item import ReportItem
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.health import wait_for_volumes_healthy
from s2dctl.lib.lease import ClusterLease
from s2dctl.lib.maintenance import (
    enter_maintenance,
    exit_maintenance,
    get_node,
    get_node_maintenance_state,
    get_nodes_in_storage_maintenance,
)


def pre_update(
    env: LibraryEnvironment, node: str, timeout: Optional[int] = None
) -> NodeMaintenanceStateDto:
    """
    Cluster-Aware Updating pre-update hook: put the node into maintenance
    before it gets patched

    node -- name of the node to be patched
    timeout -- seconds to wait for volumes to become healthy and for the node
        to drain, defaults are settings.health_timeout and
        settings.drain_timeout
    """
    api = env.get_cluster_api()
    cluster = api.get_cluster_name(node)
    node = get_node(api, cluster, node).name

    if not any(
        resource.resource_type in settings.witness_resource_types
        for resource in api.get_resources(cluster)
    ):
        raise LibraryError(
            ReportItem.error(reports.messages.WitnessNotConfigured(cluster))
        )

    health_timeout = settings.health_timeout if timeout is None else timeout
    drain_timeout = settings.drain_timeout if timeout is None else timeout
    with ClusterLease(env, cluster, wait_time=health_timeout + drain_timeout):
        wait_for_volumes_healthy(env, cluster, health_timeout)
        other_nodes = get_nodes_in_storage_maintenance(
            api, cluster, exclude_node=node
        )
        if other_nodes:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.OtherNodesInStorageMaintenance(
                        node, other_nodes
                    )
                )
            )
        enter_maintenance(env, cluster, node, drain_timeout=drain_timeout)
    return get_node_maintenance_state(api, cluster, node)


def post_update(
    env: LibraryEnvironment, node: str, timeout: Optional[int] = None
) -> NodeMaintenanceStateDto:
    """
    Cluster-Aware Updating post-update hook: take the patched node out of
    maintenance and wait for storage repair jobs to make volumes healthy

    node -- name of the patched node
    timeout -- seconds to wait for volumes to become healthy
    """
    api = env.get_cluster_api()
    cluster = api.get_cluster_name(node)
    node = get_node(api, cluster, node).name
    health_timeout = settings.health_timeout if timeout is None else timeout
    with ClusterLease(env, cluster, wait_time=health_timeout):
        exit_maintenance(env, cluster, node)
        wait_for_volumes_healthy(env, cluster, health_timeout)
    return get_node_maintenance_state(api, cluster, node)
