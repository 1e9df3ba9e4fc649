"""
Node maintenance state machine

A node has two independent maintenance axes: the cluster state (paused and
drained or not) and the storage maintenance level of its disks. Entering
maintenance pauses the node first and then enables storage maintenance,
leaving it goes the opposite way. Every read re-queries the cluster.
"""

from typing import (
    List,
    Optional,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.maintenance_dto import NodeMaintenanceStateDto
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.types import (
    ClusterNodeState,
    DrainStatus,
    StorageMaintenanceLevel,
)
from s2dctl.lib.cluster_api.interfaces import ClusterManagementInterface
from s2dctl.lib.cluster_api.types import (
    ClusterNodeInfo,
    PhysicalDiskInfo,
)
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.wait import (
    settle,
    wait_until,
)


def get_storage_maintenance_level(
    disk_list: List[PhysicalDiskInfo],
) -> StorageMaintenanceLevel:
    if not disk_list:
        return StorageMaintenanceLevel.UNKNOWN
    in_maintenance = len([disk for disk in disk_list if disk.in_maintenance])
    if in_maintenance == 0:
        return StorageMaintenanceLevel.UP
    if in_maintenance < len(disk_list):
        return StorageMaintenanceLevel.PARTIAL_MAINTENANCE
    return StorageMaintenanceLevel.IN_MAINTENANCE


def get_node(
    api: ClusterManagementInterface, cluster: str, node: str
) -> ClusterNodeInfo:
    for node_info in api.get_nodes(cluster):
        if node_info.name.lower() == node.lower():
            return node_info
    raise LibraryError(
        ReportItem.error(reports.messages.NodeNotFound(node, cluster))
    )


def get_node_storage_level(
    api: ClusterManagementInterface, cluster: str, node: str
) -> StorageMaintenanceLevel:
    return get_storage_maintenance_level(api.get_physical_disks(cluster, node))


def get_node_maintenance_state(
    api: ClusterManagementInterface, cluster: str, node: str
) -> NodeMaintenanceStateDto:
    node_info = get_node(api, cluster, node)
    return NodeMaintenanceStateDto(
        computer_name=node_info.name,
        cluster_state=node_info.state,
        storage_state=get_node_storage_level(api, cluster, node_info.name),
    )


def get_nodes_in_storage_maintenance(
    api: ClusterManagementInterface, cluster: str, exclude_node: str = ""
) -> List[str]:
    """
    Return names of nodes having at least one disk in maintenance mode
    """
    return sorted(
        node_info.name
        for node_info in api.get_nodes(cluster)
        if node_info.name.lower() != exclude_node.lower()
        and any(
            disk.in_maintenance
            for disk in api.get_physical_disks(cluster, node_info.name)
        )
    )


def _wait_for_drain(
    api: ClusterManagementInterface,
    cluster: str,
    node: str,
    timeout: int,
) -> None:
    def _drained() -> bool:
        drain_status = get_node(api, cluster, node).drain_status
        if drain_status == DrainStatus.FAILED:
            raise LibraryError(
                ReportItem.error(reports.messages.NodeDrainFailed(node))
            )
        return drain_status == DrainStatus.COMPLETED

    wait_until(
        _drained,
        timeout,
        settings.drain_poll_interval,
        "node drain to complete",
        node,
    )


def _report_rollback_failure(
    env: LibraryEnvironment, node: str, error: LibraryError
) -> None:
    env.report_processor.report(
        ReportItem.error(
            reports.messages.MaintenanceRollbackFailed(
                node,
                "; ".join(
                    report_item.message.message for report_item in error.args
                ),
            )
        )
    )


def _rollback(
    env: LibraryEnvironment,
    cluster: str,
    node: str,
    undo_storage: bool,
    undo_pause: bool,
) -> None:
    api = env.get_cluster_api()
    env.report_processor.report(
        ReportItem.warning(reports.messages.MaintenanceRollbackStarted(node))
    )
    if undo_storage:
        try:
            api.disable_storage_maintenance(cluster, node)
            settle(settings.storage_maintenance_settle_time)
            env.report_processor.report(
                ReportItem.info(
                    reports.messages.StorageMaintenanceDisabled(node)
                )
            )
        except LibraryError as e:
            _report_rollback_failure(env, node, e)
    if undo_pause:
        try:
            api.resume_node(cluster, node)
            env.report_processor.report(
                ReportItem.info(reports.messages.NodeResumed(node))
            )
        except LibraryError as e:
            _report_rollback_failure(env, node, e)


def enter_maintenance(
    env: LibraryEnvironment,
    cluster: str,
    node: str,
    pause: bool = True,
    storage: bool = True,
    drain_timeout: Optional[int] = None,
) -> None:
    """
    Pause and drain the node, then enable storage maintenance on its disks.
    If any step fails, changes done by this call are reverted and the
    original error is raised.

    cluster -- name of the cluster the node is a member of
    node -- name of the node
    pause -- pause and drain the node
    storage -- enable storage maintenance mode
    drain_timeout -- seconds to wait for the drain, settings.drain_timeout
        if None
    """
    # pylint: disable=too-many-arguments
    api = env.get_cluster_api()
    paused = False
    storage_touched = False
    try:
        if pause:
            node_info = get_node(api, cluster, node)
            if node_info.state == ClusterNodeState.UP:
                paused = True
                api.suspend_node(cluster, node)
                _wait_for_drain(
                    api,
                    cluster,
                    node,
                    (
                        settings.drain_timeout
                        if drain_timeout is None
                        else drain_timeout
                    ),
                )
                env.report_processor.report(
                    ReportItem.info(reports.messages.NodePaused(node))
                )
            elif node_info.state == ClusterNodeState.PAUSED:
                env.report_processor.report(
                    ReportItem.warning(reports.messages.NodeAlreadyPaused(node))
                )
            else:
                env.report_processor.report(
                    ReportItem.warning(
                        reports.messages.NodeInUnexpectedState(
                            node, node_info.state.value, "pause"
                        )
                    )
                )
        if storage:
            level = get_node_storage_level(api, cluster, node)
            if level == StorageMaintenanceLevel.IN_MAINTENANCE:
                env.report_processor.report(
                    ReportItem.warning(
                        reports.messages.StorageMaintenanceAlreadyEnabled(node)
                    )
                )
            else:
                # a failed enable may leave some of the disks in maintenance
                storage_touched = True
                api.enable_storage_maintenance(cluster, node)
                settle(settings.storage_maintenance_settle_time)
                env.report_processor.report(
                    ReportItem.info(
                        reports.messages.StorageMaintenanceEnabled(node)
                    )
                )
    except LibraryError:
        if paused or storage_touched:
            _rollback(env, cluster, node, storage_touched, paused)
        raise


def exit_maintenance(
    env: LibraryEnvironment,
    cluster: str,
    node: str,
    resume: bool = True,
    storage: bool = True,
) -> None:
    """
    Disable storage maintenance on the node's disks, then resume the node
    with immediate failback of its roles.
    """
    api = env.get_cluster_api()
    if storage:
        level = get_node_storage_level(api, cluster, node)
        if level == StorageMaintenanceLevel.UP:
            env.report_processor.report(
                ReportItem.warning(
                    reports.messages.StorageMaintenanceAlreadyDisabled(node)
                )
            )
        else:
            api.disable_storage_maintenance(cluster, node)
            settle(settings.storage_maintenance_settle_time)
            env.report_processor.report(
                ReportItem.info(
                    reports.messages.StorageMaintenanceDisabled(node)
                )
            )
    if resume:
        node_info = get_node(api, cluster, node)
        if node_info.state == ClusterNodeState.PAUSED:
            api.resume_node(cluster, node)
            env.report_processor.report(
                ReportItem.info(reports.messages.NodeResumed(node))
            )
        elif node_info.state == ClusterNodeState.UP:
            env.report_processor.report(
                ReportItem.warning(reports.messages.NodeAlreadyUp(node))
            )
        else:
            env.report_processor.report(
                ReportItem.warning(
                    reports.messages.NodeInUnexpectedState(
                        node, node_info.state.value, "resume"
                    )
                )
            )
