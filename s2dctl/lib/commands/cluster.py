import dataclasses
from typing import (
    Callable,
    List,
    Optional,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.maintenance_dto import (
    ClusterLeaseDto,
    ClusterOperationResultDto,
)
from s2dctl.common.reports import (
    ReportItemList,
    const,
)
from s2dctl.common.reports.item import (
    ReportItem,
    ReportItemContext,
)
from s2dctl.common.types import (
    ClusterNodeState,
    OperationResult,
    ResourceState,
    StringSequence,
)
from s2dctl.lib import health
from s2dctl.lib.cluster_api.interfaces import ClusterManagementInterface
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.lease import (
    ClusterLease,
    get_lease_info,
)
from s2dctl.lib.wait import wait_until

ConfirmCallback = Callable[[str], bool]

OPERATION_SHUTDOWN = "shutdown"
OPERATION_STARTUP = "startup"

STEP_ACQUIRE_LEASE = "acquire lease"
STEP_CHECK_HEALTH = "check volume health"
STEP_CHECK_WORKLOADS = "check running workloads"
STEP_STOP_SHARED_VOLUMES = "stop shared volumes"
STEP_STOP_STORAGE_POOL = "stop storage pool"
STEP_STOP_CLUSTER = "stop cluster"
STEP_STOP_CLUSTER_SERVICE = "stop cluster service"
STEP_START_SEED_NODE = "start seed node"
STEP_GET_CLUSTER = "get cluster"
STEP_START_NODES = "start nodes"
STEP_WAIT_FOR_NODES = "wait for nodes"
STEP_START_STORAGE_POOL = "start storage pool"
STEP_START_SHARED_VOLUMES = "start shared volumes"


class _StepFailed(Exception):
    def __init__(self, step: str, report_list: ReportItemList):
        super().__init__(step, report_list)
        self.step = step
        self.report_list = report_list


class _StepTracker:
    def __init__(
        self, cluster: str, confirm: Optional[ConfirmCallback] = None
    ):
        self._cluster = cluster
        self._confirm = confirm
        self.current = ""

    def start(self, step: str, confirm_text: Optional[str] = None) -> None:
        self.current = step
        if confirm_text and self._confirm and not self._confirm(confirm_text):
            raise LibraryError(
                ReportItem.error(
                    reports.messages.ClusterStepDeclined(self._cluster, step)
                )
            )


def _failed_result(
    env: LibraryEnvironment,
    target: str,
    operation: str,
    step: str,
    report_list: ReportItemList,
) -> ClusterOperationResultDto:
    # several targets may be processed in one run
    context = ReportItemContext(target)
    report_list = [
        dataclasses.replace(
            report_item, context=report_item.context or context
        )
        for report_item in report_list
    ]
    env.report_processor.report_list(report_list)
    env.report_processor.report(
        ReportItem.error(
            reports.messages.ClusterOperationFailed(target, operation, step)
        )
    )
    return ClusterOperationResultDto(
        target=target,
        operation=operation,
        result=OperationResult.FAILED,
        failed_step=step,
        reason="; ".join(
            report_item.message.message
            for report_item in report_list
            if report_item.severity.level == reports.ReportItemSeverity.ERROR
        )
        or None,
    )


def _stop_resources(
    env: LibraryEnvironment,
    api: ClusterManagementInterface,
    cluster: str,
    resource_names: StringSequence,
) -> None:
    for name in resource_names:
        api.stop_resource(cluster, name)
        env.report_processor.report(
            ReportItem.info(
                reports.messages.ClusterResourceStopped(cluster, name)
            )
        )


def _start_resources(
    env: LibraryEnvironment,
    api: ClusterManagementInterface,
    cluster: str,
    resource_names: StringSequence,
) -> None:
    for name in resource_names:
        api.start_resource(cluster, name)
        env.report_processor.report(
            ReportItem.info(
                reports.messages.ClusterResourceStarted(cluster, name)
            )
        )


def _shutdown_cluster(
    env: LibraryEnvironment,
    cluster: str,
    skip_health_check: bool,
    confirm: Optional[ConfirmCallback],
) -> None:
    # pylint: disable=too-many-locals
    api = env.get_cluster_api()
    step = _StepTracker(cluster, confirm)
    lease = ClusterLease(env, cluster)
    try:
        step.start(STEP_ACQUIRE_LEASE)
        lease.acquire()

        step.start(STEP_CHECK_HEALTH)
        report_list = health.check_volumes_healthy(
            api,
            cluster,
            force_flags=(
                [reports.codes.SKIP_HEALTH_CHECK] if skip_health_check else []
            ),
        )
        if reports.has_errors(report_list):
            raise LibraryError(*report_list)
        env.report_processor.report_list(report_list)

        step.start(STEP_CHECK_WORKLOADS)
        resource_list = api.get_resources(cluster)
        running_list = sorted(
            resource.name
            for resource in resource_list
            if resource.resource_type == settings.resource_type_virtual_machine
            and resource.state
            in (ResourceState.ONLINE, ResourceState.PENDING)
        )
        if running_list:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.RunningWorkloadsPresent(
                        cluster, running_list
                    )
                )
            )

        step.start(
            STEP_STOP_SHARED_VOLUMES,
            (
                f"All cluster shared volumes of cluster '{cluster}' will be "
                "stopped."
            ),
        )
        _stop_resources(
            env,
            api,
            cluster,
            [
                volume.name
                for volume in api.get_shared_volumes(cluster)
                if volume.state != ResourceState.OFFLINE
            ],
        )

        step.start(
            STEP_STOP_STORAGE_POOL,
            f"The storage pool of cluster '{cluster}' will be stopped.",
        )
        _stop_resources(
            env,
            api,
            cluster,
            [
                resource.name
                for resource in api.get_resources(cluster)
                if resource.resource_type == settings.resource_type_storage_pool
                and resource.state != ResourceState.OFFLINE
            ],
        )

        step.start(
            STEP_STOP_CLUSTER,
            (
                f"Cluster '{cluster}' will be stopped and its cluster "
                "service disabled on all nodes."
            ),
        )
        # nodes cannot be queried once the cluster is stopped
        node_list = api.get_nodes(cluster)
        # the lease lives in the cluster, it is gone once the cluster stops
        lease.release()
        api.stop_cluster(cluster)
        env.report_processor.report(
            ReportItem.info(reports.messages.ClusterStopped(cluster))
        )

        step.start(STEP_STOP_CLUSTER_SERVICE)
        for node_info in node_list:
            api.stop_service(node_info.name, settings.cluster_service_name)
            env.report_processor.report(
                ReportItem.info(
                    reports.messages.ServiceActionSucceeded(
                        const.SERVICE_ACTION_STOP,
                        settings.cluster_service_description,
                        node_info.name,
                    )
                )
            )
            api.disable_service(node_info.name, settings.cluster_service_name)
            env.report_processor.report(
                ReportItem.info(
                    reports.messages.ServiceActionSucceeded(
                        const.SERVICE_ACTION_DISABLE,
                        settings.cluster_service_description,
                        node_info.name,
                    )
                )
            )
    except LibraryError as e:
        raise _StepFailed(step.current, list(e.args)) from e
    finally:
        lease.release()


def shutdown(
    env: LibraryEnvironment,
    cluster_names: StringSequence,
    skip_health_check: bool = False,
    confirm: Optional[ConfirmCallback] = None,
) -> List[ClusterOperationResultDto]:
    """
    Shut down clusters for offline maintenance: stop cluster shared volumes,
    the storage pool, the cluster and disable the cluster service on all
    nodes. A failure stops processing of the failed cluster only.

    cluster_names -- clusters to shut down
    skip_health_check -- proceed even if some volumes are not healthy
    confirm -- called with a description of each destructive step, the
        step is declined if it returns False
    """
    result_list = []
    for cluster in cluster_names:
        try:
            _shutdown_cluster(env, cluster, skip_health_check, confirm)
            result_list.append(
                ClusterOperationResultDto(
                    target=cluster,
                    operation=OPERATION_SHUTDOWN,
                    result=OperationResult.SUCCEEDED,
                )
            )
        except _StepFailed as e:
            result_list.append(
                _failed_result(
                    env, cluster, OPERATION_SHUTDOWN, e.step, e.report_list
                )
            )
    return result_list


def _all_nodes_up(api: ClusterManagementInterface, cluster: str) -> bool:
    return all(
        node_info.state == ClusterNodeState.UP
        for node_info in api.get_nodes(cluster)
    )


def _start_cluster_service(
    env: LibraryEnvironment, node: str, fix_quorum: bool = False
) -> None:
    api = env.get_cluster_api()
    api.enable_service(node, settings.cluster_service_name)
    env.report_processor.report(
        ReportItem.info(
            reports.messages.ServiceActionSucceeded(
                const.SERVICE_ACTION_ENABLE,
                settings.cluster_service_description,
                node,
            )
        )
    )
    if fix_quorum:
        api.start_cluster_node(node, fix_quorum=True)
        env.report_processor.report(
            ReportItem.warning(reports.messages.ClusterQuorumForced(node))
        )
    else:
        api.start_service(node, settings.cluster_service_name)
    env.report_processor.report(
        ReportItem.info(
            reports.messages.ServiceActionSucceeded(
                const.SERVICE_ACTION_START,
                settings.cluster_service_description,
                node,
            )
        )
    )


def _startup_cluster(
    env: LibraryEnvironment, seed_node: str, timeout: Optional[int]
) -> None:
    api = env.get_cluster_api()
    step = _StepTracker(seed_node)
    node_up_timeout = settings.node_up_timeout if timeout is None else timeout
    try:
        step.start(STEP_START_SEED_NODE)
        if not api.is_service_running(seed_node, settings.cluster_service_name):
            # the other nodes are still down, the seed node cannot have quorum
            _start_cluster_service(env, seed_node, fix_quorum=True)

        step.start(STEP_GET_CLUSTER)
        cluster = api.get_cluster_name(seed_node)

        step.start(STEP_ACQUIRE_LEASE)
        with ClusterLease(env, cluster, wait_time=node_up_timeout):
            step.start(STEP_START_NODES)
            for node_info in api.get_nodes(cluster):
                if node_info.state == ClusterNodeState.DOWN:
                    _start_cluster_service(env, node_info.name)

            step.start(STEP_WAIT_FOR_NODES)
            not_up_list = sorted(
                node_info.name
                for node_info in api.get_nodes(cluster)
                if node_info.state != ClusterNodeState.UP
            )
            if not_up_list:
                env.report_processor.report(
                    ReportItem.info(
                        reports.messages.WaitingForNodes(cluster, not_up_list)
                    )
                )
                wait_until(
                    lambda: _all_nodes_up(api, cluster),
                    node_up_timeout,
                    settings.node_up_poll_interval,
                    "cluster nodes to come up",
                    cluster,
                )

            step.start(STEP_START_STORAGE_POOL)
            _start_resources(
                env,
                api,
                cluster,
                [
                    resource.name
                    for resource in api.get_resources(cluster)
                    if resource.resource_type
                    == settings.resource_type_storage_pool
                    and resource.state != ResourceState.ONLINE
                ],
            )

            step.start(STEP_START_SHARED_VOLUMES)
            _start_resources(
                env,
                api,
                cluster,
                [
                    volume.name
                    for volume in api.get_shared_volumes(cluster)
                    if volume.state != ResourceState.ONLINE
                ],
            )
    except LibraryError as e:
        raise _StepFailed(step.current, list(e.args)) from e


def startup(
    env: LibraryEnvironment,
    seed_nodes: StringSequence,
    timeout: Optional[int] = None,
) -> List[ClusterOperationResultDto]:
    """
    Start clusters shut down by the shutdown command. The cluster service is
    force started on the seed node, then on all other nodes. Once all nodes
    are up, the storage pool and cluster shared volumes are started.

    seed_nodes -- one node of each cluster to be started
    timeout -- seconds to wait for all nodes to come up
    """
    result_list = []
    for seed_node in seed_nodes:
        try:
            _startup_cluster(env, seed_node, timeout)
            result_list.append(
                ClusterOperationResultDto(
                    target=seed_node,
                    operation=OPERATION_STARTUP,
                    result=OperationResult.SUCCEEDED,
                )
            )
        except _StepFailed as e:
            result_list.append(
                _failed_result(
                    env, seed_node, OPERATION_STARTUP, e.step, e.report_list
                )
            )
    return result_list


def get_lease(env: LibraryEnvironment, cluster: str) -> ClusterLeaseDto:
    """
    Return the maintenance lease of the cluster
    """
    return get_lease_info(env.get_cluster_api(), cluster)


def clear_lease(env: LibraryEnvironment, cluster: str) -> None:
    """
    Remove the maintenance lease of the cluster regardless of its holder
    """
    api = env.get_cluster_api()
    lease_info = get_lease_info(api, cluster)
    if lease_info.holder is None:
        env.report_processor.report(
            ReportItem.warning(reports.messages.LeaseNotHeld(cluster))
        )
        return
    api.remove_group(cluster, settings.lease_group_name)
    env.report_processor.report(
        ReportItem.info(
            reports.messages.LeaseCleared(cluster, lease_info.holder)
        )
    )


def get_unhealthy_volumes(env: LibraryEnvironment, cluster: str) -> List[str]:
    """
    Return names of virtual disks of the cluster which are not healthy
    """
    return health.get_unhealthy_volumes(env.get_cluster_api(), cluster)
