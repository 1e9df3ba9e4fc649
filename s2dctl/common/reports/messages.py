from dataclasses import dataclass
from typing import (
    List,
    Mapping,
    Optional,
)

from s2dctl.common.str_tools import (
    format_list,
    format_optional,
    format_plural,
)

from . import (
    codes,
    const,
    types,
)
from .item import ReportItemMessage


def _service_action_str(action: types.ServiceAction, suffix: str = "") -> str:
    base = action.lower()
    if not suffix:
        return base
    base = {
        const.SERVICE_ACTION_STOP: "stopp",
        const.SERVICE_ACTION_ENABLE: "enabl",
        const.SERVICE_ACTION_DISABLE: "disabl",
    }.get(action, base)
    return "{0}{1}".format(base, suffix)


@dataclass(frozen=True)
class RunExternalProcessStarted(ReportItemMessage):
    """
    Information about running an external process

    command -- the external process command
    stdin -- passed to the external process via its stdin
    environment -- environment variables for the command
    """

    command: str
    stdin: Optional[str]
    environment: Mapping[str, str]
    _code = codes.RUN_EXTERNAL_PROCESS_STARTED

    @property
    def message(self) -> str:
        return (
            "Running: {command}\nEnvironment:{env_part}\n{stdin_part}"
        ).format(
            command=self.command,
            stdin_part=format_optional(
                self.stdin, "--Debug Input Start--\n{}\n--Debug Input End--\n"
            ),
            env_part=(
                ""
                if not self.environment
                else "\n"
                + "\n".join(
                    [
                        f"  {key}={val}"
                        for key, val in sorted(self.environment.items())
                    ]
                )
            ),
        )


@dataclass(frozen=True)
class RunExternalProcessFinished(ReportItemMessage):
    """
    Information about result of running an external process

    command -- the external process command
    return_value -- external process's return (exit) code
    stdout -- external process's stdout
    stderr -- external process's stderr
    """

    command: str
    return_value: int
    stdout: str
    stderr: str
    _code = codes.RUN_EXTERNAL_PROCESS_FINISHED

    @property
    def message(self) -> str:
        return (
            f"Finished running: {self.command}\n"
            f"Return value: {self.return_value}\n"
            "--Debug Stdout Start--\n"
            f"{self.stdout}\n"
            "--Debug Stdout End--\n"
            "--Debug Stderr Start--\n"
            f"{self.stderr}\n"
            "--Debug Stderr End--\n"
        )


@dataclass(frozen=True)
class RunExternalProcessError(ReportItemMessage):
    """
    Attempt to run an external process failed

    command -- the external process command
    reason -- error description
    """

    command: str
    reason: str
    _code = codes.RUN_EXTERNAL_PROCESS_ERROR

    @property
    def message(self) -> str:
        return f"unable to run command {self.command}: {self.reason}"


@dataclass(frozen=True)
class ClusterApiCommandFailed(ReportItemMessage):
    """
    A call into the cluster management API failed

    operation -- description of the requested operation
    target -- node or cluster the operation was run against
    reason -- error description
    """

    operation: str
    target: str
    reason: str
    _code = codes.CLUSTER_API_COMMAND_FAILED

    @property
    def message(self) -> str:
        return (
            f"Unable to {self.operation} on '{self.target}': {self.reason}"
        )


@dataclass(frozen=True)
class ClusterApiInvalidOutput(ReportItemMessage):
    """
    The cluster management API returned data which cannot be processed

    operation -- description of the requested operation
    reason -- error description
    """

    operation: str
    reason: str
    _code = codes.CLUSTER_API_INVALID_OUTPUT

    @property
    def message(self) -> str:
        return (
            f"Unable to {self.operation}, cluster management API returned "
            f"invalid data: {self.reason}"
        )


@dataclass(frozen=True)
class MutuallyExclusiveOptions(ReportItemMessage):
    """
    Entered options can not coexist

    option_names -- contain entered mutually exclusive options
    """

    option_names: List[str]
    _code = codes.MUTUALLY_EXCLUSIVE_OPTIONS

    @property
    def message(self) -> str:
        return "Only one of {options} can be used".format(
            options=format_list(self.option_names)
        )


@dataclass(frozen=True)
class NodeNotFound(ReportItemMessage):
    """
    Specified node is not a member of the cluster

    node -- specified node
    cluster -- cluster which was searched
    """

    node: str
    cluster: str
    _code = codes.NODE_NOT_FOUND

    @property
    def message(self) -> str:
        return (
            f"Node '{self.node}' does not appear to be a member of cluster "
            f"'{self.cluster}'"
        )


@dataclass(frozen=True)
class VolumesUnhealthy(ReportItemMessage):
    """
    Some virtual disks are not healthy, maintenance must not proceed

    target -- node or cluster the volumes were queried from
    volume_list -- names of unhealthy volumes
    """

    target: str
    volume_list: List[str]
    _code = codes.VOLUMES_UNHEALTHY

    @property
    def message(self) -> str:
        return "Unhealthy {volume} {volumes} found on '{target}'".format(
            volume=format_plural(self.volume_list, "volume"),
            volumes=format_list(self.volume_list),
            target=self.target,
        )


@dataclass(frozen=True)
class RunningWorkloadsPresent(ReportItemMessage):
    """
    Workload resources are still running in the cluster

    cluster -- name of the cluster
    resource_list -- names of running workload resources
    """

    cluster: str
    resource_list: List[str]
    _code = codes.RUNNING_WORKLOADS_PRESENT

    @property
    def message(self) -> str:
        return (
            "Cluster '{cluster}' has running virtual {machine}: {resources}, "
            "stop {them} first"
        ).format(
            cluster=self.cluster,
            machine=format_plural(self.resource_list, "machine"),
            resources=format_list(self.resource_list),
            them=format_plural(self.resource_list, "it", "them"),
        )


@dataclass(frozen=True)
class WitnessNotConfigured(ReportItemMessage):
    """
    The cluster has no quorum witness resource

    cluster -- name of the cluster
    """

    cluster: str
    _code = codes.WITNESS_NOT_CONFIGURED

    @property
    def message(self) -> str:
        return (
            f"Cluster '{self.cluster}' does not have a witness resource "
            "configured, it is not safe to take a node down"
        )


@dataclass(frozen=True)
class OtherNodesInStorageMaintenance(ReportItemMessage):
    """
    Storage of other nodes is in maintenance, another node must not go down

    node -- the node requested to enter maintenance
    node_list -- nodes whose disks are in maintenance
    """

    node: str
    node_list: List[str]
    _code = codes.OTHER_NODES_IN_STORAGE_MAINTENANCE

    @property
    def message(self) -> str:
        return (
            "Unable to put node '{node}' into maintenance, storage of "
            "{_node} {nodes} {_is} in maintenance"
        ).format(
            node=self.node,
            _node=format_plural(self.node_list, "node"),
            nodes=format_list(self.node_list),
            _is=format_plural(self.node_list, "is"),
        )


@dataclass(frozen=True)
class OperationTimedOut(ReportItemMessage):
    """
    Waiting for an operation to finish exceeded the timeout

    operation -- description of what was waited for
    target -- node or cluster
    timeout -- timeout in seconds
    """

    operation: str
    target: str
    timeout: int
    _code = codes.OPERATION_TIMED_OUT

    @property
    def message(self) -> str:
        return (
            f"Timed out after {self.timeout} "
            f"{format_plural(self.timeout, 'second')} waiting for "
            f"{self.operation} on '{self.target}'"
        )


@dataclass(frozen=True)
class NodeDrainFailed(ReportItemMessage):
    """
    Moving roles off a node did not succeed

    node -- the drained node
    """

    node: str
    _code = codes.NODE_DRAIN_FAILED

    @property
    def message(self) -> str:
        return f"Unable to drain roles from node '{self.node}'"


@dataclass(frozen=True)
class NodePaused(ReportItemMessage):
    node: str
    _code = codes.NODE_PAUSED

    @property
    def message(self) -> str:
        return f"Node '{self.node}' paused and drained"


@dataclass(frozen=True)
class NodeResumed(ReportItemMessage):
    node: str
    _code = codes.NODE_RESUMED

    @property
    def message(self) -> str:
        return f"Node '{self.node}' resumed"


@dataclass(frozen=True)
class NodeAlreadyPaused(ReportItemMessage):
    node: str
    _code = codes.NODE_ALREADY_PAUSED

    @property
    def message(self) -> str:
        return f"Node '{self.node}' is already paused"


@dataclass(frozen=True)
class NodeAlreadyUp(ReportItemMessage):
    node: str
    _code = codes.NODE_ALREADY_UP

    @property
    def message(self) -> str:
        return f"Node '{self.node}' is already up"


@dataclass(frozen=True)
class NodeInUnexpectedState(ReportItemMessage):
    """
    A node is in a state which does not allow the requested change

    node -- the node
    state -- current cluster state of the node
    action -- skipped action
    """

    node: str
    state: str
    action: str
    _code = codes.NODE_IN_UNEXPECTED_STATE

    @property
    def message(self) -> str:
        return (
            f"Node '{self.node}' is in state '{self.state}', skipping "
            f"{self.action}"
        )


@dataclass(frozen=True)
class StorageMaintenanceEnabled(ReportItemMessage):
    node: str
    _code = codes.STORAGE_MAINTENANCE_ENABLED

    @property
    def message(self) -> str:
        return f"Storage maintenance mode enabled on node '{self.node}'"


@dataclass(frozen=True)
class StorageMaintenanceDisabled(ReportItemMessage):
    node: str
    _code = codes.STORAGE_MAINTENANCE_DISABLED

    @property
    def message(self) -> str:
        return f"Storage maintenance mode disabled on node '{self.node}'"


@dataclass(frozen=True)
class StorageMaintenanceAlreadyEnabled(ReportItemMessage):
    node: str
    _code = codes.STORAGE_MAINTENANCE_ALREADY_ENABLED

    @property
    def message(self) -> str:
        return f"Storage of node '{self.node}' is already in maintenance"


@dataclass(frozen=True)
class StorageMaintenanceAlreadyDisabled(ReportItemMessage):
    node: str
    _code = codes.STORAGE_MAINTENANCE_ALREADY_DISABLED

    @property
    def message(self) -> str:
        return f"Storage of node '{self.node}' is not in maintenance"


@dataclass(frozen=True)
class MaintenanceRollbackStarted(ReportItemMessage):
    """
    Entering maintenance failed, changes done so far are being reverted

    node -- the node
    """

    node: str
    _code = codes.MAINTENANCE_ROLLBACK_STARTED

    @property
    def message(self) -> str:
        return (
            f"Entering maintenance on node '{self.node}' failed, reverting "
            "changes"
        )


@dataclass(frozen=True)
class MaintenanceRollbackFailed(ReportItemMessage):
    """
    Reverting a partial maintenance entry failed, manual action is required

    node -- the node
    reason -- error description
    """

    node: str
    reason: str
    _code = codes.MAINTENANCE_ROLLBACK_FAILED

    @property
    def message(self) -> str:
        return (
            f"Unable to revert maintenance changes on node '{self.node}', "
            f"the node must be fixed manually: {self.reason}"
        )


@dataclass(frozen=True)
class ClusterResourceStopped(ReportItemMessage):
    cluster: str
    resource: str
    _code = codes.CLUSTER_RESOURCE_STOPPED

    @property
    def message(self) -> str:
        return f"Resource '{self.resource}' stopped in cluster '{self.cluster}'"


@dataclass(frozen=True)
class ClusterResourceStarted(ReportItemMessage):
    cluster: str
    resource: str
    _code = codes.CLUSTER_RESOURCE_STARTED

    @property
    def message(self) -> str:
        return f"Resource '{self.resource}' started in cluster '{self.cluster}'"


@dataclass(frozen=True)
class ClusterStopped(ReportItemMessage):
    cluster: str
    _code = codes.CLUSTER_STOPPED

    @property
    def message(self) -> str:
        return f"Cluster '{self.cluster}' stopped"


@dataclass(frozen=True)
class ServiceActionSucceeded(ReportItemMessage):
    """
    System service action was successful

    action -- successful service action
    service -- service name or description
    node -- node on which service has been requested to start
    """

    action: types.ServiceAction
    service: str
    node: str = ""
    _code = codes.SERVICE_ACTION_SUCCEEDED

    @property
    def message(self) -> str:
        return "{node_prefix}{service} {action}".format(
            action=_service_action_str(self.action, "ed"),
            service=self.service,
            node_prefix=format_optional(self.node, "{0}: "),
        )


@dataclass(frozen=True)
class ClusterQuorumForced(ReportItemMessage):
    """
    Cluster service was started bypassing quorum requirements

    node -- the seed node
    """

    node: str
    _code = codes.CLUSTER_QUORUM_FORCED

    @property
    def message(self) -> str:
        return (
            f"Cluster service on node '{self.node}' started with forced "
            "quorum"
        )


@dataclass(frozen=True)
class WaitingForNodes(ReportItemMessage):
    cluster: str
    node_list: List[str]
    _code = codes.WAITING_FOR_NODES

    @property
    def message(self) -> str:
        return "Waiting for {node} {nodes} of cluster '{cluster}' to be up".format(
            node=format_plural(self.node_list, "node"),
            nodes=format_list(self.node_list),
            cluster=self.cluster,
        )


@dataclass(frozen=True)
class ClusterStepDeclined(ReportItemMessage):
    """
    The operator did not confirm a step of a cluster-wide operation

    cluster -- name of the cluster
    step -- description of the declined step
    """

    cluster: str
    step: str
    _code = codes.CLUSTER_STEP_DECLINED

    @property
    def message(self) -> str:
        return f"Step '{self.step}' declined for cluster '{self.cluster}'"


@dataclass(frozen=True)
class ClusterOperationFailed(ReportItemMessage):
    """
    A cluster-wide operation did not finish, completed steps are not reverted

    target -- cluster or seed node
    operation -- shutdown or startup
    step -- the step which failed
    """

    target: str
    operation: str
    step: str
    _code = codes.CLUSTER_OPERATION_FAILED

    @property
    def message(self) -> str:
        return (
            f"Cluster {self.operation} of '{self.target}' failed at step "
            f"'{self.step}', completed steps have not been reverted"
        )


@dataclass(frozen=True)
class LeaseHeld(ReportItemMessage):
    """
    Another invocation holds the maintenance lease of the cluster

    cluster -- name of the cluster
    holder -- identification of the lease holder
    expires -- expiration time of the lease
    """

    cluster: str
    holder: str
    expires: str
    _code = codes.LEASE_HELD

    @property
    def message(self) -> str:
        return (
            f"Cluster '{self.cluster}' is locked for maintenance by "
            f"'{self.holder}' until {self.expires}"
        )


@dataclass(frozen=True)
class LeaseExpiredTakenOver(ReportItemMessage):
    cluster: str
    holder: str
    expires: str
    _code = codes.LEASE_EXPIRED_TAKEN_OVER

    @property
    def message(self) -> str:
        return (
            f"Maintenance lease of cluster '{self.cluster}' held by "
            f"'{self.holder}' expired at {self.expires}, taking it over"
        )


@dataclass(frozen=True)
class LeaseLost(ReportItemMessage):
    """
    The maintenance lease expired while the operation was running and it is
    not held by this invocation anymore

    cluster -- name of the cluster
    holder -- current holder of the lease, None if there is no lease
    """

    cluster: str
    holder: Optional[str]
    _code = codes.LEASE_LOST

    @property
    def message(self) -> str:
        holder = format_optional(self.holder, ", it is held by '{}' now")
        return (
            f"Maintenance lease of cluster '{self.cluster}' was lost while "
            f"the operation was running{holder}, not removing it"
        )


@dataclass(frozen=True)
class LeaseReleaseFailed(ReportItemMessage):
    """
    The maintenance lease could not be removed from the cluster

    cluster -- name of the cluster
    reason -- error description
    """

    cluster: str
    reason: str
    _code = codes.LEASE_RELEASE_FAILED

    @property
    def message(self) -> str:
        return (
            f"Unable to release maintenance lease of cluster "
            f"'{self.cluster}': {self.reason}"
        )


@dataclass(frozen=True)
class LeaseCleared(ReportItemMessage):
    cluster: str
    holder: str
    _code = codes.LEASE_CLEARED

    @property
    def message(self) -> str:
        return (
            f"Maintenance lease of cluster '{self.cluster}' held by "
            f"'{self.holder}' removed"
        )


@dataclass(frozen=True)
class LeaseNotHeld(ReportItemMessage):
    cluster: str
    _code = codes.LEASE_NOT_HELD

    @property
    def message(self) -> str:
        return f"Cluster '{self.cluster}' has no maintenance lease"


@dataclass(frozen=True)
class PatchMetadataDownloadFailed(ReportItemMessage):
    url: str
    reason: str
    _code = codes.PATCH_METADATA_DOWNLOAD_FAILED

    @property
    def message(self) -> str:
        return f"Unable to download update metadata from '{self.url}': {self.reason}"


@dataclass(frozen=True)
class PatchMetadataInvalid(ReportItemMessage):
    url: str
    reason: str
    _code = codes.PATCH_METADATA_INVALID

    @property
    def message(self) -> str:
        return f"Update metadata from '{self.url}' are not valid: {self.reason}"


@dataclass(frozen=True)
class NodeBuildNotInUpdateChain(ReportItemMessage):
    """
    Build of the node operating system is not listed in the update metadata

    node -- the node
    build -- build reported by the node
    """

    node: str
    build: str
    _code = codes.NODE_BUILD_NOT_IN_UPDATE_CHAIN

    @property
    def message(self) -> str:
        return (
            f"Build '{self.build}' of node '{self.node}' is not listed in the "
            "update metadata, unable to determine its patch level"
        )
