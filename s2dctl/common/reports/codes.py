from .types import (
    ForceCode as F,
    MessageCode as M,
)

SKIP_HEALTH_CHECK = F("SKIP_HEALTH_CHECK")

CLUSTER_API_COMMAND_FAILED = M("CLUSTER_API_COMMAND_FAILED")
CLUSTER_API_INVALID_OUTPUT = M("CLUSTER_API_INVALID_OUTPUT")
CLUSTER_OPERATION_FAILED = M("CLUSTER_OPERATION_FAILED")
CLUSTER_QUORUM_FORCED = M("CLUSTER_QUORUM_FORCED")
CLUSTER_RESOURCE_STARTED = M("CLUSTER_RESOURCE_STARTED")
CLUSTER_RESOURCE_STOPPED = M("CLUSTER_RESOURCE_STOPPED")
CLUSTER_STEP_DECLINED = M("CLUSTER_STEP_DECLINED")
CLUSTER_STOPPED = M("CLUSTER_STOPPED")
LEASE_CLEARED = M("LEASE_CLEARED")
LEASE_EXPIRED_TAKEN_OVER = M("LEASE_EXPIRED_TAKEN_OVER")
LEASE_HELD = M("LEASE_HELD")
LEASE_LOST = M("LEASE_LOST")
LEASE_NOT_HELD = M("LEASE_NOT_HELD")
LEASE_RELEASE_FAILED = M("LEASE_RELEASE_FAILED")
MAINTENANCE_ROLLBACK_FAILED = M("MAINTENANCE_ROLLBACK_FAILED")
MAINTENANCE_ROLLBACK_STARTED = M("MAINTENANCE_ROLLBACK_STARTED")
MUTUALLY_EXCLUSIVE_OPTIONS = M("MUTUALLY_EXCLUSIVE_OPTIONS")
NODE_ALREADY_PAUSED = M("NODE_ALREADY_PAUSED")
NODE_ALREADY_UP = M("NODE_ALREADY_UP")
NODE_BUILD_NOT_IN_UPDATE_CHAIN = M("NODE_BUILD_NOT_IN_UPDATE_CHAIN")
NODE_DRAIN_FAILED = M("NODE_DRAIN_FAILED")
NODE_IN_UNEXPECTED_STATE = M("NODE_IN_UNEXPECTED_STATE")
NODE_NOT_FOUND = M("NODE_NOT_FOUND")
NODE_PAUSED = M("NODE_PAUSED")
NODE_RESUMED = M("NODE_RESUMED")
OPERATION_TIMED_OUT = M("OPERATION_TIMED_OUT")
OTHER_NODES_IN_STORAGE_MAINTENANCE = M("OTHER_NODES_IN_STORAGE_MAINTENANCE")
PATCH_METADATA_DOWNLOAD_FAILED = M("PATCH_METADATA_DOWNLOAD_FAILED")
PATCH_METADATA_INVALID = M("PATCH_METADATA_INVALID")
RUN_EXTERNAL_PROCESS_ERROR = M("RUN_EXTERNAL_PROCESS_ERROR")
RUN_EXTERNAL_PROCESS_FINISHED = M("RUN_EXTERNAL_PROCESS_FINISHED")
RUN_EXTERNAL_PROCESS_STARTED = M("RUN_EXTERNAL_PROCESS_STARTED")
RUNNING_WORKLOADS_PRESENT = M("RUNNING_WORKLOADS_PRESENT")
SERVICE_ACTION_SUCCEEDED = M("SERVICE_ACTION_SUCCEEDED")
STORAGE_MAINTENANCE_ALREADY_DISABLED = M("STORAGE_MAINTENANCE_ALREADY_DISABLED")
STORAGE_MAINTENANCE_ALREADY_ENABLED = M("STORAGE_MAINTENANCE_ALREADY_ENABLED")
STORAGE_MAINTENANCE_DISABLED = M("STORAGE_MAINTENANCE_DISABLED")
STORAGE_MAINTENANCE_ENABLED = M("STORAGE_MAINTENANCE_ENABLED")
VOLUMES_UNHEALTHY = M("VOLUMES_UNHEALTHY")
WAITING_FOR_NODES = M("WAITING_FOR_NODES")
WITNESS_NOT_CONFIGURED = M("WITNESS_NOT_CONFIGURED")
