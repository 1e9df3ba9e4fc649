powershell_exec = "powershell.exe"
powershell_options = ["-NoLogo", "-NoProfile", "-NonInteractive", "-Command"]

s2dctl_version = "0.3.1"

cluster_service_name = "ClusSvc"
cluster_service_description = "Cluster Service"
# ClusterResource.ResourceType values
resource_type_virtual_machine = "Virtual Machine"
resource_type_storage_pool = "Storage Pool"
witness_resource_types = (
    "File Share Witness",
    "Cloud Witness",
    "Disk Witness",
)
# host group of the cluster core resources
cluster_core_group = "Cluster Group"

# seconds
storage_maintenance_settle_time = 5
drain_poll_interval = 5
drain_timeout = 3600
health_poll_interval = 30
health_timeout = 4 * 3600
node_up_poll_interval = 5
node_up_timeout = 1800

lease_group_name = "s2dctl-maintenance-lease"
lease_ttl = 4 * 3600
lease_description_separator = "|"

default_request_timeout = 60
default_lease_holder = "s2dctl"

# environment variables passed from the caller to powershell processes
runner_inherited_env_vars = (
    "PATH",
    "PSModulePath",
    "SystemRoot",
    "SystemDrive",
    "TEMP",
    "TMP",
    "USERPROFILE",
    "USERDOMAIN",
    "USERNAME",
)
