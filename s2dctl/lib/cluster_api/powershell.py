from typing import (
    Dict,
    List,
    Optional,
)

from lxml import etree

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.tools import xml_fromstring
from s2dctl.common.types import (
    ClusterNodeState,
    DrainStatus,
    HealthStatus,
    ResourceState,
    str_to_enum,
)
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.external import CommandRunner

from .interfaces import ClusterManagementInterface
from .types import (
    ClusterGroupInfo,
    ClusterNodeInfo,
    ClusterResourceInfo,
    PhysicalDiskInfo,
    VirtualDiskInfo,
)

_ObjectProperties = Dict[str, str]


def quote(value: str) -> str:
    """
    Quote a value as a PowerShell single-quoted string literal
    """
    return "'{0}'".format(value.replace("'", "''"))


def _select_to_xml(*properties: str) -> str:
    # multi-valued properties are joined by commas
    return "Select-Object {0} | ConvertTo-Xml -As String -Depth 2".format(
        ",".join(
            "@{{n='{0}';e={{$_.{0} -join ','}}}}".format(prop)
            for prop in properties
        )
    )


def _split_status(value: str) -> tuple[str, ...]:
    return tuple(
        status.strip() for status in value.split(",") if status.strip()
    )


def parse_objects(xml: str) -> List[_ObjectProperties]:
    """
    Parse output of ConvertTo-Xml into a list of property dictionaries

    xml -- <Objects><Object><Property Name="...">value</Property>...
    """
    dom = xml_fromstring(xml)
    object_list = []
    for obj in dom.xpath("/Objects/Object"):
        properties = {}
        for prop in obj.xpath("./Property[@Name]"):
            properties[str(prop.get("Name"))] = (prop.text or "").strip()
        object_list.append(properties)
    return object_list


class PowerShellClusterManager(ClusterManagementInterface):
    """
    Drives the FailoverClusters and Storage PowerShell modules through
    an external powershell process.
    """

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    def _run(self, operation: str, target: str, script: str) -> str:
        stdout, stderr, retval = self._runner.run(
            [settings.powershell_exec]
            + settings.powershell_options
            + [
                "$ErrorActionPreference = 'Stop'; "
                "$ProgressPreference = 'SilentlyContinue'; " + script
            ]
        )
        if retval != 0:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.ClusterApiCommandFailed(
                        operation,
                        target,
                        "\n".join(
                            msg
                            for msg in (stderr.strip(), stdout.strip())
                            if msg
                        ),
                    )
                )
            )
        return stdout

    def _query(
        self, operation: str, target: str, script: str
    ) -> List[_ObjectProperties]:
        stdout = self._run(operation, target, script)
        if not stdout.strip():
            return []
        try:
            return parse_objects(stdout)
        except etree.XMLSyntaxError as e:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.ClusterApiInvalidOutput(operation, str(e))
                )
            ) from e

    def get_cluster_name(self, node: str) -> str:
        object_list = self._query(
            "get cluster",
            node,
            "Get-Cluster -Name {node} | {select}".format(
                node=quote(node), select=_select_to_xml("Name")
            ),
        )
        if not object_list or not object_list[0].get("Name"):
            raise LibraryError(
                ReportItem.error(
                    reports.messages.ClusterApiInvalidOutput(
                        "get cluster", "cluster name not found"
                    )
                )
            )
        return object_list[0]["Name"]

    def get_nodes(self, cluster: str) -> List[ClusterNodeInfo]:
        return [
            ClusterNodeInfo(
                name=obj.get("Name", ""),
                state=str_to_enum(ClusterNodeState, obj.get("State")),
                drain_status=str_to_enum(DrainStatus, obj.get("DrainStatus")),
            )
            for obj in self._query(
                "get cluster nodes",
                cluster,
                "Get-ClusterNode -Cluster {cluster} | {select}".format(
                    cluster=quote(cluster),
                    select=_select_to_xml("Name", "State", "DrainStatus"),
                ),
            )
        ]

    def get_virtual_disks(self, target: str) -> List[VirtualDiskInfo]:
        return [
            VirtualDiskInfo(
                name=obj.get("FriendlyName", ""),
                health_status=str_to_enum(
                    HealthStatus, obj.get("HealthStatus")
                ),
                operational_status=_split_status(
                    obj.get("OperationalStatus", "")
                ),
            )
            for obj in self._query(
                "get virtual disks",
                target,
                "Get-VirtualDisk -CimSession {target} | {select}".format(
                    target=quote(target),
                    select=_select_to_xml(
                        "FriendlyName", "HealthStatus", "OperationalStatus"
                    ),
                ),
            )
        ]

    def get_physical_disks(
        self, cluster: str, node: str
    ) -> List[PhysicalDiskInfo]:
        script = (
            "Get-StorageNode -CimSession {cluster} "
            "| Where-Object {{ $_.Name -eq {node} -or "
            "$_.Name -like ({node} + '.*') }} "
            "| Get-PhysicalDisk -PhysicallyConnected -CimSession {cluster} "
            "| {select}"
        ).format(
            cluster=quote(cluster),
            node=quote(node),
            select=_select_to_xml("FriendlyName", "OperationalStatus"),
        )
        return [
            PhysicalDiskInfo(
                name=obj.get("FriendlyName", ""),
                node=node,
                operational_status=_split_status(
                    obj.get("OperationalStatus", "")
                ),
            )
            for obj in self._query("get physical disks", node, script)
        ]

    def _get_resources(
        self, operation: str, cluster: str, cmdlet: str
    ) -> List[ClusterResourceInfo]:
        return [
            ClusterResourceInfo(
                name=obj.get("Name", ""),
                resource_type=obj.get("ResourceType", ""),
                state=str_to_enum(ResourceState, obj.get("State")),
                owner_group=obj.get("OwnerGroup") or None,
            )
            for obj in self._query(
                operation,
                cluster,
                "{cmdlet} -Cluster {cluster} | {select}".format(
                    cmdlet=cmdlet,
                    cluster=quote(cluster),
                    select=_select_to_xml(
                        "Name", "ResourceType", "State", "OwnerGroup"
                    ),
                ),
            )
        ]

    def get_resources(self, cluster: str) -> List[ClusterResourceInfo]:
        return self._get_resources(
            "get cluster resources", cluster, "Get-ClusterResource"
        )

    def get_shared_volumes(self, cluster: str) -> List[ClusterResourceInfo]:
        return self._get_resources(
            "get cluster shared volumes", cluster, "Get-ClusterSharedVolume"
        )

    def suspend_node(self, cluster: str, node: str) -> None:
        self._run(
            "suspend node",
            node,
            "Suspend-ClusterNode -Cluster {cluster} -Name {node} -Drain "
            "| Out-Null".format(cluster=quote(cluster), node=quote(node)),
        )

    def resume_node(self, cluster: str, node: str) -> None:
        self._run(
            "resume node",
            node,
            "Resume-ClusterNode -Cluster {cluster} -Name {node} "
            "-Failback Immediate | Out-Null".format(
                cluster=quote(cluster), node=quote(node)
            ),
        )

    def _storage_scale_unit(self, cluster: str, node: str) -> str:
        return (
            "Get-StorageFaultDomain -CimSession {cluster} "
            "-Type StorageScaleUnit "
            "| Where-Object {{ $_.FriendlyName -eq {node} }}"
        ).format(cluster=quote(cluster), node=quote(node))

    def enable_storage_maintenance(self, cluster: str, node: str) -> None:
        self._run(
            "enable storage maintenance",
            node,
            "{units} | Enable-StorageMaintenanceMode -CimSession {cluster}".format(
                units=self._storage_scale_unit(cluster, node),
                cluster=quote(cluster),
            ),
        )

    def disable_storage_maintenance(self, cluster: str, node: str) -> None:
        self._run(
            "disable storage maintenance",
            node,
            "{units} | Disable-StorageMaintenanceMode -CimSession {cluster}".format(
                units=self._storage_scale_unit(cluster, node),
                cluster=quote(cluster),
            ),
        )

    def start_resource(self, cluster: str, resource: str) -> None:
        self._run(
            "start cluster resource",
            resource,
            "Start-ClusterResource -Cluster {cluster} -Name {name} "
            "| Out-Null".format(cluster=quote(cluster), name=quote(resource)),
        )

    def stop_resource(self, cluster: str, resource: str) -> None:
        self._run(
            "stop cluster resource",
            resource,
            "Stop-ClusterResource -Cluster {cluster} -Name {name} "
            "| Out-Null".format(cluster=quote(cluster), name=quote(resource)),
        )

    def stop_cluster(self, cluster: str) -> None:
        self._run(
            "stop cluster",
            cluster,
            "Stop-Cluster -Cluster {cluster} -Force | Out-Null".format(
                cluster=quote(cluster)
            ),
        )

    def start_cluster_node(self, node: str, fix_quorum: bool = False) -> None:
        self._run(
            "start cluster node",
            node,
            "Start-ClusterNode -Name {node}{fix_quorum} | Out-Null".format(
                node=quote(node), fix_quorum=" -FixQuorum" if fix_quorum else ""
            ),
        )

    def _invoke_on_node(
        self, operation: str, node: str, script: str
    ) -> str:
        return self._run(
            operation,
            node,
            "Invoke-Command -ComputerName {node} -ScriptBlock {{ {script} }}".format(
                node=quote(node), script=script
            ),
        )

    def is_service_running(self, node: str, service: str) -> bool:
        stdout = self._invoke_on_node(
            "get service status",
            node,
            "(Get-Service -Name {service}).Status.ToString()".format(
                service=quote(service)
            ),
        )
        return stdout.strip().lower() == "running"

    def start_service(self, node: str, service: str) -> None:
        self._invoke_on_node(
            "start service",
            node,
            "Start-Service -Name {0}".format(quote(service)),
        )

    def stop_service(self, node: str, service: str) -> None:
        self._invoke_on_node(
            "stop service",
            node,
            "Stop-Service -Name {0} -Force".format(quote(service)),
        )

    def _set_service_startup(
        self, node: str, service: str, startup_type: str
    ) -> None:
        self._invoke_on_node(
            "set service startup type",
            node,
            "Set-Service -Name {0} -StartupType {1}".format(
                quote(service), startup_type
            ),
        )

    def enable_service(self, node: str, service: str) -> None:
        self._set_service_startup(node, service, "Automatic")

    def disable_service(self, node: str, service: str) -> None:
        self._set_service_startup(node, service, "Disabled")

    def get_group(self, cluster: str, group: str) -> Optional[ClusterGroupInfo]:
        object_list = self._query(
            "get cluster group",
            cluster,
            (
                "Get-ClusterGroup -Cluster {cluster} "
                "| Where-Object {{ $_.Name -eq {group} }} | {select}"
            ).format(
                cluster=quote(cluster),
                group=quote(group),
                select=_select_to_xml("Name", "Description"),
            ),
        )
        if not object_list:
            return None
        return ClusterGroupInfo(
            name=object_list[0].get("Name", group),
            description=object_list[0].get("Description", ""),
        )

    def create_group(self, cluster: str, group: str, description: str) -> bool:
        # Add-ClusterGroup fails if a concurrent invocation has created the
        # group since the check, that is reported as an existing group too
        exists = (
            "(Get-ClusterGroup -Cluster {cluster} "
            "| Where-Object {{ $_.Name -eq {group} }})"
        ).format(cluster=quote(cluster), group=quote(group))
        stdout = self._run(
            "create cluster group",
            cluster,
            (
                "if {exists} {{ 'exists' }} "
                "else {{ try {{ $g = Add-ClusterGroup -Cluster {cluster} "
                "-Name {group} }} "
                "catch {{ if {exists} {{ 'exists'; return }} throw }}; "
                "$g.Description = {description}; 'created' }}"
            ).format(
                exists=exists,
                cluster=quote(cluster),
                group=quote(group),
                description=quote(description),
            ),
        )
        return stdout.strip() == "created"

    def remove_group(self, cluster: str, group: str) -> None:
        self._run(
            "remove cluster group",
            cluster,
            (
                "Get-ClusterGroup -Cluster {cluster} "
                "| Where-Object {{ $_.Name -eq {group} }} "
                "| Remove-ClusterGroup -RemoveResources -Force"
            ).format(cluster=quote(cluster), group=quote(group)),
        )

    def get_os_build(self, node: str) -> str:
        stdout = self._invoke_on_node(
            "get os build",
            node,
            (
                "$v = Get-ItemProperty "
                "'HKLM:\\SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion'; "
                "'{0}.{1}' -f $v.CurrentBuildNumber, $v.UBR"
            ),
        )
        build = stdout.strip()
        if not build:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.ClusterApiInvalidOutput(
                        "get os build", "empty build number"
                    )
                )
            )
        return build

