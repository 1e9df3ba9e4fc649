from unittest import TestCase

from s2dctl.common import reports
from s2dctl.common.types import (
    ClusterNodeState,
    DrainStatus,
    HealthStatus,
    ResourceState,
)
from s2dctl.lib.cluster_api import powershell
from s2dctl.lib.cluster_api.types import (
    ClusterGroupInfo,
    ClusterNodeInfo,
    ClusterResourceInfo,
    PhysicalDiskInfo,
    VirtualDiskInfo,
)
from s2dctl.lib.errors import LibraryError

from s2dctl_test.tools import fixture
from s2dctl_test.tools.assertions import assert_raise_library_error
from s2dctl_test.tools.custom_mock import get_runner_mock


def _objects(*object_list):
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n<Objects>'
        + "".join(
            "<Object>"
            + "".join(
                f'<Property Name="{name}">{value}</Property>'
                for name, value in obj.items()
            )
            + "</Object>"
            for obj in object_list
        )
        + "</Objects>"
    )


class Quote(TestCase):
    def test_plain(self):
        self.assertEqual("'node1'", powershell.quote("node1"))

    def test_single_quote(self):
        self.assertEqual("'it''s'", powershell.quote("it's"))


class ParseObjects(TestCase):
    def test_success(self):
        self.assertEqual(
            [
                {"Name": "node1", "State": "Up"},
                {"Name": "node2", "State": ""},
            ],
            powershell.parse_objects(
                _objects(
                    {"Name": "node1", "State": " Up\n"},
                    {"Name": "node2", "State": ""},
                )
            ),
        )

    def test_property_without_name(self):
        self.assertEqual(
            [{}],
            powershell.parse_objects(
                "<Objects><Object><Property>x</Property></Object></Objects>"
            ),
        )

    def test_no_objects(self):
        self.assertEqual([], powershell.parse_objects("<Objects/>"))


class PowerShellClusterManagerTest(TestCase):
    def setUp(self):
        self.runner = get_runner_mock()
        self.api = powershell.PowerShellClusterManager(self.runner)

    def set_output(self, stdout="", stderr="", returncode=0):
        self.runner.run.return_value = (stdout, stderr, returncode)

    def assert_script_contains(self, *parts):
        self.runner.run.assert_called_once()
        args = self.runner.run.call_args[0][0]
        self.assertEqual(
            [
                "powershell.exe",
                "-NoLogo",
                "-NoProfile",
                "-NonInteractive",
                "-Command",
            ],
            args[:-1],
        )
        self.assertTrue(
            args[-1].startswith("$ErrorActionPreference = 'Stop'; ")
        )
        for part in parts:
            self.assertIn(part, args[-1])


class GetNodes(PowerShellClusterManagerTest):
    def test_success(self):
        self.set_output(
            _objects(
                {"Name": "node1", "State": "Up", "DrainStatus": "NotInitiated"},
                {
                    "Name": "node2",
                    "State": "Paused",
                    "DrainStatus": "Completed",
                },
                {"Name": "node3", "State": "Isolated", "DrainStatus": ""},
            )
        )
        self.assertEqual(
            [
                ClusterNodeInfo("node1", ClusterNodeState.UP),
                ClusterNodeInfo(
                    "node2", ClusterNodeState.PAUSED, DrainStatus.COMPLETED
                ),
                ClusterNodeInfo(
                    "node3", ClusterNodeState.UNKNOWN, DrainStatus.UNKNOWN
                ),
            ],
            self.api.get_nodes("cluster1"),
        )
        self.assert_script_contains(
            "Get-ClusterNode -Cluster 'cluster1'", "ConvertTo-Xml"
        )

    def test_empty_output(self):
        self.set_output("  \n")
        self.assertEqual([], self.api.get_nodes("cluster1"))

    def test_command_failed(self):
        self.set_output("some output", "access denied\n", 1)
        assert_raise_library_error(
            lambda: self.api.get_nodes("cluster1"),
            fixture.error(
                reports.codes.CLUSTER_API_COMMAND_FAILED,
                operation="get cluster nodes",
                target="cluster1",
                reason="access denied\nsome output",
            ),
        )

    def test_invalid_output(self):
        self.set_output("this is not xml")
        with self.assertRaises(LibraryError) as cm:
            self.api.get_nodes("cluster1")
        self.assertEqual(1, len(cm.exception.args))
        report_item = cm.exception.args[0]
        self.assertEqual(
            reports.codes.CLUSTER_API_INVALID_OUTPUT, report_item.message.code
        )
        self.assertEqual("get cluster nodes", report_item.message.operation)


class GetClusterName(PowerShellClusterManagerTest):
    def test_success(self):
        self.set_output(_objects({"Name": "cluster1"}))
        self.assertEqual("cluster1", self.api.get_cluster_name("node1"))
        self.assert_script_contains("Get-Cluster -Name 'node1'")

    def test_not_found(self):
        self.set_output("")
        assert_raise_library_error(
            lambda: self.api.get_cluster_name("node1"),
            fixture.error(
                reports.codes.CLUSTER_API_INVALID_OUTPUT,
                operation="get cluster",
                reason="cluster name not found",
            ),
        )


class GetVirtualDisks(PowerShellClusterManagerTest):
    def test_success(self):
        self.set_output(
            _objects(
                {
                    "FriendlyName": "Volume1",
                    "HealthStatus": "Healthy",
                    "OperationalStatus": "OK",
                },
                {
                    "FriendlyName": "Volume2",
                    "HealthStatus": "Warning",
                    "OperationalStatus": "Degraded,In Service",
                },
            )
        )
        self.assertEqual(
            [
                VirtualDiskInfo("Volume1", HealthStatus.HEALTHY, ("OK",)),
                VirtualDiskInfo(
                    "Volume2",
                    HealthStatus.WARNING,
                    ("Degraded", "In Service"),
                ),
            ],
            self.api.get_virtual_disks("cluster1"),
        )
        self.assert_script_contains("Get-VirtualDisk -CimSession 'cluster1'")


class GetPhysicalDisks(PowerShellClusterManagerTest):
    def test_success(self):
        self.set_output(
            _objects(
                {"FriendlyName": "disk0", "OperationalStatus": "OK"},
                {
                    "FriendlyName": "disk1",
                    "OperationalStatus": "In Maintenance Mode,OK",
                },
            )
        )
        disk_list = self.api.get_physical_disks("cluster1", "node1")
        self.assertEqual(
            [
                PhysicalDiskInfo("disk0", "node1", ("OK",)),
                PhysicalDiskInfo(
                    "disk1", "node1", ("In Maintenance Mode", "OK")
                ),
            ],
            disk_list,
        )
        self.assertFalse(disk_list[0].in_maintenance)
        self.assertTrue(disk_list[1].in_maintenance)

    def test_node_name_matched_exactly(self):
        self.set_output(_objects())
        self.api.get_physical_disks("cluster1", "node1")
        self.assert_script_contains(
            "Get-StorageNode -CimSession 'cluster1' "
            "| Where-Object { $_.Name -eq 'node1' -or "
            "$_.Name -like ('node1' + '.*') }"
        )
        self.assertNotIn(
            "('node1' + '*')", self.runner.run.call_args[0][0][-1]
        )


class GetResources(PowerShellClusterManagerTest):
    def test_success(self):
        self.set_output(
            _objects(
                {
                    "Name": "Cluster Pool 1",
                    "ResourceType": "Storage Pool",
                    "State": "Online",
                    "OwnerGroup": "Pool Group",
                },
                {
                    "Name": "vm1",
                    "ResourceType": "Virtual Machine",
                    "State": "Offline",
                    "OwnerGroup": "",
                },
            )
        )
        self.assertEqual(
            [
                ClusterResourceInfo(
                    "Cluster Pool 1",
                    "Storage Pool",
                    ResourceState.ONLINE,
                    "Pool Group",
                ),
                ClusterResourceInfo(
                    "vm1", "Virtual Machine", ResourceState.OFFLINE, None
                ),
            ],
            self.api.get_resources("cluster1"),
        )
        self.assert_script_contains("Get-ClusterResource -Cluster 'cluster1'")

    def test_shared_volumes(self):
        self.set_output("")
        self.assertEqual([], self.api.get_shared_volumes("cluster1"))
        self.assert_script_contains(
            "Get-ClusterSharedVolume -Cluster 'cluster1'"
        )


class NodeActions(PowerShellClusterManagerTest):
    def test_suspend(self):
        self.api.suspend_node("cluster1", "node1")
        self.assert_script_contains(
            "Suspend-ClusterNode -Cluster 'cluster1' -Name 'node1' -Drain"
        )

    def test_resume(self):
        self.api.resume_node("cluster1", "node1")
        self.assert_script_contains(
            "Resume-ClusterNode -Cluster 'cluster1' -Name 'node1' "
            "-Failback Immediate"
        )

    def test_suspend_failed(self):
        self.set_output("", "node is down", 1)
        assert_raise_library_error(
            lambda: self.api.suspend_node("cluster1", "node1"),
            fixture.error(
                reports.codes.CLUSTER_API_COMMAND_FAILED,
                operation="suspend node",
                target="node1",
                reason="node is down",
            ),
        )

    def test_enable_storage_maintenance(self):
        self.api.enable_storage_maintenance("cluster1", "node1")
        self.assert_script_contains(
            "Get-StorageFaultDomain -CimSession 'cluster1' "
            "-Type StorageScaleUnit",
            "$_.FriendlyName -eq 'node1'",
            "Enable-StorageMaintenanceMode",
        )

    def test_disable_storage_maintenance(self):
        self.api.disable_storage_maintenance("cluster1", "node1")
        self.assert_script_contains("Disable-StorageMaintenanceMode")

    def test_start_cluster_node(self):
        self.api.start_cluster_node("node1")
        self.assert_script_contains("Start-ClusterNode -Name 'node1' |")

    def test_start_cluster_node_fix_quorum(self):
        self.api.start_cluster_node("node1", fix_quorum=True)
        self.assert_script_contains(
            "Start-ClusterNode -Name 'node1' -FixQuorum"
        )

    def test_stop_cluster(self):
        self.api.stop_cluster("cluster1")
        self.assert_script_contains("Stop-Cluster -Cluster 'cluster1' -Force")


class Services(PowerShellClusterManagerTest):
    def test_running(self):
        self.set_output("Running\r\n")
        self.assertTrue(self.api.is_service_running("node1", "ClusSvc"))
        self.assert_script_contains(
            "Invoke-Command -ComputerName 'node1'",
            "Get-Service -Name 'ClusSvc'",
        )

    def test_stopped(self):
        self.set_output("Stopped\r\n")
        self.assertFalse(self.api.is_service_running("node1", "ClusSvc"))

    def test_enable(self):
        self.api.enable_service("node1", "ClusSvc")
        self.assert_script_contains(
            "Set-Service -Name 'ClusSvc' -StartupType Automatic"
        )

    def test_disable(self):
        self.api.disable_service("node1", "ClusSvc")
        self.assert_script_contains(
            "Set-Service -Name 'ClusSvc' -StartupType Disabled"
        )

    def test_stop(self):
        self.api.stop_service("node1", "ClusSvc")
        self.assert_script_contains("Stop-Service -Name 'ClusSvc' -Force")


class Groups(PowerShellClusterManagerTest):
    def test_get_group(self):
        self.set_output(
            _objects({"Name": "lease", "Description": "admin|2024-05-01"})
        )
        self.assertEqual(
            ClusterGroupInfo("lease", "admin|2024-05-01"),
            self.api.get_group("cluster1", "lease"),
        )

    def test_get_missing_group(self):
        self.set_output("")
        self.assertIsNone(self.api.get_group("cluster1", "lease"))

    def test_create_group_created(self):
        self.set_output("created\r\n")
        self.assertTrue(
            self.api.create_group("cluster1", "lease", "it's me|2024")
        )
        self.assert_script_contains(
            "Add-ClusterGroup -Cluster 'cluster1' -Name 'lease'",
            "$g.Description = 'it''s me|2024'",
        )

    def test_create_group_exists(self):
        self.set_output("exists\r\n")
        self.assertFalse(self.api.create_group("cluster1", "lease", "me"))

    def test_create_group_created_concurrently(self):
        self.set_output("exists\r\n")
        self.assertFalse(self.api.create_group("cluster1", "lease", "me"))
        self.assert_script_contains(
            "try { $g = Add-ClusterGroup -Cluster 'cluster1' "
            "-Name 'lease' }",
            "catch { if (Get-ClusterGroup -Cluster 'cluster1' "
            "| Where-Object { $_.Name -eq 'lease' }) { 'exists'; return } "
            "throw }",
        )

    def test_remove_group(self):
        self.api.remove_group("cluster1", "lease")
        self.assert_script_contains(
            "Remove-ClusterGroup -RemoveResources -Force"
        )


class GetOsBuild(PowerShellClusterManagerTest):
    def test_success(self):
        self.set_output("17763.1339\r\n")
        self.assertEqual("17763.1339", self.api.get_os_build("node1"))
        self.assert_script_contains("Invoke-Command -ComputerName 'node1'")

    def test_empty(self):
        self.set_output("\r\n")
        assert_raise_library_error(
            lambda: self.api.get_os_build("node1"),
            fixture.error(
                reports.codes.CLUSTER_API_INVALID_OUTPUT,
                operation="get os build",
                reason="empty build number",
            ),
        )
