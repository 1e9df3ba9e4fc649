import json
from unittest import (
    TestCase,
    mock,
)

from s2dctl.cli.cau import command
from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.common.maintenance_dto import NodeMaintenanceStateDto
from s2dctl.common.types import (
    ClusterNodeState,
    StorageMaintenanceLevel,
)

from s2dctl_test.tools.misc import dict_to_modifiers

PAUSED = NodeMaintenanceStateDto(
    computer_name="node1",
    cluster_state=ClusterNodeState.PAUSED,
    storage_state=StorageMaintenanceLevel.IN_MAINTENANCE,
)
UP = NodeMaintenanceStateDto(
    computer_name="node1",
    cluster_state=ClusterNodeState.UP,
    storage_state=StorageMaintenanceLevel.UP,
)


@mock.patch("s2dctl.cli.common.output.print")
class UpdateHooks(TestCase):
    def setUp(self):
        self.lib = mock.Mock(spec_set=["cau"])
        self.cau = mock.Mock(spec_set=["pre_update", "post_update"])
        self.lib.cau = self.cau
        self.cau.pre_update.return_value = PAUSED
        self.cau.post_update.return_value = UP

    def test_pre_update_no_args(self, mock_print):
        with self.assertRaises(CmdLineInputError) as cm:
            command.pre_update_cmd(self.lib, [], dict_to_modifiers({}))
        self.assertIsNone(cm.exception.message)
        self.cau.pre_update.assert_not_called()
        mock_print.assert_not_called()

    def test_post_update_too_many_args(self, mock_print):
        with self.assertRaises(CmdLineInputError) as cm:
            command.post_update_cmd(
                self.lib, ["node1", "node2"], dict_to_modifiers({})
            )
        self.assertIsNone(cm.exception.message)
        self.cau.post_update.assert_not_called()
        mock_print.assert_not_called()

    def test_unsupported_option(self, mock_print):
        with self.assertRaises(CmdLineInputError) as cm:
            command.pre_update_cmd(
                self.lib, ["node1"], dict_to_modifiers({"yes": True})
            )
        self.assertEqual(
            "Specified option '--yes' is not supported in this command",
            cm.exception.message,
        )
        self.cau.pre_update.assert_not_called()

    def test_pre_update(self, mock_print):
        command.pre_update_cmd(self.lib, ["node1"], dict_to_modifiers({}))
        self.cau.pre_update.assert_called_once_with("node1", timeout=None)
        mock_print.assert_called_once_with(
            "node1: ClusterState=Paused StorageState=InMaintenance"
        )

    def test_post_update_wait(self, mock_print):
        command.post_update_cmd(
            self.lib, ["node1"], dict_to_modifiers({"wait": "2h"})
        )
        self.cau.post_update.assert_called_once_with("node1", timeout=7200)
        mock_print.assert_called_once_with(
            "node1: ClusterState=Up StorageState=Up"
        )

    def test_invalid_wait(self, mock_print):
        with self.assertRaises(CmdLineInputError) as cm:
            command.post_update_cmd(
                self.lib, ["node1"], dict_to_modifiers({"wait": "abc"})
            )
        self.assertEqual(
            "'abc' is not a valid interval value", cm.exception.message
        )
        self.cau.post_update.assert_not_called()

    def test_json(self, mock_print):
        command.pre_update_cmd(
            self.lib, ["node1"], dict_to_modifiers({"output-format": "json"})
        )
        self.assertEqual(
            {
                "ComputerName": "node1",
                "ClusterState": "Paused",
                "StorageState": "InMaintenance",
            },
            json.loads(mock_print.call_args[0][0]),
        )
