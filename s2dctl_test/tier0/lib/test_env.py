import logging
from unittest import (
    TestCase,
    mock,
)

from s2dctl import settings
from s2dctl.common.reports import ReportProcessorToLog
from s2dctl.lib.cluster_api.powershell import PowerShellClusterManager
from s2dctl.lib.env import LibraryEnvironment

from s2dctl_test.tools.custom_mock import MockLibraryReportProcessor
from s2dctl_test.tools.misc import create_patcher

patch_env = create_patcher("s2dctl.lib.env")


class LibraryEnvironmentTest(TestCase):
    def setUp(self):
        self.mock_logger = mock.MagicMock(logging.Logger)
        self.mock_reporter = MockLibraryReportProcessor()

    def test_logger(self):
        env = LibraryEnvironment(self.mock_logger, self.mock_reporter)
        self.assertEqual(self.mock_logger, env.logger)

    def test_report_processor(self):
        env = LibraryEnvironment(self.mock_logger, self.mock_reporter)
        self.assertEqual(self.mock_reporter, env.report_processor)

    def test_report_processor_not_set(self):
        env = LibraryEnvironment(self.mock_logger)
        self.assertIsInstance(env.report_processor, ReportProcessorToLog)

    def test_lease_holder_set(self):
        env = LibraryEnvironment(
            self.mock_logger, self.mock_reporter, lease_holder="admin@host:1"
        )
        self.assertEqual("admin@host:1", env.lease_holder)

    def test_lease_holder_not_set(self):
        env = LibraryEnvironment(self.mock_logger, self.mock_reporter)
        self.assertEqual(settings.default_lease_holder, env.lease_holder)

    def test_request_timeout_set(self):
        env = LibraryEnvironment(
            self.mock_logger, self.mock_reporter, request_timeout=10
        )
        self.assertEqual(10, env.request_timeout)

    def test_request_timeout_not_set(self):
        env = LibraryEnvironment(self.mock_logger, self.mock_reporter)
        self.assertEqual(
            settings.default_request_timeout, env.request_timeout
        )

    def test_cluster_api_set(self):
        cluster_api = mock.Mock()
        env = LibraryEnvironment(
            self.mock_logger, self.mock_reporter, cluster_api=cluster_api
        )
        self.assertIs(cluster_api, env.get_cluster_api())

    @patch_env("CommandRunner")
    def test_cluster_api_default(self, mock_runner):
        env = LibraryEnvironment(
            self.mock_logger,
            self.mock_reporter,
            runner_env_vars={"SystemRoot": "C:\\Windows"},
        )
        cluster_api = env.get_cluster_api()
        self.assertIsInstance(cluster_api, PowerShellClusterManager)
        self.assertIs(cluster_api, env.get_cluster_api())
        mock_runner.assert_called_once_with(
            self.mock_logger,
            self.mock_reporter,
            {"SystemRoot": "C:\\Windows"},
        )

    @patch_env("CommandRunner")
    def test_cmd_runner_env(self, mock_runner):
        env = LibraryEnvironment(
            self.mock_logger,
            self.mock_reporter,
            runner_env_vars={"a": "a", "b": "b"},
        )
        runner = env.cmd_runner({"b": "B"})
        self.assertIs(mock_runner.return_value, runner)
        mock_runner.assert_called_once_with(
            self.mock_logger, self.mock_reporter, {"a": "a", "b": "B"}
        )
