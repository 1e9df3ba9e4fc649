from logging import Logger
from typing import (
    Mapping,
    Optional,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.reports import (
    ReportProcessor,
    ReportProcessorToLog,
)
from s2dctl.lib.cluster_api.interfaces import ClusterManagementInterface
from s2dctl.lib.cluster_api.powershell import PowerShellClusterManager
from s2dctl.lib.external import CommandRunner


class LibraryEnvironment:
    def __init__(
        self,
        logger: Logger,
        report_processor: Optional[reports.ReportProcessor] = None,
        cluster_api: Optional[ClusterManagementInterface] = None,
        runner_env_vars: Optional[Mapping[str, str]] = None,
        lease_holder: Optional[str] = None,
        request_timeout: Optional[int] = None,
    ):
        # pylint: disable=too-many-arguments
        self._logger = logger
        self._report_processor = report_processor or ReportProcessorToLog(
            logger
        )
        self._cluster_api = cluster_api
        self._runner_env_vars = dict(runner_env_vars or {})
        self._lease_holder = lease_holder or settings.default_lease_holder
        self._request_timeout = request_timeout

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def report_processor(self) -> ReportProcessor:
        return self._report_processor

    @property
    def lease_holder(self) -> str:
        return self._lease_holder

    @property
    def request_timeout(self) -> int:
        if self._request_timeout is None:
            return settings.default_request_timeout
        return self._request_timeout

    def cmd_runner(
        self, env: Optional[Mapping[str, str]] = None
    ) -> CommandRunner:
        runner_env = dict(self._runner_env_vars)
        if env:
            runner_env.update(env)
        return CommandRunner(self.logger, self.report_processor, runner_env)

    def get_cluster_api(self) -> ClusterManagementInterface:
        if self._cluster_api is None:
            self._cluster_api = PowerShellClusterManager(self.cmd_runner())
        return self._cluster_api
