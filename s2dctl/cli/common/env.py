import getpass
import os
import socket
from typing import (
    Dict,
    Optional,
)

from s2dctl import settings
from s2dctl.common.reports import ReportProcessor


def get_lease_holder() -> str:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    return f"{user}@{socket.gethostname()}:{os.getpid()}"


def get_runner_env_vars() -> Dict[str, str]:
    return {
        name: os.environ[name]
        for name in settings.runner_inherited_env_vars
        if name in os.environ
    }


class Env:
    # pylint: disable=too-few-public-methods
    def __init__(self, report_processor: ReportProcessor) -> None:
        self.report_processor = report_processor
        self.debug = False
        self.request_timeout: Optional[int] = None
        self.lease_holder = get_lease_holder()
        self.runner_env_vars = get_runner_env_vars()
