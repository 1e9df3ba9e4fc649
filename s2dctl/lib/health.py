from typing import (
    List,
    Optional,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.reports import (
    ReportItemList,
    get_severity_from_flags,
)
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.reports.types import ForceFlags
from s2dctl.lib.cluster_api.interfaces import ClusterManagementInterface
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.errors import LibraryError
from s2dctl.lib.wait import wait_until


def get_unhealthy_volumes(
    api: ClusterManagementInterface, target: str
) -> List[str]:
    """
    Return names of virtual disks visible from target which are not healthy

    target -- node or cluster name
    """
    return sorted(
        disk.name
        for disk in api.get_virtual_disks(target)
        if not disk.is_healthy
    )


def check_volumes_healthy(
    api: ClusterManagementInterface,
    target: str,
    force_flags: ForceFlags = (),
) -> ReportItemList:
    """
    Return an error report if any virtual disk visible from target is not
    healthy. The error is overridable by SKIP_HEALTH_CHECK.
    """
    unhealthy_list = get_unhealthy_volumes(api, target)
    if not unhealthy_list:
        return []
    return [
        ReportItem(
            severity=get_severity_from_flags(
                reports.codes.SKIP_HEALTH_CHECK, force_flags
            ),
            message=reports.messages.VolumesUnhealthy(target, unhealthy_list),
        )
    ]


def ensure_volumes_healthy(
    api: ClusterManagementInterface, target: str
) -> None:
    """
    Raise LibraryError if any virtual disk visible from target is unhealthy
    """
    report_list = check_volumes_healthy(api, target)
    if report_list:
        raise LibraryError(*report_list)


def wait_for_volumes_healthy(
    env: LibraryEnvironment, target: str, timeout: Optional[int] = None
) -> None:
    """
    Block until all virtual disks visible from target are healthy

    timeout -- seconds, defaults to settings.health_timeout
    """
    api = env.get_cluster_api()
    wait_until(
        lambda: not get_unhealthy_volumes(api, target),
        settings.health_timeout if timeout is None else timeout,
        settings.health_poll_interval,
        "volumes to become healthy",
        target,
    )
