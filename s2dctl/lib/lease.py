"""
Cluster scoped maintenance lease

The lease is an empty cluster group. Its description holds the lease holder
and the expiry time: "<holder>|<ISO 8601 expiry>". Acquiring relies on
create_group reporting an already existing group, including a group created
concurrently by another invocation. Releasing removes the group only while it
still holds the description written by this invocation.
"""

import datetime
from typing import (
    Optional,
    Tuple,
)

from dateutil import parser as date_parser

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.maintenance_dto import ClusterLeaseDto
from s2dctl.common.reports.item import ReportItem
from s2dctl.lib.cluster_api.interfaces import ClusterManagementInterface
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.errors import LibraryError


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def format_description(holder: str, expires: datetime.datetime) -> str:
    return "{holder}{sep}{expires}".format(
        holder=holder,
        sep=settings.lease_description_separator,
        expires=expires.isoformat(timespec="seconds"),
    )


def parse_description(
    description: str,
) -> Tuple[str, Optional[datetime.datetime]]:
    """
    Return the lease holder and the expiry time, the time is None if it
    cannot be parsed
    """
    holder, sep, expires = description.rpartition(
        settings.lease_description_separator
    )
    if not sep:
        return description, None
    try:
        expiry = date_parser.isoparse(expires.strip())
    except ValueError:
        return holder, None
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=datetime.timezone.utc)
    return holder, expiry


def get_lease_info(
    api: ClusterManagementInterface, cluster: str
) -> ClusterLeaseDto:
    group = api.get_group(cluster, settings.lease_group_name)
    if group is None:
        return ClusterLeaseDto(
            cluster_name=cluster, holder=None, expires=None, expired=False
        )
    holder, expiry = parse_description(group.description)
    return ClusterLeaseDto(
        cluster_name=cluster,
        holder=holder or "unknown",
        expires=expiry.isoformat(timespec="seconds") if expiry else None,
        # a lease without a readable expiry must be cleared manually
        expired=expiry is not None and expiry <= utc_now(),
    )


class ClusterLease:
    """
    Mutual exclusion of maintenance operations running against one cluster.
    Usable as a context manager, the lease is released on every exit path.

    The lease is not renewed while it is held. Its expiry covers
    settings.lease_ttl plus wait_time, the longest time the holder may spend
    polling the cluster.
    """

    def __init__(
        self, env: LibraryEnvironment, cluster: str, wait_time: int = 0
    ):
        self._env = env
        self._cluster = cluster
        self._wait_time = wait_time
        self._held = False
        self._description: Optional[str] = None

    @property
    def is_held(self) -> bool:
        return self._held

    def _create(self) -> bool:
        expires = utc_now() + datetime.timedelta(
            seconds=settings.lease_ttl + self._wait_time
        )
        self._description = format_description(self._env.lease_holder, expires)
        return self._env.get_cluster_api().create_group(
            self._cluster, settings.lease_group_name, self._description
        )

    def acquire(self) -> None:
        if self._held:
            return
        if self._create():
            self._held = True
            return
        lease_info = get_lease_info(self._env.get_cluster_api(), self._cluster)
        if lease_info.holder is not None and not lease_info.expired:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.LeaseHeld(
                        self._cluster,
                        lease_info.holder,
                        lease_info.expires or "unknown",
                    )
                )
            )
        if lease_info.holder is not None:
            self._env.report_processor.report(
                ReportItem.warning(
                    reports.messages.LeaseExpiredTakenOver(
                        self._cluster,
                        lease_info.holder,
                        lease_info.expires or "unknown",
                    )
                )
            )
            self._env.get_cluster_api().remove_group(
                self._cluster, settings.lease_group_name
            )
        if not self._create():
            # somebody else has been faster
            lease_info = get_lease_info(
                self._env.get_cluster_api(), self._cluster
            )
            raise LibraryError(
                ReportItem.error(
                    reports.messages.LeaseHeld(
                        self._cluster,
                        lease_info.holder or "unknown",
                        lease_info.expires or "unknown",
                    )
                )
            )
        self._held = True

    def release(self) -> None:
        if not self._held:
            return
        self._held = False
        api = self._env.get_cluster_api()
        try:
            group = api.get_group(self._cluster, settings.lease_group_name)
            if group is None or group.description != self._description:
                # expired and taken over or cleared by somebody else
                holder = None
                if group is not None:
                    holder = parse_description(group.description)[0] or None
                self._env.report_processor.report(
                    ReportItem.warning(
                        reports.messages.LeaseLost(self._cluster, holder)
                    )
                )
                return
            api.remove_group(self._cluster, settings.lease_group_name)
        except LibraryError as e:
            self._env.report_processor.report(
                ReportItem.warning(
                    reports.messages.LeaseReleaseFailed(
                        self._cluster,
                        "; ".join(
                            report_item.message.message
                            for report_item in e.args
                        ),
                    )
                )
            )

    def __enter__(self) -> "ClusterLease":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()
