import datetime
from unittest import (
    TestCase,
    mock,
)

from s2dctl import settings
from s2dctl.common import reports
from s2dctl.common.maintenance_dto import ClusterLeaseDto
from s2dctl.lib import lease
from s2dctl.lib.errors import LibraryError

from s2dctl_test.tools import fixture
from s2dctl_test.tools.assertions import assert_raise_library_error
from s2dctl_test.tools.cluster_api_mock import (
    FakeCluster,
    FakeClusterApi,
)
from s2dctl_test.tools.custom_mock import get_lib_env

UTC = datetime.timezone.utc
NOW = datetime.datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
GROUP = settings.lease_group_name


class FormatDescription(TestCase):
    def test_success(self):
        self.assertEqual(
            "admin@host:42|2024-05-01T12:00:00+00:00",
            lease.format_description("admin@host:42", NOW),
        )


class ParseDescription(TestCase):
    def test_success(self):
        self.assertEqual(
            ("admin@host:42", NOW),
            lease.parse_description("admin@host:42|2024-05-01T12:00:00+00:00"),
        )

    def test_separator_in_holder(self):
        self.assertEqual(
            ("a|b", NOW),
            lease.parse_description("a|b|2024-05-01T12:00:00Z"),
        )

    def test_naive_time_is_utc(self):
        self.assertEqual(
            ("admin", NOW),
            lease.parse_description("admin|2024-05-01T12:00:00"),
        )

    def test_no_separator(self):
        self.assertEqual(
            ("some description", None),
            lease.parse_description("some description"),
        )

    def test_invalid_time(self):
        self.assertEqual(
            ("admin", None), lease.parse_description("admin|tomorrow")
        )


@mock.patch("s2dctl.lib.lease.utc_now", lambda: NOW)
class GetLeaseInfo(TestCase):
    def setUp(self):
        self.cluster = FakeCluster("cluster1", ["node1"])
        self.api = FakeClusterApi(self.cluster)

    def test_no_lease(self):
        self.assertEqual(
            ClusterLeaseDto(
                cluster_name="cluster1",
                holder=None,
                expires=None,
                expired=False,
            ),
            lease.get_lease_info(self.api, "cluster1"),
        )

    def test_valid_lease(self):
        self.cluster.groups[GROUP] = "admin|2024-05-01T13:00:00+00:00"
        self.assertEqual(
            ClusterLeaseDto(
                cluster_name="cluster1",
                holder="admin",
                expires="2024-05-01T13:00:00+00:00",
                expired=False,
            ),
            lease.get_lease_info(self.api, "cluster1"),
        )

    def test_expired_lease(self):
        self.cluster.groups[GROUP] = "admin|2024-05-01T12:00:00+00:00"
        self.assertTrue(lease.get_lease_info(self.api, "cluster1").expired)

    def test_unreadable_lease(self):
        self.cluster.groups[GROUP] = ""
        self.assertEqual(
            ClusterLeaseDto(
                cluster_name="cluster1",
                holder="unknown",
                expires=None,
                expired=False,
            ),
            lease.get_lease_info(self.api, "cluster1"),
        )


@mock.patch("s2dctl.lib.lease.utc_now", lambda: NOW)
class ClusterLease(TestCase):
    def setUp(self):
        self.cluster = FakeCluster("cluster1", ["node1"])
        self.api = FakeClusterApi(self.cluster)
        self.env = get_lib_env(self.api, lease_holder="me@host:1")
        self.lease = lease.ClusterLease(self.env, "cluster1")

    def test_acquire_release(self):
        self.lease.acquire()
        self.assertTrue(self.lease.is_held)
        self.assertEqual(
            {GROUP: "me@host:1|2024-05-01T16:00:00+00:00"},
            self.cluster.groups,
        )
        self.lease.release()
        self.assertFalse(self.lease.is_held)
        self.assertEqual({}, self.cluster.groups)
        self.lease.release()
        self.assertEqual(
            [
                ("create_group", ("cluster1", GROUP)),
                ("remove_group", ("cluster1", GROUP)),
            ],
            self.api.actions,
        )
        self.env.report_processor.assert_reports([])

    def test_held_by_other(self):
        self.cluster.groups[GROUP] = "other@host:2|2024-05-01T13:00:00+00:00"
        assert_raise_library_error(
            self.lease.acquire,
            fixture.error(
                reports.codes.LEASE_HELD,
                cluster="cluster1",
                holder="other@host:2",
                expires="2024-05-01T13:00:00+00:00",
            ),
        )
        self.assertFalse(self.lease.is_held)
        self.assertEqual(
            "other@host:2|2024-05-01T13:00:00+00:00", self.cluster.groups[GROUP]
        )

    def test_held_without_expiry(self):
        self.cluster.groups[GROUP] = "other@host:2"
        assert_raise_library_error(
            self.lease.acquire,
            fixture.error(
                reports.codes.LEASE_HELD,
                cluster="cluster1",
                holder="other@host:2",
                expires="unknown",
            ),
        )

    def test_take_over_expired(self):
        self.cluster.groups[GROUP] = "other@host:2|2024-05-01T11:00:00+00:00"
        self.lease.acquire()
        self.assertTrue(self.lease.is_held)
        self.assertEqual(
            "me@host:1|2024-05-01T16:00:00+00:00", self.cluster.groups[GROUP]
        )
        self.assertEqual(
            [
                ("create_group", ("cluster1", GROUP)),
                ("remove_group", ("cluster1", GROUP)),
                ("create_group", ("cluster1", GROUP)),
            ],
            self.api.actions,
        )
        self.env.report_processor.assert_reports(
            [
                fixture.warn(
                    reports.codes.LEASE_EXPIRED_TAKEN_OVER,
                    cluster="cluster1",
                    holder="other@host:2",
                    expires="2024-05-01T11:00:00+00:00",
                )
            ]
        )

    def test_take_over_lost_race(self):
        self.cluster.groups[GROUP] = "other@host:2|2024-05-01T11:00:00+00:00"
        with mock.patch.object(self.api, "remove_group"):
            assert_raise_library_error(
                self.lease.acquire,
                fixture.error(
                    reports.codes.LEASE_HELD,
                    cluster="cluster1",
                    holder="other@host:2",
                    expires="2024-05-01T11:00:00+00:00",
                ),
            )
        self.assertFalse(self.lease.is_held)

    def test_release_failed(self):
        self.lease.acquire()
        self.api.fail("remove_group", GROUP, "access denied")
        self.lease.release()
        self.assertFalse(self.lease.is_held)
        self.env.report_processor.assert_reports(
            [
                fixture.warn(
                    reports.codes.LEASE_RELEASE_FAILED,
                    cluster="cluster1",
                    reason=(
                        f"Unable to remove_group on '{GROUP}': access denied"
                    ),
                )
            ]
        )

    def test_wait_time_extends_expiry(self):
        lease.ClusterLease(self.env, "cluster1", wait_time=3600).acquire()
        self.assertEqual(
            "me@host:1|2024-05-01T17:00:00+00:00", self.cluster.groups[GROUP]
        )

    def test_release_after_takeover_keeps_new_lease(self):
        self.lease.acquire()
        other_env = get_lib_env(self.api, lease_holder="other@host:2")
        later = NOW + datetime.timedelta(seconds=settings.lease_ttl + 60)
        with mock.patch("s2dctl.lib.lease.utc_now", lambda: later):
            lease.ClusterLease(other_env, "cluster1").acquire()
            self.lease.release()
        self.assertFalse(self.lease.is_held)
        self.assertEqual(
            "other@host:2|2024-05-01T20:01:00+00:00",
            self.cluster.groups[GROUP],
        )
        self.assertEqual(
            [
                ("create_group", ("cluster1", GROUP)),
                ("create_group", ("cluster1", GROUP)),
                ("remove_group", ("cluster1", GROUP)),
                ("create_group", ("cluster1", GROUP)),
            ],
            self.api.actions,
        )
        self.env.report_processor.assert_reports(
            [
                fixture.warn(
                    reports.codes.LEASE_LOST,
                    cluster="cluster1",
                    holder="other@host:2",
                )
            ]
        )

    def test_release_after_lease_removed(self):
        self.lease.acquire()
        del self.cluster.groups[GROUP]
        self.lease.release()
        self.assertFalse(self.lease.is_held)
        self.assertEqual(
            [("create_group", ("cluster1", GROUP))], self.api.actions
        )
        self.env.report_processor.assert_reports(
            [
                fixture.warn(
                    reports.codes.LEASE_LOST, cluster="cluster1", holder=None
                )
            ]
        )

    def test_context_manager_releases_on_error(self):
        with self.assertRaises(LibraryError):
            with self.lease:
                self.assertEqual(1, len(self.cluster.groups))
                raise LibraryError()
        self.assertEqual({}, self.cluster.groups)
        self.assertFalse(self.lease.is_held)
