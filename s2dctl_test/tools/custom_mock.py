import contextlib
import logging
from unittest import mock

import pycurl

from s2dctl.common.reports import (
    ReportItemSeverity,
    ReportProcessor,
)
from s2dctl.lib.env import LibraryEnvironment
from s2dctl.lib.external import CommandRunner

from s2dctl_test.tools.assertions import assert_report_item_list_equal


def get_runner_mock(stdout="", stderr="", returncode=0, env_vars=None):
    runner = mock.MagicMock(spec_set=CommandRunner)
    runner.run.return_value = (stdout, stderr, returncode)
    runner.env_vars = env_vars if env_vars else {}
    return runner


class MockLibraryReportProcessor(ReportProcessor):
    def __init__(self, debug=True):
        super().__init__()
        self.debug = debug
        self.items = []

    def _do_report(self, report_item):
        if self.debug or report_item.severity.level != ReportItemSeverity.DEBUG:
            self.items.append(report_item)

    @property
    def report_item_list(self):
        return self.items

    def assert_reports(self, expected_report_info_list, hint=""):
        assert_report_item_list_equal(
            self.report_item_list, expected_report_info_list, hint=hint
        )


class MockCurl:
    def __init__(self, info=None, output=b"", exception=None):
        self._opts = {}
        self._info = info if info else {}
        self._output = output
        self._exception = exception
        self.closed = False

    @property
    def opts(self):
        return self._opts

    def setopt(self, opt, val):
        if val is None:
            with contextlib.suppress(KeyError):
                del self._opts[opt]
        else:
            self._opts[opt] = val

    def getinfo(self, opt):
        try:
            return self._info[opt]
        except KeyError as e:
            raise AssertionError("info '#{0}' not defined".format(opt)) from e

    def perform(self):
        if self._exception:
            raise self._exception
        if pycurl.WRITEFUNCTION in self._opts:
            self._opts[pycurl.WRITEFUNCTION](self._output)

    def close(self):
        self.closed = True


def get_lib_env(cluster_api, lease_holder="tester@host:1"):
    """
    Return a LibraryEnvironment driving the specified cluster API, its
    reports are collected by a MockLibraryReportProcessor
    """
    return LibraryEnvironment(
        mock.MagicMock(logging.Logger),
        MockLibraryReportProcessor(),
        cluster_api=cluster_api,
        lease_holder=lease_holder,
    )
