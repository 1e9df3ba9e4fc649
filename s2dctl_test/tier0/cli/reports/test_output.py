from unittest import (
    TestCase,
    mock,
)

from s2dctl.cli.reports import (
    ReportProcessorToConsole,
    process_library_reports,
)
from s2dctl.common import reports
from s2dctl.common.reports.item import (
    ReportItem,
    ReportItemContext,
)


@mock.patch("s2dctl.cli.reports.output.print_to_stderr")
class ProcessLibraryReports(TestCase):
    def test_no_reports(self, mock_stderr):
        with self.assertRaises(SystemExit) as cm:
            process_library_reports([])
        self.assertEqual(1, cm.exception.code)
        mock_stderr.assert_called_once_with(
            "Error: Errors have occurred, therefore s2dctl is unable to "
            "continue"
        )

    def test_warnings_and_info(self, mock_stderr):
        process_library_reports(
            [
                ReportItem.warning(reports.messages.NodeAlreadyUp("node1")),
                ReportItem.info(reports.messages.NodeResumed("node2")),
            ]
        )
        mock_stderr.assert_has_calls(
            [
                mock.call("Warning: Node 'node1' is already up"),
                mock.call("Node 'node2' resumed"),
            ]
        )

    def test_error(self, mock_stderr):
        with self.assertRaises(SystemExit) as cm:
            process_library_reports(
                [
                    ReportItem.error(
                        reports.messages.VolumesUnhealthy(
                            "cluster1", ["Volume1"]
                        ),
                        force_code=reports.codes.SKIP_HEALTH_CHECK,
                    ),
                    ReportItem.error(
                        reports.messages.NodeNotFound("node3", "cluster1"),
                        context=ReportItemContext("cluster1"),
                    ),
                ]
            )
        self.assertEqual(1, cm.exception.code)
        mock_stderr.assert_has_calls(
            [
                mock.call(
                    "Error: Unhealthy volume 'Volume1' found on 'cluster1', "
                    "use --skip-health-check to override"
                ),
                mock.call(
                    "Error: cluster1: Node 'node3' does not appear to be a "
                    "member of cluster 'cluster1'"
                ),
            ]
        )


@mock.patch("s2dctl.cli.reports.processor.print_to_stderr")
@mock.patch("s2dctl.cli.reports.output.print_to_stderr")
class ReportProcessorToConsoleTest(TestCase):
    def setUp(self):
        self.debug_report = ReportItem.debug(
            reports.messages.RunExternalProcessError("powershell.exe", "err")
        )

    def test_debug_hidden(self, mock_output_stderr, mock_processor_stderr):
        processor = ReportProcessorToConsole()
        processor.report(self.debug_report)
        processor.report(
            ReportItem.info(reports.messages.NodePaused("node1"))
        )
        mock_processor_stderr.assert_called_once_with(
            "Node 'node1' paused and drained"
        )
        mock_output_stderr.assert_not_called()
        self.assertFalse(processor.has_errors)

    def test_debug_shown(self, mock_output_stderr, mock_processor_stderr):
        processor = ReportProcessorToConsole(debug=True)
        processor.report(self.debug_report)
        mock_processor_stderr.assert_called_once_with(
            "unable to run command powershell.exe: err"
        )
        mock_output_stderr.assert_not_called()

    def test_errors(self, mock_output_stderr, mock_processor_stderr):
        processor = ReportProcessorToConsole()
        processor.report(
            ReportItem.error(reports.messages.NodeDrainFailed("node1"))
        )
        self.assertTrue(processor.has_errors)
        mock_processor_stderr.assert_not_called()
        mock_output_stderr.assert_called_once_with(
            "Error: Unable to drain roles from node 'node1'"
        )
