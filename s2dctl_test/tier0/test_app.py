from unittest import (
    TestCase,
    mock,
)

from s2dctl import (
    app,
    settings,
)


@mock.patch("s2dctl.app.print")
class Main(TestCase):
    def test_version(self, mock_print):
        with self.assertRaises(SystemExit) as cm:
            app.main(["--version"])
        self.assertIsNone(cm.exception.code)
        mock_print.assert_called_once_with(settings.s2dctl_version)

    def test_help(self, mock_print):
        with self.assertRaises(SystemExit) as cm:
            app.main(["--help"])
        self.assertIsNone(cm.exception.code)
        self.assertIn("Usage: s2dctl", mock_print.call_args[0][0])

    @mock.patch("s2dctl.cli.reports.output.print_to_stderr")
    def test_invalid_request_timeout(self, mock_stderr, mock_print):
        with self.assertRaises(SystemExit) as cm:
            app.main(["--request-timeout=abc", "cluster", "lease", "c1"])
        self.assertEqual(1, cm.exception.code)
        mock_stderr.assert_called_once_with(
            "Error: 'abc' is not a valid --request-timeout value, use a "
            "positive integer"
        )
        mock_print.assert_not_called()

    @mock.patch("s2dctl.app.print_to_stderr")
    @mock.patch("s2dctl.cli.reports.output.print_to_stderr")
    def test_unknown_option(self, mock_error_stderr, mock_stderr, mock_print):
        with self.assertRaises(SystemExit) as cm:
            app.main(["--unknown-option"])
        self.assertEqual(1, cm.exception.code)
        mock_error_stderr.assert_called_once_with(
            "Error: option --unknown-option not recognized"
        )
        mock_print.assert_not_called()

    @mock.patch("s2dctl.usage.print")
    def test_help_cmd(self, mock_usage_print, mock_print):
        app.main(["help"])
        output = mock_usage_print.call_args[0][0]
        self.assertTrue(output.startswith("Usage: s2dctl [-h] [commands]..."))
        for cmd in ("maintenance <node>", "shutdown <cluster>", "check <node>"):
            self.assertIn(cmd, output)
        mock_print.assert_not_called()
