import os
import signal
import subprocess
from logging import Logger
from shlex import quote as shell_quote
from typing import (
    Dict,
    Mapping,
    Optional,
    Tuple,
)

from s2dctl.common import reports
from s2dctl.common.reports import ReportProcessor
from s2dctl.common.reports.item import ReportItem
from s2dctl.common.types import StringSequence
from s2dctl.lib.errors import LibraryError


def _restore_default_sigpipe() -> None:
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)


class CommandRunner:
    def __init__(
        self,
        logger: Logger,
        reporter: ReportProcessor,
        env_vars: Optional[Mapping[str, str]] = None,
    ):
        self._logger = logger
        self._reporter = reporter
        # The library does not know the context it runs in, so the child
        # environment consists of the passed variables only. PowerShell needs
        # at least SystemRoot, the caller is responsible for passing it.
        self._env_vars = env_vars if env_vars else {}

    @property
    def env_vars(self) -> Dict[str, str]:
        return dict(self._env_vars)

    def run(
        self,
        args: StringSequence,
        stdin_string: Optional[str] = None,
        env_extend: Optional[Mapping[str, str]] = None,
    ) -> Tuple[str, str, int]:
        env_vars = dict(self._env_vars)
        env_vars.update(dict(env_extend) if env_extend else {})

        log_args = " ".join([shell_quote(x) for x in args])
        self._logger.debug(
            "Running: %s\nEnvironment:%s%s",
            log_args,
            (
                ""
                if not env_vars
                else "\n"
                + "\n".join(
                    [f"  {key}={val}" for key, val in sorted(env_vars.items())]
                )
            ),
            (
                ""
                if not stdin_string
                else (
                    "\n--Debug Input Start--\n{0}\n--Debug Input End--"
                ).format(stdin_string)
            ),
        )
        self._reporter.report(
            ReportItem.debug(
                reports.messages.RunExternalProcessStarted(
                    log_args,
                    stdin_string,
                    env_vars,
                )
            )
        )

        try:
            # pylint: disable=subprocess-popen-preexec-fn, consider-using-with
            process = subprocess.Popen(
                args,
                stdin=(
                    subprocess.PIPE
                    if stdin_string is not None
                    else subprocess.DEVNULL
                ),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                # Windows has neither SIGPIPE nor preexec_fn
                preexec_fn=(
                    _restore_default_sigpipe if os.name == "posix" else None
                ),
                close_fds=True,
                shell=False,
                env=env_vars,
                universal_newlines=True,
            )
            out_std, out_err = process.communicate(stdin_string)
            retval = process.returncode
        except OSError as e:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.RunExternalProcessError(
                        log_args,
                        e.strerror,
                    )
                )
            ) from e

        self._logger.debug(
            (
                "Finished running: %s\nReturn value: %s"
                "\n--Debug Stdout Start--\n%s\n--Debug Stdout End--"
                "\n--Debug Stderr Start--\n%s\n--Debug Stderr End--"
            ),
            log_args,
            retval,
            out_std,
            out_err,
        )
        self._reporter.report(
            ReportItem.debug(
                reports.messages.RunExternalProcessFinished(
                    log_args,
                    retval,
                    out_std,
                    out_err,
                )
            )
        )
        return out_std, out_err, retval
