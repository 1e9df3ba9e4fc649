from time import (
    monotonic,
    sleep,
)
from typing import Callable

from s2dctl.common import reports
from s2dctl.common.reports.item import ReportItem
from s2dctl.lib.errors import LibraryError


def wait_until(
    predicate: Callable[[], bool],
    timeout: int,
    interval: int,
    operation: str,
    target: str,
) -> None:
    """
    Call predicate every interval seconds until it returns True

    predicate -- queries live state, called at least once
    timeout -- seconds, raise LibraryError once exceeded
    interval -- seconds between two calls of predicate
    operation -- description of what is waited for, used in the report
    target -- node or cluster the wait is related to
    """
    deadline = monotonic() + timeout
    while not predicate():
        if monotonic() + interval > deadline:
            raise LibraryError(
                ReportItem.error(
                    reports.messages.OperationTimedOut(
                        operation, target, timeout
                    )
                )
            )
        sleep(interval)


def settle(seconds: int) -> None:
    if seconds > 0:
        sleep(seconds)
