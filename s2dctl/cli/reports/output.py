import sys

from s2dctl.cli.common.tools import print_to_stderr
from s2dctl.common.reports import (
    ReportItemList,
    ReportItemSeverity,
)
from s2dctl.common.reports.utils import add_context_to_message

from .messages import report_item_msg_from_dto


def warn(message: str) -> None:
    print_to_stderr(f"Warning: {message}")


def error(message: str) -> SystemExit:
    print_to_stderr(f"Error: {message}")
    return SystemExit(1)


def process_library_reports(report_item_list: ReportItemList) -> None:
    if not report_item_list:
        raise error(
            "Errors have occurred, therefore s2dctl is unable to continue"
        )

    critical_error = False
    for report_item in report_item_list:
        report_dto = report_item.to_dto()
        severity = report_dto.severity.level

        cli_report_msg = report_item_msg_from_dto(report_dto.message)
        msg = add_context_to_message(cli_report_msg.message, report_dto.context)

        if severity == ReportItemSeverity.WARNING:
            warn(msg)
            continue

        if severity != ReportItemSeverity.ERROR:
            print_to_stderr(msg)
            continue

        error(
            add_context_to_message(
                cli_report_msg.get_message_with_force_text(
                    report_item.severity.force_code
                ),
                report_dto.context,
            )
        )
        critical_error = True

    if critical_error:
        sys.exit(1)
