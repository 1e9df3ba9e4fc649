from s2dctl.cli.common.tools import print_to_stderr
from s2dctl.common.reports import (
    ReportItem,
    ReportItemSeverity,
    ReportProcessor,
)
from s2dctl.common.reports.dto import ReportItemDto
from s2dctl.common.reports.utils import add_context_to_message

from .messages import report_item_msg_from_dto
from .output import (
    error,
    warn,
)


class ReportProcessorToConsole(ReportProcessor):
    def __init__(self, debug: bool = False) -> None:
        super().__init__()
        self.debug = debug

    def _do_report(self, report_item: ReportItem) -> None:
        report_item_dto = report_item.to_dto()
        if (
            self.debug
            or report_item_dto.severity.level != ReportItemSeverity.DEBUG
        ):
            print_report(report_item_dto)


def print_report(report_item_dto: ReportItemDto) -> None:
    cli_report_msg = report_item_msg_from_dto(report_item_dto.message)
    msg = cli_report_msg.message
    if not msg:
        return
    msg = add_context_to_message(msg, report_item_dto.context)

    severity = report_item_dto.severity.level
    if severity == ReportItemSeverity.ERROR:
        error(
            add_context_to_message(
                cli_report_msg.get_message_with_force_text(
                    report_item_dto.severity.force_code
                ),
                report_item_dto.context,
            )
        )
    elif severity == ReportItemSeverity.WARNING:
        warn(msg)
    else:
        print_to_stderr(msg)
