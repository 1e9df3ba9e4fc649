from typing import Optional

from s2dctl.common.reports.dto import ReportItemContextDto


def add_context_to_message(
    msg: str, context: Optional[ReportItemContextDto]
) -> str:
    if context:
        msg = f"{context.target}: {msg}"
    return msg
