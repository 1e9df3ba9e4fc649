import json
from typing import (
    Sequence,
    Union,
)

from s2dctl.cli.common.parse_args import OUTPUT_FORMAT_VALUE_JSON
from s2dctl.cli.common.tools import (
    get_terminal_input,
    is_run_interactive,
)
from s2dctl.cli.reports.output import (
    error,
    warn,
)
from s2dctl.common.interface.dto import (
    DataTransferObject,
    to_dict,
)


def lines_to_str(lines: Sequence[str]) -> str:
    return "\n".join(lines)


def print_dto(
    dto_obj: Union[DataTransferObject, Sequence[DataTransferObject]],
    output_format: str,
) -> None:
    """
    Print a DTO or a list of DTOs in the requested format, as JSON or using
    their text representation
    """
    dto_list = (
        list(dto_obj)
        if isinstance(dto_obj, (list, tuple))
        else [dto_obj]
    )
    if output_format == OUTPUT_FORMAT_VALUE_JSON:
        payload = [to_dict(item) for item in dto_list]
        print(
            json.dumps(
                payload if isinstance(dto_obj, (list, tuple)) else payload[0],
                indent=2,
            )
        )
        return
    output = lines_to_str([str(item) for item in dto_list])
    if output:
        print(output)


def _get_continue_confirmation_interactive(warning_text: str) -> bool:
    """
    Warns user and asks for permission to continue. Returns True if user wishes
    to continue, False otherwise.

    warning_text -- describes action that we want the user to confirm
    """
    print(f"WARNING: {warning_text}")
    response = get_terminal_input(
        "Type 'yes' or 'y' to proceed, anything else to cancel: "
    )
    if response.strip().lower() in ["yes", "y"]:
        return True
    print("Canceled")
    return False


def get_continue_confirmation(warning_text: str, yes: bool) -> bool:
    """
    Either asks user to confirm continuation interactively or use --yes to
    override when running from a script. Returns True if user wants to continue.
    Returns False if user cancels the action or if a non-interactive
    environment is detected.

    warning_text -- describes action that we want the user to confirm
    yes -- was --yes flag provided?
    """
    if yes:
        warn(warning_text)
        return True
    if not is_run_interactive():
        error(f"{warning_text} Use --yes to confirm")
        return False
    return _get_continue_confirmation_interactive(warning_text)
