import sys
from typing import (
    Any,
    Callable,
    List,
    Mapping,
    Optional,
)

from s2dctl import usage
from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.cli.common.parse_args import InputModifiers
from s2dctl.cli.common.tools import print_to_stderr
from s2dctl.cli.reports.output import error
from s2dctl.common.types import StringSequence

CliCmdInterface = Callable[[Any, List[str], InputModifiers], None]


def exit_on_cmdline_input_error(
    cmd_error: Optional[CmdLineInputError],
    main_name: str,
    usage_name: StringSequence,
) -> None:
    if cmd_error and cmd_error.message:
        error(cmd_error.message)
    if cmd_error and cmd_error.hint:
        print_to_stderr(f"Hint: {cmd_error.hint}")
    if not cmd_error or (
        not cmd_error.message or cmd_error.show_both_usage_and_message
    ):
        usage.show(main_name, list(usage_name))
    sys.exit(1)


def create_router(
    cmd_map: Mapping[str, CliCmdInterface],
    usage_sub_cmd: List[str],
    default_cmd: Optional[str] = None,
) -> CliCmdInterface:
    def _router(lib: Any, argv: List[str], modifiers: InputModifiers) -> None:
        if argv:
            sub_cmd, *argv_next = argv
        else:
            if default_cmd is None:
                raise CmdLineInputError()
            sub_cmd, argv_next = default_cmd, []

        try:
            if sub_cmd not in cmd_map:
                sub_cmd = ""
                raise CmdLineInputError()
            return cmd_map[sub_cmd](lib, argv_next, modifiers)
        except CmdLineInputError as e:
            if not usage_sub_cmd:
                raise
            exit_on_cmdline_input_error(
                e, usage_sub_cmd[0], (usage_sub_cmd[1:] + [sub_cmd])
            )
            return None

    return _router
