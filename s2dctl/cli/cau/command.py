from typing import Any

from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.cli.common.output import print_dto
from s2dctl.cli.common.parse_args import (
    Argv,
    InputModifiers,
    wait_to_timeout,
)


def _update_hook_cmd(
    hook: Any, argv: Argv, modifiers: InputModifiers
) -> None:
    modifiers.ensure_only_supported("--wait", output_format_supported=True)
    if len(argv) != 1:
        raise CmdLineInputError()
    output_format = modifiers.get_output_format()
    print_dto(
        hook(argv[0], timeout=wait_to_timeout(modifiers.get("--wait"))),
        output_format,
    )


def pre_update_cmd(lib: Any, argv: Argv, modifiers: InputModifiers) -> None:
    """
    Options:
      * --wait - timeout of waiting for healthy volumes and the node drain
      * --output-format - supported formats: text, json
    """
    _update_hook_cmd(lib.cau.pre_update, argv, modifiers)


def post_update_cmd(lib: Any, argv: Argv, modifiers: InputModifiers) -> None:
    """
    Options:
      * --wait - timeout of waiting for healthy volumes
      * --output-format - supported formats: text, json
    """
    _update_hook_cmd(lib.cau.post_update, argv, modifiers)
