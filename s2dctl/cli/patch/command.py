from typing import Any

from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.cli.common.output import print_dto
from s2dctl.cli.common.parse_args import (
    Argv,
    InputModifiers,
)


def patch_check_cmd(lib: Any, argv: Argv, modifiers: InputModifiers) -> None:
    """
    Options:
      * --metadata-url - url of the update metadata document
      * --output-format - supported formats: text, json
    """
    modifiers.ensure_only_supported(
        "--metadata-url", output_format_supported=True
    )
    if not argv:
        raise CmdLineInputError()
    metadata_url = modifiers.get("--metadata-url")
    if not metadata_url:
        raise CmdLineInputError("--metadata-url must be specified")
    output_format = modifiers.get_output_format()
    print_dto(
        lib.patch.check_patch_level(argv, str(metadata_url)),
        output_format,
    )
