from typing import Any

from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.cli.common.output import print_dto
from s2dctl.cli.common.parse_args import (
    Argv,
    InputModifiers,
    wait_to_timeout,
)


def node_maintenance_cmd(
    lib: Any, argv: Argv, modifiers: InputModifiers, enable: bool
) -> None:
    """
    Options:
      * --only-cluster - pause / resume the node only
      * --only-storage - enable / disable storage maintenance only
      * --wait - timeout of the node drain, enable only
      * --output-format - supported formats: text, json
    """
    supported_options = ["--only-cluster", "--only-storage"]
    if enable:
        supported_options.append("--wait")
    modifiers.ensure_only_supported(
        *supported_options, output_format_supported=True
    )
    if len(argv) != 1:
        raise CmdLineInputError()
    modifiers.ensure_not_mutually_exclusive("--only-cluster", "--only-storage")
    output_format = modifiers.get_output_format()

    if enable:
        state_dto = lib.node.enable_maintenance(
            argv[0],
            only_cluster=bool(modifiers.get("--only-cluster")),
            only_storage=bool(modifiers.get("--only-storage")),
            timeout=wait_to_timeout(modifiers.get("--wait")),
        )
    else:
        state_dto = lib.node.disable_maintenance(
            argv[0],
            only_cluster=bool(modifiers.get("--only-cluster")),
            only_storage=bool(modifiers.get("--only-storage")),
        )
    print_dto(state_dto, output_format)


def node_status_cmd(lib: Any, argv: Argv, modifiers: InputModifiers) -> None:
    """
    Options:
      * --cluster - cluster of the nodes, all its nodes if no node specified
      * --output-format - supported formats: text, json
    """
    modifiers.ensure_only_supported("--cluster", output_format_supported=True)
    if not argv and not modifiers.get("--cluster"):
        raise CmdLineInputError(
            "At least one node or --cluster must be specified"
        )
    output_format = modifiers.get_output_format()
    cluster_name = modifiers.get("--cluster")
    print_dto(
        lib.node.get_maintenance_state(
            argv, cluster_name=str(cluster_name) if cluster_name else None
        ),
        output_format,
    )
