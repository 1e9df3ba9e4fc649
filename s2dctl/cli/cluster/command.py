import json
import sys
from typing import (
    Any,
    List,
)

from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.cli.common.output import (
    get_continue_confirmation,
    print_dto,
)
from s2dctl.cli.common.parse_args import (
    OUTPUT_FORMAT_VALUE_JSON,
    Argv,
    InputModifiers,
    wait_to_timeout,
)
from s2dctl.common.maintenance_dto import ClusterOperationResultDto
from s2dctl.common.str_tools import format_list
from s2dctl.common.types import OperationResult


def _exit_on_failed_result(
    result_list: List[ClusterOperationResultDto],
) -> None:
    if any(result.result == OperationResult.FAILED for result in result_list):
        sys.exit(1)


def cluster_health_cmd(lib: Any, argv: Argv, modifiers: InputModifiers) -> None:
    """
    Options:
      * --output-format - supported formats: text, json
    """
    modifiers.ensure_only_supported(output_format_supported=True)
    if len(argv) != 1:
        raise CmdLineInputError()
    output_format = modifiers.get_output_format()
    cluster = argv[0]
    unhealthy_list = lib.cluster.get_unhealthy_volumes(cluster)
    if output_format == OUTPUT_FORMAT_VALUE_JSON:
        print(
            json.dumps(
                {"cluster": cluster, "unhealthy_volumes": unhealthy_list},
                indent=2,
            )
        )
    elif unhealthy_list:
        print(f"{cluster}: unhealthy volumes: {format_list(unhealthy_list)}")
    else:
        print(f"{cluster}: all volumes are healthy")
    if unhealthy_list:
        sys.exit(1)


def cluster_shutdown_cmd(
    lib: Any, argv: Argv, modifiers: InputModifiers
) -> None:
    """
    Options:
      * --skip-health-check - proceed even if some volumes are not healthy
      * --yes - do not ask for confirmation of destructive steps
      * --output-format - supported formats: text, json
    """
    modifiers.ensure_only_supported(
        "--skip-health-check", "--yes", output_format_supported=True
    )
    if not argv:
        raise CmdLineInputError()
    output_format = modifiers.get_output_format()
    yes = bool(modifiers.get("--yes"))
    result_list = lib.cluster.shutdown(
        argv,
        skip_health_check=bool(modifiers.get("--skip-health-check")),
        confirm=lambda text: get_continue_confirmation(text, yes),
    )
    print_dto(result_list, output_format)
    _exit_on_failed_result(result_list)


def cluster_startup_cmd(
    lib: Any, argv: Argv, modifiers: InputModifiers
) -> None:
    """
    Options:
      * --wait - timeout of waiting for all nodes to come up
      * --output-format - supported formats: text, json
    """
    modifiers.ensure_only_supported("--wait", output_format_supported=True)
    if not argv:
        raise CmdLineInputError()
    output_format = modifiers.get_output_format()
    result_list = lib.cluster.startup(
        argv, timeout=wait_to_timeout(modifiers.get("--wait"))
    )
    print_dto(result_list, output_format)
    _exit_on_failed_result(result_list)


def cluster_lease_cmd(lib: Any, argv: Argv, modifiers: InputModifiers) -> None:
    """
    Options:
      * --output-format - supported formats: text, json
    """
    modifiers.ensure_only_supported(output_format_supported=True)
    if len(argv) != 1:
        raise CmdLineInputError()
    print_dto(lib.cluster.get_lease(argv[0]), modifiers.get_output_format())


def cluster_lease_clear_cmd(
    lib: Any, argv: Argv, modifiers: InputModifiers
) -> None:
    """
    Options:
      * --yes - do not ask for confirmation
    """
    modifiers.ensure_only_supported("--yes")
    if len(argv) != 1:
        raise CmdLineInputError()
    cluster = argv[0]
    if not get_continue_confirmation(
        f"Removing the maintenance lease of cluster '{cluster}' allows other "
        "maintenance operations to run against the cluster.",
        bool(modifiers.get("--yes")),
    ):
        sys.exit(1)
    lib.cluster.clear_lease(cluster)
