from s2dctl import usage
from s2dctl.cli.cluster import command as cluster_command
from s2dctl.cli.common.routing import create_router

cluster_cmd = create_router(
    {
        "help": lambda lib, argv, modifiers: print(usage.cluster(argv)),
        "health": cluster_command.cluster_health_cmd,
        "shutdown": cluster_command.cluster_shutdown_cmd,
        "startup": cluster_command.cluster_startup_cmd,
        "lease": cluster_command.cluster_lease_cmd,
        "lease-clear": cluster_command.cluster_lease_clear_cmd,
    },
    ["cluster"],
)
