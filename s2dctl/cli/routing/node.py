from functools import partial

from s2dctl import usage
from s2dctl.cli.common.routing import create_router
from s2dctl.cli.node import command as node_command

node_cmd = create_router(
    {
        "help": lambda lib, argv, modifiers: print(usage.node(argv)),
        "maintenance": partial(node_command.node_maintenance_cmd, enable=True),
        "unmaintenance": partial(
            node_command.node_maintenance_cmd, enable=False
        ),
        "status": node_command.node_status_cmd,
    },
    ["node"],
)
