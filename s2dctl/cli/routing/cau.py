from s2dctl import usage
from s2dctl.cli.cau import command as cau_command
from s2dctl.cli.common.routing import create_router

cau_cmd = create_router(
    {
        "help": lambda lib, argv, modifiers: print(usage.cau(argv)),
        "pre-update": cau_command.pre_update_cmd,
        "post-update": cau_command.post_update_cmd,
    },
    ["cau"],
)
