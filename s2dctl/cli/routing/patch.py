from s2dctl import usage
from s2dctl.cli.common.routing import create_router
from s2dctl.cli.patch import command as patch_command

patch_cmd = create_router(
    {
        "help": lambda lib, argv, modifiers: print(usage.patch(argv)),
        "check": patch_command.patch_check_cmd,
    },
    ["patch"],
)
