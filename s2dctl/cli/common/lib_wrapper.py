import logging
from collections import namedtuple

from s2dctl.lib.commands import (
    cau,
    cluster,
    node,
    patch,
)
from s2dctl.lib.env import LibraryEnvironment


def wrapper(dictionary):
    return namedtuple("wrapper", dictionary.keys())(**dictionary)


def cli_env_to_lib_env(cli_env):
    return LibraryEnvironment(
        logging.getLogger("s2dctl"),
        cli_env.report_processor,
        runner_env_vars=cli_env.runner_env_vars,
        lease_holder=cli_env.lease_holder,
        request_timeout=cli_env.request_timeout,
    )


def bind(cli_env, run_library_command):
    def run(*args, **kwargs):
        lib_env = cli_env_to_lib_env(cli_env)
        return run_library_command(lib_env, *args, **kwargs)

    return run


def bind_all(env, dictionary):
    return wrapper(
        dict(
            (exposed_fn, bind(env, library_fn))
            for exposed_fn, library_fn in dictionary.items()
        )
    )


def load_module(env, name):
    if name == "node":
        return bind_all(
            env,
            {
                "enable_maintenance": node.enable_maintenance,
                "disable_maintenance": node.disable_maintenance,
                "get_maintenance_state": node.get_maintenance_state,
            },
        )

    if name == "cluster":
        return bind_all(
            env,
            {
                "shutdown": cluster.shutdown,
                "startup": cluster.startup,
                "get_lease": cluster.get_lease,
                "clear_lease": cluster.clear_lease,
                "get_unhealthy_volumes": cluster.get_unhealthy_volumes,
            },
        )

    if name == "cau":
        return bind_all(
            env,
            {
                "pre_update": cau.pre_update,
                "post_update": cau.post_update,
            },
        )

    if name == "patch":
        return bind_all(
            env,
            {
                "check_patch_level": patch.check_patch_level,
            },
        )

    raise Exception("No library part '{0}'".format(name))


class Library:
    # pylint: disable=too-few-public-methods
    def __init__(self, env):
        self.env = env

    def __getattr__(self, name):
        return load_module(self.env, name)
