import re
from typing import Callable

from s2dctl import settings
from s2dctl.cli.common.parse_args import Argv
from s2dctl.cli.common.tools import print_to_stderr


def full_usage() -> None:
    out = ""
    out += main()
    out += strip_extras(node([]))
    out += strip_extras(cluster([]))
    out += strip_extras(cau([]))
    out += strip_extras(patch([]))
    print(out.strip())


def strip_extras(text: str) -> str:
    lines = text.split("\n")
    ret = ""
    for line in lines:
        if line.startswith("Usage: "):
            ret += "\n" + line[len("Usage: ") :] + "\n"
        elif line.startswith("    ") and not line.startswith("        "):
            ret += line + "\n"
    return ret


def sub_usage(args: Argv, output: str) -> str:
    # Print only output for items that match the args
    # If no args, then we return the full output
    args = [arg for arg in args if arg]
    if not args:
        return output
    args_str = " ".join(args)

    ret = ""
    lines = output.split("\n")
    begin_printing = False
    usage = re.sub(r"<command>", args_str, lines[1])
    for line in lines:
        if (
            begin_printing
            and re.match("^    [^ ]", line)
            and not re.match("^    " + re.escape(args_str), line)
        ):
            begin_printing = False
        if not re.match("^ ", line) and not re.match("^$", line):
            begin_printing = False
        if re.match("^    " + re.escape(args_str), line):
            begin_printing = True

        if begin_printing:
            ret += line + "\n"

    if ret.strip() != "":
        return "\n" + usage + "\n" + ret.rstrip() + "\n"
    return sub_usage(args[:-1], output)


def main() -> str:
    return f"""
Usage: s2dctl [-h] [commands]...
Maintenance of Storage Spaces Direct failover clusters, version {settings.s2dctl_version}

Options:
    -h, --help         Display usage and exit.
    --debug            Print all external commands run and their output.
    --version          Print s2dctl version information.
    --request-timeout  Timeout of http requests in seconds. Default is
                       {settings.default_request_timeout}s.
    --output-format    Output format of commands: text or json. Default is
                       text.

Commands:
    node        Put cluster nodes into and out of maintenance.
    cluster     Shut down and start up whole clusters.
    cau         Cluster-Aware Updating pre-update and post-update hooks.
    patch       Check patch level of cluster nodes.
"""


def node(args: Argv) -> str:
    output = """
Usage: s2dctl node <command>
Manage maintenance of cluster nodes

Commands:
    maintenance <node> [--only-cluster | --only-storage] [--wait=<timeout>]
        Put the node into maintenance. The node is paused and its roles are
        drained to other nodes, then storage maintenance mode is enabled on
        its disks. Nothing is changed if any volume is not healthy. If any
        step fails, the node is returned to its previous state.
        If --only-cluster is specified, the node is only paused and drained.
        If --only-storage is specified, only storage maintenance mode is
        enabled.
        --wait specifies how long to wait for the drain to complete, e.g. 30m.

    unmaintenance <node> [--only-cluster | --only-storage]
        Take the node out of maintenance. Storage maintenance mode is
        disabled on its disks, then the node is resumed and its roles are
        failed back.

    status [<node>...] [--cluster=<cluster>]
        Show cluster state and storage maintenance state of the specified
        nodes. If no node is specified, show state of all nodes of the
        cluster specified by --cluster.
"""
    return sub_usage(args, output)


def cluster(args: Argv) -> str:
    output = """
Usage: s2dctl cluster <command>
Manage whole clusters

Commands:
    health <cluster>
        Show volumes of the cluster which are not healthy. Exit with 1 if
        there are any.

    shutdown <cluster>... [--skip-health-check] [--yes]
        Shut down the clusters for offline maintenance. Cluster shared
        volumes and the storage pool are stopped, then the cluster is
        stopped and its cluster service is disabled on all nodes. The
        shutdown is refused if any virtual machine is running or any volume
        is not healthy. Use --skip-health-check to shut down a cluster with
        unhealthy volumes. Each step must be confirmed unless --yes is
        specified. A failure stops processing of the failed cluster only.

    startup <seed node>... [--wait=<timeout>]
        Start clusters shut down by the shutdown command. The cluster is
        force started on the seed node, then the cluster service is enabled
        and started on all other nodes. Once all nodes are up, the storage
        pool and cluster shared volumes are started.
        --wait specifies how long to wait for the nodes to come up.

    lease <cluster>
        Show the maintenance lease of the cluster. The lease is held by
        s2dctl while it changes the cluster, to prevent concurrent runs.

    lease-clear <cluster> [--yes]
        Remove the maintenance lease of the cluster, e.g. when s2dctl holding
        the lease has been killed.
"""
    return sub_usage(args, output)


def cau(args: Argv) -> str:
    output = """
Usage: s2dctl cau <command>
Cluster-Aware Updating hooks

Commands:
    pre-update <node> [--wait=<timeout>]
        Put the node into maintenance before it is updated. A cluster witness
        must be configured, all volumes must be healthy and no other node may
        be in storage maintenance. If any step fails, the node is returned to
        its previous state.
        --wait specifies how long to wait for volumes to become healthy and
        for the node to drain.

    post-update <node> [--wait=<timeout>]
        Take the updated node out of maintenance and wait for volumes to
        become healthy.
        --wait specifies how long to wait for volumes to become healthy.
"""
    return sub_usage(args, output)


def patch(args: Argv) -> str:
    output = """
Usage: s2dctl patch <command>
Check patch level of cluster nodes

Commands:
    check <node>... --metadata-url=<url>
        Compare operating system builds of the nodes with the update chain
        published at the url and list missing updates.
"""
    return sub_usage(args, output)


def show(main_usage_name: str, rest_usage_names: Argv) -> None:
    usage_map: dict[str, Callable[[Argv], str]] = {
        "cau": cau,
        "cluster": cluster,
        "node": node,
        "patch": patch,
    }
    if main_usage_name not in usage_map:
        raise ValueError(
            "Bad usage name '{0}' there can be '{1}'".format(
                main_usage_name, list(usage_map.keys())
            )
        )
    print_to_stderr(usage_map[main_usage_name](rest_usage_names))
