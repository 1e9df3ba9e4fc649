import getopt
import logging
import sys

from s2dctl import (
    settings,
    usage,
)
from s2dctl.cli.common import (
    errors,
    parse_args,
    routing,
)
from s2dctl.cli.common.env import Env
from s2dctl.cli.common.lib_wrapper import Library
from s2dctl.cli.common.tools import print_to_stderr
from s2dctl.cli.reports import (
    ReportProcessorToConsole,
    process_library_reports,
)
from s2dctl.cli.reports.output import error
from s2dctl.cli.routing import (
    cau,
    cluster,
    node,
    patch,
)
from s2dctl.lib.errors import LibraryError


def _setup_logging(debug: bool) -> None:
    logger = logging.getLogger("s2dctl")
    if debug:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s")
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.addHandler(logging.NullHandler())


def main(argv=None):
    # pylint: disable=too-many-branches
    argv = argv if argv else sys.argv[1:]
    s2dctl_options = {}

    waitsecs = None
    new_argv = []
    for arg in argv:
        if arg.startswith("--wait="):
            tempsecs = arg.replace("--wait=", "")
            if tempsecs:
                waitsecs = tempsecs
                arg = "--wait"
        new_argv.append(arg)
    argv = new_argv

    try:
        options, argv = getopt.gnu_getopt(
            argv,
            parse_args.S2DCTL_SHORT_OPTIONS,
            parse_args.S2DCTL_LONG_OPTIONS,
        )
    except getopt.GetoptError as err:
        error(str(err))
        print_to_stderr(usage.main())
        sys.exit(1)

    for opt, val in options:
        if opt in s2dctl_options:
            raise error(f"{opt} can only be used once")
        s2dctl_options[opt] = val

        if opt in ("-h", "--help"):
            if not argv:
                print(usage.main())
                sys.exit()
            argv = [argv[0], "help"] + argv[1:]
        elif opt == "--version":
            print(settings.s2dctl_version)
            sys.exit()
        elif opt == "--wait":
            s2dctl_options[opt] = waitsecs
        elif opt == "--request-timeout":
            request_timeout_valid = False
            try:
                timeout = int(val)
                if timeout > 0:
                    s2dctl_options[opt] = timeout
                    request_timeout_valid = True
            except ValueError:
                pass
            if not request_timeout_valid:
                raise error(
                    f"'{val}' is not a valid --request-timeout value, use "
                    "a positive integer"
                )

    debug = "--debug" in s2dctl_options
    _setup_logging(debug)

    env = Env(ReportProcessorToConsole(debug=debug))
    env.debug = debug
    env.request_timeout = s2dctl_options.get("--request-timeout")

    cmd_map = {
        "node": node.node_cmd,
        "cluster": cluster.cluster_cmd,
        "cau": cau.cau_cmd,
        "patch": patch.patch_cmd,
        "help": lambda lib, argv, modifiers: usage.full_usage(),
    }
    try:
        routing.create_router(cmd_map, [])(
            Library(env), argv, parse_args.InputModifiers(s2dctl_options)
        )
    except LibraryError as e:
        process_library_reports(list(e.args))
    except errors.CmdLineInputError:
        if argv and argv[0] in cmd_map:
            usage.show(argv[0], [])
        else:
            print_to_stderr(usage.main())
        sys.exit(1)
    if env.report_processor.has_errors:
        sys.exit(1)
