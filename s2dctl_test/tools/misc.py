from unittest import mock

from s2dctl.cli.common.parse_args import InputModifiers


def dict_to_modifiers(options):
    def _convert_val(val):
        if val is True:
            return ""
        return val

    return InputModifiers(
        {
            f"--{opt}": _convert_val(val)
            for opt, val in options.items()
            if val is not False
        }
    )


def create_patcher(target_prefix_or_module):
    """
    Return function for patching tests with preconfigured target prefix
    string|module target_prefix_or_module could be:
        * a prefix for patched names. Typically tested module:
            "s2dctl.lib.commands.node"
        * a (imported) module: s2dctl.lib.wait
        Between prefix and target is "." (dot)
    """
    prefix = target_prefix_or_module
    if not isinstance(target_prefix_or_module, str):
        prefix = target_prefix_or_module.__name__

    def patch(target, *args, **kwargs):
        return mock.patch("{0}.{1}".format(prefix, target), *args, **kwargs)

    return patch


def patch_clock(test_case):
    """
    Replace sleeping in s2dctl.lib.wait by advancing a simulated clock, return
    the sleep mock
    """
    clock = {"now": 0.0}

    def _sleep(seconds):
        clock["now"] += seconds

    sleep_patcher = mock.patch("s2dctl.lib.wait.sleep", side_effect=_sleep)
    monotonic_patcher = mock.patch(
        "s2dctl.lib.wait.monotonic", side_effect=lambda: clock["now"]
    )
    test_case.addCleanup(sleep_patcher.stop)
    test_case.addCleanup(monotonic_patcher.stop)
    monotonic_patcher.start()
    return sleep_patcher.start()
