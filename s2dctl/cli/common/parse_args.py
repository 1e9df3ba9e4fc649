from functools import partial
from typing import (
    Final,
    Mapping,
    Optional,
    Union,
)

from s2dctl.cli.common.errors import CmdLineInputError
from s2dctl.common.str_tools import (
    format_list,
    format_plural,
)
from s2dctl.common.tools import timeout_to_seconds
from s2dctl.common.types import StringCollection

# sys.argv always returns a list, we don't need StringSequence in here
Argv = list[str]
ModifierValueType = Union[None, bool, str]

_OUTPUT_FORMAT_OPTION_STR: Final = "output-format"
OUTPUT_FORMAT_OPTION: Final = f"--{_OUTPUT_FORMAT_OPTION_STR}"
OUTPUT_FORMAT_VALUE_JSON: Final = "json"
OUTPUT_FORMAT_VALUE_TEXT: Final = "text"
OUTPUT_FORMAT_VALUES: Final = frozenset(
    (
        OUTPUT_FORMAT_VALUE_JSON,
        OUTPUT_FORMAT_VALUE_TEXT,
    )
)

# h = help
S2DCTL_SHORT_OPTIONS: Final = "h"
S2DCTL_LONG_OPTIONS: Final = [
    "debug",
    "version",
    "help",
    "request-timeout=",
    # output format of commands: json, text
    f"{_OUTPUT_FORMAT_OPTION_STR}=",
    # proceed with dangerous actions without asking
    "yes",
    # timeout of polling, the value is passed as --wait=<timeout>
    "wait",
    # node maintenance scope
    "only-cluster",
    "only-storage",
    # cluster shutdown
    "skip-health-check",
    "cluster=",
    "metadata-url=",
]


def wait_to_timeout(wait: Union[bool, str, None]) -> Optional[int]:
    """
    Return the timeout specified by --wait in seconds, None if the default
    timeout is to be used
    """
    if wait is False or wait is None:
        return None
    timeout = timeout_to_seconds(str(wait))
    if timeout is None:
        raise CmdLineInputError(f"'{wait}' is not a valid interval value")
    return timeout


class InputModifiers:
    def __init__(self, options: Mapping[str, ModifierValueType]):
        self._defined_options = set(options.keys())
        self._options = dict(options)
        self._options.update(
            {
                # boolean values
                "--debug": "--debug" in options,
                "--only-cluster": "--only-cluster" in options,
                "--only-storage": "--only-storage" in options,
                "--skip-health-check": "--skip-health-check" in options,
                "--yes": "--yes" in options,
                # string values
                "--cluster": options.get("--cluster", None),
                "--metadata-url": options.get("--metadata-url", None),
                OUTPUT_FORMAT_OPTION: options.get(
                    OUTPUT_FORMAT_OPTION, OUTPUT_FORMAT_VALUE_TEXT
                ),
                "--request-timeout": options.get("--request-timeout", None),
                "--wait": options.get("--wait", False),
            }
        )

    def ensure_only_supported(
        self,
        *supported_options: str,
        output_format_supported: bool = False,
    ) -> None:
        # --debug and --request-timeout are supported in all commands
        supported_options_set = set(supported_options) | {
            "--debug",
            "--request-timeout",
        }
        if output_format_supported:
            supported_options_set.add(OUTPUT_FORMAT_OPTION)
        unsupported_options = self._defined_options - supported_options_set
        if unsupported_options:
            pluralize = partial(format_plural, unsupported_options)
            raise CmdLineInputError(
                "Specified {option} {option_list} {_is} not supported in this "
                "command".format(
                    option=pluralize("option"),
                    option_list=format_list(sorted(unsupported_options)),
                    _is=pluralize("is"),
                )
            )

    def ensure_not_mutually_exclusive(self, *mutually_exclusive: str) -> None:
        """
        Raise CmdLineInputError if several exclusive options were specified

        mutually_exclusive -- mutually exclusive options
        """
        options_to_report = self._defined_options & set(mutually_exclusive)
        if len(options_to_report) > 1:
            raise CmdLineInputError(
                "Only one of {} can be used".format(
                    format_list(sorted(options_to_report))
                )
            )

    def get(
        self, option: str, default: ModifierValueType = None
    ) -> ModifierValueType:
        if option in self._defined_options:
            return self._options[option]
        if default is not None:
            return default
        if option in self._options:
            return self._options[option]
        raise AssertionError(f"Non existing default value for '{option}'")

    def get_output_format(
        self,
        supported_formats: StringCollection = OUTPUT_FORMAT_VALUES,
    ) -> str:
        output_format = self.get(OUTPUT_FORMAT_OPTION)
        if output_format in supported_formats:
            return str(output_format)
        raise CmdLineInputError(
            (
                "Unknown value '{value}' for '{option}' option. Supported "
                "{value_pl} {is_pl}: {supported}"
            ).format(
                value=output_format,
                option=OUTPUT_FORMAT_OPTION,
                value_pl=format_plural(supported_formats, "value"),
                is_pl=format_plural(supported_formats, "is"),
                supported=format_list(list(supported_formats)),
            )
        )
