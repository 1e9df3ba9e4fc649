from typing import (
    MutableSet,
    Optional,
    TypeVar,
    Union,
)

from lxml import etree
from lxml.etree import _Element

T = TypeVar("T", bound=type)


def get_all_subclasses(cls: T) -> MutableSet[T]:
    subclasses = set(cls.__subclasses__())
    return subclasses.union(
        {s for c in subclasses for s in get_all_subclasses(c)}
    )


def xml_fromstring(xml: str) -> _Element:
    # PowerShell's ConvertTo-Xml emits an encoding declaration:
    # <?xml version="1.0" encoding="utf-8"?>
    # lxml refuses unicode strings with encoding declaration, so we encode the
    # string to bytes.
    return etree.fromstring(
        xml.encode("utf-8"),
        etree.XMLParser(huge_tree=True),
    )


def timeout_to_seconds(timeout: Union[int, str]) -> Optional[int]:
    """
    Transform a timeout string (e.g. 30, 30s, 10m, 1h) to number of seconds.
    If `timeout` is not a valid timeout, `None` is returned.

    timeout -- timeout string
    """
    try:
        candidate = int(timeout)
        if candidate >= 0:
            return candidate
        return None
    except ValueError:
        pass
    timeout = str(timeout)
    suffix_multiplier = {
        "s": 1,
        "sec": 1,
        "m": 60,
        "min": 60,
        "h": 3600,
        "hr": 3600,
    }
    for suffix, multiplier in suffix_multiplier.items():
        if timeout.endswith(suffix):
            candidate2 = timeout[: -len(suffix)]
            if candidate2.isdigit():
                return int(candidate2) * multiplier
    return None
