from typing import (
    Any,
    Dict,
    Mapping,
    Optional,
    get_type_hints,
)

from s2dctl.common.reports import (
    codes,
    dto,
    item,
    messages,
    types,
)
from s2dctl.common.str_tools import format_list
from s2dctl.common.tools import get_all_subclasses


class CliReportMessage:
    def __init__(self, dto_obj: dto.ReportItemMessageDto) -> None:
        self._dto_obj = dto_obj

    @property
    def code(self) -> str:
        return self._dto_obj.code

    @property
    def message(self) -> str:
        return self._dto_obj.message

    @property
    def payload(self) -> Mapping[str, Any]:
        return self._dto_obj.payload

    def get_message_with_force_text(
        self, force_code: Optional[types.ForceCode]
    ) -> str:
        force_text_map = {
            codes.SKIP_HEALTH_CHECK: ", use --skip-health-check to override",
        }
        force_text = force_text_map.get(force_code, "") if force_code else ""

        return f"{self.message}{force_text}"


class CliReportMessageCustom(CliReportMessage):
    _obj: item.ReportItemMessage

    def __init__(self, dto_obj: dto.ReportItemMessageDto) -> None:
        super().__init__(dto_obj)
        self._obj = get_type_hints(self.__class__).get("_obj")(  # type: ignore
            **dto_obj.payload
        )

    @property
    def message(self) -> str:
        raise NotImplementedError()


class LeaseHeld(CliReportMessageCustom):
    _obj: messages.LeaseHeld

    @property
    def message(self) -> str:
        return (
            f"{self._obj.message}. If the holder is not running anymore, "
            f"run 's2dctl cluster lease-clear {self._obj.cluster}' to remove "
            "the lease."
        )


class MutuallyExclusiveOptions(CliReportMessageCustom):
    _obj: messages.MutuallyExclusiveOptions

    @property
    def message(self) -> str:
        return "Only one of {} can be used".format(
            format_list([f"--{name}" for name in self._obj.option_names])
        )


class OperationTimedOut(CliReportMessageCustom):
    _obj: messages.OperationTimedOut

    @property
    def message(self) -> str:
        return (
            f"{self._obj.message}. Use --wait=<timeout> to wait longer."
        )


def _create_report_msg_map() -> Dict[str, type]:
    result: Dict[str, type] = {}
    for report_msg_cls in get_all_subclasses(CliReportMessageCustom):
        # pylint: disable=protected-access
        code = (
            get_type_hints(report_msg_cls)
            .get("_obj", item.ReportItemMessage)
            ._code
        )
        if code:
            if code in result:
                raise AssertionError()
            result[code] = report_msg_cls
    return result


REPORT_MSG_MAP = _create_report_msg_map()


def report_item_msg_from_dto(obj: dto.ReportItemMessageDto) -> CliReportMessage:
    return REPORT_MSG_MAP.get(obj.code, CliReportMessage)(obj)
