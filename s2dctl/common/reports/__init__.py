from . import (
    codes,
    const,
    item,
    messages,
    types,
)
from .dto import ReportItemDto
from .item import (
    ReportItem,
    ReportItemContext,
    ReportItemList,
    ReportItemMessage,
    ReportItemSeverity,
    get_severity,
    get_severity_from_flags,
)
from .processor import (
    ReportProcessor,
    ReportProcessorToLog,
    has_errors,
)
