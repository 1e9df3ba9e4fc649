from .output import process_library_reports
from .processor import ReportProcessorToConsole
