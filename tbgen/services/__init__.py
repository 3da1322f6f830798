from .alternatives import Alternative, parse_alternative_data
from .badges import Badge, BadgeSpec, resolve_badge
from .report_builder import ReportGroupResult, ReportResult, ReportRow, build_all, build_report
from .reports import GROUPS, REPORTS, Report, ReportContext, RowResult, get_report

__all__ = [
    "Alternative",
    "Badge",
    "BadgeSpec",
    "GROUPS",
    "REPORTS",
    "Report",
    "ReportContext",
    "ReportGroupResult",
    "ReportResult",
    "ReportRow",
    "RowResult",
    "build_all",
    "build_report",
    "get_report",
    "parse_alternative_data",
    "resolve_badge",
]
