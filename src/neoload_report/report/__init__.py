"""Locating, validating and styling NeoLoad HTML reports."""

from neoload_report.report.detector import (
    LEGACY_REPORT_TITLES,
    TAG_HTML_GENERATED_BY_NEOLOAD,
    is_html_file_name,
    is_neoload_html_report,
)
from neoload_report.report.freshness import is_from_current_build, is_newer_than, workspace_file_path
from neoload_report.report.inventory import (
    SCAN_DECISION_VALUES,
    build_scan_inventory,
    decision_counts,
    empty_inventory,
    write_scan_inventory,
)
from neoload_report.report.locator import ReportLocator
from neoload_report.report.patcher import (
    COMMENT_APPLIED_STYLE,
    COMMENT_CSS_APPLIED_STYLE,
    ReportCandidate,
    apply_special_formatting,
    patch_report_once,
)

__all__ = [
    "LEGACY_REPORT_TITLES",
    "TAG_HTML_GENERATED_BY_NEOLOAD",
    "is_html_file_name",
    "is_neoload_html_report",
    "is_from_current_build",
    "is_newer_than",
    "workspace_file_path",
    "SCAN_DECISION_VALUES",
    "build_scan_inventory",
    "decision_counts",
    "empty_inventory",
    "write_scan_inventory",
    "ReportLocator",
    "COMMENT_APPLIED_STYLE",
    "COMMENT_CSS_APPLIED_STYLE",
    "ReportCandidate",
    "apply_special_formatting",
    "patch_report_once",
]
