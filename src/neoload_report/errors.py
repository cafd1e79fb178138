"""Exception types raised by neoload_report."""

from __future__ import annotations


class NeoLoadReportError(Exception):
    """Base class for neoload_report errors."""


class BuildRecordError(NeoLoadReportError, ValueError):
    """Raised when a build record file cannot be parsed or validated."""


class ReportLinkNotFoundError(NeoLoadReportError, LookupError):
    """Raised when a report does not reference the menu frame or stylesheet."""
