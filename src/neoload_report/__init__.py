"""Locate, validate and style NeoLoad HTML reports among CI build artifacts."""

from neoload_report.builds import Artifact, BuildRecord, load_build_record
from neoload_report.report.locator import ReportLocator
from neoload_report.sidebar import NeoResultsAction, Resolution, add_action_if_not_exists

__all__ = [
    "Artifact",
    "BuildRecord",
    "load_build_record",
    "ReportLocator",
    "NeoResultsAction",
    "Resolution",
    "add_action_if_not_exists",
]

__version__ = "0.1.0"
