"""Sidebar link for a build's NeoLoad performance report."""

from __future__ import annotations

import enum
import logging

from neoload_report.builds import BuildRecord
from neoload_report.config import SidebarConfig
from neoload_report.report.locator import ReportLocator

LOGGER = logging.getLogger(__name__)


class Resolution(enum.Enum):
    """Whether the report lookup has run, and what it found."""

    UNRESOLVED = "unresolved"
    FOUND = "found"
    NOT_FOUND = "not_found"


class NeoResultsAction:
    """Label, icon and URL of the build's "Performance Result" link.

    The first accessor call runs the locate/patch pipeline once; every accessor
    then answers from the cached outcome and returns None when no report exists,
    which hides the link.
    """

    def __init__(
        self,
        build: BuildRecord,
        strict: bool = False,
        encoding: str = "utf-8",
        sidebar: SidebarConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.build = build
        self.sidebar = sidebar or SidebarConfig()
        self.locator = ReportLocator(build, strict=strict, encoding=encoding, logger=logger)
        self.resolution = Resolution.UNRESOLVED

    def html_report_file_path(self) -> str | None:
        """Run the lookup now, record the outcome, and return the report href."""

        href = self.locator.html_report_href()
        self.resolution = Resolution.FOUND if href is not None else Resolution.NOT_FOUND
        return href

    def _found_report_file(self) -> bool:
        if self.resolution is Resolution.UNRESOLVED:
            self.html_report_file_path()
        return self.resolution is Resolution.FOUND

    def display_name(self) -> str | None:
        return self.sidebar.display_name if self._found_report_file() else None

    def icon_file_name(self) -> str | None:
        return self.sidebar.icon_file_name if self._found_report_file() else None

    def url_name(self) -> str | None:
        return self.sidebar.url_name if self._found_report_file() else None


def add_action_if_not_exists(
    build: BuildRecord,
    strict: bool = False,
    encoding: str = "utf-8",
    sidebar: SidebarConfig | None = None,
    logger: logging.Logger | None = None,
) -> NeoResultsAction:
    """Attach a :class:`NeoResultsAction` to ``build`` unless one is already there."""

    for action in build.actions:
        if isinstance(action, NeoResultsAction):
            return action

    action = NeoResultsAction(build, strict=strict, encoding=encoding, sidebar=sidebar, logger=logger)
    build.actions.append(action)
    (logger or LOGGER).debug(
        "sidebar.action_added build=%s project=%s",
        build.number,
        build.project_name,
    )
    return action
