"""Find the NeoLoad report among a build's artifacts and prepare it for display."""

from __future__ import annotations

import logging

from neoload_report.builds import Artifact, BuildRecord
from neoload_report.report.detector import is_html_file_name, is_neoload_html_report
from neoload_report.report.freshness import is_from_current_build
from neoload_report.report.patcher import ReportCandidate, patch_report_once
from neoload_report.utils.paths import read_text

LOGGER = logging.getLogger(__name__)


class ReportLocator:
    """Scan one build's artifacts for its NeoLoad HTML report.

    With ``strict`` set, a failure while reading an artifact or checking its
    workspace timestamp is raised instead of logged and skipped.
    """

    def __init__(
        self,
        build: BuildRecord,
        strict: bool = False,
        encoding: str = "utf-8",
        logger: logging.Logger | None = None,
    ) -> None:
        self.build = build
        self.strict = strict
        self.encoding = encoding
        self.logger = logger or LOGGER

    def _candidate_for(self, artifact: Artifact) -> ReportCandidate | None:
        content = read_text(artifact.file_path, encoding=self.encoding)
        if not is_neoload_html_report(content):
            return None
        if not is_from_current_build(self.build, artifact, logger=self.logger):
            self.logger.debug(
                "locate.stale_report build=%s file=%s",
                self.build.number,
                artifact.file_name,
            )
            return None
        return ReportCandidate(file=artifact.file_path, href=artifact.href, content=content)

    def find_html_report_artifact(self) -> ReportCandidate | None:
        """Return the first fresh NeoLoad report artifact, in artifact order."""

        for artifact in self.build.artifacts:
            if not is_html_file_name(artifact.file_name):
                continue
            try:
                candidate = self._candidate_for(artifact)
            except OSError as exc:
                self.logger.debug("locate.read_failed file=%s error=%s", artifact.file_path, exc, exc_info=True)
                if self.strict:
                    raise
                continue
            if candidate is not None:
                self.logger.debug("locate.found build=%s file=%s", self.build.number, artifact.file_path)
                return candidate
        return None

    def html_report_href(self) -> str | None:
        """Locate the report, style it if needed, and return its href (None if absent)."""

        candidate = self.find_html_report_artifact()
        if candidate is None:
            return None
        return patch_report_once(candidate, encoding=self.encoding, logger=self.logger)
