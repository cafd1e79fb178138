"""Inject overflow-hiding CSS into a NeoLoad report so it fits the build panel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Final

from neoload_report.errors import ReportLinkNotFoundError
from neoload_report.report.extract import first_frame_src, first_stylesheet_href, insert_after_first
from neoload_report.utils.paths import is_writable, read_text, write_text_atomically

LOGGER = logging.getLogger(__name__)

# Persisted markers: previously patched reports are recognised by these exact bytes.
COMMENT_APPLIED_STYLE: Final = "<!-- NeoLoad Jenkins plugin applied style -->"
COMMENT_CSS_APPLIED_STYLE: Final = "/* NeoLoad Jenkins plugin applied style */"

OVERFLOW_STYLE_ATTRIBUTE: Final = " style='overflow-x: hidden;' "
FRAME_ANCHORS: Final[tuple[str, ...]] = ('id="menu"', 'id="content"')
BODY_RULE: Final = "body {"
BODY_OVERRIDE: Final = "\noverflow-x: hidden;"


@dataclass(slots=True)
class ReportCandidate:
    """The report page found for a build, with its content held in memory."""

    file: Path
    href: str
    content: str


def is_already_patched(content: str) -> bool:
    return COMMENT_APPLIED_STYLE in content


def patch_report_content(content: str) -> str:
    """Hide horizontal overflow on the menu and content frames, then mark the page."""

    patched = content
    for anchor in FRAME_ANCHORS:
        patched = insert_after_first(patched, anchor, OVERFLOW_STYLE_ATTRIBUTE)
    return patched + COMMENT_APPLIED_STYLE


def patch_body_rule(content: str, marker: str) -> str:
    """Prepend the overflow override to the first ``body {`` rule and append ``marker``."""

    return insert_after_first(content, BODY_RULE, BODY_OVERRIDE) + marker


def resolve_report_link(report_file: Path, link: str) -> Path:
    """Resolve a link found in the report against the report's directory."""

    return report_file.parent.joinpath(*PurePosixPath(link).parts)


def _patch_linked_file(path: Path, marker: str, encoding: str, logger: logging.Logger) -> None:
    content = read_text(path, encoding=encoding)
    if marker in content:
        logger.debug("patch.already_applied file=%s", path)
        return
    write_text_atomically(path, patch_body_rule(content, marker), encoding=encoding)
    logger.debug("patch.written file=%s", path)


def _menu_file(candidate: ReportCandidate) -> Path:
    link = first_frame_src(candidate.content)
    if link is None:
        raise ReportLinkNotFoundError(f'No src="..." frame reference in {candidate.file}')
    return resolve_report_link(candidate.file, link)


def _stylesheet_file(candidate: ReportCandidate) -> Path:
    link = first_stylesheet_href(candidate.content)
    if link is None:
        raise ReportLinkNotFoundError(f"No <link href=...> stylesheet reference in {candidate.file}")
    return resolve_report_link(candidate.file, link)


def apply_special_formatting(
    candidate: ReportCandidate,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> None:
    """Patch the report page, its menu frame and its stylesheet in that order.

    The report keeps its original modification time so the freshness check keeps
    accepting it on later sidebar renders. Failures are logged and swallowed: a
    partly styled report is still worth linking to, and files already written
    stay written.
    """

    effective_logger = logger or LOGGER
    try:
        candidate.content = patch_report_content(candidate.content)
        if is_writable(candidate.file):
            write_text_atomically(candidate.file, candidate.content, encoding=encoding, preserve_mtime=True)
            effective_logger.debug("patch.written file=%s", candidate.file)
        else:
            effective_logger.debug("patch.report_not_writable file=%s", candidate.file)

        _patch_linked_file(_menu_file(candidate), COMMENT_APPLIED_STYLE, encoding, effective_logger)
        _patch_linked_file(_stylesheet_file(candidate), COMMENT_CSS_APPLIED_STYLE, encoding, effective_logger)
    except (OSError, UnicodeError, ReportLinkNotFoundError) as exc:
        effective_logger.warning("patch.failed file=%s error=%s", candidate.file, exc)


def patch_report_once(
    candidate: ReportCandidate,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> str:
    """Apply the styling unless the report already carries the marker; return its href."""

    if is_already_patched(candidate.content):
        (logger or LOGGER).debug("patch.skipped_already_applied file=%s", candidate.file)
        return candidate.href
    apply_special_formatting(candidate, encoding=encoding, logger=logger)
    return candidate.href
