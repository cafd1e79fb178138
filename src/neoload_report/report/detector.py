"""Recognise HTML reports generated by NeoLoad."""

from __future__ import annotations

from typing import Final

TAG_HTML_GENERATED_BY_NEOLOAD: Final = "#HTML Report Generated by NeoLoad#"

# Older NeoLoad versions carry no tag; only these two localized titles are known.
LEGACY_REPORT_TITLES: Final[tuple[str, ...]] = (
    "<title>Rapport de test de performance</title>",
    "<title>Performance Testing Report</title>",
)


def is_html_file_name(file_name: str) -> bool:
    """True for names longer than four characters ending in ``html`` (any case)."""

    return len(file_name) > 4 and file_name[-4:].lower() == "html"


def _looks_like_legacy_frameset(content: str) -> bool:
    return (
        content.startswith("<html")
        and "<frameset" in content
        and "/menu.html" in content
        and "/summary.html" in content
    )


def is_neoload_html_report(content: str) -> bool:
    """Return True if ``content`` is the main page of a NeoLoad HTML report.

    Newer reports embed :data:`TAG_HTML_GENERATED_BY_NEOLOAD`. Older ones are
    recognised by title plus frameset shape: the page starts with ``<html``,
    declares a ``<frameset`` and references both ``/menu.html`` and
    ``/summary.html``.
    """

    if TAG_HTML_GENERATED_BY_NEOLOAD in content:
        return True
    if any(title in content for title in LEGACY_REPORT_TITLES):
        return _looks_like_legacy_frameset(content)
    return False
