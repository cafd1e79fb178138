"""First-match substring helpers for the report's frame and stylesheet links.

Legacy reports have one menu frame and one stylesheet, so every helper here
returns the first structural match only. Pages with several ``<frame>`` or
``<link>`` elements are not handled beyond their first occurrence.
"""

from __future__ import annotations


def insert_after_first(content: str, anchor: str, insertion: str) -> str:
    """Insert ``insertion`` right after the first ``anchor``; unchanged if absent."""

    position = content.find(anchor)
    if position < 0:
        return content
    cut = position + len(anchor)
    return content[:cut] + insertion + content[cut:]


def first_quoted_value(content: str, attribute: str) -> str | None:
    """Value of the first ``attribute="..."`` occurrence, or None."""

    opener = f'{attribute}="'
    start = content.find(opener)
    if start < 0:
        return None
    start += len(opener)
    end = content.find('"', start)
    if end < 0:
        return None
    return content[start:end]


def first_tag(content: str, tag_name: str) -> str | None:
    """Text of the first ``<tag_name ...>`` element, from ``<`` up to ``>`` inclusive."""

    start = content.find(f"<{tag_name}")
    if start < 0:
        return None
    end = content.find(">", start)
    if end < 0:
        return None
    return content[start : end + 1]


def first_frame_src(content: str) -> str | None:
    """The first ``src="..."`` value in the page, which is the menu frame."""

    return first_quoted_value(content, "src")


def first_stylesheet_href(content: str) -> str | None:
    """``href`` of the first ``<link>`` element."""

    link = first_tag(content, "link")
    if link is None:
        return None
    return first_quoted_value(link, "href")
