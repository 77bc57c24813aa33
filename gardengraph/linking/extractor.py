"""Wikilink extraction from raw markdown text."""

import re
from typing import Callable, Iterator

from gardengraph.domain.links import WikilinkOccurrence

# [[target]] or [[target|display]]; no nesting or escaped brackets
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")


def _to_occurrence(match: re.Match[str]) -> WikilinkOccurrence | None:
    target = match.group(1).strip()
    if not target:
        return None
    display = (match.group(2) or "").strip() or target
    return WikilinkOccurrence(
        target=target,
        display=display,
        start=match.start(),
        end=match.end(),
    )


def extract_wikilinks(content: str) -> Iterator[WikilinkOccurrence]:
    """Yield wikilink occurrences in left-to-right document order.

    Unterminated ``[[`` or stray ``]]`` simply do not match and stay plain text.
    Links whose target is blank after trimming are skipped.

    Args:
        content: Raw markdown body

    Yields:
        One WikilinkOccurrence per match
    """
    for match in WIKILINK_PATTERN.finditer(content):
        occurrence = _to_occurrence(match)
        if occurrence is not None:
            yield occurrence


def replace_wikilinks(content: str, replacement: Callable[[WikilinkOccurrence], str]) -> str:
    """Replace every wikilink in content with the string returned by replacement."""

    def replace_match(match: re.Match[str]) -> str:
        occurrence = _to_occurrence(match)
        if occurrence is None:
            return match.group(0)
        return replacement(occurrence)

    return WIKILINK_PATTERN.sub(replace_match, content)


def strip_wikilinks(content: str) -> str:
    """Reduce every wikilink to its display text."""
    return replace_wikilinks(content, lambda occurrence: occurrence.display)
