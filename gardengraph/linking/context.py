"""Context snippets around link occurrences."""

import re

from .extractor import extract_wikilinks, strip_wikilinks

# Characters that end a token when trimming a clipped window
BOUNDARY_PATTERN = re.compile(r"[\s.!?,;:]")


def _is_boundary(char: str) -> bool:
    return bool(BOUNDARY_PATTERN.match(char))


def _widen_to_whole_links(content: str, window_start: int, window_end: int) -> tuple[int, int]:
    """Move window edges that fall inside a wikilink out to the link's bounds."""
    for occurrence in extract_wikilinks(content):
        if occurrence.start < window_start < occurrence.end:
            window_start = occurrence.start
        if occurrence.start < window_end < occurrence.end:
            window_end = occurrence.end
    return window_start, window_end


def extract_link_context(
    content: str,
    start: int,
    end: int,
    radius: int = 120,
    max_chars: int = 200,
) -> str:
    """Extract plain-text context around a link occurrence.

    The window spans ``radius`` characters either side of the occurrence,
    clipped to the text and widened so no wikilink is split. Wikilinks inside
    the window are reduced to their display text, a word cut by clipping is
    dropped at either edge, whitespace is collapsed and the result is
    hard-truncated.

    Args:
        content: Full document body
        start: Offset of the occurrence's opening ``[[``
        end: Offset just past the occurrence's closing ``]]``
        radius: Characters to include before and after the occurrence
        max_chars: Maximum length of the returned context

    Returns:
        Context string of at most ``max_chars`` characters
    """
    window_start = max(0, start - radius)
    window_end = min(len(content), end + radius)
    window_start, window_end = _widen_to_whole_links(content, window_start, window_end)
    context = strip_wikilinks(content[window_start:window_end])

    cut_at_start = window_start > 0 and not _is_boundary(content[window_start - 1])
    if cut_at_start:
        match = BOUNDARY_PATTERN.search(context)
        if match:
            context = context[match.end() :]

    cut_at_end = window_end < len(content) and not _is_boundary(content[window_end])
    if cut_at_end:
        last_boundary = None
        for match in BOUNDARY_PATTERN.finditer(context):
            last_boundary = match
        if last_boundary:
            context = context[: last_boundary.end()]

    context = re.sub(r"\s+", " ", context).strip()

    return context[:max_chars].rstrip()
