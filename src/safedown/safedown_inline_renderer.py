"""
Inline span rendering for Safedown.

Paragraph text is scanned for the handful of characters that can start an inline
construct.  Everything between those characters is copied through untouched.
"""

import re
from typing import List

from safedown.safedown_link_policy import SafedownLinkResolver, build_anchor
from safedown.safedown_types import LinkCandidate


# Characters that can start an inline construct
SPECIAL_CHARACTERS = frozenset("\\*_[<>&:")

# Characters a backslash can escape
ESCAPABLE_CHARACTERS = frozenset("\\*[")

# Schemes recognized for autolinks, checked by looking back from the ':'
AUTOLINK_SCHEMES = ("http", "https", "ftp")

# Emphasis and link labels nested deeper than this are left as literal text
MAX_INLINE_NESTING_DEPTH = 16

# Strong and emphasis bodies may hold escaped characters and a non-empty balanced pair of the
# other width of the same marker.  The closing marker may not be followed by another marker.
_STRONG_PATTERNS = {
    "*": re.compile(r"\*\*((?:\\.|[^*\\]|\*[^*]+\*)+?)\*\*(?!\*)"),
    "_": re.compile(r"__((?:\\.|[^_\\]|_[^_]+_)+?)__(?!_)"),
}
_EMPHASIS_PATTERNS = {
    "*": re.compile(r"\*((?:\\.|[^*\\]|\*\*[^*]+\*\*)+?)\*(?!\*)"),
    "_": re.compile(r"_((?:\\.|[^_\\]|__[^_]+__)+?)_(?!_)"),
}

_ENTITY_BODY = r"(?:[a-zA-Z][a-zA-Z0-9]+|#[0-9]+|#[xX][0-9a-fA-F]+);"
_ENTITY_PATTERN = re.compile("&" + _ENTITY_BODY)
_BARE_AMPERSAND_PATTERN = re.compile("&(?!" + _ENTITY_BODY + ")")

_LINK_PATTERN = re.compile(r'\[([^\[\]]+)\]\(\s*([^()\s]+)(?:\s+"([^"]*)")?\s*\)')

# The part of an autolink after the scheme's ':'.  A '.' ending a sentence is not part of the link.
_AUTOLINK_BODY_PATTERN = re.compile(r"[^?#\s]+?(?:\?[^#\s]*?)?(?:#\S*?)?(?=\.?(?:\s|\Z))")


def _is_word_character(char: str) -> bool:
    return char.isalnum() or char == "_"


def escape_text(text: str) -> str:
    """
    Escape text with no markup in it.

    Args:
        text: The text to escape

    Returns:
        The text with <, > and any & that does not start an entity replaced by entities
    """
    text = _BARE_AMPERSAND_PATTERN.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;")


class SafedownInlineRenderer:
    """
    Renders the inline content of a paragraph as HTML.

    The renderer holds no per-call state, so one instance can be shared between threads.
    """

    def __init__(self, link_resolver: SafedownLinkResolver) -> None:
        """
        Initialize the inline renderer.

        Args:
            link_resolver: Decides how each link found in the text is rendered
        """
        self._link_resolver = link_resolver

    def render(self, text: str) -> str:
        """
        Render inline text as HTML.

        Args:
            text: The text to render

        Returns:
            The HTML for the text.  If nothing needed replacing this is the original string.
        """
        return self._render(text, True, 0)

    def _render(self, text: str, autolinks: bool, depth: int) -> str:
        """
        Render inline text as HTML.

        Args:
            text: The text to render
            autolinks: Whether bare URLs should be turned into links.  This is off inside link labels.
            depth: How many emphasis spans or link labels enclose the text

        Returns:
            The HTML for the text
        """
        parts: List[str] | None = None
        limit = len(text)
        last = 0
        scan = 0
        while True:
            while scan < limit and text[scan] not in SPECIAL_CHARACTERS:
                scan += 1

            if scan >= limit:
                break

            at = scan
            char = text[scan]
            scan += 1
            put: str | None = None

            if char == "\\":
                if scan < limit and text[scan] in ESCAPABLE_CHARACTERS:
                    put = text[scan]
                    scan += 1

            elif char in ("*", "_") and depth < MAX_INLINE_NESTING_DEPTH:
                match = None
                tag = "em"
                if scan < limit and text[scan] == char:
                    match = _STRONG_PATTERNS[char].match(text, at)
                    tag = "strong"

                if match is None:
                    match = _EMPHASIS_PATTERNS[char].match(text, at)
                    tag = "em"

                if match is not None:
                    put = f"<{tag}>{self._render(match.group(1), autolinks, depth + 1)}</{tag}>"
                    scan = match.end()

            elif char == "<":
                put = "&lt;"

            elif char == ">":
                put = "&gt;"

            elif char == "&":
                # Existing entities are left alone
                if _ENTITY_PATTERN.match(text, at) is None:
                    put = "&amp;"

            elif char == "[":
                match = _LINK_PATTERN.match(text, at)
                if match is not None:
                    put = self._render_link(LinkCandidate(
                        text=match.group(1),
                        url=match.group(2),
                        title=match.group(3) or None
                    ), depth)
                    scan = match.end()

            elif char == ":" and autolinks:
                for scheme in AUTOLINK_SCHEMES:
                    start = at - len(scheme)
                    if start < last or text[start:at] != scheme:
                        continue

                    if start > 0 and _is_word_character(text[start - 1]):
                        continue

                    match = _AUTOLINK_BODY_PATTERN.match(text, scan)
                    if match is None:
                        continue

                    url = f"{scheme}:{match.group(0)}"
                    put = self._render_link(LinkCandidate(text=url, url=url, implicit=True), depth)
                    at = start
                    scan = match.end()
                    break

            if put is not None:
                if parts is None:
                    parts = []

                if at > last:
                    parts.append(text[last:at])

                parts.append(put)
                last = scan

        if parts is None:
            return text

        if last < limit:
            parts.append(text[last:])

        return "".join(parts)

    def _render_link(self, candidate: LinkCandidate, depth: int) -> str:
        """
        Render a link found in the text.

        Args:
            candidate: The link as found in the text
            depth: Nesting depth of the text holding the link

        Returns:
            An anchor, or the link's label as plain text if the link policy does not allow it
        """
        resolved = self._link_resolver.resolve(candidate)

        # Bare URLs are shown exactly as written.  Labels never contain further autolinks.
        if resolved.implicit:
            label = escape_text(resolved.text)

        else:
            label = self._render(resolved.text, False, depth + 1)

        return build_anchor(resolved, label)
