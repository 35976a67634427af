"""
Line classification for Safedown.

Each line of input is examined once to decide which kind of block it begins or
continues.  Block markers (indentation, "> ", "* ") are consumed so that the
returned offset points at the line's content.
"""

from typing import Tuple

from safedown.safedown_types import BlockKind


# Number of leading spaces that make a line preformatted
PREFORMAT_INDENT = 4


class SafedownLineClassifier:
    """Classifies a single line of Safedown text."""

    def classify(self, text: str, offset: int, end: int | None = None) -> Tuple[BlockKind, int]:
        """
        Classify the line starting at an offset.

        Args:
            text: The full source text
            offset: Offset of the first character of the line to classify
            end: Offset one past the line's last content character.  If omitted, the line runs to the next
                newline (a "\\r" before the newline is not part of the line)

        Returns:
            A tuple of (kind, next_offset) where next_offset is the offset of the line's content once
            any block marker has been consumed
        """
        if end is None:
            end = text.find("\n", offset)
            if end == -1:
                end = len(text)

            elif end > offset and text[end - 1] == "\r":
                end -= 1

        assert 0 <= offset <= end <= len(text), f"Line span {offset}-{end} out of range"

        # Whitespace-only lines separate blocks, however they are indented
        if not text[offset:end].strip():
            return BlockKind.EMPTY, end

        scan = offset
        indent = 0
        while scan < end:
            char = text[scan]
            scan += 1

            if char == "\t":
                return BlockKind.PREFORMATTED, scan

            if char == " ":
                indent += 1
                if indent == PREFORMAT_INDENT:
                    return BlockKind.PREFORMATTED, scan

                continue

            if char == ">":
                if scan < end and text[scan] in " \t":
                    scan += 1

                return BlockKind.QUOTE, scan

            if char in "*-+" and scan < end and text[scan] in " \t":
                return BlockKind.LIST, scan + 1

            return BlockKind.PARAGRAPH, scan - 1

        return BlockKind.EMPTY, end
