"""
Block assembly for Safedown.

Classified lines are grouped into blocks (paragraphs, preformatted text, lists and
blockquotes) using an explicit stack of block frames.  Lists and blockquotes hold
other blocks, so the lines belonging to one list item or one blockquote are assembled
again, one level deeper, into the frame that will wrap them.
"""

import html
import logging
from typing import List

from safedown.safedown_inline_renderer import SafedownInlineRenderer
from safedown.safedown_line_classifier import SafedownLineClassifier
from safedown.safedown_settings import DEFAULT_MAX_NESTING_DEPTH
from safedown.safedown_types import BlockFrame, BlockKind, LineSpan


class SafedownBlockAssembler:
    """
    Assembles Safedown text into HTML blocks.

    An assembler holds the state for one conversion, so a new one is needed for each
    call to assemble() when rendering from more than one thread.
    """

    def __init__(
        self,
        inline_renderer: SafedownInlineRenderer,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    ) -> None:
        """
        Initialize the assembler.

        Args:
            inline_renderer: Renderer used for the content of paragraphs
            max_nesting_depth: Number of nested lists and blockquotes allowed before any deeper
                markers are treated as paragraph text
        """
        self._inline_renderer = inline_renderer
        self._max_nesting_depth = max_nesting_depth
        self._classifier = SafedownLineClassifier()

        self._logger = logging.getLogger("SafedownBlockAssembler")

        self._text = ""
        self._frames: List[BlockFrame] = []
        self._nesting_level = 0

    def assemble(self, text: str) -> str:
        """
        Convert Safedown text to HTML.

        Args:
            text: The text to convert

        Returns:
            The HTML for the text
        """
        self._text = text
        self._frames = [BlockFrame(BlockKind.NONE)]
        self._nesting_level = 0

        self._assemble_lines(self.split_lines(text))

        assert len(self._frames) == 1, "Only the root frame should remain"
        root = self._frames.pop()
        return "".join(root.parts)

    @staticmethod
    def split_lines(text: str) -> List[LineSpan]:
        """
        Split text into line spans.

        Args:
            text: The text to split

        Returns:
            One span per line.  Spans exclude the newline and any "\\r" before it.
        """
        spans: List[LineSpan] = []
        scan = 0
        limit = len(text)
        while True:
            newline = text.find("\n", scan)
            end = limit if newline == -1 else newline
            if end > scan and text[end - 1] == "\r":
                end -= 1

            spans.append(LineSpan(scan, end))
            if newline == -1:
                break

            scan = newline + 1
            if scan >= limit:
                break

        return spans

    def _content(self, line: LineSpan) -> str:
        """Get the text of a line."""
        return self._text[line.start:line.end]

    def _classify(self, span: LineSpan) -> LineSpan:
        """
        Classify a line at the current nesting level.

        Args:
            span: The line to classify

        Returns:
            A new span holding the line's kind and starting at its content
        """
        kind, offset = self._classifier.classify(self._text, span.start, span.end)
        if kind in (BlockKind.LIST, BlockKind.QUOTE) and self._nesting_level >= self._max_nesting_depth:
            self._logger.debug(
                "Nesting depth %d reached, treating line at offset %d as text", self._max_nesting_depth, span.start
            )
            return LineSpan(span.start, span.end, BlockKind.PARAGRAPH)

        return LineSpan(offset, span.end, kind)

    def _assemble_lines(self, spans: List[LineSpan]) -> None:
        """
        Assemble a range of lines into the frame on top of the stack.

        Args:
            spans: The lines to assemble
        """
        container = self._frames[-1]
        lines = [self._classify(span) for span in spans]
        end_offset = spans[-1].end if spans else len(self._text)
        lines.append(LineSpan(end_offset, end_offset, BlockKind.END_OF_INPUT))

        block: BlockFrame | None = None
        for index, line in enumerate(lines):
            if line.kind == BlockKind.EMPTY:
                container.pending_blank += 1
                continue

            if block is not None:
                if self._continue_block(block, lines, index, container):
                    continue

                self._close_block(block, lines, index, container)
                block = None

            if line.kind == BlockKind.END_OF_INPUT:
                break

            # Runs of blank lines between blocks leave visible space
            if container.parts and container.pending_blank > 1:
                container.parts.append("<br>" * (container.pending_blank - 1))

            container.pending_blank = 0
            block = self._open_block(line, index)

    def _continue_block(self, block: BlockFrame, lines: List[LineSpan], index: int, container: BlockFrame) -> bool:
        """
        Try to add a line to the open block.

        Args:
            block: The open block
            lines: The classified lines being assembled
            index: Index of the line to add
            container: The frame that will receive the block when it closes

        Returns:
            True if the line belongs to the block, False if the block ends before it
        """
        line = lines[index]
        kind = line.kind

        if block.kind == BlockKind.PREFORMATTED:
            if kind != BlockKind.PREFORMATTED:
                return False

            # Blank lines inside preformatted text are kept
            if container.pending_blank:
                block.parts.append("\n" * container.pending_blank)
                container.pending_blank = 0

            block.parts.append(self._content(line) + "\n")
            return True

        if block.kind == BlockKind.PARAGRAPH:
            if kind != BlockKind.PARAGRAPH or container.pending_blank:
                return False

            block.parts.append(self._content(line))
            return True

        if block.kind == BlockKind.QUOTE:
            if kind == BlockKind.QUOTE:
                container.pending_blank = 0
                return True

            return kind == BlockKind.PARAGRAPH and not container.pending_blank

        if block.kind == BlockKind.LIST:
            if kind == BlockKind.PARAGRAPH and not container.pending_blank:
                return True

            if kind == BlockKind.LIST:
                self._close_list_item(block, lines, index - container.pending_blank)
                block.first_line = index
                container.pending_blank = 0
                return True

        return False

    def _open_block(self, line: LineSpan, index: int) -> BlockFrame:
        """
        Push a new block frame for a line.

        Args:
            line: The first line of the block
            index: Index of the line

        Returns:
            The new block frame
        """
        kind = line.kind
        if kind == BlockKind.PARAGRAPH:
            block = BlockFrame(kind, "<p>", "</p>", [self._content(line)])

        elif kind == BlockKind.PREFORMATTED:
            block = BlockFrame(kind, "<pre><code>", "</code></pre>", [self._content(line) + "\n"])

        elif kind == BlockKind.LIST:
            block = BlockFrame(kind, "<ul>", "</ul>", first_line=index)

        else:
            assert kind == BlockKind.QUOTE, f"Unexpected block kind {kind!r}"
            block = BlockFrame(kind, "<blockquote>", "</blockquote>", first_line=index)

        self._frames.append(block)
        return block

    def _close_block(self, block: BlockFrame, lines: List[LineSpan], index: int, container: BlockFrame) -> None:
        """
        Finish the open block and render it into its container.

        Args:
            block: The block to finish
            lines: The classified lines being assembled
            index: Index of the first line after the block
            container: The frame that receives the block
        """
        assert self._frames[-1] is block, "Block being closed must be on top of the stack"

        # Blank lines before the next block are not part of this one
        end = index - container.pending_blank

        if block.kind == BlockKind.LIST:
            self._close_list_item(block, lines, end)

        elif block.kind == BlockKind.QUOTE:
            self._assemble_nested(lines[block.first_line:end])

        self._pop_frame()

    def _close_list_item(self, list_block: BlockFrame, lines: List[LineSpan], end: int) -> None:
        """
        Render the current item of a list.

        Args:
            list_block: The list the item belongs to
            lines: The classified lines being assembled
            end: Index one past the item's last line
        """
        self._frames.append(BlockFrame(BlockKind.LIST, "<li>", "</li>"))
        self._assemble_nested(lines[list_block.first_line:end])
        self._pop_frame()

    def _assemble_nested(self, spans: List[LineSpan]) -> None:
        """
        Assemble the content of a list item or blockquote one level deeper.

        Args:
            spans: The lines of the item or blockquote, starting after their markers
        """
        self._nesting_level += 1
        self._assemble_lines(spans)
        self._nesting_level -= 1

    def _pop_frame(self) -> None:
        """Pop the top frame and append its rendered content to the frame below it."""
        frame = self._frames.pop()
        if frame.kind == BlockKind.PARAGRAPH:
            body = self._inline_renderer.render(" ".join(frame.parts).strip(" \t"))

        elif frame.kind == BlockKind.PREFORMATTED:
            body = html.escape("".join(frame.parts), quote=False)

        else:
            body = "".join(frame.parts)

        self._frames[-1].parts.append(f"{frame.open_tag}{body}{frame.close_tag}")
