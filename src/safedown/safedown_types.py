"""Shared types for Safedown rendering."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List


class BlockKind(IntEnum):
    """Kinds of block a line can begin or continue."""
    NONE = 0
    EMPTY = 1
    PREFORMATTED = 2
    PARAGRAPH = 3
    LIST = 4
    QUOTE = 5
    HEADER = 6  # Reserved, never produced by the classifier
    END_OF_INPUT = 7


@dataclass
class LineSpan:
    """A view of one line of the source text."""

    start: int  # Offset of the first content character
    end: int  # Offset one past the last content character
    kind: BlockKind = BlockKind.NONE


@dataclass
class BlockFrame:
    """An open block on the assembler's stack."""

    kind: BlockKind
    open_tag: str = ""
    close_tag: str = ""
    parts: List[str] = field(default_factory=list)  # Rendered output (containers) or raw lines (leaf blocks)
    first_line: int = 0  # Index of the first line of the current list item or quote
    pending_blank: int = 0  # Blank lines seen since the last block ended


@dataclass
class LinkCandidate:
    """A link found in the text, waiting for the link policy to decide how it renders."""

    text: str
    url: str | None
    title: str | None = None
    click: str | None = None
    implicit: bool = False  # True for bare autolinks, False for [text](url)
