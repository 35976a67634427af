"""Safedown: converts untrusted text to a safe subset of HTML using restricted markdown."""

from safedown.safedown import Safedown, render, render_plain_escape
from safedown.safedown_block_assembler import SafedownBlockAssembler
from safedown.safedown_exceptions import SafedownConfigError, SafedownError, SafedownLinkPolicyError
from safedown.safedown_inline_renderer import SafedownInlineRenderer
from safedown.safedown_line_classifier import SafedownLineClassifier
from safedown.safedown_link_policy import (
    SafedownLinkResolver,
    allow_all_links,
    allow_schemes,
    build_anchor,
    defang_url,
    mangle_link
)
from safedown.safedown_settings import (
    DEFAULT_MAX_NESTING_DEPTH,
    LinkPolicyCallback,
    LinkPolicyResult,
    SafedownSettings
)
from safedown.safedown_types import BlockFrame, BlockKind, LineSpan, LinkCandidate


__all__ = [
    # Main API
    "Safedown",
    "render",
    "render_plain_escape",

    # Configuration
    "SafedownSettings",
    "DEFAULT_MAX_NESTING_DEPTH",
    "LinkPolicyCallback",
    "LinkPolicyResult",

    # Link policies
    "allow_all_links",
    "allow_schemes",
    "build_anchor",
    "defang_url",
    "mangle_link",

    # Exceptions
    "SafedownError",
    "SafedownConfigError",
    "SafedownLinkPolicyError",

    # Types
    "BlockKind",
    "BlockFrame",
    "LineSpan",
    "LinkCandidate",

    # Lower-level components
    "SafedownLineClassifier",
    "SafedownBlockAssembler",
    "SafedownInlineRenderer",
    "SafedownLinkResolver"
]
