"""Main Safedown class, converting untrusted text to a safe subset of HTML."""

import dataclasses
import html

from safedown.safedown_block_assembler import SafedownBlockAssembler
from safedown.safedown_inline_renderer import SafedownInlineRenderer
from safedown.safedown_link_policy import SafedownLinkResolver
from safedown.safedown_settings import LinkPolicyCallback, SafedownSettings


class Safedown:
    """
    Converts text to "safe" HTML using a restricted subset of markdown.

    No raw HTML is ever passed through.  The output only uses the elements p, strong, em,
    pre, code, blockquote, ul, li, a and br, and any <, > or & in the input is escaped.
    Links are supported but are rendered as inert text unless a link policy allows them.

    Supported markup:
    - "*text*", "_text_" for emphasis and "**text**", "__text__" for strong text
    - "[label](url)" and "[label](url "title")" for links
    - bare "http:", "https:" and "ftp:" URLs
    - "> " for blockquotes
    - "* ", "- " or "+ " for bulleted list items
    - four spaces or a tab of indentation for preformatted text
    - blank lines between paragraphs
    """

    def __init__(
        self,
        settings: SafedownSettings | None = None,
        link_policy: LinkPolicyCallback | None = None,
        max_nesting_depth: int | None = None
    ) -> None:
        """
        Initialize a renderer.

        Args:
            settings: Optional settings.  Defaults are used if not provided.
            link_policy: Optional link policy, overriding the one in settings.  None means "not given",
                so it keeps the settings' policy; to render with no policy, pass settings whose
                link_policy is None.
            max_nesting_depth: Optional nesting limit, overriding the one in settings

        Raises:
            SafedownConfigError: If the resulting settings are invalid
        """
        settings = dataclasses.replace(settings) if settings is not None else SafedownSettings()
        if link_policy is not None:
            settings.link_policy = link_policy

        if max_nesting_depth is not None:
            settings.max_nesting_depth = max_nesting_depth

        settings.validate()
        self._settings = settings
        self._inline_renderer = SafedownInlineRenderer(SafedownLinkResolver(settings.link_policy))

    @property
    def settings(self) -> SafedownSettings:
        """Get a copy of the renderer's settings."""
        return dataclasses.replace(self._settings)

    def render(self, text: str | bytes) -> str:
        """
        Convert text to HTML.

        Args:
            text: The text to convert.  Bytes are decoded as UTF-8, replacing invalid sequences.

        Returns:
            An HTML fragment

        Raises:
            SafedownLinkPolicyError: If the configured link policy raises an exception
        """
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")

        assembler = SafedownBlockAssembler(self._inline_renderer, self._settings.max_nesting_depth)
        return assembler.assemble(text)

    def render_inline(self, text: str) -> str:
        """
        Convert a single line of text to HTML, without any block structure.

        Args:
            text: The text to convert

        Returns:
            An HTML fragment with no enclosing paragraph
        """
        return self._inline_renderer.render(text)


def render(text: str | bytes, link_policy: LinkPolicyCallback | None = None) -> str:
    """
    Convert text to HTML using default settings.

    Args:
        text: The text to convert
        link_policy: Optional link policy

    Returns:
        An HTML fragment
    """
    return Safedown(link_policy=link_policy).render(text)


def render_plain_escape(text: str) -> str:
    """
    Escape text for HTML without applying any markup.

    Args:
        text: The text to escape

    Returns:
        The text with &, < and > replaced by entities
    """
    return html.escape(text, quote=False)
