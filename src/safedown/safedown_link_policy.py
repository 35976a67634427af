"""
Link handling for Safedown.

Every link found in the text is passed through a link policy before it is rendered.
With no policy configured, links are "mangled": explicit links render as their label
and bare URLs render with the scheme broken, so nothing in the output is clickable.
"""

import dataclasses
import html
import logging
from collections.abc import Mapping
from typing import Any, Dict

from safedown.safedown_exceptions import SafedownLinkPolicyError
from safedown.safedown_settings import LinkPolicyCallback, LinkPolicyResult
from safedown.safedown_types import LinkCandidate


# Scheme replacements used when mangling bare URLs
MANGLED_SCHEMES = {
    "http": "hxxp",
    "https": "hxxps",
    "ftp": "fxp",
}

# Link attributes a policy may override
OVERRIDE_KEYS = ("url", "text", "title", "click")


def defang_url(url: str) -> str:
    """
    Make a URL inert while leaving it readable.

    Args:
        url: The URL to defang, e.g. "http://example.com/x"

    Returns:
        The defanged URL, e.g. "hxxp //example.com/x"
    """
    scheme, separator, rest = url.partition(":")
    if not separator:
        return url

    return f"{MANGLED_SCHEMES.get(scheme, scheme)} {rest.replace(':', ' ')}"


def mangle_link(candidate: LinkCandidate) -> LinkCandidate:
    """
    Turn a link into plain text.

    Args:
        candidate: The link to mangle

    Returns:
        A candidate with no URL or click handler.  Bare URLs keep a defanged copy of the URL
        as their text and explicit links keep their label.
    """
    text = candidate.text
    if candidate.implicit and candidate.url is not None:
        text = defang_url(candidate.url)

    return dataclasses.replace(candidate, text=text, url=None, click=None)


def allow_all_links(_candidate: LinkCandidate) -> LinkPolicyResult:
    """Link policy that renders every link as an anchor."""
    return True


def allow_schemes(*schemes: str) -> LinkPolicyCallback:
    """
    Build a link policy that only allows links using particular schemes.

    Args:
        schemes: The schemes to allow, e.g. "http", "https"

    Returns:
        A policy that accepts links with one of the schemes and mangles all others
    """
    allowed = frozenset(scheme.lower() for scheme in schemes)

    def policy(candidate: LinkCandidate) -> LinkPolicyResult:
        if candidate.url is None:
            return None

        scheme, separator, _rest = candidate.url.partition(":")
        if separator and scheme.strip().lower() in allowed:
            return True

        return None

    return policy


def build_anchor(link: LinkCandidate, label_html: str) -> str:
    """
    Build the HTML for a resolved link.

    Args:
        link: The resolved link
        label_html: The link's label, already rendered as HTML

    Returns:
        An anchor element, or just the label if the link has neither a URL nor a click handler
    """
    if link.url is None and link.click is None:
        return label_html

    attributes = []
    if link.url is not None:
        attributes.append(f' href="{html.escape(link.url)}"')

    if link.title is not None:
        attributes.append(f' title="{html.escape(link.title)}"')

    if link.click is not None:
        attributes.append(f' onclick="{html.escape(link.click)}"')

    return f"<a{''.join(attributes)}>{label_html}</a>"


class SafedownLinkResolver:
    """Applies a link policy to the links found in text."""

    def __init__(self, policy: LinkPolicyCallback | None = None) -> None:
        """
        Initialize the resolver.

        Args:
            policy: Optional link policy.  With no policy every link is mangled.
        """
        self._policy = policy
        self._logger = logging.getLogger("SafedownLinkResolver")

    def resolve(self, candidate: LinkCandidate) -> LinkCandidate:
        """
        Decide how a link should be rendered.

        Args:
            candidate: The link as found in the text

        Returns:
            The link to render.  If it has neither a URL nor a click handler it renders as plain text.

        Raises:
            SafedownLinkPolicyError: If the link policy raises an exception
        """
        result: LinkPolicyResult = None
        if self._policy is not None:
            try:
                result = self._policy(dataclasses.replace(candidate))

            except Exception as e:
                raise SafedownLinkPolicyError(candidate, e) from e

        if result is True:
            return candidate

        if not result:
            return mangle_link(candidate)

        if not isinstance(result, Mapping):
            self._logger.debug("Ignoring link policy result of type %s", type(result).__name__)
            return mangle_link(candidate)

        return dataclasses.replace(candidate, **self._overrides(result))

    def _overrides(self, result: Mapping[str, Any]) -> Dict[str, str | None]:
        """
        Extract the usable overrides from a link policy result.

        Args:
            result: The mapping returned by the policy

        Returns:
            Attribute values to apply to the link.  Only string and None values are used.
        """
        overrides: Dict[str, str | None] = {}
        for key in OVERRIDE_KEYS:
            if key not in result:
                continue

            value = result[key]
            if value is not None and not isinstance(value, str):
                self._logger.debug("Ignoring link policy override %s of type %s", key, type(value).__name__)
                continue

            if key == "text" and value is None:
                value = ""

            overrides[key] = value

        return overrides
