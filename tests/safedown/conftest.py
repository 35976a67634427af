"""Shared fixtures and utilities for Safedown tests."""

import re

import pytest

from safedown import Safedown, allow_all_links


@pytest.fixture
def safedown():
    """Create a Safedown renderer with default settings."""
    return Safedown()


@pytest.fixture
def safedown_links():
    """Create a Safedown renderer that allows every link."""
    return Safedown(link_policy=allow_all_links)


@pytest.fixture
def safedown_custom():
    """Factory for Safedown renderers with custom configuration."""
    def _create_safedown(link_policy=None, max_nesting_depth: int = 100) -> Safedown:
        return Safedown(link_policy=link_policy, max_nesting_depth=max_nesting_depth)
    return _create_safedown


# Markup Safedown is allowed to emit
_ALLOWED_TAG_PATTERN = re.compile(
    r'</?(?:p|strong|em|pre|code|blockquote|ul|li)>|<br>|</a>|<a(?: (?:href|title|onclick)="[^"<>]*")*>'
)
_ENTITY_PATTERN = re.compile(r"&(?:[a-zA-Z][a-zA-Z0-9]+|#[0-9]+|#[xX][0-9a-fA-F]+);")


class SafedownTestHelpers:
    """Helper utilities for Safedown testing."""

    @staticmethod
    def assert_safe_html(output: str) -> None:
        """Assert that output holds no markup other than the tags Safedown emits."""
        text = _ALLOWED_TAG_PATTERN.sub("", output)
        assert "<" not in text, f"Unexpected '<' in {output!r}"
        assert ">" not in text, f"Unexpected '>' in {output!r}"
        assert "&" not in _ENTITY_PATTERN.sub("", text), f"Unescaped '&' in {output!r}"


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return SafedownTestHelpers
