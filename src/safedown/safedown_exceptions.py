"""Exceptions raised by Safedown."""

from typing import Any, Dict

from safedown.safedown_types import LinkCandidate


class SafedownError(Exception):
    """Base class for Safedown errors."""

    def __init__(self, message: str, error_details: Dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.error_details: Dict[str, Any] = error_details or {}


class SafedownConfigError(SafedownError):
    """
    Raised when a renderer is constructed with an unusable setting.

    Rendering never raises this: settings are checked once, when the renderer is built.
    """

    def __init__(self, setting: str, value: Any, problem: str) -> None:
        """
        Initialize the exception.

        Args:
            setting: Name of the rejected setting, e.g. "max_nesting_depth"
            value: The rejected value
            problem: What is wrong with it, e.g. "must be at least 1"
        """
        super().__init__(f"{setting} {problem}, got {value!r}", {setting: value})
        self.setting = setting


class SafedownLinkPolicyError(SafedownError):
    """Raised when a caller-supplied link policy raises while deciding on a link."""

    def __init__(self, candidate: LinkCandidate, cause: Exception) -> None:
        """
        Initialize the exception.

        Args:
            candidate: The link the policy was asked about
            cause: The exception the policy raised
        """
        super().__init__(
            f"Link policy failed for {candidate.url!r}: {cause}",
            {"url": candidate.url, "text": candidate.text}
        )
        self.candidate = candidate
