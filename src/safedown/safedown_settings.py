"""Configuration for the Safedown renderer."""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from safedown.safedown_exceptions import SafedownConfigError
from safedown.safedown_types import LinkCandidate


# A link policy returns None/False to mangle, True to accept, or a mapping of overrides
LinkPolicyResult = bool | Mapping[str, Any] | None
LinkPolicyCallback = Callable[[LinkCandidate], LinkPolicyResult]


DEFAULT_MAX_NESTING_DEPTH = 100

# Largest allowed max_nesting_depth.  Each level uses up to four Python stack frames.
MAX_NESTING_DEPTH_LIMIT = 200


@dataclass
class SafedownSettings:
    """Options for controlling renderer behavior."""
    link_policy: LinkPolicyCallback | None = None
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def validate(self) -> None:
        """
        Check the settings are usable.

        Raises:
            SafedownConfigError: If any setting is invalid
        """
        if self.link_policy is not None and not callable(self.link_policy):
            raise SafedownConfigError("link_policy", self.link_policy, "must be callable or None")

        depth = self.max_nesting_depth
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise SafedownConfigError("max_nesting_depth", depth, "must be an integer")

        if depth < 1:
            raise SafedownConfigError("max_nesting_depth", depth, "must be at least 1")

        if depth > MAX_NESTING_DEPTH_LIMIT:
            raise SafedownConfigError("max_nesting_depth", depth, f"must be at most {MAX_NESTING_DEPTH_LIMIT}")
