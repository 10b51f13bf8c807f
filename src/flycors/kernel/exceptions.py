"""Unified exception hierarchy for flycors.

All flycors exceptions inherit from FlyCorsException, enabling unified
error handling in the host application.

Categories:
- ConfigurationException: invalid values supplied while wiring the component
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyCorsException(Exception):
    """Base exception for all flycors errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_INVALID_ORIGIN").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(FlyCorsException):
    """The component was configured with unusable values."""


class InvalidConfigurationException(ConfigurationException):
    """A CORS setting has the wrong shape (raised once, at configuration time)."""
