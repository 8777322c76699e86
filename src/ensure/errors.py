"""Exceptions raised by ensure itself.

Assertion failures are never raised from here: they go to the sink. These
cover defects in the calling test code or its configuration.
"""


class EnsureError(Exception):
    """Base class for errors raised by ensure."""


class UsageError(EnsureError):
    """The API was called in a way no assertion outcome can express."""


class ConfigError(EnsureError):
    """The ensure configuration could not be loaded or is invalid."""
