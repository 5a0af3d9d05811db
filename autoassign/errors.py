from __future__ import annotations


class AutoAssignError(Exception):
    """Base class for errors raised while handling a pull request."""


class ConfigurationError(AutoAssignError):
    """The repository configuration could not be resolved."""

    def __init__(self, message: str = "the configuration file failed to load") -> None:
        super().__init__(message)
