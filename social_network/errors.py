"""Exceptions raised outside the graph core."""


class SocialNetworkError(Exception):
    """Base class for social network errors."""


class DataFileError(SocialNetworkError):
    """The user data file could not be opened."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__("Failed to open file.")


class ConfigError(SocialNetworkError):
    """Invalid configuration value."""
