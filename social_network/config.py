"""
Runtime configuration for the social network explorer.

Values come from defaults, then environment variables, then
command-line flags.
"""

from dataclasses import dataclass
from typing import Mapping, Optional
import os

from .errors import ConfigError

ENV_DATA_FILE = "SOCIAL_NETWORK_DATA_FILE"
ENV_MAX_DEPTH = "SOCIAL_NETWORK_MAX_DEPTH"


@dataclass
class NetworkConfig:
    """Configuration for loading and querying a network."""
    # Input settings
    data_file: str = "users.csv"
    delimiter: str = ","

    # Query settings
    max_depth: int = 2

    # Logging
    verbose: bool = False
    log_json: bool = False

    def __post_init__(self):
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must be >= 0, got {self.max_depth}")
        if len(self.delimiter) != 1:
            raise ConfigError(f"delimiter must be a single character, got {self.delimiter!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NetworkConfig":
        """Build a config from environment variables."""
        environ = os.environ if environ is None else environ
        kwargs = {}

        if environ.get(ENV_DATA_FILE):
            kwargs["data_file"] = environ[ENV_DATA_FILE]

        raw_depth = environ.get(ENV_MAX_DEPTH)
        if raw_depth:
            try:
                kwargs["max_depth"] = int(raw_depth)
            except ValueError:
                raise ConfigError(f"{ENV_MAX_DEPTH} must be an integer, got {raw_depth!r}")

        return cls(**kwargs)
