"""Analysis module - Query reports and charts."""

from .report import NetworkReporter, NO_SUGGESTIONS

__all__ = [
    "NetworkReporter",
    "NO_SUGGESTIONS",
]
