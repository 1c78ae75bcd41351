"""Network module - Social graph and record loading."""

from .graph import SocialGraph, User, Suggestion, Influence, NOT_FOUND
from .loader import LoadRecord, LoadStats, load_from_csv

__all__ = [
    "SocialGraph",
    "User",
    "Suggestion",
    "Influence",
    "NOT_FOUND",
    "LoadRecord",
    "LoadStats",
    "load_from_csv",
]
