"""
Social Network Explorer

Loads a social graph from a flat CSV file and answers three
questions about it: who a user is connected to, who they might
know, and who the most connected users are.
"""

__version__ = "0.1.0"

from .logging_config import configure_default_logging

configure_default_logging()
