"""
Utilities package for the Cosmos DB employee sample.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from cosmos_sample.utils.logging import configure_logging, get_logger
from cosmos_sample.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
