"""
Module: models
Description: Package initialization for Pydantic data models.

- QueueConfig: Immutable queue handle configuration
- QueueStats: Snapshot of queue attributes
"""

from .queue_config import QueueConfig
from .stats import QueueStats

__all__ = [
    "QueueConfig",
    "QueueStats",
]
