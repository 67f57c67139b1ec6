"""
Module: utils
Description: Package initialization for utility functions.

Current utilities:
- logger: Structured logging configuration and helpers
- batch_helpers: Chunking helpers for SQS batch calls
"""

__all__ = []
