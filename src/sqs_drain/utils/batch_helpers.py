"""
Module: batch_helpers.py
Description: Utility functions for SQS batch operations.

SQS batch calls accept at most ten entries, so message lists are
split into chunks before they are sent or deleted.

Key Components:
- cast_list(): Normalize a single item or sequence into a list
- chunk_list(): Split lists into smaller chunks

Dependencies: typing
"""

from typing import List, Sequence, TypeVar, Union

T = TypeVar('T')


def cast_list(items: Union[T, Sequence[T]]) -> List[T]:
    """
    Wrap a single item in a list, or copy a sequence into a list.

    Strings are treated as single items, not as sequences of characters.

    Example:
        >>> cast_list("x")
        ['x']
        >>> cast_list(("a", "b"))
        ['a', 'b']
    """
    if isinstance(items, (str, bytes)):
        return [items]
    if isinstance(items, (list, tuple)):
        return list(items)
    return [items]


def chunk_list(items: List[T], chunk_size: int) -> List[List[T]]:
    """
    Split a list into smaller chunks of specified size.

    Args:
        items: List to split into chunks
        chunk_size: Maximum size of each chunk

    Returns:
        List of chunks, where each chunk is a list of items

    Raises:
        ValueError: If chunk_size is not positive

    Example:
        >>> chunk_list([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
    """
    if not isinstance(items, list):
        raise ValueError("items must be a list")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    chunks = []
    for i in range(0, len(items), chunk_size):
        chunks.append(items[i:i + chunk_size])

    return chunks
