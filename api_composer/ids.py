"""Identifier generation for rows, environments, saved requests and history."""

import uuid


def create_id() -> str:
    """
    Create a random identifier.

    Example:
        >>> create_id()  # doctest: +SKIP
        '3f2b8c0e9d6a4f1b8e7c5a2d1f0b9e8c'
    """
    return uuid.uuid4().hex
