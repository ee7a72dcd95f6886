"""Package-specific exception types.

Decoding, encoding and toggling never raise for malformed markup; these types
cover the surfaces around them (tag lookups that must succeed, configuration
and file handling).
"""

from __future__ import annotations


class MarkupError(ValueError):
    """Base class for markup-related errors."""


class UnknownTagError(MarkupError):
    """Raised when a tag name is required to resolve but is not in the vocabulary.

    Args:
        name: The tag name that failed to resolve.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tag name: {name!r} (expected one of: b, i, u, s)")


class MarkupFileError(Exception):
    """Raised when a markup file cannot be read or rewritten."""
