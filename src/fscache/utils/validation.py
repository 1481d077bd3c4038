"""Validation utilities for cache keys and tags."""

import re
from typing import Any

from fscache.core.exceptions import InvalidArgumentError

RESERVED_CHARACTERS = "{}()/\\@:"

_RESERVED_PATTERN = re.compile(r"[{}()/\\@:]")

# Characters a key may use once it is mapped to a file name.
FILENAME_PATTERN = re.compile(r"[a-zA-Z0-9_.! ]+")


def validate_key(key: Any) -> str:
    """Check that a cache key is legal.

    Args:
        key: The key to validate.

    Returns:
        The key, unchanged.

    Raises:
        InvalidArgumentError: If the key is not a non-empty string or
            contains reserved characters.
    """
    if not isinstance(key, str):
        raise InvalidArgumentError(
            f'Cache key must be string, "{type(key).__name__}" given'
        )
    if not key:
        raise InvalidArgumentError("Cache key cannot be an empty string")
    if _RESERVED_PATTERN.search(key):
        raise InvalidArgumentError(
            f'Invalid key: "{key}". The key contains one or more characters '
            f"reserved for future extension: {RESERVED_CHARACTERS}"
        )
    return key


def validate_tag(tag: Any) -> str:
    """Check that a tag is legal.

    Args:
        tag: The tag to validate.

    Returns:
        The tag, unchanged.

    Raises:
        InvalidArgumentError: If the tag is not a non-empty string or
            contains reserved characters.
    """
    if not isinstance(tag, str):
        raise InvalidArgumentError(
            f'Cache tag must be string, "{type(tag).__name__}" given'
        )
    if not tag:
        raise InvalidArgumentError("Cache tag length must be greater than zero")
    if _RESERVED_PATTERN.search(tag):
        raise InvalidArgumentError(
            f'Cache tag "{tag}" contains reserved characters {RESERVED_CHARACTERS}'
        )
    return tag


def validate_filename(name: str) -> str:
    """Check that a key can be used as a file name.

    Raises:
        InvalidArgumentError: If the name uses characters outside
            ``[a-zA-Z0-9_.! ]``.
    """
    if not FILENAME_PATTERN.fullmatch(name):
        raise InvalidArgumentError(
            f'Invalid key "{name}". Valid filenames must match [a-zA-Z0-9_.! ].'
        )
    return name
