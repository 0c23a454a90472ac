"""Slug normalization for record identifiers"""

from slugify import slugify


def normalize(raw: str, separator: str = "-") -> str:
    """Convert text to a lowercase, ASCII, separator-joined URL-safe slug."""
    return slugify(raw, separator=separator)
