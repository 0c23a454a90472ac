"""Raw slug source strings and custom-slug detection"""

from typing import Any

from sluggable.options import SlugOptions
from sluggable.record import SluggableRecord


def _blank(value: Any) -> bool:
    return value is None or value == ""


def has_custom_slug(record: SluggableRecord, options: SlugOptions) -> bool:
    """True when the slug field differs from its persisted value.

    None and "" are the same unset state on either side, so a new record with no
    slug is not custom, while a stored slug cleared to blank is.
    """
    current = record.get_field(options.slug_field)
    original = record.get_original_field(options.slug_field)
    if _blank(current) and _blank(original):
        return False
    return current != original


def resolve_source(record: SluggableRecord, options: SlugOptions) -> str:
    """Build the pre-normalization source string, truncated to options.maximum_length characters."""
    if options.source_function is not None:
        source = options.source_function(record)
        source = "" if source is None else str(source)
    else:
        values = (record.get_field(name) for name in options.source_fields)
        source = "-".join("" if v is None else str(v) for v in values)
    return source[:options.maximum_length]
