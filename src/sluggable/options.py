"""Slug options: immutable per-record-type configuration and the guard that rejects invalid options"""

from typing import Any, Callable, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict

from sluggable.config import Settings
from sluggable.errors import InvalidOption


SourceFunction = Callable[[Any], str]


class SlugOptions(BaseModel):
    """How a record type builds and stores its slug.

    Instances are frozen; every builder method returns a new copy. Out-of-range
    values are accepted here and rejected by guard_against_invalid_options so the
    caller gets a specific InvalidOption instead of a pydantic ValidationError.
    """
    model_config = ConfigDict(frozen=True)

    source_fields:         tuple[str, ...] = ()
    source_function:       Optional[SourceFunction] = None
    slug_field:            str = "slug"
    generate_unique_slugs: bool = True
    maximum_length:        int = 250
    separator:             str = "-"
    max_attempts:          int = 0

    @classmethod
    def create(cls) -> "SlugOptions":
        return cls()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlugOptions":
        """Defaults taken from application settings; the source is still up to the caller."""
        return cls(
            slug_field=settings.slug_field,
            generate_unique_slugs=settings.generate_unique_slugs,
            maximum_length=settings.maximum_length,
            separator=settings.separator,
            max_attempts=settings.max_attempts,
        )

    def generate_slugs_from(self, source: Union[str, Iterable[str], SourceFunction]) -> "SlugOptions":
        """Use one field name, an ordered list of field names, or a callable receiving the record."""
        if callable(source):
            return self.model_copy(update={"source_function": source, "source_fields": ()})
        if isinstance(source, str):
            source = [source]
        return self.model_copy(update={"source_fields": tuple(source), "source_function": None})

    def save_slugs_to(self, field_name: str) -> "SlugOptions":
        return self.model_copy(update={"slug_field": field_name})

    def allow_duplicate_slugs(self) -> "SlugOptions":
        return self.model_copy(update={"generate_unique_slugs": False})

    def slugs_should_be_no_longer_than(self, maximum_length: int) -> "SlugOptions":
        return self.model_copy(update={"maximum_length": maximum_length})

    def using_separator(self, separator: str) -> "SlugOptions":
        return self.model_copy(update={"separator": separator})

    def give_up_after(self, max_attempts: int) -> "SlugOptions":
        """Cap the number of suffixed candidates tried; 0 means no cap."""
        return self.model_copy(update={"max_attempts": max_attempts})


def validate_options(options: SlugOptions) -> Optional[InvalidOption]:
    """Return the first violated rule as an InvalidOption, or None if options are usable."""
    if options.source_function is None and not options.source_fields:
        return InvalidOption.missing_source_field()
    if not options.slug_field:
        return InvalidOption.missing_slug_field()
    if options.maximum_length <= 0:
        return InvalidOption.invalid_maximum_length()
    if not options.separator:
        return InvalidOption.invalid_separator()
    return None


def guard_against_invalid_options(options: SlugOptions) -> None:
    if (error := validate_options(options)) is not None:
        raise error
