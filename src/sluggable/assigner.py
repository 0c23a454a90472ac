"""Slug assignment: validate options, build or keep the slug, make it unique, write it to the record

Runs synchronously inside the host's before-insert/before-update step. Each
uniqueness probe is one blocking read against the store. Nothing is locked, so
two writers committing the same base slug concurrently can both see it as free;
a unique index on the slug column is what actually enforces uniqueness, and a
caller that hits that constraint may re-run the whole assignment. No retry
happens here.
"""

import logging
from typing import Callable, Union

from sluggable.crud.repo import SlugRepo
from sluggable.normalize import normalize
from sluggable.options import SlugOptions, guard_against_invalid_options
from sluggable.record import SluggableRecord
from sluggable.source import has_custom_slug, resolve_source
from sluggable.unique import make_unique


logger = logging.getLogger(__name__)

OptionsProvider = Union[SlugOptions, Callable[[SluggableRecord], SlugOptions]]


class SlugAssigner:
    """Assigns a slug to one record type's records.

    options may be a fixed SlugOptions or a callable building options per record;
    either way they are validated on every run.
    """

    def __init__(self, options: OptionsProvider, repo: SlugRepo):
        self.options = options
        self.repo = repo

    def options_for(self, record: SluggableRecord) -> SlugOptions:
        if isinstance(self.options, SlugOptions):
            return self.options
        return self.options(record)

    def on_before_insert(self, record: SluggableRecord) -> str:
        return self.run(record)

    def on_before_update(self, record: SluggableRecord) -> str:
        return self.run(record)

    def run(self, record: SluggableRecord) -> str:
        """Compute the slug and store it in options.slug_field. Returns the assigned slug."""
        options = self.options_for(record)
        guard_against_invalid_options(options)

        slug = self._non_unique_slug(record, options)
        if options.generate_unique_slugs:
            slug = make_unique(
                slug,
                lambda s: self._other_record_exists_with_slug(record, options, s),
                separator=options.separator,
                max_attempts=options.max_attempts,
            )

        record.set_field(options.slug_field, slug)
        logger.debug("Assigned slug %r (identity=%r)", slug, record.get_identity())
        return slug

    def _non_unique_slug(self, record: SluggableRecord, options: SlugOptions) -> str:
        if has_custom_slug(record, options):
            current = record.get_field(options.slug_field)
            logger.debug("Keeping custom slug %r", current)
            return "" if current is None else str(current)
        return normalize(resolve_source(record, options), options.separator)

    def _other_record_exists_with_slug(self, record: SluggableRecord, options: SlugOptions, slug: str) -> bool:
        existing = self.repo.find_one_where(
            options.slug_field,
            slug,
            exclude_identity=record.get_identity(),
            include_soft_deleted=record.supports_soft_delete(),
        )
        return existing is not None
