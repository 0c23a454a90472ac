"""Unit tests for assigner.py"""

import pytest

from sluggable.assigner import SlugAssigner
from sluggable.crud.memory_repo import MemoryRepo
from sluggable.crud.repo import SlugRepo
from sluggable.errors import MissingSlugField, MissingSourceField, SlugAttemptsExhausted
from sluggable.options import SlugOptions
from sluggable.record import Record


OPTIONS = SlugOptions(
    source_fields=("title",), slug_field="slug", generate_unique_slugs=True, maximum_length=250,
)


class RecordingRepo(SlugRepo):
    """Repo that answers from a fixed set of taken slugs and records every query."""

    def __init__(self, taken=()):
        self.taken = set(taken)
        self.calls = []

    def find_one_where(self, field, value, exclude_identity=None, include_soft_deleted=False):
        self.calls.append((field, value, exclude_identity, include_soft_deleted))
        return Record(fields={field: value}) if value in self.taken else None


class FailingRepo(SlugRepo):
    def find_one_where(self, field, value, exclude_identity=None, include_soft_deleted=False):
        raise ConnectionError("store unavailable")


# --- generation ---

def test_run_generates_and_assigns():
    """run() writes the normalized source into the slug field and returns it."""
    record = Record(fields={"title": "Hello World"})
    slug = SlugAssigner(OPTIONS, RecordingRepo()).run(record)
    assert slug == "hello-world"
    assert record.get_field("slug") == "hello-world"


def test_run_appends_suffix_on_collision():
    """A taken base slug gets the first free numeric suffix."""
    record = Record(fields={"title": "Hello World"})
    SlugAssigner(OPTIONS, RecordingRepo(taken={"hello-world", "hello-world-1"})).run(record)
    assert record.get_field("slug") == "hello-world-2"


def test_run_skips_uniqueness_when_duplicates_allowed():
    """With duplicates allowed the store is never queried."""
    repo = RecordingRepo(taken={"hello-world"})
    record = Record(fields={"title": "Hello World"})
    SlugAssigner(OPTIONS.allow_duplicate_slugs(), repo).run(record)
    assert record.get_field("slug") == "hello-world"
    assert repo.calls == []


def test_run_empty_source_gets_counter():
    """A source that normalizes to nothing still yields a non-empty slug."""
    record = Record(fields={"title": "!!!"})
    SlugAssigner(OPTIONS, RecordingRepo()).run(record)
    assert record.get_field("slug") == "1"


def test_run_empty_source_without_uniqueness():
    """Without uniqueness the empty normalized slug is written as-is."""
    record = Record(fields={"title": "!!!"})
    SlugAssigner(OPTIONS.allow_duplicate_slugs(), RecordingRepo()).run(record)
    assert record.get_field("slug") == ""


def test_run_truncates_before_normalizing():
    """maximum_length applies to the raw source, not the final slug."""
    record = Record(fields={"title": "Hello   World"})
    SlugAssigner(OPTIONS.slugs_should_be_no_longer_than(8), RecordingRepo()).run(record)
    assert record.get_field("slug") == "hello"


def test_run_uses_separator_for_words_and_suffix():
    """The configured separator is used between words and before the suffix."""
    record = Record(fields={"title": "Hello World"})
    SlugAssigner(OPTIONS.using_separator("_"), RecordingRepo(taken={"hello_world"})).run(record)
    assert record.get_field("slug") == "hello_world_1"


def test_run_respects_attempt_ceiling():
    """The attempt ceiling surfaces as SlugAttemptsExhausted and leaves the slug untouched."""
    record = Record(fields={"title": "A"})
    repo = RecordingRepo(taken={"a", "a-1", "a-2"})
    with pytest.raises(SlugAttemptsExhausted):
        SlugAssigner(OPTIONS.give_up_after(2), repo).run(record)
    assert "slug" not in record.fields


def test_options_callable_is_evaluated_per_record():
    """A callable options provider is called with the record being slugged."""
    def options_for(record):
        field = "name" if record.get_field("kind") == "person" else "title"
        return OPTIONS.generate_slugs_from(field)

    assigner = SlugAssigner(options_for, RecordingRepo())
    person = Record(fields={"kind": "person", "name": "Ada", "title": "Countess"})
    assigner.run(person)
    assert person.get_field("slug") == "ada"


# --- existence query ---

def test_exists_query_passes_identity_and_soft_delete_flag():
    """The store is asked with the record's identity and soft-delete support."""
    repo = RecordingRepo()
    record = Record(fields={"title": "Hello"}, identity=7, soft_deletes=True)
    SlugAssigner(OPTIONS, repo).run(record)
    assert repo.calls == [("slug", "hello", 7, True)]


def test_exists_query_without_identity():
    """A record without identity queries with no exclusion."""
    repo = RecordingRepo()
    SlugAssigner(OPTIONS, repo).run(Record(fields={"title": "Hello"}))
    assert repo.calls == [("slug", "hello", None, False)]


def test_store_errors_propagate():
    """Store failures are raised unchanged and the slug is not written."""
    record = Record(fields={"title": "Hello"})
    with pytest.raises(ConnectionError):
        SlugAssigner(OPTIONS, FailingRepo()).run(record)
    assert "slug" not in record.fields


# --- custom slugs ---

def test_custom_slug_preserved_when_source_changes():
    """An operator-edited slug survives even if the source field changed."""
    record = Record(
        fields={"title": "Changed Title", "slug": "foo-custom"},
        original={"title": "Foo", "slug": "foo"},
        identity=1,
    )
    SlugAssigner(OPTIONS, RecordingRepo()).run(record)
    assert record.get_field("slug") == "foo-custom"


def test_custom_slug_is_not_normalized():
    """A custom slug is kept verbatim, bypassing normalization."""
    record = Record(fields={"title": "x", "slug": "Mixed_Case Slug"})
    SlugAssigner(OPTIONS, RecordingRepo()).run(record)
    assert record.get_field("slug") == "Mixed_Case Slug"


def test_custom_slug_still_made_unique():
    """A custom slug that collides gets a suffix when uniqueness is on."""
    record = Record(fields={"title": "x", "slug": "taken"})
    SlugAssigner(OPTIONS, RecordingRepo(taken={"taken"})).run(record)
    assert record.get_field("slug") == "taken-1"


@pytest.mark.parametrize("cleared", ["", None])
def test_cleared_slug_counts_as_custom(cleared):
    """Clearing a stored slug is an edit: the blank value is kept, then made unique."""
    record = Record(fields={"title": "Hello", "slug": cleared}, original={"slug": "foo"}, identity=1)
    SlugAssigner(OPTIONS, RecordingRepo()).run(record)
    assert record.get_field("slug") == "1"


def test_cleared_slug_without_uniqueness_stays_blank():
    """With duplicates allowed a cleared slug is written back as an empty string."""
    record = Record(fields={"title": "Hello", "slug": None}, original={"slug": "foo"}, identity=1)
    SlugAssigner(OPTIONS.allow_duplicate_slugs(), RecordingRepo()).run(record)
    assert record.get_field("slug") == ""


def test_unchanged_slug_is_regenerated():
    """When the slug matches its persisted value the source is used again."""
    record = Record(
        fields={"title": "New Title", "slug": "old-title"},
        original={"title": "Old Title", "slug": "old-title"},
        identity=1,
    )
    SlugAssigner(OPTIONS, RecordingRepo()).run(record)
    assert record.get_field("slug") == "new-title"


# --- validation ---

@pytest.mark.parametrize("options,error", [
    (SlugOptions(source_fields=(), slug_field=""), MissingSourceField),
    (SlugOptions(source_fields=("title",), slug_field=""), MissingSlugField),
])
def test_invalid_options_abort_without_mutation(options, error):
    """Invalid options raise before the record or the store is touched."""
    repo = RecordingRepo()
    record = Record(fields={"title": "Hello", "slug": "keep-me"}, original={"slug": "keep-me"})
    with pytest.raises(error):
        SlugAssigner(options, repo).run(record)
    assert record.fields == {"title": "Hello", "slug": "keep-me"}
    assert repo.calls == []


def test_options_validated_on_every_run():
    """Options are checked on each run, not cached after the first one."""
    state = {"options": OPTIONS}
    assigner = SlugAssigner(lambda record: state["options"], RecordingRepo())
    assigner.run(Record(fields={"title": "ok"}))

    state["options"] = OPTIONS.slugs_should_be_no_longer_than(0)
    with pytest.raises(ValueError):
        assigner.run(Record(fields={"title": "ok"}))


# --- lifecycle hooks ---

def test_lifecycle_hooks_end_to_end():
    """Two inserts with the same title get hello-world and hello-world-1."""
    repo = MemoryRepo(OPTIONS)
    first = repo.insert(Record(fields={"title": "Hello World"}))
    second = repo.insert(Record(fields={"title": "Hello World"}))
    assert first.get_field("slug") == "hello-world"
    assert second.get_field("slug") == "hello-world-1"
