"""Session lifecycle hook: assign slugs to sluggable instances before each flush"""

import logging
from typing import Any

from sqlalchemy import event
from sqlmodel import Session

from sluggable.assigner import SlugAssigner
from sluggable.config import Settings
from sluggable.crud.models import SluggableModel
from sluggable.crud.repo import SlugRepo
from sluggable.crud.sql_repo import ModelRecord, SQLRepo
from sluggable.options import SlugOptions


logger = logging.getLogger(__name__)

SETTINGS_KEY = "sluggable.settings"


class _FlushClaims(SlugRepo):
    """SQLRepo lookup that also sees slugs assigned earlier in the same flush.

    Rows from one flush are not in the database yet, so two pending instances
    with the same title would otherwise both get the bare slug.
    """

    def __init__(self, repo: SQLRepo, claimed: list[tuple[type, str, Any, ModelRecord]]):
        self.repo = repo
        self.claimed = claimed

    def find_one_where(
        self,
        field: str,
        value: Any,
        exclude_identity: Any = None,
        include_soft_deleted: bool = False,
        ) -> ModelRecord | None:
        for model, claimed_field, slug, record in self.claimed:
            if model is not self.repo.model or claimed_field != field or slug != value:
                continue
            identity = record.get_identity()
            if exclude_identity is None or identity is None or identity != exclude_identity:
                return record
        return self.repo.find_one_where(field, value, exclude_identity, include_soft_deleted)


def _assign(
    session: Session, instance: SluggableModel, defaults: SlugOptions, claimed: list, inserting: bool,
    ) -> None:
    record = ModelRecord(instance)
    assigner = SlugAssigner(instance.slug_options(defaults), _FlushClaims(SQLRepo(session, type(instance)), claimed))
    if inserting:
        slug = assigner.on_before_insert(record)
    else:
        slug = assigner.on_before_update(record)
    claimed.append((type(instance), assigner.options.slug_field, slug, record))


def assign_slugs(session: Session, flush_context: Any = None, instances: Any = None) -> None:
    """before_flush listener: new instances count as inserts, modified persistent ones as updates.

    Model options start from the Settings stored under session.info[SETTINGS_KEY],
    or from default Settings when the session carries none.
    """
    defaults = SlugOptions.from_settings(session.info.get(SETTINGS_KEY) or Settings())
    claimed: list = []
    for obj in list(session.new):
        if isinstance(obj, SluggableModel):
            _assign(session, obj, defaults, claimed, inserting=True)
    for obj in list(session.dirty):
        if isinstance(obj, SluggableModel) and session.is_modified(obj):
            _assign(session, obj, defaults, claimed, inserting=False)
    if claimed:
        logger.debug("Assigned %d slug(s) before flush", len(claimed))


def register_slug_hooks(target: Any) -> None:
    """Install assign_slugs on a Session, sessionmaker, or the Session class. Idempotent."""
    if not event.contains(target, "before_flush", assign_slugs):
        event.listen(target, "before_flush", assign_slugs)
