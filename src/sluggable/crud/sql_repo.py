from __future__ import annotations
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm.attributes import get_history
from sqlmodel import Session, select

from sluggable.crud.models import SluggableModel, SoftDeletableModel
from sluggable.crud.repo import SlugRepo


class ModelRecord:
    """Exposes a mapped SQLModel instance through the SluggableRecord interface.

    Unknown attributes fall through to the instance, so source functions can
    read model fields directly (lambda article: article.title).
    """

    def __init__(self, instance: SluggableModel):
        self.instance = instance

    def __getattr__(self, name: str) -> Any:
        if name == "instance":
            raise AttributeError(name)
        return getattr(self.instance, name)

    def get_field(self, name: str) -> Any:
        return getattr(self.instance, name, None)

    def set_field(self, name: str, value: Any) -> None:
        setattr(self.instance, name, value)

    def get_original_field(self, name: str) -> Any:
        """Last loaded/flushed value from attribute history; None for pending instances."""
        history = get_history(self.instance, name)
        if history.deleted:
            return history.deleted[0]
        if history.unchanged:
            return history.unchanged[0]
        return None

    def get_identity(self) -> Any:
        identity = sa_inspect(self.instance).identity
        if identity is None:
            return None
        return identity[0] if len(identity) == 1 else identity

    def supports_soft_delete(self) -> bool:
        return isinstance(self.instance, SoftDeletableModel)


class SQLRepo(SlugRepo):
    def __init__(self, session: Session, model: type[SluggableModel]):
        self.session = session
        self.model = model

    def find_one_where(
        self,
        field: str,
        value: Any,
        exclude_identity: Any = None,
        include_soft_deleted: bool = False,
        ) -> ModelRecord | None:
        stmt = select(self.model).where(getattr(self.model, field) == value)
        if exclude_identity is not None:
            pk = sa_inspect(self.model).primary_key[0]
            stmt = stmt.where(pk != exclude_identity)
        if not include_soft_deleted and issubclass(self.model, SoftDeletableModel):
            stmt = stmt.where(self.model.deleted_at.is_(None))

        with self.session.no_autoflush:
            row = self.session.exec(stmt).first()
        return ModelRecord(row) if row else None
