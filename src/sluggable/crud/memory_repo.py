from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from sluggable.assigner import OptionsProvider, SlugAssigner
from sluggable.crud.repo import SlugRepo
from sluggable.record import Record


@dataclass
class MemoryRepo(SlugRepo):
    """Dict-backed store for Records of one type. Runs slug assignment before every write."""
    options: OptionsProvider
    _records: dict[int, Record] = field(default_factory=dict)
    _next_id: int = 1
    assigner: SlugAssigner = field(init=False)

    def __post_init__(self) -> None:
        self.assigner = SlugAssigner(self.options, self)

    def find_one_where(
        self,
        field: str,
        value: Any,
        exclude_identity: Any = None,
        include_soft_deleted: bool = False,
        ) -> Record | None:
        for r in self._records.values():
            if exclude_identity is not None and r.identity == exclude_identity:
                continue
            if r.deleted and not include_soft_deleted:
                continue
            if r.get_field(field) == value:
                return r
        return None

    def insert(self, record: Record) -> Record:
        self.assigner.on_before_insert(record)
        record.identity = self._next_id
        self._next_id += 1
        self._records[record.identity] = record
        record.sync_original()
        return record

    def update(self, record: Record) -> Record:
        if record.identity not in self._records:
            raise KeyError(f"Record {record.identity!r} is not stored")
        self.assigner.on_before_update(record)
        self._records[record.identity] = record
        record.sync_original()
        return record

    def delete(self, record: Record) -> None:
        """Soft-delete when the record supports it, otherwise remove it."""
        if record.supports_soft_delete():
            record.deleted = True
        else:
            self._records.pop(record.identity, None)

    def get(self, identity: int) -> Record | None:
        return self._records.get(identity)
