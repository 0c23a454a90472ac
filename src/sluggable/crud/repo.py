from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

from sluggable.record import SluggableRecord


class SlugRepo(ABC):
    @abstractmethod
    def find_one_where(
        self,
        field: str,
        value: Any,
        exclude_identity: Any = None,
        include_soft_deleted: bool = False,
        ) -> SluggableRecord | None:
        """Return one record with field == value, or None.

        exclude_identity=None applies no identity filter (the caller has no key yet).
        Soft-deleted records are skipped unless include_soft_deleted is set.
        """
        raise NotImplementedError
