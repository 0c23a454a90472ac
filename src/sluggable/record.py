"""Record interface the slug assigner reads and writes, plus a plain in-memory record"""

from dataclasses import dataclass, field
from typing import Any, Protocol


class SluggableRecord(Protocol):
    """Field access a host store exposes for one record."""

    def get_field(self, name: str) -> Any: ...

    def set_field(self, name: str, value: Any) -> None: ...

    def get_original_field(self, name: str) -> Any:
        """Value as of the last load/save; None for a record never persisted."""
        ...

    def get_identity(self) -> Any:
        """Primary key, or None until the store assigns one."""
        ...

    def supports_soft_delete(self) -> bool: ...


@dataclass
class Record:
    fields: dict[str, Any] = field(default_factory=dict)
    original: dict[str, Any] = field(default_factory=dict)
    identity: Any = None
    soft_deletes: bool = False
    deleted: bool = False

    def get_field(self, name: str) -> Any:
        return self.fields.get(name)

    def set_field(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def get_original_field(self, name: str) -> Any:
        return self.original.get(name)

    def get_identity(self) -> Any:
        return self.identity

    def supports_soft_delete(self) -> bool:
        return self.soft_deletes

    def sync_original(self) -> None:
        """Snapshot current values as the persisted state."""
        self.original = dict(self.fields)
