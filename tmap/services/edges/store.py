from typing import Any, Dict, List, Mapping, Optional, Protocol


class StoredRecord(Protocol):
    """A record read back from the store; `fields` includes `title`."""

    title: str

    @property
    def fields(self) -> Dict[str, Any]:
        ...


class EdgeTypeStore(Protocol):
    """Record store operations edge-type descriptors rely on."""

    def record_exists(self, title: str) -> bool:
        ...

    def get_record(self, title: str) -> Optional[StoredRecord]:
        ...

    def get_shadow_record(self, root: str, title: str) -> Optional[StoredRecord]:
        ...

    def put_record(self, fields: Mapping[str, Any]) -> StoredRecord:
        ...

    def list_records(self, prefix: str) -> List[StoredRecord]:
        ...

    def get_creation_fields(self) -> Dict[str, Any]:
        ...

    def get_modification_fields(self) -> Dict[str, Any]:
        ...
