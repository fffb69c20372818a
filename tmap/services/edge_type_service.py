from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from tmap.services.edges import (
    AUTO_TYPE_ID,
    UNKNOWN_TYPE_ID,
    EdgeTypeDescriptor,
    EdgeTypeNamespace,
    dump_style,
    strip_prefix,
)
from tmap.services.record_store import RecordStore

logger = logging.getLogger(__name__)

# Defaults shipped with the plugin; user records are overlaid on top of these.
BUILTIN_EDGE_TYPES: Dict[str, Dict[str, Any]] = {
    AUTO_TYPE_ID: {
        "description": "Automatically generated link between two nodes",
        "style": {"color": {"color": "#777777"}, "dashes": False},
    },
    UNKNOWN_TYPE_ID: {
        "description": "Edge of an unspecified type",
        "style": {"color": {"color": "#9E9E9E"}},
    },
}


class EdgeTypeService:
    """Catalog of edge types stored under the configured edge-type path."""

    def __init__(self, store: RecordStore, namespace: Optional[EdgeTypeNamespace] = None):
        self.store = store
        self.namespace = namespace or EdgeTypeNamespace()

    def seed_builtin_defaults(self) -> None:
        for type_id, defaults in BUILTIN_EDGE_TYPES.items():
            fields: Dict[str, Any] = {"title": self.namespace.path_for(type_id)}
            fields.update(defaults)
            fields["style"] = dump_style(defaults["style"])
            self.store.put_shadow_record(self.namespace.plugin_root, fields)
        logger.info("Registered %d builtin edge types under %s", len(BUILTIN_EDGE_TYPES), self.namespace.plugin_root)

    def get(self, type_id: str) -> EdgeTypeDescriptor:
        return EdgeTypeDescriptor.create(type_id, self.store, self.namespace)

    def list_types(self) -> List[EdgeTypeDescriptor]:
        records = self.store.list_records(self.namespace.prefix)
        return [self.get(strip_prefix(record.title, self.namespace.prefix)) for record in records]

    def update(
        self,
        type_id: str,
        attributes: Mapping[str, Any],
        style: Optional[Mapping[str, Any]] = None,
        merge_style: bool = False,
    ) -> EdgeTypeDescriptor:
        edge_type = self.get(type_id)
        edge_type.set_attributes(attributes)
        if style is not None:
            edge_type.set_style(style, merge_style)
        edge_type.persist()
        # Reload so the result carries stored timestamps and shadow defaults.
        return self.get(type_id)

    def export(self, type_id: str, destination: str, prettify: bool = False) -> EdgeTypeDescriptor:
        if not destination:
            raise ValueError("Export destination must not be empty")
        if self.namespace.contains(destination):
            raise ValueError(f"Export destination '{destination}' lies inside the edge type path")
        edge_type = self.get(type_id)
        edge_type.persist(destination, prettify=prettify)
        logger.info("Exported edge type %s to %s", type_id, destination)
        return edge_type

    def delete(self, type_id: str) -> None:
        edge_type = self.get(type_id)
        if edge_type.is_builtin():
            raise ValueError(f"Edge type '{edge_type.get_id()}' is builtin and cannot be deleted")
        self.store.delete_record(edge_type.get_path())
        logger.info("Deleted edge type %s", edge_type.get_id())
