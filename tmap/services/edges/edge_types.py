import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .attributes import deep_merge, dump_style, label_from_id, merge_defaults, parse_style, strip_prefix
from .store import EdgeTypeStore, StoredRecord

logger = logging.getLogger(__name__)

UNKNOWN_TYPE_ID = "tmap:unknown"
AUTO_TYPE_ID = "tmap:link"

# Fields a descriptor accepts; everything else is dropped on write.
ATTRIBUTE_WHITELIST = ("description", "style", "label", "modified", "created", "show-label")


class InvalidTypeError(TypeError):
    """Raised when an edge type is created from a value that cannot name one."""


@dataclass(frozen=True)
class EdgeTypeNamespace:
    """Where edge types live in the record store and how they are serialized."""

    edge_types_path: str = "$:/plugins/felixhayashi/tiddlymap/graph/edgeTypes"
    plugin_root: str = "$:/plugins/felixhayashi/tiddlymap"
    json_spaces: int = 4

    @property
    def prefix(self) -> str:
        return self.edge_types_path + "/"

    def path_for(self, type_id: str) -> str:
        return self.prefix + type_id

    def contains(self, title: str) -> bool:
        return title.startswith(self.edge_types_path)


TypeRef = Union["EdgeTypeDescriptor", StoredRecord, str]


class EdgeTypeDescriptor:
    """Named relationship kind with display metadata, backed by a store record.

    Use `EdgeTypeDescriptor.create` rather than the constructor: it passes
    existing descriptors through unchanged and validates the source value.
    """

    def __init__(self, type_id: str, store: EdgeTypeStore, namespace: Optional[EdgeTypeNamespace] = None):
        self.store = store
        self.namespace = namespace or EdgeTypeNamespace()
        self.data: Dict[str, Any] = {}
        self.id = strip_prefix(type_id, self.namespace.prefix)
        self.load(self.id)

    @classmethod
    def create(
        cls,
        source: Any,
        store: EdgeTypeStore,
        namespace: Optional[EdgeTypeNamespace] = None,
    ) -> "EdgeTypeDescriptor":
        if isinstance(source, EdgeTypeDescriptor):
            return source
        if not source:
            source = UNKNOWN_TYPE_ID
        elif not isinstance(source, str):
            raise InvalidTypeError(f"Cannot create edge type from {type(source).__name__}: {source!r}")
        return cls(source, store, namespace)

    def __repr__(self) -> str:
        return f"EdgeTypeDescriptor({self.id!r})"

    def get_id(self) -> str:
        return self.id

    def get_path(self) -> str:
        return self.namespace.path_for(self.id)

    def exists(self) -> bool:
        """True if a record for this type is stored under the edge-type path."""
        return self.store.record_exists(self.get_path())

    def is_builtin(self) -> bool:
        return self.id == AUTO_TYPE_ID

    def get_label(self) -> str:
        return self.data.get("label") or label_from_id(self.id)

    def get_data(self, key: Optional[str] = None) -> Any:
        """Return the attribute map, or a single attribute when `key` is given.

        The full map is returned by reference. `label` is always derived
        through `get_label`.
        """
        if key == "label":
            return self.get_label()
        if key:
            return self.data.get(key)
        return self.data

    def get_style(self) -> Optional[Dict[str, Any]]:
        """Return the style as a mapping, decoding the text form left by `persist`."""
        style = self.data.get("style")
        if isinstance(style, str):
            style = parse_style(style)
        return style if isinstance(style, dict) else None

    def set_attribute(self, key: str, value: Any) -> None:
        if key == "style":
            self.set_style(value)
        elif value and key in ATTRIBUTE_WHITELIST:
            self.data[key] = value
        else:
            # Also drops legitimate falsy values such as show-label=False.
            self.data.pop(key, None)

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        if not isinstance(attributes, Mapping):
            return
        for key, value in attributes.items():
            self.set_attribute(key, value)

    def set_style(self, style: Any, is_merge: bool = False) -> None:
        if isinstance(style, (str, bytes)):
            style = parse_style(style)
        if not isinstance(style, Mapping):
            return
        if is_merge:
            current = self.get_style() or {}
            self.data["style"] = deep_merge(current, style)
        else:
            self.data["style"] = style if isinstance(style, dict) else dict(style)

    def load(self, type_ref: TypeRef) -> None:
        """Merge attribute data from another descriptor, a store record or a type id/path."""
        if isinstance(type_ref, EdgeTypeDescriptor):
            self.set_attributes(copy.deepcopy(type_ref.get_data()))
            return

        if not isinstance(type_ref, str):
            fields = getattr(type_ref, "fields", None)
            type_ref = fields.get("title") if isinstance(fields, Mapping) else None

        if not isinstance(type_ref, str):
            logger.warning("Cannot load edge type data from %r", type_ref)
            return

        if not self.namespace.contains(type_ref):
            type_ref = self.namespace.path_for(type_ref)
        self.load_from_path(type_ref)

    def load_from_path(self, path: str) -> None:
        record = self.store.get_record(path)
        if record is None:
            logger.debug("No edge type record at %s; keeping defaults for %s", path, self.id)
            return

        shadow = self.store.get_shadow_record(self.namespace.plugin_root, self.get_path())
        merged = merge_defaults(shadow.fields if shadow is not None else {}, record.fields)
        self.set_attributes(merged)
        logger.debug("Loaded edge type %s from %s", self.id, path)

    def persist(self, destination: Optional[str] = None, prettify: bool = False) -> StoredRecord:
        """Write the descriptor to the store, replacing any record at `destination`.

        A destination outside the edge-type path is a dump: the record gets an
        explicit `id` field and no timestamps. The in-memory style is left in
        its serialized text form afterwards.
        """
        destination = destination or self.get_path()
        fields: Dict[str, Any] = {"title": destination}

        if not self.namespace.contains(destination):
            fields["id"] = self.id
        else:
            fields.update(self.store.get_modification_fields())
            if not self.exists():
                fields.update(self.store.get_creation_fields())

        style = self.get_style()
        if style is None:
            self.data.pop("style", None)
        else:
            indent = self.namespace.json_spaces if prettify else None
            self.data["style"] = dump_style(style, indent=indent)

        record = self.store.put_record({**self.data, **fields})
        logger.debug("Persisted edge type %s to %s", self.id, destination)
        return record
