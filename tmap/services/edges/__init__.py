"""Edge type descriptors and the record-store contract they persist through."""

from .attributes import deep_merge, dump_style, label_from_id, merge_defaults, parse_style, strip_prefix
from .edge_types import (
    ATTRIBUTE_WHITELIST,
    AUTO_TYPE_ID,
    UNKNOWN_TYPE_ID,
    EdgeTypeDescriptor,
    EdgeTypeNamespace,
    InvalidTypeError,
)
from .store import EdgeTypeStore, StoredRecord

__all__ = [
    "ATTRIBUTE_WHITELIST",
    "AUTO_TYPE_ID",
    "UNKNOWN_TYPE_ID",
    "EdgeTypeDescriptor",
    "EdgeTypeNamespace",
    "EdgeTypeStore",
    "InvalidTypeError",
    "StoredRecord",
    "deep_merge",
    "dump_style",
    "label_from_id",
    "merge_defaults",
    "parse_style",
    "strip_prefix",
]
