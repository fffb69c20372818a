import copy
import json
import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def strip_prefix(value: str, prefix: str) -> str:
    """Remove `prefix` from the start of `value` if present."""
    if prefix and value.startswith(prefix):
        return value[len(prefix):]
    return value


def label_from_id(type_id: str) -> str:
    """Derive a display label from an id (`tmap:custom` -> `custom`)."""
    return type_id[type_id.find(":") + 1:]


def merge_defaults(shadow: Optional[Mapping[str, Any]], own: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Overlay `own` fields on top of `shadow` defaults; `own` wins on collision."""
    merged: Dict[str, Any] = {}
    merged.update(shadow or {})
    merged.update(own or {})
    return merged


def deep_merge(target: Dict[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge `source` into `target` in place and return `target`."""
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            deep_merge(current, value)
        elif isinstance(value, Mapping):
            target[key] = deep_merge({}, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def parse_style(text: Any) -> Any:
    """Decode serialized style text; returns None when the text is not valid JSON."""
    if not isinstance(text, (str, bytes)):
        return None
    try:
        return json.loads(text)
    except ValueError:
        logger.warning("Ignoring undecodable style text: %.60r", text)
        return None


def dump_style(style: Mapping[str, Any], indent: Optional[int] = None) -> str:
    """Serialize a style mapping; an indent of 0 or None gives compact output."""
    if indent:
        return json.dumps(style, indent=indent)
    return json.dumps(style, separators=(",", ":"))
