from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from tmap.services.edges import EdgeTypeDescriptor


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _flag(value: Any) -> Optional[Union[bool, str]]:
    # Stored records may carry show-label as a bool or as "true"/"false" text.
    if value is None or isinstance(value, (bool, str)):
        return value
    return str(value)


class EdgeTypeUpdate(BaseModel):
    description: Optional[str] = None
    label: Optional[str] = None
    show_label: Optional[str] = Field(default=None, alias="show-label")
    style: Optional[Dict[str, Any]] = None
    merge_style: bool = False

    model_config = ConfigDict(populate_by_name=True)

    def attributes(self) -> Dict[str, Any]:
        """Attribute changes keyed by stored field name; style is handled separately."""
        return self.model_dump(by_alias=True, exclude={"style", "merge_style"}, exclude_unset=True)


class EdgeTypeExport(BaseModel):
    destination: str
    prettify: bool = False


class EdgeTypeOut(BaseModel):
    id: str
    label: str
    path: str
    description: Optional[str] = None
    show_label: Optional[Union[bool, str]] = Field(default=None, alias="show-label")
    style: Optional[Dict[str, Any]] = None
    created: Optional[str] = None
    modified: Optional[str] = None
    builtin: bool = False
    exists: bool = False

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_descriptor(cls, edge_type: EdgeTypeDescriptor) -> "EdgeTypeOut":
        return cls(
            id=edge_type.get_id(),
            label=str(edge_type.get_label()),
            path=edge_type.get_path(),
            description=_text(edge_type.get_data("description")),
            show_label=_flag(edge_type.get_data("show-label")),
            style=edge_type.get_style(),
            created=_text(edge_type.get_data("created")),
            modified=_text(edge_type.get_data("modified")),
            builtin=edge_type.is_builtin(),
            exists=edge_type.exists(),
        )
