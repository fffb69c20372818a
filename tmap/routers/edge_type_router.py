from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Request

from tmap.models.edge_type import EdgeTypeExport, EdgeTypeOut, EdgeTypeUpdate
from tmap.services.edge_type_service import EdgeTypeService

router = APIRouter(prefix="/edge-types", tags=["edge-types"])


def _edge_types(request: Request) -> EdgeTypeService:
    return request.app.state.edge_types


@router.get("", response_model=List[EdgeTypeOut])
def list_edge_types(request: Request):
    return [EdgeTypeOut.from_descriptor(edge_type) for edge_type in _edge_types(request).list_types()]


@router.get("/{type_id}", response_model=EdgeTypeOut)
def get_edge_type(request: Request, type_id: str):
    edge_type = _edge_types(request).get(type_id)
    if not edge_type.exists():
        raise HTTPException(status_code=404, detail=f"Edge type '{type_id}' not found")
    return EdgeTypeOut.from_descriptor(edge_type)


@router.put("/{type_id}", response_model=EdgeTypeOut)
def update_edge_type(request: Request, type_id: str, payload: EdgeTypeUpdate):
    edge_type = _edge_types(request).update(
        type_id,
        payload.attributes(),
        style=payload.style,
        merge_style=payload.merge_style,
    )
    return EdgeTypeOut.from_descriptor(edge_type)


@router.post("/{type_id}/export")
def export_edge_type(request: Request, type_id: str, payload: EdgeTypeExport):
    try:
        edge_type = _edge_types(request).export(type_id, payload.destination, prettify=payload.prettify)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"id": edge_type.get_id(), "destination": payload.destination}


@router.delete("/{type_id}", status_code=204)
def delete_edge_type(request: Request, type_id: str):
    try:
        _edge_types(request).delete(type_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return
