"""
POS API routes.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from domain.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
    PosNotFoundError,
)
from domain.models import CampusType, Pos, PosType
from services.pos_service import PosService

router = APIRouter()
pos_service = PosService()
logger = logging.getLogger(__name__)


class PosPayload(BaseModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    type: PosType
    campus: CampusType
    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[int] = None
    city: str


class PosResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    type: str
    campus: str
    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[int] = None
    city: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def pos_to_response(pos: Pos) -> PosResponse:
    """Convert domain Pos to API response."""
    return PosResponse(
        id=pos.id,
        name=pos.name,
        description=pos.description,
        type=pos.type.value,
        campus=pos.campus.value,
        street=pos.street,
        house_number=pos.house_number,
        postal_code=pos.postal_code,
        city=pos.city,
        created_at=pos.created_at.isoformat() if pos.created_at else None,
        updated_at=pos.updated_at.isoformat() if pos.updated_at else None,
    )


def payload_to_pos(payload: PosPayload, pos_id: Optional[int]) -> Pos:
    return Pos(
        id=pos_id,
        name=payload.name,
        description=payload.description,
        type=payload.type,
        campus=payload.campus,
        street=payload.street,
        house_number=payload.house_number,
        postal_code=payload.postal_code,
        city=payload.city,
    )


@router.get("", response_model=List[PosResponse])
def list_pos():
    """List all POS."""
    return [pos_to_response(p) for p in pos_service.get_all()]


@router.get("/{pos_id}", response_model=PosResponse)
def get_pos(pos_id: int):
    """Get a single POS."""
    try:
        return pos_to_response(pos_service.get_by_id(pos_id))
    except PosNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.post("", response_model=PosResponse, status_code=201)
def create_pos(payload: PosPayload):
    """Create a new POS."""
    if payload.id is not None:
        raise HTTPException(status_code=400, detail="POS ID must not be set on create")
    try:
        return pos_to_response(pos_service.upsert(payload_to_pos(payload, None)))
    except DuplicatePosNameError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.put("/{pos_id}", response_model=PosResponse)
def update_pos(pos_id: int, payload: PosPayload):
    """Update an existing POS."""
    if payload.id is not None and payload.id != pos_id:
        raise HTTPException(status_code=400, detail="POS ID in path and body do not match")
    try:
        return pos_to_response(pos_service.upsert(payload_to_pos(payload, pos_id)))
    except PosNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except DuplicatePosNameError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/import/osm/{node_id}", response_model=PosResponse, status_code=201)
def import_from_osm(node_id: int):
    """Import a POS from an OpenStreetMap node."""
    try:
        pos = pos_service.import_from_osm_node(node_id)
    except OsmNodeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except OsmNodeMissingFieldsError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except DuplicatePosNameError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    logger.info("Imported OSM node %s as POS %s", node_id, pos.id)
    return pos_to_response(pos)
