"""
Core domain models for the campus coffee backend.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PosType(str, Enum):
    """Kind of point of sale."""
    CAFE = "CAFE"
    BAKERY = "BAKERY"
    VENDING_MACHINE = "VENDING_MACHINE"
    CAFETERIA = "CAFETERIA"


class CampusType(str, Enum):
    """Campus zone a POS belongs to, derived from its postal code on import."""
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"  # Im Neuenheimer Feld


@dataclass(frozen=True)
class OsmNode:
    """
    An OpenStreetMap node with the tags relevant for a POS.

    This is the raw shape of the OSM data before it is converted to a Pos.
    None means the tag was absent, which is not the same as an empty value.
    """
    node_id: int
    name: Optional[str] = None
    amenity: Optional[str] = None  # e.g. "cafe", "bakery", "vending_machine"
    description: Optional[str] = None
    addr_street: Optional[str] = None
    addr_house_number: Optional[str] = None
    addr_postcode: Optional[str] = None
    addr_city: Optional[str] = None


@dataclass(frozen=True)
class Pos:
    """
    A point of sale on campus.

    `id` is None until the POS has been persisted; a Pos with an id is an
    update candidate, one without is a creation candidate.
    """
    name: str
    type: PosType
    campus: CampusType
    city: str
    description: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
