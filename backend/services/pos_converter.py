"""
Conversion of OpenStreetMap nodes into POS domain objects.

Required tags are name, amenity and addr:city. Everything else falls back to
a default with a warning in the log:

- unknown amenity -> PosType.CAFE
- missing or non-numeric postcode -> no postal code
- missing or unknown postal code -> CampusType.ALTSTADT
- missing description -> generated from the amenity
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from domain.exceptions import OsmNodeMissingFieldsError
from domain.models import CampusType, OsmNode, Pos, PosType

logger = logging.getLogger(__name__)

AMENITY_POS_TYPES = {
    "cafe": PosType.CAFE,
    "coffee_shop": PosType.CAFE,
    "bakery": PosType.BAKERY,
    "vending_machine": PosType.VENDING_MACHINE,
    "cafeteria": PosType.CAFETERIA,
    "restaurant": PosType.CAFETERIA,
    "fast_food": PosType.CAFETERIA,
    "bar": PosType.CAFETERIA,
    "pub": PosType.CAFETERIA,
}
DEFAULT_POS_TYPE = PosType.CAFE

# Heidelberg postal codes
POSTAL_CODE_CAMPUSES = {
    69117: CampusType.ALTSTADT,
    69115: CampusType.BERGHEIM,
    69120: CampusType.INF,
    69121: CampusType.INF,
}
DEFAULT_CAMPUS = CampusType.ALTSTADT

AMENITY_DESCRIPTIONS = {
    "cafe": "Coffee shop",
    "coffee_shop": "Coffee shop",
    "bakery": "Bakery",
    "vending_machine": "Vending machine",
    "cafeteria": "Cafeteria",
    "restaurant": "Restaurant",
}
DEFAULT_DESCRIPTION = "Point of sale"

_POSTAL_CODE_RE = re.compile(r"[+-]?[0-9]+")
# postal_code is a 32-bit INTEGER column
_POSTAL_CODE_MIN = -(2**31)
_POSTAL_CODE_MAX = 2**31 - 1


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def map_amenity_to_pos_type(amenity: str) -> PosType:
    pos_type = AMENITY_POS_TYPES.get(amenity.lower())
    if pos_type is None:
        logger.warning("Unknown amenity type '%s', defaulting to %s", amenity, DEFAULT_POS_TYPE.name)
        return DEFAULT_POS_TYPE
    return pos_type


def parse_postal_code(postcode: Optional[str], node_id: int) -> Optional[int]:
    """Parse an addr:postcode value; None when missing or not an integer."""
    if _is_blank(postcode):
        logger.warning("OSM node %s has no postal code", node_id)
        return None
    text = postcode.strip()
    value = None
    # short-circuit keeps int() away from huge digit runs
    if _POSTAL_CODE_RE.fullmatch(text) and len(text.lstrip("+-0")) <= 10:
        value = int(text)
    if value is None or not _POSTAL_CODE_MIN <= value <= _POSTAL_CODE_MAX:
        logger.warning(
            "OSM node %s has invalid postal code '%s', cannot parse to integer", node_id, postcode
        )
        return None
    return value


def determine_campus(postal_code: Optional[int], node_id: int) -> CampusType:
    if postal_code is None:
        logger.warning("OSM node %s has no postal code, defaulting to %s", node_id, DEFAULT_CAMPUS.name)
        return DEFAULT_CAMPUS
    campus = POSTAL_CODE_CAMPUSES.get(postal_code)
    if campus is None:
        logger.warning(
            "Unknown postal code %s for node %s, defaulting to %s",
            postal_code,
            node_id,
            DEFAULT_CAMPUS.name,
        )
        return DEFAULT_CAMPUS
    return campus


def describe_amenity(amenity: str) -> str:
    return AMENITY_DESCRIPTIONS.get(amenity.lower(), DEFAULT_DESCRIPTION)


def _require(node: OsmNode, value: Optional[str], tag: str) -> str:
    if _is_blank(value):
        logger.error("OSM node %s is missing required field: %s", node.node_id, tag)
        raise OsmNodeMissingFieldsError(node.node_id)
    return value


def convert_osm_node_to_pos(node: OsmNode) -> Pos:
    """
    Convert an OSM node into a Pos ready to be created.

    Raises OsmNodeMissingFieldsError for the first blank required tag, checked
    in the order name, amenity, addr:city.
    """
    logger.debug("Converting OSM node %s to POS", node.node_id)

    name = _require(node, node.name, "name")
    amenity = _require(node, node.amenity, "amenity")
    city = _require(node, node.addr_city, "addr:city")

    pos_type = map_amenity_to_pos_type(amenity)
    logger.debug("Mapped amenity '%s' to PosType.%s", amenity, pos_type.name)

    postal_code = parse_postal_code(node.addr_postcode, node.node_id)
    campus = determine_campus(postal_code, node.node_id)
    logger.debug("Determined campus %s from postal code %s", campus.name, postal_code)

    description = node.description if not _is_blank(node.description) else describe_amenity(amenity)

    return Pos(
        name=name,
        description=description,
        type=pos_type,
        campus=campus,
        street=node.addr_street,
        house_number=node.addr_house_number,
        postal_code=postal_code,
        city=city,
    )
