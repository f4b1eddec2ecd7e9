"""
Parsing helpers for OpenStreetMap API node documents.

An OSM API 0.6 node document looks like:

    <osm version="0.6">
      <node id="5589879349" lat="49.41" lon="8.69" ...>
        <tag k="amenity" v="cafe"/>
        <tag k="name" v="Rada"/>
      </node>
    </osm>
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Dict, Mapping

from domain.exceptions import OsmNodeNotFoundError
from domain.models import OsmNode

logger = logging.getLogger(__name__)


def extract_tags(node_id: int, document: str | bytes) -> Dict[str, str]:
    """Collect the k/v tags of the first <node> element in an OSM document.

    Raises OsmNodeNotFoundError when the document holds no <node> element.
    Malformed XML raises ET.ParseError; callers decide how to report it.
    """
    if isinstance(document, str):
        document = document.encode("utf-8")
    root = ET.fromstring(document)

    node_element = next(root.iter("node"), None)
    if node_element is None:
        logger.error("No <node> element found in OSM XML response for node %s", node_id)
        raise OsmNodeNotFoundError(node_id)

    tags: Dict[str, str] = {}
    for tag_element in node_element.iter("tag"):
        # Duplicate keys: last one wins.
        tags[tag_element.get("k", "")] = tag_element.get("v", "")

    logger.info("Extracted %d tags from OSM node %s", len(tags), node_id)
    logger.debug("Tags: %s", tags)
    return tags


def build_osm_node(node_id: int, tags: Mapping[str, str]) -> OsmNode:
    """Assemble an OsmNode from a tag map. Unknown tags are ignored."""
    return OsmNode(
        node_id=node_id,
        name=tags.get("name"),
        amenity=tags.get("amenity"),
        description=tags.get("description"),
        addr_street=tags.get("addr:street"),
        addr_house_number=tags.get("addr:housenumber"),
        addr_postcode=tags.get("addr:postcode"),
        addr_city=tags.get("addr:city"),
    )
