"""
Client for the OpenStreetMap API 0.6 node endpoint.

Every failure while fetching or reading a node (404/410, any other status,
connection errors, timeouts, unparseable documents) is reported as
OsmNodeNotFoundError. The logs are the only place the actual cause shows up.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

import requests

from domain.exceptions import OsmNodeNotFoundError
from domain.models import OsmNode
from services.osm_parser import build_osm_node, extract_tags
from settings import settings

logger = logging.getLogger(__name__)

NOT_FOUND_STATUSES = (404, 410)


class OsmClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.OSM_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.OSM_TIMEOUT_SECONDS
        self.headers = {"User-Agent": user_agent or settings.OSM_USER_AGENT}
        self._session = session or requests.Session()
        # one request at a time on the shared session
        self._lock = threading.Lock()

    def node_url(self, node_id: int) -> str:
        return f"{self.base_url}/{node_id}"

    def fetch_node_document(self, node_id: int) -> str:
        """GET the raw XML document of a node. Single attempt, no retries.

        Raises OsmNodeNotFoundError on any non-200 status or request failure.
        """
        url = self.node_url(node_id)
        try:
            with self._lock:
                # (connect, read) timeouts
                resp = self._session.get(
                    url, headers=self.headers, timeout=(self.timeout, self.timeout)
                )
        except Exception as exc:
            logger.error("Error fetching OSM node %s: %s", node_id, exc, exc_info=True)
            raise OsmNodeNotFoundError(node_id) from exc

        if resp.status_code in NOT_FOUND_STATUSES:
            logger.warning("OSM node %s not found (HTTP %s)", node_id, resp.status_code)
            raise OsmNodeNotFoundError(node_id)
        if resp.status_code != 200:
            logger.error(
                "OSM API returned unexpected status code %s for node %s",
                resp.status_code,
                node_id,
            )
            raise OsmNodeNotFoundError(node_id)

        logger.debug("Received OSM XML response for node %s: %s", node_id, resp.text)
        return resp.text

    def fetch_node(self, node_id: int) -> OsmNode:
        """Fetch a node and read its tags into an OsmNode.

        Raises OsmNodeNotFoundError for every kind of failure.
        """
        logger.info("Fetching OSM node data for node ID: %s", node_id)
        document = self.fetch_node_document(node_id)
        try:
            tags = extract_tags(node_id, document)
        except OsmNodeNotFoundError:
            raise
        except Exception as exc:
            logger.error("Error parsing OSM node %s: %s", node_id, exc, exc_info=True)
            raise OsmNodeNotFoundError(node_id) from exc
        return build_osm_node(node_id, tags)


_default_osm_client: Optional[OsmClient] = None


def get_default_osm_client() -> OsmClient:
    global _default_osm_client
    if _default_osm_client is None:
        _default_osm_client = OsmClient()
    return _default_osm_client
