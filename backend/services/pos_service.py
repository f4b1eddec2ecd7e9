"""
POS business logic: CRUD pass-throughs and import from OpenStreetMap.

The import runs fetch -> convert -> upsert in sequence. Errors from any step
propagate to the caller unchanged.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from db import SessionLocal
from domain.exceptions import DuplicatePosNameError
from domain.models import Pos
from repositories import PosRepository
from services.osm_client import OsmClient, get_default_osm_client
from services.pos_converter import convert_osm_node_to_pos

logger = logging.getLogger(__name__)


class PosService:
    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        repository: Optional[PosRepository] = None,
        osm_client: Optional[OsmClient] = None,
    ):
        self.session_factory = session_factory
        self.repository = repository or PosRepository()
        self._osm_client = osm_client

    @property
    def osm_client(self) -> OsmClient:
        if self._osm_client is None:
            self._osm_client = get_default_osm_client()
        return self._osm_client

    def clear(self) -> None:
        logger.warning("Clearing all POS data")
        with self.session_factory() as session:
            self.repository.clear(session)

    def get_all(self) -> List[Pos]:
        logger.debug("Retrieving all POS")
        with self.session_factory() as session:
            return self.repository.list_pos(session)

    def get_by_id(self, pos_id: int) -> Pos:
        """Raises PosNotFoundError if there is no POS with this id."""
        logger.debug("Retrieving POS with ID: %s", pos_id)
        with self.session_factory() as session:
            return self.repository.get_by_id(session, pos_id)

    def upsert(self, pos: Pos) -> Pos:
        """
        Create a POS (no id) or update an existing one (id set).

        Raises PosNotFoundError when updating an id that does not exist and
        DuplicatePosNameError when the name is already taken.
        """
        with self.session_factory() as session:
            if pos.id is None:
                logger.info("Creating new POS: %s", pos.name)
            else:
                logger.info("Updating POS with ID: %s", pos.id)
                # must exist before the update
                self.repository.get_by_id(session, pos.id)
            return self._perform_upsert(session, pos)

    def import_from_osm_node(self, node_id: int) -> Pos:
        """
        Import a POS from an OpenStreetMap node.

        Raises OsmNodeNotFoundError, OsmNodeMissingFieldsError or
        DuplicatePosNameError.
        """
        logger.info("Importing POS from OpenStreetMap node %s...", node_id)
        osm_node = self.osm_client.fetch_node(node_id)
        saved = self.upsert(convert_osm_node_to_pos(osm_node))
        logger.info("Successfully imported POS '%s' from OSM node %s", saved.name, node_id)
        return saved

    def _perform_upsert(self, session: Session, pos: Pos) -> Pos:
        try:
            saved = self.repository.upsert(session, pos)
        except DuplicatePosNameError as exc:
            logger.error("Error upserting POS '%s': %s", pos.name, exc)
            raise
        logger.info("Successfully upserted POS with ID: %s", saved.id)
        return saved
