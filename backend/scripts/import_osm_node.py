"""Import a single POS from an OpenStreetMap node.

Usage (from backend/):
    python -m scripts.import_osm_node <node_id> [--verbose]

Uses the database configured via DATABASE_URL (backend/.env is honoured) and
creates the tables if they are missing.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[1] / ".env")

from db import init_db
from domain.exceptions import CampusCoffeeError
from services.pos_service import PosService

logger = logging.getLogger("import_osm_node")


def main(argv: Optional[List[str]] = None, service: Optional[PosService] = None) -> int:
    parser = argparse.ArgumentParser(description="Import a POS from an OpenStreetMap node.")
    parser.add_argument("node_id", type=int, help="OpenStreetMap node id, e.g. 5589879349.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if service is None:
        init_db()
        service = PosService()

    try:
        pos = service.import_from_osm_node(args.node_id)
    except CampusCoffeeError as exc:
        logger.error("Import of OSM node %s failed: %s", args.node_id, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(
        f"Imported POS #{pos.id}: {pos.name} ({pos.type.value}, {pos.campus.value}) "
        f"{pos.street or ''} {pos.house_number or ''}, {pos.postal_code or ''} {pos.city}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
