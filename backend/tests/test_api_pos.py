from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import pos as pos_router
from domain.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
    PosNotFoundError,
)
from domain.models import CampusType, Pos, PosType


def _pos(pos_id: int = 1, name: str = "Café Central") -> Pos:
    ts = datetime(2025, 10, 1, 9, 30, 0)
    return Pos(
        id=pos_id,
        name=name,
        description="Coffee shop",
        type=PosType.CAFE,
        campus=CampusType.ALTSTADT,
        postal_code=69117,
        city="Heidelberg",
        created_at=ts,
        updated_at=ts,
    )


PAYLOAD = {
    "name": "Café Central",
    "description": "Coffee shop",
    "type": "CAFE",
    "campus": "ALTSTADT",
    "postal_code": 69117,
    "city": "Heidelberg",
}


@pytest.fixture
def mock_service():
    with patch.object(pos_router, "pos_service") as service:
        yield service


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(pos_router.router, prefix="/api/pos")
    return TestClient(app)


def test_import_returns_created_pos(client, mock_service):
    mock_service.import_from_osm_node.return_value = _pos()

    resp = client.post("/api/pos/import/osm/5589879349")

    assert resp.status_code == 201
    mock_service.import_from_osm_node.assert_called_once_with(5589879349)
    data = resp.json()
    assert data["id"] == 1
    assert data["type"] == "CAFE"
    assert data["campus"] == "ALTSTADT"
    assert data["created_at"] == "2025-10-01T09:30:00"


@pytest.mark.parametrize(
    "error, status",
    [
        (OsmNodeNotFoundError(7), 404),
        (OsmNodeMissingFieldsError(7), 400),
        (DuplicatePosNameError("Café Central"), 409),
    ],
)
def test_import_translates_errors(client, mock_service, error, status):
    mock_service.import_from_osm_node.side_effect = error
    resp = client.post("/api/pos/import/osm/7")
    assert resp.status_code == status
    assert resp.json()["detail"] == str(error)


def test_import_rejects_non_numeric_node_id(client, mock_service):
    resp = client.post("/api/pos/import/osm/abc")
    assert resp.status_code == 422
    mock_service.import_from_osm_node.assert_not_called()


def test_list_pos(client, mock_service):
    mock_service.get_all.return_value = [_pos(1, "A"), _pos(2, "B")]
    resp = client.get("/api/pos")
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()] == ["A", "B"]


def test_get_pos_not_found(client, mock_service):
    mock_service.get_by_id.side_effect = PosNotFoundError(5)
    resp = client.get("/api/pos/5")
    assert resp.status_code == 404


def test_create_pos(client, mock_service):
    mock_service.upsert.return_value = _pos()
    resp = client.post("/api/pos", json=PAYLOAD)
    assert resp.status_code == 201
    sent = mock_service.upsert.call_args.args[0]
    assert sent.id is None
    assert sent.type is PosType.CAFE
    assert sent.campus is CampusType.ALTSTADT


def test_create_pos_with_id_is_rejected(client, mock_service):
    resp = client.post("/api/pos", json={**PAYLOAD, "id": 3})
    assert resp.status_code == 400
    mock_service.upsert.assert_not_called()


def test_create_pos_duplicate_name(client, mock_service):
    mock_service.upsert.side_effect = DuplicatePosNameError("Café Central")
    resp = client.post("/api/pos", json=PAYLOAD)
    assert resp.status_code == 409


def test_update_pos_uses_path_id(client, mock_service):
    mock_service.upsert.return_value = _pos(4)
    resp = client.put("/api/pos/4", json=PAYLOAD)
    assert resp.status_code == 200
    assert mock_service.upsert.call_args.args[0].id == 4


def test_update_pos_id_mismatch(client, mock_service):
    resp = client.put("/api/pos/4", json={**PAYLOAD, "id": 5})
    assert resp.status_code == 400


def test_update_pos_not_found(client, mock_service):
    mock_service.upsert.side_effect = PosNotFoundError(4)
    resp = client.put("/api/pos/4", json=PAYLOAD)
    assert resp.status_code == 404
