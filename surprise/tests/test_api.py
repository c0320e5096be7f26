"""
Tests for API layer.

Tests:
- Service formatting (closed prizes hidden)
- Game flow over HTTP
- Ignored operations answered with 409
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import AddPrizeRequest, ErrorResponse
from ..api.service import APIService
from ..engine_core.action import ErrorCode
from ..engine_core.state import Category
from .conftest import SHOW_PRIZES


@pytest.fixture
def service(manager) -> APIService:
    manager.load()
    return APIService(manager=manager)


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(create_app(service=service))


def add_show_prizes(client: TestClient):
    for name, value, category in SHOW_PRIZES:
        response = client.post(
            "/api/v1/prizes",
            json={"name": name, "value": value, "category": category.value},
        )
        assert response.status_code == 201


class TestAPIService:

    def test_closed_containers_hide_prizes(self, service):
        for name, value, category in SHOW_PRIZES:
            service.session.add_prize(name, value, category)
        service.start_game()

        game = service.get_game()

        assert len(game.containers) == 16
        assert all(c.prize is None for c in game.containers)
        assert [p.value for p in game.prize_ladder] == sorted(p[1] for p in SHOW_PRIZES)

    def test_ignored_operation_returns_error(self, service):
        response = service.open_case(1)
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_PHASE

    def test_rejected_prize_is_invalid_not_full(self, service):
        request = AddPrizeRequest.model_construct(name="", value=10.0, category=Category.NOVICE, image_url="")

        response = service.add_prize(request)

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_PRIZE
        assert len(service.session.catalog) == 0

    def test_full_catalog_reports_full(self, service):
        for name, value, category in SHOW_PRIZES:
            service.session.add_prize(name, value, category)

        response = service.add_prize(AddPrizeRequest(name="Extra", value=1))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.CATALOG_FULL


class TestGameEndpoints:

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_full_round_over_http(self, client):
        add_show_prizes(client)
        assert client.get("/api/v1/prizes").json()["is_complete"] is True

        assert client.post("/api/v1/game/start").status_code == 200
        assert client.post("/api/v1/game/rules/confirm").status_code == 200

        response = client.post("/api/v1/game/cases/7/select")
        assert response.status_code == 200
        game = response.json()["game"]
        assert game["game_state"] == "PLAYING"
        assert game["held_container_id"] == 7

        for container_id in (1, 2, 3):
            response = client.post(f"/api/v1/game/cases/{container_id}/open")
            assert response.status_code == 200
            body = response.json()
            assert body["revealed_prize"]["category"] != "Prestige"
            opened = next(c for c in body["game"]["containers"] if c["id"] == container_id)
            assert opened["prize"]["id"] == body["revealed_prize"]["id"]

        response = client.post("/api/v1/game/advance")
        assert response.status_code == 200
        game = response.json()["game"]
        assert game["current_round_index"] == 1
        assert game["cases_opened_in_current_round"] == 0
        assert game["remaining_to_open"] == 3

    def test_wrong_phase_is_conflict(self, client):
        response = client.post("/api/v1/game/cases/3/open")
        assert response.status_code == 409
        assert response.json()["error_code"] == ErrorCode.INVALID_PHASE

    def test_start_with_incomplete_catalog(self, client):
        client.post("/api/v1/prizes", json={"name": "Mug", "value": 10})
        response = client.post("/api/v1/game/start")
        assert response.status_code == 409
        assert response.json()["error_code"] == ErrorCode.CATALOG_INCOMPLETE

    def test_reset(self, client):
        add_show_prizes(client)
        client.post("/api/v1/game/start")

        response = client.post("/api/v1/game/reset")

        assert response.status_code == 200
        assert response.json()["game_state"] == "SETUP"
        assert client.get("/api/v1/prizes").json()["count"] == 0


class TestCatalogEndpoints:

    def test_invalid_prize_rejected(self, client):
        response = client.post("/api/v1/prizes", json={"name": "", "value": 10})
        assert response.status_code == 422

    def test_catalog_full(self, client):
        add_show_prizes(client)
        response = client.post("/api/v1/prizes", json={"name": "Extra", "value": 1})
        assert response.status_code == 409
        assert response.json()["error_code"] == ErrorCode.CATALOG_FULL

    def test_remove_prize(self, client):
        add_show_prizes(client)
        response = client.delete("/api/v1/prizes/0")
        assert response.status_code == 200
        assert response.json()["name"] == SHOW_PRIZES[0][0]
        assert client.delete("/api/v1/prizes/40").status_code == 404


class TestDirectiveEndpoints:

    def test_set_target(self, client):
        add_show_prizes(client)
        prizes = client.get("/api/v1/prizes").json()["prizes"]
        car = next(p for p in prizes if p["category"] == "Legendary")

        response = client.put("/api/v1/directive", json={"target_prize_id": car["id"]})

        assert response.status_code == 200
        assert response.json()["mode"] == "target"

        client.post("/api/v1/game/start")
        client.post("/api/v1/game/rules/confirm")
        client.post("/api/v1/game/cases/5/select")
        response = client.post("/api/v1/game/cases/5/open")
        assert response.status_code == 409

    def test_unknown_target_rejected(self, client):
        response = client.put("/api/v1/directive", json={"target_prize_id": "nope"})
        assert response.status_code == 409
        assert response.json()["error_code"] == ErrorCode.INVALID_PRIZE
        assert client.get("/api/v1/directive").json()["mode"] == "none"
