"""Tests for the trainer HTTP API (tables, ranges and health)."""

import pytest
from fastapi.testclient import TestClient

from backend.app_factory import AppContext, create_app


@pytest.fixture
def client():
    """Create a test client with a fresh context."""
    app = create_app(context=AppContext(production_mode=False))
    with TestClient(app) as test_client:
        yield test_client


def _create(client, **body):
    payload = {"player_count": 3, "seed": 11}
    payload.update(body)
    response = client.post("/api/tables", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestTables:
    """Tests for /api/tables endpoints."""

    def test_create_table_deals_first_hand(self, client):
        """A human on the button acts first three-handed."""
        data = _create(client, previous_dealer_index=2, auto_play=False)
        state = data["state"]
        assert data["table_id"]
        assert state["hand_number"] == 1
        assert state["phase"] == "preflop"
        assert state["is_your_turn"] is True
        assert state["legal_actions"] == ["fold", "call", "raise", "all-in"]

    def test_create_table_validation(self, client):
        """Player counts outside 2-9 are rejected by the request model."""
        assert client.post("/api/tables", json={"player_count": 1}).status_code == 422
        assert client.post("/api/tables", json={"player_count": 10}).status_code == 422

    def test_create_table_bad_settings(self, client):
        """Invalid stakes or unknown presets come back as 400."""
        response = client.post(
            "/api/tables", json={"settings": {"small_blind": 100, "big_blind": 50}}
        )
        assert response.status_code == 400
        assert "error" in response.json()

        response = client.post(
            "/api/tables", json={"settings": {"ai_personalities": [{"preset": "MANIAC"}]}}
        )
        assert response.status_code == 400

    def test_tournament_table(self, client):
        data = _create(client, settings={"game_type": "tournament"}, auto_play=False)
        assert data["state"]["blinds"] == {"small_blind": 10, "big_blind": 20, "ante": 0}
        assert data["state"]["game_type"] == "tournament"

    def test_unknown_table(self, client):
        """Unknown table ids return 404 on every endpoint."""
        assert client.get("/api/tables/missing").status_code == 404
        assert client.get("/api/tables/missing/legal-actions").status_code == 404
        response = client.post(
            "/api/tables/missing/actions", json={"player_id": "player1", "action": "fold"}
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Table not found: missing"}
        assert client.delete("/api/tables/missing").status_code == 404

    def test_check_facing_big_blind_is_rejected(self, client):
        """The small blind cannot check while facing the big blind."""
        data = _create(client, previous_dealer_index=1)
        table_id = data["table_id"]
        assert data["state"]["is_your_turn"] is True

        legal = client.get(f"/api/tables/{table_id}/legal-actions").json()
        assert "fold" in legal["actions"]
        assert "call" in legal["actions"]
        assert "check" not in legal["actions"]

        response = client.post(
            f"/api/tables/{table_id}/actions", json={"player_id": "player1", "action": "check"}
        )
        assert response.status_code == 400
        assert "cannot check" in response.json()["error"]

    def test_out_of_turn_action(self, client):
        table_id = _create(client, previous_dealer_index=2, auto_play=False)["table_id"]
        response = client.post(
            f"/api/tables/{table_id}/actions", json={"player_id": "player2", "action": "call"}
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("Not your turn")

    def test_action_then_ai_response(self, client):
        table_id = _create(client, previous_dealer_index=2, auto_play=False)["table_id"]
        response = client.post(
            f"/api/tables/{table_id}/actions", json={"player_id": "player1", "action": "call"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["actions"]
        assert data["state"]["hand_over"] or data["state"]["is_your_turn"]

    def test_ai_turn_endpoints(self, client):
        table_id = _create(client, previous_dealer_index=1, auto_play=False)["table_id"]
        single = client.post(f"/api/tables/{table_id}/ai-turn").json()
        assert single["action_taken"] is True
        assert single["action"]["player_id"] == "player3"

        result = client.post(f"/api/tables/{table_id}/ai-turns").json()
        assert result["success"] is True
        assert client.post(f"/api/tables/{table_id}/ai-turn").json()["action_taken"] is False

    def test_fold_history_and_new_hand(self, client):
        """Folding ends the human's hand; history and session reflect it."""
        table_id = _create(client, previous_dealer_index=2, auto_play=False)["table_id"]
        response = client.post(f"/api/tables/{table_id}/new-hand", params={"auto_play": False})
        assert response.status_code == 400

        client.post(
            f"/api/tables/{table_id}/actions", json={"player_id": "player1", "action": "fold"}
        )
        history = client.get(f"/api/tables/{table_id}/history").json()
        assert history["count"] == 1
        assert history["hands"][0]["hand_number"] == 1

        session = client.get(f"/api/tables/{table_id}/session").json()
        assert session["hands_played"] == 1
        assert session["hands_won"] == 0
        assert session["player_id"] == "player1"

        response = client.post(f"/api/tables/{table_id}/new-hand", params={"auto_play": False})
        assert response.status_code == 200
        assert response.json()["state"]["hand_number"] == 2

    def test_viewer_sees_own_cards(self, client):
        table_id = _create(client, auto_play=False)["table_id"]
        state = client.get(f"/api/tables/{table_id}", params={"viewer": "player2"}).json()
        cards = {p["player_id"]: p["hole_cards"] for p in state["players"]}
        assert "??" not in cards["player2"]
        assert cards["player1"] == ["??", "??"]

    def test_list_and_delete(self, client):
        first = _create(client)["table_id"]
        _create(client)
        listing = client.get("/api/tables").json()
        assert listing["count"] == 2
        assert first in {t["table_id"] for t in listing["tables"]}

        assert client.delete(f"/api/tables/{first}").json() == {"success": True, "table_id": first}
        assert client.get("/api/tables").json()["count"] == 1
        assert client.get(f"/api/tables/{first}").status_code == 404

    def test_ai_only_table_needs_player_id(self, client):
        table_id = _create(client, settings={"has_human": False}, auto_play=False)["table_id"]
        assert client.get(f"/api/tables/{table_id}/legal-actions").status_code == 400


class TestRanges:
    """Tests for /api/ranges endpoints."""

    CUSTOM = {
        "name": "mine",
        "description": "Pairs only",
        "hands": [
            {"hand": "AA", "frequency": 1.0, "action": "raise"},
            {"hand": "22", "frequency": 0.5},
        ],
    }

    def test_list_predefined(self, client):
        data = client.get("/api/ranges").json()
        assert data["count"] == 5
        assert {r["name"] for r in data["ranges"]} >= {"tight", "standard", "veryLoose"}
        assert all(r["predefined"] for r in data["ranges"])

    def test_get_range(self, client):
        data = client.get("/api/ranges/standard").json()
        assert data["predefined"] is True
        assert 0 < data["coverage"] < 1
        assert {"hand": "AA", "frequency": 1.0, "action": "raise"} in data["hands"]
        assert client.get("/api/ranges/nope").status_code == 404

    def test_put_bumps_version(self, client):
        first = client.put("/api/ranges/mine", json=self.CUSTOM)
        assert first.status_code == 200
        assert first.json()["version"] == 1
        second = client.put("/api/ranges/mine", json=self.CUSTOM)
        assert second.json()["version"] == 2
        assert client.get("/api/ranges/mine").json()["predefined"] is False

    def test_put_rejects_malformed_entries(self, client):
        body = {
            "name": "bad",
            "hands": [{"hand": "AXs", "frequency": 1.0}, {"hand": "ZZ", "frequency": 2}],
        }
        response = client.put("/api/ranges/bad", json=body)
        assert response.status_code == 400
        assert len(response.json()["bad_entries"]) == 2
        assert client.get("/api/ranges/bad").status_code == 404

    def test_put_name_mismatch(self, client):
        assert client.put("/api/ranges/other", json=self.CUSTOM).status_code == 400

    def test_predefined_ranges_are_read_only(self, client):
        body = dict(self.CUSTOM, name="tight")
        assert client.put("/api/ranges/tight", json=body).status_code == 400
        assert client.delete("/api/ranges/tight").status_code == 400

    def test_delete(self, client):
        client.put("/api/ranges/mine", json=self.CUSTOM)
        assert client.delete("/api/ranges/mine").status_code == 200
        assert client.delete("/api/ranges/mine").status_code == 404

    def test_table_with_custom_range_personality(self, client):
        settings = {"ai_personalities": [{"preset": "BALANCED", "custom_range": self.CUSTOM}]}
        data = _create(client, settings=settings, auto_play=False)
        personality = data["state"]["players"][1]["personality"]
        assert personality["name"] == "Balanced"
        assert personality["custom_range"] == "mine"


def test_health(client):
    _create(client)
    data = client.get("/health").json()
    assert data["version"] == "1.0.0"
    assert data["table_count"] == 1
    assert data["range_count"] == 5
