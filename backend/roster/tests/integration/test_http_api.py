import json

import pytest
from starlette.testclient import TestClient

from roster.server.app import create_app
from roster.server.settings import RosterServerSettings

SLOTS = {"tank": 1, "healer": 1, "dps": 2, "flex": 0}


def _participant(signup_id, name, role=None, slot=None):
    data = {"signup_id": signup_id, "display_name": name, "character_role": role}
    if slot is not None:
        data["placement"] = {"kind": "assigned", "role": slot[0], "position": slot[1]}
    return data


def _slot_of(entry):
    placement = entry["placement"]
    return (placement["role"], placement["position"]) if placement["kind"] == "assigned" else None


class TestRosterEndpoints:
    @pytest.fixture
    def client(self):
        app = create_app(settings=RosterServerSettings(max_request_bytes=4096, clear_confirm_seconds=2))
        return TestClient(app)

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_config_exposes_confirm_windows(self, client):
        response = client.get("/config")
        assert response.json() == {"clear_confirm_ms": 2000, "join_confirm_ms": 3000}

    def test_auto_fill_preview(self, client):
        body = {
            "pool": [
                _participant(1, "Wall", "tank"),
                _participant(2, "Mender", "healer"),
                _participant(3, "Blade", "dps"),
                _participant(4, "Spare"),
            ],
            "slots": SLOTS,
        }
        response = client.post("/roster/auto-fill", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["total_filled"] == 4
        assert data["new_pool"] == []
        assert [_slot_of(a) for a in data["new_assignments"]] == [
            ("tank", 1),
            ("healer", 1),
            ("dps", 1),
            ("dps", 2),
        ]
        assert data["new_assignments"][-1]["is_override"] is True
        assert data["summary"] == [
            {"label": "Tank", "count": 1},
            {"label": "Healer", "count": 1},
            {"label": "DPS", "count": 2},
        ]
        assert data["summary_text"] == "1 → Tank, 1 → Healer, 2 → DPS"

    def test_auto_fill_uses_default_topology_without_slots(self, client):
        response = client.post("/roster/auto-fill", json={"pool": [_participant(1, "Solo")]})

        data = response.json()
        assert data["total_filled"] == 1
        assert _slot_of(data["new_assignments"][0]) == ("flex", 1)

    def test_assign_displaces_occupant(self, client):
        body = {
            "pool": [_participant(2, "NewTank", "tank")],
            "assignments": [_participant(1, "OldTank", "tank", slot=("tank", 1))],
            "slots": SLOTS,
            "action": {"type": "assign", "signup_id": 2, "role": "tank", "position": 1},
        }
        response = client.post("/roster/actions", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["changed"] is True
        assert data["message"] == "NewTank assigned to Tank 1"
        assert [p["display_name"] for p in data["pool"]] == ["OldTank"]
        assert [(a["display_name"], _slot_of(a)) for a in data["assignments"]] == [("NewTank", ("tank", 1))]

    def test_move_swaps(self, client):
        body = {
            "assignments": [
                _participant(1, "A", "tank", slot=("tank", 1)),
                _participant(2, "B", "dps", slot=("dps", 1)),
            ],
            "slots": SLOTS,
            "action": {"type": "move", "signup_id": 1, "role": "dps", "position": 1},
        }
        data = client.post("/roster/actions", json=body).json()

        assert data["message"] == "Swapped A and B"
        assert [(a["display_name"], _slot_of(a)) for a in data["assignments"]] == [
            ("A", ("dps", 1)),
            ("B", ("tank", 1)),
        ]

    def test_remove_and_clear(self, client):
        assignments = [
            _participant(1, "A", "tank", slot=("tank", 1)),
            _participant(2, "B", "dps", slot=("dps", 2)),
        ]
        removed = client.post(
            "/roster/actions",
            json={"assignments": assignments, "slots": SLOTS, "action": {"type": "remove", "signup_id": 2}},
        ).json()
        assert removed["message"] == "B moved to unassigned"
        assert [p["signup_id"] for p in removed["pool"]] == [2]

        cleared = client.post(
            "/roster/actions",
            json={"assignments": assignments, "slots": SLOTS, "action": {"type": "clear"}},
        ).json()
        assert cleared["assignments"] == []
        assert [p["signup_id"] for p in cleared["pool"]] == [1, 2]
        assert cleared["message"] == "Roster cleared — 2 players moved to pool"

    def test_stale_action_returns_snapshot_unchanged(self, client):
        body = {
            "pool": [_participant(1, "A")],
            "slots": SLOTS,
            "action": {"type": "assign", "signup_id": 9, "role": "tank", "position": 1},
        }
        data = client.post("/roster/actions", json=body).json()

        assert data["changed"] is False
        assert data["message"] is None
        assert [p["signup_id"] for p in data["pool"]] == [1]


class TestRequestValidation:
    @pytest.fixture
    def client(self):
        return TestClient(create_app(settings=RosterServerSettings(max_request_bytes=1024)))

    def test_malformed_json(self, client):
        response = client.post("/roster/auto-fill", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_unknown_action_type(self, client):
        response = client.post("/roster/actions", json={"action": {"type": "shuffle"}})
        assert response.status_code == 400

    def test_negative_capacity(self, client):
        response = client.post("/roster/auto-fill", json={"slots": {"tank": -1}})
        assert response.status_code == 400

    def test_unknown_field(self, client):
        response = client.post("/roster/auto-fill", json={"pool": [], "bench": []})
        assert response.status_code == 400

    def test_duplicate_signup_rejected(self, client):
        body = {
            "pool": [_participant(1, "A")],
            "assignments": [_participant(1, "A", slot=("tank", 1))],
        }
        response = client.post("/roster/auto-fill", json=body)

        assert response.status_code == 400
        assert "Duplicate signup id 1" in response.json()["error"]

    def test_body_too_large(self, client):
        body = {"pool": [_participant(i, "x" * 40) for i in range(40)]}
        assert len(json.dumps(body)) > 1024

        response = client.post("/roster/auto-fill", json=body)
        assert response.status_code == 413
        assert response.json() == {"error": "Request body too large"}


def test_cors_enabled_when_origins_configured():
    client = TestClient(create_app(settings=RosterServerSettings(cors_origins=["http://app.test"])))
    response = client.get("/health", headers={"Origin": "http://app.test"})

    assert response.headers["access-control-allow-origin"] == "http://app.test"
