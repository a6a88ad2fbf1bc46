"""
Tests for the HTTP service.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pokerarena.server.app import create_app
from pokerarena.server.manager import SeatSpec, TableManager

from conftest import run


SEATS = [
    {"name": "Alice", "chips": 1000, "agent": "call"},
    {"name": "Bob", "chips": 1000, "agent": "random"},
    {"name": "Charlie", "chips": 1000, "agent": "aggressive"},
]


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def table_id(client):
    response = client.post("/tables", json={"players": SEATS, "seed": 42})
    assert response.status_code == 201
    return response.json()["table_id"]


class TestTableRoutes:

    def test_create_table(self, client):
        response = client.post(
            "/tables",
            json={"players": SEATS, "small_blind": 10, "big_blind": 20, "seed": 1},
        )
        data = response.json()

        assert response.status_code == 201
        assert data["table_id"] == "table-1"
        assert data["hand_number"] == 0
        assert data["is_running"] is True
        assert data["total_chips"] == 3000
        assert [s["name"] for s in data["seats"]] == ["Alice", "Bob", "Charlie"]

    def test_create_table_validation(self, client):
        one_player = {"players": SEATS[:1]}
        assert client.post("/tables", json=one_player).status_code == 422

        bad_agent = {"players": [SEATS[0], {"name": "Bob", "agent": "shark"}]}
        assert client.post("/tables", json=bad_agent).status_code == 422

    def test_duplicate_names_rejected(self, client):
        response = client.post("/tables", json={"players": [SEATS[0], SEATS[0]]})
        assert response.status_code == 400
        assert "unique" in response.json()["detail"]

    def test_small_blind_above_big_blind_rejected(self, client):
        response = client.post(
            "/tables", json={"players": SEATS, "small_blind": 50, "big_blind": 20},
        )
        assert response.status_code == 400

    def test_get_table(self, client, table_id):
        response = client.get(f"/tables/{table_id}")
        assert response.status_code == 200
        assert response.json()["table_id"] == table_id

    def test_unknown_table(self, client):
        assert client.get("/tables/missing").status_code == 404
        assert client.post("/tables/missing/hands").status_code == 404
        assert client.get("/tables/missing/hands/last").status_code == 404
        assert client.delete("/tables/missing").status_code == 404

    def test_play_hand(self, client, table_id):
        response = client.post(f"/tables/{table_id}/hands")
        data = response.json()

        assert response.status_code == 200
        assert data["hand_number"] == 1
        assert sum(data["payouts"].values()) == data["pot"]
        assert sum(data["final_chips"].values()) == 3000
        assert data["log"][0] == "Hand #1"

        table = client.get(f"/tables/{table_id}").json()
        assert table["hand_number"] == 1
        # Seat order rotated left by one after the hand
        assert table["seats"][-1]["name"] == "Alice" or "Alice" in data["eliminated"]

    def test_last_hand(self, client, table_id):
        assert client.get(f"/tables/{table_id}/hands/last").status_code == 404

        played = client.post(f"/tables/{table_id}/hands").json()
        last = client.get(f"/tables/{table_id}/hands/last").json()

        assert last == played

    def test_delete_table(self, client, table_id):
        assert client.delete(f"/tables/{table_id}").status_code == 200
        assert client.get(f"/tables/{table_id}").status_code == 404

    def test_game_over(self, client):
        seats = [
            {"name": "Alice", "chips": 20, "agent": "aggressive"},
            {"name": "Bob", "chips": 20, "agent": "aggressive"},
        ]
        table_id = client.post(
            "/tables", json={"players": seats, "small_blind": 10, "big_blind": 20, "seed": 3},
        ).json()["table_id"]

        # Both players are all in from the blinds: one hand decides it
        # unless the board splits the pot.
        status = 200
        for _ in range(20):
            status = client.post(f"/tables/{table_id}/hands").status_code
            if status != 200:
                break

        assert status == 409
        assert client.get(f"/tables/{table_id}").json()["is_running"] is False


class TestTableManager:

    def test_same_seed_same_hands(self):
        def play(seed):
            manager = TableManager()
            seats = [SeatSpec("Alice", 500, "call"), SeatSpec("Bob", 500, "call")]
            table = manager.create_table(seats, seed=seed)
            return [run(manager.play_hand(table.table_id)).to_dict() for _ in range(3)]

        assert play(7) == play(7)

    def test_hands_at_one_table_do_not_overlap(self):
        manager = TableManager()
        table = manager.create_table(
            [SeatSpec("Alice", 1000, "call"), SeatSpec("Bob", 1000, "call"),
             SeatSpec("Charlie", 1000, "call")],
            seed=5,
        )

        async def play_two():
            return await asyncio.gather(
                manager.play_hand(table.table_id),
                manager.play_hand(table.table_id),
            )

        first, second = run(play_two())

        assert {first.hand_number, second.hand_number} == {1, 2}
        assert table.game.total_chips == 3000
        assert not table.is_busy

    def test_unknown_bot_kind(self):
        with pytest.raises(ValueError):
            TableManager().create_table([SeatSpec("A", 100, "shark"), SeatSpec("B", 100)])

    def test_remove_table(self):
        manager = TableManager()
        table = manager.create_table([SeatSpec("A", 100), SeatSpec("B", 100)])
        assert manager.remove_table(table.table_id)
        assert not manager.remove_table(table.table_id)
        assert manager.get_table(table.table_id) is None
