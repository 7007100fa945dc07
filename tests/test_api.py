from dataclasses import replace

from database.errors import GameNotFoundError


def test_get_wallet(client):
    res = client.get("/api/wallet")
    assert res.status_code == 200
    data = res.json()
    assert data["userId"] == "user-123"
    assert data["totalCoins"] == 100
    assert len(data["transactions"]) == 2
    assert set(data["transactions"][0]) == {"id", "type", "amount", "description", "timestamp"}
    assert data["transactions"][0]["description"] == "Daily reward"
    assert data["transactions"][0]["timestamp"].startswith("2025-06-26T00:00:00")


def test_list_games(client):
    res = client.get("/api/games")
    assert res.status_code == 200
    games = res.json()
    assert games[0] == {
        "id": "challenge-connect",
        "name": "Challenge & Connect",
        "entryCost": 10,
        "currentPlayers": 24,
        "maxPlayers": 100,
        "description": "Test your skills and connect with friends",
        "icon": "target",
    }


def test_list_coin_packs(client):
    res = client.get("/api/coin-packs")
    assert res.status_code == 200
    assert res.json()[1] == {"id": 2, "coins": 100, "price": 1.99, "bonus": 10}
    assert client.get("/api/coin-packs/best-value").json()["id"] == 4


def test_recharge(client):
    res = client.post("/api/wallet/recharge", json={"packId": 2})
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["newBalance"] == 210
    assert data["transaction"]["amount"] == 110
    assert data["transaction"]["description"] == "Recharge: 100 coins + 10 bonus"
    assert client.get("/api/wallet").json()["totalCoins"] == 210


def test_recharge_invalid_pack(client):
    res = client.post("/api/wallet/recharge", json={"packId": 42})
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Invalid coin pack selected"}


def test_recharge_requires_numeric_pack_id(client):
    for body in ({}, {"packId": "2"}):
        res = client.post("/api/wallet/recharge", json=body)
        assert res.status_code == 400
        assert res.json()["success"] is False
    assert client.get("/api/wallet").json()["totalCoins"] == 100


def test_join_game(client):
    res = client.post("/api/games/join", json={"gameId": "challenge-connect"})
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["message"] == "Successfully joined Challenge & Connect"
    assert data["newBalance"] == 90
    assert data["transaction"]["type"] == "debit"
    assert data["transaction"]["description"] == "Joined Challenge & Connect"
    assert data["gameSession"]["gameId"] == "challenge-connect"
    assert data["gameSession"]["gameName"] == "Challenge & Connect"
    assert data["gameSession"]["sessionId"]

    games = {g["id"]: g for g in client.get("/api/games").json()}
    assert games["challenge-connect"]["currentPlayers"] == 25


def test_join_unknown_game(client):
    res = client.post("/api/games/join", json={"gameId": "chess"})
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Game not found"}


def test_join_requires_game_id(client):
    res = client.post("/api/games/join", json={"gameId": 7})
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_join_until_broke(client):
    for _ in range(6):
        assert client.post("/api/games/join", json={"gameId": "snake-ladder"}).status_code == 200
    res = client.post("/api/games/join", json={"gameId": "snake-ladder"})
    assert res.status_code == 400
    assert res.json()["error"] == "Insufficient coins to join this game"
    assert client.get("/api/wallet").json()["totalCoins"] == 10


def test_availability(client):
    assert client.get("/api/games/challenge-connect/availability").json() == {"canJoin": True}
    assert client.get("/api/games/chess/availability").json() == {
        "canJoin": False,
        "reason": "Game not available",
    }


def test_recent_transactions_and_audit(client):
    client.post("/api/games/join", json={"gameId": "challenge-connect"})
    recent = client.get("/api/wallet/transactions", params={"limit": 1}).json()
    assert [t["description"] for t in recent] == ["Joined Challenge & Connect"]

    audit = client.get("/api/wallet/audit").json()
    assert audit["consistent"] is True
    assert audit["totalCoins"] == audit["computedCoins"] == 90


def test_health_endpoints(client):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert health.json()["environment"] == "test"
    assert health.headers["X-Content-Type-Options"] == "nosniff"
    assert client.get("/ready").json() == {"status": "ready"}
    assert client.get("/live").json() == {"status": "alive"}
    assert client.get("/api").json()["endpoints"]["wallet"] == "/api/wallet"


def test_unknown_route(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Route /api/nope not found"}


def test_each_client_gets_fresh_state(client):
    assert client.get("/api/wallet").json()["totalCoins"] == 100


def _set_game(client, game_id, **changes):
    store = client.app.state.store
    store.games[game_id] = replace(store.games[game_id], **changes)


def test_join_full_game(client):
    _set_game(client, "snake-ladder", current_players=50)
    res = client.post("/api/games/join", json={"gameId": "snake-ladder"})
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Game is full"}
    assert client.get("/api/wallet").json()["totalCoins"] == 100


def test_join_consistency_failure(client, monkeypatch):
    async def broken_increment(store, game_id):
        raise GameNotFoundError()

    monkeypatch.setattr("database.lobby.increment_player_count", broken_increment)
    res = client.post("/api/games/join", json={"gameId": "challenge-connect"})
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Failed to update game state"}

    wallet = client.get("/api/wallet").json()
    assert wallet["totalCoins"] == 100
    assert len(wallet["transactions"]) == 2
    games = {g["id"]: g for g in client.get("/api/games").json()}
    assert games["challenge-connect"]["currentPlayers"] == 24


def test_join_free_game_fails_without_charging(client):
    _set_game(client, "challenge-connect", entry_cost=0)
    res = client.post("/api/games/join", json={"gameId": "challenge-connect"})
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Debit amount must be positive"}

    assert client.get("/api/wallet").json()["totalCoins"] == 100
    games = {g["id"]: g for g in client.get("/api/games").json()}
    assert games["challenge-connect"]["currentPlayers"] == 24
