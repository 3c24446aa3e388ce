"""Flask / Socket.IO endpoints: one isolated ParserSession per client."""

import pytest

import server


@pytest.fixture
def client():
    server.app.config["TESTING"] = True
    server.game_sessions.clear()
    with server.app.test_client() as client:
        yield client
    for web_session in server.game_sessions.values():
        web_session.close()
    server.game_sessions.clear()


@pytest.fixture
def game(client):
    response = client.post("/api/new_game", json={"session_id": "abc"})
    assert response.status_code == 200
    return response.get_json()


def test_new_game_describes_start_room(game):
    assert game["success"] is True
    assert game["session_id"] == "abc"
    assert game["messages"][0].startswith("WEST OF HOUSE")
    assert game["game_state"]["room"]["id"] == "west_of_house"
    assert game["game_state"]["turn"] == 1


def test_new_game_generates_session_id(client):
    data = client.post("/api/new_game").get_json()

    assert data["session_id"]
    assert data["session_id"] in server.game_sessions


def test_parse_only(client, game):
    data = client.post("/api/parse", json={"session_id": "abc", "command": "open the mailbox"}).get_json()

    assert data["success"] is True
    assert data["result"]["verb"] == "OPEN"
    assert data["result"]["direct_object"] == "mailbox"
    assert server.game_sessions["abc"].session.turn == 1


def test_parse_error_is_structured(client, game):
    data = client.post("/api/parse", json={"session_id": "abc", "command": "take flurb mat"}).get_json()

    assert data["success"] is False
    assert data["result"]["error"] == "UNKNOWN_WORD"
    assert data["result"]["word"] == "flurb"
    assert data["result"]["position"] == 1


def test_command_executes(client, game):
    data = client.post("/api/command", json={"session_id": "abc", "command": "open mailbox"}).get_json()

    assert data["success"] is True
    assert data["messages"] == ["Opening the small mailbox reveals an advertising leaflet."]

    data = client.post("/api/command", json={"session_id": "abc", "command": "take leaflet"}).get_json()

    assert data["messages"] == ["Taken: advertising leaflet."]
    assert data["game_state"]["inventory"] == [{"id": "leaflet", "name": "advertising leaflet"}]


def test_command_failure_message(client, game):
    data = client.post("/api/command", json={"session_id": "abc", "command": "take lamp"}).get_json()

    assert data["success"] is False
    assert data["result"]["error"] == "OBJECT_NOT_FOUND"
    assert data["messages"] == ["You can't see any lamp here!"]


def test_unknown_session(client):
    response = client.post("/api/command", json={"session_id": "nope", "command": "look"})

    assert response.status_code == 404
    assert client.post("/api/parse", json={"session_id": "nope"}).status_code == 404
    assert client.get("/api/state/nope").status_code == 404


def test_state(client, game):
    client.post("/api/command", json={"session_id": "abc", "command": "take mat"})

    state = client.get("/api/state/abc").get_json()

    assert state["turn"] == 2
    assert state["pronouns"] == {"singular": ["mat"]}
    assert "mailbox" in [o["id"] for o in state["visible"]]


def test_sessions_are_isolated(client, game):
    client.post("/api/new_game", json={"session_id": "other"})
    client.post("/api/command", json={"session_id": "abc", "command": "take mat"})

    other = client.get("/api/state/other").get_json()

    assert other["inventory"] == []
    assert other["pronouns"] == {}


def test_new_game_replaces_session(client, game):
    client.post("/api/command", json={"session_id": "abc", "command": "take mat"})

    client.post("/api/new_game", json={"session_id": "abc"})

    assert client.get("/api/state/abc").get_json()["inventory"] == []


def test_socket_command(client, game):
    socket = server.socketio.test_client(server.app)
    assert any(msg["name"] == "connected" for msg in socket.get_received())

    socket.emit("command", {"session_id": "abc", "command": "take mat"})
    received = socket.get_received()

    output = [msg for msg in received if msg["name"] == "output"]
    assert output[0]["args"][0]["messages"] == ["Taken: welcome mat."]
    socket.disconnect()


def test_socket_unknown_session(client):
    socket = server.socketio.test_client(server.app)
    socket.get_received()

    socket.emit("command", {"session_id": "nope", "command": "look"})

    assert socket.get_received()[0]["name"] == "error"
    socket.disconnect()
