import uuid

import pytest
from fastapi.testclient import TestClient

import server
from campaign_genie import session as session_module
from campaign_genie.api import manager
from campaign_genie.chat import CHAT_ERROR_MESSAGE, EMPTY_REPLY_MESSAGE
from campaign_genie.errors import AuthError, MalformedResponse
from campaign_genie.pipeline import COPY_FAILED_MESSAGE


@pytest.fixture()
def client(monkeypatch, fake_client):
    monkeypatch.setattr(session_module, "create_ai_client", lambda credentials, settings=None: fake_client)
    monkeypatch.setattr(server, "GEMINI_API_KEY", None)
    monkeypatch.setattr(manager, "default_api_key", None)
    return TestClient(server.app)


def _ws_path():
    return f"/ws/test-{uuid.uuid4().hex}"


HEADERS = {"X-API-Key": "test-key"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "running"


# REST

def test_campaign_endpoint_runs_a_full_cycle(client, fake_client, sample_copy):
    response = client.post(
        "/api/campaigns",
        json={"prompt": "Summer coffee sale", "image_size": "2K", "aspect_ratio": "1:1"},
        headers=HEADERS,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["stage"] == "image_succeeded"
    assert body["draft"]["title"] == sample_copy.title
    assert body["draft"]["image_url"] == fake_client.image_url
    assert body["credential_state"] == "unverified"
    assert fake_client.calls[1] == ("image", sample_copy.visual_prompt, "2K", "1:1")


def test_campaign_endpoint_reports_copy_failure(client, fake_client):
    fake_client.copy_error = MalformedResponse("not json")

    body = client.post("/api/campaigns", json={"prompt": "Sale"}, headers=HEADERS).json()

    assert body["stage"] == "copy_failed"
    assert body["draft"] is None
    assert body["status"]["error"] == COPY_FAILED_MESSAGE


def test_campaign_endpoint_revokes_rejected_key(client, fake_client):
    fake_client.copy_error = AuthError("API key not valid")

    body = client.post("/api/campaigns", json={"prompt": "Sale"}, headers=HEADERS).json()

    assert body["credential_state"] == "absent"


def test_campaign_endpoint_requires_a_key(client, fake_client):
    response = client.post("/api/campaigns", json={"prompt": "Sale"})

    assert response.status_code == 401
    assert fake_client.calls == []


def test_campaign_endpoint_rejects_blank_prompt(client):
    response = client.post("/api/campaigns", json={"prompt": "  "}, headers=HEADERS)

    assert response.status_code == 400


def test_campaign_endpoint_rejects_unknown_settings(client, fake_client):
    response = client.post(
        "/api/campaigns",
        json={"prompt": "Sale", "image_size": "8K"},
        headers=HEADERS,
    )

    assert response.status_code == 422
    assert fake_client.calls == []


def test_chat_endpoint(client, fake_client):
    response = client.post(
        "/api/chat",
        json={"messages": [{"role": "model", "content": "Hi!"}, {"role": "user", "content": "Hello"}]},
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert response.json() == {"reply": fake_client.reply}


def test_chat_endpoint_empty_reply(client, fake_client):
    fake_client.reply = ""

    response = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "Hello"}]},
        headers=HEADERS,
    )

    assert response.json() == {"reply": EMPTY_REPLY_MESSAGE}


@pytest.mark.parametrize(
    "messages",
    [[], [{"role": "model", "content": "Hi!"}], [{"role": "user", "content": "  "}]],
)
def test_chat_endpoint_requires_trailing_user_message(client, messages):
    response = client.post("/api/chat", json={"messages": messages}, headers=HEADERS)

    assert response.status_code == 400


@pytest.mark.parametrize(
    "error, status_code",
    [(AuthError("API key not valid"), 401), (RuntimeError("offline"), 502)],
)
def test_chat_endpoint_errors(client, fake_client, error, status_code):
    fake_client.chat_error = error

    response = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "Hello"}]},
        headers=HEADERS,
    )

    assert response.status_code == status_code
    if status_code == 502:
        assert response.json()["detail"] == CHAT_ERROR_MESSAGE


# WebSocket

def test_handshake_without_key_shows_the_gate(client):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "handshake"})
        message = websocket.receive_json()

    assert message["type"] == "ui"
    assert message["view"]["auth_gate"]["visible"] is True
    assert message["view"]["auth_gate"]["checking"] is False


def test_select_key_hides_the_gate(client):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "handshake"})
        websocket.receive_json()
        websocket.send_json({"type": "select_key", "api_key": "my-key"})
        message = websocket.receive_json()

    assert message["view"]["auth_gate"]["visible"] is False


def test_generate_streams_the_cycle(client, sample_copy):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "handshake", "api_key": "my-key"})
        websocket.receive_json()

        websocket.send_json({"type": "generate", "prompt": "Summer coffee sale", "image_size": "2K"})
        views = [websocket.receive_json()["view"] for _ in range(3)]

    assert [view["stage"] for view in views] == ["copy_pending", "image_pending", "image_succeeded"]
    assert views[0]["controls"]["generate_button"]["label"] == "Thinking..."
    assert views[1]["preview"]["title"] == sample_copy.title
    assert views[1]["controls"]["generate_button"]["label"] == "Generating Visual..."
    assert views[2]["preview"]["image"]["badge"] == "2K RESOLUTION"
    assert views[2]["controls"]["prompt"] == "Summer coffee sale"


def test_generate_without_key_is_refused(client, fake_client):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "handshake"})
        websocket.receive_json()
        websocket.send_json({"type": "generate", "prompt": "Summer coffee sale"})
        message = websocket.receive_json()

    assert message["type"] == "error"
    assert fake_client.calls == []


def test_generate_with_invalid_settings_reports_error(client):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "handshake", "api_key": "my-key"})
        websocket.receive_json()
        websocket.send_json({"type": "generate", "prompt": "Sale", "aspect_ratio": "21:9"})
        message = websocket.receive_json()

    assert message["type"] == "error"
    assert message["message"].startswith("Invalid generation settings")


def test_chat_message_round_trip(client, fake_client):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "handshake", "api_key": "my-key"})
        websocket.receive_json()
        websocket.send_json({"type": "toggle_chat"})
        assert websocket.receive_json()["view"]["chat"]["open"] is True

        websocket.send_json({"type": "chat_message", "message": "Hello"})
        pending = websocket.receive_json()["view"]["chat"]
        done = websocket.receive_json()["view"]["chat"]

    assert pending["typing"] is True
    assert done["typing"] is False
    assert done["messages"][-2:] == [
        {"role": "user", "content": "Hello"},
        {"role": "model", "content": fake_client.reply},
    ]


def test_update_form_and_unknown_message(client):
    with client.websocket_connect(_ws_path()) as websocket:
        websocket.send_json({"type": "update_form", "prompt": "Spring sale", "aspect_ratio": "1:1"})
        controls = websocket.receive_json()["view"]["controls"]

        websocket.send_json({"type": "launch_rocket"})
        error = websocket.receive_json()

    assert controls["prompt"] == "Spring sale"
    assert controls["aspect_ratio"] == "1:1"
    assert error == {"type": "error", "message": "Unknown message type: launch_rocket", "timestamp": error["timestamp"]}


def test_session_is_dropped_on_disconnect(client):
    path = _ws_path()
    client_id = path.rsplit("/", 1)[1]

    with client.websocket_connect(path) as websocket:
        websocket.send_json({"type": "handshake"})
        websocket.receive_json()
        assert client_id in manager.sessions

    assert client_id not in manager.sessions
