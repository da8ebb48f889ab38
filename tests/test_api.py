import base64
import json

import httpx
import pytest

from blueprint_api.config import Config
from blueprint_api.services import openrouter


def completion(content, status_code=200):
    return httpx.Response(status_code, json={"choices": [{"message": {"content": content}}]})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_generate_returns_model_json(client, upstream, rooms_json, monkeypatch):
    monkeypatch.setattr(Config, "OPENROUTER_SITE_URL", "https://plans.example")
    monkeypatch.setattr(Config, "OPENROUTER_APP_NAME", "Blueprints")
    requests = upstream(lambda request: completion(f"```json\n{rooms_json}\n```"))

    resp = client.post("/api/blueprint", json={"prompt": "  a kitchen and a bath  "})

    assert resp.status_code == 200
    assert resp.json() == json.loads(rooms_json)

    (sent,) = requests
    assert str(sent.url) == Config.OPENROUTER_URL
    assert sent.headers["Authorization"] == "Bearer test-key"
    assert sent.headers["HTTP-Referer"] == "https://plans.example"
    assert sent.headers["X-Title"] == "Blueprints"
    body = json.loads(sent.content)
    assert body["model"] == Config.OPENROUTER_MODEL
    assert body["temperature"] == 0.2
    assert body["messages"][0]["role"] == "system"
    assert body["messages"][1] == {"role": "user", "content": "a kitchen and a bath"}


def test_generate_passes_through_unexpected_json(client, upstream):
    upstream(lambda request: completion('[1, 2, 3]'))
    resp = client.post("/api/blueprint", json={"prompt": "anything"})
    assert resp.status_code == 200
    assert resp.json() == [1, 2, 3]


@pytest.mark.parametrize("body", [{}, {"prompt": 5}, {"text": "hi"}])
def test_generate_rejects_invalid_request(client, api_key, body):
    resp = client.post("/api/blueprint", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request"}


def test_generate_rejects_malformed_json_body(client, api_key):
    resp = client.post("/api/blueprint", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request"}


def test_generate_requires_prompt(client, api_key):
    resp = client.post("/api/blueprint", json={"prompt": "   "})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Prompt is required"}


def test_generate_requires_api_key(client, monkeypatch):
    monkeypatch.setattr(Config, "OPENROUTER_API_KEY", "")
    resp = client.post("/api/blueprint", json={"prompt": "house"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "OPENROUTER_API_KEY or OPENROUTER_API is not configured"}


@pytest.mark.parametrize("handler,status,message", [
    (lambda r: httpx.Response(401, json={}), 401, openrouter.AUTH_FAILURE),
    (lambda r: httpx.Response(403, json={"error": {"message": "Key revoked"}}), 401, "Key revoked"),
    (lambda r: httpx.Response(429, json={"error": {"message": "Rate limited"}}), 502, "Rate limited"),
    (lambda r: httpx.Response(500, json={"error": {"message": "  "}}), 502, "AI request failed"),
    (lambda r: httpx.Response(200, text="<html>oops</html>"), 502, "AI service returned an unreadable response"),
    (lambda r: httpx.Response(200, json={"choices": []}), 502, "AI response did not include any choices"),
    (lambda r: completion("   "), 502, "AI response content was empty"),
    (lambda r: completion("rooms: kitchen"), 502, "AI returned invalid JSON"),
])
def test_generate_upstream_failures(client, upstream, handler, status, message):
    upstream(handler)
    resp = client.post("/api/blueprint", json={"prompt": "house"})
    assert resp.status_code == status
    assert resp.json() == {"error": message}


def test_generate_network_failure(client, upstream):
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream(fail)
    resp = client.post("/api/blueprint", json={"prompt": "house"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "AI request failed"}


def test_render_repairs_disconnected_layout(client, rooms_json):
    resp = client.post("/api/render", content=rooms_json, headers={"Content-Type": "application/json"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["repaired"] is True
    assert data["rooms"] == [
        {"name": "Kitchen", "x": 40, "y": 40, "width": 736, "height": 720},
        {"name": "Bath", "x": 776, "y": 40, "width": 184, "height": 720},
    ]
    assert 'viewBox="0 0 1000 800"' in data["svg"]
    assert data["image_base64"] is None


def test_render_preview_png(client, rooms_json):
    resp = client.post("/api/render?preview=true", content=rooms_json,
                       headers={"Content-Type": "application/json"})
    image = base64.b64decode(resp.json()["image_base64"])
    assert image.startswith(b"\x89PNG")


@pytest.mark.parametrize("payload", [{"rooms": []}, {}, [], "text", 3])
def test_render_tolerates_malformed_blueprints(client, payload):
    resp = client.post("/api/render", json=payload)
    assert resp.status_code == 200
    assert resp.json()["rooms"] == []
    assert resp.json()["repaired"] is False


def test_render_without_body(client):
    resp = client.post("/api/render")
    assert resp.status_code == 200
    assert resp.json()["rooms"] == []


def test_cors_preflight(client):
    resp = client.options("/api/blueprint", headers={
        "Origin": "http://localhost:5173",
        "Access-Control-Request-Method": "POST",
    })
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"


@pytest.mark.parametrize("room,count", [
    ({"name": "Hangar", "x": 0, "y": 0, "width": 1.5e308, "height": 10}, 1),
    ({"name": "Endless", "x": 0, "y": 0, "width": 10**400, "height": 10}, 0),
])
def test_render_survives_extreme_sizes(client, room, count):
    resp = client.post("/api/render", json={"rooms": [room]})

    assert resp.status_code == 200
    assert len(resp.json()["rooms"]) == count
    assert resp.json()["svg"].startswith("<svg viewBox=")
