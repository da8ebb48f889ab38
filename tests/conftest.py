import json

import httpx
import pytest
from fastapi.testclient import TestClient

from blueprint_api.config import Config
from blueprint_api.main import app
from blueprint_api.services import openrouter


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(Config, "OPENROUTER_API_KEY", "test-key")
    monkeypatch.setattr(Config, "OPENROUTER_SITE_URL", "")
    monkeypatch.setattr(Config, "OPENROUTER_APP_NAME", "")
    return "test-key"


@pytest.fixture
def upstream(monkeypatch, api_key):
    """Routes OpenRouter calls to a handler set by the test; records requests."""
    state = {"handler": None, "requests": []}

    def dispatch(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    monkeypatch.setattr(
        openrouter, "_build_client",
        lambda: httpx.AsyncClient(transport=httpx.MockTransport(dispatch)),
    )

    def respond(handler):
        state["handler"] = handler
        return state["requests"]

    return respond


@pytest.fixture
def rooms_json():
    return json.dumps({"rooms": [
        {"name": "Kitchen", "x": 0, "y": 0, "width": 10, "height": 10},
        {"name": "Bath", "x": 20, "y": 0, "width": 5, "height": 5},
    ]})
