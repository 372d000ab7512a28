import base64
import io
import json

import pytest
from PIL import Image
from lifegrid import RenderError, codec
from lifegrid_app import main


@pytest.fixture
def client():
    main.app.config["TESTING"] = True
    with main.app.test_client() as client:
        yield client


@pytest.fixture
def wire():
    return {
        "birthDate": "1990-05-01",
        "lifeExpectancy": 80,
        "device": "iphone-se",
        "shape": "rounded",
        "widgetPosition": "bottom",
        "theme": "dark",
        "showLabels": True,
    }


def _token(wire):
    return base64.urlsafe_b64encode(json.dumps(wire).encode()).decode().rstrip("=")


def _error_code(resp):
    return resp.get_json()["error"]["code"]


def test_wallpaper_by_query(client, wire):
    resp = client.get(f"/api/wallpaper?token={_token(wire)}")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert resp.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
    assert resp.headers["Content-Disposition"] == 'inline; filename="life-calendar.png"'
    assert Image.open(io.BytesIO(resp.data)).size == (750, 1334)


def test_wallpaper_by_path(client, wire):
    resp = client.get(f"/api/wallpaper/{_token(wire)}")
    assert resp.status_code == 200
    assert resp.data.startswith(b"\x89PNG")


def test_wallpaper_download(client, wire):
    resp = client.get(f"/api/wallpaper?token={_token(wire)}&download=1")
    assert resp.headers["Content-Disposition"].startswith("attachment;")


def test_unknown_device_renders_default(client, wire):
    wire["device"] = "nokia-3310"
    resp = client.get(f"/api/wallpaper?token={_token(wire)}")
    assert resp.status_code == 200
    assert Image.open(io.BytesIO(resp.data)).size == (1206, 2622)


def test_missing_token(client):
    resp = client.get("/api/wallpaper")
    assert resp.status_code == 400
    assert _error_code(resp) == "MISSING_TOKEN"


@pytest.mark.parametrize("token", ["%25%25%25", "bm90IGpzb24", "e30"])
def test_invalid_token(client, token):
    resp = client.get(f"/api/wallpaper?token={token}")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": {"message": "Invalid token", "code": "INVALID_TOKEN"}}


def test_generation_error(client, wire, monkeypatch):
    def fail(settings, now=None):
        raise RenderError("boom")

    monkeypatch.setattr(main.wallpaper_service, "generate_png", fail)
    resp = client.get(f"/api/wallpaper?token={_token(wire)}")
    assert resp.status_code == 500
    assert _error_code(resp) == "GENERATION_ERROR"


def test_create_token(client, wire):
    resp = client.post("/api/wallpaper/token", json=wire)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert codec.decode(data["token"]) == codec.decode(_token(wire))
    assert data["url"].endswith(f"/api/wallpaper?token={data['token']}")
    assert data["url"].startswith("http://localhost/")


def test_create_token_uses_public_url(client, wire, monkeypatch):
    monkeypatch.setattr(main, "PUBLIC_URL", "https://walls.example.com")
    data = client.post("/api/wallpaper/token", json=wire).get_json()["data"]
    assert data["url"].startswith("https://walls.example.com/api/wallpaper?token=")


@pytest.mark.parametrize("key,value", [
    ("lifeExpectancy", 0),
    ("shape", "star"),
    ("birthDate", "05/01/1990"),
    ("extra", True),
])
def test_create_token_invalid(client, wire, key, value):
    wire[key] = value
    resp = client.post("/api/wallpaper/token", json=wire)
    assert resp.status_code == 400
    assert _error_code(resp) == "INVALID_SETTINGS"


def test_create_token_not_json(client):
    resp = client.post("/api/wallpaper/token", data="hello", content_type="text/plain")
    assert resp.status_code == 400
    assert _error_code(resp) == "INVALID_SETTINGS"


def test_preview(client, wire):
    resp = client.post("/api/wallpaper/preview", json={"settings": wire})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["image"].startswith("data:image/png;base64,")
    assert (data["width"], data["height"]) == (520, 1120)
    assert data["totalWeeks"] == 80 * 52
    assert 0 <= data["percentLived"] <= 100


def test_preview_mockup_and_width(client, wire):
    resp = client.post("/api/wallpaper/preview", json={"settings": wire, "width": 130, "mockup": True})
    data = resp.get_json()["data"]
    assert (data["width"], data["height"]) == (300, 600)


@pytest.mark.parametrize("body", [None, [], {"settings": {}}, {"width": 200}])
def test_preview_invalid(client, wire, body):
    resp = client.post("/api/wallpaper/preview", json=body)
    assert resp.status_code == 400
    assert _error_code(resp) == "INVALID_SETTINGS"


def test_preview_bad_width(client, wire):
    resp = client.post("/api/wallpaper/preview", json={"settings": wire, "width": "wide"})
    assert resp.status_code == 400


def test_devices(client):
    data = client.get("/api/devices").get_json()["data"]
    assert len(data) == 18
    defaults = [d["id"] for d in data if d["default"]]
    assert defaults == ["iphone-16-pro"]
    assert {"width", "height", "safeAreaTop", "safeAreaBottom", "clockHeight"} <= set(data[0])


def test_themes(client):
    data = client.get("/api/themes").get_json()["data"]
    ids = [t["id"] for t in data]
    assert ids == ["light", "dark", "midnight", "sepia", "ocean", "forest", "custom"]
    assert set(data[0]["colors"]) == {"background", "lived", "future", "text"}


def test_countries(client):
    data = client.get("/api/countries").get_json()["data"]
    assert {"code": "JP", "name": "Japan", "lifeExpectancy": 84} in data


def test_health(client):
    data = client.get("/api/health").get_json()["data"]
    assert data["status"] == "ok"
    assert data["timestamp"].endswith("Z")


def test_unknown_api_route_is_json(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert _error_code(resp) == "HTTP_ERROR"


def test_wrong_method_is_json(client):
    resp = client.delete("/api/devices")
    assert resp.status_code == 405
    assert _error_code(resp) == "HTTP_ERROR"


def test_create_token_missing_field(client, wire):
    del wire["device"]
    resp = client.post("/api/wallpaper/token", json=wire)
    assert resp.status_code == 400
    assert _error_code(resp) == "INVALID_SETTINGS"
