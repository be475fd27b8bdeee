from fastapi.testclient import TestClient

from backend.cooklang.core.config import Settings, get_settings
from backend.cooklang.main import app

client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_parse_endpoint():
    response = client.post(
        "/api/v1/parse",
        json={"text": ">> servings: 2\nMix @flour{200%g} in a #bowl{}\n"},
    )
    assert response.status_code == 200
    body = response.json()

    segments = body["recipe"]["steps"][0]["segments"]
    assert [s["kind"] for s in segments] == ["text", "ingredient", "text", "cookware"]
    assert segments[1]["amount"] == {
        "alternatives": [{"components": [200]}],
        "scalable": False,
        "unit": "g",
    }
    assert body["recipe"]["metadata"]["servings"]["alternatives"] == [{"components": [2]}]
    assert body["ingredients"][0]["name"] == "flour"
    assert body["errors"] == []


def test_parse_endpoint_syntax_error():
    response = client.post("/api/v1/parse", json={"text": "Wait\n~{}"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["line"] == 2
    assert detail["column"] == 2
    assert detail["expected"] == ["number"]


def test_parse_endpoint_tolerant():
    response = client.post(
        "/api/v1/parse", json={"text": "Add @salt\n@flour{/2}\nServe", "tolerant": True}
    )
    assert response.status_code == 200
    body = response.json()
    assert len(body["recipe"]["steps"]) == 2
    assert [e["line"] for e in body["errors"]] == [2]


def test_oversized_input_is_rejected():
    app.dependency_overrides[get_settings] = lambda: Settings(max_input_chars=10)
    try:
        response = client.post("/api/v1/parse", json={"text": "Add @salt to the soup"})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 413


def test_duplicate_key_policy_from_settings():
    app.dependency_overrides[get_settings] = lambda: Settings(duplicate_metadata_keys="first")
    try:
        response = client.post("/api/v1/parse", json={"text": ">> a: x\n>> a: y"})
    finally:
        app.dependency_overrides.clear()
    assert response.json()["recipe"]["metadata"] == {"a": "x"}


def test_render_endpoint():
    response = client.post("/api/v1/render", json={"text": "Add @flour{ 1 / 2 }  // later"})
    assert response.status_code == 200
    assert response.json()["text"] == "Add @flour{1/2}\n"


def test_main_runs_uvicorn_with_settings(monkeypatch):
    import runpy

    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    runpy.run_module("backend.cooklang.main", run_name="__main__")

    settings = get_settings()
    assert calls == [{"host": settings.host, "port": settings.port, "log_level": settings.log_level.lower()}]


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("COOKLANG_PORT", "9100")
    monkeypatch.setenv("COOKLANG_DUPLICATE_METADATA_KEYS", "error")
    settings = Settings()
    assert settings.port == 9100
    assert settings.duplicate_metadata_keys == "error"
