from core.stores import ConfigStore


def test_unknown_route_is_json_404(api_client):
    response = api_client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_unknown_nested_route_is_json_404(api_client):
    response = api_client.post("/api/whatever/", {"a": 1}, format="json")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_unexpected_error_hides_details(api_client, monkeypatch):
    def explode(self):
        raise RuntimeError("secret path /etc/passwd")

    monkeypatch.setattr(ConfigStore, "read", explode)

    response = api_client.get("/config")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert b"secret" not in response.content


def test_wrong_method_surfaces_its_own_message(api_client):
    response = api_client.delete("/config")
    assert response.status_code == 405
    assert "DELETE" in response.json()["error"]


def test_static_files_are_served_from_the_first_root_that_has_them(client, settings, tmp_path):
    first = tmp_path / "public"
    second = tmp_path / "dist"
    first.mkdir()
    second.mkdir()
    (first / "index.html").write_text("<h1>first</h1>", encoding="utf-8")
    (second / "app.js").write_text("console.log(1)", encoding="utf-8")
    settings.FRONTEND_DIRS = [first, tmp_path / "missing", second]

    index = client.get("/")
    assert index.status_code == 200
    assert b"".join(index.streaming_content) == b"<h1>first</h1>"

    script = client.get("/app.js")
    assert script.status_code == 200
    assert b"".join(script.streaming_content) == b"console.log(1)"

    missing = client.get("/nothing.css")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Not found"}
