import asyncio
import logging

import pytest
import uvicorn
from fastapi.testclient import TestClient

from main import Server, create_app
from tests.conftest import INDEX_HTML


def test_unknown_route_serves_front_end(client):
    response = client.get("/annunci/42")

    assert response.status_code == 200
    assert response.text == INDEX_HTML
    assert response.headers["content-type"].startswith("text/html")


def test_static_assets_are_served(client):
    response = client.get("/app.js")

    assert response.status_code == 200
    assert "bookswap" in response.text


def test_root_serves_front_end(client):
    assert client.get("/").text == INDEX_HTML


def test_api_routes_take_precedence_over_static(client):
    assert isinstance(client.get("/api/classes").json(), list)


def test_api_only_without_static_bundle(tmp_path):
    app = create_app(database_path=str(tmp_path / "data.db"), static_dir=str(tmp_path / "missing"))
    with TestClient(app) as client:
        assert client.get("/api/classes").status_code == 200
        response = client.get("/annunci")
    assert response.status_code == 404
    assert "error" in response.json()


def test_store_failure_aborts_startup(tmp_path, caplog):
    app = create_app(database_path=str(tmp_path / "no" / "such" / "dir.db"))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(Exception):
            with TestClient(app):
                pass

    assert "Could not open database" in caplog.text


def test_listening_is_not_logged_when_startup_fails(tmp_path, caplog):
    app = create_app(database_path=str(tmp_path / "no" / "such" / "dir.db"))
    server = Server(uvicorn.Config(app, port=0, lifespan="on", log_config=None))

    with caplog.at_level(logging.INFO):
        asyncio.run(server.serve())

    assert not server.started
    assert "Server listening" not in caplog.text
