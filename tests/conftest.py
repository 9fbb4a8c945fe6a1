import sqlite3

import pytest
from fastapi.testclient import TestClient

from main import create_app

INDEX_HTML = "<!doctype html><html><body><div id=\"app\"></div></body></html>"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data.db"


@pytest.fixture
def static_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text(INDEX_HTML)
    (public / "app.js").write_text("console.log('bookswap');")
    return public


@pytest.fixture
def client(db_path, static_dir):
    app = create_app(database_path=str(db_path), static_dir=str(static_dir))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def class_ids(client):
    """(indirizzo, anno) -> class id, as served by the API."""
    return {(c["indirizzo"], c["anno"]): c["id"] for c in client.get("/api/classes").json()}


@pytest.fixture
def post_announcement(client, class_ids):
    def _post(**overrides):
        payload = {
            "first_name": "Giulia",
            "last_name": "Rossi",
            "email": "giulia.rossi@example.com",
            "phone": "3331234567",
            "type": "vendo",
            "title": "Matematica.blu 2.0",
            "author": "Bergamini",
            "class_id": class_ids[("Scientifico", 2)],
            "price": 15.5,
            "condition": "buono",
            "description": "Qualche sottolineatura a matita",
        }
        payload.update(overrides)
        payload = {k: v for k, v in payload.items() if v is not None}
        return client.post("/api/announcements", json=payload)
    return _post


@pytest.fixture
def count_rows(db_path):
    def _count(table):
        conn = sqlite3.connect(db_path)
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        finally:
            conn.close()
    return _count
