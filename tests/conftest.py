"""Pytest fixtures for spec_quality tests."""

import io
import zipfile
from pathlib import Path

import pytest
import pytest_asyncio

from spec_quality import db


@pytest.fixture
def swagger_doc() -> dict:
    """A small Swagger 2.0 document with a mix of good and missing metadata."""
    return {
        "swagger": "2.0",
        "info": {"title": "Pets", "description": "Pet store", "version": "1.0.0"},
        "host": "api.example.com",
        "schemes": ["https"],
        "securityDefinitions": {"api_key": {"type": "apiKey", "name": "X-Key", "in": "header"}},
        "security": [{"api_key": []}],
        "tags": [{"name": "pets"}],
        "paths": {
            "/pets": {
                "parameters": [{"name": "trace", "in": "header"}],
                "get": {
                    "summary": "List pets",
                    "operationId": "listPets",
                    "parameters": [{"name": "limit", "in": "query"}],
                    "responses": {
                        "200": {"description": "ok", "examples": {"application/json": []}},
                        "404": {"description": "not found"},
                    },
                },
                "post": {
                    "responses": {"201": {"description": "created"}},
                },
            },
        },
    }


@pytest.fixture
def openapi_doc() -> dict:
    """An OpenAPI 3 document with no security and no error responses."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Orders", "version": "2.1.0"},
        "servers": [{"url": "http://api.example.com"}],
        "paths": {
            "/orders/{id}": {
                "get": {
                    "description": "Fetch an order",
                    "operationId": "getOrder",
                    "parameters": [{"name": "id", "in": "path"}],
                    "responses": {"200": {"description": "ok"}},
                },
            },
        },
    }


@pytest.fixture
def openapi_yaml_file(tmp_path: Path) -> Path:
    spec_file = tmp_path / "openapi.yaml"
    spec_file.write_text(
        """\
openapi: 3.0.0
info:
  title: Widgets
  version: "1.0"
paths:
  /widgets:
    get:
      summary: List widgets
      responses:
        200:
          description: ok
"""
    )
    return spec_file


@pytest.fixture
def jar_bytes() -> bytes:
    """A JAR with two api-docs specs and some unrelated entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        zf.writestr("BOOT-INF/classes/application.yaml", "server:\n  port: 8080\n")
        zf.writestr("BOOT-INF/classes/api-docs/orders.json", '{"openapi": "3.0.1", "info": {"title": "Orders"}, "paths": {}}')
        zf.writestr("BOOT-INF/classes/api-docs/legacy.yml", "swagger: '2.0'\ninfo:\n  title: Legacy\n")
        zf.writestr("BOOT-INF/classes/api-docs/README.txt", "not a spec")
    return buffer.getvalue()


@pytest_asyncio.fixture
async def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Fresh SQLite store under a temporary DATA_DIR."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    await db.close_db()
    await db.init_db()
    yield tmp_path / "data"
    await db.close_db()
