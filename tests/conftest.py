"""Shared fixtures: an in-memory content store served through httpx.MockTransport."""

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from catalog_admin.api.client import StoreClient
from catalog_admin.auth.session import Session, TokenStore
from catalog_admin.config import AdminConfig

API_URL = "http://store.test/api"
VALID_TOKEN = "test-token"


class FakeStore:
    """Minimal stand-in for the content API.

    Collections are plain dicts keyed by record id. ``fail_writes`` lists
    record ids whose writes answer with a 500.
    """

    def __init__(self):
        self.catalogs: dict[str, dict[str, Any]] = {}
        self.home: dict[str, dict[str, Any]] = {}
        self.pages: dict[str, dict[str, Any]] = {}
        self.users = {"admin@example.com": "secret"}
        self.fail_writes: set[str] = set()
        self.requests: list[httpx.Request] = []
        self.uploads: list[bytes] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.removeprefix("/api/").split("/")
        resource, key = parts[0], (parts[1] if len(parts) > 1 else None)

        if resource == "auth" and key == "login":
            body = json.loads(request.content)
            if self.users.get(body.get("email")) != body.get("password"):
                return httpx.Response(401, json={"success": False, "error": "Invalid credentials"})
            return httpx.Response(200, json={"success": True, "token": VALID_TOKEN})

        if request.headers.get("Authorization") != f"Bearer {VALID_TOKEN}":
            return httpx.Response(401, json={"success": False, "error": "Not authorized"})

        if resource == "auth" and key == "me":
            return httpx.Response(200, json={"success": True, "data": {"email": "admin@example.com"}})

        if request.method in ("POST", "PUT", "DELETE") and key in self.fail_writes:
            return httpx.Response(500, json={"success": False, "error": "Write failed"})

        if resource == "catalog-sections":
            return self._catalogs(request, key)
        if resource == "home":
            return self._home(request, key)
        if resource == "static-pages":
            return self._pages(request, key)
        if resource == "upload":
            self.uploads.append(request.content)
            return httpx.Response(200, json={"success": True, "url": "https://cdn.test/img.png"})

        return httpx.Response(404, json={"success": False, "error": "Not found"})

    def _catalogs(self, request: httpx.Request, key: str | None) -> httpx.Response:
        if request.method == "GET" and key is None:
            return httpx.Response(200, json={"success": True, "data": list(self.catalogs.values())})
        if request.method == "GET":
            if key not in self.catalogs:
                return httpx.Response(404, json={"success": False, "error": "Catalog not found"})
            return httpx.Response(200, json={"success": True, "data": self.catalogs[key]})
        if request.method == "PUT":
            self.catalogs[key] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "data": self.catalogs[key]})
        return httpx.Response(405)

    def _home(self, request: httpx.Request, key: str | None) -> httpx.Response:
        if request.method == "GET":
            ordered = sorted(self.home.values(), key=lambda s: s["order"])
            return httpx.Response(200, json=ordered)
        if request.method == "POST":
            self.home[key] = json.loads(request.content)
            return httpx.Response(200, json=self.home[key])
        if request.method == "DELETE":
            self.home.pop(key, None)
            return httpx.Response(200, json={"message": "Deleted"})
        return httpx.Response(405)

    def _pages(self, request: httpx.Request, key: str | None) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=list(self.pages.values()))
        if request.method == "POST":
            self.pages[key] = json.loads(request.content)
            return httpx.Response(200, json=self.pages[key])
        return httpx.Response(405)

    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def config(tmp_path: Path) -> AdminConfig:
    return AdminConfig(api_url=API_URL, token_file=tmp_path / "session.json", timeout=5.0)


@pytest.fixture
def session(config: AdminConfig) -> Session:
    """Session that is already logged in."""
    session = Session(TokenStore(config.token_file))
    session.set_token(VALID_TOKEN)
    return session


@pytest.fixture
def client(config: AdminConfig, session: Session, fake_store: FakeStore):
    with StoreClient(config, session, transport=httpx.MockTransport(fake_store.handle)) as client:
        yield client


@pytest.fixture
def legacy_catalog() -> dict[str, Any]:
    """Catalog record written before fields became bilingual."""
    return {
        "id": "3",
        "name": "Shark Implants",
        "title": "DIE SHARK-REVOLUTION",
        "description": {"de": "Beschreibung", "en": "Description"},
        "benefitBar": "Präzision - Stabilität - Sicherheit",
        "type": "product",
        "images": {"hero": "https://cdn.test/hero.png"},
        "variants": [
            {
                "diameter": "3.5",
                "color": "Blue",
                "hex": "#0000FF",
                "lengths": ["8.0 mm", "10 mm"],
                "boxImage": "",
                "implantImage": "",
            }
        ],
        "createdAt": "2024-01-01T00:00:00Z",
    }
