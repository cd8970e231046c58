from __future__ import annotations

from datetime import datetime, timedelta

import mongomock
import pytest
import requests

from app import create_app, init_collections
from config import TestingConfig
from utils.db import mongo


def make_descriptor(seed: float = 0.0) -> list[float]:
    return [seed + i / 1000 for i in range(128)]


class FakeResponse:
    def __init__(self, status_code: int = 200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class Outbound:
    """Records every requests.post call made by the notifier."""

    def __init__(self):
        self.calls: list[dict] = []
        self.fail_urls: set[str] = set()

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if url in self.fail_urls:
            raise requests.ConnectionError(f"cannot reach {url}")
        return FakeResponse()

    def to(self, url):
        return [c for c in self.calls if c["url"] == url]


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    client = mongomock.MongoClient()
    mongo.cx = client
    mongo.db = client["absensi_test"]
    init_collections(app)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture(autouse=True)
def outbound(monkeypatch):
    recorder = Outbound()
    monkeypatch.setattr(requests, "post", recorder.post)
    return recorder


@pytest.fixture
def clock(monkeypatch):
    # 09:00 WIB
    fake = FakeClock(datetime(2026, 10, 17, 2, 0, 0))
    monkeypatch.setattr("utils.mark_attendance.utcnow", fake)
    monkeypatch.setattr("utils.verification.utcnow", fake)
    return fake


def login(client, username, password):
    resp = client.post("/api/login", json={"username": username, "password": password})
    return resp


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    resp = login(client, "admin", "admin123")
    assert resp.status_code == 200
    return auth_header(resp.get_json()["token"])


@pytest.fixture
def enroll_user(client, admin_headers):
    def _enroll(username="alice", password="secret", rfid_uid="AB12", name=None, descriptor=None):
        body = {
            "name": name or username,
            "username": username,
            "password": password,
            "face_descriptor": descriptor if descriptor is not None else [0] * 128,
        }
        if rfid_uid is not None:
            body["rfid_uid"] = rfid_uid
        resp = client.post("/api/admin/enroll", json=body, headers=admin_headers)
        assert resp.status_code == 200, resp.get_json()
        token = login(client, username, password).get_json()["token"]
        return auth_header(token)

    return _enroll
