"""Test the web app: visit logging, message checks and static fallback."""
import json

import pytest
from fastapi.testclient import TestClient

from app import main
from app.visits import visit_logger


@pytest.fixture
def public_dir(tmp_path, monkeypatch):
    site = tmp_path / "public"
    site.mkdir()
    (site / "index.html").write_text("<h1>index</h1>", encoding="utf-8")
    (site / "tips.html").write_text("<h1>tips</h1>", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
    monkeypatch.setattr(main, "PUBLIC_DIR", site)
    return site


@pytest.fixture
def log_file(tmp_path, monkeypatch):
    path = tmp_path / "visits.log"
    monkeypatch.setattr(visit_logger, "path", path)
    return path


@pytest.fixture
def client(public_dir, log_file):
    return TestClient(main.app)


def read_entries(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_each_request_appends_one_line(client, log_file):
    client.get("/tips.html?ref=sms", headers={
        "user-agent": "pytest-agent",
        "accept-language": "en-IN",
        "x-forwarded-for": "203.0.113.7, 10.0.0.1",
    })
    client.get("/health")

    entries = read_entries(log_file)
    assert len(entries) == 2
    first = entries[0]
    assert set(first) == {"time", "ip", "userAgent", "acceptLanguage", "url"}
    assert first["ip"] == "203.0.113.7"
    assert first["userAgent"] == "pytest-agent"
    assert first["acceptLanguage"] == "en-IN"
    assert first["url"] == "/tips.html?ref=sms"
    assert first["time"].endswith("Z")
    assert entries[1]["url"] == "/health"


def test_ip_falls_back_to_peer_address(client, log_file):
    client.get("/")
    assert read_entries(log_file)[0]["ip"] == "testclient"


def test_log_failure_does_not_break_request(client, tmp_path, monkeypatch):
    monkeypatch.setattr(visit_logger, "path", tmp_path / "missing" / "visits.log")
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_static_file_is_served(client):
    response = client.get("/tips.html")
    assert response.status_code == 200
    assert "tips" in response.text


@pytest.mark.parametrize("path", ["/", "/some/client/route", "/..%2Fsecret.txt"])
def test_unknown_paths_fall_back_to_index(client, path):
    response = client.get(path)
    assert response.status_code == 200
    assert "index" in response.text


def test_check_flags_scam_message(client):
    response = client.post("/api/check", json={
        "text": "Send $5000 now via http://bit.ly/x and share the OTP",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["suspicious"] is True
    assert body["score"] == 4 + 3 + 3
    assert body["riskLabel"] == "high risk"
    assert body["urls"] == ["http://bit.ly/x"]
    assert "large money amount mentioned" in body["reasons"]
    assert len(body["advice"]) >= 5


def test_check_clean_message_has_no_advice(client):
    body = client.post("/api/check", json={"text": "see you at 7"}).json()
    assert body["suspicious"] is False
    assert body["score"] == 0
    assert body["advice"] == []
    assert body["riskLabel"] is None


def test_check_rejects_blank_text(client):
    response = client.post("/api/check", json={"text": "   "})
    assert response.status_code == 422
    assert response.json()["message"] == "Invalid request payload."


def test_check_rejects_missing_text(client):
    assert client.post("/api/check", json={}).status_code == 422
