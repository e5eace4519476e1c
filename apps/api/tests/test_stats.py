"""Tests for the statistics endpoint."""

import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from users_api.services import runtime


@pytest.mark.unit
def test_counts_total_and_active_users(client: TestClient, create_user) -> None:
    create_user("User 1", "user1@example.com")
    create_user("User 2", "user2@example.com")
    create_user("User 3", "user3@example.com")
    create_user("User 4", "user4@example.com", isActive=False)

    response = client.get("/api/stats")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["totalUsers"] == 4
    assert data["activeUsers"] == 3
    assert data["uptime"] >= 0
    assert data["memoryUsage"]["rss"] > 0
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


@pytest.mark.unit
def test_deactivating_a_user_lowers_active_count(client: TestClient, create_user) -> None:
    user = create_user()
    client.put(f"/api/users/{user['id']}", json={"isActive": False})

    data = client.get("/api/stats").json()["data"]

    assert data["totalUsers"] == 1
    assert data["activeUsers"] == 0


@pytest.mark.unit
def test_memory_usage_reads_current_rss(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    statm = tmp_path / "statm"
    statm.write_text("5000 1200 300 10 0 900 0\n")
    monkeypatch.setattr(runtime, "STATM_PATH", statm)

    assert runtime.memory_usage() == {"rss": 1200 * os.sysconf("SC_PAGE_SIZE")}


@pytest.mark.unit
def test_memory_usage_falls_back_to_peak_without_procfs(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runtime, "STATM_PATH", tmp_path / "missing")

    assert runtime.memory_usage()["rss"] > 0
