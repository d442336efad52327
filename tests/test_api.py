"""HTTP API tests using FastAPI's TestClient with a fake media device."""

import time

import pytest
from fastapi.testclient import TestClient

from mock_interview.core.config import Settings
from mock_interview.core.database import SessionLocal
from mock_interview.main import create_app
from mock_interview.services.report_navigator import DatabaseReportNavigator

from conftest import FakeDevice

API = "/api/v1"


def build_client(device, **settings_overrides):
    settings_overrides.setdefault("TICK_INTERVAL_SECONDS", 3600)
    settings_overrides.setdefault("COMPLETION_DELAY_SECONDS", 0)
    app = create_app(
        settings=Settings(**settings_overrides),
        device_factory=lambda: device,
        navigator=DatabaseReportNavigator(SessionLocal),
    )
    return TestClient(app)


@pytest.fixture
def fake_device():
    return FakeDevice()


@pytest.fixture
def client(fake_device):
    with build_client(fake_device) as c:
        yield c


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_interview_options(client):
    body = client.get(f"{API}/interview/options").json()
    assert body["difficulties"] == ["easy", "medium", "hard"]
    assert body["genders"] == ["male", "female"]
    assert body["default_difficulty"] == "medium"
    assert body["default_gender"] == "male"


def test_questions_endpoint_falls_back_to_medium(client):
    body = client.get(f"{API}/questions/nightmare").json()
    assert body["difficulty"] == "medium"
    assert [q["reveal_offset_seconds"] for q in body["questions"]] == [5, 20, 35, 50]


def test_start_session_with_bad_query_uses_defaults(client):
    response = client.post(f"{API}/sessions", params={"gender": "x", "difficulty": "nightmare"})
    assert response.status_code == 200

    body = response.json()
    assert body["phase"] == "active"
    assert body["is_active"] is True
    assert body["difficulty"] == "medium"
    assert body["interviewer_gender"] == "male"
    assert body["remaining_seconds"] == 60
    assert body["active_question"] is None
    assert body["device_available"] is True


def test_unknown_session_is_404(client):
    assert client.get(f"{API}/sessions/missing").status_code == 404
    assert client.post(f"{API}/sessions/missing/end").status_code == 404
    assert client.post(f"{API}/sessions/missing/mic").status_code == 404
    assert client.delete(f"{API}/sessions/missing").status_code == 404


def test_toggles_and_preview(client):
    session_id = client.post(f"{API}/sessions").json()["session_id"]

    body = client.post(f"{API}/sessions/{session_id}/mic").json()
    assert body["mic_enabled"] is False
    assert body["camera_enabled"] is True
    assert body["is_active"] is True

    preview = client.get(f"{API}/sessions/{session_id}/preview")
    assert preview.status_code == 200
    assert preview.headers["content-type"] == "image/jpeg"

    body = client.post(f"{API}/sessions/{session_id}/camera").json()
    assert body["camera_enabled"] is False
    assert client.get(f"{API}/sessions/{session_id}/preview").status_code == 404


def test_end_session_then_read_report(client, fake_device):
    session_id = client.post(f"{API}/sessions", params={"difficulty": "hard", "gender": "female"}).json()["session_id"]

    body = client.post(f"{API}/sessions/{session_id}/end").json()
    assert body["phase"] == "completed"
    assert body["completion_reason"] == "ended"
    assert body["is_active"] is False
    assert fake_device.release_calls == 1

    assert client.post(f"{API}/sessions/{session_id}/end").status_code == 400

    report = client.get(f"{API}/reports/{session_id}")
    assert report.status_code == 200
    assert report.json()["difficulty"] == "hard"
    assert report.json()["interviewer_gender"] == "female"
    assert report.json()["questions_asked"] == []

    final = client.get(f"{API}/reports/{session_id}/final").json()
    assert final["summary"]["completion_reason"] == "ended"
    assert final["summary"]["questions_total"] == 4


def test_missing_report_is_404(client):
    assert client.get(f"{API}/reports/nope").status_code == 404
    assert client.get(f"{API}/reports/nope/final").status_code == 404


def test_unmount_removes_session_without_report(client, fake_device):
    session_id = client.post(f"{API}/sessions").json()["session_id"]

    assert client.delete(f"{API}/sessions/{session_id}").status_code == 204
    assert client.get(f"{API}/sessions/{session_id}").status_code == 404
    assert client.get(f"{API}/reports/{session_id}").status_code == 404
    assert fake_device.release_calls == 1


def test_new_session_unmounts_previous(client, fake_device):
    first = client.post(f"{API}/sessions").json()["session_id"]
    second = client.post(f"{API}/sessions").json()["session_id"]

    # The displaced session is dropped and never produced a report
    assert client.get(f"{API}/sessions/{first}").status_code == 404
    assert client.get(f"{API}/reports/{first}").status_code == 404
    assert client.get(f"{API}/sessions/{second}").json()["is_active"] is True
    assert fake_device.release_calls == 1


def test_device_unavailable_session_still_runs():
    device = FakeDevice(available=False)
    with build_client(device) as client:
        body = client.post(f"{API}/sessions").json()
        assert body["is_active"] is True
        assert body["device_available"] is False
        assert "without a live preview" in body["notice"]

        session_id = body["session_id"]
        assert client.post(f"{API}/sessions/{session_id}/camera").json()["camera_enabled"] is False
        assert client.get(f"{API}/sessions/{session_id}/preview").status_code == 404


def test_session_expires_and_hands_off():
    device = FakeDevice()
    with build_client(device, SESSION_DURATION_SECONDS=3, TICK_INTERVAL_SECONDS=0.02) as client:
        session_id = client.post(f"{API}/sessions").json()["session_id"]

        body = None
        deadline = time.time() + 5
        while time.time() < deadline:
            body = client.get(f"{API}/sessions/{session_id}").json()
            if body["phase"] == "completed":
                break
            time.sleep(0.02)

        assert body["phase"] == "completed"
        assert body["completion_reason"] == "expired"
        assert body["remaining_seconds"] == 0
        assert device.release_calls == 1

        report = client.get(f"{API}/reports/{session_id}").json()
        assert report["completion_reason"] == "expired"
        assert report["elapsed_seconds"] == 3


def test_shutdown_releases_running_session(fake_device):
    with build_client(fake_device) as client:
        client.post(f"{API}/sessions")
    assert fake_device.release_calls == 1
