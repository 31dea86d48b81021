import httpx
import pytest
from fastapi.testclient import TestClient

from apps.gateway.main import app

FORM = {
    "description": "Road has a large pothole near exit 12",
    "contactEmail": "",
    "consentGiven": "true",
}


@pytest.fixture
def remote():
    calls = []
    state = {"status": 201}

    def handler(request):
        calls.append(request)
        return httpx.Response(state["status"])

    app.state.directory = None
    app.state.roads_transport = httpx.MockTransport(handler)
    yield calls, state
    app.state.directory = None
    app.state.roads_transport = None


@pytest.fixture
def client(remote):
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json()["ok"] is True


def test_project_list_and_search(client):
    r = client.get("/projects")
    assert r.status_code == 200
    assert r.json()["count"] == 2

    r = client.get("/projects", params={"q": "vancouver"})
    body = r.json()
    assert [p["name"] for p in body["items"]] == ["Downtown Bridge Repair"]
    assert body["items"][0]["contractAmount"] == "$15,000,000.00"

    r = client.get("/projects", params={"q": "atlantis"})
    assert r.json()["empty_message"] == "No projects found matching your search"


def test_project_detail(client):
    r = client.get("/projects/1")
    body = r.json()
    assert body["name"] == "Highway 401 Expansion"
    assert body["tenderDate"] == "2024-01-15"
    assert body["contractorMailto"] == "mailto:contact@abcconstruction.com"
    assert body["complaint_form"] == "/projects/1/complaints"
    assert client.get("/projects/999").status_code == 404


def test_submit_complaint_success(client, remote):
    calls, _ = remote
    files = [("attachments", ("pothole.jpg", b"JPEG", "image/jpeg"))]
    r = client.post("/projects/1/complaints", data=FORM, files=files)
    assert r.status_code == 201
    body = r.json()
    assert body["ok"] is True
    assert body["attachments"] == ["pothole.jpg"]
    assert body["view"] == "Project Details"
    assert len(calls) == 1
    assert b'filename="pothole.jpg"' in calls[0].content


def test_submit_complaint_rejected_upload_still_submits(client, remote):
    calls, _ = remote
    files = [("attachments", ("anim.gif", b"GIF89a", "image/gif"))]
    r = client.post("/projects/2/complaints", data=FORM, files=files)
    assert r.status_code == 201
    body = r.json()
    assert body["attachments"] == []
    assert {"title": "Invalid File Type",
            "message": "Please select only images (JPEG, PNG) or videos (MP4, MOV)"} in body["notifications"]


def test_submit_complaint_validation(client, remote):
    calls, _ = remote
    r = client.post("/projects/1/complaints",
                    data={"description": "short", "contactEmail": "bad-email", "consentGiven": "false"})
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"description", "contactEmail", "consentGiven"}
    assert calls == []


def test_submit_complaint_remote_failure(client, remote):
    calls, state = remote
    state["status"] = 503
    r = client.post("/projects/1/complaints", data=FORM)
    assert r.status_code == 502
    body = r.json()
    assert body["reason"] == "Unable to submit your complaint. Please try again later."
    assert body["view"] == "Submit Complaint"
    assert len(calls) == 1


def test_submit_complaint_unknown_project(client, remote):
    calls, _ = remote
    assert client.post("/projects/42/complaints", data=FORM).status_code == 404
    assert calls == []


def test_load_failure_is_reported_once(client, remote, monkeypatch):
    from common.settings import settings

    _, state = remote
    state["status"] = 500
    monkeypatch.setattr(settings, "use_sample_projects", False)

    first = client.get("/projects").json()
    assert first["count"] == 0
    assert first["notifications"] == [{"title": "Error", "message": "Failed to load projects"}]
    assert first["empty_message"] == "No projects available"

    for _ in range(2):
        again = client.get("/projects").json()
        assert again["count"] == 0
        assert "notifications" not in again


def test_oversized_upload_rejected_from_declared_size(client, remote):
    calls, _ = remote
    files = [("attachments", ("long.mp4", b"0" * (10 * 1024 * 1024 + 1), "video/mp4"))]
    r = client.post("/projects/1/complaints", data=FORM, files=files)
    assert r.status_code == 201
    body = r.json()
    assert body["attachments"] == []
    assert body["notifications"][0] == {"title": "File Too Large",
                                        "message": "Please select files smaller than 10MB"}
    assert b'name="attachments"' not in calls[0].content
