import json
import logging
import re

from fastapi.testclient import TestClient

from runtime.api.server import create_app
from runtime.store.record_store import RecordStore


EVENT = {"eventPurpose": "Wedding", "guests": 50, "date": "2025-06-01", "budget": 10000}


def read_json(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_startup_creates_collection_files(client, site_settings):
    for path in (site_settings.contact_file, site_settings.event_file, site_settings.dashboard_file):
        assert path.is_file()
        assert read_json(path) == []


def test_static_pages_render(client):
    for path in ("/", "/contact", "/about", "/portfolio", "/celebration", "/ceremonie",
                 "/reception", "/mitzvhans", "/corporate1", "/services"):
        response = client.get(path)
        assert response.status_code == 200, path
        assert response.headers["content-type"].startswith("text/html")


def test_static_asset_is_served(client):
    response = client.get("/css/site.css")
    assert response.status_code == 200
    assert "text/css" in response.headers["content-type"]


def test_unknown_page_returns_not_found(client):
    response = client.get("/no-such-page")
    assert response.status_code == 404
    assert response.text == "Page Not Found"


def test_unknown_asset_returns_empty_404(client):
    response = client.get("/no-such-page.png")
    assert response.status_code == 404
    assert response.content == b""


def test_wrong_method_is_not_found(client):
    response = client.post("/about")
    assert response.status_code == 404
    assert response.text == "Page Not Found"


def test_contact_submission_is_appended(client, site_settings):
    response = client.post("/contactone", data={"name": "Ada", "email": "ada@example.com"})
    assert response.status_code == 200
    assert response.text == "Contact Data Saved Successfully!"
    assert response.headers["content-type"].startswith("text/plain")

    client.post("/contactone", json={"name": "Grace"})
    assert read_json(site_settings.contact_file) == [
        {"name": "Ada", "email": "ada@example.com"},
        {"name": "Grace"},
    ]


def test_repeated_form_fields_become_lists(client, site_settings):
    client.post(
        "/contactone",
        content="interest=wedding&interest=reception",
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    assert read_json(site_settings.contact_file) == [{"interest": ["wedding", "reception"]}]


def test_malformed_json_body_is_bad_request(client, site_settings):
    response = client.post(
        "/contactone", content="{oops", headers={"content-type": "application/json"}
    )
    assert response.status_code == 400
    assert response.text.startswith("Invalid JSON body")
    assert read_json(site_settings.contact_file) == []


def test_event_submission_missing_fields(client, site_settings):
    response = client.post("/formdata", json={"guests": 5})
    assert response.status_code == 400
    assert response.text == "Missing required fields: eventPurpose, date, budget"
    assert read_json(site_settings.event_file) == []


def test_event_submission_and_filtered_listing(client):
    response = client.post("/formdata", json=EVENT)
    assert response.status_code == 200
    assert response.text == "Event Data Saved Successfully!"

    client.post("/formdata", json={**EVENT, "eventPurpose": "Birthday"})

    response = client.get("/events", params={"eventPurpose": "wedding"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == [EVENT]


def test_events_listing_and_semantics(client):
    client.post("/formdata", json=EVENT)
    client.post("/formdata", json={**EVENT, "guests": 80})

    assert len(client.get("/events").json()) == 2
    assert client.get("/events", params={"guests": "80", "date": "2025-06-01"}).json() == [
        {**EVENT, "guests": 80}
    ]
    assert client.get("/events", params={"guests": "80", "venue": "hall"}).json() == []
    # Empty values are not applied.
    assert len(client.get("/events", params={"guests": ""}).json()) == 2


def test_events_listing_with_corrupt_file(client, site_settings):
    site_settings.event_file.write_text("[{", encoding="utf-8")
    response = client.get("/events")
    assert response.status_code == 500
    assert "Invalid JSON" in response.text


def test_dashboard_submit_redirects_and_renders(client, site_settings):
    response = client.post(
        "/dashboard-submit",
        data={"title": "Venue walkthrough", "notes": "Friday"},
        follow_redirects=False,
    )
    assert response.status_code == 302
    assert response.headers["location"] == "/dashboard"

    assert read_json(site_settings.dashboard_file) == [
        {"title": "Venue walkthrough", "notes": "Friday"}
    ]

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert "Venue walkthrough" in page.text


def test_dashboard_with_corrupt_file(client, site_settings):
    site_settings.dashboard_file.write_text("nope", encoding="utf-8")
    response = client.get("/dashboard")
    assert response.status_code == 500
    assert response.text == "Error parsing dashboard data."


def test_dashboard_with_missing_file(client, site_settings):
    site_settings.dashboard_file.unlink()
    response = client.get("/dashboard")
    assert response.status_code == 500
    assert response.text == "Error loading dashboard data."


def test_access_log_skips_static_requests(client, site_settings):
    client.get("/about", headers={"user-agent": "pytest-agent"})
    client.get("/css/site.css")
    client.get("/missing.js")

    lines = site_settings.access_log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert '"GET /about HTTP/1.1" 200' in lines[0]
    assert lines[0].endswith('"-" "pytest-agent"')


def test_cors_headers_present(client):
    response = client.get("/", headers={"origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_dashboard_with_badly_encoded_file(client, site_settings):
    site_settings.dashboard_file.write_bytes(b'[{"a": "\xff"}]')
    response = client.get("/dashboard")
    assert response.status_code == 500
    assert response.text == "Error parsing dashboard data."


def test_dashboard_submit_log_line(client, caplog):
    caplog.set_level(logging.INFO, logger="site.dashboard")
    client.post("/dashboard-submit", data={"title": "Tasting"}, follow_redirects=False)

    lines = [r.getMessage() for r in caplog.records if r.name == "site.dashboard"]
    assert len(lines) == 1
    assert re.match(r"^POST /dashboard-submit 302 0 - \d+\.\d{3} ms$", lines[0])


def test_access_log_records_unexpected_errors(site_settings, monkeypatch):
    def broken_load(self):
        raise RuntimeError("boom")

    app = create_app(override_settings=site_settings)
    with TestClient(app, raise_server_exceptions=False) as failing_client:
        monkeypatch.setattr(RecordStore, "load", broken_load)
        response = failing_client.get("/events")

    assert response.status_code == 500
    lines = site_settings.access_log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert '"GET /events HTTP/1.1" 500 -' in lines[0]
