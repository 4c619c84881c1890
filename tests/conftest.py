import pytest
from fastapi.testclient import TestClient

from configs.settings import Settings
from runtime.api.server import create_app


@pytest.fixture
def site_settings(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    monkeypatch.setenv("SITE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("SITE_CONTACT_FILE", str(data_dir / "contact1.json"))
    monkeypatch.setenv("SITE_EVENT_FILE", str(data_dir / "data.json"))
    monkeypatch.setenv("SITE_DASHBOARD_FILE", str(data_dir / "dashboard.json"))
    monkeypatch.setenv("SITE_ACCESS_LOG", str(tmp_path / "access.log"))
    return Settings()


@pytest.fixture
def client(site_settings):
    app = create_app(override_settings=site_settings)
    with TestClient(app) as client:
        yield client
