from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

_TRUTHY = {"1", "true", "yes", "on"}


class Settings:
    """
    Central configuration for the celebrations site.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Collection files
        self._data_dir = Path(os.getenv("SITE_DATA_DIR", "data"))
        self._contact_file = Path(
            os.getenv("SITE_CONTACT_FILE", str(self._data_dir / "contact1.json"))
        )
        self._event_file = Path(
            os.getenv("SITE_EVENT_FILE", str(self._data_dir / "data.json"))
        )
        self._dashboard_file = Path(
            os.getenv("SITE_DASHBOARD_FILE", str(self._data_dir / "dashboard.json"))
        )
        self._serialize_appends = (
            os.getenv("SITE_SERIALIZE_APPENDS", "true").strip().lower() in _TRUTHY
        )

        # Views, static assets and logs
        self._templates_dir = Path(
            os.getenv("SITE_TEMPLATES_DIR", str(PROJECT_ROOT / "templates"))
        )
        self._public_dir = Path(
            os.getenv("SITE_PUBLIC_DIR", str(PROJECT_ROOT / "public"))
        )
        self._access_log_path = Path(os.getenv("SITE_ACCESS_LOG", "access.log"))
        self._log_level = os.getenv("SITE_LOG_LEVEL", "INFO")

        # Server
        self._host = os.getenv("SITE_HOST", "0.0.0.0")
        self._port = int(os.getenv("SITE_PORT", "3000"))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def contact_file(self) -> Path:
        return self._contact_file

    @property
    def event_file(self) -> Path:
        return self._event_file

    @property
    def dashboard_file(self) -> Path:
        return self._dashboard_file

    @property
    def serialize_appends(self) -> bool:
        return self._serialize_appends

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def templates_dir(self) -> Path:
        return self._templates_dir

    @property
    def public_dir(self) -> Path:
        return self._public_dir

    @property
    def access_log_path(self) -> Path:
        return self._access_log_path

    # ------------------------------------------------------------------
    # Server / logging
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port


settings = Settings()
