# common/settings.py
from __future__ import annotations

import sys
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    # -------- Hub / server ----------
    hub_port: int = Field(8080, alias="HUB_PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # -------- Roads API ----------
    # We expose them in lowercase, but accept .env UPPERCASE via alias.
    roads_api_base_url: str = Field("https://your-api-domain.com", alias="ROADS_API_BASE_URL")
    complaints_path: str = Field("/api/complaints", alias="COMPLAINTS_PATH")
    projects_path: str = Field("/api/projects", alias="PROJECTS_PATH")
    submit_timeout_seconds: float = Field(30.0, alias="SUBMIT_TIMEOUT_SECONDS")
    load_timeout_seconds: float = Field(30.0, alias="LOAD_TIMEOUT_SECONDS")

    # -------- Behaviour switches ----------
    # the remote project listing isn't live yet; serve the placeholder set
    use_sample_projects: bool = Field(True, alias="USE_SAMPLE_PROJECTS")
    attachment_stop_on_rejection: bool = Field(False, alias="ATTACHMENT_STOP_ON_REJECTION")

    # pydantic-settings config
    model_config = SettingsConfigDict(
        env_file=".env",                 # load env from repo root
        env_file_encoding="utf-8",
        case_sensitive=False,            # allow lower/upper in env
        populate_by_name=True,
        extra="ignore",                  # ignore unknown env keys
    )

    # Basic validation
    @field_validator("roads_api_base_url")
    @classmethod
    def _must_be_https(cls, v: str) -> str:
        if not v.startswith("https://"):
            raise ValueError("ROADS_API_BASE_URL must start with https://")
        return v.rstrip("/")

    @field_validator("complaints_path", "projects_path")
    @classmethod
    def _leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"

    @property
    def complaints_url(self) -> str:
        return f"{self.roads_api_base_url}{self.complaints_path}"

    @property
    def projects_url(self) -> str:
        return f"{self.roads_api_base_url}{self.projects_path}"


def _pretty_fail(msg: str) -> None:
    # Print a friendly error once (useful with uvicorn reload)
    print(f"\n[settings] {msg}\n", file=sys.stderr)
    sys.exit(1)


try:
    settings = Settings()
except Exception as e:
    _pretty_fail(
        "Invalid settings. Check .env (repo root), e.g.:\n"
        "  ROADS_API_BASE_URL=https://your-api-domain.com\n"
        "Optional:\n"
        "  HUB_PORT=8080\n"
        "  LOG_LEVEL=INFO\n"
        "  COMPLAINTS_PATH=/api/complaints, PROJECTS_PATH=/api/projects\n"
        "  SUBMIT_TIMEOUT_SECONDS=30, LOAD_TIMEOUT_SECONDS=30\n"
        "  USE_SAMPLE_PROJECTS=true, ATTACHMENT_STOP_ON_REJECTION=false\n\n"
        f"Raw error: {e}"
    )
