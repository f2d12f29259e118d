# pm_console/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-19.v1"

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Records service (data-access collaborator) ----
    records_api_base_url: str = "http://localhost:8000/api"
    records_api_timeout_seconds: float = 20.0

    tenants_resource: str = "tenants"
    leases_resource: str = "leases"
    maintenance_resource: str = "maintenance"

    # ---- List-view rules ----
    expiring_soon_days: int = 30

    def model_post_init(self, __context) -> None:
        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        if self.expiring_soon_days <= 0:
            raise ValueError("expiring_soon_days must be positive")

        if is_prod:
            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
