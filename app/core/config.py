from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Revenue-Share Investment Marketplace"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"
    # comma-separated list of browser origins
    cors_origins: str = "http://localhost:3000"

    # ─────────── DATABASE ───────────
    # in-process store; resets on restart
    database_url: str = "sqlite+pysqlite:///:memory:"
    seed_demo_data: bool = True

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str = "dev-only-change-me"
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 1440  # 24 hours

    # ─────────── MARKETPLACE ───────────
    # owner of projects synthesized when an admin-seeded listing is unlisted
    admin_owner_id: str = "admin-001"
    admin_owner_name: str = "Marketplace Administrator"

    management_fee_rate: float = 0.02
    transaction_fee_rate: float = 0.01


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
