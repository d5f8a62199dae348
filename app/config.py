import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "info"

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    db_auto_create: bool = True
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "secure-task-manager"
    jwt_audience: str = "secure-task-manager"
    jwt_expires_minutes: int = 60

    bcrypt_rounds: int = 12

    # public seed route
    seed_org_name: str = "Root Org"
    seed_owner_email: str = "owner@example.com"
    seed_owner_password: str = "password123"

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_auth_login_per_min: int = 20

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"unknown log level: {v}")
        return v

settings = Settings()
