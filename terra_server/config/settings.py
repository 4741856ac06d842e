# terra_server/config/settings.py
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # DATABASE_URL wins over the db_* fields
    database_url_override: str | None = Field(default=None, validation_alias="DATABASE_URL")
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "terra_db"
    db_user: str = "postgres"
    db_password: str = ""

    environment: str = "development"
    debug: bool = False

    api_prefix: str = "/api/v1"
    cors_origins_raw: str = Field(default="http://localhost:3000", validation_alias="CORS_ORIGINS")

    jwt_secret: str = "dev-secret-change-me"
    jwt_access_minutes: int = 15
    jwt_refresh_minutes: int = 60 * 24 * 7
    jwt_reset_minutes: int = 15

    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_url: str = "http://localhost:8080/auth/google/callback"
    google_http_timeout_seconds: float = 10.0

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_sender_email: str = ""
    smtp_timeout_seconds: float = 10.0

    frontend_base_url: str = "http://localhost:3000"

    seeder_admin_email: str = "admin@terra.org"
    seeder_admin_password: str = "password123"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", "jwt_secret", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("frontend_base_url", "api_prefix", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        return f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]

    @property
    def reset_password_url(self) -> str:
        return f"{self.frontend_base_url}/reset-password"


settings = Settings()
