"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)


class AccessRuleConfig(BaseModel):
    """One URL authorization rule as written in configuration (role names, not authorities)."""

    pattern: str
    roles: list[str] = Field(default_factory=list)
    permit_all: bool = False


def _default_access_rules() -> list[AccessRuleConfig]:
    # Ordered from the most restrictive to the least restrictive.
    return [
        AccessRuleConfig(pattern="/admin/**", roles=["ADMIN"]),
        AccessRuleConfig(pattern="/student/**", roles=["STUDENT", "ADMIN"]),
        AccessRuleConfig(pattern="/**", permit_all=True),
    ]


def _default_public_paths() -> list[str]:
    return ["/", "/login", "/logout", "/health/**", "/docs", "/openapi.json"]


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False

    # SQLite is enough for the demo; point at Postgres for anything shared.
    DATABASE_URL: str = "sqlite:///./gradebook.db"
    # Run Base.metadata.create_all on startup instead of relying on alembic.
    AUTO_CREATE_SCHEMA: bool = True
    # Create the ADMIN/STUDENT roles and the admin/student demo users on startup.
    SEED_DEMO_DATA: bool = True

    # JWT session tokens
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60
    SESSION_COOKIE_NAME: str = "SESSION"
    LOGOUT_REDIRECT_URL: str = "/"

    # Authorization: public paths skip authentication entirely; rules are first-match-wins.
    PUBLIC_PATHS: list[str] = Field(default_factory=_default_public_paths)
    ACCESS_RULES: list[AccessRuleConfig] = Field(default_factory=_default_access_rules)

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL (e.g. sqlite:/// or postgresql://)"
            )
        return v.strip()

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_session_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("PUBLIC_PATHS")
    @classmethod
    def validate_public_paths(cls, v: list[str]) -> list[str]:
        return [p.strip() for p in v]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
