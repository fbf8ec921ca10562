from typing import Annotated, Any, Literal

from pydantic import (
    AnyUrl,
    BeforeValidator,
    HttpUrl,
    computed_field,
)
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SQLite Gateway"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: HttpUrl | None = None

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Driver used when neither a custom driver path nor the default-driver flag is set.
    # Dotted module name of a DB-API 2 SQLite driver (e.g. "pysqlite3.dbapi2").
    SQLITE_BUNDLED_DRIVER: str = "sqlite3"
    # Server-side default for DriverOptions.use_default_driver
    SQLITE_USE_DEFAULT_DRIVER: bool = False
    # Seconds a handle waits on a locked database file before raising
    SQLITE_BUSY_TIMEOUT: float = 5.0
    # Upper bound of worker threads for one multi-statement SELECT
    SQLITE_BATCH_MAX_WORKERS: int = 8


settings = Settings()  # type: ignore
