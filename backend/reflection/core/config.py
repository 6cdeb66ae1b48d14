from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./reflection.db"
    # Largest id set a single "value in set" query may carry
    in_query_batch_size: int = 10
    # Local-only mode: also serve /local routes over one JSON blob in this directory
    local_mode: bool = False
    local_storage_dir: str = "data"
    # Timezone used to decide "today" (and so the current week).
    # Examples: "America/New_York", "Europe/London", or "local" to use system tz.
    timezone: str = "local"
    log_level: str = "INFO"

    # Launcher bind address
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("in_query_batch_size")
    @classmethod
    def _positive_batch(cls, v):
        if v < 1:
            raise ValueError("in_query_batch_size must be >= 1")
        return v

    # Allow empty env strings for optional fields
    @field_validator("timezone", mode="before")
    @classmethod
    def _empty_to_local(cls, v):
        if v in ("", None, "null", "None"):
            return "local"
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
