from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ROLLTABLES_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Which Backingstore open_store() builds: the SQLite database or JSON files.
    store_backend: Literal["database", "file"] = "database"

    database_url: str = "sqlite:///./rolltables.db"
    database_echo: bool = False

    # Directory holding one <md5 of name>.json file per table for the file store.
    table_directory: str = "./tables"

    log_level: str = "WARNING"


settings = Settings()
