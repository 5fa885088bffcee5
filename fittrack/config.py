from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # only needed to run the chat front-end; services and tests work without it
    bot_token: str = Field(default="", validation_alias="BOT_TOKEN")
    # single-user lock: when set, updates from anyone else are ignored
    owner_telegram_id: int | None = Field(default=None, validation_alias="OWNER_TELEGRAM_ID")

    db_path: str = Field(default="data/fittrack.sqlite3", validation_alias="DB_PATH")
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

    tz: str = Field(default="UTC", validation_alias="TZ")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    seed_sample_foods: bool = Field(default=True, validation_alias="SEED_SAMPLE_FOODS")

    # used for a fresh profile
    default_protein_factor: float = Field(default=1.8, validation_alias="DEFAULT_PROTEIN_FACTOR")
    default_fat_percentage: float = Field(default=0.25, validation_alias="DEFAULT_FAT_PERCENTAGE")


settings = Settings()
