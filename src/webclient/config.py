from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache

class Settings(BaseSettings):
    LOG_LEVEL: str = Field("INFO", description="Root log level used by setup_logging()")
    LOG_RICH_TRACEBACKS: bool = True

    model_config = SettingsConfigDict(
        env_prefix="WEBCLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
