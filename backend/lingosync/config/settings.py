from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Gemini (translation + speech)
    API_KEY: str | None = Field(None)

    # Redis (history persistence)
    REDIS_HOST: str = Field("localhost")
    REDIS_PORT: int = Field(6379)
    REDIS_PASSWORD: str | None = Field(None)
    REDIS_DB: int = Field(0)

    # App
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(8000)
    DEBUG: bool = Field(False)
    LOG_LEVEL: str = Field("INFO")

    # Metrics
    METRICS_ENABLED: bool = Field(False)
    METRICS_PORT: int = Field(8001)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8"
    )


settings = Settings()
