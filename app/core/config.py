"""Application configuration using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    app_name: str = "Weather Service"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # National Weather Service API
    nws_api_url: str = "https://api.weather.gov"
    user_agent: str = "nws-weather-proxy/1.0 (ops@example.com)"
    request_timeout: int = 10

    # Logging
    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
