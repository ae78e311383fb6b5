"""Client settings via Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class DataPlatformSettings(BaseSettings):
    """Connection settings for the data platform access service."""

    model_config = SettingsConfigDict(env_prefix="DATA_PLATFORM_")

    platform_url: str = "https://localhost:9443"
    server_name: str = "cocoMDS1"
    api_key: str | None = None
    timeout: float = 30.0
    max_page_size: int = 1000  # 0 disables clamping
