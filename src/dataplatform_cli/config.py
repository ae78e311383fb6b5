"""CLI configuration management."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings


class CLIConfig(BaseSettings):
    """CLI configuration."""

    platform_url: str = "https://localhost:9443"
    server_name: str = "cocoMDS1"
    user_id: str = "erinoverview"
    integrator_guid: str | None = None
    integrator_name: str | None = None
    api_key: str | None = None
    timeout: float = 30.0
    max_page_size: int = 1000
    output_format: str = "table"  # table, json

    model_config = {
        "env_prefix": "DATA_PLATFORM_CLI_",
    }


class ConfigManager:
    """Manage CLI configuration."""

    def __init__(self, config_path: Path | None = None):
        if config_path is None:
            config_path = Path.home() / ".dataplatform" / "config.json"
        self.config_path = config_path

    def load(self) -> CLIConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            return CLIConfig()

        with open(self.config_path) as f:
            data = json.load(f)
            return CLIConfig(**data)

    def save(self, config: CLIConfig) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(config.model_dump(exclude_none=True), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value."""
        config = self.load()
        return getattr(config, key, None)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        config = self.load()
        if key not in CLIConfig.model_fields:
            raise KeyError(key)
        data = config.model_dump()
        data[key] = value
        self.save(CLIConfig(**data))

    def delete(self, key: str) -> None:
        """Delete a configuration value (reset to default)."""
        config = self.load()
        if key in CLIConfig.model_fields:
            data = config.model_dump(exclude={key})
            self.save(CLIConfig(**data))
