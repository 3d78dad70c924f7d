"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_DIR = Path.home() / ".config" / "where-relay"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False


class UpstreamSettings(BaseModel):
    scheme: str = "https"
    host: str = "github.com"
    prefix: str = "/proxy/"
    timeout: float = 300.0

    @field_validator("prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = "/" + value.strip("/")
        return value if value == "/" else value + "/"


class ProbeSettings(BaseModel):
    # Health-check target, deliberately separate from the relayed upstream
    url: str = "https://api.github.com/zen"
    user_agent: str = "Where-Relay/1.0"
    timeout: float = 10.0


class LimitSettings(BaseModel):
    max_connections: int = 100
    max_keepalive_connections: int = 20
    keep_alive_timeout: int = 5


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    probe: ProbeSettings = Field(default_factory=ProbeSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)


def load_config() -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not CONFIG_FILE.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        default = Config()
        CONFIG_FILE.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(CONFIG_FILE.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = CONFIG_FILE.with_suffix(".json.bak")
        CONFIG_FILE.rename(backup)
        default = Config()
        CONFIG_FILE.write_text(default.model_dump_json(indent=2))
        return default
