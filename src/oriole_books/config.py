"""Configuration management for the Oriole Books client.

Loads settings from .env and server profiles from servers.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv


class ServerProfile(BaseModel):
    """A single backend deployment."""
    base_url: str
    refresh_path: str = "/auth/refresh"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    server: str = Field(default="production", description="Server profile name from servers.yaml")
    credentials_dir: str = Field(default="~/.oriole-books", description="Directory for stored credentials")
    refresh_lead_minutes: int = Field(default=58, description="Refresh access tokens this long before expiry")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")


class Config(BaseModel):
    """Full application configuration."""
    settings: Settings
    servers: dict[str, ServerProfile]

    def get_server(self, name: str | None = None) -> ServerProfile:
        """Get a server profile by name, defaulting to the configured one."""
        name = (name or self.settings.server).lower()
        if name not in self.servers:
            available = ", ".join(sorted(self.servers.keys()))
            raise ValueError(f"Unknown server '{name}'. Available: {available}")
        return self.servers[name]

    @property
    def all_servers(self) -> list[str]:
        """List all configured server names."""
        return sorted(self.servers.keys())


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "servers.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_servers(project_root: Path) -> dict[str, ServerProfile]:
    """Load server profiles from servers.yaml."""
    servers_path = project_root / "config" / "servers.yaml"
    if not servers_path.exists():
        raise FileNotFoundError(f"Servers config not found at {servers_path}")

    with open(servers_path) as f:
        data = yaml.safe_load(f)

    servers = {}
    for name, profile_data in (data or {}).get("servers", {}).items():
        servers[name.lower()] = ServerProfile(**profile_data)
    return servers


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        server=_env("ORIOLE_BOOKS_SERVER", default="production"),
        credentials_dir=_env("ORIOLE_BOOKS_CREDENTIALS_DIR", default="~/.oriole-books"),
        refresh_lead_minutes=int(_env("ORIOLE_BOOKS_REFRESH_LEAD_MINUTES", default="58")),
        timeout=float(_env("ORIOLE_BOOKS_TIMEOUT", default="30")),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    # Load .env from project root if it exists
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    servers = _load_servers(project_root)

    return Config(settings=settings, servers=servers)
