"""Photo Upload application configuration.

Loads settings from two YAML files:
  * photoupload.settings.yaml  — non-secret configuration
  * photoupload.secrets.yaml   — secrets (never committed)

Both are looked up in ``./config`` first, then in the working directory.
Missing files fall back to defaults, which run the service against the
local filesystem backend.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILENAME = "photoupload.settings.yaml"
SECRETS_FILENAME  = "photoupload.secrets.yaml"
CONFIG_DIR        = Path("config")


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _default_path(filename: str) -> Path:
    candidate = CONFIG_DIR / filename
    if candidate.exists():
        return candidate
    return Path(filename)


def _project_root(settings_path: Path) -> Path:
    """Directory that relative paths in the settings file resolve against.

    With the ``<root>/config/photoupload.settings.yaml`` layout this is
    ``<root>``; otherwise it is the directory holding the settings file.
    """
    settings_dir = settings_path.resolve().parent
    if settings_dir.name == CONFIG_DIR.name:
        return settings_dir.parent
    return settings_dir


# ---------------------------------------------------------------------------
# Secrets models
# ---------------------------------------------------------------------------


class AwsSecrets(BaseModel):
    access_key_id:     Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token:     Optional[str] = None


class Secrets(BaseModel):
    aws: AwsSecrets = Field(default_factory=AwsSecrets)


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host:            str       = "0.0.0.0"
    port:            int       = 8000
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseModel):
    level: str = "info"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if value.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value.lower()


class StorageSettings(BaseModel):
    """Object store selection and addressing."""
    backend:         Literal["s3", "local", "memory"] = "local"
    bucket:          str           = "photo-uploads"
    region:          str           = "us-east-1"
    key_prefix:      str           = ""
    endpoint_url:    Optional[str] = None
    # Base for public URLs. Unset: S3 uses the bucket URL, "local" uses this
    # service's /files route.
    public_base_url: Optional[str] = None
    local_dir:       str           = "uploads"


class UploadSettings(BaseModel):
    """Upload endpoint shape, shared by the server router and the client."""
    field_name:             str   = "files"
    path:                   str   = "/api/upload"
    client_timeout_seconds: float = 30.0

    @field_validator("path")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Upload path must start with '/': {value}")
        return value


class AppConfig(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    uploads: UploadSettings  = Field(default_factory=UploadSettings)
    secrets: Secrets         = Field(default_factory=Secrets)


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(
    settings_path: Optional[Path] = None,
    secrets_path: Optional[Path] = None,
) -> AppConfig:
    """Load and merge settings + secrets into a single *AppConfig* object."""
    settings_path = Path(settings_path) if settings_path else _default_path(SETTINGS_FILENAME)
    if secrets_path is None:
        secrets_path = settings_path.parent / SECRETS_FILENAME
    settings_data = _load_yaml(settings_path)
    secrets_data  = _load_yaml(Path(secrets_path))

    # Merge: secrets live under the "secrets" key in AppConfig
    settings_data["secrets"] = secrets_data

    config = AppConfig(**settings_data)

    local_dir = Path(config.storage.local_dir)
    if not local_dir.is_absolute():
        config.storage.local_dir = str(_project_root(settings_path) / local_dir)

    logger.info(
        "Settings loaded (server=%s:%s, storage.backend=%s, storage.bucket=%s)",
        config.server.host,
        config.server.port,
        config.storage.backend,
        config.storage.bucket,
    )
    return config


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
