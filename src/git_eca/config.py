"""Configuration management for Git ECA."""

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Pattern, Tuple

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "GIT_ECA_CONFIG"
OAUTH_CLIENT_ID_ENV = "GIT_ECA_OAUTH_CLIENT_ID"
OAUTH_CLIENT_SECRET_ENV = "GIT_ECA_OAUTH_CLIENT_SECRET"


class MailConfig(BaseModel):
    """Mail address policy: allow-listed senders and no-reply detection."""

    allow_list: List[str] = Field(
        default=["noreply@github.com"],
        description="Mail addresses that are always allowed to author or commit",
    )
    noreply_email_patterns: List[str] = Field(
        default=[r"^[\w.+-]+@users\.noreply\.github\.com$"],
        description="Regular expressions identifying no-reply mail addresses",
    )

    @field_validator("noreply_email_patterns")
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Reject patterns that do not compile."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid no-reply pattern '{pattern}': {e}") from e
        return v


class APIConfig(BaseModel):
    """Endpoints of the Eclipse Foundation APIs used for validation."""

    accounts_url: str = Field(
        default="https://api.eclipse.org/account/profile",
        description="Account profile API (lookup by mail and by GitHub handle)",
    )
    bots_url: str = Field(
        default="https://api.eclipse.org/bots", description="Bots registry API"
    )
    projects_url: str = Field(
        default="https://projects.eclipse.org/api/projects",
        description="Projects API",
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    projects_page_size: int = Field(
        default=100, description="Page size used when listing projects"
    )


class OAuthConfig(BaseModel):
    """Client credentials used to obtain API bearer tokens."""

    token_url: str = Field(
        default="https://accounts.eclipse.org/oauth2/token",
        description="OAuth2 token endpoint",
    )
    client_id: Optional[str] = Field(default=None, description="OAuth client ID")
    client_secret: Optional[str] = Field(
        default=None, description="OAuth client secret"
    )
    scope: str = Field(
        default="eclipsefdn_view_all_profiles", description="Requested token scope"
    )
    refresh_threshold_seconds: int = Field(
        default=60, description="Refresh tokens this many seconds before expiry"
    )


class CacheConfig(BaseModel):
    """Configuration for the in-memory lookup cache."""

    ttl_seconds: int = Field(default=600, description="Time-to-live of cached values")
    max_entries: int = Field(
        default=10000, description="Maximum number of cached values"
    )

    @field_validator("ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("TTL must be positive")
        return v

    @field_validator("max_entries")
    @classmethod
    def validate_max_entries(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Max entries must be positive")
        return v


class ServerConfig(BaseModel):
    """HTTP server bind settings."""

    host: str = Field(default="127.0.0.1", description="Host to bind server to")
    port: int = Field(default=8080, description="Port to run server on")


class Config(BaseModel):
    """Main configuration for Git ECA."""

    mail: MailConfig = Field(default_factory=MailConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    oauth: OAuthConfig = Field(default_factory=OAuthConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


@dataclass(frozen=True)
class MailPolicy:
    """Read-only mail policy built once at startup.

    Holds the allow-list as a frozen set and the compiled no-reply patterns so
    that request handling never recompiles them.
    """

    allow_list: FrozenSet[str]
    noreply_patterns: Tuple[Pattern[str], ...]

    @classmethod
    def from_config(cls, mail_config: MailConfig) -> "MailPolicy":
        return cls(
            allow_list=frozenset(mail_config.allow_list),
            noreply_patterns=tuple(
                re.compile(p) for p in mail_config.noreply_email_patterns
            ),
        )

    def is_allowed(self, mail: Optional[str]) -> bool:
        """Exact-match allow-list membership."""
        return mail is not None and mail in self.allow_list

    def is_noreply(self, mail: str) -> bool:
        candidate = mail.strip()
        return any(p.search(candidate) for p in self.noreply_patterns)


class ConfigManager:
    """Manages configuration loading, saving, and validation."""

    DEFAULT_CONFIG_PATH = Path.home() / ".git-eca" / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            env_path = os.environ.get(CONFIG_PATH_ENV)
            config_path = Path(env_path) if env_path else self.DEFAULT_CONFIG_PATH
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load(self) -> Config:
        """Load configuration from file, falling back to defaults."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                config = Config(**data)
            except Exception as e:
                raise ValueError(
                    f"Failed to load config from {self.config_path}: {e}"
                ) from e
        else:
            logger.debug(f"No config at {self.config_path}, using defaults")
            config = Config()

        self._config = self._apply_env_overrides(config)
        return self._config

    def save(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self._config

        if config is None:
            raise ValueError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get_config(self) -> Config:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            self.load()
        if self._config is None:
            raise RuntimeError("Failed to load configuration")
        return self._config

    def create_default_config(self) -> Config:
        """Write a default configuration to the config path."""
        config = Config()
        self._config = config
        self.save()
        return config

    @staticmethod
    def _apply_env_overrides(config: Config) -> Config:
        # Secrets are usually mounted into the environment rather than the file
        client_id = os.environ.get(OAUTH_CLIENT_ID_ENV)
        client_secret = os.environ.get(OAUTH_CLIENT_SECRET_ENV)
        if client_id:
            config.oauth.client_id = client_id
        if client_secret:
            config.oauth.client_secret = client_secret
        return config
