"""
Environment-backed settings for c8ctl.

Two groups of variables are read:
- CAMUNDA_*: cluster connection settings, the third source in the
  configuration precedence chain (after explicit and session profiles).
- C8CTL_*: settings for the CLI itself (data dir, debug, log dir).

Settings objects are not cached: every resolution must see the current
process environment.
"""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_TRUTHY = {"1", "true", "yes", "on"}


class ClusterEnvSettings(BaseSettings):
    """Cluster connection settings sourced from CAMUNDA_* variables."""

    base_url: Optional[str] = Field(
        default=None, description="Orchestration cluster REST base URL"
    )
    client_id: Optional[str] = Field(default=None, description="OAuth client ID")
    client_secret: Optional[str] = Field(
        default=None, description="OAuth client secret"
    )
    audience: Optional[str] = Field(default=None, description="OAuth token audience")
    oauth_url: Optional[str] = Field(default=None, description="OAuth token endpoint")
    default_tenant_id: Optional[str] = Field(
        default=None, description="Tenant used when no session or profile tenant is set"
    )

    model_config = SettingsConfigDict(
        env_prefix="CAMUNDA_", env_ignore_empty=True, extra="ignore"
    )

    @property
    def has_oauth_credentials(self) -> bool:
        """OAuth is only configured when both halves of the credential pair exist."""
        return bool(self.client_id and self.client_secret)

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) or self.has_oauth_credentials


class C8ctlSettings(BaseSettings):
    """Settings for the CLI process itself."""

    data_dir: Optional[Path] = Field(
        default=None, description="Override for the platform data directory"
    )
    log_dir: Optional[Path] = Field(
        default=None, description="Directory for rotating log files"
    )
    debug: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("C8CTL_DEBUG", "DEBUG"),
        description="Enable debug logging (1/true)",
    )

    model_config = SettingsConfigDict(
        env_prefix="C8CTL_", env_ignore_empty=True, extra="ignore"
    )

    @property
    def debug_enabled(self) -> bool:
        return bool(self.debug) and self.debug.strip().lower() in _TRUTHY


def get_cluster_env_settings() -> ClusterEnvSettings:
    return ClusterEnvSettings()


def get_c8ctl_settings() -> C8ctlSettings:
    return C8ctlSettings()
