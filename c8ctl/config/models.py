"""
Data model for c8ctl configuration.

- Profile: a named, persisted connection configuration (profiles.json)
- SessionState: the persisted working context (session.json)
- ClusterConfig: the ephemeral result of configuration resolution
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

SECRET_MASK = "********"


class OutputMode(str, Enum):
    """How command results are rendered."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OutputMode":
        """Parse a stored value, falling back to text for anything unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return cls.TEXT


class Profile(BaseModel):
    """
    A named connection configuration.

    At most one auth strategy may be populated: OAuth (client_id,
    client_secret, audience, oauth_url) or basic auth (username, password).
    Keys are camelCase on disk.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str
    base_url: str = Field(alias="baseUrl")
    client_id: Optional[str] = Field(default=None, alias="clientId")
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    audience: Optional[str] = Field(default=None, alias="audience")
    oauth_url: Optional[str] = Field(default=None, alias="oAuthUrl")
    username: Optional[str] = Field(default=None, alias="username")
    password: Optional[str] = Field(default=None, alias="password")
    default_tenant_id: Optional[str] = Field(default=None, alias="defaultTenantId")

    @model_validator(mode="after")
    def validate_auth(self) -> "Profile":
        if not self.name:
            raise ValueError("Profile name is required")
        if not self.base_url:
            raise ValueError("Profile base URL is required")

        uses_oauth = any(
            (self.client_id, self.client_secret, self.audience, self.oauth_url)
        )
        uses_basic = any((self.username, self.password))

        if uses_oauth and uses_basic:
            raise ValueError(
                "A profile may use OAuth or basic auth credentials, not both"
            )
        if (self.client_id or self.client_secret) and not (
            self.client_id and self.client_secret
        ):
            raise ValueError("OAuth requires both a client ID and a client secret")
        if uses_basic and not (self.username and self.password):
            raise ValueError("Basic auth requires both a username and a password")
        return self

    @property
    def auth_type(self) -> str:
        if self.client_id:
            return "oauth"
        if self.username:
            return "basic"
        return "none"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk representation."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_display_dict(self) -> dict[str, Any]:
        """Like to_dict, with secrets masked."""
        data = self.to_dict()
        for key in ("clientSecret", "password"):
            if key in data:
                data[key] = SECRET_MASK
        return data


@dataclass(frozen=True)
class ClusterConfig:
    """Immutable, fully resolved cluster connection settings.

    Attributes:
        base_url: REST base URL of the orchestration cluster
        client_id: OAuth client ID (OAuth only)
        client_secret: OAuth client secret (OAuth only)
        audience: OAuth token audience (OAuth only)
        oauth_url: OAuth token endpoint (OAuth only)
        username: Basic auth user (basic only)
        password: Basic auth password (basic only)
    """

    base_url: str
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    audience: Optional[str] = None
    oauth_url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "ClusterConfig":
        return cls(
            base_url=profile.base_url,
            client_id=profile.client_id,
            client_secret=profile.client_secret,
            audience=profile.audience,
            oauth_url=profile.oauth_url,
            username=profile.username,
            password=profile.password,
        )

    @property
    def has_oauth(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.username and self.password)

    @property
    def auth_type(self) -> str:
        if self.has_oauth:
            return "oauth"
        if self.has_basic_auth:
            return "basic"
        return "none"


@dataclass
class SessionState:
    """The user's current working context.

    output_mode always holds a value; unknown or missing values load as text.
    """

    active_profile: Optional[str] = None
    active_tenant: Optional[str] = None
    output_mode: OutputMode = OutputMode.TEXT

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "activeProfile": self.active_profile,
            "activeTenant": self.active_tenant,
            "outputMode": self.output_mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionState":
        """Deserialize from dictionary."""
        return cls(
            active_profile=data.get("activeProfile") or None,
            active_tenant=data.get("activeTenant") or None,
            output_mode=OutputMode.parse(data.get("outputMode")),
        )
