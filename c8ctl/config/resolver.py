"""Configuration resolution.

Both functions walk a strict precedence chain and only read state.

Cluster configuration priority:
1. Explicit profile name (e.g. --profile flag)
2. Session active profile
3. CAMUNDA_* environment variables
4. Local default (http://localhost:8080/v2, no auth)

Tenant priority:
1. Session active tenant
2. Default tenant of the explicit or session profile
3. CAMUNDA_DEFAULT_TENANT_ID
4. "<default>"

A named profile that cannot be found is an error, never a fall-through.
A profile that is found ends the chain even when it carries no auth.
"""

from typing import Optional

from c8ctl.config.models import ClusterConfig, Profile, SessionState
from c8ctl.config.profiles import get_profile
from c8ctl.config.settings import get_cluster_env_settings
from c8ctl.errors import ProfileNotFoundError
from c8ctl.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/v2"
DEFAULT_TENANT_ID = "<default>"


def _current_session(session: Optional[SessionState]) -> SessionState:
    if session is not None:
        return session
    from c8ctl.runtime import c8ctl

    return c8ctl.session


def _select_profile(
    profile_name: Optional[str], session: SessionState
) -> Optional[Profile]:
    """Return the explicit or session-active profile, if either is named."""
    if profile_name:
        profile = get_profile(profile_name)
        if profile is None:
            raise ProfileNotFoundError(profile_name, source="explicit")
        return profile

    if session.active_profile:
        profile = get_profile(session.active_profile)
        if profile is None:
            raise ProfileNotFoundError(session.active_profile, source="session")
        return profile

    return None


def resolve_cluster_config(
    profile_name: Optional[str] = None,
    session: Optional[SessionState] = None,
) -> ClusterConfig:
    """Resolve cluster connection settings.

    Args:
        profile_name: Explicit profile override
        session: Session state to consult; defaults to the runtime's session

    Raises:
        ProfileNotFoundError: If the explicit or session profile does not exist
    """
    session = _current_session(session)

    profile = _select_profile(profile_name, session)
    if profile is not None:
        logger.debug(
            f"Using profile '{profile.name}' ({profile.auth_type} auth) "
            f"-> {profile.base_url}"
        )
        return ClusterConfig.from_profile(profile)

    env = get_cluster_env_settings()
    if env.is_configured:
        base_url = env.base_url or DEFAULT_BASE_URL
        if env.has_oauth_credentials:
            logger.debug(f"Using environment OAuth configuration -> {base_url}")
            return ClusterConfig(
                base_url=base_url,
                client_id=env.client_id,
                client_secret=env.client_secret,
                audience=env.audience,
                oauth_url=env.oauth_url,
            )
        logger.debug(f"Using environment configuration without auth -> {base_url}")
        return ClusterConfig(base_url=base_url)

    logger.debug(f"Using local default -> {DEFAULT_BASE_URL}")
    return ClusterConfig(base_url=DEFAULT_BASE_URL)


def resolve_tenant_id(
    profile_name: Optional[str] = None,
    session: Optional[SessionState] = None,
) -> str:
    """Resolve the tenant to scope requests to.

    Raises:
        ProfileNotFoundError: If no session tenant is set and the explicit or
            session profile does not exist
    """
    session = _current_session(session)

    if session.active_tenant:
        return session.active_tenant

    profile = _select_profile(profile_name, session)
    if profile is not None and profile.default_tenant_id:
        return profile.default_tenant_id

    env_tenant = get_cluster_env_settings().default_tenant_id
    if env_tenant:
        return env_tenant

    return DEFAULT_TENANT_ID
