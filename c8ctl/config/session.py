"""Session state store.

The session is read once at startup into the runtime object. Every change
is a read-modify-write that goes through save_session_state(), which also
refreshes the runtime's in-memory copy.
"""

import json
from typing import Optional

from c8ctl.config.models import OutputMode, SessionState
from c8ctl.config.paths import ensure_user_data_dir, get_session_path
from c8ctl.config.profiles import get_profile
from c8ctl.errors import ProfileNotFoundError, ValidationError
from c8ctl.logging import get_logger

logger = get_logger(__name__)


def load_session_state() -> SessionState:
    """Load session state from disk.

    A missing or corrupted file yields the default session (text output,
    no active profile or tenant).
    """
    path = get_session_path()
    if not path.exists():
        return SessionState()

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"Could not read session from {path}: {e}")
        return SessionState()

    if not isinstance(data, dict):
        return SessionState()
    return SessionState.from_dict(data)


def save_session_state(state: SessionState) -> None:
    """Persist session state and publish it to the runtime."""
    from c8ctl.runtime import c8ctl

    ensure_user_data_dir()
    path = get_session_path()
    with open(path, "w") as f:
        json.dump(state.to_dict(), f, indent=2)
    c8ctl.replace_session(state)


def _update(**changes) -> SessionState:
    state = load_session_state()
    for key, value in changes.items():
        setattr(state, key, value)
    save_session_state(state)
    return state


def set_active_profile(name: str) -> SessionState:
    """Make a profile the session's active profile.

    Raises:
        ProfileNotFoundError: If no profile with that name exists
    """
    if get_profile(name) is None:
        raise ProfileNotFoundError(name)
    return _update(active_profile=name)


def clear_active_profile() -> SessionState:
    return _update(active_profile=None)


def set_active_tenant(tenant_id: str) -> SessionState:
    if not tenant_id or not tenant_id.strip():
        raise ValidationError(
            message="Tenant ID must not be empty",
            error_code="INPUT-EmptyTenant",
        )
    return _update(active_tenant=tenant_id.strip())


def clear_active_tenant() -> SessionState:
    return _update(active_tenant=None)


def set_output_mode(mode: Optional[str]) -> SessionState:
    """Set the session output mode.

    Raises:
        ValidationError: If mode is not 'json' or 'text'
    """
    valid = [m.value for m in OutputMode]
    normalized = (mode or "").strip().lower()
    if normalized not in valid:
        raise ValidationError(
            message=f"Invalid output mode '{mode}'",
            error_code="INPUT-InvalidOutputMode",
            details={"valid": valid},
            suggestion=f"Use one of: {', '.join(valid)}",
        )
    return _update(output_mode=OutputMode(normalized))
