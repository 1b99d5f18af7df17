"""
Configuration for c8ctl: profiles, session state and resolution.
"""

from c8ctl.config.models import ClusterConfig, OutputMode, Profile, SessionState
from c8ctl.config.paths import get_user_data_dir
from c8ctl.config.profiles import (
    add_profile,
    get_profile,
    load_profiles,
    remove_profile,
    save_profiles,
)
from c8ctl.config.resolver import (
    DEFAULT_BASE_URL,
    DEFAULT_TENANT_ID,
    resolve_cluster_config,
    resolve_tenant_id,
)
from c8ctl.config.session import (
    clear_active_profile,
    clear_active_tenant,
    load_session_state,
    save_session_state,
    set_active_profile,
    set_active_tenant,
    set_output_mode,
)

__all__ = [
    # Models
    "ClusterConfig",
    "OutputMode",
    "Profile",
    "SessionState",
    # Paths
    "get_user_data_dir",
    # Profiles
    "add_profile",
    "get_profile",
    "load_profiles",
    "remove_profile",
    "save_profiles",
    # Session
    "clear_active_profile",
    "clear_active_tenant",
    "load_session_state",
    "save_session_state",
    "set_active_profile",
    "set_active_tenant",
    "set_output_mode",
    # Resolution
    "DEFAULT_BASE_URL",
    "DEFAULT_TENANT_ID",
    "resolve_cluster_config",
    "resolve_tenant_id",
]
