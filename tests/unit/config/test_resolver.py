"""
Tests for cluster configuration and tenant resolution.

Covers the precedence chains: explicit profile > session profile >
environment > local default, and session tenant > profile tenant >
environment tenant > "<default>".
"""

import pytest

from c8ctl.config.models import SessionState


@pytest.fixture
def oauth_env(monkeypatch):
    """Full set of OAuth environment variables."""
    monkeypatch.setenv("CAMUNDA_BASE_URL", "https://env.example.com/v2")
    monkeypatch.setenv("CAMUNDA_CLIENT_ID", "env-client")
    monkeypatch.setenv("CAMUNDA_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("CAMUNDA_AUDIENCE", "zeebe-api")
    monkeypatch.setenv("CAMUNDA_OAUTH_URL", "https://login.example.com/token")


@pytest.fixture
def profiles():
    """Store a no-auth, a basic-auth and an OAuth profile."""
    from c8ctl.config import add_profile

    add_profile({"name": "local", "base_url": "http://localhost:8080"})
    add_profile(
        {
            "name": "basic",
            "base_url": "http://basic.example.com/v2",
            "username": "demo",
            "password": "demo-pass",
            "default_tenant_id": "profile-tenant",
        }
    )
    add_profile(
        {
            "name": "cloud",
            "base_url": "https://cloud.example.com/v2",
            "client_id": "cloud-client",
            "client_secret": "cloud-secret",
        }
    )


class TestResolveClusterConfigProfiles:
    """Explicit and session profiles."""

    def test_unknown_explicit_profile_raises(self, oauth_env):
        """A missing explicit profile fails instead of falling through to env."""
        from c8ctl.config import resolve_cluster_config
        from c8ctl.errors import ProfileNotFoundError

        with pytest.raises(ProfileNotFoundError) as exc_info:
            resolve_cluster_config("does-not-exist", session=SessionState())

        assert exc_info.value.name == "does-not-exist"
        assert exc_info.value.source == "explicit"
        assert exc_info.value.suggestion

    def test_unknown_session_profile_raises(self, oauth_env):
        """A stale session profile fails instead of falling through to env."""
        from c8ctl.config import resolve_cluster_config
        from c8ctl.errors import ProfileNotFoundError

        session = SessionState(active_profile="deleted")
        with pytest.raises(ProfileNotFoundError) as exc_info:
            resolve_cluster_config(session=session)

        assert exc_info.value.source == "session"

    def test_basic_auth_profile_ignores_env(self, profiles, oauth_env):
        """Basic-auth profile returns its fields and no OAuth fields."""
        from c8ctl.config import resolve_cluster_config

        config = resolve_cluster_config("basic", session=SessionState())

        assert config.base_url == "http://basic.example.com/v2"
        assert config.username == "demo"
        assert config.password == "demo-pass"
        assert config.client_id is None
        assert config.client_secret is None
        assert config.audience is None
        assert config.oauth_url is None
        assert config.auth_type == "basic"

    def test_profile_without_auth_is_terminal(self, profiles, oauth_env):
        """A found no-auth profile does not pick up env credentials."""
        from c8ctl.config import resolve_cluster_config

        config = resolve_cluster_config("local", session=SessionState())

        assert config.base_url == "http://localhost:8080"
        assert config.auth_type == "none"
        assert config.client_id is None

    def test_explicit_profile_beats_session_profile(self, profiles):
        """The override wins over the session's active profile."""
        from c8ctl.config import resolve_cluster_config

        session = SessionState(active_profile="cloud")
        config = resolve_cluster_config("basic", session=session)

        assert config.base_url == "http://basic.example.com/v2"

    def test_session_profile_used_without_override(self, profiles):
        """The session's active profile is used when no override is given."""
        from c8ctl.config import resolve_cluster_config

        config = resolve_cluster_config(session=SessionState(active_profile="cloud"))

        assert config.base_url == "https://cloud.example.com/v2"
        assert config.has_oauth
        assert config.client_id == "cloud-client"

    def test_defaults_to_runtime_session(self, profiles):
        """Without a session argument the runtime's session is consulted."""
        from c8ctl.config import resolve_cluster_config, set_active_profile

        set_active_profile("basic")

        config = resolve_cluster_config()

        assert config.base_url == "http://basic.example.com/v2"


class TestResolveClusterConfigEnvironment:
    """Environment variables and the local default."""

    def test_oauth_from_env(self, oauth_env):
        """OAuth configuration comes purely from the environment."""
        from c8ctl.config import resolve_cluster_config

        config = resolve_cluster_config(session=SessionState())

        assert config.base_url == "https://env.example.com/v2"
        assert config.client_id == "env-client"
        assert config.client_secret == "env-secret"
        assert config.audience == "zeebe-api"
        assert config.oauth_url == "https://login.example.com/token"
        assert config.username is None

    def test_env_without_secret_is_unauthenticated(self, monkeypatch):
        """A client ID alone does not produce an OAuth configuration."""
        from c8ctl.config import resolve_cluster_config

        monkeypatch.setenv("CAMUNDA_BASE_URL", "https://env.example.com/v2")
        monkeypatch.setenv("CAMUNDA_CLIENT_ID", "env-client")
        monkeypatch.setenv("CAMUNDA_AUDIENCE", "zeebe-api")

        config = resolve_cluster_config(session=SessionState())

        assert config.base_url == "https://env.example.com/v2"
        assert config.auth_type == "none"
        assert config.client_id is None
        assert config.audience is None

    def test_oauth_pair_without_base_url_uses_default_url(self, monkeypatch):
        """OAuth credentials without a base URL target the local default."""
        from c8ctl.config import DEFAULT_BASE_URL, resolve_cluster_config

        monkeypatch.setenv("CAMUNDA_CLIENT_ID", "env-client")
        monkeypatch.setenv("CAMUNDA_CLIENT_SECRET", "env-secret")

        config = resolve_cluster_config(session=SessionState())

        assert config.base_url == DEFAULT_BASE_URL
        assert config.has_oauth

    def test_local_default_without_anything(self):
        """No profile and no env yields the local default with no auth."""
        from c8ctl.config import DEFAULT_BASE_URL, resolve_cluster_config

        config = resolve_cluster_config(session=SessionState())

        assert config.base_url == DEFAULT_BASE_URL == "http://localhost:8080/v2"
        assert config.auth_type == "none"
        assert config.username is None
        assert config.client_id is None

    def test_empty_env_values_are_ignored(self, monkeypatch):
        """Empty variables count as unset."""
        from c8ctl.config import DEFAULT_BASE_URL, resolve_cluster_config

        monkeypatch.setenv("CAMUNDA_BASE_URL", "")

        config = resolve_cluster_config(session=SessionState())

        assert config.base_url == DEFAULT_BASE_URL

    def test_resolution_does_not_write_files(self, data_dir, oauth_env):
        """Resolution is a pure read."""
        from c8ctl.config import resolve_cluster_config, resolve_tenant_id

        resolve_cluster_config(session=SessionState())
        resolve_tenant_id(session=SessionState())

        assert not data_dir.exists()


class TestResolveTenantId:
    """Tenant precedence."""

    def test_session_tenant_beats_profile_tenant(self, profiles):
        """Session tenant wins even with an active profile that has a tenant."""
        from c8ctl.config import resolve_tenant_id

        session = SessionState(active_profile="basic", active_tenant="tenant-123")

        assert resolve_tenant_id(session=session) == "tenant-123"

    def test_profile_tenant_from_session_profile(self, profiles, monkeypatch):
        """The active profile's default tenant beats the env tenant."""
        from c8ctl.config import resolve_tenant_id

        monkeypatch.setenv("CAMUNDA_DEFAULT_TENANT_ID", "env-tenant")

        session = SessionState(active_profile="basic")

        assert resolve_tenant_id(session=session) == "profile-tenant"

    def test_profile_tenant_from_override(self, profiles):
        """The override's default tenant is used when no session tenant is set."""
        from c8ctl.config import resolve_tenant_id

        assert resolve_tenant_id("basic", session=SessionState()) == "profile-tenant"

    def test_env_tenant_when_profile_has_none(self, profiles, monkeypatch):
        """A profile without a default tenant falls through to the env tenant."""
        from c8ctl.config import resolve_tenant_id

        monkeypatch.setenv("CAMUNDA_DEFAULT_TENANT_ID", "env-tenant")

        assert resolve_tenant_id("local", session=SessionState()) == "env-tenant"

    def test_sentinel_default(self):
        """Nothing configured yields the sentinel tenant."""
        from c8ctl.config import DEFAULT_TENANT_ID, resolve_tenant_id

        assert resolve_tenant_id(session=SessionState()) == DEFAULT_TENANT_ID
        assert DEFAULT_TENANT_ID == "<default>"

    def test_unknown_override_raises(self):
        """A missing override profile is reported rather than skipped."""
        from c8ctl.config import resolve_tenant_id
        from c8ctl.errors import ProfileNotFoundError

        with pytest.raises(ProfileNotFoundError):
            resolve_tenant_id("ghost", session=SessionState())


class TestEndToEnd:
    """Scenarios through the public store and resolver functions."""

    def test_add_local_profile_then_resolve(self):
        """Adding a no-auth profile resolves to just its base URL."""
        from c8ctl.config import add_profile, resolve_cluster_config

        add_profile({"name": "local", "base_url": "http://localhost:8080"})

        config = resolve_cluster_config("local")

        assert config.base_url == "http://localhost:8080"
        assert config.client_id is None
        assert config.client_secret is None
        assert config.username is None
        assert config.password is None

    def test_use_tenant_then_resolve(self):
        """A tenant set through the session is resolved afterwards."""
        from c8ctl.config import resolve_tenant_id, set_active_tenant

        set_active_tenant("acme")

        assert resolve_tenant_id() == "acme"
