"""
Tests for session state persistence.
"""

import json

import pytest


class TestLoadSessionState:
    """Loading session.json."""

    def test_missing_file_gives_defaults(self):
        from c8ctl.config import OutputMode, load_session_state

        state = load_session_state()

        assert state.active_profile is None
        assert state.active_tenant is None
        assert state.output_mode == OutputMode.TEXT

    def test_unknown_output_mode_loads_as_text(self, data_dir):
        from c8ctl.config import OutputMode, load_session_state

        data_dir.mkdir(parents=True)
        (data_dir / "session.json").write_text(
            json.dumps({"activeProfile": "p", "outputMode": "yaml"})
        )

        state = load_session_state()

        assert state.active_profile == "p"
        assert state.output_mode == OutputMode.TEXT

    def test_corrupted_file_gives_defaults(self, data_dir):
        from c8ctl.config import load_session_state

        data_dir.mkdir(parents=True)
        (data_dir / "session.json").write_text("{{{")

        assert load_session_state().active_profile is None


class TestSessionUpdates:
    """Read-modify-write operations."""

    def test_set_active_profile_requires_existing_profile(self):
        from c8ctl.config import set_active_profile
        from c8ctl.errors import ProfileNotFoundError

        with pytest.raises(ProfileNotFoundError):
            set_active_profile("missing")

    def test_set_active_profile_persists_and_updates_runtime(self, data_dir):
        from c8ctl.config import add_profile, set_active_profile
        from c8ctl.runtime import c8ctl

        add_profile({"name": "p", "base_url": "http://x"})

        set_active_profile("p")

        stored = json.loads((data_dir / "session.json").read_text())
        assert stored["activeProfile"] == "p"
        assert c8ctl.active_profile == "p"

    def test_updates_preserve_other_fields(self):
        """Changing one field keeps the rest of the session."""
        from c8ctl.config import (
            OutputMode,
            add_profile,
            load_session_state,
            set_active_profile,
            set_active_tenant,
            set_output_mode,
        )

        add_profile({"name": "p", "base_url": "http://x"})
        set_active_profile("p")
        set_active_tenant("acme")
        set_output_mode("json")

        state = load_session_state()
        assert state.active_profile == "p"
        assert state.active_tenant == "acme"
        assert state.output_mode == OutputMode.JSON

    def test_clear_fields(self):
        from c8ctl.config import (
            clear_active_tenant,
            load_session_state,
            set_active_tenant,
        )

        set_active_tenant("acme")
        clear_active_tenant()

        assert load_session_state().active_tenant is None

    def test_invalid_output_mode_rejected(self):
        from c8ctl.config import set_output_mode
        from c8ctl.errors import ValidationError

        with pytest.raises(ValidationError) as exc_info:
            set_output_mode("yaml")

        assert exc_info.value.details["valid"] == ["text", "json"]

    def test_output_mode_is_case_insensitive(self):
        from c8ctl.config import OutputMode, set_output_mode

        assert set_output_mode("JSON").output_mode == OutputMode.JSON

    def test_empty_tenant_rejected(self):
        from c8ctl.config import set_active_tenant
        from c8ctl.errors import ValidationError

        with pytest.raises(ValidationError):
            set_active_tenant("   ")
