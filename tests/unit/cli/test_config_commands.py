"""Tests for profile, session and show commands."""

import json


class TestAddProfile:
    def test_add_no_auth_profile(self, runner, app) -> None:
        from c8ctl.config import get_profile

        result = runner.invoke(
            app, ["add", "profile", "local", "--base-url", "http://localhost:8080/v2"]
        )

        assert result.exit_code == 0
        assert "Profile 'local' saved" in result.output
        assert get_profile("local").base_url == "http://localhost:8080/v2"

    def test_add_oauth_profile_json_masks_secret(self, runner, app) -> None:
        result = runner.invoke(
            app,
            [
                "--json",
                "add",
                "profile",
                "prod",
                "--base-url",
                "https://prod.example.com/v2",
                "--client-id",
                "abc",
                "--client-secret",
                "s3cret",
            ],
        )

        assert result.exit_code == 0
        output = json.loads(result.stdout)
        assert output["data"]["clientId"] == "abc"
        assert output["data"]["clientSecret"] != "s3cret"

    def test_mixed_auth_fails(self, runner, app) -> None:
        from c8ctl.config import get_profile

        result = runner.invoke(
            app,
            [
                "add",
                "profile",
                "bad",
                "--base-url",
                "http://x",
                "--client-id",
                "id",
                "--client-secret",
                "secret",
                "--username",
                "demo",
                "--password",
                "demo",
            ],
        )

        assert result.exit_code == 1
        assert "not both" in result.output
        assert get_profile("bad") is None

    def test_missing_base_url_fails(self, runner, app) -> None:
        result = runner.invoke(app, ["add", "profile", "nourl"])

        assert result.exit_code == 1
        assert "baseUrl" in result.output


class TestRemoveProfile:
    def test_remove_active_profile_clears_session(self, runner, app) -> None:
        from c8ctl.config import add_profile, load_session_state, set_active_profile

        add_profile({"name": "p", "base_url": "http://x"})
        set_active_profile("p")

        result = runner.invoke(app, ["remove", "profile", "p"])

        assert result.exit_code == 0
        assert load_session_state().active_profile is None

    def test_rm_alias(self, runner, app) -> None:
        from c8ctl.config import add_profile

        add_profile({"name": "p", "base_url": "http://x"})

        result = runner.invoke(app, ["rm", "profile", "p"])

        assert result.exit_code == 0

    def test_remove_unknown(self, runner, app) -> None:
        result = runner.invoke(app, ["remove", "profile", "ghost"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestListProfiles:
    def test_marks_active_profile(self, runner, app) -> None:
        from c8ctl.config import add_profile, set_active_profile

        add_profile({"name": "alpha", "base_url": "http://a"})
        add_profile({"name": "beta", "base_url": "http://b"})
        set_active_profile("beta")

        result = runner.invoke(app, ["--json", "list", "profiles"])

        assert result.exit_code == 0
        profiles = json.loads(result.stdout)
        assert {p["name"]: p["active"] for p in profiles} == {
            "alpha": False,
            "beta": True,
        }


class TestUseCommands:
    def test_use_profile(self, runner, app) -> None:
        from c8ctl.config import add_profile, load_session_state

        add_profile({"name": "p", "base_url": "http://x"})

        result = runner.invoke(app, ["use", "profile", "p"])

        assert result.exit_code == 0
        assert "Now using profile: p" in result.output
        assert load_session_state().active_profile == "p"

    def test_use_unknown_profile_fails(self, runner, app) -> None:
        result = runner.invoke(app, ["use", "profile", "ghost"])

        assert result.exit_code == 1
        assert "Profile 'ghost' not found" in result.output

    def test_use_tenant_and_clear(self, runner, app) -> None:
        from c8ctl.config import load_session_state

        result = runner.invoke(app, ["use", "tenant", "acme"])
        assert result.exit_code == 0
        assert load_session_state().active_tenant == "acme"

        result = runner.invoke(app, ["use", "tenant", "--none"])
        assert result.exit_code == 0
        assert load_session_state().active_tenant is None

    def test_use_tenant_without_argument(self, runner, app) -> None:
        result = runner.invoke(app, ["use", "tenant"])

        assert result.exit_code == 1
        assert "--none" in result.output


class TestOutputCommand:
    def test_switch_to_json_confirms_in_json(self, runner, app) -> None:
        from c8ctl.config import OutputMode, load_session_state

        result = runner.invoke(app, ["output", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == {"outputMode": "json"}
        assert load_session_state().output_mode == OutputMode.JSON

    def test_invalid_mode(self, runner, app) -> None:
        result = runner.invoke(app, ["output", "yaml"])

        assert result.exit_code == 1
        assert "Invalid output mode" in result.output


class TestShowCommands:
    def test_show_profile_masks_password(self, runner, app) -> None:
        from c8ctl.config import add_profile

        add_profile(
            {
                "name": "basic",
                "base_url": "http://x",
                "username": "demo",
                "password": "hunter2",
            }
        )

        result = runner.invoke(app, ["show", "profile", "basic"])

        assert result.exit_code == 0
        assert "demo" in result.output
        assert "hunter2" not in result.output

    def test_show_unknown_profile(self, runner, app) -> None:
        result = runner.invoke(app, ["show", "profile", "ghost"])

        assert result.exit_code == 1

    def test_show_session_resolution(self, runner, app) -> None:
        from c8ctl.config import set_active_tenant

        set_active_tenant("acme")

        result = runner.invoke(app, ["--json", "show", "session"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["activeTenant"] == "acme"
        assert data["resolved"] == {
            "baseUrl": "http://localhost:8080/v2",
            "auth": "none",
            "tenantId": "acme",
        }

    def test_show_session_with_stale_profile(self, runner, app) -> None:
        from c8ctl.config import SessionState, save_session_state

        save_session_state(SessionState(active_profile="deleted"))

        result = runner.invoke(app, ["show", "session"])

        assert result.exit_code == 1
        assert "Profile 'deleted' not found" in result.output
