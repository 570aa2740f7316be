"""Tests for ciflow.config (environment, platforms, secrets, settings)."""

import base64
import json
import logging

import pytest
from pydantic import ValidationError

from ciflow.config import (
    EngineSettings,
    Environment,
    EnvironmentSecret,
    FileSecret,
    GitHubPlatform,
    LocalPlatform,
    MissingEnvironmentSecretError,
    detect_platform,
)
from ciflow.config.platforms import OtherEvent, PullRequestAction, PullRequestEvent
from ciflow.config.secrets import MissingFileSecretError, SecretDecodeError
from ciflow.errors import InternalWorkflowError, MissingEnvironmentVariableError


def pull_request_payload(action="opened", **overrides):
    pull_request = {
        "id": 1,
        "number": 42,
        "title": "Add release pipeline",
        "draft": False,
        "base": {"ref": "main", "sha": "aaa"},
        "head": {"ref": "feature/release", "sha": "bbb"},
    }
    pull_request.update(overrides)
    return json.dumps({"action": action, "pull_request": pull_request})


class TestEnvironment:
    """Tests for Environment facade."""

    def test_require_missing_raises(self):
        with pytest.raises(MissingEnvironmentVariableError) as exc_info:
            Environment({}).require("GITHUB_HEAD_REF")

        assert exc_info.value.key == "GITHUB_HEAD_REF"
        assert str(exc_info.value) == "Missing required environment variable: GITHUB_HEAD_REF"
        assert isinstance(exc_info.value, KeyError)

    @pytest.mark.parametrize(
        "raw,expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)]
    )
    def test_flag(self, raw, expected):
        assert Environment({"FLAG": raw}).flag("FLAG") is expected

    def test_flag_unset_is_none(self):
        assert Environment({}).flag("FLAG") is None

    def test_set_and_unset_write_through(self):
        variables = {}
        environment = Environment(variables)

        environment.set("KEY", "value")
        assert variables == {"KEY": "value"}
        assert "KEY" in environment

        environment.unset("KEY")
        environment.unset("KEY")
        assert variables == {}

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("CIFLOW_TEST_VALUE", "present")
        assert Environment().get("CIFLOW_TEST_VALUE") == "present"


class TestPlatforms:
    """Tests for platform detection and GitHub specifics."""

    def test_detects_local(self):
        platform = detect_platform(Environment({}))
        assert isinstance(platform, LocalPlatform)
        assert not platform.is_ci

    def test_detects_github_actions(self):
        platform = detect_platform(Environment({"GITHUB_ACTIONS": "true"}))
        assert isinstance(platform, GitHubPlatform)
        assert platform.is_ci

    def test_local_has_no_workspace(self):
        with pytest.raises(InternalWorkflowError):
            LocalPlatform(Environment({})).workspace()

    def test_github_workspace(self, tmp_path):
        environment = Environment({"GITHUB_ACTIONS": "true", "GITHUB_WORKSPACE": str(tmp_path)})
        assert GitHubPlatform(environment).workspace() == tmp_path

    def test_group_markers_only_in_ci(self):
        assert GitHubPlatform(Environment({})).log_group_markers("x") is None
        markers = GitHubPlatform(Environment({"GITHUB_ACTIONS": "1"})).log_group_markers("x")
        assert markers == ("::group::x", "::endgroup::")


class TestGitHubEvent:
    """Tests for decoding the triggering event."""

    def test_simulated_pull_request_event(self):
        environment = Environment(
            {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_EVENT_CONTENTS": pull_request_payload()}
        )

        event = GitHubPlatform(environment).event()

        assert isinstance(event, PullRequestEvent)
        assert event.action is PullRequestAction.OPENED
        assert event.pull_request.number == 42
        assert event.pull_request.head.ref == "feature/release"
        assert event.pull_request.is_draft is False

    def test_event_file_read_in_ci(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(pull_request_payload(action="synchronize", draft=True))
        environment = Environment(
            {
                "GITHUB_ACTIONS": "true",
                "GITHUB_EVENT_NAME": "pull_request",
                "GITHUB_EVENT_PATH": str(path),
            }
        )

        event = GitHubPlatform(environment).event()

        assert event.action is PullRequestAction.SYNCHRONIZE
        assert event.pull_request.is_draft is True

    def test_other_event_kept_raw(self):
        environment = Environment({"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_CONTENTS": "{}"})

        event = GitHubPlatform(environment).event()

        assert event == OtherEvent(name="push", contents=b"{}")

    def test_missing_details_logged_and_none(self, caplog):
        with caplog.at_level(logging.ERROR):
            assert GitHubPlatform(Environment({})).event() is None

        assert any("Error while getting GitHub event details" in r.getMessage() for r in caplog.records)

    def test_invalid_payload_is_none(self, caplog):
        environment = Environment(
            {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_EVENT_CONTENTS": '{"action": "opened"}'}
        )

        with caplog.at_level(logging.ERROR):
            assert GitHubPlatform(environment).event() is None

        assert any("Failed to decode GitHub event" in r.getMessage() for r in caplog.records)


class TestSecrets:
    """Tests for secret backends."""

    @pytest.mark.asyncio
    async def test_environment_secret_value(self):
        secret = EnvironmentSecret.value("TOKEN")
        secret.environment = Environment({"TOKEN": "abc"})

        assert await secret.get() == b"abc"

    @pytest.mark.asyncio
    async def test_base64_secret_tolerates_line_breaks(self):
        encoded = base64.b64encode(b"certificate-bytes").decode()
        wrapped = encoded[:8] + "\n" + encoded[8:]
        secret = EnvironmentSecret.base64_encoded_value("CERT")
        secret.environment = Environment({"CERT": wrapped})

        assert await secret.get() == b"certificate-bytes"

    @pytest.mark.asyncio
    async def test_invalid_base64_raises_decode_error(self):
        secret = EnvironmentSecret.base64_encoded_value("CERT")
        secret.environment = Environment({"CERT": "abc"})

        with pytest.raises(SecretDecodeError):
            await secret.get()

    @pytest.mark.asyncio
    async def test_async_transform(self):
        async def upper(data: bytes) -> bytes:
            return data.upper()

        secret = EnvironmentSecret("KEY", transform=upper, environment=Environment({"KEY": "abc"}))

        assert await secret.get() == b"ABC"

    @pytest.mark.asyncio
    async def test_missing_environment_secret(self):
        secret = EnvironmentSecret("MISSING", environment=Environment({}))

        with pytest.raises(MissingEnvironmentSecretError, match="Missing environment secret: MISSING"):
            await secret.get()

    def test_repr_hides_value(self):
        secret = EnvironmentSecret("TOKEN", environment=Environment({"TOKEN": "hunter2"}))
        assert "hunter2" not in repr(secret)

    @pytest.mark.asyncio
    async def test_file_secret(self, tmp_path):
        path = tmp_path / "key.p8"
        path.write_bytes(b"\x00private")

        assert await FileSecret(path).get() == b"\x00private"

    @pytest.mark.asyncio
    async def test_missing_file_secret(self, tmp_path):
        with pytest.raises(MissingFileSecretError):
            await FileSecret(tmp_path / "absent").get()


class TestEngineSettings:
    """Tests for CIFLOW_* settings."""

    def test_defaults(self):
        settings = EngineSettings()
        assert settings.log_level is None
        assert settings.log_file is None
        assert settings.no_color is False

    def test_reads_prefixed_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CIFLOW_LOG_LEVEL", "debug")
        monkeypatch.setenv("CIFLOW_LOG_FILE", str(tmp_path / "ci.log"))
        monkeypatch.setenv("CIFLOW_NO_COLOR", "1")

        settings = EngineSettings()

        assert settings.log_level == "DEBUG"
        assert settings.log_file == tmp_path / "ci.log"
        assert settings.no_color is True

    def test_rejects_unknown_level(self):
        with pytest.raises(ValidationError):
            EngineSettings(log_level="chatty")

    def test_resolve_level(self):
        assert EngineSettings().resolve_level(logging.DEBUG) == logging.DEBUG
        assert EngineSettings(log_level="error").resolve_level(logging.DEBUG) == logging.ERROR
