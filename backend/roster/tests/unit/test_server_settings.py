import pytest
from pydantic import ValidationError

from roster.logic.settings import RosterSettings
from roster.server.settings import RosterServerSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ROSTER_LOG_DIR",
        "ROSTER_CORS_ORIGINS",
        "ROSTER_MAX_REQUEST_BYTES",
        "ROSTER_CLEAR_CONFIRM_SECONDS",
        "ROSTER_JOIN_CONFIRM_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestRosterServerSettings:
    def test_defaults(self):
        settings = RosterServerSettings()
        assert settings.log_dir is None
        assert settings.cors_origins == []
        assert settings.max_request_bytes == 64 * 1024
        assert settings.to_roster_settings() == RosterSettings()

    def test_log_dir_override(self, monkeypatch):
        monkeypatch.setenv("ROSTER_LOG_DIR", "custom/roster-logs")
        assert RosterServerSettings().log_dir == "custom/roster-logs"

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("ROSTER_CORS_ORIGINS", '["http://x.com","http://y.com"]')
        assert RosterServerSettings().cors_origins == ["http://x.com", "http://y.com"]

    def test_cors_origins_csv(self, monkeypatch):
        monkeypatch.setenv("ROSTER_CORS_ORIGINS", "http://x.com,http://y.com")
        assert RosterServerSettings().cors_origins == ["http://x.com", "http://y.com"]

    def test_cors_origins_invalid_raises(self, monkeypatch):
        monkeypatch.setenv("ROSTER_CORS_ORIGINS", '["http://x.com", 1]')
        with pytest.raises(ValidationError, match="cors_origins"):
            RosterServerSettings()

    def test_confirm_windows_feed_engine_settings(self, monkeypatch):
        monkeypatch.setenv("ROSTER_CLEAR_CONFIRM_SECONDS", "5")
        monkeypatch.setenv("ROSTER_JOIN_CONFIRM_SECONDS", "1.5")
        roster_settings = RosterServerSettings().to_roster_settings()

        assert roster_settings.clear_confirm_seconds == 5
        assert roster_settings.join_confirm_seconds == 1.5

    def test_non_positive_window_rejected(self, monkeypatch):
        monkeypatch.setenv("ROSTER_CLEAR_CONFIRM_SECONDS", "0")
        with pytest.raises(ValidationError, match="clear_confirm_seconds"):
            RosterServerSettings()

    def test_request_limit_lower_bound(self):
        with pytest.raises(ValidationError, match="max_request_bytes"):
            RosterServerSettings(max_request_bytes=100)
