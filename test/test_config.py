"""
Tests for application settings
"""

from wysiwym.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("WYSIWYM_ENABLED_PLUGINS", "WYSIWYM_CHECK_STRUCTURE", "WYSIWYM_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.enabled_plugins is None
        assert s.check_structure is True
        assert s.log_level == "INFO"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("WYSIWYM_CHECK_STRUCTURE", "false")
        monkeypatch.setenv("WYSIWYM_ENABLED_PLUGINS", '["text", "paragraph"]')
        s = Settings(_env_file=None)
        assert s.check_structure is False
        assert s.enabled_plugins == ["text", "paragraph"]

    def test_enabled_plugins_drive_loader(self, monkeypatch):
        from wysiwym.plugins.loader import initialize_plugins
        from wysiwym.plugins.registry import KindRegistry

        monkeypatch.setenv("WYSIWYM_ENABLED_PLUGINS", '["text", "paragraph", "strong"]')
        s = Settings(_env_file=None)
        reg = KindRegistry()
        initialize_plugins(reg, s.enabled_plugins)
        assert reg.mark_kinds() == ["strong"]
