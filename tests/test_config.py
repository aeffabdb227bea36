from lunar_stats import config


def test_settings_defaults(monkeypatch):
    for name in ("LUNAR_DATA_PATH", "LUNAR_LOG_LEVEL", "LUNAR_CACHE_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    config.reset_settings_cache()
    settings = config.get_settings()
    assert settings.data_path == "data/combined_analysis.json"
    assert settings.log_level == "INFO"
    assert settings.cache_enabled is True
    config.reset_settings_cache()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("LUNAR_DATA_PATH", "/tmp/doc.json")
    monkeypatch.setenv("LUNAR_LOG_LEVEL", "debug")
    monkeypatch.setenv("LUNAR_CACHE_ENABLED", "false")
    config.reset_settings_cache()
    try:
        settings = config.get_settings()
        assert settings.data_path == "/tmp/doc.json"
        assert settings.log_level == "DEBUG"
        assert settings.cache_enabled is False
        assert config.get_settings() is settings
    finally:
        config.reset_settings_cache()
