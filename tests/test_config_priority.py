from datamapper.config import Settings, loadSettings


def test_defaults_without_sources(monkeypatch):
    for suffix in ("LOG_DIR", "REPORT_DIR", "LOG_LEVEL", "DELIMITER", "ENCODING", "REPORT_ITEMS_LIMIT", "REPORT_INCLUDE_INPUT"):
        monkeypatch.delenv(f"DATAMAPPER_{suffix}", raising=False)

    loaded = loadSettings(config_path=None, cli_overrides={})

    assert loaded.settings == Settings()
    assert loaded.sources_used == []


def test_priority_cli_over_env_over_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        "\n".join([
            'log_dir: "cfg_logs"',
            'report_dir: "cfg_reports"',
            'log_level: "DEBUG"',
            'default_delimiter: ";"',
            "report_items_limit: 10",
        ]),
        encoding="utf-8",
    )

    # ENV overrides config
    monkeypatch.setenv("DATAMAPPER_LOG_DIR", "env_logs")
    monkeypatch.setenv("DATAMAPPER_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("DATAMAPPER_REPORT_ITEMS_LIMIT", "20")
    monkeypatch.setenv("DATAMAPPER_DELIMITER", "\t")

    # CLI overrides env
    loaded = loadSettings(
        config_path=str(cfg),
        cli_overrides={"log_level": "WARN", "report_dir": None},
    )

    settings = loaded.settings
    assert settings.log_dir == "env_logs"
    assert settings.report_dir == "cfg_reports"
    assert settings.log_level == "WARN"
    assert settings.default_delimiter == "\t"
    assert settings.report_items_limit == 20
    assert loaded.sources_used == ["config", "env", "cli"]


def test_missing_config_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("DATAMAPPER_LOG_DIR", raising=False)

    loaded = loadSettings(config_path=str(tmp_path / "absent.yml"), cli_overrides={"log_dir": None})

    assert "config" not in loaded.sources_used
