"""
Configuration system unit tests
Loading, validation and defaults of AppConfig
"""

import json

from pkttrim.config.settings import AppConfig, LoggingSettings, TrimSettings


class TestAppConfig:
    """Application configuration tests"""

    def test_default_initialization(self):
        config = AppConfig.default()

        assert isinstance(config.trim, TrimSettings)
        assert isinstance(config.logging, LoggingSettings)
        assert config.trim.error_policy == "abort"
        assert config.trim.rejects_path is None
        assert config.trim.snaplen == 262144
        assert config.trim.output_suffix == "_trimmed"
        assert config.logging.trace_layers is False

    def test_default_config_is_valid(self):
        is_valid, errors = AppConfig.default().validate()

        assert is_valid
        assert errors == []

    def test_validation_catches_bad_values(self):
        config = AppConfig.default()
        config.trim.error_policy = "ignore"
        config.trim.snaplen = 0
        config.logging.log_level = "LOUD"

        is_valid, errors = config.validate()

        assert not is_valid
        assert len(errors) == 3
        assert any("error_policy" in e for e in errors)
        assert any("snaplen" in e for e in errors)
        assert any("log_level" in e for e in errors)

    def test_rejects_path_requires_skip(self):
        config = AppConfig.default()
        config.trim.rejects_path = "rejects.pcap"

        is_valid, errors = config.validate()
        assert not is_valid
        assert errors == ["rejects_path requires error_policy 'skip'"]

        config.trim.error_policy = "skip"
        assert config.validate()[0]

    def test_trim_config_dict(self):
        config = AppConfig.default()
        config.trim.error_policy = "skip"
        config.logging.trace_layers = True

        assert config.get_trim_config() == {
            "error_policy": "skip",
            "rejects_path": None,
            "snaplen": 262144,
            "trace_layers": True,
        }


class TestConfigPersistence:
    """Loading and saving configuration files"""

    def test_yaml_round_trip(self, temp_dir):
        path = temp_dir / "config.yaml"
        config = AppConfig.default()
        config.trim.error_policy = "skip"
        config.trim.rejects_path = "/tmp/rejects.pcap"
        config.logging.log_level = "DEBUG"

        assert config.save(path)
        loaded = AppConfig.load(path)

        assert loaded.trim.error_policy == "skip"
        assert loaded.trim.rejects_path == "/tmp/rejects.pcap"
        assert loaded.logging.log_level == "DEBUG"
        assert loaded.created_at == config.created_at
        assert loaded.validate()[0]

    def test_json_by_suffix(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"trim": {"snaplen": 65535}}), encoding="utf-8")

        loaded = AppConfig.load(path)

        assert loaded.trim.snaplen == 65535
        assert loaded.trim.error_policy == "abort"

    def test_partial_yaml_keeps_defaults(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("logging:\n  log_to_file: false\n", encoding="utf-8")

        loaded = AppConfig.load(path)

        assert loaded.logging.log_to_file is False
        assert loaded.logging.log_level == "INFO"
        assert loaded.trim.error_policy == "abort"

    def test_missing_file_returns_defaults(self, temp_dir):
        loaded = AppConfig.load(temp_dir / "does_not_exist.yaml")

        assert loaded.trim == TrimSettings()

    def test_unknown_key_falls_back_to_defaults(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("trim:\n  no_such_option: 1\n", encoding="utf-8")

        loaded = AppConfig.load(path)

        assert loaded.trim == TrimSettings()

    def test_broken_yaml_falls_back_to_defaults(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("trim: [unclosed\n", encoding="utf-8")

        loaded = AppConfig.load(path)

        assert loaded.trim == TrimSettings()
