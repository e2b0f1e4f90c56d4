"""
Application settings

Simple dataclass-backed configuration loaded from YAML (or JSON by suffix).
A missing or unreadable file falls back to defaults.
"""
import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..common.constants import CaptureConstants, FileConstants
from ..common.enums import ErrorPolicy

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_VALID_OUTPUT_FORMATS = ("pcap",)


@dataclass
class TrimSettings:
    """Payload trimming settings"""
    # abort: first bad packet ends the run; skip: drop it and continue
    error_policy: str = ErrorPolicy.ABORT.value
    # Optional capture receiving untouched packets dropped under "skip"
    rejects_path: Optional[str] = None
    snaplen: int = CaptureConstants.DEFAULT_SNAPLEN
    output_format: str = "pcap"
    output_suffix: str = FileConstants.OUTPUT_SUFFIX


@dataclass
class LoggingSettings:
    """Logging settings"""
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_to_file: bool = True
    log_file_max_size: int = FileConstants.LOG_MAX_SIZE
    log_backup_count: int = FileConstants.LOG_BACKUP_COUNT
    # Log every layer seen and every truncation point at DEBUG level
    trace_layers: bool = False


@dataclass
class AppConfig:
    """Application configuration"""
    trim: TrimSettings = field(default_factory=TrimSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    config_version: str = "1.0"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now().isoformat()
        self.updated_at = datetime.now().isoformat()

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "AppConfig":
        """Load configuration, returning defaults when the file is missing or broken"""
        if config_path is None:
            config_path = cls.get_default_config_path()

        config_path = Path(config_path)

        if not config_path.exists():
            return cls.default()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)

            data = data or {}
            trim_data = data.get("trim", {})
            logging_data = data.get("logging", {})

            return cls(
                trim=TrimSettings(**trim_data) if trim_data else TrimSettings(),
                logging=LoggingSettings(**logging_data) if logging_data else LoggingSettings(),
                config_version=data.get("config_version", "1.0"),
                created_at=data.get("created_at"),
                updated_at=data.get("updated_at"),
            )

        except (OSError, yaml.YAMLError, json.JSONDecodeError, TypeError, AttributeError) as e:
            logging.getLogger("pkttrim.config").warning(
                f"Failed to load configuration from {config_path}: {e}, using defaults"
            )
            return cls.default()

    def save(self, config_path: Optional[Union[str, Path]] = None) -> bool:
        """Save configuration to disk"""
        if config_path is None:
            config_path = self.get_default_config_path()

        config_path = Path(config_path)

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            self.updated_at = datetime.now().isoformat()
            data = asdict(self)

            with open(config_path, "w", encoding="utf-8") as f:
                if config_path.suffix.lower() == ".json":
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    yaml.dump(data, f, default_flow_style=False, allow_unicode=True, indent=2)

            return True

        except OSError as e:
            logging.getLogger("pkttrim.config").warning(f"Failed to save configuration: {e}")
            return False

    @classmethod
    def default(cls) -> "AppConfig":
        return cls()

    @staticmethod
    def get_default_config_path() -> Path:
        return Path.home() / FileConstants.CONFIG_DIR_NAME / FileConstants.DEFAULT_CONFIG_FILE

    def validate(self) -> tuple[bool, list]:
        """Validate configuration values"""
        errors = []

        valid_policies = [policy.value for policy in ErrorPolicy]
        if self.trim.error_policy not in valid_policies:
            errors.append(f"Invalid error_policy: {self.trim.error_policy} (expected one of {valid_policies})")

        if self.trim.snaplen <= 0:
            errors.append("snaplen must be greater than 0")

        if self.trim.output_format not in _VALID_OUTPUT_FORMATS:
            errors.append(f"Invalid output_format: {self.trim.output_format}")

        if self.trim.rejects_path and self.trim.error_policy != ErrorPolicy.SKIP.value:
            errors.append("rejects_path requires error_policy 'skip'")

        if self.logging.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.logging.log_level}")

        if self.logging.log_file_max_size <= 0:
            errors.append("log_file_max_size must be greater than 0")

        return len(errors) == 0, errors

    def get_trim_config(self) -> Dict[str, Any]:
        """Stage configuration dictionary for the trimming stage"""
        return {
            "error_policy": self.trim.error_policy,
            "rejects_path": self.trim.rejects_path,
            "snaplen": self.trim.snaplen,
            "trace_layers": self.logging.trace_layers,
        }


_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """Return the process-wide configuration, loading it on first use"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.load()
    return _app_config


def reload_app_config(config_path: Optional[Union[str, Path]] = None) -> AppConfig:
    global _app_config
    _app_config = AppConfig.load(config_path)
    return _app_config

