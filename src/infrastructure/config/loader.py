"""Configuration loading and validation."""

import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field, fields

from domain.exceptions import ConfigurationError
from shared.logging import get_logger

logger = get_logger(__name__)

ARCHIVERS = ("auto", "zip", "native")


@dataclass
class RuntimeConfig:
    """Host-level configuration for archive jobs."""

    # Authentication
    secret_token: Optional[str] = None

    # Scratch space
    scratch_base: Path = Path("/tmp")
    local_scratch_name: str = "files"
    cleanup_scratch: bool = False

    # Fan-out limits
    download_concurrency: int = 50
    notification_concurrency: int = 10
    sequential: bool = False

    # Pre-flight header validation
    validate_headers: bool = False
    max_file_bytes: Optional[int] = None
    max_total_bytes: Optional[int] = None

    # Archiving
    archiver: str = "auto"  # 'auto', 'zip', 'native'
    extra_search_paths: List[str] = field(default_factory=list)

    # Transport timeouts (seconds)
    s3_connect_timeout: float = 60.0
    s3_read_timeout: float = 60.0
    notification_timeout: float = 30.0

    # Misc
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.scratch_base = Path(self.scratch_base)
        if self.sequential:
            self.download_concurrency = 1
            self.notification_concurrency = 1
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if self.download_concurrency < 1:
            raise ConfigurationError(
                f"download_concurrency must be >= 1, got: {self.download_concurrency}"
            )

        if self.notification_concurrency < 1:
            raise ConfigurationError(
                f"notification_concurrency must be >= 1, got: {self.notification_concurrency}"
            )

        if self.archiver not in ARCHIVERS:
            raise ConfigurationError(f"Invalid archiver: {self.archiver}")

        for name in ("max_file_bytes", "max_total_bytes"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ConfigurationError(f"{name} must be positive, got: {value}")

        if not self.local_scratch_name or '/' in self.local_scratch_name:
            raise ConfigurationError(f"Invalid local_scratch_name: {self.local_scratch_name!r}")

    def apply_search_paths(self) -> None:
        """Append extra_search_paths to PATH so bundled binaries are found."""
        if not self.extra_search_paths:
            return

        current = os.environ.get("PATH", "")
        parts = current.split(os.pathsep) if current else []
        added = [p for p in self.extra_search_paths if p and p not in parts]
        if added:
            os.environ["PATH"] = os.pathsep.join(parts + added)
            logger.debug(f"Extended PATH with {added}")


class ConfigLoader:
    """Loads and validates configuration from YAML files and environment variables."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config loader.

        Args:
            config_path: Optional path to YAML config file
        """
        self.config_path = config_path or Path("archive_job.yaml")
        self._logger = get_logger(__name__)

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> RuntimeConfig:
        """
        Load configuration from file and environment.

        Environment variables take precedence over the config file, explicit
        overrides take precedence over both.

        Returns:
            RuntimeConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_dict: Dict[str, Any] = {}

        if self.config_path.exists():
            self._logger.info(f"Loading config from {self.config_path}")
            try:
                with open(self.config_path, 'r') as f:
                    yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e
            if not isinstance(yaml_config, dict):
                raise ConfigurationError(f"Config file must contain a mapping: {self.config_path}")
            config_dict.update(yaml_config)
        else:
            self._logger.debug(f"Config file not found: {self.config_path}")

        config_dict.update(self._load_from_env())

        if overrides:
            for k, v in overrides.items():
                if v is None:
                    continue
                config_dict[k] = v

        valid_fields = {f.name for f in fields(RuntimeConfig)}
        unknown = sorted(set(config_dict) - valid_fields)
        if unknown:
            self._logger.warning(f"Ignoring unknown config keys: {unknown}")

        filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}

        try:
            return RuntimeConfig(**filtered_config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        if token := os.getenv("SECRET_TOKEN"):
            env_config["secret_token"] = token

        if scratch := os.getenv("SCRATCH_DIR"):
            env_config["scratch_base"] = Path(scratch)

        if cleanup := os.getenv("CLEANUP_SCRATCH"):
            env_config["cleanup_scratch"] = _as_bool(cleanup)

        for env_name, key in (
            ("DOWNLOAD_CONCURRENCY", "download_concurrency"),
            ("NOTIFICATION_CONCURRENCY", "notification_concurrency"),
            ("MAX_FILE_BYTES", "max_file_bytes"),
            ("MAX_TOTAL_BYTES", "max_total_bytes"),
        ):
            if value := os.getenv(env_name):
                try:
                    env_config[key] = int(value)
                except ValueError:
                    self._logger.warning(f"Invalid {env_name} value: {value}")

        for env_name, key in (
            ("S3_CONNECT_TIMEOUT", "s3_connect_timeout"),
            ("S3_READ_TIMEOUT", "s3_read_timeout"),
            ("NOTIFICATION_TIMEOUT", "notification_timeout"),
        ):
            if value := os.getenv(env_name):
                try:
                    env_config[key] = float(value)
                except ValueError:
                    self._logger.warning(f"Invalid {env_name} value: {value}")

        if sequential := os.getenv("SEQUENTIAL"):
            env_config["sequential"] = _as_bool(sequential)

        if validate := os.getenv("VALIDATE_HEADERS"):
            env_config["validate_headers"] = _as_bool(validate)

        if archiver := os.getenv("ARCHIVER"):
            env_config["archiver"] = archiver.lower()

        # Lambda bundles its binaries (zip) under the task root
        if task_root := os.getenv("LAMBDA_TASK_ROOT"):
            env_config["extra_search_paths"] = [task_root]

        if level := os.getenv("LOG_LEVEL"):
            env_config["log_level"] = level

        return env_config


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")
