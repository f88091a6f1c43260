"""
Configuration management for the uncommitted changes scanner.

A configuration file is optional. Settings are layered as: built-in
defaults, then the YAML/JSON file (if any), then UNCOMMITTED_* environment
variables, then command-line overrides.
"""

import json
import os
from typing import Any, Dict, Optional

import yaml

from ..models.config import ScannerConfig

CONFIG_ENV_VAR = "UNCOMMITTED_CONFIG"

# Environment variable -> (config key, converter)
ENV_OVERRIDES = {
    "UNCOMMITTED_BOX_WIDTH": ("box_width", int),
    "UNCOMMITTED_COLOR": ("color", str),
    "UNCOMMITTED_GIT": ("git_executable", str),
    "UNCOMMITTED_GIT_TIMEOUT": ("git_timeout", float),
    "UNCOMMITTED_LOG_LEVEL": ("log_level", str),
    "UNCOMMITTED_LOG_DIR": ("log_dir", str),
}


class ConfigurationManager:
    """Loads and validates scanner configuration. Never writes anything."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a configuration file. If None, the
                UNCOMMITTED_CONFIG environment variable is consulted, and
                without it only defaults are used.
        """
        self.config_path = config_path or os.getenv(CONFIG_ENV_VAR) or None

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> ScannerConfig:
        """
        Build the configuration.

        Args:
            overrides: Command-line values; None entries are ignored

        Returns:
            Validated ScannerConfig

        Raises:
            ValueError: If the file or any value is invalid
        """
        raw_config: Dict[str, Any] = {}
        if self.config_path:
            raw_config = self._read_file(self.config_path)

        raw_config = self._expand_env_vars(raw_config)
        raw_config.update(self._env_overrides())

        if overrides:
            raw_config.update({key: value for key, value in overrides.items() if value is not None})

        config = self._parse_config(raw_config)
        config.validate()
        return config

    def _read_file(self, path: str) -> Dict[str, Any]:
        """Read a YAML or JSON configuration file."""
        if not os.path.exists(path):
            raise ValueError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.endswith(".json"):
                    raw_config = json.load(f)
                else:
                    raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading configuration file: {e}")

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ValueError("Configuration file must contain a mapping")
        return raw_config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _env_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for var_name, (key, converter) in ENV_OVERRIDES.items():
            value = os.getenv(var_name)
            if value is None or value == "":
                continue
            try:
                overrides[key] = converter(value)
            except ValueError:
                raise ValueError(f"Invalid value for {var_name}: {value!r}")

        exclude = os.getenv("UNCOMMITTED_EXCLUDE")
        if exclude:
            overrides["exclude_dirs"] = [name for name in exclude.split(os.pathsep) if name]

        return overrides

    def _parse_config(self, raw_config: Dict[str, Any]) -> ScannerConfig:
        """Parse raw configuration dictionary into a ScannerConfig object."""
        known = set(ScannerConfig.__dataclass_fields__)
        unknown = sorted(set(raw_config) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        exclude_dirs = raw_config.get("exclude_dirs") or []
        if isinstance(exclude_dirs, str):
            exclude_dirs = [exclude_dirs]

        defaults = ScannerConfig()
        return ScannerConfig(
            box_width=raw_config.get("box_width", defaults.box_width),
            color=str(raw_config.get("color", defaults.color)).lower(),
            git_executable=raw_config.get("git_executable", defaults.git_executable),
            git_timeout=raw_config.get("git_timeout", defaults.git_timeout),
            exclude_dirs=list(exclude_dirs),
            log_level=str(raw_config.get("log_level", defaults.log_level)).upper(),
            log_dir=raw_config.get("log_dir", defaults.log_dir),
        )
