"""
Config system - layered registry configuration.

Sources, later overriding earlier:
1. JSON / YAML config files
2. .env file (python-dotenv)
3. Environment variables (DEPREG_* prefix, ``__`` nests keys)
4. Manual overrides
"""

from typing import Any, Dict, Optional, get_type_hints
from dataclasses import dataclass, field, fields
from glob import glob
from pathlib import Path
import json
import logging
import os

from dotenv import dotenv_values

from .errors import ConfigError

logger = logging.getLogger("depreg.config")


@dataclass
class RegistryConfig:
    """Typed registry configuration."""
    diagnostics: bool = False
    log_level: str = "DEBUG"
    values: Dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
    """Loads and merges registry configuration from multiple sources."""

    def __init__(self, env_prefix: str = "DEPREG_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "DEPREG_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from multiple sources.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env(os.environ if environ is None else environ)

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        for path_str in sorted(glob(pattern)):
            path = Path(path_str)

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.warning(f"Skipping unsupported config file: {path}")

    def _load_json_file(self, path: Path):
        """Load config from JSON file."""
        with open(path) as f:
            data = json.load(f)
            self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        env_path = Path(path)
        if not env_path.exists():
            logger.debug(f"No .env file at {env_path}")
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self, environ):
        """Load config from environment variables."""
        for key, value in environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert DEPREG_VALUES__DB_URL to {"values": {"db_url": ...}}."""
        key = key[len(self.env_prefix):]

        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def to_config(self) -> RegistryConfig:
        """Build a validated RegistryConfig from the merged data."""
        hints = get_type_hints(RegistryConfig)
        kwargs = {}

        for field_info in fields(RegistryConfig):
            field_name = field_info.name
            if field_name not in self.config_data:
                continue

            value = self.config_data[field_name]
            expected = hints[field_name]
            origin = getattr(expected, "__origin__", None) or expected
            if origin is bool and type(value) is int and value in (0, 1):
                # DEPREG_DIAGNOSTICS=1 parses to an int
                value = bool(value)
            if not isinstance(value, origin):
                raise ConfigError(
                    f"Config field '{field_name}' expected {origin.__name__}, "
                    f"got {type(value).__name__}",
                    field_name,
                )
            kwargs[field_name] = value

        return RegistryConfig(**kwargs)

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()
