"""
Simplified configuration management for zipmeta.
"""
import copy
import importlib.resources as importlib_resources
import os
from typing import Optional

import yaml

LOCAL_CONFIG_FILE = "zipmeta.config.yaml"


class ConfigManager:
    """Simplified configuration manager."""

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    def load_package_default_config(self) -> dict:
        """Load default config from package."""
        import zipmeta.config
        default_config_path = importlib_resources.files(zipmeta.config) / "default.yaml"
        with default_config_path.open("r") as f:
            return yaml.safe_load(f)

    def discover_and_load_config(self, config_arg: Optional[str]) -> dict:
        """Discover config file with simple priority order."""

        # Priority 1: --config argument
        if config_arg and os.path.exists(config_arg):
            user_config = self.load_config(config_arg)
            default_config = self.load_package_default_config()
            return self._merge_configs(default_config, user_config)

        # Priority 2: zipmeta.config.yaml in current directory
        if os.path.exists(LOCAL_CONFIG_FILE):
            user_config = self.load_config(LOCAL_CONFIG_FILE)
            default_config = self.load_package_default_config()
            return self._merge_configs(default_config, user_config)

        # Priority 3: Package default config
        return self.load_package_default_config()

    def merge_config_and_args(self, config: dict, output_json: bool, strict: bool) -> dict:
        """Merge configuration with CLI arguments."""
        if output_json:
            config.setdefault("output", {})["format"] = "json"
        if strict:
            config.setdefault("errors", {})["mode"] = "raise"
        return config

    def _merge_configs(self, default: dict, user: dict) -> dict:
        """Simple config merge."""
        result = copy.deepcopy(default)
        if user is None:
            return result
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result
