"""Configuration validation for zipmeta."""

from typing import Any, Dict, List

PROVIDER_ROLES = (
    "software_detector",
    "category_provider",
    "boot_file_name_resolver",
    "product_provider",
    "camera_provider",
    "source_provider",
    "build_provider",
    "compiler_provider",
    "encoding_provider",
)


class ConfigValidator:
    """Validates zipmeta configuration."""

    def __init__(self):
        self.error_modes = {"isolate", "raise"}
        self.log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        self.output_formats = {"table", "json"}

    def validate_config(self, config: Dict[str, Any], require_providers: bool = False) -> List[str]:
        """Validate complete configuration.

        Args:
            config: Configuration dictionary
            require_providers: Whether every provider role must be configured

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        errors.extend(self.validate_archive(config.get("archive") or {}))

        mode = (config.get("errors") or {}).get("mode", "isolate")
        if mode not in self.error_modes:
            errors.append(f"'errors.mode' must be one of {sorted(self.error_modes)}, got '{mode}'")

        level = (config.get("logging") or {}).get("level", "INFO")
        if not isinstance(level, str) or level.upper() not in self.log_levels:
            errors.append(f"'logging.level' must be one of {sorted(self.log_levels)}, got '{level}'")

        output_format = (config.get("output") or {}).get("format", "table")
        if output_format not in self.output_formats:
            errors.append(f"'output.format' must be one of {sorted(self.output_formats)}, got '{output_format}'")

        errors.extend(self.validate_providers(config.get("providers") or {}, require_providers))

        return errors

    def validate_archive(self, archive_config: Dict[str, Any]) -> List[str]:
        """Validate the archive section.

        Args:
            archive_config: Archive configuration dictionary

        Returns:
            List of validation error messages
        """
        errors = []

        extension = archive_config.get("nested_extension", ".zip")
        if not isinstance(extension, str) or not extension.startswith(".") or len(extension) < 2:
            errors.append(f"'archive.nested_extension' must look like '.zip', got '{extension}'")

        boot_file_name = archive_config.get("boot_file_name")
        if boot_file_name is not None and (not isinstance(boot_file_name, str) or not boot_file_name.strip()):
            errors.append("'archive.boot_file_name' must be a non-empty string when set")

        return errors

    def validate_providers(self, providers: Dict[str, Any], require_all: bool) -> List[str]:
        """Validate provider references of the form 'module:attribute'."""
        errors = []

        for role in providers:
            if role not in PROVIDER_ROLES:
                errors.append(f"Unknown provider role '{role}'")

        for role in PROVIDER_ROLES:
            reference = providers.get(role)
            if reference is None:
                if require_all:
                    errors.append(f"Missing provider '{role}'")
                continue
            if not isinstance(reference, str) or reference.count(":") != 1 or not all(reference.split(":")):
                errors.append(f"Provider '{role}' must be 'module:attribute', got '{reference}'")

        return errors
