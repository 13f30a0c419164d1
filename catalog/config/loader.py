"""Configuration loader for the job catalog."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import CatalogConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_CANDIDATES = (
    Path("catalog.yaml"),
    Path("config") / "catalog.yaml",
)


def load_config(
    config_path: Optional[Path] = None, allow_defaults: bool = False
) -> CatalogConfig:
    """
    Load and validate catalog configuration from a YAML file.

    Implements fallback logic for config file location:
    1. Use provided config_path if given
    2. Try catalog.yaml in current directory
    3. Try ./config/catalog.yaml
    4. Return defaults if allow_defaults is set, otherwise fail

    Args:
        config_path: Optional path to configuration file
        allow_defaults: Return CatalogConfig() when no file is found

    Returns:
        Validated CatalogConfig

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path, allow_defaults=allow_defaults)
    if config_file is None:
        return CatalogConfig()

    config_dict = _read_yaml(config_file)

    # Check for warnings before validation
    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    return parse_config(config_dict, source=config_file)


def parse_config(config_dict: dict, source: Optional[Path] = None) -> CatalogConfig:
    """
    Validate a configuration dictionary.

    Args:
        config_dict: Raw configuration mapping (e.g. parsed YAML)
        source: File the mapping was read from, used in error messages

    Returns:
        Validated CatalogConfig

    Raises:
        ConfigurationError: With one entry per pydantic validation error
    """
    try:
        return CatalogConfig.model_validate(config_dict)
    except ValidationError as e:
        # Convert Pydantic validation errors to ConfigurationError
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_msg = error["msg"]
            error_type = error["type"]

            if error_type == "extra_forbidden":
                errors.append(f"Unknown setting: {field_path}")
            elif error_type in ["float_parsing", "int_parsing", "bool_parsing", "dict_type"]:
                errors.append(
                    f"Invalid type for '{field_path}': {error_msg}, got {error.get('input')!r}"
                )
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error_msg}")
            else:
                errors.append(f"{field_path}: {error_msg}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review catalog.example.yaml for correct format",
                "Thresholds must be between 0 and 1",
                "Verify field types match the expected schema",
            ],
            source=source,
        ) from e


def _read_yaml(config_file: Path) -> dict:
    """Read a YAML file into a dict, translating failures to ConfigurationError."""
    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            source=config_file,
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            source=config_file,
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        ) from e

    # An empty file means "all defaults"
    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping, got {type(config_dict).__name__}",
            suggestions=["Start the file with top-level sections such as 'dedup:'"],
            source=config_file,
        )

    return config_dict


def _find_config_file(
    config_path: Optional[Path] = None, allow_defaults: bool = False
) -> Optional[Path]:
    """
    Find configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file
        allow_defaults: Return None instead of failing when nothing is found

    Returns:
        Path to configuration file, or None when defaults should be used

    Raises:
        ConfigurationError: If no config file is found and defaults are not allowed
    """
    # If explicit path provided, use it
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    if allow_defaults:
        return None

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_CONFIG_CANDIDATES],
        suggestions=[
            "Copy catalog.example.yaml to catalog.yaml",
            "Pass allow_defaults=True to run with built-in defaults",
        ],
    )


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file.

    Useful for testing or pre-deployment validation.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        config_file = Path(config_path)
        parse_config(_read_yaml(config_file), source=config_file)
        print(f"✓ Configuration file {config_path} is valid")
        return True

    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
