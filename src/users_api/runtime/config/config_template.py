"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.users_api.runtime.config.config_data import ConfigData


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    def replacer(match):
        var_expr = match.group(1)

        # ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        # ${VAR:?message}
        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        # ${VAR}
        else:
            var_name = var_expr
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name} not set")
            return value

    pattern = r'\$\{([^}]+)\}'
    return re.sub(pattern, replacer, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Expose ``<ENV>_FOO`` variables as ``FOO`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    env_variables = [
        (var, value) for var, value in os.environ.items() if var.startswith(prefix)
    ]
    if env_variables:
        logger.info(
            "Applying environment-specific overrides: {}",
            [name for name, _ in env_variables],
        )

    for var_name, var_value in env_variables:
        new_var_name = var_name[len(prefix):]
        os.environ[new_var_name] = var_value
        logger.debug("Set environment variable {} from {}", new_var_name, var_name)


def parse_templated_yaml(content: str) -> ConfigData:
    """Substitute environment variables in YAML text and validate it as ConfigData."""
    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        # Settings live under the top-level 'config' key
        config_data = loaded.get("config") or {}
        return ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_templated_yaml(file_path: Path, env_mode: str = "development") -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_mode: Active environment, used for prefixed overrides

    Returns:
        Parsed configuration, or the defaults if the file does not exist

    Raises:
        ValueError: If required environment variables are missing or the
            file does not describe a valid configuration
    """
    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return ConfigData()

    logger.info("Loading configuration for environment: {}", env_mode)
    apply_environment_overrides(env_mode)

    with open(file_path) as f:
        content = f.read()

    return parse_templated_yaml(content)
