from .config_data import AppConfig, ConfigData, CORSConfig, LoggingConfig, UsersConfig
from .config_template import load_templated_yaml, substitute_env_vars
from .settings import EnvironmentVariables

__all__ = [
    "AppConfig",
    "CORSConfig",
    "ConfigData",
    "EnvironmentVariables",
    "LoggingConfig",
    "UsersConfig",
    "load_templated_yaml",
    "substitute_env_vars",
]
