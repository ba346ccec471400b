from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from pydantic import BaseModel

from src.users_api.runtime.config.config_data import ConfigData
from src.users_api.runtime.config.config_template import load_templated_yaml
from src.users_api.runtime.config.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load the configuration file named by the environment."""
    env = EnvironmentVariables()
    return load_templated_yaml(env.config_file, env.environment)


# Global configuration instance
_default_context = AppContext(config=load_default_config())


# Context variable for application context
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Dump only the fields explicitly set on ``model`` or on its nested models.

    A nested model contributes only its own set fields. It is dumped whole
    only when it was assigned without any field set on it.
    """
    result = {}
    explicitly_set_fields = model.model_fields_set

    for field_name in model.__class__.model_fields:
        field_value = getattr(model, field_name)

        if isinstance(field_value, BaseModel):
            nested = _recursive_model_dump_exclude_unset(field_value)
            if nested:
                result[field_name] = nested
            elif field_name in explicitly_set_fields:
                result[field_name] = field_value.model_dump()
        elif field_name in explicitly_set_fields:
            result[field_name] = field_value

    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries, values from ``override_dict`` winning."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge the explicitly set fields of ``override_config`` into ``base_config``."""
    base_dict = base_config.model_dump()
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    The override is merged into the current configuration, so only the
    fields explicitly set on ``config_override`` change.

    Example:
        override = ConfigData()
        override.users.report_filename = "export.csv"
        with with_context(override):
            assert get_config().users.report_filename == "export.csv"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with the provided one."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration.

    Returns:
        ConfigData: The current configuration from the app context.
    """
    return get_context().config
