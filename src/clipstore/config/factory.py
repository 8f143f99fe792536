# region Docstring
"""
clipstore.config.factory
Factory module for creating and managing settings with multi-source configuration support.
Overview:
- Provides a custom Pydantic BaseSettings subclass that supports hierarchical configuration
    loading from multiple sources including YAML files, environment variables, and .env files.
- Implements a cached factory function for efficient settings instantiation.
Contents:
- Constants:
    - T: TypeVar bound to BaseSettings for generic typing support in the factory function.
- Classes:
    - FactoryBaseSettings:
        Custom BaseSettings subclass that extends Pydantic's configuration capabilities to support
        YAML configuration files alongside standard environment variable loading.
        Configuration Priority (highest to lowest):
            1. Init kwargs
            2. Environment variables
            3. .env file values
            4. YAML files (environment-specific config.{env}.yaml)
            5. YAML files (default config.yaml)
            6. Field defaults
- Functions:
    - get_settings(settings_cls: Type[T]) -> T:
        LRU-cached factory function that instantiates and returns settings objects.
Design notes:
- Init kwargs win so that a store can be pointed at an explicit directory regardless of
    what the surrounding environment declares.
- The decode_complex_value method provides fault-tolerant parsing of complex values, returning
    raw strings when JSON decoding fails rather than raising exceptions.
"""

# region Imports
import json
from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .base import APP_ENV, APP_ROOT

# endregion
# region FactoryBaseSettings Class
T = TypeVar("T", bound=BaseSettings)


class FactoryBaseSettings(BaseSettings):
    """
    Custom BaseSettings that supports YAML and Env Vars.
    Priority: Init > Env Vars > .env > YAML (Env specific) > YAML (Default) > Defaults
    """

    model_config = SettingsConfigDict(
        env_file=APP_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:

        # Later files override earlier ones
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=[APP_ROOT / "config.yaml", APP_ROOT / f"config.{APP_ENV}.yaml"],
        )
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
        )

    def decode_complex_value(
        self, field_name: str, field: FieldInfo, value: Any
    ) -> Any:
        """
        Return the raw string when a complex value in the environment is not valid JSON.
        """
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return value


# endregion
# region get_settings Factory Function


@lru_cache
def get_settings(settings_cls: Type[T]) -> T:
    """
    Factory function to load any settings class.
    Results are cached so we don't re-read files every time.
    """
    return settings_cls()


# endregion
