"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with REMUTABLE_ prefix
3. YAML config file ($REMUTABLE_CONFIG_FILE, else ./remutable.yaml)
4. Field defaults
"""

import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import remutable.config.sources as sources
import remutable.constants as constants


class Settings(_pydantic_settings.BaseSettings):
    """
    remutable configuration settings.

    All settings can be overridden via environment variables with the
    REMUTABLE_ prefix, e.g. REMUTABLE_STRICT_UNSET=true.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (REMUTABLE_* env vars)
        3. yaml_settings (config file)
        4. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            sources.YamlFileSettingsSource(settings_cls),
        )

    # =========================================================================
    # Engine settings
    # =========================================================================

    path_delimiter: str = _pydantic.Field(
        default=constants.DEFAULT_PATH_DELIMITER,
        min_length=1,
        description="Separator for string paths",
    )

    strict_unset: bool = _pydantic.Field(
        default=False,
        description="Raise when unset's predicate matches nothing",
    )

    # =========================================================================
    # CLI settings
    # =========================================================================

    output_format: _typing.Literal["yaml", "json"] = _pydantic.Field(
        default="yaml",
        description="Document format printed by the CLI",
    )

    verbose: bool = _pydantic.Field(
        default=False,
        description="Enable debug logging in the CLI",
    )
