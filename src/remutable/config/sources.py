"""Custom pydantic-settings source for remutable configuration.

YamlFileSettingsSource loads a single YAML file:

- $REMUTABLE_CONFIG_FILE, if set (the file must exist)
- otherwise remutable.yaml in the current directory, if present

Environment variables and constructor arguments take precedence over the
file; those are handled by pydantic-settings itself.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import remutable.constants as constants


class ConfigFileError(Exception):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def get_config_path() -> tuple[_pathlib.Path, bool]:
    """
    Locate the config file.

    Returns:
        Tuple of (path, explicit). explicit is True when the path came from
        REMUTABLE_CONFIG_FILE, in which case a missing file is an error.
    """
    env_path = _os.environ.get(constants.ENV_CONFIG_FILE)
    if env_path:
        return _pathlib.Path(env_path).expanduser(), True
    return _pathlib.Path.cwd() / constants.DEFAULT_CONFIG_FILENAME, False


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any]:
    """
    Load a YAML file and return its top-level mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed contents, or an empty dict if the file is empty.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed YAML,
            or its top level is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise ConfigFileError(
            path,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


class YamlFileSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that reads field values from a YAML config file.

    Example:
        # remutable.yaml
        path_delimiter: "/"
        strict_unset: true
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize and load the config file.

        Args:
            settings_cls: The Settings class being populated.
            path: Explicit file to load. If None, the file is located with
                get_config_path().

        Raises:
            ConfigFileError: If the file is unreadable or malformed, or an
                explicitly named file does not exist.
        """
        super().__init__(settings_cls)
        explicit = path is not None
        if path is None:
            path, explicit = get_config_path()
        self._path = path
        self._loaded = False
        self._data: dict[str, _typing.Any] = {}

        if path.is_file():
            self._data = load_yaml_file(path)
            self._loaded = True
        elif explicit:
            raise ConfigFileError(path, "file not found")

    @property
    def path(self) -> _pathlib.Path:
        """The config file this source looked for."""
        return self._path

    @property
    def loaded(self) -> bool:
        """Whether the config file was found and read."""
        return self._loaded

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the loaded file.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return the file's known fields for Pydantic validation."""
        return {
            name: value
            for name, value in self._data.items()
            if name in self.settings_cls.model_fields
        }
