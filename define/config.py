"""
Application configuration.

Values come from four layers, highest priority first:

1. Command-line flags
2. A JSON config file, if one is given or found
3. Environment variables (a ``.env`` file in the working directory is loaded first)
4. Built-in defaults

Layers are merged field by field: a field that is unset in one layer is
filled from the next one down.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from define.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME = "define"

DEFAULT_INDENT_SIZE = 2
DEFAULT_PREFERRED_SOURCE = "FreeDictionaryAPI"

CONFIG_FILE_NAME = "config.json"
LEGACY_CONFIG_FILE_PATH = "~/.define.conf.json"

ENV_INDENT_SIZE = "DEFINE_APP_INDENT_SIZE"
ENV_PREFERRED_SOURCE = "DEFINE_APP_PREFERRED_SOURCE"
ENV_OXFORD_APP_ID = "OXFORD_DICTIONARY_APP_ID"
ENV_OXFORD_APP_KEY = "OXFORD_DICTIONARY_APP_KEY"
ENV_MERRIAM_WEBSTER_APP_KEY = "MERRIAM_WEBSTER_DICTIONARY_APP_KEY"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OxfordDictionaryConfig(ConfigModel):
    app_id: str = Field("", alias="AppID")
    app_key: str = Field("", alias="AppKey")


class MerriamWebsterDictionaryConfig(ConfigModel):
    app_key: str = Field("", alias="AppKey")


class Configuration(ConfigModel):
    """Configuration for a run of the application.

    Unset values are None or empty, so that layers can be merged.
    """

    config_file_location: str = Field("", alias="ConfigFileLocation")
    indent_size: Optional[int] = Field(None, alias="IndentationSize", ge=0)
    preferred_source: str = Field("", alias="PreferredSource")

    oxford_dictionary: OxfordDictionaryConfig = Field(
        default_factory=OxfordDictionaryConfig, alias="OxfordDictionary"
    )
    merriam_webster_dictionary: MerriamWebsterDictionaryConfig = Field(
        default_factory=MerriamWebsterDictionaryConfig, alias="MerriamWebsterDictionary"
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=4)


class ConfigurationLayers(BaseModel):
    """The configuration values of each layer, before and after merging."""

    command_line: Configuration = Field(default_factory=Configuration)
    file: Configuration = Field(default_factory=Configuration)
    environment: Configuration = Field(default_factory=Configuration)
    defaults: Configuration = Field(default_factory=Configuration)

    def merged(self) -> Configuration:
        return merge_configurations(self.command_line, self.file, self.environment, self.defaults)

    def to_debug_dict(self) -> Dict[str, Any]:
        return {
            "CommandLine": self.command_line.model_dump(by_alias=True),
            "File": self.file.model_dump(by_alias=True),
            "Environment": self.environment.model_dump(by_alias=True),
            "Defaults": self.defaults.model_dump(by_alias=True),
            "Merged": self.merged().model_dump(by_alias=True),
        }


def default_configuration() -> Configuration:
    return Configuration(indent_size=DEFAULT_INDENT_SIZE, preferred_source=DEFAULT_PREFERRED_SOURCE)


def merge_configurations(*layers: Configuration) -> Configuration:
    """Merge configurations, earlier layers taking priority over later ones."""
    return _merge_models(Configuration, list(layers))


def _merge_models(model_class: Type[ModelT], layers: List[BaseModel]) -> ModelT:
    values: Dict[str, Any] = {}

    for name, field in model_class.model_fields.items():
        layer_values = [getattr(layer, name) for layer in layers]

        if isinstance(field.annotation, type) and issubclass(field.annotation, BaseModel):
            values[name] = _merge_models(field.annotation, layer_values)
            continue

        for value in layer_values:
            if value is not None and value != "":
                values[name] = value
                break

    return model_class.model_validate(values)


def config_file_candidates(environ: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Known config file locations, in search order.

    The XDG config home comes first, then the XDG config dirs, then the
    legacy dotfile in the home directory.
    """
    environ = os.environ if environ is None else environ
    relative_path = Path(APP_NAME) / CONFIG_FILE_NAME

    config_home = environ.get("XDG_CONFIG_HOME") or str(Path("~/.config").expanduser())
    config_dirs = (environ.get("XDG_CONFIG_DIRS") or "/etc/xdg").split(os.pathsep)

    candidates = [Path(config_home) / relative_path]
    candidates.extend(Path(config_dir) / relative_path for config_dir in config_dirs if config_dir)
    candidates.append(Path(LEGACY_CONFIG_FILE_PATH).expanduser())
    return candidates


def find_config_file(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the path of the first existing config file, or ""."""
    for candidate in config_file_candidates(environ):
        if candidate.is_file():
            return str(candidate)
    return ""


def load_file_config(location: str) -> Configuration:
    """Read a JSON config file.

    Raises:
        ConfigurationError: If the file can't be read or isn't valid config
    """
    path = Path(location).expanduser()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        config = Configuration.model_validate(data)
    except (OSError, ValueError) as exc:
        # ValidationError is a ValueError too
        raise ConfigurationError(f"error reading config file {str(path)!r}: {exc}") from exc

    config.config_file_location = str(path)
    return config


def load_environment_config(environ: Optional[Mapping[str, str]] = None) -> Configuration:
    environ = os.environ if environ is None else environ

    config = Configuration(
        preferred_source=environ.get(ENV_PREFERRED_SOURCE, ""),
        oxford_dictionary=OxfordDictionaryConfig(
            app_id=environ.get(ENV_OXFORD_APP_ID, ""),
            app_key=environ.get(ENV_OXFORD_APP_KEY, ""),
        ),
        merriam_webster_dictionary=MerriamWebsterDictionaryConfig(
            app_key=environ.get(ENV_MERRIAM_WEBSTER_APP_KEY, ""),
        ),
    )

    raw_indent_size = environ.get(ENV_INDENT_SIZE, "")
    if raw_indent_size:
        try:
            config.indent_size = Configuration(indent_size=int(raw_indent_size)).indent_size
        except (ValueError, ValidationError):
            logger.warning("Ignoring invalid %s value %r", ENV_INDENT_SIZE, raw_indent_size)

    return config


def load_configuration(
    command_line: Optional[Configuration] = None,
    environ: Optional[Mapping[str, str]] = None,
    load_env_file: bool = True,
) -> ConfigurationLayers:
    """Load every configuration layer.

    Args:
        command_line: Values given as flags
        environ: Environment to read; defaults to ``os.environ``
        load_env_file: Whether to load a ``.env`` file into ``os.environ`` first

    Returns:
        The layers, ready to be merged

    Raises:
        ConfigurationError: If a config file exists but can't be loaded
    """
    if load_env_file and environ is None:
        load_dotenv()

    command_line = command_line or Configuration()

    location = command_line.config_file_location or find_config_file(environ)
    file_config = Configuration()
    if location:
        logger.debug("Loading config file %s", location)
        file_config = load_file_config(location)

    return ConfigurationLayers(
        command_line=command_line,
        file=file_config,
        environment=load_environment_config(environ),
        defaults=default_configuration(),
    )
