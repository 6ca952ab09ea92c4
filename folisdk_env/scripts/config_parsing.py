"""
Configuration loading for the foliSDK environment manager.

Reads a YAML or INI file into a validated ``SdkConfig``. Lookup order is
the explicit path, then ``FOLISDK_CONFIG``, then the per-user config file;
``FOLISDK_ROOT`` and ``FOLISDK_LAYOUT`` override whatever was loaded.
"""
import configparser
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from folisdk_env.core.errors import ConfigError

CONFIG_ENV = "FOLISDK_CONFIG"
ROOT_ENV = "FOLISDK_ROOT"
LAYOUT_ENV = "FOLISDK_LAYOUT"
USER_CONFIG_PATH = Path("~/.config/folisdk/config.yaml")
INI_SECTION = "folisdk"

LAYOUTS = ("split", "unified")
SHELL_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class SdkConfig(BaseModel):
    """Where the SDK lives and how its toolchains are named."""

    install_root: Path = Path("/opt/homebrew/opt")
    layout: str = "split"
    vendor: str = "strata"
    os: str = "folios"
    default_arch: Optional[str] = None
    architectures: List[str] = Field(default_factory=list)
    prompt_var: str = "PS1"

    @field_validator("layout")
    @classmethod
    def _known_layout(cls, value: str) -> str:
        if value not in LAYOUTS:
            raise ValueError(f"layout must be one of {', '.join(LAYOUTS)}, got {value!r}")
        return value

    @field_validator("prompt_var")
    @classmethod
    def _shell_name(cls, value: str) -> str:
        if not SHELL_NAME.fullmatch(value):
            raise ValueError(f"prompt_var must be a shell variable name, got {value!r}")
        return value

    @field_validator("architectures", mode="before")
    @classmethod
    def _split_architectures(cls, value):
        # INI files carry lists as comma separated strings
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("install_root", mode="before")
    @classmethod
    def _expand_root(cls, value):
        return Path(value).expanduser() if value is not None else value


class ConfigParser:
    def __init__(self, config_path):
        self.config_path = str(config_path)

    def parse(self) -> Dict[str, Any]:
        if not Path(self.config_path).is_file():
            raise ConfigError(f"Config file not found: {self.config_path}")
        try:
            if self.config_path.endswith('.yaml') or self.config_path.endswith('.yml'):
                with open(self.config_path, 'r') as f:
                    data = yaml.safe_load(f)
                if data is None:
                    return {}
                if not isinstance(data, dict):
                    raise ConfigError(f"{self.config_path}: top level must be a mapping")
                return data.get(INI_SECTION, data)
            elif self.config_path.endswith('.ini'):
                parser = configparser.ConfigParser()
                parser.read(self.config_path)
                sections = {section: dict(parser.items(section)) for section in parser.sections()}
                return sections.get(INI_SECTION, {})
        except (yaml.YAMLError, configparser.Error) as e:
            raise ConfigError(f"{self.config_path}: {e}") from e
        raise ConfigError(f"Unsupported config format: {self.config_path}")


def find_config_file(explicit: Optional[str] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    environ = os.environ if environ is None else environ
    if explicit:
        return Path(explicit)
    if environ.get(CONFIG_ENV):
        return Path(environ[CONFIG_ENV])
    user_config = USER_CONFIG_PATH.expanduser()
    if user_config.is_file():
        return user_config
    return None


def load_config(path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> SdkConfig:
    """
    Load and validate the SDK configuration.
    Args:
        path (str): Explicit config file; skips the lookup chain.
        environ (Mapping): Environment to read overrides from.
    Returns:
        SdkConfig: Validated configuration.
    """
    environ = os.environ if environ is None else environ
    config_file = find_config_file(path, environ)
    data: Dict[str, Any] = {}
    if config_file is not None:
        data = dict(ConfigParser(config_file).parse())
    if environ.get(ROOT_ENV):
        data["install_root"] = environ[ROOT_ENV]
    if environ.get(LAYOUT_ENV):
        data["layout"] = environ[LAYOUT_ENV]
    try:
        return SdkConfig(**data)
    except ValidationError as e:
        source = config_file or "environment"
        raise ConfigError(f"Invalid configuration ({source}): {e}") from e
