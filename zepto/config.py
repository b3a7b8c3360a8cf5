"""Editor configuration: defaults, TOML parsing and loading from disk."""

import sys
import tomllib
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

APP_NAME = "zepto"
CONFIG_FILE_NAME = "config.toml"
_U16_MAX = 0xFFFF


class ConfigError(ValueError):
    """Raised when configuration data is malformed or has wrong types."""


@dataclass
class Frame:
    corner: str = "plain"
    margin: int = 0
    color: str = "#0000FF"
    hide: bool = False


@dataclass
class LineNumbers:
    enabled: bool = True
    color: str = "#808080"
    gutter_width: int = 5
    show_separator_line: bool = False


@dataclass
class StatusPanel:
    enabled: bool = True
    background_color: str = "#0000FF"
    foreground_color: str = "#FFFFFF"


@dataclass
class PromptPanel:
    enabled: bool = True
    background_color: str = "#808080"
    foreground_color: str = "#FFFFFF"


@dataclass
class MainSection:
    background_color: str = "#000000"
    frame: Frame = field(default_factory=Frame)
    line_numbers: LineNumbers = field(default_factory=LineNumbers)
    status_panel: StatusPanel = field(default_factory=StatusPanel)
    prompt_panel: PromptPanel = field(default_factory=PromptPanel)


@dataclass
class EditorBehavior:
    vim: bool = False


@dataclass
class Config:
    main_section: MainSection = field(default_factory=MainSection)
    editor_behavior: EditorBehavior = field(default_factory=EditorBehavior)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Build a configuration from nested mappings; missing keys take defaults."""
        return _build(cls, data, "")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())


def _join(where: str, name: str) -> str:
    return f"{where}.{name}" if where else name


def _build(cls: type, data: Any, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{where or 'config'}: expected a table")
    values = {}
    for f in fields(cls):
        if f.name in data:
            values[f.name] = _coerce(f.type, data[f.name], _join(where, f.name))
    return cls(**values)


def _coerce(kind: Any, value: Any, where: str) -> Any:
    if is_dataclass(kind):
        return _build(kind, value, where)
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"{where}: expected a boolean")
        return value
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U16_MAX:
            raise ConfigError(f"{where}: expected an integer between 0 and {_U16_MAX}")
        return value
    if kind is str:
        if not isinstance(value, str):
            raise ConfigError(f"{where}: expected a string")
        return value
    raise ConfigError(f"{where}: unsupported setting type")


def parse_config(text: str) -> Config:
    """Parse TOML text into a Config, raising ConfigError on any problem."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(str(exc)) from exc
    return Config.from_dict(data)


def default_config_path() -> Path:
    return Path(platformdirs.user_config_dir()) / APP_NAME / CONFIG_FILE_NAME


def _write_default(config_path: Path) -> None:
    directory = config_path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"Error creating config directory {directory}: {exc}", file=sys.stderr)
        return
    try:
        config_path.write_text(Config().to_toml(), encoding="utf-8")
    except OSError as exc:
        print(f"Error writing default config to {config_path}: {exc}", file=sys.stderr)
        return
    print(f"Created default config file at {config_path}")


def load_config(path: str | Path | None = None) -> Config:
    """Load the configuration file, falling back to defaults on any failure.

    If the file cannot be read, a default configuration file is written in its place.
    """
    config_path = Path(path) if path is not None else default_config_path()
    print(f"Attempting to load config from: {config_path}")
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(
            f"Could not read config file at {config_path}: {exc}. Using default configuration.",
            file=sys.stderr,
        )
        _write_default(config_path)
        return Config()
    try:
        return parse_config(text)
    except ConfigError as exc:
        print(f"Error parsing config.toml: {exc}. Using default configuration.", file=sys.stderr)
        return Config()