"""Configuration for quell.

Settings come from TOML files named ``quell.toml``. Every section is
optional:

    [general]
    default_plugin = "json"     # skip auto-detection

    [output]
    color = true
    format = "text"             # text, json or count

    [directives]
    report_unused = false       # same as --report-unused-directives

Several files may apply at once; see ConfigLoader.discover_configs for the
order in which they are layered.
"""

import os
from pathlib import Path
from typing import Any, Optional

import tomli
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from quell.utils.git import find_git_root
from quell.utils.validation import summarize_validation_error

CONFIG_FILENAME = "quell.toml"

VALID_FORMATS = frozenset({"text", "json", "count"})


class ConfigError(Exception):
    """Exception raised for unreadable or invalid configuration.

    Attributes:
        line: Line of a TOML syntax error (if available)
        path: Config file the error came from (if available)
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        path: Optional[Path] = None
    ):
        self.line = line
        self.path = path

        location = []
        if path:
            location.append(f"Error in {path}")
        if line is not None:
            location.append(f"at line {line}")
        super().__init__(f"{' '.join(location)}: {message}" if location else message)


class _Section(BaseModel):
    """Base for config sections: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class GeneralConfig(_Section):
    """[general] settings."""

    default_plugin: Optional[str] = None


class OutputConfig(_Section):
    """[output] settings.

    ``format`` is matched case-insensitively, like the --format option.
    """

    color: StrictBool = True
    format: str = "text"

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.lower()
        if value not in VALID_FORMATS:
            raise ValueError(
                f"Invalid output format '{value}'. "
                f"Must be one of: {', '.join(sorted(VALID_FORMATS))}"
            )
        return value


class DirectivesConfig(_Section):
    """[directives] settings.

    Attributes:
        report_unused: Report disable directives that suppressed nothing.
    """

    report_unused: StrictBool = False


class Config(_Section):
    """Complete quell configuration, one attribute per TOML section."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    directives: DirectivesConfig = Field(default_factory=DirectivesConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Validate a parsed TOML document.

        Raises:
            ConfigError: If a section or value has the wrong type or is out
                of range. The message names the offending key.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(summarize_validation_error(e)) from e


class ConfigLoader:
    """Reads, layers and validates quell.toml files.

    Example usage:
        loader = ConfigLoader()
        config = loader.load(Path("quell.toml"))

        # Or layer every discovered file over the defaults
        config = loader.load_merged()
    """

    def load(self, path: Optional[Path]) -> Config:
        """Load a single config file.

        Args:
            path: TOML file to read, or None for the defaults

        Raises:
            ConfigError: If the file is not valid TOML or holds invalid values
            FileNotFoundError: If path is given but does not exist
        """
        if path is None:
            return Config()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return self._validate(self._read(path), path)

    def load_merged(self, start_path: Optional[Path] = None) -> Config:
        """Layer every discovered config file, then validate the result.

        A key set in a later file replaces the same key from an earlier one;
        keys a file leaves out keep their earlier value or default.

        Raises:
            ConfigError: If a file is not valid TOML or the merged values are
                invalid. For a single discovered file the error names it.
        """
        paths = self.discover_configs(start_path)
        merged: dict = {}
        for path in paths:
            merged = self._deep_merge(merged, self._read(path))
        return self._validate(merged, paths[0] if len(paths) == 1 else None)

    def discover_configs(self, start_path: Optional[Path] = None) -> list[Path]:
        """Find the config files that apply, lowest precedence first.

        Checked in order:
        1. ~/.config/quell/config.toml
        2. quell.toml at the git root
        3. quell.toml in start_path (default: the current directory)

        A file found by more than one rule is listed once. Command line
        options override all of them and are applied by the caller.
        """
        start = Path.cwd() if start_path is None else Path(start_path).resolve()
        git_root = find_git_root(start)

        candidates = [Path(os.path.expanduser("~")) / ".config" / "quell" / "config.toml"]
        if git_root:
            candidates.append(git_root / CONFIG_FILENAME)
        candidates.append(start / CONFIG_FILENAME)

        found: list[Path] = []
        seen: set[Path] = set()
        for candidate in candidates:
            if candidate.exists() and candidate.resolve() not in seen:
                seen.add(candidate.resolve())
                found.append(candidate)
        return found

    def _read(self, path: Path) -> dict:
        try:
            return tomli.loads(path.read_text(encoding="utf-8"))
        except tomli.TOMLDecodeError as e:
            raise ConfigError(e.msg, line=e.lineno, path=path) from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"Invalid UTF-8: {e.reason}", path=path) from e

    def _validate(self, data: dict, path: Optional[Path]) -> Config:
        try:
            return Config.from_dict(data)
        except ConfigError as e:
            raise ConfigError(str(e), path=path) from e

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Return base updated by override, merging nested tables key by key."""
        result = dict(base)
        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
