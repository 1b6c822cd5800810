"""Configuration loading and management for Complexity Insight.

Two frozen dataclasses carry every knob the engine recognises:

- ``AnalysisSettings`` toggles which syntax-table entries the walker treats
  as branches, plus the maintainability scale. The engine only reads
  ``newmi``; the rest is passed through to the walker untouched.
- ``ProjectOptions`` controls project-level aggregation and the worker pool.

Sources are merged in priority order by ``load_config``:
    1. Defaults (defined on the dataclasses)
    2. Project config (./complexity-insight.toml)
    3. Explicit config file (if given)
    4. Environment variables (COMPLEXITY_* prefix)
    5. Keyword overrides

Example:
    >>> options = load_config(no_core_size=True, newmi=True)
    >>> options.no_core_size
    True
    >>> options.settings.newmi
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .exceptions import ComplexityInsightError, InvalidConfigError

# camelCase spellings accepted from callers that build options as JSON
_OPTION_ALIASES = {
    "skipCalculation": "skip_calculation",
    "noCoreSize": "no_core_size",
}

# Keys that configure the project run rather than a module traversal
_PROJECT_KEYS = frozenset(["skip_calculation", "no_core_size", "workers", *_OPTION_ALIASES])

SETTING_NAMES = ("logicalor", "switchcase", "forin", "trycatch", "newmi")


@dataclass(frozen=True)
class AnalysisSettings:
    """Per-module analysis switches.

    Attributes:
        logicalor: Count ``||`` style short-circuit operators as branches
        switchcase: Count each switch case as a branch
        forin: Count for-in loops as branches
        trycatch: Count catch clauses as branches
        newmi: Rescale the maintainability index to 0-100
        extra: Walker-specific settings, carried through untouched
    """

    logicalor: bool = True
    switchcase: bool = True
    forin: bool = False
    trycatch: bool = False
    newmi: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        for name in SETTING_NAMES:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidConfigError(name, value, "expected a boolean")
        if not isinstance(self.extra, Mapping):
            raise InvalidConfigError("extra", self.extra, "expected a mapping")
        object.__setattr__(self, "extra", dict(self.extra))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a flag or a walker-specific setting by name."""
        if key in SETTING_NAMES:
            return getattr(self, key)
        return self.extra.get(key, default)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "AnalysisSettings":
        """Build settings from a plain mapping.

        The mapping replaces the defaults: a flag it leaves out is off.
        Project option keys are ignored; any other key lands in ``extra``.
        """
        flags = {name: values.get(name, False) for name in SETTING_NAMES}
        extra = {
            key: value
            for key, value in values.items()
            if key not in SETTING_NAMES and key not in _PROJECT_KEYS
        }
        return cls(extra=extra, **flags)

    def to_mapping(self) -> dict[str, Any]:
        """Flags and extras as one flat mapping, the inverse of ``from_mapping``."""
        values = dict(self.extra)
        values.update({name: getattr(self, name) for name in SETTING_NAMES})
        return values


DEFAULT_SETTINGS = AnalysisSettings()


@dataclass(frozen=True)
class ProjectOptions:
    """Project-level aggregation options.

    Attributes:
        skip_calculation: Return the raw module reports without graph or averages
        no_core_size: Skip the visibility matrix, change cost and core size
        workers: Thread pool size for module analysis (None = auto-detect)
        settings: Settings forwarded to every module analysis
    """

    skip_calculation: bool = False
    no_core_size: bool = False
    workers: Optional[int] = None
    settings: AnalysisSettings = field(default_factory=AnalysisSettings)

    def __post_init__(self) -> None:
        for name in ("skip_calculation", "no_core_size"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidConfigError(name, value, "expected a boolean")
        if self.workers is not None:
            if isinstance(self.workers, bool) or not isinstance(self.workers, int):
                raise InvalidConfigError("workers", self.workers, "expected an integer")
            if self.workers < 1:
                raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if not isinstance(self.settings, AnalysisSettings):
            raise InvalidConfigError("settings", self.settings, "expected AnalysisSettings")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ProjectOptions":
        """Build options from a mapping.

        Settings may be nested under ``settings`` or given flat next to the
        project options; flat keys win over nested ones. As with
        ``AnalysisSettings.from_mapping``, the settings found replace the
        defaults, and keys that are not project options reach the walker.
        """
        option_values: dict[str, Any] = {}
        setting_values: dict[str, Any] = {}

        nested = values.get("settings")
        if isinstance(nested, AnalysisSettings):
            setting_values.update(nested.to_mapping())
        elif isinstance(nested, Mapping):
            setting_values.update(nested)
        elif nested is not None:
            raise InvalidConfigError("settings", nested, "expected a mapping")

        for key, value in values.items():
            if key == "settings":
                continue
            key = _OPTION_ALIASES.get(key, key)
            if key in _PROJECT_KEYS:
                option_values[key] = value
            else:
                setting_values[key] = value

        return cls(settings=AnalysisSettings.from_mapping(setting_values), **option_values)


SettingsLike = Union[AnalysisSettings, Mapping[str, Any], None]
OptionsLike = Union[ProjectOptions, Mapping[str, Any], None]


def resolve_settings(settings: SettingsLike) -> AnalysisSettings:
    """Coerce ``settings`` to ``AnalysisSettings``; ``None`` means defaults."""
    if settings is None:
        return DEFAULT_SETTINGS
    if isinstance(settings, AnalysisSettings):
        return settings
    if isinstance(settings, Mapping):
        return AnalysisSettings.from_mapping(settings)
    raise InvalidConfigError("settings", settings, "expected AnalysisSettings or a mapping")


def resolve_options(options: OptionsLike) -> ProjectOptions:
    """Coerce ``options`` to ``ProjectOptions``; ``None`` means defaults."""
    if options is None:
        return ProjectOptions()
    if isinstance(options, ProjectOptions):
        return options
    if isinstance(options, Mapping):
        return ProjectOptions.from_mapping(options)
    raise InvalidConfigError("options", options, "expected ProjectOptions or a mapping")


def load_config(config_file: Optional[Path] = None, **overrides) -> ProjectOptions:
    """Load options with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file path
        **overrides: Direct overrides, project options or setting flags

    Returns:
        Validated ProjectOptions instance

    Raises:
        ComplexityInsightError: If a config file is missing or invalid
    """
    merged: dict[str, Any] = DEFAULT_SETTINGS.to_mapping()

    project_config = Path.cwd() / "complexity-insight.toml"
    if project_config.exists():
        try:
            _merge_toml(merged, _load_toml_file(project_config))
        except ComplexityInsightError:
            raise
        except Exception as e:
            raise ComplexityInsightError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ComplexityInsightError(f"Config file not found: {config_file}")
        try:
            _merge_toml(merged, _load_toml_file(config_file))
        except ComplexityInsightError:
            raise
        except Exception as e:
            raise ComplexityInsightError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())
    merged.update(overrides)

    return ProjectOptions.from_mapping(merged)


def _merge_toml(merged: dict[str, Any], loaded: Mapping[str, Any]) -> None:
    """Flatten a ``[settings]`` table into ``merged`` so later sources override it."""
    for key, value in loaded.items():
        if key == "settings":
            if not isinstance(value, Mapping):
                raise InvalidConfigError("settings", value, "expected a [settings] table")
            merged.update(value)
        else:
            merged[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMPLEXITY_* environment variables.

    Supported environment variables:
        COMPLEXITY_SKIP_CALCULATION: bool (true/false/1/0)
        COMPLEXITY_NO_CORE_SIZE: bool
        COMPLEXITY_WORKERS: int
        COMPLEXITY_LOGICALOR / _SWITCHCASE / _FORIN / _TRYCATCH / _NEWMI: bool

    Returns:
        Dict of field_name -> parsed_value for any COMPLEXITY_* vars found.
    """
    expected: dict[str, type] = {
        "skip_calculation": bool,
        "no_core_size": bool,
        "workers": int,
    }
    expected.update({name: bool for name in SETTING_NAMES})

    result: dict[str, Any] = {}
    for field_name, type_hint in expected.items():
        env_key = f"COMPLEXITY_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[field_name] = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ComplexityInsightError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: type) -> Any:
    """Parse environment variable string to the expected type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    if type_hint is bool:
        lower = value.strip().lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    return type_hint(value)


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)

