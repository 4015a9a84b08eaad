"""Configuration management for the lookup engine.

Two layers:
- DecomposeOptions: immutable per-call engine options (what the composer reads)
- EngineConfig: user defaults for the option flags, used by the CLI and by
  callers who want file/env driven behavior

EngineConfig resolution order (highest priority first):
1. Programmatic (EngineConfig constructed in code, or configure())
2. Environment variables (LOOKUP_INCLUDE_PRIVATE, etc.)
3. Config file (~/.config/lookup-engine/config.json, managed by `lookup config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Generic, TypeVar

from .core.descriptors import TypeResolver, default_type_resolver
from .core.formatter import Formatter, ReflectionFormatter

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext")


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "lookup-engine"
CONFIG_FILE = CONFIG_DIR / "config.json"

ENV_VARS = {
    "include_root": "LOOKUP_INCLUDE_ROOT",
    "include_static_members": "LOOKUP_INCLUDE_STATIC",
    "include_private_members": "LOOKUP_INCLUDE_PRIVATE",
    "include_unsupported": "LOOKUP_INCLUDE_UNSUPPORTED",
    "enable_redirection": "LOOKUP_ENABLE_REDIRECTION",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def parse_bool(value: str) -> bool:
    """Parse a boolean flag from an env var or CLI string.

    Raises:
        ValueError: If the string is not a recognized boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


# =============================================================================
# Engine options
# =============================================================================


@dataclass(frozen=True)
class DecomposeOptions(Generic[TContext]):
    """Options for one decomposition.

    - include_root: also walk the terminal ``object`` level
    - include_static_members: static methods, class methods and class
      attributes in instance decomposition
    - include_private_members: names starting with an underscore
    - include_unsupported: keep void and parametric methods, valued with
      the exception that explains why they were not called
    - enable_redirection: let descriptors substitute values
    - type_resolver: ``(value, type) -> Descriptor``
    - context: passed to context-aware descriptor capabilities
    - formatter: type and member name formatting
    """

    include_root: bool = False
    include_static_members: bool = False
    include_private_members: bool = False
    include_unsupported: bool = False
    enable_redirection: bool = False
    type_resolver: TypeResolver = default_type_resolver
    context: TContext | None = None
    formatter: Formatter = field(default_factory=ReflectionFormatter)


# =============================================================================
# User config
# =============================================================================


@dataclass
class EngineConfig:
    """Default option flags.

    Examples:
        # Package use, no files needed
        config = EngineConfig(include_private_members=True)
        options = config.to_options(type_resolver=my_resolver)

        # CLI use, loads from ~/.config/lookup-engine/config.json
        config = EngineConfig.load()
    """

    include_root: bool = False
    include_static_members: bool = False
    include_private_members: bool = False
    include_unsupported: bool = False
    enable_redirection: bool = False

    @classmethod
    def load(cls) -> "EngineConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        for key, env_var in ENV_VARS.items():
            if (val := os.environ.get(env_var)) is None:
                continue
            try:
                setattr(config, key, parse_bool(val))
            except ValueError:
                logger.warning("Invalid %s=%r, ignoring", env_var, val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/lookup-engine/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_options(
        self,
        type_resolver: TypeResolver | None = None,
        context: Any = None,
        formatter: Formatter | None = None,
        **overrides: bool,
    ) -> DecomposeOptions:
        """Build engine options from these defaults plus explicit overrides."""
        flags = self.to_dict()
        unknown = set(overrides) - set(flags)
        if unknown:
            raise TypeError(f"Unknown option flags: {', '.join(sorted(unknown))}")
        flags.update(overrides)

        return DecomposeOptions(
            **flags,
            type_resolver=type_resolver or default_type_resolver,
            context=context,
            formatter=formatter or ReflectionFormatter(),
        )


def _apply_dict(config: EngineConfig, data: dict) -> None:
    """Apply known boolean keys from a config file dict."""
    known = {f.name for f in fields(EngineConfig)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Unknown config key %r in %s, ignoring", key, CONFIG_FILE)
            continue
        if isinstance(value, str):
            try:
                value = parse_bool(value)
            except ValueError:
                logger.warning("Invalid value for %r in %s, ignoring", key, CONFIG_FILE)
                continue
        setattr(config, key, bool(value))


# =============================================================================
# Global config
# =============================================================================

_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """Get the global EngineConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    """
    global _config
    if _config is None:
        _config = EngineConfig.load()
    return _config


def configure(config: EngineConfig) -> None:
    """Replace the global config programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
