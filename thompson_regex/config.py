# thompson_regex/config.py

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Width of the machine word used as a state set by the reference design.
DEFAULT_MAX_STATES = 64
DEFAULT_CACHE_SIZE = 256

ENV_MAX_STATES = "THOMPSON_REGEX_MAX_STATES"
ENV_ENABLE_CACHING = "THOMPSON_REGEX_ENABLE_CACHING"
ENV_CACHE_SIZE = "THOMPSON_REGEX_CACHE_SIZE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class LimitsConfig:
    """Hard limits applied while building automata"""
    max_states: int = DEFAULT_MAX_STATES

    def __post_init__(self):
        if self.max_states < 1:
            raise ValueError(f"max_states must be at least 1, got {self.max_states}")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "LimitsConfig":
        """Read only the state limit, ignoring the caching variables."""
        environ = os.environ if environ is None else environ
        return cls(max_states=_parse_int(environ, ENV_MAX_STATES, DEFAULT_MAX_STATES))


@dataclass
class PerformanceConfig:
    """Configuration for compilation caching"""
    enable_caching: bool = True
    cache_size_limit: int = DEFAULT_CACHE_SIZE

    def __post_init__(self):
        if self.cache_size_limit < 1:
            raise ValueError(f"cache_size_limit must be at least 1, got {self.cache_size_limit}")


@dataclass
class RegexConfig:
    """Top-level configuration for the regex engine"""
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    custom_settings: Dict[str, Any] = field(default_factory=dict)

    def get_setting(self, key: str, default=None):
        return self.custom_settings.get(key, default)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "RegexConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Returns:
            RegexConfig populated from the environment, defaults elsewhere

        Raises:
            ValueError: If a variable holds a value that cannot be parsed
        """
        environ = os.environ if environ is None else environ

        limits = LimitsConfig.from_env(environ)
        performance = PerformanceConfig(
            enable_caching=_parse_bool(environ, ENV_ENABLE_CACHING, True),
            cache_size_limit=_parse_int(environ, ENV_CACHE_SIZE, DEFAULT_CACHE_SIZE),
        )
        return cls(limits=limits, performance=performance)


def _parse_int(environ: Dict[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _parse_bool(environ: Dict[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
