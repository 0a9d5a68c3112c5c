"""
Plugin options parsed from the host's configuration mapping.

Hosts hand plugins a flat ``str -> str`` mapping. Only ``vcs_type`` is
required by the branch widget itself; the remaining keys tune polling and
dirty tracking.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

from .loader import ConfigError


DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_POLL_INTERVAL = 3.0

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off"}


def _parse_seconds(configuration: Mapping[str, str], key: str, default: float) -> float:
    raw = configuration.get(key)
    if raw is None:
        return default
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigError(f"'{key}' must be a number, got {raw!r}") from exc
    # nan and inf would break the host's timers
    if not math.isfinite(seconds) or seconds <= 0:
        raise ConfigError(f"'{key}' must be a positive, finite number, got {raw!r}")
    return seconds


def _parse_bool(configuration: Mapping[str, str], key: str, default: bool) -> bool:
    raw = configuration.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"'{key}' must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class PluginOptions:
    """Options controlling the branch widget.

    Attributes
    ----------
    vcs_type : Optional[str]
        Raw backend name; validated by the backend selector.
    initial_delay : float
        Seconds before the first query.
    poll_interval : float
        Seconds between subsequent queries.
    track_dirty : bool
        Whether each poll also checks for uncommitted changes.
    """

    vcs_type: Optional[str] = None
    initial_delay: float = DEFAULT_INITIAL_DELAY
    poll_interval: float = DEFAULT_POLL_INTERVAL
    track_dirty: bool = False

    @classmethod
    def from_configuration(cls, configuration: Mapping[str, str]) -> "PluginOptions":
        """Parse options, raising :class:`ConfigError` on invalid values."""
        return cls(
            vcs_type=configuration.get("vcs_type"),
            initial_delay=_parse_seconds(configuration, "initial_delay", DEFAULT_INITIAL_DELAY),
            poll_interval=_parse_seconds(configuration, "poll_interval", DEFAULT_POLL_INTERVAL),
            track_dirty=_parse_bool(configuration, "track_dirty", False),
        )
