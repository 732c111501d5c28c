"""
Load-run configuration.

Every knob of a load run is read from an environment variable with a
sensible default, so the same locustfile can be pointed at a local
stack, a CI container or a staging cluster without edits.

Variables:

- ``BASE_URL`` -- root of the PetClinic REST API
- ``DURATION`` -- run length (``600s``, ``10m``, ``1h30m`` ...)
- ``RATE`` -- iterations started per second by the ``rt`` scenario
- ``CLIENTS`` -- concurrent users of the ``rps`` scenario
- ``SCENARIO`` -- optional; run only the named scenario

Key Concepts Demonstrated:
- Environment-variable overrides for 12-factor deployability
- Fail-fast validation before any virtual user is spawned
"""

from __future__ import annotations

import logging
import math
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://petclinic:9966/petclinic"
DEFAULT_DURATION = "600s"
DEFAULT_RATE = "100"
DEFAULT_CLIENTS = "100"

# One term of a duration string, e.g. "1h" or "250ms".
_DURATION_TERM = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")

_UNIT_SECONDS = {
    "h": 3600.0,
    "m": 60.0,
    "s": 1.0,
    "ms": 0.001,
}


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class LoadConfig:
    """
    Resolved settings for a single load run.

    Attributes:
        base_url: API root without a trailing slash.
        duration: Run length in whole seconds.
        rate: Iterations started per ``time_unit`` by the ``rt`` scenario.
        clients: Concurrent users of the ``rps`` scenario.
        scenario: Name of the only scenario to run, or ``None`` for all.
        pre_allocated_users: Users the ``rt`` scenario starts with.
        max_users: Upper bound of users the ``rt`` scenario may use.
        time_unit: Seconds over which ``rate`` iterations are started.
    """

    base_url: str = DEFAULT_BASE_URL
    duration: int = 600
    rate: int = 100
    clients: int = 100
    scenario: str | None = None
    pre_allocated_users: int = 2
    max_users: int = 200
    time_unit: int = 1


def parse_duration(text: str) -> int:
    """
    Convert a duration string into whole seconds.

    Accepts a bare number of seconds (``"90"``) or a sequence of
    ``<number><unit>`` terms using ``h``, ``m``, ``s`` and ``ms``
    (``"1h30m"``, ``"600s"``, ``"1500ms"``).  Fractions of a second are
    rounded up.

    Raises:
        ConfigError: If the string is malformed or amounts to zero.
    """
    value = text.strip().lower()
    if not value:
        raise ConfigError("Duration must not be empty")

    if value.isdigit():
        seconds = float(value)
    else:
        position = 0
        seconds = 0.0
        for match in _DURATION_TERM.finditer(value):
            if match.start() != position:
                break
            seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            position = match.end()
        if position != len(value):
            raise ConfigError(f"Invalid duration: {text!r}")

    if seconds <= 0:
        raise ConfigError(f"Duration must be positive: {text!r}")
    return math.ceil(seconds)


def _positive_int(environ: Mapping[str, str], name: str, default: str) -> int:
    raw = environ.get(name, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> LoadConfig:
    """
    Build a :class:`LoadConfig` from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ``.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If any variable holds an invalid value.
    """
    if environ is None:
        environ = os.environ

    base_url = environ.get("BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/")
    if not base_url:
        raise ConfigError("BASE_URL must not be empty")

    duration_text = environ.get("DURATION", DEFAULT_DURATION)
    try:
        duration = parse_duration(duration_text)
    except ConfigError as exc:
        raise ConfigError(f"DURATION: {exc}") from exc

    scenario = environ.get("SCENARIO", "").strip() or None

    config = LoadConfig(
        base_url=base_url,
        duration=duration,
        rate=_positive_int(environ, "RATE", DEFAULT_RATE),
        clients=_positive_int(environ, "CLIENTS", DEFAULT_CLIENTS),
        scenario=scenario,
    )
    logger.info(
        "Load config: base_url=%s duration=%ss rate=%s clients=%s scenario=%s",
        config.base_url,
        config.duration,
        config.rate,
        config.clients,
        config.scenario or "all",
    )
    return config
