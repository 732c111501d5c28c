"""
Execution profiles of a load run.

Two profiles are available:

- ``rt`` -- constant arrival rate: ``rate`` iterations are started every
  ``time_unit`` seconds for the whole run, whatever each one takes.
- ``rps`` -- constant concurrency: ``clients`` users run iterations back
  to back for the whole run.

``SCENARIO`` narrows a run to one of them; without it both run side by
side.  Pacing and admission are Locust's job: a profile only says how
many users to spawn and how each user should wait between iterations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from locust import constant, constant_throughput

from petclinic_load.config import ConfigError, LoadConfig

logger = logging.getLogger(__name__)

ARRIVAL_RATE = "rt"
CONSTANT_USERS = "rps"


@dataclass(frozen=True)
class ArrivalRateProfile:
    """Start a fixed number of iterations per time unit."""

    name: str
    duration: int
    rate: int
    time_unit: int
    pre_allocated_users: int
    max_users: int
    executor: str = "constant-arrival-rate"

    @property
    def user_count(self) -> int:
        return self.max_users

    @property
    def iterations_per_user(self) -> float:
        """Iterations per second each user must start to reach ``rate``."""
        return self.rate / self.time_unit / self.max_users

    @property
    def spawn_rate(self) -> float:
        """
        Users started per second.

        Starting one user every ``time_unit / rate`` seconds puts the
        users out of phase across one pacing period, so iteration starts
        arrive at ``rate`` per ``time_unit`` from the first second on.
        """
        return self.rate / self.time_unit

    def describe(self) -> str:
        return (
            f"{self.rate} iterations per {self.time_unit}s, "
            f"{self.pre_allocated_users} pre-allocated, {self.max_users} max users"
        )

    def wait_time(self) -> Callable[[Any], float]:
        return constant_throughput(self.iterations_per_user)


@dataclass(frozen=True)
class ConstantUsersProfile:
    """Keep a fixed number of users busy for the whole run."""

    name: str
    duration: int
    users: int
    executor: str = "constant-vus"

    @property
    def user_count(self) -> int:
        return self.users

    @property
    def spawn_rate(self) -> float:
        return float(self.users)

    def describe(self) -> str:
        return f"{self.users} users back to back"

    def wait_time(self) -> Callable[[Any], float]:
        return constant(0)


ScenarioProfile = ArrivalRateProfile | ConstantUsersProfile


def build_scenarios(config: LoadConfig) -> dict[str, ScenarioProfile]:
    """Return every known profile keyed by scenario name."""
    return {
        ARRIVAL_RATE: ArrivalRateProfile(
            name=ARRIVAL_RATE,
            duration=config.duration,
            rate=config.rate,
            time_unit=config.time_unit,
            pre_allocated_users=config.pre_allocated_users,
            max_users=config.max_users,
        ),
        CONSTANT_USERS: ConstantUsersProfile(
            name=CONSTANT_USERS,
            duration=config.duration,
            users=config.clients,
        ),
    }


def select_scenarios(config: LoadConfig) -> dict[str, ScenarioProfile]:
    """
    Return the profiles this run should execute.

    Raises:
        ConfigError: If ``config.scenario`` names an unknown scenario.
    """
    scenarios = build_scenarios(config)
    if config.scenario is None:
        selected = scenarios
    elif config.scenario in scenarios:
        selected = {config.scenario: scenarios[config.scenario]}
    else:
        known = ", ".join(sorted(scenarios))
        raise ConfigError(f"Unknown SCENARIO {config.scenario!r}; expected one of: {known}")

    logger.info("Selected scenarios: %s", ", ".join(selected))
    return selected
