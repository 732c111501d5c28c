"""
Locust user classes and load shape for the PetClinic workload.

One concrete user class exists per scenario.  Both share the same
iteration body and differ only in how many of them are spawned and how
they pace themselves, which :func:`configure_users` copies from the
selected :mod:`~petclinic_load.scenarios` profiles at startup.

:class:`RunDurationShape` holds the summed user count for the configured
duration and then ends the run, standing in for ``--run-time``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from locust import HttpUser, LoadTestShape, task

from petclinic_load.config import LoadConfig
from petclinic_load.driver import run_iteration
from petclinic_load.scenarios import ARRIVAL_RATE, CONSTANT_USERS, ScenarioProfile

logger = logging.getLogger(__name__)


class PetClinicUser(HttpUser):
    """
    Base user that runs the CRUD iteration as its only task.

    ``abstract = True`` keeps Locust from spawning this class directly.
    """

    abstract = True

    @task
    def crud_iteration(self) -> None:
        """Run one full pass over the PetClinic API."""
        run_iteration(self.client)


class ArrivalRateUser(PetClinicUser):
    """User of the ``rt`` scenario, paced to a share of the target rate."""


class ConstantUsersUser(PetClinicUser):
    """User of the ``rps`` scenario, running iterations back to back."""


SCENARIO_USER_CLASSES: dict[str, type[PetClinicUser]] = {
    ARRIVAL_RATE: ArrivalRateUser,
    CONSTANT_USERS: ConstantUsersUser,
}


def configure_users(
    config: LoadConfig,
    scenarios: Mapping[str, ScenarioProfile],
) -> list[type[PetClinicUser]]:
    """
    Apply host, user count and pacing of each profile to its user class.

    Returns:
        The user classes of the selected scenarios, in scenario order.
    """
    selected = []
    for name, profile in scenarios.items():
        user_class = SCENARIO_USER_CLASSES[name]
        user_class.host = config.base_url
        user_class.fixed_count = profile.user_count
        user_class.wait_time = profile.wait_time()
        logger.info(
            "Scenario %s (%s): %s users of %s, %s",
            name,
            profile.executor,
            profile.user_count,
            user_class.__name__,
            profile.describe(),
        )
        selected.append(user_class)
    return selected


class RunDurationShape(LoadTestShape):
    """
    Keep every selected user running for the configured duration.

    Users are spawned at the slowest spawn rate of the selected profiles.
    For ``rt`` that is one user every ``time_unit / rate`` seconds, which
    staggers the paced users over one pacing period instead of starting
    them all in the same second.
    """

    duration: int = 0
    user_count: int = 0
    spawn_rate: float = 1.0

    @classmethod
    def configure(cls, config: LoadConfig, scenarios: Mapping[str, ScenarioProfile]) -> None:
        cls.duration = config.duration
        cls.user_count = sum(profile.user_count for profile in scenarios.values())
        cls.spawn_rate = min(profile.spawn_rate for profile in scenarios.values())

    def tick(self) -> tuple[int, float] | None:
        if self.get_run_time() >= self.duration:
            return None
        return self.user_count, self.spawn_rate
