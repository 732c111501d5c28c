# ruff: noqa: E402
"""
Locust entrypoint for the PetClinic load test.

This is the file the ``locust`` CLI discovers and loads.  Configuration
is read from the environment at import, so a bad ``DURATION`` or an
unknown ``SCENARIO`` aborts before a single user is spawned.

Usage examples::

    # Both scenarios against the default host for 10 minutes:
    locust -f locustfile.py --headless

    # Only the constant-arrival-rate scenario, 2 minutes, 50 it/s:
    SCENARIO=rt RATE=50 DURATION=2m locust -f locustfile.py --headless

    # Only the constant-concurrency scenario against a local stack:
    SCENARIO=rps CLIENTS=20 BASE_URL=http://localhost:9966/petclinic \\
        locust -f locustfile.py --headless --csv results/petclinic
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from locust import events

# Locust may be launched from any directory; make the package importable.
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from petclinic_load.checks import CHECKS
from petclinic_load.config import load_config
from petclinic_load.scenarios import select_scenarios
from petclinic_load.users import (
    ArrivalRateUser,
    ConstantUsersUser,
    RunDurationShape,
    configure_users,
)

logger = logging.getLogger("petclinic_load.locustfile")

__all__ = ["ArrivalRateUser", "ConstantUsersUser", "RunDurationShape"]

CONFIG = load_config()
SCENARIOS = select_scenarios(CONFIG)
SELECTED_USER_CLASSES = configure_users(CONFIG, SCENARIOS)
RunDurationShape.configure(CONFIG, SCENARIOS)


@events.init.add_listener
def _select_scenario_user_classes(environment, **_kwargs):
    """
    Spawn only the user classes of the selected scenarios.

    Locust collects every concrete user class of the locustfile; when
    ``SCENARIO`` names a single scenario the other class must not run.
    """
    environment.user_classes = list(SELECTED_USER_CLASSES)
    if not environment.host:
        environment.host = CONFIG.base_url


@events.test_start.add_listener
def _reset_checks(environment, **_kwargs):
    CHECKS.reset()


@events.test_stop.add_listener
def _log_check_summary(environment, **_kwargs):
    logger.info("Check summary\n%s", CHECKS.format())
