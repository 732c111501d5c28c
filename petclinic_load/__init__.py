"""
PetClinic load-test harness (Locust-based).

Replays a fixed set of CRUD operations against the Spring PetClinic
REST API using fixed and random sample data.  Scheduling of virtual
users, arrival rate and run duration is left entirely to Locust; this
package only supplies the iteration body, the sample data, the
response classification and the scenario wiring.

Key Concepts Demonstrated:
- Environment-driven configuration for 12-factor style load runs
- Read-only fixture data shared by every virtual user
- In-band response classification via Locust's ``catch_response``
- Scenario selection mapped onto Locust user classes
"""

from __future__ import annotations

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
