"""
Shared pytest fixtures for the PetClinic load-test suite.

The harness talks to Locust through two narrow surfaces: an
``HttpSession``-like client with ``base_url`` and ``request``, and the
``ResponseContextManager`` that ``catch_response=True`` hands back.
The fakes below satisfy those surfaces so the iteration driver and the
classifier can be exercised without Locust's runtime or a network.

Key SDET Concepts Demonstrated:
- Lightweight stub objects that satisfy an interface contract
- Factory fixtures for configurable fakes
- Fresh, per-test state (check tallies) for isolation
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pytest

from petclinic_load.checks import CHECKS, CheckTally

FAKE_BASE_URL = "http://petclinic.test/petclinic"


class FakeResponse:
    """Minimal stand-in for Locust's ``ResponseContextManager``."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        self.outcome: str | None = None
        self.failure_message: str | None = None

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *_exc: Any) -> bool:
        return False

    def success(self) -> None:
        self.outcome = "success"

    def failure(self, message: str) -> None:
        self.outcome = "failure"
        self.failure_message = message


class FakeClient:
    """
    Records every request and answers with scripted status codes.

    Statuses are consumed in order; once exhausted, ``default_status``
    is used for the remaining requests.
    """

    def __init__(
        self,
        statuses: Iterable[int] = (),
        default_status: int = 200,
        base_url: str = FAKE_BASE_URL,
    ):
        self.base_url = base_url
        self.calls: list[dict[str, Any]] = []
        self.responses: list[FakeResponse] = []
        self._statuses = list(statuses)
        self._default_status = default_status

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        status = self._statuses.pop(0) if self._statuses else self._default_status
        response = FakeResponse(status)
        self.responses.append(response)
        return response


@pytest.fixture
def fake_client_factory():
    """
    Factory fixture for :class:`FakeClient` instances.

    Example:
        def test_something(fake_client_factory):
            client = fake_client_factory(statuses=[404])
    """

    def _create(statuses: Iterable[int] = (), default_status: int = 200) -> FakeClient:
        return FakeClient(statuses=statuses, default_status=default_status)

    return _create


@pytest.fixture
def fake_client(fake_client_factory) -> FakeClient:
    """A client that answers 200 to everything."""
    return fake_client_factory()


@pytest.fixture
def response_factory():
    """Factory fixture for :class:`FakeResponse` with a given status."""
    return FakeResponse


@pytest.fixture
def checks() -> CheckTally:
    """A private check tally so tests never share counters."""
    return CheckTally()


@pytest.fixture(autouse=True)
def _reset_global_checks():
    """Clear the process-wide tally around every test."""
    CHECKS.reset()
    yield
    CHECKS.reset()
