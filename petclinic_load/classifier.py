"""
Status-code classification of load-test responses.

Every response of an iteration passes through :func:`classify_response`
while still inside Locust's ``catch_response`` block.  The classifier
decides whether Locust should count the request as a success or a
failure, records a named check, and writes one ERROR line for anything
that is not a success.  It never raises and never retries: a bad
response is reported, and the iteration carries on.

Buckets:

- ``< 400`` -- success, check ``status is 200`` passes; status ``0``
  (no response) also passes the check but Locust still counts the
  request as failed
- ``400-499`` -- client error, check ``status is 4xx`` passes, logged
- ``500-599`` -- server error, check ``status is 5xx`` fails, logged
- ``600`` and above -- unexpected, logged
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from petclinic_load.checks import CHECKS, CheckTally

logger = logging.getLogger(__name__)


class ResponseBucket(str, Enum):
    """Status-code range a response falls into."""

    SUCCESS = "success"
    CLIENT_ERROR = "4xx"
    SERVER_ERROR = "5xx"
    UNEXPECTED = "unexpected"


def bucket_for_status(status: int) -> ResponseBucket:
    """Map a numeric HTTP status to its :class:`ResponseBucket`."""
    if status < 400:
        return ResponseBucket.SUCCESS
    if 400 <= status < 500:
        return ResponseBucket.CLIENT_ERROR
    if 500 <= status < 600:
        return ResponseBucket.SERVER_ERROR
    return ResponseBucket.UNEXPECTED


def classify_response(
    response: Any,
    method: str,
    url: str,
    checks: CheckTally | None = None,
) -> ResponseBucket:
    """
    Classify *response*, mark it in Locust and log non-successes.

    Args:
        response: A Locust ``ResponseContextManager`` (anything exposing
            ``status_code``, ``success()`` and ``failure(message)``).
        method: HTTP method the request was sent with.
        url: Full URL the request was sent to.
        checks: Tally to record the check in.  Defaults to the
            process-wide :data:`~petclinic_load.checks.CHECKS`.

    Returns:
        The bucket the response was placed in.
    """
    if checks is None:
        checks = CHECKS

    status = response.status_code or 0
    bucket = bucket_for_status(status)

    if bucket is ResponseBucket.SUCCESS:
        checks.record("status is 200", True)
        if status < 100:
            response.failure(f"No response: {status} on {method} {url}")
        else:
            response.success()
    elif bucket is ResponseBucket.CLIENT_ERROR:
        checks.record("status is 4xx", True)
        logger.error("4xx Error: %s at %s", status, url)
        response.failure(f"4xx Error: {status} on {method} {url}")
    elif bucket is ResponseBucket.SERVER_ERROR:
        checks.record("status is 5xx", False)
        logger.error("5xx Error: %s at %s", status, url)
        response.failure(f"5xx Error: {status} on {method} {url}")
    else:
        logger.error("Unexpected Error: %s at %s", status, url)
        response.failure(f"Unexpected Error: {status} on {method} {url}")

    return bucket
