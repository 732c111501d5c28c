"""
Unit tests for status-code classification of responses.

Each test hands a fake ``catch_response`` object to the classifier and
checks three observable effects: the bucket returned, how the response
was marked for Locust, and what was written to the log.

Key SDET Concepts Demonstrated:
- ``caplog`` assertions on exact log lines
- Parametrized boundary testing across status ranges
- Isolated counters through a per-test check tally
"""

from __future__ import annotations

import logging

import pytest

from petclinic_load.checks import CHECKS
from petclinic_load.classifier import ResponseBucket, bucket_for_status, classify_response

pytestmark = pytest.mark.unit

URL = "http://petclinic.test/petclinic/api/owners/3"


def _error_records(caplog):
    return [record for record in caplog.records if record.levelno >= logging.ERROR]


class TestBucketForStatus:
    """Tests for :func:`bucket_for_status` boundaries."""

    @pytest.mark.parametrize(
        ("status", "bucket"),
        [
            (200, ResponseBucket.SUCCESS),
            (204, ResponseBucket.SUCCESS),
            (302, ResponseBucket.SUCCESS),
            (399, ResponseBucket.SUCCESS),
            (400, ResponseBucket.CLIENT_ERROR),
            (404, ResponseBucket.CLIENT_ERROR),
            (499, ResponseBucket.CLIENT_ERROR),
            (500, ResponseBucket.SERVER_ERROR),
            (503, ResponseBucket.SERVER_ERROR),
            (599, ResponseBucket.SERVER_ERROR),
            (600, ResponseBucket.UNEXPECTED),
            (0, ResponseBucket.SUCCESS),
        ],
    )
    def test_status_ranges(self, status, bucket):
        """Test that each status lands in the bucket of its range."""
        assert bucket_for_status(status) is bucket


class TestClassifyResponse:
    """Tests for :func:`classify_response` side effects."""

    @pytest.mark.parametrize("status", [200, 201, 204, 301, 399])
    def test_success_passes_without_logging(self, status, response_factory, checks, caplog):
        """Test that a < 400 response passes and logs nothing."""
        # Arrange
        response = response_factory(status)

        # Act
        with caplog.at_level(logging.INFO, logger="petclinic_load.classifier"):
            bucket = classify_response(response, "GET", URL, checks)

        # Assert
        assert bucket is ResponseBucket.SUCCESS
        assert response.outcome == "success"
        assert _error_records(caplog) == []
        assert checks.rows() == [("status is 200", 1, 0)]

    @pytest.mark.parametrize("status", [400, 404, 409, 499])
    def test_client_error_logs_one_line(self, status, response_factory, checks, caplog):
        """Test that a 4xx response logs exactly one line with status and URL."""
        # Arrange
        response = response_factory(status)

        # Act
        with caplog.at_level(logging.ERROR, logger="petclinic_load.classifier"):
            bucket = classify_response(response, "PUT", URL, checks)

        # Assert
        assert bucket is ResponseBucket.CLIENT_ERROR
        errors = _error_records(caplog)
        assert len(errors) == 1
        assert errors[0].getMessage() == f"4xx Error: {status} at {URL}"
        assert response.outcome == "failure"
        assert str(status) in response.failure_message
        assert checks.rows() == [("status is 4xx", 1, 0)]

    @pytest.mark.parametrize("status", [500, 502, 503, 599])
    def test_server_error_logs_one_line(self, status, response_factory, checks, caplog):
        """Test that a 5xx response logs one line and fails its check."""
        # Arrange
        response = response_factory(status)

        # Act
        with caplog.at_level(logging.ERROR, logger="petclinic_load.classifier"):
            bucket = classify_response(response, "POST", URL, checks)

        # Assert
        assert bucket is ResponseBucket.SERVER_ERROR
        errors = _error_records(caplog)
        assert len(errors) == 1
        assert errors[0].getMessage() == f"5xx Error: {status} at {URL}"
        assert response.outcome == "failure"
        assert checks.rows() == [("status is 5xx", 0, 1)]

    @pytest.mark.parametrize("status", [600, 999])
    def test_unexpected_status_is_logged(self, status, response_factory, checks, caplog):
        """Test that statuses outside the HTTP ranges are reported as unexpected."""
        # Arrange
        response = response_factory(status)

        # Act
        with caplog.at_level(logging.ERROR, logger="petclinic_load.classifier"):
            bucket = classify_response(response, "GET", URL, checks)

        # Assert
        assert bucket is ResponseBucket.UNEXPECTED
        errors = _error_records(caplog)
        assert len(errors) == 1
        assert errors[0].getMessage() == f"Unexpected Error: {status} at {URL}"
        assert response.outcome == "failure"
        assert checks.total == 0

    @pytest.mark.parametrize("status", [0, None])
    def test_no_response_passes_check_but_fails_request(
        self, status, response_factory, checks, caplog
    ):
        """Test that a request with no response follows the < 400 rule.

        The ``status is 200`` check passes and nothing is logged, but
        Locust still counts the request as failed.
        """
        # Arrange
        response = response_factory(status)

        # Act
        with caplog.at_level(logging.INFO, logger="petclinic_load.classifier"):
            bucket = classify_response(response, "GET", URL, checks)

        # Assert
        assert bucket is ResponseBucket.SUCCESS
        assert checks.rows() == [("status is 200", 1, 0)]
        assert caplog.records == []
        assert response.outcome == "failure"
        assert response.failure_message == f"No response: 0 on GET {URL}"

    def test_defaults_to_process_wide_tally(self, response_factory):
        """Test that the global tally is used when none is passed."""
        classify_response(response_factory(200), "GET", URL)
        assert CHECKS.rows() == [("status is 200", 1, 0)]
