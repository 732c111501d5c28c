"""
Gate a finished load run on Locust's stats CSV.

Run with ``--csv <prefix>``, Locust writes ``<prefix>_stats.csv`` with
one row per request name plus an ``Aggregated`` row.  This script reads
the aggregated row and compares it against limits from a YAML file:

- ``max_error_rate_percent`` -- ``Failure Count / Request Count * 100``
- ``max_p95_ms`` -- 95th-percentile response time
- ``min_requests_per_second`` -- optional floor on throughput

Exit codes:

- ``0`` -- every threshold met
- ``1`` -- at least one threshold breached
- ``2`` -- the check itself failed (missing file, bad YAML, ...)
"""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml

EXIT_PASS = 0
EXIT_THRESHOLD_BREACH = 1
EXIT_SCRIPT_ERROR = 2

DEFAULT_THRESHOLDS = Path(__file__).with_name("thresholds.yml")

_P95_COLUMNS = ("95%", "95%ile", "95th percentile", "p95")


@dataclass(frozen=True)
class Thresholds:
    max_error_rate_percent: float
    max_p95_ms: float
    min_requests_per_second: float | None = None


@dataclass(frozen=True)
class MetricResult:
    """One compared metric; ``upper`` is True when the limit is a maximum."""

    label: str
    actual: float
    limit: float
    upper: bool = True

    @property
    def passed(self) -> bool:
        if self.upper:
            return self.actual <= self.limit
        return self.actual >= self.limit


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check a Locust stats CSV against load-test thresholds."
    )
    parser.add_argument(
        "--stats",
        required=True,
        type=Path,
        help="Path to Locust *_stats.csv file",
    )
    parser.add_argument(
        "--thresholds",
        type=Path,
        default=DEFAULT_THRESHOLDS,
        help="Path to thresholds YAML file",
    )
    return parser.parse_args(argv)


def load_thresholds(path: Path) -> Thresholds:
    """
    Read threshold limits from YAML.

    Raises:
        ValueError: If a required limit is missing or non-numeric.
    """
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    try:
        max_error_rate = float(data["max_error_rate_percent"])
        max_p95_ms = float(data["max_p95_ms"])
        min_rps = data.get("min_requests_per_second")
        min_rps = None if min_rps is None else float(min_rps)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError(
            "Thresholds file must define numeric max_error_rate_percent and max_p95_ms"
        ) from exc

    return Thresholds(
        max_error_rate_percent=max_error_rate,
        max_p95_ms=max_p95_ms,
        min_requests_per_second=min_rps,
    )


_BLANK_CELLS = frozenset({"", "N/A"})


def _is_aggregated(row: dict[str, str]) -> bool:
    return "Aggregated" in (row.get("Name"), row.get("Type"))


def load_aggregated_row(stats_path: Path) -> dict[str, str]:
    """
    Return the ``Aggregated`` row of a Locust stats CSV.

    Raises:
        ValueError: If the file has no aggregated row.
    """
    with stats_path.open("r", encoding="utf-8", newline="") as handle:
        row = next(filter(_is_aggregated, csv.DictReader(handle)), None)
    if row is None:
        raise ValueError(f"{stats_path.name} has no Aggregated row")
    return row


def _number(row: dict[str, str], *columns: str) -> float:
    """
    Read the first filled-in cell among *columns* as a float.

    Locust writes ``N/A`` for statistics it could not compute, so such
    cells count as empty and the next column name is tried.
    """
    for column in columns:
        cell = (row.get(column) or "").strip().rstrip("%")
        if cell in _BLANK_CELLS:
            continue
        try:
            return float(cell)
        except ValueError as exc:
            raise ValueError(f"{column} is not a number: {cell!r}") from exc
    raise ValueError(f"No value for {' / '.join(columns)} in the Aggregated row")


def extract_p95_ms(row: dict[str, str]) -> float:
    """Return the p95 latency, trying the column names Locust has used."""
    return _number(row, *_P95_COLUMNS)


def error_rate_percent(row: dict[str, str]) -> float:
    """
    Return failures as a percentage of requests.

    Raises:
        ValueError: If the run made no requests.
    """
    request_count = _number(row, "Request Count")
    failure_count = _number(row, "Failure Count")

    if request_count <= 0:
        raise ValueError("Request Count must be > 0 for threshold checks")

    return failure_count / request_count * 100.0


def evaluate(row: dict[str, str], thresholds: Thresholds) -> list[MetricResult]:
    """Compare the aggregated row against every configured limit."""
    results = [
        MetricResult("Error rate (%)", error_rate_percent(row), thresholds.max_error_rate_percent),
        MetricResult("P95 latency (ms)", extract_p95_ms(row), thresholds.max_p95_ms),
    ]
    if thresholds.min_requests_per_second is not None:
        results.append(
            MetricResult(
                "Requests/s",
                _number(row, "Requests/s"),
                thresholds.min_requests_per_second,
                upper=False,
            )
        )
    return results


def print_summary(results: list[MetricResult]) -> None:
    """Print a results table to stdout for CI logs."""
    print("Load Test Threshold Check")
    print("-" * 60)
    print(f"{'Metric':<22}{'Actual':>12}{'Limit':>14}{'Status':>12}")
    print("-" * 60)
    for result in results:
        status = "PASS" if result.passed else "FAIL"
        print(f"{result.label:<22}{result.actual:>12.2f}{result.limit:>14.2f}{status:>12}")
    print("-" * 60)
    overall = all(result.passed for result in results)
    print(f"Overall: {'PASS' if overall else 'FAIL'}")


def main(argv: list[str] | None = None) -> int:
    """Load thresholds and stats, compare, print, and return an exit code."""
    args = parse_args(argv)

    try:
        thresholds = load_thresholds(args.thresholds)
        row = load_aggregated_row(args.stats)
        results = evaluate(row, thresholds)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Threshold check failed: {exc}", file=sys.stderr)
        return EXIT_SCRIPT_ERROR

    print_summary(results)
    return EXIT_PASS if all(result.passed for result in results) else EXIT_THRESHOLD_BREACH


if __name__ == "__main__":
    raise SystemExit(main())
