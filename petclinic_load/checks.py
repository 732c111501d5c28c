"""
Named pass/fail counters for response checks.

Locust tracks request failures but has no notion of named assertions.
:class:`CheckTally` fills that gap: the classifier records every check
it evaluates, and the locustfile logs the tally when the run stops.

All users of a Locust process run as gevent greenlets on one thread,
so the counters need no locking.
"""

from __future__ import annotations

from collections import Counter


class CheckTally:
    """Per-check pass and failure counts."""

    def __init__(self) -> None:
        self._passes: Counter[str] = Counter()
        self._failures: Counter[str] = Counter()

    def record(self, name: str, ok: bool) -> None:
        if ok:
            self._passes[name] += 1
        else:
            self._failures[name] += 1

    def reset(self) -> None:
        self._passes.clear()
        self._failures.clear()

    def rows(self) -> list[tuple[str, int, int]]:
        """Return ``(name, passes, failures)`` sorted by check name."""
        names = sorted(set(self._passes) | set(self._failures))
        return [(name, self._passes[name], self._failures[name]) for name in names]

    @property
    def total(self) -> int:
        return sum(self._passes.values()) + sum(self._failures.values())

    def pass_rate(self) -> float:
        """Percentage of passed checks, or ``100.0`` when nothing was recorded."""
        if self.total == 0:
            return 100.0
        return sum(self._passes.values()) / self.total * 100.0

    def format(self) -> str:
        """Render the tally as a fixed-width table."""
        lines = [
            f"{'Check':<22}{'Passed':>12}{'Failed':>12}",
            "-" * 46,
        ]
        for name, passes, failures in self.rows():
            mark = "✓" if failures == 0 else "✗"
            lines.append(f"{mark} {name:<20}{passes:>12}{failures:>12}")
        lines.append("-" * 46)
        lines.append(f"checks: {self.pass_rate():.2f}% of {self.total}")
        return "\n".join(lines)


# Process-wide tally fed by the response classifier.
CHECKS = CheckTally()
