"""Metrics hook protocol and no-op default implementation.

The compiler reports a handful of counters and timings per call.  By
default a :class:`NoopMetricsHook` discards them; pass any object that
satisfies :class:`MetricsHook` as ``CompilerConfig.metrics`` to route them
to StatsD, Prometheus, Datadog, etc.

Emitted metric names:

* ``notemark.compile_total``              -- counter
* ``notemark.compile_duration_ms``        -- timing
* ``notemark.blocks_emitted_total``       -- counter
* ``notemark.conversion_warnings_total``  -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are string key/value pairs; backends map them onto their own
    tagging scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Metrics backend that silently discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
