"""Coverage Bounded Context - Error Hierarchy.

Custom exceptions for coverage operations.

Path-loss, link-budget and range calculations never raise for numeric
reasons: non-physical inputs propagate as non-finite results instead.
"""

from __future__ import annotations


class CoverageError(Exception):
    """Base error for coverage operations."""


class InvalidSweepError(CoverageError):
    """Sweep parameters are invalid (e.g. non-finite maximum distance).

    Attributes:
        max_distance_km: The offending maximum distance
    """

    def __init__(self, max_distance_km: float) -> None:
        self.max_distance_km = max_distance_km
        super().__init__(
            f"Sweep maximum distance must be finite, got {max_distance_km!r} km"
        )
