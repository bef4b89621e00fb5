"""Coverage Bounded Context - Range Solver.

Finds the distance at which a model's path loss reaches the link-budget
threshold. The search itself (`bisect_threshold`) knows nothing about
propagation: it works on any monotone non-decreasing scalar function.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from domain.coverage.propagation import path_loss
from domain.coverage.value_objects import LTEParameters, PropagationModel

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
MIN_RANGE_KM = 0.1  # Lower bracket; also the distance floor for log(distance)
MAX_RANGE_KM = 50.0  # Upper bracket
RANGE_TOLERANCE_KM = 0.01  # Stop once the bracket is this narrow


def bisect_threshold(
    func: Callable[[float], float],
    threshold: float,
    lower: float,
    upper: float,
    tolerance: float,
) -> float:
    """Locate where a non-decreasing function crosses a threshold.

    Halves [lower, upper] until its width is <= tolerance: when
    func(mid) < threshold the crossing lies above mid, otherwise at or
    below it.

    If the threshold is not crossed inside the bracket the result converges
    on the nearest bound (within tolerance/2); no error is raised.

    Args:
        func: Monotone non-decreasing function of one variable
        threshold: Target value
        lower: Lower bound of the search bracket
        upper: Upper bound of the search bracket
        tolerance: Final bracket width

    Returns:
        Midpoint of the final bracket
    """
    while upper - lower > tolerance:
        mid = (lower + upper) / 2
        if func(mid) < threshold:
            lower = mid
        else:
            upper = mid
    return (lower + upper) / 2


def find_max_range(
    model: PropagationModel | str,
    params: LTEParameters,
    max_allowed_path_loss_db: float,
) -> float:
    """Maximum distance (km) at which the model's path loss stays below MAPL.

    Searches [MIN_RANGE_KM, MAX_RANGE_KM]. A threshold outside the path loss
    span of that bracket yields a boundary-clamped estimate.
    """
    max_range = bisect_threshold(
        lambda d: path_loss(model, params, d),
        max_allowed_path_loss_db,
        MIN_RANGE_KM,
        MAX_RANGE_KM,
        RANGE_TOLERANCE_KM,
    )

    if max_range < MIN_RANGE_KM + RANGE_TOLERANCE_KM:
        logger.debug("%s: range clamped to lower bracket (%.3f km)", model, max_range)
    elif max_range > MAX_RANGE_KM - RANGE_TOLERANCE_KM:
        logger.debug("%s: range clamped to upper bracket (%.3f km)", model, max_range)

    return max_range
