"""Dimensioning application service.

Orchestrates the coverage and siting contexts into the three operations the
presentation layer calls:

    evaluate_model(model, params)         -> CalculationResult
    compare_models(params)                -> ComparisonResult
    sweep_path_loss(params, max_distance) -> CoverageSweep

Flow per model: link budget -> range solver -> cell sizing. The sweep skips
the solver and evaluates each path-loss model on a fixed distance grid.

All operations are pure functions of their arguments.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from domain.coverage.errors import InvalidSweepError
from domain.coverage.link_budget import link_budget, max_allowed_path_loss
from domain.coverage.propagation import (
    is_within_validity,
    model_display_name,
    path_loss,
)
from domain.coverage.solver import find_max_range
from domain.coverage.value_objects import (
    PROPAGATION_MODELS,
    CoverageSweep,
    LTEParameters,
    PropagationModel,
    SweepPoint,
)
from domain.siting.services import recommend_model, size_cell
from domain.siting.value_objects import CalculationResult, ComparisonResult

logger = logging.getLogger(__name__)

SWEEP_STEP_KM = 0.5  # Distance grid spacing; the first point is one step out
DEFAULT_SWEEP_MAX_KM = 20.0


def _evaluate(
    model: PropagationModel | str, params: LTEParameters, threshold_db: float
) -> CalculationResult:
    if isinstance(model, PropagationModel) and not is_within_validity(
        model, params.frequency_mhz
    ):
        logger.debug(
            "%s evaluated outside its nominal band at %.0f MHz",
            model.value,
            params.frequency_mhz,
        )

    max_range = find_max_range(model, params, threshold_db)
    sizing = size_cell(max_range, params.target_area_km2)

    return CalculationResult(
        model=model,
        model_name=model_display_name(model),
        path_loss_db=path_loss(model, params, max_range),
        max_range_km=max_range,
        cell_radius_km=sizing.cell_radius_km,
        cell_area_km2=sizing.cell_area_km2,
        number_of_sites=sizing.number_of_sites,
        sector_count=sizing.sector_count,
        overlap_factor=sizing.overlap_factor,
    )


def evaluate_model(
    model: PropagationModel | str, params: LTEParameters
) -> CalculationResult:
    """Dimension the network with a single propagation model.

    Args:
        model: Model tag (an unsupported tag evaluates with 0 dB path loss)
        params: Link parameter snapshot

    Returns:
        CalculationResult with range, cell geometry and site count
    """
    return _evaluate(model, params, max_allowed_path_loss(params))


def compare_models(params: LTEParameters) -> ComparisonResult:
    """Dimension the network with every model and recommend one.

    The link budget is computed once and shared by all models. Averages are
    arithmetic means over the three results; the recommendation depends on
    the carrier frequency only.
    """
    budget = link_budget(params)
    results = tuple(
        _evaluate(model, params, budget.max_allowed_path_loss_db)
        for model in PROPAGATION_MODELS
    )

    comparison = ComparisonResult(
        models=results,
        recommended_model=recommend_model(params.frequency_mhz),
        average_range_km=sum(r.max_range_km for r in results) / len(results),
        average_sites=sum(r.number_of_sites for r in results) / len(results),
        link_budget=budget,
    )
    logger.debug(
        "MAPL %.1f dB: ranges %s km, recommended %s",
        budget.max_allowed_path_loss_db,
        ", ".join(f"{r.max_range_km:.2f}" for r in results),
        comparison.recommended_model.value,
    )
    return comparison


def sweep_path_loss(
    params: LTEParameters, max_distance_km: float = DEFAULT_SWEEP_MAX_KM
) -> CoverageSweep:
    """Path loss of every model at 0.5 km steps up to max_distance_km.

    Distances are exact multiples of the step: 0.5, 1.0, ... up to and
    including max_distance_km. A maximum below one step gives an empty sweep.

    Raises:
        InvalidSweepError: If max_distance_km is not finite
    """
    if not math.isfinite(max_distance_km):
        raise InvalidSweepError(max_distance_km)

    n_points = max(0, int(math.floor(max_distance_km / SWEEP_STEP_KM)))
    distances = np.arange(1, n_points + 1) * SWEEP_STEP_KM

    losses = {
        model: path_loss(model, params, distances) for model in PROPAGATION_MODELS
    }

    points = tuple(
        SweepPoint(
            distance_km=float(distance),
            path_loss_db={
                model: float(model_losses[i]) for model, model_losses in losses.items()
            },
        )
        for i, distance in enumerate(distances)
    )

    return CoverageSweep(
        points=points,
        max_distance_km=max_distance_km,
        threshold_db=max_allowed_path_loss(params),
    )
