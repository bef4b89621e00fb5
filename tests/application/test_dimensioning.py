"""Tests for the dimensioning application service.

End-to-end checks of evaluate_model, compare_models and sweep_path_loss on
the documented default scenario and its variants.
"""

from __future__ import annotations

import math

import numpy as np
import pytest
from pydantic import ValidationError

from application import compare_models, evaluate_model, sweep_path_loss
from domain.coverage.errors import CoverageError, InvalidSweepError
from domain.coverage.propagation import path_loss
from domain.coverage.solver import MAX_RANGE_KM, MIN_RANGE_KM, RANGE_TOLERANCE_KM
from domain.coverage.value_objects import (
    PROPAGATION_MODELS,
    Environment,
    PropagationModel,
)
from domain.siting.value_objects import CalculationResult, ComparisonResult


# ===========================================================================
# evaluate_model
# ===========================================================================
def test_evaluate_model_default_cost231(default_params):
    result = evaluate_model(PropagationModel.COST231_HATA, default_params)

    assert result.model is PropagationModel.COST231_HATA
    assert result.model_name == "COST 231-Hata"
    assert result.max_range_km == pytest.approx(1.778, abs=0.01)
    assert result.cell_radius_km == pytest.approx(result.max_range_km * 0.65)
    assert result.cell_area_km2 == pytest.approx(
        3 * math.sqrt(3) / 2 * result.cell_radius_km**2
    )
    assert result.number_of_sites == math.ceil(100 * 1.3 / result.cell_area_km2)
    assert result.sector_count == 3
    assert result.overlap_factor == 1.3


def test_evaluate_model_reports_path_loss_at_max_range(default_params):
    result = evaluate_model(PropagationModel.TR36814, default_params)

    assert result.path_loss_db == path_loss(
        PropagationModel.TR36814, default_params, result.max_range_km
    )
    assert result.path_loss_db == pytest.approx(148.0, abs=0.1)


def test_evaluate_model_accepts_string_tag(default_params):
    result = evaluate_model("okumura-hata", default_params)

    assert result.model is PropagationModel.OKUMURA_HATA
    assert result == evaluate_model(PropagationModel.OKUMURA_HATA, default_params)


def test_evaluate_unknown_model(default_params, caplog):
    caplog.set_level("WARNING")

    result = evaluate_model("free-space", default_params)

    assert result.model == "free-space"
    assert result.model_name == "Unknown"
    assert result.path_loss_db == 0.0
    assert result.max_range_km == pytest.approx(50.0, abs=0.01)
    assert result.number_of_sites >= 1
    assert "Unknown propagation model" in caplog.text


# ===========================================================================
# compare_models
# ===========================================================================
def test_compare_default_scenario(default_params):
    comparison = compare_models(default_params)

    assert isinstance(comparison, ComparisonResult)
    assert comparison.link_budget.max_allowed_path_loss_db == pytest.approx(148.0)
    assert comparison.recommended_model is PropagationModel.COST231_HATA
    assert tuple(r.model for r in comparison.models) == PROPAGATION_MODELS
    for result in comparison.models:
        assert result.max_range_km > 0
        assert result.number_of_sites >= 1


def test_compare_averages(default_params):
    comparison = compare_models(default_params)
    ranges = [r.max_range_km for r in comparison.models]
    sites = [r.number_of_sites for r in comparison.models]

    assert comparison.average_range_km == pytest.approx(sum(ranges) / 3)
    assert comparison.average_sites == pytest.approx(sum(sites) / 3)


def test_compare_matches_individual_evaluation(params_by_environment):
    comparison = compare_models(params_by_environment)

    for model, result in zip(PROPAGATION_MODELS, comparison.models):
        assert result == evaluate_model(model, params_by_environment)


@pytest.mark.parametrize(
    "frequency,expected",
    [
        (700, PropagationModel.OKUMURA_HATA),
        (1500, PropagationModel.OKUMURA_HATA),
        (1800, PropagationModel.COST231_HATA),
        (2000, PropagationModel.COST231_HATA),
        (2600, PropagationModel.TR36814),
    ],
)
def test_compare_recommendation_by_frequency(frequency, expected, default_params):
    comparison = compare_models(default_params.with_changes(frequency_mhz=frequency))

    assert comparison.recommended_model is expected
    assert comparison.recommended_result().model is expected


def test_compare_is_idempotent(default_params):
    assert compare_models(default_params) == compare_models(default_params)


def test_compare_summary_helpers(default_params):
    comparison = compare_models(default_params)
    tr36814 = comparison.result_for(PropagationModel.TR36814)

    # 3GPP UMa reaches furthest in the default scenario
    assert tr36814 is not None
    assert comparison.longest_range_km() == tr36814.max_range_km
    assert comparison.fewest_sites() == tr36814.number_of_sites
    shares = comparison.range_share_pct()
    assert shares[PropagationModel.TR36814] == pytest.approx(100.0)
    assert all(0 < share <= 100 for share in shares.values())
    assert comparison.result_for("3gpp") is tr36814
    assert comparison.result_for("free-space") is None


def test_compare_recomputed_on_parameter_change(default_params):
    base = compare_models(default_params)
    larger = compare_models(default_params.with_changes(target_area_km2=400))

    assert larger.average_range_km == base.average_range_km
    for small_area, large_area in zip(base.models, larger.models):
        assert large_area.number_of_sites >= small_area.number_of_sites


def test_comparison_rejects_wrong_model_order(default_params):
    comparison = compare_models(default_params)

    with pytest.raises(ValueError, match="canonical model order"):
        ComparisonResult(
            models=tuple(reversed(comparison.models)),
            recommended_model=comparison.recommended_model,
            average_range_km=comparison.average_range_km,
            average_sites=comparison.average_sites,
            link_budget=comparison.link_budget,
        )


def test_results_are_immutable(default_params):
    result = evaluate_model(PropagationModel.OKUMURA_HATA, default_params)

    assert isinstance(result, CalculationResult)
    with pytest.raises(ValidationError):
        result.number_of_sites = 1  # type: ignore[misc]


# ===========================================================================
# Non-finite link inputs
# ===========================================================================
@pytest.mark.parametrize(
    "changes,clamped_range_km",
    [
        # NaN budget: no path loss compares below it
        ({"tx_power_dbm": float("nan")}, MIN_RANGE_KM),
        # Infinite budget: every path loss stays below it
        ({"rx_sensitivity_dbm": float("-inf")}, MAX_RANGE_KM),
    ],
    ids=["nan-tx-power", "infinite-sensitivity"],
)
def test_non_finite_budget_yields_clamped_ranges(
    changes, clamped_range_km, default_params
):
    params = default_params.with_changes(**changes)

    comparison = compare_models(params)

    assert not math.isfinite(comparison.link_budget.max_allowed_path_loss_db)
    for model, result in zip(PROPAGATION_MODELS, comparison.models):
        assert result.max_range_km == pytest.approx(
            clamped_range_km, abs=RANGE_TOLERANCE_KM
        )
        assert math.isfinite(result.path_loss_db)
        assert result.number_of_sites >= 1
        assert result == evaluate_model(model, params)
    assert math.isfinite(comparison.average_range_km)
    assert math.isfinite(comparison.average_sites)


# ===========================================================================
# sweep_path_loss
# ===========================================================================
def test_sweep_fifteen_km_has_thirty_points(default_params):
    sweep = sweep_path_loss(default_params, 15)

    assert len(sweep.points) == 30
    assert sweep.distances() == tuple(0.5 * k for k in range(1, 31))
    assert sweep.distances()[-1] == 15.0
    for point in sweep.points:
        assert set(point.path_loss_db) == set(PROPAGATION_MODELS)


def test_sweep_default_maximum_is_twenty_km(default_params):
    sweep = sweep_path_loss(default_params)

    assert len(sweep.points) == 40
    assert sweep.max_distance_km == 20.0


def test_sweep_values_match_models(default_params):
    sweep = sweep_path_loss(default_params, 5)

    for point in sweep.points:
        for model in PROPAGATION_MODELS:
            assert point.path_loss_db[model] == pytest.approx(
                path_loss(model, default_params, point.distance_km), rel=1e-12
            )


def test_sweep_carries_threshold(default_params):
    assert sweep_path_loss(default_params, 2).threshold_db == pytest.approx(148.0)


def test_sweep_partial_step_is_truncated(default_params):
    assert sweep_path_loss(default_params, 1.2).distances() == (0.5, 1.0)


@pytest.mark.parametrize("max_distance", [0.0, 0.3, -4.0])
def test_sweep_shorter_than_one_step_is_empty(default_params, max_distance):
    assert sweep_path_loss(default_params, max_distance).points == ()


@pytest.mark.parametrize("max_distance", [float("inf"), float("nan")])
def test_sweep_rejects_non_finite_maximum(default_params, max_distance):
    with pytest.raises(InvalidSweepError) as exc_info:
        sweep_path_loss(default_params, max_distance)

    assert isinstance(exc_info.value, CoverageError)


def test_sweep_is_restartable(default_params):
    sweep = sweep_path_loss(default_params, 3)

    assert list(sweep.points) == list(sweep.points)
    assert sweep == sweep_path_loss(default_params, 3)


def test_sweep_path_loss_grows_with_distance(default_params):
    sweep = sweep_path_loss(default_params.with_changes(environment=Environment.SUBURBAN))

    for model in PROPAGATION_MODELS:
        assert np.all(np.diff(sweep.path_losses(model)) > 0)
