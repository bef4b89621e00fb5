"""Siting Bounded Context - Value Objects.

Immutable records produced by a dimensioning run. They carry no lifecycle of
their own: a new set is built for every parameter snapshot.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.coverage.value_objects import (
    PROPAGATION_MODELS,
    LinkBudget,
    PropagationModel,
)

# ---------------------------------------------------------------------------
# Sizing Constants
# ---------------------------------------------------------------------------
SECTOR_COUNT = 3  # Sectors per site
OVERLAP_FACTOR = 1.3  # Target area inflation for inter-cell overlap
CELL_RADIUS_FACTOR = 0.65  # Usable cell radius as a fraction of max range


# ---------------------------------------------------------------------------
# CellSizing
# ---------------------------------------------------------------------------
class CellSizing(BaseModel):
    """Hexagonal cell footprint and the site count it implies (Value Object)."""

    cell_radius_km: float
    cell_area_km2: float
    number_of_sites: int = Field(ge=1)
    sector_count: int = SECTOR_COUNT
    overlap_factor: float = OVERLAP_FACTOR

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# CalculationResult
# ---------------------------------------------------------------------------
class CalculationResult(BaseModel):
    """Dimensioning outcome for one propagation model (Value Object).

    `model` holds the PropagationModel for supported tags; an unsupported tag
    is kept verbatim as a string (its model_name is "Unknown").
    """

    model: PropagationModel | str = Field(union_mode="left_to_right")
    model_name: str
    path_loss_db: float  # Path loss at max_range_km
    max_range_km: float
    cell_radius_km: float
    cell_area_km2: float
    number_of_sites: int = Field(ge=1)
    sector_count: int = SECTOR_COUNT
    overlap_factor: float = OVERLAP_FACTOR

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# ComparisonResult
# ---------------------------------------------------------------------------
class ComparisonResult(BaseModel):
    """Side-by-side results of every supported model (Value Object).

    Invariants:
        CR-1: exactly one result per model, in PROPAGATION_MODELS order
        CR-2: recommended_model is one of the compared models
    """

    models: tuple[CalculationResult, ...]
    recommended_model: PropagationModel
    average_range_km: float
    average_sites: float
    link_budget: LinkBudget

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_models(self) -> "ComparisonResult":
        # CR-1
        tags = tuple(r.model for r in self.models)
        if tags != PROPAGATION_MODELS:
            raise ValueError(f"Results must follow canonical model order, got {list(tags)}")
        # CR-2 follows from CR-1 since recommended_model is a PropagationModel
        return self

    def result_for(self, model: PropagationModel | str) -> CalculationResult | None:
        """Return the result of one model, or None if it was not compared."""
        for result in self.models:
            if result.model == model:
                return result
        return None

    def recommended_result(self) -> CalculationResult:
        """Return the result of the recommended model."""
        # CR-1 guarantees a match
        return next(r for r in self.models if r.model == self.recommended_model)

    def longest_range_km(self) -> float:
        """Return the largest max range across models."""
        return max(r.max_range_km for r in self.models)

    def fewest_sites(self) -> int:
        """Return the smallest site count across models."""
        return min(r.number_of_sites for r in self.models)

    def range_share_pct(self) -> dict[PropagationModel, float]:
        """Return each model's range as a percentage of the longest range."""
        longest = self.longest_range_km()
        return {r.model: r.max_range_km / longest * 100 for r in self.models}
