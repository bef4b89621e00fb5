"""Coverage Bounded Context - Value Objects.

Immutable data structures describing a radio link and its propagation.
All validation occurs at construction time via Pydantic.

The input record (LTEParameters) is replaced wholesale rather than mutated:
callers derive a new snapshot with `with_changes()` and every calculation is
a pure function of one snapshot.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
class Environment(str, Enum):
    """Propagation environment class."""

    URBAN = "urban"
    SUBURBAN = "suburban"
    RURAL = "rural"

    @property
    def label(self) -> str:
        return _ENVIRONMENT_LABELS[self]


_ENVIRONMENT_LABELS = {
    Environment.URBAN: "Dense urban",
    Environment.SUBURBAN: "Suburban",
    Environment.RURAL: "Rural",
}


class PropagationModel(str, Enum):
    """Closed set of supported path-loss models."""

    OKUMURA_HATA = "okumura-hata"
    COST231_HATA = "cost231-hata"
    TR36814 = "3gpp"


# Canonical evaluation order for comparisons and sweeps
PROPAGATION_MODELS: tuple[PropagationModel, ...] = (
    PropagationModel.OKUMURA_HATA,
    PropagationModel.COST231_HATA,
    PropagationModel.TR36814,
)


# ---------------------------------------------------------------------------
# LTEParameters
# ---------------------------------------------------------------------------
class LTEParameters(BaseModel):
    """Radio link parameters for one dimensioning run (Value Object).

    Invariants:
        - frequency_mhz > 0
        - tx_antenna_height_m > 0 and rx_antenna_height_m > 0
          (logarithms are taken of both)
        - target_area_km2 > 0
        - cable losses and design margins >= 0
        - constrained fields are finite (inf and NaN rejected)

    Defaults reproduce a typical macro eNodeB at 1800 MHz in a dense urban
    area, giving a maximum allowed path loss of 148 dB.
    """

    # Transmitter
    frequency_mhz: float = Field(default=1800.0, gt=0, allow_inf_nan=False)
    tx_power_dbm: float = 43.0
    tx_antenna_gain_dbi: float = 18.0
    tx_cable_loss_db: float = Field(default=2.0, ge=0, allow_inf_nan=False)

    # Receiver
    rx_antenna_gain_dbi: float = 0.0
    rx_cable_loss_db: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    rx_sensitivity_dbm: float = -100.0

    # Antennas
    tx_antenna_height_m: float = Field(default=30.0, gt=0, allow_inf_nan=False)
    rx_antenna_height_m: float = Field(default=1.5, gt=0, allow_inf_nan=False)

    # Environment and design margins
    environment: Environment = Environment.URBAN
    shadowing_margin_db: float = Field(default=8.0, ge=0, allow_inf_nan=False)
    interference_margin_db: float = Field(default=3.0, ge=0, allow_inf_nan=False)

    # Coverage target
    target_area_km2: float = Field(default=100.0, gt=0, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    def with_changes(self, **changes: Any) -> "LTEParameters":
        """Return a new, re-validated snapshot with some fields replaced.

        Unlike `model_copy(update=...)`, the result goes through validation,
        so an invalid replacement raises ValueError instead of producing a
        record that breaks the invariants.
        """
        return type(self).model_validate({**self.model_dump(), **changes})


DEFAULT_LTE_PARAMETERS = LTEParameters()


# ---------------------------------------------------------------------------
# FrequencyBand
# ---------------------------------------------------------------------------
class FrequencyBand(BaseModel):
    """Common LTE operating band (Value Object)."""

    frequency_mhz: float = Field(gt=0)
    band: int = Field(ge=1)  # E-UTRA band number
    label: str

    model_config = ConfigDict(frozen=True)


LTE_FREQUENCY_BANDS: tuple[FrequencyBand, ...] = (
    FrequencyBand(frequency_mhz=700, band=28, label="700 MHz (Band 28)"),
    FrequencyBand(frequency_mhz=800, band=20, label="800 MHz (Band 20)"),
    FrequencyBand(frequency_mhz=900, band=8, label="900 MHz (Band 8)"),
    FrequencyBand(frequency_mhz=1800, band=3, label="1800 MHz (Band 3)"),
    FrequencyBand(frequency_mhz=2100, band=1, label="2100 MHz (Band 1)"),
    FrequencyBand(frequency_mhz=2600, band=7, label="2600 MHz (Band 7)"),
)


def frequency_band(frequency_mhz: float) -> FrequencyBand | None:
    """Return the catalog band at exactly this frequency, if any."""
    for band in LTE_FREQUENCY_BANDS:
        if band.frequency_mhz == frequency_mhz:
            return band
    return None


# ---------------------------------------------------------------------------
# LinkBudget
# ---------------------------------------------------------------------------
class LinkBudget(BaseModel):
    """Link budget breakdown (Value Object).

    max_allowed_path_loss_db is the threshold the range solver searches
    against and the horizontal reference line of a path-loss chart.
    """

    eirp_dbm: float  # tx power + tx gain - tx cable loss
    rx_gain_db: float  # rx gain - rx cable loss
    total_margin_db: float  # shadowing + interference
    rx_sensitivity_dbm: float
    max_allowed_path_loss_db: float

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Sweep
# ---------------------------------------------------------------------------
class SweepPoint(BaseModel):
    """Path loss of every model at one distance (Value Object)."""

    distance_km: float = Field(gt=0)
    path_loss_db: dict[PropagationModel, float]

    model_config = ConfigDict(frozen=True)


class CoverageSweep(BaseModel):
    """Path loss versus distance for all models (Value Object).

    Invariants:
        - points strictly ordered by distance_km
        - every point carries one entry per model in PROPAGATION_MODELS
    """

    points: tuple[SweepPoint, ...]
    max_distance_km: float
    threshold_db: float  # Maximum allowed path loss, for plotting

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_sweep(self) -> "CoverageSweep":
        for i in range(1, len(self.points)):
            if self.points[i].distance_km <= self.points[i - 1].distance_km:
                raise ValueError("Sweep points must be strictly ordered by distance")
        for point in self.points:
            if set(point.path_loss_db) != set(PROPAGATION_MODELS):
                raise ValueError(
                    f"Sweep point at {point.distance_km} km must cover every model"
                )
        return self

    def distances(self) -> tuple[float, ...]:
        """Return the sampled distances in km."""
        return tuple(p.distance_km for p in self.points)

    def path_losses(self, model: PropagationModel) -> tuple[float, ...]:
        """Return one model's path loss at every sampled distance."""
        return tuple(p.path_loss_db[model] for p in self.points)
