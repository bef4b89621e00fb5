"""Coverage Bounded Context - Path-Loss Models.

Pure closed-form propagation models. NO validation: non-physical inputs
(zero or negative heights, distances or frequencies) produce non-finite
results rather than exceptions; callers are responsible for range
restriction.

Every model accepts either a scalar distance (returns float) or a numpy
array of distances (returns an array of the same shape).

Models:
    - Okumura-Hata (150-1500 MHz)
    - COST 231-Hata (1500-2000 MHz)
    - 3GPP TR 36.814 UMa / SMa / RMa (up to 6000 MHz)
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from domain.coverage.value_objects import Environment, LTEParameters, PropagationModel

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
SPEED_OF_LIGHT_M_S = 3e8

# Okumura-Hata is only defined up to 1500 MHz; the dispatcher clamps to it
OKUMURA_HATA_MAX_FREQUENCY_MHZ = 1500.0

# Fixed 3GPP scenario parameters (street width / building geometry stand-ins)
SMA_SCENARIO_PARAMETER = 15.0
RMA_SCENARIO_PARAMETER = 5.0

# Nominal frequency range (MHz, inclusive) of each model
MODEL_FREQUENCY_RANGES_MHZ: dict[PropagationModel, tuple[float, float]] = {
    PropagationModel.OKUMURA_HATA: (150.0, 1500.0),
    PropagationModel.COST231_HATA: (1500.0, 2000.0),
    PropagationModel.TR36814: (0.0, 6000.0),
}

_MODEL_NAMES = {
    PropagationModel.OKUMURA_HATA: "Okumura-Hata",
    PropagationModel.COST231_HATA: "COST 231-Hata",
    PropagationModel.TR36814: "3GPP TR 36.814",
}
UNKNOWN_MODEL_NAME = "Unknown"


def _finalize(value: float | NDArray[np.float64]) -> float | NDArray[np.float64]:
    """Return a plain float for scalar results, the array otherwise."""
    if np.ndim(value) == 0:
        return float(value)
    return value


# ---------------------------------------------------------------------------
# Okumura-Hata
# ---------------------------------------------------------------------------
def mobile_station_correction(
    frequency_mhz: float, rx_height_m: float, environment: Environment
) -> float:
    """Okumura-Hata mobile antenna height correction factor a(hm) in dB.

    Urban areas use the large-city formula (split at 300 MHz); suburban and
    rural areas use the small/medium-city formula.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        if environment == Environment.URBAN:
            if frequency_mhz <= 300:
                return float(8.29 * np.log10(1.54 * rx_height_m) ** 2 - 1.1)
            return float(3.2 * np.log10(11.75 * rx_height_m) ** 2 - 4.97)
        log_f = np.log10(frequency_mhz)
        return float((1.1 * log_f - 0.7) * rx_height_m - (1.56 * log_f - 0.8))


def okumura_hata(
    frequency_mhz: float,
    tx_height_m: float,
    rx_height_m: float,
    distance_km: float | NDArray[np.float64],
    environment: Environment,
) -> float | NDArray[np.float64]:
    """Okumura-Hata path loss in dB.

    Args:
        frequency_mhz: Carrier frequency (valid 150-1500 MHz, not clamped here)
        tx_height_m: Base station antenna height
        rx_height_m: Mobile antenna height
        distance_km: Ground distance, scalar or array
        environment: Urban, suburban or rural correction

    Returns:
        Path loss in dB (same shape as distance_km)
    """
    a_hm = mobile_station_correction(frequency_mhz, rx_height_m, environment)

    with np.errstate(divide="ignore", invalid="ignore"):
        log_f = np.log10(frequency_mhz)
        log_ht = np.log10(tx_height_m)
        loss = (
            69.55
            + 26.16 * log_f
            - 13.82 * log_ht
            - a_hm
            + (44.9 - 6.55 * log_ht) * np.log10(distance_km)
        )

        if environment == Environment.SUBURBAN:
            loss = loss - (2 * np.log10(frequency_mhz / 28) ** 2 + 5.4)
        elif environment == Environment.RURAL:
            loss = loss - (4.78 * log_f**2 + 18.33 * log_f - 40.94)

    return _finalize(loss)


# ---------------------------------------------------------------------------
# COST 231-Hata
# ---------------------------------------------------------------------------
def cost231_hata(
    frequency_mhz: float,
    tx_height_m: float,
    rx_height_m: float,
    distance_km: float | NDArray[np.float64],
    environment: Environment,
) -> float | NDArray[np.float64]:
    """COST 231-Hata path loss in dB (1500-2000 MHz).

    a(hm) always uses the small/medium-city formula whatever the
    environment; only the metropolitan correction C_m (3 dB) depends on it.
    """
    a_hm = mobile_station_correction(frequency_mhz, rx_height_m, Environment.SUBURBAN)
    c_m = 3.0 if environment == Environment.URBAN else 0.0

    with np.errstate(divide="ignore", invalid="ignore"):
        log_ht = np.log10(tx_height_m)
        loss = (
            46.3
            + 33.9 * np.log10(frequency_mhz)
            - 13.82 * log_ht
            - a_hm
            + (44.9 - 6.55 * log_ht) * np.log10(distance_km)
            + c_m
        )

    return _finalize(loss)


# ---------------------------------------------------------------------------
# 3GPP TR 36.814
# ---------------------------------------------------------------------------
def _macro_los_path_loss(
    d_3d_m: float | NDArray[np.float64], frequency_mhz: float, scenario: float
) -> float | NDArray[np.float64]:
    """SMa/RMa-style path loss before the breakpoint."""
    return (
        20 * np.log10(40 * math.pi * d_3d_m * frequency_mhz / 3e3)
        + min(0.03 * scenario**1.72, 10) * np.log10(d_3d_m)
        - min(0.044 * scenario**1.72, 14.77)
        + 0.002 * math.log10(scenario) * d_3d_m
    )


def tr36814(
    frequency_mhz: float,
    tx_height_m: float,
    rx_height_m: float,
    distance_km: float | NDArray[np.float64],
    environment: Environment,
) -> float | NDArray[np.float64]:
    """3GPP TR 36.814 path loss in dB (up to 6000 MHz).

    Scenarios:
        urban    -> UMa, two-slope around d_BP = 4*ht*hr*f/c
        suburban -> SMa, single slope
        rural    -> RMa, two-slope around d_BP = 2*pi*ht*hr*f/c

    Distances are 3D (ground distance plus antenna height difference).

    Note:
        The RMa far-field branch restarts from the breakpoint reference loss,
        so RMa path loss steps down by a few dB at the breakpoint. Every
        other scenario is non-decreasing in distance.
    """
    frequency_hz = frequency_mhz * 1e6
    frequency_ghz = frequency_mhz / 1000

    with np.errstate(divide="ignore", invalid="ignore"):
        distance_m = np.asarray(distance_km) * 1000
        d_3d = np.sqrt(distance_m**2 + (tx_height_m - rx_height_m) ** 2)

        if environment == Environment.URBAN:
            d_bp = 4 * tx_height_m * rx_height_m * frequency_hz / SPEED_OF_LIGHT_M_S
            near = 22 * np.log10(d_3d) + 28 + 20 * np.log10(frequency_ghz)
            far = (
                40 * np.log10(d_3d)
                + 7.8
                - 18 * np.log10(tx_height_m)
                - 18 * np.log10(rx_height_m)
                + 2 * np.log10(frequency_ghz)
            )
            loss = np.where(d_3d < d_bp, near, far)
        elif environment == Environment.SUBURBAN:
            loss = _macro_los_path_loss(d_3d, frequency_mhz, SMA_SCENARIO_PARAMETER)
        else:
            d_bp = (
                2 * math.pi * tx_height_m * rx_height_m * frequency_hz / SPEED_OF_LIGHT_M_S
            )
            near = _macro_los_path_loss(d_3d, frequency_mhz, RMA_SCENARIO_PARAMETER)
            breakpoint_loss = 20 * np.log10(40 * math.pi * d_bp * frequency_mhz / 3e3)
            far = breakpoint_loss + 40 * np.log10(d_3d / d_bp)
            loss = np.where(d_3d < d_bp, near, far)

    return _finalize(loss)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
def _coerce_model(model: PropagationModel | str) -> PropagationModel | None:
    try:
        return PropagationModel(model)
    except ValueError:
        return None


def model_display_name(model: PropagationModel | str) -> str:
    """Human-readable model name ("Unknown" for unsupported tags)."""
    known = _coerce_model(model)
    if known is None:
        return UNKNOWN_MODEL_NAME
    return _MODEL_NAMES[known]


def is_within_validity(model: PropagationModel, frequency_mhz: float) -> bool:
    """Check whether a frequency lies in a model's nominal range."""
    low, high = MODEL_FREQUENCY_RANGES_MHZ[model]
    return low <= frequency_mhz <= high


def path_loss(
    model: PropagationModel | str,
    params: LTEParameters,
    distance_km: float | NDArray[np.float64],
) -> float | NDArray[np.float64]:
    """Path loss of one model for a parameter snapshot.

    Okumura-Hata is evaluated with the frequency clamped to 1500 MHz.
    An unsupported model tag yields 0 dB (never an exception).

    Args:
        model: Model tag (PropagationModel or its string value)
        params: Link parameters supplying frequency, heights and environment
        distance_km: Ground distance, scalar or array

    Returns:
        Path loss in dB (same shape as distance_km)
    """
    known = _coerce_model(model)
    frequency = params.frequency_mhz
    tx_height = params.tx_antenna_height_m
    rx_height = params.rx_antenna_height_m
    environment = params.environment

    if known == PropagationModel.OKUMURA_HATA:
        return okumura_hata(
            min(frequency, OKUMURA_HATA_MAX_FREQUENCY_MHZ),
            tx_height,
            rx_height,
            distance_km,
            environment,
        )
    elif known == PropagationModel.COST231_HATA:
        return cost231_hata(frequency, tx_height, rx_height, distance_km, environment)
    elif known == PropagationModel.TR36814:
        return tr36814(frequency, tx_height, rx_height, distance_km, environment)

    logger.warning("Unknown propagation model %r; path loss defaults to 0 dB", model)
    if np.ndim(distance_km) == 0:
        return 0.0
    return np.zeros(np.shape(distance_km))
