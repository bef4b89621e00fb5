"""Siting Bounded Context - Domain Services.

Pure domain logic converting a coverage range into a site plan.
Each site is a 3-sector eNodeB covering one hexagonal cell.
"""

from __future__ import annotations

import math

from domain.coverage.value_objects import PropagationModel
from domain.siting.value_objects import (
    CELL_RADIUS_FACTOR,
    OVERLAP_FACTOR,
    SECTOR_COUNT,
    CellSizing,
)

# Upper frequency (MHz, inclusive) at which each Hata variant is recommended
OKUMURA_HATA_RECOMMENDED_MAX_MHZ = 1500.0
COST231_HATA_RECOMMENDED_MAX_MHZ = 2000.0


def cell_radius(max_range_km: float) -> float:
    """Usable cell radius (km), reduced from max range for overlap."""
    return max_range_km * CELL_RADIUS_FACTOR


def hexagon_area(radius_km: float) -> float:
    """Area (km²) of a regular hexagon with the given circumradius."""
    return (3 * math.sqrt(3) / 2) * radius_km**2


def required_sites(target_area_km2: float, cell_area_km2: float) -> int:
    """Number of sites needed to cover the target area, at least 1.

    The target area is inflated by OVERLAP_FACTOR before dividing by the
    per-site cell area.
    """
    effective_area = target_area_km2 * OVERLAP_FACTOR
    return max(1, math.ceil(effective_area / cell_area_km2))


def size_cell(max_range_km: float, target_area_km2: float) -> CellSizing:
    """Derive cell footprint and site count from a maximum range.

    Args:
        max_range_km: Maximum usable distance from the range solver
        target_area_km2: Area to cover

    Returns:
        CellSizing with radius, hexagonal area and number of sites
    """
    radius = cell_radius(max_range_km)
    area = hexagon_area(radius)
    return CellSizing(
        cell_radius_km=radius,
        cell_area_km2=area,
        number_of_sites=required_sites(target_area_km2, area),
        sector_count=SECTOR_COUNT,
        overlap_factor=OVERLAP_FACTOR,
    )


def recommend_model(frequency_mhz: float) -> PropagationModel:
    """Pick the propagation model best suited to a carrier frequency.

    <= 1500 MHz -> Okumura-Hata, <= 2000 MHz -> COST 231-Hata, else 3GPP.
    """
    if frequency_mhz <= OKUMURA_HATA_RECOMMENDED_MAX_MHZ:
        return PropagationModel.OKUMURA_HATA
    if frequency_mhz <= COST231_HATA_RECOMMENDED_MAX_MHZ:
        return PropagationModel.COST231_HATA
    return PropagationModel.TR36814
