"""Coverage Bounded Context - Link Budget.

Maximum allowed path loss (MAPL) between an eNodeB and a mobile:

    MAPL = EIRP + (rx gain - rx cable loss) - rx sensitivity - margins
    EIRP = tx power + tx gain - tx cable loss
"""

from __future__ import annotations

from domain.coverage.value_objects import LinkBudget, LTEParameters


def link_budget(params: LTEParameters) -> LinkBudget:
    """Compute the full link budget breakdown for a parameter snapshot."""
    eirp = params.tx_power_dbm + params.tx_antenna_gain_dbi - params.tx_cable_loss_db
    rx_gain = params.rx_antenna_gain_dbi - params.rx_cable_loss_db
    margins = params.shadowing_margin_db + params.interference_margin_db

    return LinkBudget(
        eirp_dbm=eirp,
        rx_gain_db=rx_gain,
        total_margin_db=margins,
        rx_sensitivity_dbm=params.rx_sensitivity_dbm,
        max_allowed_path_loss_db=eirp + rx_gain - params.rx_sensitivity_dbm - margins,
    )


def max_allowed_path_loss(params: LTEParameters) -> float:
    """Maximum path loss (dB) the link can tolerate."""
    return link_budget(params).max_allowed_path_loss_db
