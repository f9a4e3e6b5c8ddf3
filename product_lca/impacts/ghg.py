"""
GHG gas-type decomposition.

Splits the climate total into carbon origin (fossil, biogenic, land-use
change) and a gas inventory (CO2 by origin, CH4, N2O) for ISO 14067
disclosure.

Materials carrying explicit carbon-origin fields use them. Otherwise a
coarse default applies: 85% fossil / 15% biogenic CO2. Transport and
facility emissions are treated as 100% fossil. CH4 and N2O are estimated
from the biogenic share (and, for agricultural ingredients, from the
climate impact) and carved out of the CO2 they would otherwise be counted
in, so the gas inventory sums back to the climate total.

References:
- IPCC AR6 WG1 Chapter 7 (2021) - GWP100 values
- ISO 14067:2018 - Carbon footprint of products
"""

import logging
from dataclasses import dataclass
from typing import Dict

from .records import MaterialImpactRecord

logger = logging.getLogger(__name__)

IPCC_AR6_GWP100: Dict[str, float] = {
    "CO2": 1.0,
    "CH4": 27.9,
    "N2O": 273.0,
}

# Share of biogenic CO2-eq attributed to CH4 and N2O
BIOGENIC_CH4_SHARE = 0.02
BIOGENIC_N2O_SHARE = 0.01

# Share of an agricultural ingredient's climate impact attributed to N2O
AGRICULTURAL_N2O_SHARE = 0.005

RECONCILIATION_TOLERANCE = 0.10


@dataclass
class GHGBreakdown:
    """Carbon origin and gas inventory, all CO2 figures in kg CO2-eq."""
    fossil: float = 0.0
    biogenic: float = 0.0
    land_use_change: float = 0.0
    co2_fossil: float = 0.0
    co2_biogenic: float = 0.0
    co2_land_use_change: float = 0.0
    ch4_kg: float = 0.0
    n2o_kg: float = 0.0
    hfc_pfc: float = 0.0
    reconciliation_adjustment: float = 0.0

    @property
    def ch4_co2e(self) -> float:
        return self.ch4_kg * IPCC_AR6_GWP100["CH4"]

    @property
    def n2o_co2e(self) -> float:
        return self.n2o_kg * IPCC_AR6_GWP100["N2O"]

    @property
    def total_co2e(self) -> float:
        """Sum of the gas inventory in CO2-eq."""
        return (
            self.co2_fossil + self.co2_biogenic + self.co2_land_use_change
            + self.ch4_co2e + self.n2o_co2e + self.hfc_pfc
        )

    def to_dict(self) -> Dict:
        return {
            "carbon_origin": {
                "fossil": self.fossil,
                "biogenic": self.biogenic,
                "land_use_change": self.land_use_change,
            },
            "gas_inventory": {
                "co2_fossil": self.co2_fossil,
                "co2_biogenic": self.co2_biogenic,
                "co2_land_use_change": self.co2_land_use_change,
                "methane": self.ch4_kg,
                "nitrous_oxide": self.n2o_kg,
                "hfc_pfc": self.hfc_pfc,
            },
            "gwp_factors": {
                "methane_gwp100": IPCC_AR6_GWP100["CH4"],
                "n2o_gwp100": IPCC_AR6_GWP100["N2O"],
                "method": "IPCC AR6",
            },
            "co2e_contributions": {
                "co2_fossil": self.co2_fossil,
                "co2_biogenic": self.co2_biogenic,
                "co2_land_use_change": self.co2_land_use_change,
                "ch4_as_co2e": self.ch4_co2e,
                "n2o_as_co2e": self.n2o_co2e,
                "hfc_pfc": self.hfc_pfc,
            },
            "reconciliation_adjustment": self.reconciliation_adjustment,
        }


class GHGDecomposer:
    """
    Accumulates the gas-type split over one aggregation run.

    Not shared between runs; the aggregator creates one per call.
    """

    def __init__(self, fossil_share: float = 0.85):
        self.fossil_share = fossil_share
        self.breakdown = GHGBreakdown()

    def add_material(self, material: MaterialImpactRecord):
        """Split a material's own climate impact (excluding transport and end-of-life)."""
        b = self.breakdown
        climate = material.climate

        if material.has_carbon_origin_split:
            fossil = material.impact_climate_fossil
            biogenic = material.impact_climate_biogenic
            dluc = material.impact_climate_dluc
        else:
            fossil = climate * self.fossil_share
            biogenic = climate * (1 - self.fossil_share)
            dluc = 0.0

        b.fossil += fossil
        b.biogenic += biogenic
        b.land_use_change += dluc

        co2_fossil = fossil
        co2_biogenic = biogenic

        if biogenic > 0 and material.quantity > 0:
            ch4_co2e = biogenic * BIOGENIC_CH4_SHARE
            n2o_co2e = biogenic * BIOGENIC_N2O_SHARE
            b.ch4_kg += ch4_co2e / IPCC_AR6_GWP100["CH4"]
            b.n2o_kg += n2o_co2e / IPCC_AR6_GWP100["N2O"]
            co2_biogenic -= ch4_co2e + n2o_co2e

        if material.material_type.lower() == "ingredient" and material.quantity > 0 and climate > 0:
            ag_n2o_co2e = climate * AGRICULTURAL_N2O_SHARE
            b.n2o_kg += ag_n2o_co2e / IPCC_AR6_GWP100["N2O"]
            co2_fossil -= ag_n2o_co2e

        b.co2_fossil += co2_fossil
        b.co2_biogenic += co2_biogenic
        b.co2_land_use_change += dluc

    def add_fossil(self, amount: float):
        """Add emissions that are entirely fossil CO2 (transport, facilities, end-of-life)."""
        self.breakdown.fossil += amount
        self.breakdown.co2_fossil += amount

    def reconcile(self, total_climate: float) -> GHGBreakdown:
        """
        Close the gas inventory against the climate total.

        If the inventory falls short by more than the tolerance, the gap is
        assigned to fossil CO2.
        """
        b = self.breakdown
        if total_climate > 0:
            discrepancy = total_climate - b.total_co2e
            if abs(discrepancy) > total_climate * RECONCILIATION_TOLERANCE and discrepancy > 0:
                logger.warning(
                    f"GHG inventory short of climate total by {discrepancy:.4f} kg CO2-eq; "
                    f"assigning to fossil CO2"
                )
                b.co2_fossil += discrepancy
                b.fossil += discrepancy
                b.reconciliation_adjustment = discrepancy
        return b
