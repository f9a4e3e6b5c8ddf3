"""
Uncertainty Propagation for LCA Inventory Data.

Converts Pedigree Matrix scores (or an explicitly stated uncertainty) into a
lognormal geometric standard deviation and a 95% confidence interval, and
combines per-material uncertainties into a whole-product figure.

Aggregation assumes independent material uncertainties (weighted
root-sum-of-squares). Correlated inputs are therefore under-estimated.

References:
- Frischknecht, R. et al. (2007). ecoinvent uncertainty methodology
- ISO 14044:2006 Section 4.5.3.3 - Uncertainty analysis
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np

from ..utils import round_half_up
from .pedigree import PedigreeMatrix, pedigree_variance

logger = logging.getLogger(__name__)

Z_95 = 1.96

# Basic uncertainty (sigma_b) by flow type, ecoinvent methodology
BASIC_UNCERTAINTY: Dict[str, float] = {
    "combustion_emissions": 0.05,
    "process_emissions": 0.10,
    "agricultural_emissions": 0.20,
    "transport_emissions": 0.10,
    "electricity_use": 0.05,
    "material_inputs": 0.10,
    "packaging_materials": 0.10,
    "water_use": 0.15,
    "waste_generation": 0.20,
    "land_use": 0.30,
    "default": 0.15,
}


@dataclass(frozen=True)
class UncertaintyFactors:
    """Geometric standard deviation components and 95% interval multipliers."""
    basic_uncertainty: float       # sigma_b
    pedigree_uncertainty: float    # sigma_p
    total_uncertainty: float       # sigma_g
    ci95_lower: float
    ci95_upper: float

    def to_dict(self) -> Dict:
        return {
            "basic_uncertainty": self.basic_uncertainty,
            "pedigree_uncertainty": self.pedigree_uncertainty,
            "total_uncertainty": self.total_uncertainty,
            "confidence_interval_95": {
                "lower": self.ci95_lower,
                "upper": self.ci95_upper,
            },
        }


def basic_uncertainty(flow_type: str) -> float:
    """sigma_b for a flow type, falling back to the ``default`` entry."""
    return BASIC_UNCERTAINTY.get(flow_type) or BASIC_UNCERTAINTY["default"]


def _lognormal_interval(sigma: float):
    lower, upper = np.exp(np.array([-Z_95, Z_95]) * sigma)
    return float(lower), float(upper)


def calculate_uncertainty(
    pedigree: PedigreeMatrix,
    flow_type: str = "default",
    explicit_uncertainty_percent: Optional[float] = None
) -> UncertaintyFactors:
    """
    Uncertainty factors for one flow.

    A positive explicit percentage overrides the pedigree calculation
    entirely. Otherwise sigma_g = sqrt(sigma_b^2 + sigma_p^2) with sigma_p^2
    taken from the pedigree variance table.
    """
    if explicit_uncertainty_percent is not None and explicit_uncertainty_percent > 0:
        sigma = explicit_uncertainty_percent / 100
        lower, upper = _lognormal_interval(sigma)
        return UncertaintyFactors(sigma, 0.0, sigma, lower, upper)

    basic_variance = basic_uncertainty(flow_type) ** 2
    extra_variance = pedigree_variance(pedigree)
    total_sigma = float(np.sqrt(basic_variance + extra_variance))
    lower, upper = _lognormal_interval(total_sigma)

    return UncertaintyFactors(
        basic_uncertainty=float(np.sqrt(basic_variance)),
        pedigree_uncertainty=float(np.sqrt(extra_variance)),
        total_uncertainty=total_sigma,
        ci95_lower=lower,
        ci95_upper=upper,
    )


def propagate_uncertainty(materials: Sequence, total_impact: float) -> int:
    """
    Whole-product uncertainty in percent.

    Weighted root-sum-of-squares over material quality records (anything
    with ``impact_value`` and ``uncertainty.total_uncertainty``), weight
    w_i = impact_i / total_impact. Returns 0 for a zero total.
    """
    if total_impact == 0:
        return 0

    impacts = np.array([m.impact_value for m in materials], dtype=float)
    sigmas = np.array([m.uncertainty.total_uncertainty for m in materials], dtype=float)
    weights = impacts / total_impact
    sum_variance = float(np.sum(weights ** 2 * sigmas ** 2))

    return round_half_up(np.sqrt(sum_variance) * 100)
