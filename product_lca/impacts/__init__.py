"""
Product Impact Aggregation.

This module sums pre-characterised material impacts and facility
allocations into product-level results:
- Midpoint impact category totals (ReCiPe 2016)
- Scope 1/2/3, contribution category and lifecycle stage totals
- GHG gas-type decomposition (IPCC AR6)
- Ranked material and facility breakdowns

References:
- ISO 14067:2018 - Carbon footprint of products
- GHG Protocol Product Life Cycle Accounting and Reporting Standard
"""

from .categories import (
    ImpactCategory,
    LifeCycleStage,
    ContributionCategory,
    EmissionScope,
    CATEGORY_UNITS,
)
from .records import (
    MaterialImpactRecord,
    FacilityAllocation,
    FacilitySource,
)
from .ghg import (
    IPCC_AR6_GWP100,
    GHGBreakdown,
    GHGDecomposer,
)
from .aggregator import (
    MaterialContribution,
    FacilityContribution,
    ValidationWarning,
    AggregatedImpacts,
    is_packaging,
    validate_allocation_shares,
    allocate_facility,
    aggregate_product_impacts,
)

__all__ = [
    # Categories
    'ImpactCategory',
    'LifeCycleStage',
    'ContributionCategory',
    'EmissionScope',
    'CATEGORY_UNITS',
    # Records
    'MaterialImpactRecord',
    'FacilityAllocation',
    'FacilitySource',
    # GHG
    'IPCC_AR6_GWP100',
    'GHGBreakdown',
    'GHGDecomposer',
    # Aggregator
    'MaterialContribution',
    'FacilityContribution',
    'ValidationWarning',
    'AggregatedImpacts',
    'is_packaging',
    'validate_allocation_shares',
    'allocate_facility',
    'aggregate_product_impacts',
]
