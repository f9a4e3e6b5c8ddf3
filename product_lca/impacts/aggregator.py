"""
Product Impact Aggregator.

Sums per-material and per-facility impact contributions into product-level
results:
- Totals for every midpoint impact category
- Scope 1/2/3 split (GHG Protocol)
- Contribution category and lifecycle stage totals
- GHG gas-type decomposition
- Ranked material and facility breakdowns with percentage shares

Material impact values are already quantity x factor; nothing here
multiplies by quantity. Packaging is recognised by an explicit tag or, as
an approximation, by keywords in the material name.

Methodology: ISO 14067 / GHG Protocol Product Standard
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..config import get_config
from ..utils import percentage_of
from .categories import (
    ContributionCategory,
    EmissionScope,
    ImpactCategory,
    LifeCycleStage,
)
from .ghg import GHGBreakdown, GHGDecomposer
from .records import FacilityAllocation, FacilitySource, MaterialImpactRecord

logger = logging.getLogger(__name__)

PACKAGING_MATERIAL_TYPES = ("packaging", "packaging_material")


@dataclass
class MaterialContribution:
    """One material's share of the product climate impact."""
    material_id: str
    material_name: str
    is_packaging: bool
    climate: float
    transport: float
    end_of_life: float
    percentage: float = 0.0

    @property
    def impact(self) -> float:
        return self.climate + self.transport + self.end_of_life

    def to_dict(self) -> Dict:
        return {
            "material_id": self.material_id,
            "material_name": self.material_name,
            "category": (ContributionCategory.PACKAGING if self.is_packaging
                         else ContributionCategory.MATERIALS).value,
            "climate": self.climate,
            "transport": self.transport,
            "end_of_life": self.end_of_life,
            "impact": self.impact,
            "percentage": self.percentage,
        }


@dataclass
class FacilityContribution:
    """One facility's allocated emissions."""
    facility_id: str
    facility_name: str
    source: FacilitySource
    production_share_percent: float
    scope1: float
    scope2: float
    scope3: float
    percentage: float = 0.0

    @property
    def impact(self) -> float:
        return self.scope1 + self.scope2 + self.scope3

    def to_dict(self) -> Dict:
        return {
            "facility_id": self.facility_id,
            "facility_name": self.facility_name,
            "source": self.source.value,
            "production_share_percent": self.production_share_percent,
            "scope1": self.scope1,
            "scope2": self.scope2,
            "scope3": self.scope3,
            "impact": self.impact,
            "percentage": self.percentage,
        }


@dataclass
class ValidationWarning:
    """Non-fatal problem found while aggregating."""
    type: str
    message: str
    total_share_percent: Optional[float] = None

    def to_dict(self) -> Dict:
        return {
            "type": self.type,
            "message": self.message,
            "total_share_percent": self.total_share_percent,
        }


@dataclass
class AggregatedImpacts:
    """Product-level impact totals and breakdowns."""
    impacts: Dict[ImpactCategory, float]
    total_transport: float
    total_waste: float
    by_scope: Dict[EmissionScope, float]
    by_category: Dict[ContributionCategory, float]
    by_lifecycle_stage: Dict[LifeCycleStage, float]
    ghg: GHGBreakdown
    material_breakdown: List[MaterialContribution] = field(default_factory=list)
    facility_breakdown: List[FacilityContribution] = field(default_factory=list)
    validation_warnings: List[ValidationWarning] = field(default_factory=list)
    calculation_version: str = ""

    @property
    def total_carbon_footprint(self) -> float:
        return self.impacts[ImpactCategory.CLIMATE]

    @property
    def materials_count(self) -> int:
        return len(self.material_breakdown)

    @property
    def facilities_count(self) -> int:
        return len(self.facility_breakdown)

    def to_dict(self) -> Dict:
        return {
            "impacts": {c.value: v for c, v in self.impacts.items()},
            "units": {c.value: c.unit for c in self.impacts},
            "total_carbon_footprint": self.total_carbon_footprint,
            "total_transport": self.total_transport,
            "total_waste": self.total_waste,
            "breakdown": {
                "by_scope": {s.value: v for s, v in self.by_scope.items()},
                "by_category": {c.value: v for c, v in self.by_category.items()},
                "by_lifecycle_stage": {s.value: v for s, v in self.by_lifecycle_stage.items()},
                "by_material": [m.to_dict() for m in self.material_breakdown],
                "by_facility": [f.to_dict() for f in self.facility_breakdown],
            },
            "ghg_breakdown": self.ghg.to_dict(),
            "validation_warnings": [w.to_dict() for w in self.validation_warnings],
            "materials_count": self.materials_count,
            "facilities_count": self.facilities_count,
            "calculation_version": self.calculation_version,
        }


MaterialInput = Union[MaterialImpactRecord, Mapping[str, Any]]
FacilityInput = Union[FacilityAllocation, Mapping[str, Any]]


def as_material_record(item: MaterialInput) -> MaterialImpactRecord:
    if isinstance(item, MaterialImpactRecord):
        return item
    return MaterialImpactRecord.from_dict(item)


def as_facility_allocation(item: FacilityInput) -> FacilityAllocation:
    if isinstance(item, FacilityAllocation):
        return item
    return FacilityAllocation.from_dict(item)


def is_packaging(material: MaterialImpactRecord, keywords: Iterable[str] = ("bottle", "cap", "label")) -> bool:
    """
    Classify a material as packaging.

    An explicit packaging tag or packaging material type wins; otherwise a
    case-insensitive keyword match on the name is used. The keyword match
    is a heuristic ("capsicum" matches "cap").
    """
    if material.packaging_category:
        return True
    if material.material_type.lower() in PACKAGING_MATERIAL_TYPES:
        return True
    name = material.name.lower()
    return any(keyword in name for keyword in keywords)


def validate_allocation_shares(
    facilities: Sequence[FacilityAllocation],
    tolerance_percent: float = 1.0
) -> List[ValidationWarning]:
    """Check that production shares across facilities sum to ~100%."""
    if not facilities:
        return []

    total_share = sum(f.production_volume_share_percent for f in facilities)
    for f in facilities:
        logger.debug(
            f"Facility {f.facility_id} ({f.source.value}): "
            f"{f.production_volume_share_percent:.1f}%"
        )

    if total_share < 100 - tolerance_percent:
        logger.warning(f"Under-allocation: production shares sum to {total_share:.1f}%")
        return [ValidationWarning(
            "under_allocation",
            f"Production shares sum to {total_share:.1f}% instead of 100%",
            total_share,
        )]
    if total_share > 100 + tolerance_percent:
        logger.error(f"Over-allocation: production shares sum to {total_share:.1f}%")
        return [ValidationWarning(
            "over_allocation",
            f"Production shares sum to {total_share:.1f}% instead of 100%",
            total_share,
        )]

    logger.debug(f"Allocation validation passed: {total_share:.1f}%")
    return []


def allocate_facility(
    facility: FacilityAllocation,
    functional_unit: float = 1.0,
    default_scope1_share: float = 0.35
) -> FacilityContribution:
    """
    Emissions attributable to the product from one facility.

    allocated = functional_unit x share% / 100 x intensity. Owned
    facilities split into Scope 1/2 by their own recorded ratio; contract
    manufacturers go entirely to Scope 3.
    """
    allocated = (
        functional_unit
        * (facility.production_volume_share_percent / 100)
        * facility.facility_emissions_intensity
    )

    scope1 = scope2 = scope3 = 0.0
    if facility.source is FacilitySource.CONTRACT_MANUFACTURER:
        scope3 = allocated
    else:
        recorded = facility.facility_scope1 + facility.facility_scope2
        if recorded > 0:
            scope1_share = facility.facility_scope1 / recorded
        else:
            scope1_share = default_scope1_share
        scope1 = allocated * scope1_share
        scope2 = allocated - scope1

    return FacilityContribution(
        facility_id=facility.facility_id,
        facility_name=facility.facility_name,
        source=facility.source,
        production_share_percent=facility.production_volume_share_percent,
        scope1=scope1,
        scope2=scope2,
        scope3=scope3,
    )


def aggregate_product_impacts(
    materials: Sequence[MaterialInput],
    facility_allocations: Sequence[FacilityInput] = (),
    functional_unit: Optional[float] = None,
    config=None
) -> AggregatedImpacts:
    """
    Aggregate material and facility contributions into product impacts.

    Args:
        materials: Material impact records (or upstream rows).
        facility_allocations: Facility allocation records (or upstream rows).
        functional_unit: Units of product the facility intensities apply to.
        config: Configuration class; defaults to ``get_config()``.

    Returns:
        AggregatedImpacts with totals and ranked breakdowns. Identical
        inputs always produce identical results.
    """
    cfg = config or get_config()
    if functional_unit is None:
        functional_unit = cfg.DEFAULT_FUNCTIONAL_UNIT

    records = [as_material_record(m) for m in materials]
    facilities = [as_facility_allocation(f) for f in facility_allocations]

    logger.info(
        f"Aggregating impacts: {len(records)} materials, {len(facilities)} facilities"
    )

    totals = {category: 0.0 for category in ImpactCategory}
    by_scope = {scope: 0.0 for scope in EmissionScope}
    by_category = {category: 0.0 for category in ContributionCategory}
    by_stage = {stage: 0.0 for stage in LifeCycleStage}
    total_transport = 0.0
    total_waste = 0.0
    ghg = GHGDecomposer(fossil_share=cfg.FOSSIL_SHARE)

    material_breakdown: List[MaterialContribution] = []
    for material in records:
        for category in ImpactCategory:
            totals[category] += material.impact(category)

        climate = material.climate
        transport = material.impact_transport
        end_of_life = material.impact_end_of_life
        packaging = is_packaging(material, cfg.PACKAGING_KEYWORDS)

        totals[ImpactCategory.CLIMATE] += transport + end_of_life
        total_transport += transport
        total_waste += material.impact_waste
        by_scope[EmissionScope.SCOPE_3] += climate + transport + end_of_life

        if packaging:
            by_category[ContributionCategory.PACKAGING] += climate
            by_stage[LifeCycleStage.PACKAGING] += climate
        else:
            by_category[ContributionCategory.MATERIALS] += climate
            by_stage[LifeCycleStage.RAW_MATERIALS] += climate
        by_category[ContributionCategory.TRANSPORT] += transport
        by_stage[LifeCycleStage.DISTRIBUTION] += transport
        by_category[ContributionCategory.END_OF_LIFE] += end_of_life
        by_stage[LifeCycleStage.END_OF_LIFE] += end_of_life

        ghg.add_material(material)
        ghg.add_fossil(transport + end_of_life)

        contribution = MaterialContribution(
            material_id=material.id,
            material_name=material.name,
            is_packaging=packaging,
            climate=climate,
            transport=transport,
            end_of_life=end_of_life,
        )
        if material.quantity > 0 and contribution.impact == 0:
            logger.warning(
                f"Material '{material.name}' has quantity {material.quantity} {material.unit} "
                f"but zero climate impact"
            )
        logger.debug(
            f"Material: {material.name}, Climate: {climate:.4f}, "
            f"Transport: {transport:.4f} kg CO2e"
        )
        material_breakdown.append(contribution)

    warnings = validate_allocation_shares(facilities, cfg.ALLOCATION_TOLERANCE_PERCENT)

    facility_breakdown: List[FacilityContribution] = []
    for facility in facilities:
        contribution = allocate_facility(facility, functional_unit, cfg.DEFAULT_SCOPE1_SHARE)
        allocated = contribution.impact

        by_scope[EmissionScope.SCOPE_1] += contribution.scope1
        by_scope[EmissionScope.SCOPE_2] += contribution.scope2
        by_scope[EmissionScope.SCOPE_3] += contribution.scope3
        by_category[ContributionCategory.PRODUCTION] += allocated
        by_stage[LifeCycleStage.PROCESSING] += allocated
        totals[ImpactCategory.CLIMATE] += allocated
        ghg.add_fossil(allocated)

        logger.debug(
            f"Facility {facility.facility_id}: S1={contribution.scope1:.4f}, "
            f"S2={contribution.scope2:.4f}, S3={contribution.scope3:.4f}"
        )
        facility_breakdown.append(contribution)

    total_climate = totals[ImpactCategory.CLIMATE]

    for entry in material_breakdown:
        entry.percentage = percentage_of(entry.impact, total_climate)
    for entry in facility_breakdown:
        entry.percentage = percentage_of(entry.impact, total_climate)

    # sorted() is stable, so equal magnitudes keep input order
    material_breakdown = sorted(material_breakdown, key=lambda m: abs(m.impact), reverse=True)
    facility_breakdown = sorted(facility_breakdown, key=lambda f: abs(f.impact), reverse=True)

    result = AggregatedImpacts(
        impacts=totals,
        total_transport=total_transport,
        total_waste=total_waste,
        by_scope=by_scope,
        by_category=by_category,
        by_lifecycle_stage=by_stage,
        ghg=ghg.reconcile(total_climate),
        material_breakdown=material_breakdown,
        facility_breakdown=facility_breakdown,
        validation_warnings=warnings,
        calculation_version=cfg.CALCULATION_VERSION,
    )

    logger.info(
        f"Aggregation complete: {total_climate:.4f} kg CO2e "
        f"(S1={by_scope[EmissionScope.SCOPE_1]:.4f}, S2={by_scope[EmissionScope.SCOPE_2]:.4f}, "
        f"S3={by_scope[EmissionScope.SCOPE_3]:.4f})"
    )

    return result
