"""
Product LCA Engine.

Runs impact aggregation and data quality assessment over the same set of
resolved material records and facility allocations, and attaches both
results to a single product assessment.

The engine is a pure function of its inputs: no I/O, no shared state, no
wall-clock dependence. Fetching inputs and persisting outputs belong to the
caller.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .config import get_config
from .impacts.aggregator import (
    AggregatedImpacts,
    FacilityInput,
    MaterialInput,
    as_facility_allocation,
    as_material_record,
    aggregate_product_impacts,
)
from .impacts.categories import CATEGORY_UNITS, ImpactCategory
from .impacts.records import MaterialImpactRecord
from .quality.assessment import (
    AggregateDataQuality,
    MaterialAssessmentInput,
    MaterialDataQuality,
    assess_aggregate_data_quality,
    assess_material_data_quality,
)
from .quality.statement import generate_data_quality_statement

logger = logging.getLogger(__name__)


@dataclass
class ProductAssessment:
    """Impacts and data quality for one product."""
    reference_year: int
    study_region: str
    functional_unit: float
    impacts: AggregatedImpacts
    material_quality: List[MaterialDataQuality]
    data_quality: AggregateDataQuality
    statement: str

    def to_dict(self) -> Dict:
        return {
            "reference_year": self.reference_year,
            "study_region": self.study_region,
            "functional_unit": self.functional_unit,
            "impacts": self.impacts.to_dict(),
            "material_quality": [m.to_dict() for m in self.material_quality],
            "data_quality": self.data_quality.to_dict(),
            "data_quality_statement": self.statement,
        }


class ProductLCAEngine:
    """
    Product LCA Engine.

    Holds configuration only; every call is independent.
    """

    def __init__(self, config=None):
        self.config = config or get_config()

    def material_assessment_input(
        self,
        material: MaterialImpactRecord,
        reference_year: int,
        study_region: Optional[str] = None
    ) -> MaterialAssessmentInput:
        """Quality assessment input for a material, weighted by its gross climate impact."""
        return MaterialAssessmentInput(
            material_name=material.name,
            material_id=material.id,
            impact_value=material.quality_weight,
            reference_year=reference_year,
            impact_unit=CATEGORY_UNITS[ImpactCategory.CLIMATE],
            data_source=material.data_source,
            data_source_tier=material.data_source_tier,
            quality_grade=material.quality_grade,
            uncertainty_percent=material.uncertainty_percent,
            pedigree=material.pedigree,
            data_year=material.data_year,
            data_region=material.data_region,
            study_region=study_region or self.config.DEFAULT_STUDY_REGION,
            flow_type=material.flow_type or self.config.DEFAULT_FLOW_TYPE,
        )

    def assess_quality(
        self,
        materials: Sequence[MaterialImpactRecord],
        reference_year: int,
        study_region: Optional[str] = None
    ):
        """Per-material quality records and their aggregate."""
        material_quality = [
            assess_material_data_quality(
                self.material_assessment_input(m, reference_year, study_region)
            )
            for m in materials
        ]
        return material_quality, assess_aggregate_data_quality(material_quality, reference_year)

    def assess(
        self,
        materials: Sequence[MaterialInput],
        facility_allocations: Sequence[FacilityInput] = (),
        reference_year: Optional[int] = None,
        study_region: Optional[str] = None,
        functional_unit: Optional[float] = None
    ) -> ProductAssessment:
        """Run aggregation and quality assessment for one product."""
        if reference_year is None:
            raise ValueError("reference_year is required")

        records = [as_material_record(m) for m in materials]
        facilities = [as_facility_allocation(f) for f in facility_allocations]
        region = study_region or self.config.DEFAULT_STUDY_REGION
        if functional_unit is None:
            functional_unit = self.config.DEFAULT_FUNCTIONAL_UNIT

        logger.info(
            f"Assessing product: {len(records)} materials, reference year {reference_year}, "
            f"study region {region}"
        )

        impacts = aggregate_product_impacts(records, facilities, functional_unit, self.config)
        material_quality, data_quality = self.assess_quality(records, reference_year, region)
        statement = generate_data_quality_statement(data_quality, reference_year)

        logger.info(
            f"Assessment complete: {impacts.total_carbon_footprint:.4f} kg CO2e, "
            f"DQI {data_quality.overall_dqi} ({data_quality.overall_confidence.value})"
        )

        return ProductAssessment(
            reference_year=reference_year,
            study_region=region,
            functional_unit=functional_unit,
            impacts=impacts,
            material_quality=material_quality,
            data_quality=data_quality,
            statement=statement,
        )


def assess_product(
    materials: Sequence[MaterialInput],
    facility_allocations: Sequence[FacilityInput] = (),
    reference_year: Optional[int] = None,
    study_region: Optional[str] = None,
    functional_unit: Optional[float] = None,
    config=None
) -> ProductAssessment:
    """Convenience wrapper around ProductLCAEngine.assess."""
    engine = ProductLCAEngine(config)
    return engine.assess(
        materials,
        facility_allocations,
        reference_year=reference_year,
        study_region=study_region,
        functional_unit=functional_unit,
    )
