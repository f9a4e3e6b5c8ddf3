"""
Product Life-Cycle Impact Aggregation and Data Quality Assessment.

Pure computation engine for product carbon footprints and LCA results:
- Aggregation of pre-characterised material impacts and facility
  allocations into midpoint category, scope and lifecycle-stage totals
- ISO 14044 data quality assessment with Pedigree Matrix scoring and
  propagated lognormal uncertainty
- Markdown Data Quality Statement for PCF reports

Modules:
    quality - Pedigree scoring, representativeness, uncertainty, assessment
    impacts - Impact categories, input records, GHG split, aggregation
    engine - Combined product assessment
    config - Configuration classes
    cli - Command-line entry point

References:
- ISO 14040:2006 / ISO 14044:2006 - LCA principles and requirements
- ISO 14067:2018 - Carbon footprint of products
"""

from .engine import ProductAssessment, ProductLCAEngine, assess_product
from .exceptions import InvalidRecordError, PedigreeScoreError, ProductLCAError
from .impacts import (
    AggregatedImpacts,
    FacilityAllocation,
    ImpactCategory,
    MaterialImpactRecord,
    aggregate_product_impacts,
)
from .quality import (
    AggregateDataQuality,
    MaterialDataQuality,
    PedigreeMatrix,
    assess_aggregate_data_quality,
    assess_material_data_quality,
    generate_data_quality_statement,
)

__version__ = "2.1.0"

__all__ = [
    'ProductAssessment',
    'ProductLCAEngine',
    'assess_product',
    'ProductLCAError',
    'InvalidRecordError',
    'PedigreeScoreError',
    'AggregatedImpacts',
    'FacilityAllocation',
    'ImpactCategory',
    'MaterialImpactRecord',
    'aggregate_product_impacts',
    'AggregateDataQuality',
    'MaterialDataQuality',
    'PedigreeMatrix',
    'assess_aggregate_data_quality',
    'assess_material_data_quality',
    'generate_data_quality_statement',
]
