"""
Data Quality Assessment for Product LCA.

This module implements ISO 14044 data quality evaluation:
- Pedigree Matrix scoring and DQI
- Temporal and geographical representativeness
- Lognormal uncertainty and its propagation
- Material-level and aggregate quality verdicts
- Markdown Data Quality Statement

References:
- ISO 14044:2006 - LCA Requirements and Guidelines
- Weidema & Wesnaes (1996) - Pedigree Matrix
- Frischknecht et al. (2007) - ecoinvent uncertainty methodology
"""

from .pedigree import (
    PedigreeMatrix,
    PartialPedigree,
    QualityGrade,
    PEDIGREE_CRITERIA,
    PEDIGREE_UNCERTAINTY,
    pedigree_dqi,
    pedigree_variance,
    grade_to_default_pedigree,
)
from .representativeness import (
    TemporalScore,
    GeographicalScore,
    temporal_score,
    geographical_score,
)
from .uncertainty import (
    BASIC_UNCERTAINTY,
    UncertaintyFactors,
    calculate_uncertainty,
    propagate_uncertainty,
)
from .assessment import (
    DataSourceTier,
    ConfidenceLevel,
    FlagSeverity,
    MaterialAssessmentInput,
    MaterialDataQuality,
    QualityFlag,
    AggregateDataQuality,
    assess_material_data_quality,
    assess_aggregate_data_quality,
)
from .statement import generate_data_quality_statement

__all__ = [
    # Pedigree
    'PedigreeMatrix',
    'PartialPedigree',
    'QualityGrade',
    'PEDIGREE_CRITERIA',
    'PEDIGREE_UNCERTAINTY',
    'pedigree_dqi',
    'pedigree_variance',
    'grade_to_default_pedigree',
    # Representativeness
    'TemporalScore',
    'GeographicalScore',
    'temporal_score',
    'geographical_score',
    # Uncertainty
    'BASIC_UNCERTAINTY',
    'UncertaintyFactors',
    'calculate_uncertainty',
    'propagate_uncertainty',
    # Assessment
    'DataSourceTier',
    'ConfidenceLevel',
    'FlagSeverity',
    'MaterialAssessmentInput',
    'MaterialDataQuality',
    'QualityFlag',
    'AggregateDataQuality',
    'assess_material_data_quality',
    'assess_aggregate_data_quality',
    # Statement
    'generate_data_quality_statement',
]
