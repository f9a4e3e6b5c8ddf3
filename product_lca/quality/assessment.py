"""
ISO 14044 Data Quality Assessment.

Material-level and product-level data quality evaluation:
- Per-material Pedigree Matrix, DQI, uncertainty and quality flags
- Impact-weighted aggregate DQI and propagated uncertainty
- Data source (provenance tier) distribution
- Temporal coverage and staleness
- Confidence tier and ISO 14044 compliance gaps

Impact weights always use absolute values so that avoided-burden credits
(negative impacts) keep their weight instead of cancelling it.

References:
- ISO 14044:2006 Section 4.2.3.6 - Data quality requirements
- ISO 14044:2006 Section 4.5.3.3 - Uncertainty analysis
- Weidema & Wesnaes (1996) Pedigree Matrix
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..exceptions import InvalidRecordError
from ..utils import percentage_of, round_half_up, round_to
from .pedigree import (
    DIMENSIONS,
    GRADE_DEFAULT_SCORES,
    PartialPedigree,
    PedigreeMatrix,
    QualityGrade,
    pedigree_dqi,
)
from .representativeness import GLOBAL_REGION, geographical_score, temporal_score
from .uncertainty import UncertaintyFactors, calculate_uncertainty, propagate_uncertainty

logger = logging.getLogger(__name__)

# Aggregate flag thresholds (percent). Comparisons are strict.
STALE_IMPACT_THRESHOLD = 20
LOW_QUALITY_IMPACT_THRESHOLD = 30
HIGH_UNCERTAINTY_THRESHOLD = 40
LOW_PRIMARY_THRESHOLD = 20
MIN_COMPLIANT_DQI = 60

# Per-material sigma_g above which a material is flagged
MATERIAL_HIGH_UNCERTAINTY = 0.5


class DataSourceTier(Enum):
    """Provenance of an impact value."""
    PRIMARY_VERIFIED = "primary_verified"
    SECONDARY_MODELLED = "secondary_modelled"
    SECONDARY_ESTIMATED = "secondary_estimated"


class ConfidenceLevel(Enum):
    """Overall confidence in a product footprint."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class FlagSeverity(Enum):
    """Severity of an aggregate quality flag."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass
class MaterialAssessmentInput:
    """
    Everything needed to assess one material's data quality.

    ``impact_value`` and any stated ``uncertainty_percent`` must be finite.
    """
    material_name: str
    material_id: str
    impact_value: float
    reference_year: int
    impact_unit: str = "kg CO2-eq"
    data_source: str = "unknown"
    data_source_tier: DataSourceTier = DataSourceTier.SECONDARY_MODELLED
    quality_grade: QualityGrade = QualityGrade.MEDIUM
    uncertainty_percent: Optional[float] = None
    pedigree: PartialPedigree = field(default_factory=PartialPedigree)
    data_year: Optional[int] = None
    data_region: str = GLOBAL_REGION
    study_region: str = GLOBAL_REGION
    flow_type: str = "material_inputs"

    def __post_init__(self):
        for name in ("impact_value", "uncertainty_percent"):
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                raise InvalidRecordError(
                    f"{self.material_name}: {name} must be finite, got {value!r}", name, value
                )


@dataclass(frozen=True)
class TemporalRepresentativeness:
    data_year: Optional[int]
    reference_year: int
    years_difference: Optional[int]
    is_stale: bool
    is_very_stale: bool

    def to_dict(self) -> Dict:
        return {
            "data_year": self.data_year,
            "reference_year": self.reference_year,
            "years_difference": self.years_difference,
            "is_stale": self.is_stale,
            "is_very_stale": self.is_very_stale,
        }


@dataclass(frozen=True)
class GeographicMatch:
    data_region: str
    study_region: str
    is_exact_match: bool
    is_regional_match: bool

    def to_dict(self) -> Dict:
        return {
            "data_region": self.data_region,
            "study_region": self.study_region,
            "is_exact_match": self.is_exact_match,
            "is_regional_match": self.is_regional_match,
        }


@dataclass(frozen=True)
class MaterialDataQuality:
    """Data quality record for one material."""
    material_name: str
    material_id: str
    impact_value: float
    impact_unit: str
    data_source: str
    data_source_tier: DataSourceTier
    quality_grade: QualityGrade
    pedigree_matrix: PedigreeMatrix
    pedigree_dqi: int
    uncertainty_percent: float
    uncertainty: UncertaintyFactors
    temporal_representativeness: TemporalRepresentativeness
    geographic_match: GeographicMatch
    flags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "material_name": self.material_name,
            "material_id": self.material_id,
            "impact_value": self.impact_value,
            "impact_unit": self.impact_unit,
            "data_source": self.data_source,
            "data_source_tier": self.data_source_tier.value,
            "quality_grade": self.quality_grade.value,
            "pedigree_matrix": self.pedigree_matrix.to_dict(),
            "pedigree_dqi": self.pedigree_dqi,
            "uncertainty_percent": self.uncertainty_percent,
            "uncertainty": self.uncertainty.to_dict(),
            "temporal_representativeness": self.temporal_representativeness.to_dict(),
            "geographic_match": self.geographic_match.to_dict(),
            "flags": list(self.flags),
        }


@dataclass(frozen=True)
class QualityFlag:
    severity: FlagSeverity
    code: str
    message: str
    affected_materials: Optional[List[str]] = None

    def to_dict(self) -> Dict:
        result = {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
        }
        if self.affected_materials is not None:
            result["affected_materials"] = list(self.affected_materials)
        return result


@dataclass(frozen=True)
class SourceShare:
    count: int = 0
    impact_share: int = 0

    def to_dict(self) -> Dict:
        return {"count": self.count, "impact_share": self.impact_share}


@dataclass(frozen=True)
class DataSourceBreakdown:
    primary_verified: SourceShare = SourceShare()
    secondary_modelled: SourceShare = SourceShare()
    secondary_estimated: SourceShare = SourceShare()

    def for_tier(self, tier: DataSourceTier) -> SourceShare:
        return getattr(self, tier.value)

    def to_dict(self) -> Dict:
        return {tier.value: self.for_tier(tier).to_dict() for tier in DataSourceTier}


@dataclass(frozen=True)
class TemporalCoverage:
    oldest_data: Optional[int] = None
    newest_data: Optional[int] = None
    average_age: Optional[int] = None
    stale_material_count: int = 0
    stale_impact_share: int = 0

    def to_dict(self) -> Dict:
        return {
            "oldest_data": self.oldest_data,
            "newest_data": self.newest_data,
            "average_age": self.average_age,
            "stale_material_count": self.stale_material_count,
            "stale_impact_share": self.stale_impact_share,
        }


@dataclass(frozen=True)
class AggregateDataQuality:
    """Product-level data quality verdict."""
    overall_dqi: int
    overall_confidence: ConfidenceLevel
    weighted_uncertainty: int
    data_source_breakdown: DataSourceBreakdown
    pedigree_aggregate: Dict[str, float]
    temporal_coverage: TemporalCoverage
    quality_flags: List[QualityFlag]
    iso_compliant: bool
    compliance_gaps: List[str]

    def to_dict(self) -> Dict:
        return {
            "overall_dqi": self.overall_dqi,
            "overall_confidence": self.overall_confidence.value,
            "weighted_uncertainty": self.weighted_uncertainty,
            "data_source_breakdown": self.data_source_breakdown.to_dict(),
            "pedigree_aggregate": dict(self.pedigree_aggregate),
            "temporal_coverage": self.temporal_coverage.to_dict(),
            "quality_flags": [f.to_dict() for f in self.quality_flags],
            "iso_compliant": self.iso_compliant,
            "compliance_gaps": list(self.compliance_gaps),
        }


# ============================================================================
# MATERIAL-LEVEL ASSESSMENT
# ============================================================================

def assess_material_data_quality(data: MaterialAssessmentInput) -> MaterialDataQuality:
    """Assess data quality for a single material."""
    data_region = data.data_region or GLOBAL_REGION
    study_region = data.study_region or GLOBAL_REGION

    temporal = temporal_score(data.data_year, data.reference_year)
    geographical = geographical_score(data_region, study_region)

    default_score = GRADE_DEFAULT_SCORES[data.quality_grade]
    explicit = data.pedigree
    pedigree = PedigreeMatrix(
        reliability=explicit.reliability or default_score,
        completeness=explicit.completeness or default_score,
        temporal=explicit.temporal or temporal.score,
        geographical=explicit.geographical or geographical.score,
        technological=explicit.technological or default_score,
    )

    dqi = pedigree_dqi(pedigree)
    uncertainty = calculate_uncertainty(pedigree, data.flow_type, data.uncertainty_percent)

    flags = []
    if temporal.is_very_stale:
        flags.append("DATA_VERY_STALE: Data is >6 years old")
    elif temporal.is_stale:
        flags.append("DATA_STALE: Data is >3 years old")

    if geographical.score >= 4:
        flags.append("GEO_MISMATCH: Data from different geographic region")

    if data.quality_grade is QualityGrade.LOW:
        flags.append("LOW_QUALITY: Factor has low data quality grade")

    if uncertainty.total_uncertainty > MATERIAL_HIGH_UNCERTAINTY:
        flags.append("HIGH_UNCERTAINTY: Uncertainty exceeds 50%")

    if data.uncertainty_percent is not None:
        uncertainty_percent = data.uncertainty_percent
    else:
        uncertainty_percent = round_half_up(uncertainty.total_uncertainty * 100)

    years_difference = abs(data.reference_year - data.data_year) if data.data_year else None

    return MaterialDataQuality(
        material_name=data.material_name,
        material_id=data.material_id,
        impact_value=data.impact_value,
        impact_unit=data.impact_unit,
        data_source=data.data_source,
        data_source_tier=data.data_source_tier,
        quality_grade=data.quality_grade,
        pedigree_matrix=pedigree,
        pedigree_dqi=dqi,
        uncertainty_percent=uncertainty_percent,
        uncertainty=uncertainty,
        temporal_representativeness=TemporalRepresentativeness(
            data_year=data.data_year or None,
            reference_year=data.reference_year,
            years_difference=years_difference,
            is_stale=temporal.is_stale,
            is_very_stale=temporal.is_very_stale,
        ),
        geographic_match=GeographicMatch(
            data_region=data_region,
            study_region=study_region,
            is_exact_match=geographical.is_exact_match,
            is_regional_match=geographical.is_regional_match,
        ),
        flags=flags,
    )


# ============================================================================
# AGGREGATE ASSESSMENT
# ============================================================================

def _no_data_result() -> AggregateDataQuality:
    return AggregateDataQuality(
        overall_dqi=0,
        overall_confidence=ConfidenceLevel.LOW,
        weighted_uncertainty=100,
        data_source_breakdown=DataSourceBreakdown(),
        pedigree_aggregate={d: 5.0 for d in DIMENSIONS},
        temporal_coverage=TemporalCoverage(),
        quality_flags=[QualityFlag(FlagSeverity.CRITICAL, "NO_DATA", "No materials to assess")],
        iso_compliant=False,
        compliance_gaps=["No materials added"],
    )


def _determine_confidence(dqi: int, uncertainty: int, primary_share: int) -> ConfidenceLevel:
    if dqi >= 80 and uncertainty <= 30 and primary_share >= 50:
        return ConfidenceLevel.HIGH
    if dqi >= 60 and uncertainty <= 50:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def assess_aggregate_data_quality(
    materials: Sequence[MaterialDataQuality],
    reference_year: int
) -> AggregateDataQuality:
    """
    Combine per-material quality records into a product-level verdict.

    An empty material list yields the NO_DATA sentinel result rather than
    raising.
    """
    if not materials:
        logger.warning("Data quality assessment requested with no materials")
        return _no_data_result()

    magnitudes = np.array([abs(m.impact_value) for m in materials], dtype=float)
    total_impact = float(magnitudes.sum())
    if total_impact > 0:
        weights = magnitudes / total_impact
    else:
        weights = np.zeros(len(materials))

    dqis = np.array([m.pedigree_dqi for m in materials], dtype=float)
    overall_dqi = round_half_up(float(np.dot(dqis, weights)))

    # Provenance breakdown
    shares = {}
    for tier in DataSourceTier:
        mask = np.array([m.data_source_tier is tier for m in materials])
        shares[tier.value] = SourceShare(
            count=int(mask.sum()),
            impact_share=round_half_up(float(weights[mask].sum()) * 100),
        )
    breakdown = DataSourceBreakdown(**shares)

    pedigree_aggregate = {}
    for dimension in DIMENSIONS:
        scores = np.array([getattr(m.pedigree_matrix, dimension) for m in materials], dtype=float)
        pedigree_aggregate[dimension] = round_to(float(np.dot(scores, weights)), 1)

    # Temporal coverage
    data_years = [
        m.temporal_representativeness.data_year
        for m in materials
        if m.temporal_representativeness.data_year is not None
    ]
    stale = [m for m in materials if m.temporal_representativeness.is_stale]
    stale_impact = sum(abs(m.impact_value) for m in stale)

    if data_years:
        average_age = round_half_up(sum(reference_year - y for y in data_years) / len(data_years))
        coverage = TemporalCoverage(
            oldest_data=min(data_years),
            newest_data=max(data_years),
            average_age=average_age,
            stale_material_count=len(stale),
            stale_impact_share=round_half_up(percentage_of(stale_impact, total_impact)),
        )
    else:
        coverage = TemporalCoverage(
            stale_material_count=len(stale),
            stale_impact_share=round_half_up(percentage_of(stale_impact, total_impact)),
        )

    weighted_uncertainty = propagate_uncertainty(materials, total_impact)

    flags: List[QualityFlag] = []
    gaps: List[str] = []

    if coverage.stale_impact_share > STALE_IMPACT_THRESHOLD:
        flags.append(QualityFlag(
            FlagSeverity.WARNING,
            "STALE_DATA",
            f"{coverage.stale_impact_share}% of impact uses data >3 years old",
            [m.material_name for m in stale],
        ))
        gaps.append("ISO 14044 4.2.3.6: Temporal representativeness - significant data is outdated")

    low_quality = [m for m in materials if m.quality_grade is QualityGrade.LOW]
    low_quality_share = round_half_up(
        percentage_of(sum(abs(m.impact_value) for m in low_quality), total_impact)
    )
    if low_quality_share > LOW_QUALITY_IMPACT_THRESHOLD:
        flags.append(QualityFlag(
            FlagSeverity.WARNING,
            "LOW_QUALITY_DATA",
            f"{low_quality_share}% of impact uses LOW quality data",
            [m.material_name for m in low_quality],
        ))
        gaps.append("ISO 14044 4.2.3.6: Data quality - significant reliance on low-quality estimates")

    geo_mismatch = [m for m in materials if m.pedigree_matrix.geographical >= 4]
    if geo_mismatch:
        flags.append(QualityFlag(
            FlagSeverity.INFO,
            "GEO_MISMATCH",
            f"{len(geo_mismatch)} material(s) use data from different geographic regions",
            [m.material_name for m in geo_mismatch],
        ))

    if weighted_uncertainty > HIGH_UNCERTAINTY_THRESHOLD:
        flags.append(QualityFlag(
            FlagSeverity.WARNING,
            "HIGH_UNCERTAINTY",
            f"Overall uncertainty is {weighted_uncertainty}% (recommend <40%)",
        ))
        gaps.append(
            "ISO 14044 4.5.3.3: Uncertainty analysis - overall uncertainty exceeds recommended threshold"
        )

    primary_share = breakdown.primary_verified.impact_share
    if primary_share < LOW_PRIMARY_THRESHOLD:
        flags.append(QualityFlag(
            FlagSeverity.INFO,
            "LOW_PRIMARY_DATA",
            f"Only {primary_share}% of impact uses verified primary data",
        ))

    confidence = _determine_confidence(overall_dqi, weighted_uncertainty, primary_share)
    iso_compliant = not gaps and overall_dqi >= MIN_COMPLIANT_DQI

    logger.info(
        f"Data quality: DQI={overall_dqi}, uncertainty={weighted_uncertainty}%, "
        f"confidence={confidence.value}, gaps={len(gaps)}"
    )

    return AggregateDataQuality(
        overall_dqi=overall_dqi,
        overall_confidence=confidence,
        weighted_uncertainty=weighted_uncertainty,
        data_source_breakdown=breakdown,
        pedigree_aggregate=pedigree_aggregate,
        temporal_coverage=coverage,
        quality_flags=flags,
        iso_compliant=iso_compliant,
        compliance_gaps=gaps,
    )
