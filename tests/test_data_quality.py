"""
Unit Tests for ISO 14044 Data Quality Assessment.

Tests material-level assessment, impact-weighted aggregation, quality
flags, confidence tiers and compliance gaps.
"""

import math

import pytest

from product_lca.exceptions import InvalidRecordError
from product_lca.quality import (
    ConfidenceLevel,
    DataSourceTier,
    FlagSeverity,
    MaterialAssessmentInput,
    PartialPedigree,
    QualityGrade,
    assess_aggregate_data_quality,
    assess_material_data_quality,
)

REFERENCE_YEAR = 2024


def _input(name, impact, **kwargs):
    params = dict(
        material_name=name,
        material_id=name.lower(),
        impact_value=impact,
        reference_year=REFERENCE_YEAR,
        data_year=REFERENCE_YEAR,
    )
    params.update(kwargs)
    return MaterialAssessmentInput(**params)


def _codes(aggregate):
    return [f.code for f in aggregate.quality_flags]


class TestMaterialAssessment:
    """Tests for single-material quality records."""

    def test_high_grade_recent_local(self, three_material_quality):
        """Test a recent, local, high-grade material."""
        a = three_material_quality[0]

        assert a.pedigree_matrix.to_dict() == {
            "reliability": 2,
            "completeness": 2,
            "temporal": 1,
            "geographical": 1,
            "technological": 2,
        }
        assert a.pedigree_dqi == 85
        assert a.uncertainty.total_uncertainty == pytest.approx(math.sqrt(0.0113))
        assert a.uncertainty_percent == 11
        assert a.flags == []
        assert a.geographic_match.is_exact_match

    def test_medium_grade_stale(self, three_material_quality):
        """Test a nine-year-old medium-grade material."""
        b = three_material_quality[1]

        assert b.pedigree_matrix.temporal == 3
        assert b.pedigree_dqi == 60
        assert b.temporal_representativeness.years_difference == 9
        assert b.temporal_representativeness.is_stale
        assert not b.temporal_representativeness.is_very_stale
        assert b.flags == ["DATA_STALE: Data is >3 years old"]

    def test_low_grade_unknown_year_foreign(self, three_material_quality):
        """Test an undated, foreign, low-grade material."""
        c = three_material_quality[2]

        assert c.pedigree_matrix.to_dict() == {
            "reliability": 4,
            "completeness": 4,
            "temporal": 5,
            "geographical": 4,
            "technological": 4,
        }
        assert c.pedigree_dqi == 20
        assert c.temporal_representativeness.data_year is None
        assert c.temporal_representativeness.years_difference is None
        codes = [flag.split(":")[0] for flag in c.flags]
        assert codes == ["DATA_VERY_STALE", "GEO_MISMATCH", "LOW_QUALITY"]

    def test_explicit_pedigree_overrides_derived(self):
        """Test explicit expert scores win over derived ones."""
        result = assess_material_data_quality(_input(
            "Sugar", 1.0,
            data_year=None,
            pedigree=PartialPedigree(reliability=1, temporal=2),
        ))

        assert result.pedigree_matrix.reliability == 1
        assert result.pedigree_matrix.temporal == 2
        assert result.pedigree_matrix.completeness == 3
        # staleness still follows the data year
        assert "DATA_VERY_STALE: Data is >6 years old" in result.flags

    def test_explicit_uncertainty(self):
        """Test a stated uncertainty is kept and drives sigma."""
        result = assess_material_data_quality(_input("Sugar", 1.0, uncertainty_percent=25))

        assert result.uncertainty_percent == 25
        assert result.uncertainty.total_uncertainty == pytest.approx(0.25)
        assert result.flags == []

    def test_high_material_uncertainty_flag(self):
        """Test sigma above 0.5 is flagged."""
        result = assess_material_data_quality(_input("Cocoa", 1.0, uncertainty_percent=60))

        assert "HIGH_UNCERTAINTY: Uncertainty exceeds 50%" in result.flags

    @pytest.mark.parametrize("field_name,value", [
        ("impact_value", float("nan")),
        ("impact_value", float("inf")),
        ("uncertainty_percent", float("nan")),
    ])
    def test_non_finite_values_rejected(self, field_name, value):
        """Test NaN and infinity are refused before any rounding."""
        with pytest.raises(InvalidRecordError) as exc_info:
            _input("Hops", 1.0, **{field_name: value})

        assert exc_info.value.field_name == field_name

    def test_to_dict(self, three_material_quality):
        data = three_material_quality[2].to_dict()

        assert data["data_source_tier"] == "secondary_estimated"
        assert data["quality_grade"] == "LOW"
        assert data["pedigree_dqi"] == 20
        assert data["geographic_match"]["data_region"] == "CN"
        assert "confidence_interval_95" in data["uncertainty"]


class TestAggregateAssessment:
    """Tests for the product-level verdict."""

    @pytest.fixture
    def aggregate(self, three_material_quality):
        return assess_aggregate_data_quality(three_material_quality, REFERENCE_YEAR)

    def test_overall_dqi_and_uncertainty(self, aggregate):
        """Test impact-weighted DQI and propagated uncertainty."""
        assert aggregate.overall_dqi == 70
        assert aggregate.weighted_uncertainty == 9
        assert aggregate.overall_confidence is ConfidenceLevel.MEDIUM

    def test_source_breakdown(self, aggregate):
        """Test provenance shares by impact."""
        breakdown = aggregate.data_source_breakdown

        assert breakdown.primary_verified.count == 1
        assert breakdown.primary_verified.impact_share == 59
        assert breakdown.secondary_modelled.impact_share == 29
        assert breakdown.secondary_estimated.impact_share == 12
        assert breakdown.for_tier(DataSourceTier.SECONDARY_ESTIMATED).count == 1

    def test_pedigree_aggregate(self, aggregate):
        """Test weighted average score per dimension."""
        assert aggregate.pedigree_aggregate == {
            "reliability": 2.5,
            "completeness": 2.5,
            "temporal": 2.1,
            "geographical": 1.4,
            "technological": 2.5,
        }

    def test_temporal_coverage(self, aggregate):
        coverage = aggregate.temporal_coverage

        assert coverage.oldest_data == 2015
        assert coverage.newest_data == 2023
        assert coverage.average_age == 5
        assert coverage.stale_material_count == 2
        assert coverage.stale_impact_share == 41

    def test_flags_and_gaps(self, aggregate):
        """Test stale data warning and geographic info flag."""
        assert _codes(aggregate) == ["STALE_DATA", "GEO_MISMATCH"]

        stale, geo = aggregate.quality_flags
        assert stale.severity is FlagSeverity.WARNING
        assert stale.affected_materials == ["Hops", "Yeast"]
        assert geo.severity is FlagSeverity.INFO
        assert geo.affected_materials == ["Yeast"]

        assert aggregate.compliance_gaps == [
            "ISO 14044 4.2.3.6: Temporal representativeness - significant data is outdated"
        ]
        assert not aggregate.iso_compliant

    def test_no_materials(self):
        """Test the NO_DATA sentinel."""
        result = assess_aggregate_data_quality([], REFERENCE_YEAR)

        assert result.overall_dqi == 0
        assert result.overall_confidence is ConfidenceLevel.LOW
        assert result.weighted_uncertainty == 100
        assert _codes(result) == ["NO_DATA"]
        assert result.quality_flags[0].severity is FlagSeverity.CRITICAL
        assert result.compliance_gaps == ["No materials added"]
        assert not result.iso_compliant
        assert set(result.pedigree_aggregate.values()) == {5.0}

    def test_high_confidence_compliant(self):
        """Test best-case primary data."""
        result = assess_aggregate_data_quality([
            assess_material_data_quality(_input(
                "Water", 4.0,
                data_source_tier=DataSourceTier.PRIMARY_VERIFIED,
                pedigree=PartialPedigree(1, 1, 1, 1, 1),
            ))
        ], REFERENCE_YEAR)

        assert result.overall_dqi == 100
        assert result.weighted_uncertainty == 10
        assert result.overall_confidence is ConfidenceLevel.HIGH
        assert result.quality_flags == []
        assert result.iso_compliant

    def test_stale_threshold_is_strict(self):
        """Test exactly 20% stale impact raises no flag, 21% does."""
        def run(stale_impact):
            return assess_aggregate_data_quality([
                assess_material_data_quality(_input("Fresh", 100.0 - stale_impact)),
                assess_material_data_quality(_input("Old", stale_impact, data_year=2017)),
            ], REFERENCE_YEAR)

        assert "STALE_DATA" not in _codes(run(20.0))
        assert "STALE_DATA" in _codes(run(21.0))

    def test_low_quality_share(self):
        """Test LOW-grade data above 30% of impact."""
        result = assess_aggregate_data_quality([
            assess_material_data_quality(_input("Good", 60.0)),
            assess_material_data_quality(_input("Proxy", 40.0, quality_grade=QualityGrade.LOW)),
        ], REFERENCE_YEAR)

        assert "LOW_QUALITY_DATA" in _codes(result)
        assert any("low-quality" in gap for gap in result.compliance_gaps)

    def test_high_uncertainty(self):
        """Test propagated uncertainty above 40%."""
        result = assess_aggregate_data_quality([
            assess_material_data_quality(_input("Cocoa", 1.0, uncertainty_percent=50)),
        ], REFERENCE_YEAR)

        assert result.weighted_uncertainty == 50
        assert "HIGH_UNCERTAINTY" in _codes(result)
        assert any("4.5.3.3" in gap for gap in result.compliance_gaps)
        assert result.overall_confidence is ConfidenceLevel.MEDIUM

    def test_low_primary_data(self):
        """Test secondary-only inventories are flagged."""
        result = assess_aggregate_data_quality([
            assess_material_data_quality(_input("Sugar", 1.0)),
        ], REFERENCE_YEAR)

        assert "LOW_PRIMARY_DATA" in _codes(result)

    def test_credits_weighted_by_magnitude(self):
        """Test a negative impact keeps its weight."""
        result = assess_aggregate_data_quality([
            assess_material_data_quality(_input("Virgin", 5.0, pedigree=PartialPedigree(1, 1, 1, 1, 1))),
            assess_material_data_quality(_input("Recycling credit", -5.0, pedigree=PartialPedigree(5, 5, 5, 5, 5))),
        ], REFERENCE_YEAR)

        assert result.overall_dqi == 50

    def test_all_zero_impacts(self):
        """Test zero-impact inventories do not divide by zero."""
        result = assess_aggregate_data_quality([
            assess_material_data_quality(_input("Tap water", 0.0)),
        ], REFERENCE_YEAR)

        assert result.overall_dqi == 0
        assert result.weighted_uncertainty == 0
        assert result.temporal_coverage.stale_impact_share == 0

    def test_deterministic(self, three_material_quality):
        first = assess_aggregate_data_quality(three_material_quality, REFERENCE_YEAR)
        second = assess_aggregate_data_quality(three_material_quality, REFERENCE_YEAR)

        assert first.to_dict() == second.to_dict()
