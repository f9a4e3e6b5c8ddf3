"""
Tests for the Markdown Data Quality Statement.
"""

import pytest

from product_lca.quality import (
    MaterialAssessmentInput,
    assess_aggregate_data_quality,
    assess_material_data_quality,
    generate_data_quality_statement,
)

REFERENCE_YEAR = 2024


class TestDataQualityStatement:
    """Tests for statement rendering."""

    @pytest.fixture
    def statement(self, three_material_quality):
        aggregate = assess_aggregate_data_quality(three_material_quality, REFERENCE_YEAR)
        return generate_data_quality_statement(aggregate, REFERENCE_YEAR)

    def test_headline(self, statement):
        lines = statement.split("\n")

        assert lines[0] == "## Data Quality Assessment (ISO 14044 Section 4.2.3.6)"
        assert "**Overall Data Quality Index:** 70% (MEDIUM confidence)" in lines
        assert "**Propagated Uncertainty:** ±9% (95% CI)" in lines

    def test_source_distribution(self, statement):
        assert "### Data Source Distribution" in statement
        assert "- Primary verified data: 1 materials (59% of impact)" in statement
        assert "- Secondary modelled data: 1 materials (29% of impact)" in statement
        assert "- Estimated/proxy data: 1 materials (12% of impact)" in statement

    def test_pedigree_table(self, statement):
        assert "| Dimension | Score (1-5) | Interpretation |" in statement
        assert "| Geographical | 1.4 | Data from area under study |" in statement
        assert "| Temporal | 2.1 | 3-6 years difference to reference year |" in statement

    def test_temporal_coverage(self, statement):
        assert "- Data collection period: 2015–2023" in statement
        assert "- Average data age: 5 years (reference year: 2024)" in statement
        assert "- **Warning:** 2 materials use data >3 years old (41% of impact)" in statement

    def test_flags_and_gaps(self, statement):
        assert "### Quality Flags" in statement
        assert "- \U0001F7E1 **STALE_DATA:** 41% of impact uses data >3 years old" in statement
        assert "ℹ️ **GEO_MISMATCH:**" in statement
        assert "### ISO 14044 Compliance Gaps" in statement
        assert "- ⚠️ ISO 14044 4.2.3.6: Temporal representativeness" in statement

    def test_section_order(self, statement):
        headers = [line for line in statement.split("\n") if line.startswith("#")]

        assert headers == [
            "## Data Quality Assessment (ISO 14044 Section 4.2.3.6)",
            "### Data Source Distribution",
            "### Pedigree Matrix Summary (Weighted Average)",
            "### Temporal Coverage",
            "### Quality Flags",
            "### ISO 14044 Compliance Gaps",
        ]

    def test_no_data(self):
        """Test the statement for an empty inventory."""
        statement = generate_data_quality_statement(
            assess_aggregate_data_quality([], REFERENCE_YEAR), REFERENCE_YEAR
        )

        assert "**Overall Data Quality Index:** 0% (LOW confidence)" in statement
        assert "- \U0001F534 **NO_DATA:** No materials to assess" in statement
        assert "- ⚠️ No materials added" in statement
        assert "Data collection period" not in statement
        assert "| Reliability | 5.0 | Non-qualified estimate |" in statement

    def test_zero_impact_pedigree_table(self):
        """Test a weightless inventory does not claim best-quality criteria."""
        aggregate = assess_aggregate_data_quality([
            assess_material_data_quality(MaterialAssessmentInput("Tap water", "water", 0.0, REFERENCE_YEAR)),
        ], REFERENCE_YEAR)
        statement = generate_data_quality_statement(aggregate, REFERENCE_YEAR)

        assert "| Reliability | 0.0 | n/a |" in statement
        assert "Verified data based on measurements" not in statement

    def test_deterministic(self, three_material_quality):
        aggregate = assess_aggregate_data_quality(three_material_quality, REFERENCE_YEAR)

        assert (generate_data_quality_statement(aggregate, REFERENCE_YEAR)
                == generate_data_quality_statement(aggregate, REFERENCE_YEAR))
