"""
Data Quality Statement generation.

Renders an AggregateDataQuality as the Markdown section used in PCF
reports (ISO 14044 Section 4.2.3.6). Pure formatting, no I/O.
"""

from typing import List

from .assessment import AggregateDataQuality, FlagSeverity
from .pedigree import DIMENSIONS, score_interpretation

SEVERITY_ICONS = {
    FlagSeverity.CRITICAL: "\U0001F534",
    FlagSeverity.WARNING: "\U0001F7E1",
    FlagSeverity.INFO: "ℹ️",
}

GAP_ICON = "⚠️"


def generate_data_quality_statement(aggregate: AggregateDataQuality, reference_year: int) -> str:
    """Render the Data Quality Statement as Markdown."""
    lines: List[str] = []
    breakdown = aggregate.data_source_breakdown
    coverage = aggregate.temporal_coverage

    lines.append("## Data Quality Assessment (ISO 14044 Section 4.2.3.6)")
    lines.append("")
    lines.append(
        f"**Overall Data Quality Index:** {aggregate.overall_dqi}% "
        f"({aggregate.overall_confidence.value} confidence)"
    )
    lines.append(f"**Propagated Uncertainty:** ±{aggregate.weighted_uncertainty}% (95% CI)")
    lines.append("")

    lines.append("### Data Source Distribution")
    lines.append(
        f"- Primary verified data: {breakdown.primary_verified.count} materials "
        f"({breakdown.primary_verified.impact_share}% of impact)"
    )
    lines.append(
        f"- Secondary modelled data: {breakdown.secondary_modelled.count} materials "
        f"({breakdown.secondary_modelled.impact_share}% of impact)"
    )
    lines.append(
        f"- Estimated/proxy data: {breakdown.secondary_estimated.count} materials "
        f"({breakdown.secondary_estimated.impact_share}% of impact)"
    )
    lines.append("")

    lines.append("### Pedigree Matrix Summary (Weighted Average)")
    lines.append("| Dimension | Score (1-5) | Interpretation |")
    lines.append("|-----------|-------------|----------------|")
    for dimension in DIMENSIONS:
        score = aggregate.pedigree_aggregate[dimension]
        lines.append(
            f"| {dimension.capitalize()} | {score:.1f} | "
            f"{score_interpretation(dimension, score)} |"
        )
    lines.append("")

    lines.append("### Temporal Coverage")
    if coverage.oldest_data and coverage.newest_data:
        lines.append(f"- Data collection period: {coverage.oldest_data}–{coverage.newest_data}")
        lines.append(
            f"- Average data age: {coverage.average_age} years "
            f"(reference year: {reference_year})"
        )
    if coverage.stale_material_count > 0:
        lines.append(
            f"- **Warning:** {coverage.stale_material_count} materials use data >3 years old "
            f"({coverage.stale_impact_share}% of impact)"
        )

    if aggregate.quality_flags:
        lines.append("")
        lines.append("### Quality Flags")
        for flag in aggregate.quality_flags:
            lines.append(f"- {SEVERITY_ICONS[flag.severity]} **{flag.code}:** {flag.message}")

    if not aggregate.iso_compliant and aggregate.compliance_gaps:
        lines.append("")
        lines.append("### ISO 14044 Compliance Gaps")
        for gap in aggregate.compliance_gaps:
            lines.append(f"- {GAP_ICON} {gap}")

    return "\n".join(lines)
