"""
Temporal and geographical representativeness.

Derives the temporal and geographical Pedigree dimensions from auxiliary
metadata when no expert score has been supplied: the age of the data
relative to the study reference year, and the match between the region the
data was collected in and the region under study.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

GLOBAL_REGION = "GLO"
EU_REGION = "EU"

EU_COUNTRIES: FrozenSet[str] = frozenset({
    "AT", "BE", "BG", "HR", "CY", "CZ", "DK", "EE", "FI", "FR", "DE", "GR", "HU", "IE",
    "IT", "LV", "LT", "LU", "MT", "NL", "PL", "PT", "RO", "SK", "SI", "ES", "SE",
})
NORTH_AMERICA: FrozenSet[str] = frozenset({"US", "CA", "MX"})
SOUTH_EAST_ASIA: FrozenSet[str] = frozenset({"TH", "VN", "ID", "MY", "PH", "SG"})

# Data age cut-points (exclusive upper bound in years -> score)
TEMPORAL_CUT_POINTS = ((3, 1), (6, 2), (10, 3), (15, 4))


@dataclass(frozen=True)
class TemporalScore:
    """Temporal score with staleness markers."""
    score: int
    is_stale: bool
    is_very_stale: bool

    def to_dict(self) -> Dict:
        return {
            "score": self.score,
            "is_stale": self.is_stale,
            "is_very_stale": self.is_very_stale,
        }


@dataclass(frozen=True)
class GeographicalScore:
    """Geographical score with match classification."""
    score: int
    is_exact_match: bool
    is_regional_match: bool

    def to_dict(self) -> Dict:
        return {
            "score": self.score,
            "is_exact_match": self.is_exact_match,
            "is_regional_match": self.is_regional_match,
        }


def temporal_score(data_year: Optional[int], reference_year: int) -> TemporalScore:
    """
    Score data age against the reference year.

    Unknown years get the worst score. Otherwise the absolute difference is
    bucketed: <3 -> 1, <6 -> 2, <10 -> 3, <15 -> 4, else 5. Scores 3+ are
    stale, 4+ very stale.
    """
    if not data_year:
        return TemporalScore(5, True, True)

    diff = abs(reference_year - data_year)
    score = 5
    for upper, cut_score in TEMPORAL_CUT_POINTS:
        if diff < upper:
            score = cut_score
            break

    return TemporalScore(score, score >= 3, score >= 4)


def geographical_score(data_region: str, study_region: str) -> GeographicalScore:
    """
    Score the match between data region and study region.

    Checks run in a fixed order: exact match, EU average vs EU member (or
    two EU members), global average, same non-EU region, then mismatch.
    """
    data = (data_region or GLOBAL_REGION).upper()
    study = (study_region or GLOBAL_REGION).upper()

    if data == study:
        return GeographicalScore(1, True, True)

    def in_same_region(countries: FrozenSet[str]) -> bool:
        return data in countries and study in countries

    if ((data == EU_REGION and study in EU_COUNTRIES)
            or (study == EU_REGION and data in EU_COUNTRIES)
            or in_same_region(EU_COUNTRIES)):
        return GeographicalScore(2, False, True)

    if data == GLOBAL_REGION or study == GLOBAL_REGION:
        return GeographicalScore(3, False, False)

    if in_same_region(NORTH_AMERICA) or in_same_region(SOUTH_EAST_ASIA):
        return GeographicalScore(3, False, True)

    return GeographicalScore(4, False, False)
