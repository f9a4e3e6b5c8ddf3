"""
Pedigree Matrix Scoring.

Five-dimensional qualitative data quality scoring for LCA inventory data:
- Reliability, completeness, temporal, geographical and technological
  correlation, each scored 1 (best) to 5 (worst)
- Conversion of a matrix to a 0-100 Data Quality Index (DQI)
- Conversion of a matrix to an additional log-space variance

References:
- Weidema, B.P. & Wesnaes, M.S. (1996). Data quality management for
  life cycle inventories - an example of using data quality indicators
- Frischknecht, R. et al. (2007). Overview and Methodology, ecoinvent report No. 1
- ISO 14044:2006 Section 4.2.3.6 - Data quality requirements
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from ..exceptions import PedigreeScoreError
from ..utils import round_half_up

DIMENSIONS = ("reliability", "completeness", "temporal", "geographical", "technological")

VALID_SCORES = (1, 2, 3, 4, 5)


class QualityGrade(Enum):
    """Upstream emission-factor quality grade."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# Scoring criteria per Weidema & Wesnaes (1996) / ecoinvent data quality guidelines
PEDIGREE_CRITERIA: Mapping[str, Mapping[int, str]] = {
    "reliability": {
        1: "Verified data based on measurements",
        2: "Verified data partly based on assumptions, or non-verified data based on measurements",
        3: "Non-verified data partly based on qualified estimates",
        4: "Qualified estimate (e.g., by industrial expert)",
        5: "Non-qualified estimate",
    },
    "completeness": {
        1: "Representative data from all sites relevant for the market, over adequate period",
        2: "Representative data from >50% of sites, over adequate period",
        3: "Representative data from <50% of sites, OR >50% but shorter periods",
        4: "Representative data from only one site, OR some sites but shorter periods",
        5: "Unknown representativeness or very limited data",
    },
    "temporal": {
        1: "Less than 3 years difference to reference year",
        2: "3-6 years difference to reference year",
        3: "6-10 years difference to reference year",
        4: "10-15 years difference to reference year",
        5: "Age unknown or more than 15 years difference",
    },
    "geographical": {
        1: "Data from area under study",
        2: "Average data from larger area in which study area is included",
        3: "Data from area with similar production conditions",
        4: "Data from area with slightly similar production conditions",
        5: "Data from unknown or distinctly different area",
    },
    "technological": {
        1: "Data from enterprises, processes and materials under study",
        2: "Data from processes and materials under study, but different enterprises",
        3: "Data from processes and materials under study, but different technology",
        4: "Data on related processes or materials",
        5: "Data on related processes at laboratory scale or different technology",
    },
}

# Additional variance (sigma^2 in log space) per dimension and score,
# Frischknecht et al. (2007)
PEDIGREE_UNCERTAINTY: Mapping[str, Mapping[int, float]] = {
    "reliability": {1: 0.00, 2: 0.0006, 3: 0.002, 4: 0.008, 5: 0.04},
    "completeness": {1: 0.00, 2: 0.0001, 3: 0.0006, 4: 0.002, 5: 0.008},
    "temporal": {1: 0.00, 2: 0.0002, 3: 0.002, 4: 0.008, 5: 0.04},
    "geographical": {1: 0.00, 2: 0.000025, 3: 0.0001, 4: 0.0006, 5: 0.002},
    "technological": {1: 0.00, 2: 0.0006, 3: 0.008, 4: 0.04, 5: 0.12},
}

# Default reliability / completeness / technological scores by grade
GRADE_DEFAULT_SCORES: Mapping[QualityGrade, int] = {
    QualityGrade.HIGH: 2,
    QualityGrade.MEDIUM: 3,
    QualityGrade.LOW: 4,
}


def _check_score(dimension: str, score) -> None:
    if isinstance(score, bool) or score not in VALID_SCORES:
        raise PedigreeScoreError(
            f"Pedigree score for {dimension} must be one of 1..5, got {score!r}"
        )


@dataclass(frozen=True)
class PedigreeMatrix:
    """Pedigree Matrix scores, 1 = best quality, 5 = worst quality."""

    reliability: int
    completeness: int
    temporal: int
    geographical: int
    technological: int

    def __post_init__(self):
        for dimension in DIMENSIONS:
            _check_score(dimension, getattr(self, dimension))

    @property
    def total(self) -> int:
        """Sum of all five scores, 5 (best) to 25 (worst)."""
        return sum(getattr(self, d) for d in DIMENSIONS)

    def to_dict(self) -> Dict[str, int]:
        return {d: getattr(self, d) for d in DIMENSIONS}

    @classmethod
    def uniform(cls, score: int) -> "PedigreeMatrix":
        """Matrix with the same score in every dimension."""
        return cls(score, score, score, score, score)


@dataclass(frozen=True)
class PartialPedigree:
    """Explicitly supplied expert scores; unset dimensions are derived."""

    reliability: Optional[int] = None
    completeness: Optional[int] = None
    temporal: Optional[int] = None
    geographical: Optional[int] = None
    technological: Optional[int] = None

    def __post_init__(self):
        for dimension in DIMENSIONS:
            score = getattr(self, dimension)
            if score is not None:
                _check_score(dimension, score)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, int]]) -> "PartialPedigree":
        if not data:
            return cls()
        return cls(**{d: data.get(d) for d in DIMENSIONS})

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {d: getattr(self, d) for d in DIMENSIONS}


def pedigree_dqi(matrix: PedigreeMatrix) -> int:
    """
    Data Quality Index (0-100) from a Pedigree Matrix.

    The score sum runs from 5 (all ones) to 25 (all fives) and is mapped
    linearly so that 5 -> 100 and 25 -> 0.
    """
    return round_half_up(100 - ((matrix.total - 5) / 20) * 100)


def pedigree_variance(matrix: PedigreeMatrix) -> float:
    """Additional log-space variance contributed by the pedigree scores."""
    return sum(PEDIGREE_UNCERTAINTY[d][getattr(matrix, d)] for d in DIMENSIONS)


def grade_to_default_pedigree(grade: QualityGrade) -> PedigreeMatrix:
    """Map a quality grade to a uniform default matrix."""
    return PedigreeMatrix.uniform(GRADE_DEFAULT_SCORES[grade])


def score_interpretation(dimension: str, score: float, max_length: int = 60) -> str:
    """
    Criteria text for a (possibly averaged) score, truncated for tables.

    Averages below 1 only arise when no material carries weight; they
    have no criteria and render as "n/a".
    """
    if score < 1:
        return "n/a"
    rounded = min(max(round_half_up(score), 1), 5)
    criteria = PEDIGREE_CRITERIA[dimension][rounded]
    if len(criteria) > max_length:
        return criteria[:max_length - 3] + "..."
    return criteria
