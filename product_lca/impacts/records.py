"""
Input records for impact aggregation.

Material impact records and facility allocation records arrive from the
emission-factor resolution and facility modules as plain mappings (database
rows or JSON). ``from_dict`` is the boundary where free-form provenance and
grade strings become closed enums; records are immutable afterwards.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..exceptions import InvalidRecordError, PedigreeScoreError
from ..quality.assessment import DataSourceTier
from ..quality.pedigree import PartialPedigree, QualityGrade
from ..quality.representativeness import GLOBAL_REGION
from .categories import ImpactCategory


class FacilitySource(Enum):
    """Ownership of a production facility."""
    OWNED = "owned"
    CONTRACT_MANUFACTURER = "contract_manufacturer"


def _number(row: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = row.get(key)
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRecordError(f"Field '{key}' is not numeric: {value!r}", key, value)
    if not math.isfinite(number):
        raise InvalidRecordError(f"Field '{key}' is not finite: {value!r}", key, value)
    return number


def _optional_number(row: Mapping[str, Any], key: str) -> Optional[float]:
    if row.get(key) is None:
        return None
    return _number(row, key)


def _enum(enum_cls, row: Mapping[str, Any], key: str, default):
    value = row.get(key)
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidRecordError(f"Unknown {key}: {value!r}", key, value)


@dataclass(frozen=True)
class MaterialImpactRecord:
    """
    One product input (ingredient, packaging component or process flow).

    Impact values are already quantity x factor and must never be
    multiplied by ``quantity`` again.
    """
    id: str
    name: str
    quantity: float = 0.0
    unit: str = "kg"
    impacts: Dict[ImpactCategory, float] = field(default_factory=dict)
    impact_transport: float = 0.0
    impact_end_of_life: float = 0.0
    impact_waste: float = 0.0
    impact_climate_fossil: float = 0.0
    impact_climate_biogenic: float = 0.0
    impact_climate_dluc: float = 0.0
    data_source_tier: DataSourceTier = DataSourceTier.SECONDARY_MODELLED
    quality_grade: QualityGrade = QualityGrade.MEDIUM
    data_source: str = "unknown"
    uncertainty_percent: Optional[float] = None
    pedigree: PartialPedigree = field(default_factory=PartialPedigree)
    data_year: Optional[int] = None
    data_region: str = GLOBAL_REGION
    material_type: str = ""
    packaging_category: Optional[str] = None
    flow_type: str = "material_inputs"

    def impact(self, category: ImpactCategory) -> float:
        return self.impacts.get(category, 0.0)

    @property
    def climate(self) -> float:
        return self.impact(ImpactCategory.CLIMATE)

    @property
    def climate_contribution(self) -> float:
        """Climate impact including transport and end-of-life."""
        return self.climate + self.impact_transport + self.impact_end_of_life

    @property
    def quality_weight(self) -> float:
        """Gross climate magnitude; an end-of-life credit adds to it instead of netting it out."""
        return abs(self.climate) + abs(self.impact_transport) + abs(self.impact_end_of_life)

    @property
    def has_carbon_origin_split(self) -> bool:
        return any((self.impact_climate_fossil, self.impact_climate_biogenic, self.impact_climate_dluc))

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "MaterialImpactRecord":
        """Build a record from an upstream row."""
        name = row.get("name") or row.get("material_name")
        if not name:
            raise InvalidRecordError("Material record has no name", "name", None)

        try:
            pedigree = PartialPedigree.from_dict(row.get("pedigree"))
        except PedigreeScoreError as e:
            raise InvalidRecordError(str(e), "pedigree", row.get("pedigree")) from e
        except (TypeError, AttributeError) as e:
            raise InvalidRecordError(f"Invalid pedigree: {e}", "pedigree", row.get("pedigree")) from e

        data_year = row.get("data_year")
        if data_year is not None:
            try:
                data_year = int(data_year)
            except (TypeError, ValueError):
                raise InvalidRecordError(f"Invalid data_year: {data_year!r}", "data_year", data_year)

        return cls(
            id=str(row.get("id") or name),
            name=str(name),
            quantity=_number(row, "quantity"),
            unit=row.get("unit") or "kg",
            impacts={c: _number(row, c.field_name) for c in ImpactCategory},
            impact_transport=_number(row, "impact_transport"),
            impact_end_of_life=_number(row, "impact_end_of_life"),
            impact_waste=_number(row, "impact_waste"),
            impact_climate_fossil=_number(row, "impact_climate_fossil"),
            impact_climate_biogenic=_number(row, "impact_climate_biogenic"),
            impact_climate_dluc=_number(row, "impact_climate_dluc"),
            data_source_tier=_enum(
                DataSourceTier, row, "data_source_tier", DataSourceTier.SECONDARY_MODELLED
            ),
            quality_grade=_enum(QualityGrade, row, "quality_grade", QualityGrade.MEDIUM),
            data_source=row.get("data_source") or "unknown",
            uncertainty_percent=_optional_number(row, "uncertainty_percent"),
            pedigree=pedigree,
            data_year=data_year,
            data_region=row.get("data_region") or GLOBAL_REGION,
            material_type=row.get("material_type") or "",
            packaging_category=row.get("packaging_category") or None,
            flow_type=row.get("flow_type") or "material_inputs",
        )


@dataclass(frozen=True)
class FacilityAllocation:
    """Share of a production facility's emissions attributed to the product."""
    facility_id: str
    facility_name: str
    production_volume_share_percent: float
    facility_emissions_intensity: float
    facility_scope1: float = 0.0
    facility_scope2: float = 0.0
    source: FacilitySource = FacilitySource.OWNED

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "FacilityAllocation":
        facility_id = row.get("facility_id")
        if facility_id is None:
            raise InvalidRecordError("Facility allocation has no facility_id", "facility_id", None)

        return cls(
            facility_id=str(facility_id),
            facility_name=row.get("facility_name") or str(facility_id),
            production_volume_share_percent=_number(row, "production_volume_share_percent"),
            facility_emissions_intensity=_number(row, "facility_emissions_intensity"),
            facility_scope1=_number(row, "facility_scope1"),
            facility_scope2=_number(row, "facility_scope2"),
            source=_enum(FacilitySource, row, "source", FacilitySource.OWNED),
        )
