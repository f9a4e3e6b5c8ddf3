"""
Impact categories, lifecycle stages and emission scopes.

Midpoint categories follow ReCiPe 2016 naming as stored on upstream
material records (``impact_<key>``). Values on those records are already
characterised totals for the material's quantity.

References:
- ReCiPe 2016 Midpoint characterization
- AWARE water scarcity method
- GHG Protocol Corporate Standard (scopes)
"""

from enum import Enum
from typing import Dict


class ImpactCategory(Enum):
    """Midpoint environmental impact categories."""
    CLIMATE = "climate"  # kg CO2-eq (GWP100)
    OZONE_DEPLETION = "ozone_depletion"  # kg CFC-11-eq
    IONISING_RADIATION = "ionising_radiation"  # kBq Co-60-eq
    PHOTOCHEMICAL_OZONE_FORMATION = "photochemical_ozone_formation"  # kg NOx-eq
    PARTICULATE_MATTER = "particulate_matter"  # kg PM2.5-eq
    HUMAN_TOXICITY_CARCINOGENIC = "human_toxicity_carcinogenic"  # kg 1,4-DCB
    HUMAN_TOXICITY_NON_CARCINOGENIC = "human_toxicity_non_carcinogenic"  # kg 1,4-DCB
    TERRESTRIAL_ACIDIFICATION = "terrestrial_acidification"  # kg SO2-eq
    FRESHWATER_EUTROPHICATION = "freshwater_eutrophication"  # kg P-eq
    MARINE_EUTROPHICATION = "marine_eutrophication"  # kg N-eq
    TERRESTRIAL_ECOTOXICITY = "terrestrial_ecotoxicity"  # kg 1,4-DCB
    FRESHWATER_ECOTOXICITY = "freshwater_ecotoxicity"  # kg 1,4-DCB
    MARINE_ECOTOXICITY = "marine_ecotoxicity"  # kg 1,4-DCB
    LAND_USE = "land"  # m2a crop-eq
    WATER_CONSUMPTION = "water"  # m3
    WATER_SCARCITY = "water_scarcity"  # m3 world-eq
    MINERAL_RESOURCE_SCARCITY = "mineral_resource_scarcity"  # kg Cu-eq
    FOSSIL_RESOURCE_SCARCITY = "fossil_resource_scarcity"  # kg oil-eq

    @property
    def field_name(self) -> str:
        """Column name on upstream material records."""
        return f"impact_{self.value}"

    @property
    def unit(self) -> str:
        return CATEGORY_UNITS[self]


CATEGORY_UNITS: Dict[ImpactCategory, str] = {
    ImpactCategory.CLIMATE: "kg CO2-eq",
    ImpactCategory.OZONE_DEPLETION: "kg CFC-11-eq",
    ImpactCategory.IONISING_RADIATION: "kBq Co-60-eq",
    ImpactCategory.PHOTOCHEMICAL_OZONE_FORMATION: "kg NOx-eq",
    ImpactCategory.PARTICULATE_MATTER: "kg PM2.5-eq",
    ImpactCategory.HUMAN_TOXICITY_CARCINOGENIC: "kg 1,4-DCB",
    ImpactCategory.HUMAN_TOXICITY_NON_CARCINOGENIC: "kg 1,4-DCB",
    ImpactCategory.TERRESTRIAL_ACIDIFICATION: "kg SO2-eq",
    ImpactCategory.FRESHWATER_EUTROPHICATION: "kg P-eq",
    ImpactCategory.MARINE_EUTROPHICATION: "kg N-eq",
    ImpactCategory.TERRESTRIAL_ECOTOXICITY: "kg 1,4-DCB",
    ImpactCategory.FRESHWATER_ECOTOXICITY: "kg 1,4-DCB",
    ImpactCategory.MARINE_ECOTOXICITY: "kg 1,4-DCB",
    ImpactCategory.LAND_USE: "m2a crop-eq",
    ImpactCategory.WATER_CONSUMPTION: "m3",
    ImpactCategory.WATER_SCARCITY: "m3 world-eq",
    ImpactCategory.MINERAL_RESOURCE_SCARCITY: "kg Cu-eq",
    ImpactCategory.FOSSIL_RESOURCE_SCARCITY: "kg oil-eq",
}


class LifeCycleStage(Enum):
    """Lifecycle stages used for the climate breakdown."""
    RAW_MATERIALS = "raw_materials"
    PROCESSING = "processing"
    PACKAGING = "packaging_stage"
    DISTRIBUTION = "distribution"
    USE_PHASE = "use_phase"
    END_OF_LIFE = "end_of_life"


class ContributionCategory(Enum):
    """Source categories for the climate breakdown."""
    MATERIALS = "materials"
    PACKAGING = "packaging"
    PRODUCTION = "production"
    TRANSPORT = "transport"
    END_OF_LIFE = "end_of_life"


class EmissionScope(Enum):
    """GHG Protocol emission scopes."""
    SCOPE_1 = "scope1"
    SCOPE_2 = "scope2"
    SCOPE_3 = "scope3"
