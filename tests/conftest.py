"""
Pytest configuration and fixtures for the product LCA test suite.
"""

import pytest
import sys
import os
from typing import Dict, Any, List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

REFERENCE_YEAR = 2024


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def testing_config():
    """Configuration class that ignores environment overrides."""
    from product_lca.config import TestingConfig
    return TestingConfig


@pytest.fixture
def engine(testing_config):
    """Create product LCA engine instance."""
    from product_lca.engine import ProductLCAEngine
    return ProductLCAEngine(testing_config)


# ============================================================================
# Data Quality Fixtures
# ============================================================================

@pytest.fixture
def three_material_inputs():
    """
    Three materials of decreasing quality.

    Impact weights are 10/17, 5/17 and 2/17.
    """
    from product_lca.quality import DataSourceTier, MaterialAssessmentInput, QualityGrade
    return [
        MaterialAssessmentInput(
            material_name="Malted barley",
            material_id="a",
            impact_value=10.0,
            reference_year=REFERENCE_YEAR,
            data_source_tier=DataSourceTier.PRIMARY_VERIFIED,
            quality_grade=QualityGrade.HIGH,
            data_year=2023,
            data_region="GB",
            study_region="GB",
        ),
        MaterialAssessmentInput(
            material_name="Hops",
            material_id="b",
            impact_value=5.0,
            reference_year=REFERENCE_YEAR,
            data_source_tier=DataSourceTier.SECONDARY_MODELLED,
            quality_grade=QualityGrade.MEDIUM,
            data_year=2015,
            data_region="GLO",
        ),
        MaterialAssessmentInput(
            material_name="Yeast",
            material_id="c",
            impact_value=2.0,
            reference_year=REFERENCE_YEAR,
            data_source_tier=DataSourceTier.SECONDARY_ESTIMATED,
            quality_grade=QualityGrade.LOW,
            data_year=None,
            data_region="CN",
            study_region="GB",
        ),
    ]


@pytest.fixture
def three_material_quality(three_material_inputs):
    """Assessed quality records for the three-material scenario."""
    from product_lca.quality import assess_material_data_quality
    return [assess_material_data_quality(m) for m in three_material_inputs]


# ============================================================================
# Impact Aggregation Fixtures
# ============================================================================

@pytest.fixture
def beer_materials() -> List[Dict[str, Any]]:
    """Material rows for a bottled beer, as returned by factor resolution."""
    return [
        {
            "id": "m1",
            "name": "Malted barley",
            "quantity": 2.0,
            "impact_climate": 1.2,
            "impact_transport": 0.1,
            "impact_water": 0.5,
            "impact_land": 0.8,
            "material_type": "ingredient",
            "data_source_tier": "primary_verified",
            "quality_grade": "HIGH",
            "data_year": 2023,
            "data_region": "GB",
        },
        {
            "id": "m2",
            "name": "Glass bottle",
            "quantity": 0.4,
            "impact_climate": 0.6,
            "impact_transport": 0.05,
            "impact_water": 0.02,
            "quality_grade": "MEDIUM",
            "data_year": 2021,
        },
        {
            "id": "m3",
            "name": "Aluminium cap",
            "quantity": 0.01,
            "impact_climate": 0.05,
            "quality_grade": "LOW",
        },
    ]


@pytest.fixture
def brewery_allocations() -> List[Dict[str, Any]]:
    """An owned brewery and a contract bottling line."""
    return [
        {
            "facility_id": "f1",
            "facility_name": "Main Brewery",
            "production_volume_share_percent": 60,
            "facility_emissions_intensity": 0.5,
            "facility_scope1": 30,
            "facility_scope2": 70,
            "source": "owned",
        },
        {
            "facility_id": "f2",
            "facility_name": "Contract Bottler",
            "production_volume_share_percent": 40,
            "facility_emissions_intensity": 0.25,
            "source": "contract_manufacturer",
        },
    ]
