"""
Product LCA Engine Configuration
"""

import os
from typing import Tuple


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return float(raw)


class Config:
    """Base configuration."""

    # Region used when neither the study nor a record names one
    DEFAULT_STUDY_REGION = os.environ.get("PRODUCT_LCA_STUDY_REGION", "GLO")

    # Flow type used for basic uncertainty of material inputs
    DEFAULT_FLOW_TYPE = "material_inputs"

    # Units of product the facility intensities are expressed against
    DEFAULT_FUNCTIONAL_UNIT = 1.0

    # Production shares may deviate from 100% by this much before a warning
    ALLOCATION_TOLERANCE_PERCENT = _env_float("PRODUCT_LCA_ALLOCATION_TOLERANCE", 1.0)

    # Name keywords that mark a material as packaging when untagged
    PACKAGING_KEYWORDS: Tuple[str, ...] = ("bottle", "cap", "label")

    # Coarse carbon-origin split for materials without explicit fields
    FOSSIL_SHARE = _env_float("PRODUCT_LCA_FOSSIL_SHARE", 0.85)

    # Owned facilities with no recorded scope data
    DEFAULT_SCOPE1_SHARE = 0.35

    CALCULATION_VERSION = "2.1.0"

    # Debug logging from the command line without --verbose
    DEBUG = False


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration. Ignores environment overrides."""

    DEBUG = True
    DEFAULT_STUDY_REGION = "GLO"
    ALLOCATION_TOLERANCE_PERCENT = 1.0
    FOSSIL_SHARE = 0.85


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": ProductionConfig,
}


def get_config():
    """Get configuration based on environment."""
    env = os.environ.get("PRODUCT_LCA_ENV", "default")
    return config.get(env, config["default"])
