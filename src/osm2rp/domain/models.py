"""
Pipeline Domain Models

Pydantic models for the admin level mapping, the GeoJSON documents on both
sides of the transform, and the validated run options.
"""

import math
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..ids import normalize_region_id, to_boundary_id, to_region_platform_id
from .enums import AdminTier


# =============================================================================
# Admin level mapping
# =============================================================================

class AdminLevelSet(BaseModel):
    """OSM admin levels that map to country, state and district for one region."""
    country_level: int = Field(..., description="OSM admin level of the country (admin0)")
    state_level: int = Field(..., description="OSM admin level of states/provinces (admin1)")
    district_level: int = Field(..., description="OSM admin level of districts (admin2)")

    class Config:
        """Pydantic configuration."""
        frozen = True

    def for_tier(self, tier: AdminTier) -> int:
        """OSM admin level to request for a tier."""
        return {
            AdminTier.COUNTRY: self.country_level,
            AdminTier.STATE: self.state_level,
            AdminTier.DISTRICT: self.district_level,
        }[tier]


class DefaultLevels(BaseModel):
    """The ``default`` block of the mapping file."""
    admin_level_0: int
    admin_level_1: int
    admin_level_2: int

    class Config:
        frozen = True


class CountryMeta(BaseModel):
    """Descriptive metadata for a per-country override."""
    name: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("name", mode="before")
    @classmethod
    def _scalar_name(cls, value: Any) -> Any:
        # YAML reads bare NO, on or 2024 as bool/int
        if value is None or isinstance(value, (str, dict, list)):
            return value
        return str(value)


class CountryOverride(BaseModel):
    """
    Per-country override of the state and district levels.

    The country level always comes from the default block, so an override
    carrying ``admin_level_0`` is rejected rather than silently ignored.
    """
    admin_level_1: int
    admin_level_2: int
    meta: CountryMeta = Field(default_factory=CountryMeta)

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _reject_country_level(cls, data: Any) -> Any:
        if isinstance(data, dict) and "admin_level_0" in data:
            raise ValueError("per_country overrides may only set admin_level_1 and admin_level_2")
        return data

    @field_validator("meta", mode="before")
    @classmethod
    def _empty_meta(cls, value: Any) -> Any:
        return {} if value is None else value


class AdminMapping(BaseModel):
    """Validated admin level mapping file."""
    default: DefaultLevels
    per_country: dict[str, CountryOverride] = Field(default_factory=dict)

    class Config:
        frozen = True

    @field_validator("per_country", mode="before")
    @classmethod
    def _normalize_keys(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            # YAML turns unquoted numeric keys into ints
            return {str(key): override for key, override in value.items()}
        return value

    def resolve(self, platform_id: str) -> AdminLevelSet:
        """Admin levels for a RapidPro region ID, falling back to the defaults."""
        state_level = self.default.admin_level_1
        district_level = self.default.admin_level_2

        override = self.per_country.get(platform_id)
        if override is not None:
            state_level = override.admin_level_1
            district_level = override.admin_level_2

        return AdminLevelSet(
            country_level=self.default.admin_level_0,
            state_level=state_level,
            district_level=district_level,
        )


# =============================================================================
# osm-boundaries.com GeoJSON
# =============================================================================

class SourceProperties(BaseModel):
    """Feature properties as emitted by osm-boundaries.com."""
    osm_id: int
    boundary: Optional[str] = None
    admin_level: Optional[int] = None
    parents: str = ""
    name: str = ""
    local_name: str = ""
    name_en: str = ""

    class Config:
        frozen = True

    @field_validator("parents", "name", "local_name", "name_en", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class SourceFeature(BaseModel):
    """Single boundary feature. Geometry is kept as the raw GeoJSON mapping."""
    type: str = "Feature"
    geometry: Optional[dict[str, Any]] = None
    properties: SourceProperties

    class Config:
        frozen = True


class SourceDocument(BaseModel):
    """FeatureCollection returned for one admin level."""
    type: str = "FeatureCollection"
    features: list[SourceFeature] = Field(default_factory=list)

    class Config:
        frozen = True

    @field_validator("features", mode="before")
    @classmethod
    def _null_features(cls, value: Any) -> Any:
        return [] if value is None else value

    def osm_ids(self) -> list[str]:
        """Raw OSM IDs of all features, in document order."""
        return [str(feature.properties.osm_id) for feature in self.features]


# =============================================================================
# RapidPro GeoJSON
# =============================================================================

class TargetProperties(BaseModel):
    """Feature properties in the RapidPro location schema."""
    osm_id: str
    name: str
    name_en: str
    is_in_country: str
    is_in_state: str

    class Config:
        frozen = True


class TargetFeature(BaseModel):
    """RapidPro feature. Field order is the serialized key order."""
    type: str = "Feature"
    properties: TargetProperties
    geometry: Optional[dict[str, Any]] = None

    class Config:
        frozen = True


class TargetDocument(BaseModel):
    """FeatureCollection ready for RapidPro import."""
    type: str = "FeatureCollection"
    features: list[TargetFeature] = Field(default_factory=list)

    class Config:
        frozen = True


# =============================================================================
# Run options
# =============================================================================

class ExtractOptions(BaseModel):
    """Validated invocation parameters for an extraction run."""
    api_key: str = Field(..., min_length=1, description="osm-boundaries.com API key")
    database: str = Field(default="osm20211227", min_length=1, description="OSM database snapshot")
    region_id: str = Field(..., description="Bare OSM relation number of the country")
    srid: str = Field(default="4326", description="Spatial reference identifier")
    simplify: str = Field(default="0.01", description="Simplification tolerance")
    admin_mapping_file: Path = Field(..., description="Admin level mapping YAML")
    output_dir: Path = Field(..., description="Directory receiving the GeoJSON files")

    class Config:
        frozen = True

    @field_validator("region_id", mode="before")
    @classmethod
    def _normalize_region(cls, value: Any) -> str:
        return normalize_region_id(value)

    @field_validator("srid", mode="before")
    @classmethod
    def _validate_srid(cls, value: Any) -> str:
        value = str(value).strip()
        if value.upper().startswith("EPSG:"):
            value = value[5:]
        if not value.isdigit():
            raise ValueError(f"SRID must be numeric, got '{value}'")
        return value

    @field_validator("simplify", mode="before")
    @classmethod
    def _validate_simplify(cls, value: Any) -> str:
        value = str(value).strip()
        try:
            tolerance = float(value)
        except ValueError:
            raise ValueError(f"Simplification tolerance must be a number, got '{value}'") from None
        if not math.isfinite(tolerance):
            raise ValueError(f"Simplification tolerance must be finite, got '{value}'")
        if tolerance < 0:
            raise ValueError("Simplification tolerance must be non-negative")
        return value

    @property
    def boundary_id(self) -> str:
        """Region ID as sent to osm-boundaries.com (``-3247585``)."""
        return to_boundary_id(self.region_id)

    @property
    def platform_id(self) -> str:
        """Region ID in RapidPro form (``R3247585``), used for mapping lookups."""
        return to_region_platform_id(self.region_id)
