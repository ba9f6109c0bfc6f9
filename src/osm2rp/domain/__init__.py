"""
Domain Models and Types

Typed models shared by the pipeline components.

Models:
- AdminLevelSet: Resolved OSM admin levels for one region
- AdminMapping: Validated admin level mapping file
- SourceDocument: GeoJSON as returned by osm-boundaries.com
- TargetDocument: GeoJSON in the RapidPro location schema
- ExtractOptions: Validated invocation parameters

Enums:
- AdminTier: Country, state and district tiers
"""

from .enums import AdminTier
from .models import (
    AdminLevelSet,
    AdminMapping,
    CountryOverride,
    ExtractOptions,
    SourceDocument,
    SourceFeature,
    SourceProperties,
    TargetDocument,
    TargetFeature,
    TargetProperties,
)

__all__ = [
    "AdminLevelSet", "AdminMapping", "CountryOverride", "ExtractOptions",
    "SourceDocument", "SourceFeature", "SourceProperties",
    "TargetDocument", "TargetFeature", "TargetProperties",
    "AdminTier",
]
