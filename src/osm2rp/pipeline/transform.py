"""
HierarchyMapper - osm-boundaries.com to RapidPro schema

Rewrites each boundary feature into RapidPro's location properties and links
it to its country and state by OSM ID rather than by geometry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Optional

from shapely.errors import ShapelyError
from shapely.geometry import shape

from ..domain.models import (
    SourceDocument,
    SourceFeature,
    TargetDocument,
    TargetFeature,
    TargetProperties,
)
from ..ids import intersection, split_parents, to_platform_id

logger = logging.getLogger(__name__)

# Written where a location has no country or state parent
NO_PARENT = "None"


class HierarchyMapper:
    """
    Convert boundary documents into RapidPro location documents.

    State linkage is the first entry of a feature's ``parents`` list that is
    also a state-level OSM ID. The parents order reported by osm-boundaries.com
    decides ties, not numeric order.
    """

    def __init__(self, check_geometry: bool = True):
        """
        Args:
            check_geometry: Log a warning for geometries shapely cannot read.
                Geometry is always copied through unchanged.
        """
        self.check_geometry = check_geometry

    def transform(
        self,
        document: SourceDocument,
        country_id: Optional[str] = None,
        state_ids: Iterable[str] = (),
    ) -> TargetDocument:
        """
        Map a source document to the RapidPro schema.

        Args:
            document: Boundaries at a single admin level
            country_id: Raw OSM ID of the country, None when mapping the country itself
            state_ids: Raw OSM IDs of the state-level features, empty for country/state levels

        Returns:
            New TargetDocument with features in input order
        """
        country = to_platform_id(country_id) if country_id is not None else NO_PARENT
        candidates = frozenset(str(state_id) for state_id in state_ids)

        features = [self.map_feature(feature, country, candidates) for feature in document.features]

        if candidates:
            unlinked = sum(1 for feature in features if feature.properties.is_in_state == NO_PARENT)
            if unlinked:
                logger.info(f"{unlinked} of {len(features)} features are not inside any state")

        return TargetDocument(type=document.type, features=features)

    def map_feature(self, feature: SourceFeature, country: str, state_ids: frozenset[str]) -> TargetFeature:
        """Map one feature; ``country`` is already in RapidPro form."""
        props = feature.properties
        osm_id = to_platform_id(props.osm_id)

        if self.check_geometry:
            self._check_geometry(osm_id, feature.geometry)

        return TargetFeature(
            type=feature.type,
            geometry=feature.geometry,
            properties=TargetProperties(
                osm_id=osm_id,
                name=props.local_name,
                name_en=props.name,
                is_in_country=country,
                is_in_state=resolve_state(props.parents, state_ids),
            ),
        )

    @staticmethod
    def _check_geometry(osm_id: str, geometry: Optional[dict[str, Any]]) -> None:
        if geometry is None:
            logger.warning(f"Feature {osm_id} has no geometry")
            return
        try:
            geom = shape(geometry)
        except (ShapelyError, AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Feature {osm_id} has unreadable geometry: {e}")
            return
        if geom.is_empty:
            logger.warning(f"Feature {osm_id} has empty geometry")


def resolve_state(parents: str, state_ids: Iterable[str]) -> str:
    """
    RapidPro ID of the first listed parent that is a state, or ``"None"``.

    Args:
        parents: Comma separated raw OSM IDs enclosing the feature
        state_ids: Raw OSM IDs of the state-level features
    """
    matches = intersection(state_ids, split_parents(parents))
    if not matches:
        return NO_PARENT
    return to_platform_id(matches[0])
