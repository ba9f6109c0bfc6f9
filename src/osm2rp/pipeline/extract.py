"""
ExtractionPipeline - Resolve -> Fetch/Map x3 -> Export

Runs the stages strictly in order and stops at the first error. Nothing is
written until all three levels have been fetched and mapped, so a failed
fetch leaves the output directory untouched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config_loader import resolve_admin_levels
from ..domain.enums import AdminTier
from ..domain.models import AdminLevelSet, ExtractOptions, SourceDocument, TargetDocument
from ..ids import to_platform_id
from ..types import FetchError
from ..utils import timer
from .export import Exporter, generate_export_filename
from .source import BoundarySource
from .transform import HierarchyMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappedLevel:
    """One fetched admin level in both its raw and RapidPro forms."""
    tier: AdminTier
    admin_level: int
    source: SourceDocument
    target: TargetDocument


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of a completed run."""
    levels: AdminLevelSet
    country_id: str
    mapped: dict[AdminTier, MappedLevel]
    written: list[Path] = field(default_factory=list)

    @property
    def country_platform_id(self) -> str:
        return to_platform_id(self.country_id)


class ExtractionPipeline:
    """
    Sequence the resolver, fetcher, mapper and exporter for one country.

    Each fetch is mapped before the next one is issued. The state tier is
    linked to the raw country ID from the country document, and districts to
    the raw state IDs, since raw IDs are what district ``parents`` lists hold.
    """

    def __init__(
        self,
        options: ExtractOptions,
        source: Optional[BoundarySource] = None,
        mapper: Optional[HierarchyMapper] = None,
        exporter: Optional[Exporter] = None
    ):
        self.options = options
        self.source = source or BoundarySource(options)
        self.mapper = mapper or HierarchyMapper()
        self.exporter = exporter or Exporter(options.output_dir)

    def resolve_levels(self) -> AdminLevelSet:
        return resolve_admin_levels(self.options.platform_id, self.options.admin_mapping_file)

    def fetch_country(self, levels: AdminLevelSet) -> MappedLevel:
        admin_level = levels.for_tier(AdminTier.COUNTRY)
        document = self.source.fetch(admin_level)
        if not document.features:
            raise FetchError(admin_level, f"no country boundary returned for {self.options.boundary_id}")
        target = self.mapper.transform(document, country_id=None)
        return MappedLevel(AdminTier.COUNTRY, admin_level, document, target)

    def fetch_state(self, levels: AdminLevelSet, country_id: str) -> MappedLevel:
        admin_level = levels.for_tier(AdminTier.STATE)
        document = self.source.fetch(admin_level)
        target = self.mapper.transform(document, country_id=country_id)
        return MappedLevel(AdminTier.STATE, admin_level, document, target)

    def fetch_district(self, levels: AdminLevelSet, country_id: str, state: MappedLevel) -> MappedLevel:
        admin_level = levels.for_tier(AdminTier.DISTRICT)
        document = self.source.fetch(admin_level)
        target = self.mapper.transform(document, country_id=country_id, state_ids=state.source.osm_ids())
        return MappedLevel(AdminTier.DISTRICT, admin_level, document, target)

    def export_all(self, country_id: str, mapped: dict[AdminTier, MappedLevel]) -> list[Path]:
        prefix = to_platform_id(country_id)
        return [
            self.exporter.write(mapped[tier].target, generate_export_filename(prefix, tier))
            for tier in AdminTier
        ]

    @timer
    def run(self) -> ExtractionResult:
        """
        Execute the full extraction.

        Returns:
            ExtractionResult with the mapped documents and written paths

        Raises:
            ExtractError: From whichever stage fails first
        """
        levels = self.resolve_levels()

        country = self.fetch_country(levels)
        country_id = country.source.osm_ids()[0]
        logger.info(f"Country: {country.source.features[0].properties.name or country_id} ({to_platform_id(country_id)})")

        state = self.fetch_state(levels, country_id)
        district = self.fetch_district(levels, country_id, state)

        mapped = {level.tier: level for level in (country, state, district)}
        written = self.export_all(country_id, mapped)

        return ExtractionResult(levels=levels, country_id=country_id, mapped=mapped, written=written)
