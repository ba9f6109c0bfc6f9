"""
Extraction Pipeline Components

This module provides the pipeline architecture following the Source -> Transform -> Export pattern.

Components:
- source: BoundarySource for osm-boundaries.com downloads
- transform: HierarchyMapper for RapidPro schema conversion and state linkage
- export: Exporter for writing the admin0/admin1/admin2 files
- extract: ExtractionPipeline sequencing the stages
"""

from .export import Exporter
from .extract import ExtractionPipeline, ExtractionResult
from .source import BoundarySource
from .transform import HierarchyMapper

__all__ = ["BoundarySource", "HierarchyMapper", "Exporter", "ExtractionPipeline", "ExtractionResult"]
