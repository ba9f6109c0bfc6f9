"""
OSM boundary extractor for RapidPro location hierarchies.

Downloads country, state and district boundaries from osm-boundaries.com and
rewrites them into the GeoJSON layout RapidPro imports.
"""

__version__ = "0.1.0"
