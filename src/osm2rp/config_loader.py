"""
Admin level mapping loader.

OSM admin levels mean different things in different countries: level 4 is
a state in one country and a region in another. The mapping file pins, per
country, which OSM levels become RapidPro's state and district tiers:

    default:
      admin_level_0: 2
      admin_level_1: 4
      admin_level_2: 6
    per_country:
      R192798:
        admin_level_1: 4
        admin_level_2: 5
        meta:
          name: Kenya

Countries are keyed by their RapidPro ID. The country tier always uses the
default ``admin_level_0``.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from .domain.models import AdminLevelSet, AdminMapping
from .types import ConfigParseError, ConfigReadError
from .utils import load_yaml_file

logger = logging.getLogger(__name__)


def load_admin_mapping(mapping_path: Path | str) -> AdminMapping:
    """
    Load and validate the admin level mapping file.

    Args:
        mapping_path: Path to the YAML mapping file

    Returns:
        Validated AdminMapping

    Raises:
        ConfigReadError: If the file cannot be read
        ConfigParseError: If the YAML is invalid or the structure is wrong
    """
    mapping_path = Path(mapping_path)

    try:
        raw = load_yaml_file(mapping_path)
    except OSError as e:
        raise ConfigReadError(mapping_path, str(e)) from e
    except ValueError as e:
        raise ConfigParseError(mapping_path, str(e)) from e

    if not isinstance(raw, dict):
        raise ConfigParseError(mapping_path, "expected a mapping with 'default' and 'per_country' blocks")

    try:
        mapping = AdminMapping.model_validate(raw)
    except ValidationError as e:
        raise ConfigParseError(mapping_path, str(e)) from e

    logger.debug(f"Loaded admin mapping from {mapping_path} ({len(mapping.per_country)} country overrides)")
    return mapping


def resolve_admin_levels(platform_id: str, mapping_path: Path | str) -> AdminLevelSet:
    """
    Resolve the country/state/district OSM admin levels for a region.

    Unknown regions are not an error; they use the defaults.

    Args:
        platform_id: RapidPro region ID (e.g. R192798)
        mapping_path: Path to the YAML mapping file

    Returns:
        Resolved AdminLevelSet
    """
    mapping = load_admin_mapping(mapping_path)

    if platform_id in mapping.per_country:
        name = mapping.per_country[platform_id].meta.name or platform_id
        logger.info(f"Using admin level override for {name} ({platform_id})")
    else:
        logger.info(f"No admin level override for {platform_id}, using defaults")

    levels = mapping.resolve(platform_id)
    logger.info(
        f"Admin levels: country={levels.country_level}, "
        f"state={levels.state_level}, district={levels.district_level}"
    )
    return levels
