"""
Region identifier conversions.

osm-boundaries.com reports boundary relations with negative OSM IDs
(``-3247585``). RapidPro expects the same relation as ``R3247585``. The
command line takes the bare relation number (``3247585``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

PLATFORM_PREFIX = "R"

_REGION_ID_PATTERN = re.compile(r"^[-R]?(\d+)$")


def to_platform_id(osm_id: str | int) -> str:
    """
    Convert a raw OSM ID to its RapidPro form, e.g. ``-3247585`` -> ``R3247585``.

    Only the first ``-`` is replaced. IDs without a leading sign pass through
    unchanged, as does the ``"None"`` sentinel.
    """
    return str(osm_id).replace("-", PLATFORM_PREFIX, 1)


def to_boundary_id(region_id: str) -> str:
    """Raw OSM boundary ID for a bare relation number: ``3247585`` -> ``-3247585``."""
    return f"-{region_id}"


def to_region_platform_id(region_id: str) -> str:
    """RapidPro ID for a bare relation number: ``3247585`` -> ``R3247585``."""
    return f"{PLATFORM_PREFIX}{region_id}"


def normalize_region_id(value: str | int) -> str:
    """
    Reduce a region selector to its bare relation number.

    Accepts ``3247585``, ``R3247585`` or ``-3247585``.

    Raises:
        ValueError: If the value is not one of those forms
    """
    match = _REGION_ID_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(
            f"Invalid OSM region ID '{value}': expected digits, optionally prefixed with "
            f"'{PLATFORM_PREFIX}' or '-'"
        )
    return match.group(1)


def intersection(candidates: Iterable[str], values: Iterable[str]) -> list[str]:
    """
    Elements of ``values`` that also appear in ``candidates``.

    Result order (and duplicates) follow ``values``, so ``[0]`` is the first
    listed value that is a candidate.
    """
    lookup = set(candidates)
    return [value for value in values if value in lookup]


def split_parents(parents: str | None) -> list[str]:
    """Split a comma separated parent list into raw IDs, preserving order."""
    if not parents:
        return []
    return [parent.strip() for parent in parents.split(",")]
