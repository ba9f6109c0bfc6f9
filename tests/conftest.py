import gzip
import json
from pathlib import Path
from typing import Any, Optional

import pytest
import requests

from osm2rp.domain.models import ExtractOptions, SourceDocument

SQUARE = {
    "type": "Polygon",
    "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]],
}


def make_feature(
    osm_id: int,
    parents: str = "",
    admin_level: int = 4,
    name: str = "",
    local_name: str = "",
    geometry: Optional[dict] = None,
) -> dict[str, Any]:
    """Feature as osm-boundaries.com emits it."""
    return {
        "type": "Feature",
        "geometry": geometry if geometry is not None else SQUARE,
        "properties": {
            "osm_id": osm_id,
            "boundary": "administrative",
            "admin_level": admin_level,
            "parents": parents,
            "name": name or f"Place {osm_id}",
            "local_name": local_name or f"Local {osm_id}",
            "name_en": name or f"Place {osm_id}",
        },
    }


def make_collection(*features: dict[str, Any]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


def make_document(*features: dict[str, Any]) -> SourceDocument:
    return SourceDocument.model_validate(make_collection(*features))


def gzip_json(payload: Any) -> bytes:
    return gzip.compress(json.dumps(payload).encode("utf-8"))


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


class FakeSession:
    """
    Stand-in for requests.Session keyed on the requested admin level.

    Values may be a payload (gzipped on the way out), raw bytes, a
    FakeResponse or an exception to raise.
    """

    def __init__(self, by_level: dict[int, Any]):
        self.by_level = by_level
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, params: dict[str, str], timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        level = int(params["minAdminLevel"])
        if level not in self.by_level:
            raise requests.ConnectionError(f"no fake response for admin level {level}")
        result = self.by_level[level]
        if isinstance(result, Exception):
            raise result
        if isinstance(result, FakeResponse):
            return result
        if isinstance(result, bytes):
            return FakeResponse(result)
        return FakeResponse(gzip_json(result))

    def requested_levels(self) -> list[int]:
        return [int(call["params"]["minAdminLevel"]) for call in self.calls]

    def close(self) -> None:
        self.closed = True


MAPPING_YAML = """\
default:
  admin_level_0: 2
  admin_level_1: 4
  admin_level_2: 6
per_country:
  R100:
    admin_level_1: 5
    admin_level_2: 7
    meta:
      name: Testland
"""


@pytest.fixture
def mapping_file(tmp_path: Path) -> Path:
    path = tmp_path / "admin_mapping.yml"
    path.write_text(MAPPING_YAML, encoding="utf-8")
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def options(mapping_file: Path, output_dir: Path) -> ExtractOptions:
    return ExtractOptions(
        api_key="secret",
        region_id="100",
        admin_mapping_file=mapping_file,
        output_dir=output_dir,
    )


@pytest.fixture
def boundary_responses() -> dict[int, Any]:
    """Country R100 with states R10/R20 and three districts (levels 2/5/7 per R100 override)."""
    return {
        2: make_collection(make_feature(-100, admin_level=2, name="Testland", local_name="Testlandia")),
        5: make_collection(
            make_feature(-10, parents="-100", admin_level=5),
            make_feature(-20, parents="-100", admin_level=5),
        ),
        7: make_collection(
            make_feature(-1, parents="-10,-100", admin_level=7),
            make_feature(-2, parents="-100,-20", admin_level=7),
            make_feature(-3, parents="-100", admin_level=7),
        ),
    }
