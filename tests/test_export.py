import json

import pytest

from osm2rp.domain.enums import AdminTier
from osm2rp.domain.models import TargetDocument, TargetFeature, TargetProperties
from osm2rp.pipeline.export import Exporter, generate_export_filename, serialize
from osm2rp.types import WriteError


@pytest.fixture
def document():
    return TargetDocument(
        features=[
            TargetFeature(
                geometry={"type": "Point", "coordinates": [36.8, -1.3]},
                properties=TargetProperties(
                    osm_id="R3", name="Mkoa wa Pwani", name_en="Coast", is_in_country="R1", is_in_state="None"
                ),
            )
        ]
    )


@pytest.mark.parametrize(
    "tier, expected",
    [
        (AdminTier.COUNTRY, "R192798admin0_simplified.json"),
        (AdminTier.STATE, "R192798admin1_simplified.json"),
        (AdminTier.DISTRICT, "R192798admin2_simplified.json"),
    ],
)
def test_generate_export_filename(tier, expected):
    assert generate_export_filename("R192798", tier) == expected


def test_serialize_key_order_and_compactness(document):
    text = serialize(document)

    assert text.startswith('{"type":"FeatureCollection","features":[{"type":"Feature","properties":{"osm_id":"R3"')
    assert '"properties":{"osm_id":"R3","name":"Mkoa wa Pwani","name_en":"Coast","is_in_country":"R1","is_in_state":"None"},"geometry"' in text
    assert ", " not in text


def test_serialize_keeps_non_ascii():
    doc = TargetDocument(
        features=[
            TargetFeature(
                properties=TargetProperties(
                    osm_id="R1", name="Côte d’Ivoire", name_en="Ivory Coast", is_in_country="None", is_in_state="None"
                ),
            )
        ]
    )
    assert "Côte d’Ivoire" in serialize(doc)


def test_write(tmp_path, document):
    path = Exporter(tmp_path).write(document, "R1admin2_simplified.json")

    assert path == tmp_path / "R1admin2_simplified.json"
    written = json.loads(path.read_text(encoding="utf-8"))
    assert written["features"][0]["properties"]["name_en"] == "Coast"
    assert written["features"][0]["geometry"] == {"type": "Point", "coordinates": [36.8, -1.3]}


def test_missing_directory_is_write_error(tmp_path, document):
    exporter = Exporter(tmp_path / "does-not-exist")

    with pytest.raises(WriteError) as exc_info:
        exporter.write(document, "R1admin0_simplified.json")

    assert exc_info.value.path == tmp_path / "does-not-exist" / "R1admin0_simplified.json"
    assert not (tmp_path / "does-not-exist").exists()
