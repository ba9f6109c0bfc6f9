import pytest

from osm2rp.ids import (
    intersection,
    normalize_region_id,
    split_parents,
    to_boundary_id,
    to_platform_id,
    to_region_platform_id,
)


@pytest.mark.parametrize("raw", ["-1", "-3247585", "-192798", -42])
def test_platform_id_replaces_negative_sign(raw):
    converted = to_platform_id(raw)
    assert converted.startswith("R")
    assert "-" not in converted
    assert converted[1:] == str(raw).lstrip("-")


def test_platform_id_is_injective_for_boundary_ids():
    raw_ids = [f"-{n}" for n in range(1, 500)]
    assert len({to_platform_id(raw) for raw in raw_ids}) == len(raw_ids)


def test_platform_id_passes_unsigned_ids_through():
    assert to_platform_id("6") == "6"
    assert to_platform_id(3247585) == "3247585"


def test_platform_id_keeps_none_sentinel():
    assert to_platform_id("None") == "None"


def test_region_forms():
    assert to_boundary_id("3247585") == "-3247585"
    assert to_region_platform_id("3247585") == "R3247585"


@pytest.mark.parametrize("value", ["192798", "R192798", "-192798", " 192798 ", 192798])
def test_normalize_region_id_accepts_all_forms(value):
    assert normalize_region_id(value) == "192798"


@pytest.mark.parametrize("value", ["", "abc", "R", "--1", "R-1", "1.5", "X192798"])
def test_normalize_region_id_rejects_garbage(value):
    with pytest.raises(ValueError):
        normalize_region_id(value)


def test_intersection_follows_order_of_second_list():
    assert intersection(["9", "7", "5"], ["5", "6", "7"]) == ["5", "7"]
    assert intersection(["7", "5"], ["7", "6", "5"]) == ["7", "5"]


def test_intersection_returns_only_common_elements():
    assert intersection(["6", "9"], ["5", "6", "7"]) == ["6"]
    assert intersection(["9"], ["5", "6", "7"]) == []
    assert intersection([], ["5"]) == []


def test_split_parents():
    assert split_parents("-5,-6,-7") == ["-5", "-6", "-7"]
    assert split_parents("") == []
    assert split_parents(None) == []
