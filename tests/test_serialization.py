# tests/test_serialization.py

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from villain_timeline.core.exceptions import DataIOError
from villain_timeline.exporter import read_json, serialize_processed_data, write_json
from villain_timeline.processing import process_villain_data

WIKI = "https://marvel.fandom.com/wiki/"


@pytest.fixture
def serialized(raw_series, registry):
    processed = process_villain_data(
        raw_series, registry, now=datetime(2024, 1, 1, tzinfo=timezone.utc)
    )
    return serialize_processed_data(processed)


def test_top_level_shape(serialized):
    assert serialized["series"] == "Amazing Spider-Man Vol 1"
    assert serialized["processedAt"] == "2024-01-01T00:00:00.000Z"
    assert serialized["stats"] == {
        "totalVillains": 5,
        "mostFrequent": "Vulture",
        "mostFrequentCount": 2,
        "averageFrequency": 1.2,
    }


def test_villain_fields(serialized):
    vulture = next(v for v in serialized["villains"] if v["name"] == "Vulture")
    assert vulture == {
        "id": "Adrian_Toomes_(Earth-616)",
        "name": "Vulture",
        "aliases": [],
        "url": WIKI + "Adrian_Toomes_(Earth-616)",
        "identitySource": "url",
        "firstAppearance": 2,
        "appearances": [2, 3],
        "frequency": 2,
    }


def test_name_keyed_villain_has_no_url(serialized):
    tinkerer = next(v for v in serialized["villains"] if v["name"] == "Tinkerer")
    assert "url" not in tinkerer
    assert tinkerer["identitySource"] == "name"
    assert tinkerer["id"] == "tinkerer"


def test_timeline_arrays_are_parallel(serialized):
    entry = serialized["timeline"][1]
    assert entry["villains"] == ["Vulture", "Tinkerer"]
    assert entry["villainUrls"] == [WIKI + "Adrian_Toomes_(Earth-616)", None]
    assert entry["villainIds"] == ["Adrian_Toomes_(Earth-616)", "tinkerer"]
    assert entry["villainCount"] == 2

    for t in serialized["timeline"]:
        assert len(t["villains"]) == len(t["villainUrls"]) == len(t["villainIds"])


def test_optional_entry_fields_are_omitted(serialized):
    first, third = serialized["timeline"][0], serialized["timeline"][2]

    assert "groups" not in first
    assert "releaseDate" not in third
    assert "chronologicalPlacementHint" not in first
    assert third["groups"] == [{"name": "Sinister Six", "members": ["Vulture", "Doctor Octopus"]}]


def test_groups_section(serialized):
    assert serialized["groups"] == [
        {"id": "sinister-six", "name": "Sinister Six", "appearances": [3, 4], "frequency": 2}
    ]


def test_output_is_json_serializable(serialized):
    assert json.loads(json.dumps(serialized)) == serialized


def test_write_and_read_json(serialized, tmp_path):
    path = write_json(serialized, tmp_path / "out" / "villains.Test.json")

    assert path.exists()
    assert read_json(path) == serialized


def test_compact_output(tmp_path):
    path = write_json({"a": [1, 2]}, tmp_path / "compact.json", pretty=False)
    assert path.read_text(encoding="utf-8") == '{"a":[1,2]}'


def test_read_missing_file(tmp_path):
    with pytest.raises(DataIOError) as excinfo:
        read_json(tmp_path / "nope.json")
    assert excinfo.value.code == "IO_FILE_NOT_FOUND"


def test_read_malformed_file(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")

    with pytest.raises(DataIOError) as excinfo:
        read_json(bad)
    assert excinfo.value.code == "IO_READ_FAILED"
