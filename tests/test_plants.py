"""Tests for plant loading and export."""

import json
from pathlib import Path

import pytest

from plantnav.plants import SAMPLE_PLANTS, export_plants, load_plants, parse_plants
from plantnav.repository import Plant


class TestParsePlants:
    """Plant dictionaries in either key style."""

    def test_camel_case_keys(self) -> None:
        plants = parse_plants(
            [
                {
                    "plantId": "ficus-carica",
                    "name": "Fig",
                    "description": "The common fig.",
                    "growZoneNumber": 7,
                    "wateringInterval": 14,
                    "imageUrl": "https://example.com/fig.jpg",
                }
            ]
        )
        assert plants == [
            Plant(
                "ficus-carica",
                "Fig",
                "The common fig.",
                7,
                14,
                "https://example.com/fig.jpg",
            )
        ]

    def test_snake_case_keys_with_defaults(self) -> None:
        plants = parse_plants([{"plant_id": "beet", "name": "Beet", "grow_zone_number": "2"}])
        assert plants[0].grow_zone_number == 2
        assert plants[0].watering_interval == 7
        assert plants[0].description == ""

    def test_invalid_entries_are_skipped(self) -> None:
        plants = parse_plants(
            [
                "not a dict",
                {"name": "No id", "growZoneNumber": 3},
                {"plantId": "no-name", "growZoneNumber": 3},
                {"plantId": "no-zone", "name": "No zone"},
                {"plantId": "bad-zone", "name": "Bad zone", "growZoneNumber": "three"},
                {"plantId": "ok", "name": "Ok", "growZoneNumber": 3, "wateringInterval": "often"},
            ]  # type: ignore[list-item]
        )
        assert [p.plant_id for p in plants] == ["ok"]
        assert plants[0].watering_interval == 7


class TestLoadPlants:
    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "plants.json"
        path.write_text(json.dumps([{"plantId": "a", "name": "A", "growZoneNumber": 1}]))
        assert [p.plant_id for p in load_plants(path)] == ["a"]

    def test_non_list_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "plants.json"
        path.write_text(json.dumps({"plants": []}))
        with pytest.raises(ValueError, match="expected a JSON list"):
            load_plants(path)

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "plants.json"
        path.write_text("[{")
        with pytest.raises(json.JSONDecodeError):
            load_plants(path)


class TestExportPlants:
    def test_json_export_loads_back(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        export_plants(SAMPLE_PLANTS[:3], path)
        assert load_plants(path) == SAMPLE_PLANTS[:3]

    def test_ndjson_writes_one_object_per_line(self, tmp_path: Path) -> None:
        path = tmp_path / "out.ndjson"
        export_plants(SAMPLE_PLANTS[:2], path, format="ndjson")

        lines = path.read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["plant_id"] == SAMPLE_PLANTS[0].plant_id
        assert json.loads(lines[1])["grow_zone_number"] == SAMPLE_PLANTS[1].grow_zone_number

    def test_empty_export(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        export_plants([], path)
        assert json.loads(path.read_text()) == []


def test_sample_plants_have_unique_ids() -> None:
    ids = [p.plant_id for p in SAMPLE_PLANTS]
    assert len(ids) == len(set(ids))
