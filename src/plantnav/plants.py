"""Plant loading, export, and sample data for plantnav."""

import json
from pathlib import Path

from plantnav.repository import Plant

SAMPLE_PLANTS: list[Plant] = [
    Plant("malus-pumila", "Apple", "An apple is a sweet, edible fruit.", 3, 30),
    Plant("beta-vulgaris", "Beet", "The beetroot is the taproot of the beet plant.", 2, 7),
    Plant("coriandrum-sativum", "Cilantro", "Coriander is an annual herb.", 2, 2),
    Plant("solanum-melongena", "Eggplant", "Eggplant is a species in the nightshade family.", 8, 3),
    Plant("ficus-carica", "Fig", "The common fig is a flowering plant.", 7, 14),
    Plant("vitis-vinifera", "Grape", "Vitis vinifera is a species of grapevine.", 5, 10),
    Plant("hibiscus-rosa", "Hibiscus", "Hibiscus is a genus of flowering plants.", 9, 4),
    Plant("citrus-limon", "Lemon", "The lemon is a species of small evergreen tree.", 9, 7),
    Plant("mangifera-indica", "Mango", "A mango is a juicy stone fruit.", 11, 10),
    Plant("citrus-sinensis", "Orange", "The orange is the fruit of the citrus species.", 9, 7),
    Plant("pyrus-communis", "Pear", "The pear is a fruit tree of the genus Pyrus.", 4, 14),
    Plant("punica-granatum", "Pomegranate", "The pomegranate is a fruit-bearing shrub.", 7, 10),
    Plant("fragaria-ananassa", "Strawberry", "The garden strawberry is a hybrid species.", 3, 3),
    Plant("solanum-lycopersicum", "Tomato", "The tomato is the edible berry of a nightshade.", 3, 2),
    Plant("citrullus-lanatus", "Watermelon", "Watermelon is a vine-like flowering plant.", 3, 4),
]


def load_plants(path: Path) -> list[Plant]:
    """Load plants from a JSON file.

    The file holds a list of objects with ``plantId``/``plant_id``, ``name``,
    ``description``, ``growZoneNumber``/``grow_zone_number`` and optionally
    ``wateringInterval``/``watering_interval`` and ``imageUrl``/``image_url``.
    Entries without an id, a name, or a valid zone number are skipped.

    Args:
        path: Path to the plant file

    Returns:
        List of parsed Plant objects

    Raises:
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If the top-level value is not a list
    """
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of plants")
    return parse_plants(data)


def parse_plants(data: list[dict[str, object]]) -> list[Plant]:
    """Parse plant dictionaries into Plant objects, skipping invalid ones."""
    plants: list[Plant] = []

    for item in data:
        if not isinstance(item, dict):
            continue

        plant_id = _field(item, "plant_id", "plantId")
        name = _field(item, "name")
        if not plant_id or not name:
            continue

        try:
            zone = int(str(_field(item, "grow_zone_number", "growZoneNumber")))
        except ValueError:
            continue

        try:
            watering = int(str(_field(item, "watering_interval", "wateringInterval") or 7))
        except ValueError:
            watering = 7

        plants.append(
            Plant(
                plant_id=str(plant_id),
                name=str(name),
                description=str(_field(item, "description") or ""),
                grow_zone_number=zone,
                watering_interval=watering,
                image_url=str(_field(item, "image_url", "imageUrl") or ""),
            )
        )

    return plants


def _field(item: dict[str, object], *keys: str) -> object | None:
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def export_plants(plants: list[Plant], path: Path, format: str = "json") -> None:
    """Export plants to file.

    Args:
        plants: Plants to export
        path: Output file path
        format: Export format ("json" or "ndjson")
    """
    data = [
        {
            "plant_id": p.plant_id,
            "name": p.name,
            "description": p.description,
            "grow_zone_number": p.grow_zone_number,
            "watering_interval": p.watering_interval,
            "image_url": p.image_url,
        }
        for p in plants
    ]

    with path.open("w") as f:
        if format == "ndjson":
            for item in data:
                f.write(json.dumps(item) + "\n")
        else:
            json.dump(data, f, indent=2)
