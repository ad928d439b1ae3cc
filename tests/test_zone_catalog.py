import json
import tempfile
import unittest
from pathlib import Path

from config import ZONE_IDS
from zone_catalog import DEFAULT_ZONES, load_zone_layout


class ZoneCatalogTests(unittest.TestCase):
    def test_repository_layout_defines_every_zone(self):
        layout = load_zone_layout(Path("data/zones.json"))

        self.assertEqual(set(layout), set(ZONE_IDS))
        self.assertEqual(list(layout), sorted(layout))
        for key, zone in layout.items():
            self.assertEqual(zone, DEFAULT_ZONES[key])

    def test_loads_defaults_when_file_missing(self):
        layout = load_zone_layout(Path("does_not_exist.json"))
        self.assertEqual(set(layout), set(DEFAULT_ZONES))

    def test_loads_defaults_for_malformed_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "zones.json"
            path.write_text("{not json")
            layout = load_zone_layout(path)

        self.assertEqual(set(layout), set(DEFAULT_ZONES))

    def test_filters_invalid_entries(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "zones.json"
            path.write_text(
                json.dumps(
                    {
                        "fryer": {"x": 10, "y": 20, "width": 30, "height": 40, "snap": [25, 35]},
                        "flat": {"x": 0, "y": 0, "width": 0, "height": 10},
                        "bad_snap": {"x": 0, "y": 0, "width": 10, "height": 10, "snap": [1]},
                        "bad_flag": {"x": 0, "y": 0, "width": 10, "height": 10, "droppable": "yes"},
                        "bool_coord": {"x": True, "y": 0, "width": 10, "height": 10},
                        "not_a_dict": [1, 2, 3],
                    }
                )
            )
            layout = load_zone_layout(path)

        self.assertEqual(list(layout), ["fryer"])
        fryer = layout["fryer"]
        self.assertEqual(fryer.snap_position, (25.0, 35.0))
        self.assertEqual(fryer.center, (25.0, 40.0))
        self.assertTrue(fryer.droppable)

    def test_runtime_dict(self):
        data = DEFAULT_ZONES["fryer"].to_runtime_dict()
        self.assertEqual(data["snap"], [700.0, 140.0])
        self.assertTrue(data["droppable"])


if __name__ == "__main__":
    unittest.main()
