import json
import os
import tempfile
import unittest

from sommelier.models.wine import WineRecord
from sommelier.services.catalog import (
    DEFAULT_WINES,
    WineCatalog,
    load_wine_catalog,
    normalize_wine_id,
)


def make_record(wine_id, name="Test Wine"):
    return WineRecord(
        id=wine_id,
        name=name,
        vintage=2019,
        region="Test Region",
        country="Testland",
        grapes=["Merlot"],
        style="Medium-bodied red",
        tasting_notes="Plum, cocoa.",
        abv=13.0,
        price=20,
        story="A test story.",
    )


class TestWineCatalog(unittest.TestCase):
    def setUp(self):
        self.catalog = WineCatalog()

    def test_find_by_id_matches_every_record(self):
        for record in DEFAULT_WINES:
            self.assertIs(self.catalog.find_by_id(record.id), record)
            self.assertIs(self.catalog.find_by_id(str(record.id)), record)

    def test_find_by_id_accepts_numeric_forms(self):
        pinot = self.catalog.find_by_id(1)
        self.assertEqual(pinot.name, "Estate Pinot Noir")
        self.assertIs(self.catalog.find_by_id(" 1 "), pinot)
        self.assertIs(self.catalog.find_by_id("1.0"), pinot)
        self.assertIs(self.catalog.find_by_id(1.0), pinot)

    def test_find_by_id_not_found(self):
        for identifier in (0, 999, "abc", "", None, True, 1.5, "nan", "inf", [1]):
            with self.subTest(identifier=identifier):
                self.assertIsNone(self.catalog.find_by_id(identifier))

    def test_list_all_keeps_declaration_order(self):
        names = [wine.name for wine in self.catalog.list_all()]
        self.assertEqual(names, ["Estate Pinot Noir", "Reserve Chardonnay", "Rosé of Grenache"])
        self.assertEqual(list(self.catalog), list(self.catalog.list_all()))
        self.assertEqual(len(self.catalog), 3)

    def test_duplicate_ids_rejected(self):
        with self.assertRaises(ValueError):
            WineCatalog([make_record(7), make_record(7, name="Other")])

    def test_records_are_immutable(self):
        wine = self.catalog.find_by_id(2)
        with self.assertRaises(Exception):
            wine.price = 1


class TestNormalizeWineId(unittest.TestCase):
    def test_normalize(self):
        self.assertEqual(normalize_wine_id("42"), 42)
        self.assertEqual(normalize_wine_id(42), 42)
        self.assertEqual(normalize_wine_id("-3"), -3)
        self.assertIsNone(normalize_wine_id("4x"))
        self.assertIsNone(normalize_wine_id(False))


class TestLoadWineCatalog(unittest.TestCase):
    def _write_temp(self, content):
        with tempfile.NamedTemporaryFile(delete=False, mode="w", suffix=".json") as tmp:
            tmp.write(content)
        self.addCleanup(os.unlink, tmp.name)
        return tmp.name

    def test_no_path_uses_builtin_catalog(self):
        catalog = load_wine_catalog(None)
        self.assertEqual(catalog.list_all(), DEFAULT_WINES)

    def test_load_existing_catalog(self):
        # Setup
        path = self._write_temp(json.dumps([
            make_record(10, "Ten").model_dump(mode="json"),
            make_record(11, "Eleven").model_dump(mode="json"),
        ]))

        # Execute
        catalog = load_wine_catalog(path)

        # Assert
        self.assertEqual([wine.name for wine in catalog], ["Ten", "Eleven"])
        self.assertEqual(catalog.find_by_id("11").grapes, ("Merlot",))

    def test_load_nonexistent_catalog(self):
        catalog = load_wine_catalog("nonexistent_catalog.json")
        self.assertEqual(catalog.list_all(), DEFAULT_WINES)

    def test_load_invalid_json_catalog(self):
        path = self._write_temp("This is not valid JSON")
        catalog = load_wine_catalog(path)
        self.assertEqual(catalog.list_all(), DEFAULT_WINES)

    def test_load_single_object_catalog(self):
        path = self._write_temp(json.dumps(make_record(5, "Solo").model_dump(mode="json")))
        catalog = load_wine_catalog(path)
        self.assertEqual(len(catalog), 1)
        self.assertEqual(catalog.find_by_id(5).name, "Solo")

    def test_load_invalid_record_raises(self):
        path = self._write_temp(json.dumps([{"id": 1, "name": "Missing fields"}]))
        with self.assertRaises(ValueError):
            load_wine_catalog(path)


if __name__ == '__main__':
    unittest.main()
