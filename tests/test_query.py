import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from listing_core.models import Dataset
from listing_core.query import ListingQuery, parse_price


def _scenario_dataset() -> Dataset:
    return Dataset.from_records(
        [
            {"id": "1", "name": "Cozy Loft", "price": "$100.00"},
            {"id": "2", "name": "Sunny Flat", "price": "$250.00"},
        ]
    )


class ScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dataset = _scenario_dataset()
        self.query = ListingQuery(self.dataset)

    def test_by_id_returns_second_record(self) -> None:
        record = self.query.by_id("2")
        self.assertIs(record, self.dataset.listings[1])

    def test_by_name_is_case_insensitive(self) -> None:
        self.assertEqual(self.query.by_name("loft"), [self.dataset.listings[0]])

    def test_by_price_range_inclusive_lower_bound(self) -> None:
        self.assertEqual(self.query.by_price_range(100, 200), [self.dataset.listings[0]])

    def test_by_price_range_keeps_original_order(self) -> None:
        self.assertEqual(self.query.by_price_range(0, 500), list(self.dataset.listings))

    def test_by_index_out_of_range_is_not_found(self) -> None:
        self.assertIsNone(self.query.by_index(5))


class PreviewAndIndexTests(unittest.TestCase):
    def setUp(self) -> None:
        records = [{"id": str(number), "NAME": f"Listing {number}", "price": "$10"} for number in range(30)]
        self.dataset = Dataset.from_records(records)
        self.query = ListingQuery(self.dataset)

    def test_preview_returns_min_of_limit_and_size(self) -> None:
        for limit, expected in [(0, 0), (1, 1), (20, 20), (30, 30), (100, 30)]:
            with self.subTest(limit=limit):
                self.assertEqual(len(self.query.preview(limit)), expected)

    def test_preview_keeps_order_and_is_repeatable(self) -> None:
        first = self.query.preview(20)
        second = self.query.preview(20)
        self.assertEqual(first, second)
        self.assertEqual([listing.id for listing in first], [str(number) for number in range(20)])

    def test_negative_preview_is_empty(self) -> None:
        self.assertEqual(self.query.preview(-3), [])

    def test_by_index_in_range(self) -> None:
        for index in (0, 12, 29):
            with self.subTest(index=index):
                self.assertIs(self.query.by_index(index), self.dataset.listings[index])

    def test_negative_index_is_not_wrapped(self) -> None:
        self.assertIsNone(self.query.by_index(-1))
        self.assertIsNone(self.query.by_index(30))


class IdLookupTests(unittest.TestCase):
    def test_duplicate_ids_return_first_occurrence(self) -> None:
        dataset = Dataset.from_records(
            [
                {"id": "7", "NAME": "First", "price": "$1"},
                {"id": "7", "NAME": "Second", "price": "$2"},
            ]
        )
        record = ListingQuery(dataset).by_id("7")
        self.assertIsNotNone(record)
        self.assertEqual(record.name, "First")

    def test_ids_compare_as_exact_strings(self) -> None:
        dataset = Dataset.from_records(
            [
                {"id": "007", "NAME": "Padded", "price": "$1"},
                {"id": 8, "NAME": "Numeric id", "price": "$1"},
            ]
        )
        query = ListingQuery(dataset)
        self.assertIsNone(query.by_id("7"))
        self.assertIsNotNone(query.by_id("007"))
        self.assertIsNone(query.by_id("8"))

    def test_unknown_id_is_not_found(self) -> None:
        self.assertIsNone(ListingQuery(_scenario_dataset()).by_id("99"))


class NameSearchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dataset = Dataset.from_records(
            [
                {"id": "1", "NAME": "Sunny LOFT in Brooklyn", "price": "$1"},
                {"id": "2", "NAME": "", "price": "$1"},
                {"id": "3", "price": "$1"},
                {"id": "4", "NAME": "Quiet loft", "price": "$1"},
                {"id": "5", "NAME": "Garden flat", "price": "$1"},
                {"id": "6", "NAME": 12345, "price": "$1"},
            ]
        )
        self.query = ListingQuery(self.dataset)

    def test_matches_are_complete_and_ordered(self) -> None:
        matches = self.query.by_name("Loft")
        self.assertEqual([listing.id for listing in matches], ["1", "4"])

    def test_substring_not_prefix(self) -> None:
        self.assertEqual([listing.id for listing in self.query.by_name("rden")], ["5"])

    def test_listings_without_names_never_match(self) -> None:
        ids = [listing.id for listing in self.query.by_name("")]
        self.assertNotIn("2", ids)
        self.assertNotIn("3", ids)
        self.assertNotIn("6", ids)

    def test_no_matches_is_empty_list(self) -> None:
        self.assertEqual(self.query.by_name("castle"), [])


class PriceRangeTests(unittest.TestCase):
    def test_unparseable_prices_are_excluded(self) -> None:
        dataset = Dataset.from_records(
            [
                {"id": "1", "NAME": "a", "price": "$"},
                {"id": "2", "NAME": "b", "price": "$1,060 "},
                {"id": "3", "NAME": "c"},
                {"id": "4", "NAME": "d", "price": "  $ 75.50 "},
                {"id": "5", "NAME": "e", "price": "NaN"},
                {"id": "6", "NAME": "f", "price": 120},
            ]
        )
        matches = ListingQuery(dataset).by_price_range(0, 1_000_000)
        self.assertEqual([listing.id for listing in matches], ["2", "4", "6"])

    def test_only_the_leading_number_of_a_price_counts(self) -> None:
        dataset = Dataset.from_records(
            [
                {"id": "1", "NAME": "a", "price": "$1,060 "},
                {"id": "2", "NAME": "b", "price": "$75abc"},
                {"id": "3", "NAME": "c", "price": "$250"},
            ]
        )
        matches = ListingQuery(dataset).by_price_range(0, 100)
        self.assertEqual([listing.id for listing in matches], ["1", "2"])

    def test_bounds_are_inclusive(self) -> None:
        dataset = _scenario_dataset()
        matches = ListingQuery(dataset).by_price_range(100, 250)
        self.assertEqual(len(matches), 2)

    def test_inverted_bounds_match_nothing(self) -> None:
        self.assertEqual(ListingQuery(_scenario_dataset()).by_price_range(300, 0), [])


class ParsePriceTests(unittest.TestCase):
    def test_parse_price_formats(self) -> None:
        for raw, expected in [
            ("$120.00", 120.0),
            (" $966 ", 966.0),
            ("45", 45.0),
            (99.5, 99.5),
            ("$1,060", 1.0),
            ("$75abc", 75.0),
            ("$1_000", 1.0),
            ("$inf", None),
            ("NaN", None),
            (".5", 0.5),
            ("12.", 12.0),
            ("2e2 nights", 200.0),
            ("Infinity", float("inf")),
            ("$²", None),
            ("", None),
            (None, None),
            (True, None),
            ("free", None),
        ]:
            with self.subTest(raw=raw):
                self.assertEqual(parse_price(raw), expected)


class ExecuteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.query = ListingQuery(_scenario_dataset())

    def test_single_record_result(self) -> None:
        result = self.query.execute("by_id", listing_id="1")
        self.assertEqual(result.kind, "record")
        self.assertTrue(result.found)
        self.assertEqual(result.record.name, "Cozy Loft")

    def test_not_found_result(self) -> None:
        result = self.query.execute("by_index", index=9)
        self.assertEqual(result.kind, "not_found")
        self.assertFalse(result.found)
        self.assertIsNone(result.record)

    def test_no_matches_result(self) -> None:
        result = self.query.execute("by_name", query="castle")
        self.assertEqual(result.kind, "no_matches")
        self.assertEqual(result.records, ())

    def test_records_result(self) -> None:
        result = self.query.execute("by_price_range", minimum=0, maximum=500)
        self.assertEqual(result.kind, "records")
        self.assertEqual([record.id for record in result.records], ["1", "2"])
        self.assertEqual(result.to_dict()["records"][1]["name"], "Sunny Flat")

    def test_unknown_operation_raises(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown query operation"):
            self.query.execute("by_colour", colour="red")


if __name__ == "__main__":
    unittest.main()
