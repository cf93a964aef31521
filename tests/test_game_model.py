"""
Tests for the game data model and record utilities.
"""

import unittest

from catalog_ai.models.game_model import BatchResult, FailureEntry, GameCategory, GameRecord
from catalog_ai.utils.validation import format_tags, merge_game_info, validate_game_info


class TestGameRecord(unittest.TestCase):

    def test_category_set(self):
        self.assertEqual(len(GameCategory.values()), 6)
        self.assertEqual(GameCategory.default(), GameCategory.PLATFORMER)

    def test_to_dict_uses_payload_keys(self):
        record = GameRecord(title="Mario Kart 8", release_year="2014", tags=["Mario"], source_index=3)
        data = record.to_dict()

        self.assertEqual(data["releaseYear"], "2014")
        self.assertIsNone(data["downloadLink"])
        self.assertIsNone(data["coverImage"])
        self.assertEqual(data["sourceIndex"], 3)
        self.assertEqual(len([key for key in data if key != "sourceIndex"]), 12)

    def test_from_dict_round_trip(self):
        record = GameRecord(title="Zelda", category="Role-Playing", developer="Nintendo", source_index=1)
        self.assertEqual(GameRecord.from_dict(record.to_dict()), record)

    def test_from_dict_defaults(self):
        record = GameRecord.from_dict({"title": None, "tags": None})
        self.assertEqual(record.title, "Unknown Game")
        self.assertEqual(record.tags, [])
        self.assertEqual(record.category, "Platformer")


class TestBatchResult(unittest.TestCase):

    def setUp(self):
        self.result = BatchResult(
            success=[GameRecord(title="B", source_index=2, tags=["x", "y"]), GameRecord(title="A", source_index=0)],
            failed=[FailureEntry(input="C", error="boom", index=1)],
            total=3,
            processed=3
        )

    def test_summary(self):
        self.assertEqual(self.result.summary(), {
            'total': 3, 'processed': 3, 'succeeded': 2, 'failed': 1, 'cancelled': False,
        })

    def test_to_dataframe_in_input_order(self):
        df = self.result.to_dataframe()

        self.assertEqual(list(df["index"]), [0, 1, 2])
        self.assertEqual(list(df["status"]), ["success", "failed", "success"])
        self.assertEqual(df.loc[2, "tags"], "x, y")
        self.assertEqual(df.loc[1, "error"], "boom")

    def test_empty_dataframe(self):
        df = BatchResult().to_dataframe()
        self.assertTrue(df.empty)
        self.assertIn("status", df.columns)


class TestRecordUtilities(unittest.TestCase):

    def test_validate_complete_record(self):
        record = GameRecord(title="Zelda", description="Adventure", tags=["Link"])
        self.assertEqual(validate_game_info(record), (True, []))

    def test_validate_reports_missing_fields(self):
        is_valid, missing = validate_game_info(GameRecord(title=""))
        self.assertFalse(is_valid)
        self.assertEqual(missing, ["title", "description", "tags"])

    def test_merge_ignores_none(self):
        base = GameRecord(title="Zelda", description="Old", platform="Switch")
        merged = merge_game_info(base, {"description": "New", "platform": None, "unknown": 1})

        self.assertEqual(merged.description, "New")
        self.assertEqual(merged.platform, "Switch")
        self.assertEqual(base.description, "Old")

    def test_merge_records(self):
        base = GameRecord(title="Zelda", developer="Nintendo")
        merged = merge_game_info(base, GameRecord(title="Zelda BOTW", developer=None))
        self.assertEqual(merged.title, "Zelda BOTW")
        self.assertEqual(merged.developer, "Nintendo")

    def test_format_tags(self):
        self.assertEqual(format_tags([" a ", "", None, "b", "c", "d", "e", "f"]), ["a", "b", "c", "d", "e"])


if __name__ == '__main__':
    unittest.main()
