"""
Tests for the game writer and id generation.
"""

import json
import os
import shutil
import tempfile
import unittest

import pandas as pd

from catalog_ai.models.game_model import FailureEntry, GameRecord
from catalog_ai.output_generation.game_writer import GameWriter, assign_ids, generate_id


class TestGenerateId(unittest.TestCase):

    def test_slugify(self):
        self.assertEqual(generate_id("Super Mario Bros."), "super-mario-bros")
        self.assertEqual(generate_id("  Mario Kart 8: Deluxe!! "), "mario-kart-8-deluxe")

    def test_keeps_cjk_characters(self):
        self.assertEqual(generate_id("超级马里奥 兄弟"), "超级马里奥-兄弟")

    def test_length_cap(self):
        self.assertEqual(len(generate_id("a" * 80)), 50)

    def test_empty_title(self):
        self.assertEqual(generate_id("!!!"), "game")

    def test_collisions_are_suffixed(self):
        records = [GameRecord(title="Mario Kart 8"), GameRecord(title="Mario Kart 8"), GameRecord(title="Zelda")]
        ids = assign_ids(records, existing_ids=["mario-kart-8"])
        self.assertEqual(ids, ["mario-kart-8-1", "mario-kart-8-2", "zelda"])


class TestGameWriter(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.games_file = os.path.join(self.test_dir, "data", "games.json")
        self.writer = GameWriter(self.games_file)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_write_games_appends_to_existing(self):
        os.makedirs(os.path.dirname(self.games_file))
        with open(self.games_file, 'w', encoding='utf-8') as f:
            json.dump([{"id": "zelda", "title": "Zelda", "category": "Role-Playing"}], f)

        counts = self.writer.write_games([
            GameRecord(title="Zelda", category="Role-Playing"),
            GameRecord(title="Mario Kart 8", category="Racing", tags=["Mario"]),
        ])

        with open(self.games_file, encoding='utf-8') as f:
            games = json.load(f)

        self.assertEqual([game["id"] for game in games], ["zelda", "zelda-1", "mario-kart-8"])
        self.assertEqual(games[2]["cover_image"], "/placeholder.svg")
        self.assertEqual(games[2]["download_link"], "#")
        self.assertEqual(games[2]["status"], "draft")
        self.assertEqual(games[2]["tags"], ["Mario"])
        self.assertEqual(counts, {"Role-Playing": 2, "Racing": 1})

    def test_load_existing_missing_file(self):
        self.assertEqual(self.writer.load_existing(), [])

    def test_load_existing_rejects_non_list(self):
        os.makedirs(os.path.dirname(self.games_file))
        with open(self.games_file, 'w', encoding='utf-8') as f:
            json.dump({"games": []}, f)
        with self.assertRaises(ValueError):
            self.writer.load_existing()

    def test_write_failures(self):
        csv_path = os.path.join(self.test_dir, "out", "failed.csv")
        failures = [FailureEntry(input="B", error="boom", index=1), FailureEntry(input="A", error="bad", index=0)]

        path = self.writer.write_failures(failures, csv_path)

        self.assertEqual(path, csv_path)
        df = pd.read_csv(csv_path)
        self.assertEqual(list(df.columns), ["index", "input", "error"])
        self.assertEqual(list(df["input"]), ["A", "B"])

    def test_write_failures_nothing_failed(self):
        self.assertIsNone(self.writer.write_failures([], os.path.join(self.test_dir, "failed.csv")))


if __name__ == '__main__':
    unittest.main()
