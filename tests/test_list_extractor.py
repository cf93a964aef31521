"""
Tests for GameListExtractor.
Covers the model-driven path and the line-split fallback.
"""

import unittest
from unittest.mock import MagicMock

from catalog_ai.llm_extraction.exceptions import EmptyResponseError, NetworkError, UpstreamError
from catalog_ai.llm_extraction.list_extractor import GameListExtractor, split_lines


class TestSplitLines(unittest.TestCase):

    def test_trims_and_drops_empty_lines(self):
        self.assertEqual(split_lines("  a \n\n b\r\n   \nc"), ["a", "b", "c"])

    def test_empty_input(self):
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines("\n  \n"), [])


class TestGameListExtractor(unittest.TestCase):
    """Test suite for GameListExtractor."""

    def setUp(self):
        self.client = MagicMock()
        self.extractor = GameListExtractor(self.client)

    def test_uses_model_output(self):
        self.client.generate.return_value = "Super Mario Bros.\n\n  Mario Kart 8  \n"

        result = self.extractor.extract_list("I love Super Mario Bros. and Mario Kart 8, and Super Mario Bros. again")

        self.assertEqual(result, ["Super Mario Bros.", "Mario Kart 8"])
        prompt = self.client.generate.call_args.args[0]
        self.assertIn("I love Super Mario Bros.", prompt)

    def test_falls_back_when_inference_fails(self):
        """An always-failing client yields a plain line split of the input."""
        self.client.generate.side_effect = NetworkError("offline")

        result = self.extractor.extract_list("Super Mario Bros.\nMario Kart 8")

        self.assertEqual(result, ["Super Mario Bros.", "Mario Kart 8"])

    def test_fallback_for_every_client_error(self):
        errors = [
            UpstreamError("rejected", status_code=500, body="oops"),
            EmptyResponseError("empty"),
            RuntimeError("unexpected"),
        ]
        for error in errors:
            self.client.generate.side_effect = error
            self.assertEqual(self.extractor.extract_list(" A \n\nB "), ["A", "B"])

    def test_attempt_reports_error(self):
        error = NetworkError("offline")
        self.client.generate.side_effect = error

        attempt = self.extractor.attempt_inference("text")

        self.assertFalse(attempt.successful)
        self.assertIs(attempt.error, error)
        self.assertIsNone(attempt.lines)

    def test_attempt_reports_lines(self):
        self.client.generate.return_value = "A\nB"

        attempt = self.extractor.attempt_inference("text")

        self.assertTrue(attempt.successful)
        self.assertEqual(attempt.lines, ["A", "B"])

    def test_empty_input_with_failing_client(self):
        self.client.generate.side_effect = NetworkError("offline")
        self.assertEqual(self.extractor.extract_list("   "), [])


if __name__ == '__main__':
    unittest.main()
