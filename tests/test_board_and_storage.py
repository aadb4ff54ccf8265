import json
import os
import tempfile
import unittest

from powersnake.board import BoardSize, board_dimensions, board_for_window
from powersnake.config import MARGIN_W, MARGIN_H
from powersnake.storage import JsonHighScoreStore, MemoryHighScoreStore


class TestBoard(unittest.TestCase):
    def test_given_area_when_computing_dimensions_then_floor_division(self):
        b = board_dimensions(205, 99, 10)
        self.assertEqual((b.cols, b.rows), (20, 9))
        self.assertEqual((b.width, b.height), (200, 90))

    def test_given_window_when_computing_board_then_margins_removed(self):
        b = board_for_window(640 + MARGIN_W, 400 + MARGIN_H, 20)
        self.assertEqual((b.cols, b.rows), (32, 20))

    def test_given_tiny_window_when_computing_board_then_clamped_to_one_cell(self):
        b = board_for_window(10, 10, 20)
        self.assertEqual((b.cols, b.rows), (1, 1))

    def test_given_board_when_wrapping_and_bounds_then_expected(self):
        b = BoardSize(10, 8)
        self.assertEqual(b.wrap(-1, 3), (9, 3))
        self.assertEqual(b.wrap(10, 8), (0, 0))
        self.assertTrue(b.contains(9, 7))
        self.assertFalse(b.contains(10, 0))
        self.assertFalse(b.contains(0, -1))
        self.assertEqual(b.center(), (5, 4))


class TestStorage(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "nested", "highscore.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_given_missing_file_when_loading_then_zero(self):
        self.assertEqual(JsonHighScoreStore(self.path).load(), 0)

    def test_given_saved_score_when_loading_with_new_store_then_same_value(self):
        JsonHighScoreStore(self.path).save(42)
        self.assertEqual(JsonHighScoreStore(self.path).load(), 42)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"snake2026_highScore": 42})

    def test_given_other_keys_when_saving_then_preserved(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"volume": 3}, f)
        JsonHighScoreStore(self.path).save(7)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"volume": 3, "snake2026_highScore": 7})

    def test_given_corrupt_file_when_loading_then_zero_and_warning(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertLogs("powersnake.storage", level="WARNING"):
            self.assertEqual(JsonHighScoreStore(self.path).load(), 0)

    def test_given_malformed_value_when_loading_then_zero(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"snake2026_highScore": "lots"}, f)
        with self.assertLogs("powersnake.storage", level="WARNING"):
            self.assertEqual(JsonHighScoreStore(self.path).load(), 0)

    def test_given_memory_store_when_saving_then_counts_writes(self):
        store = MemoryHighScoreStore(3)
        store.save(4)
        self.assertEqual((store.load(), store.writes), (4, 1))


if __name__ == '__main__':
    unittest.main(verbosity=2)
