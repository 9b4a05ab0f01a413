import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.hashing import pick_index, stable_hash, to_int32  # noqa: E402


def _reference_hash(value: str) -> int:
    total = 0
    for position, char in enumerate(reversed(value)):
        total += ord(char) * (31 ** position)
    return to_int32(total)


class StableHashTests(unittest.TestCase):
    def test_small_strings_match_polynomial(self):
        self.assertEqual(stable_hash(""), 0)
        self.assertEqual(stable_hash("a"), 97)
        self.assertEqual(stable_hash("ab"), 97 * 31 + 98)

    def test_matches_java_style_string_hash(self):
        self.assertEqual(stable_hash("hello"), 99162322)

    def test_characters_outside_bmp_hash_as_surrogate_pairs(self):
        self.assertEqual(stable_hash("\U0001F600"), 0xD83D * 31 + 0xDE00)
        self.assertEqual(stable_hash("\U0001F600"), 1772899)
        self.assertEqual(stable_hash("caf\u00e9"), _reference_hash("caf\u00e9"))

    def test_wraps_to_signed_32_bit(self):
        value = "Backend Engineer:backend engineer node:0:3" * 4
        result = stable_hash(value)
        self.assertGreaterEqual(result, -(2**31))
        self.assertLess(result, 2**31)
        self.assertEqual(result, _reference_hash(value))

    def test_is_reproducible_and_may_collide(self):
        self.assertEqual(stable_hash("Canva"), stable_hash("Canva"))
        self.assertEqual(stable_hash("Aa"), stable_hash("BB"))

    def test_pick_index_folds_negative_seeds(self):
        self.assertEqual(pick_index(-7, 6), 1)
        self.assertEqual(pick_index(7, 6), 1)
        with self.assertRaises(ValueError):
            pick_index(1, 0)


if __name__ == "__main__":
    unittest.main()
