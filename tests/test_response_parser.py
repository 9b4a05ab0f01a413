import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.errors import EmptyResponse, MalformedResponse  # noqa: E402
from app.parsing.response import parse_embedded_json  # noqa: E402


class EmbeddedJsonTests(unittest.TestCase):
    def test_extracts_object_surrounded_by_noise(self):
        self.assertEqual(parse_embedded_json('noise {"a":1} noise'), {"a": 1})

    def test_handles_markdown_fences(self):
        text = 'Here you go:\n```json\n{"jobs": [{"title": "SRE"}]}\n```'
        self.assertEqual(parse_embedded_json(text), {"jobs": [{"title": "SRE"}]})

    def test_no_braces_is_malformed(self):
        with self.assertRaises(MalformedResponse):
            parse_embedded_json("no braces here")

    def test_reversed_braces_are_malformed(self):
        with self.assertRaises(MalformedResponse):
            parse_embedded_json("} before {")

    def test_invalid_json_between_braces_is_malformed(self):
        with self.assertRaises(MalformedResponse):
            parse_embedded_json("Sure! Here's the JSON: ```{not valid json```")

    def test_unrelated_braces_in_prose_widen_the_span(self):
        with self.assertRaises(MalformedResponse):
            parse_embedded_json('Use {placeholders} like this: {"a": 1}')

    def test_blank_text_is_empty_response(self):
        with self.assertRaises(EmptyResponse):
            parse_embedded_json("   ")
        with self.assertRaises(EmptyResponse):
            parse_embedded_json(None)


if __name__ == "__main__":
    unittest.main()
