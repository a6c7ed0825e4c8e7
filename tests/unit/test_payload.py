import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "board"))

from vbcli_board.errors import ValidationError
from vbcli_board.payload import looks_like_raw_characters, parse_characters


class LooksLikeRawTests(unittest.TestCase):
    def test_matrix_with_padding(self):
        self.assertTrue(looks_like_raw_characters(" [[1,2],[3,4]] "))
        self.assertTrue(looks_like_raw_characters("[[72,69],[0,0]]"))
        self.assertTrue(looks_like_raw_characters("[[1, 2, 3], [4]]"))

    def test_prose_and_objects(self):
        self.assertFalse(looks_like_raw_characters("hello [1,2]"))
        self.assertFalse(looks_like_raw_characters('{"characters":[[1]]}'))
        self.assertFalse(looks_like_raw_characters("[not json at all]"))
        self.assertFalse(looks_like_raw_characters("[1, 2, 3, 4, 5]"))
        self.assertFalse(looks_like_raw_characters('[["a", "b"]]  '))

    def test_short_matrix_is_template_text(self):
        self.assertFalse(looks_like_raw_characters("[[1]]"))

    def test_deep_nesting_does_not_raise(self):
        self.assertFalse(looks_like_raw_characters("[" * 100000 + "]" * 100000))


class ParseCharactersTests(unittest.TestCase):
    def test_parse(self):
        chars = parse_characters("[[1,2],[3,4]]")
        self.assertEqual(chars, [[1, 2], [3, 4]])

    def test_rejects_object(self):
        with self.assertRaises(ValidationError):
            parse_characters('{"characters":[[1]]}')

    def test_rejects_empty_and_bad(self):
        for text in ("[]", "", "[[1.5]]", "[[true]]", "[1,2]"):
            with self.subTest(text=text):
                with self.assertRaises(ValidationError):
                    parse_characters(text)


if __name__ == "__main__":
    unittest.main()
