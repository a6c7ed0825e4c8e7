import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "board"))

from vbcli_board.aliases import DEFAULT_RESOLVER, AliasResolver, canonical_alias, substitute_aliases


class CanonicalAliasTests(unittest.TestCase):
    def test_folds_case_separators_and_spaces(self):
        self.assertEqual(canonical_alias("  Question_Mark "), "question mark")
        self.assertEqual(canonical_alias("question-mark"), "question mark")
        self.assertEqual(canonical_alias("QUESTION \t  mark"), "question mark")


class SubstituteAliasesTests(unittest.TestCase):
    def test_color_alias(self):
        self.assertEqual(substitute_aliases("hello {green}"), "hello {66}")

    def test_plain_text_identity(self):
        for text in ("", "hello world", "x = y; 1 + 2", "multi\nline"):
            self.assertEqual(substitute_aliases(text), text)

    def test_every_alias_and_variants(self):
        for key, code in DEFAULT_RESOLVER.aliases.items():
            variants = {key, key.upper(), key.replace(" ", "_"), key.replace(" ", "-"), key.replace(" ", "   ")}
            for variant in variants:
                with self.subTest(variant=variant):
                    self.assertEqual(substitute_aliases("{" + variant + "}"), "{%d}" % code)

    def test_synonyms(self):
        self.assertEqual(substitute_aliases("{purple}{violet}"), "{68}{68}")

    def test_numeric_passthrough(self):
        self.assertEqual(substitute_aliases("{123}"), "{123}")
        self.assertEqual(substitute_aliases("{ 5 }"), "{5}")

    def test_unknown_passthrough(self):
        self.assertEqual(substitute_aliases("{not-a-real-alias}"), "{not-a-real-alias}")
        self.assertEqual(substitute_aliases("{ nope }"), "{ nope }")

    def test_blank_token_kept_verbatim(self):
        self.assertEqual(substitute_aliases("a{}b{  }c"), "a{}b{  }c")
        self.assertEqual(substitute_aliases("a{  }b"), "a{  }b")

    def test_mixed_tokens(self):
        self.assertEqual(substitute_aliases("{{x}} {Question-Mark} {\tgreen }"), "{{x}} {60} {66}")

    def test_expression_tokens_untouched(self):
        for expr in ("{{green}}", "{{ formatDate now 'HH:mm' }}", "{{a}b}"):
            with self.subTest(expr=expr):
                out = substitute_aliases("time {red} " + expr + " {blue}")
                self.assertIn(expr, out)
                self.assertTrue(out.startswith("time {63} "))

    def test_unterminated_tokens_copied(self):
        self.assertEqual(substitute_aliases("a {green"), "a {green")
        self.assertEqual(substitute_aliases("{red} {{ open"), "{63} {{ open")

    def test_custom_table(self):
        resolver = AliasResolver({"Sky_Blue": 67})
        self.assertEqual(resolver.resolve("{sky blue}{green}"), "{67}{green}")

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_RESOLVER.aliases["green"] = 1  # type: ignore[index]


if __name__ == "__main__":
    unittest.main()
