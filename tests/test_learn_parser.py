from __future__ import annotations

import unittest

from learn.parser import LearnAdd
from learn.parser import LearnDelete
from learn.parser import LearnQuery
from learn.parser import parse_learn_add_args
from learn.parser import parse_learn_delete_args
from learn.parser import parse_query


class LearnCommandParserTests(unittest.TestCase):
    def test_add_without_index(self):
        self.assertEqual(
            parse_learn_add_args("colors red is warm"),
            LearnAdd(topic="colors", index=None, fact="red is warm"),
        )

    def test_add_with_negative_index(self):
        self.assertEqual(
            parse_learn_add_args("  colors[-2] teal  "),
            LearnAdd(topic="colors", index=-2, fact="teal"),
        )

    def test_delete_requires_index(self):
        self.assertEqual(parse_learn_delete_args("colors[3]"), LearnDelete(topic="colors", index=3))
        self.assertEqual(parse_learn_delete_args("colors[-1]"), LearnDelete(topic="colors", index=-1))
        self.assertIsNone(parse_learn_delete_args("colors"))

    def test_empty_args(self):
        self.assertIsNone(parse_learn_add_args(""))
        self.assertIsNone(parse_learn_delete_args(""))

    def test_add_args_need_a_fact(self):
        self.assertIsNone(parse_learn_add_args("colors"))
        self.assertIsNone(parse_learn_add_args("colors[1]"))

    def test_delete_args_reject_trailing_text(self):
        self.assertIsNone(parse_learn_delete_args("colors[1] extra"))
        self.assertIsNone(parse_learn_delete_args("colors[x]"))


class QueryParserTests(unittest.TestCase):
    def test_default_index_is_first(self):
        self.assertEqual(parse_query("colors"), LearnQuery(topic="colors", index=1))

    def test_index_suffix(self):
        self.assertEqual(parse_query("colors[-1]"), LearnQuery(topic="colors", index=-1))

    def test_closing_bracket_is_optional(self):
        self.assertEqual(parse_query("colors[2"), LearnQuery(topic="colors", index=2))

    def test_whitespace_becomes_underscores(self):
        self.assertEqual(parse_query("  house   rules [2] "), LearnQuery(topic="house_rules_", index=2))
        self.assertEqual(parse_query("house rules"), LearnQuery(topic="house_rules", index=1))

    def test_blank_query(self):
        self.assertIsNone(parse_query("   "))


if __name__ == "__main__":
    unittest.main()
