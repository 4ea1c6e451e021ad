from __future__ import annotations

import os
import unittest
from contextlib import redirect_stdout
from io import StringIO
from unittest import mock

from config.env import env_float
from config.env import env_str
from config.env import parse_id_set
from config.env import resolve_allowed_channel_ids


class ConfigEnvTests(unittest.TestCase):
    def test_parse_id_set_skips_junk(self):
        raw = "123456789012345678, nope;987654321098765432  42"
        self.assertEqual(parse_id_set(raw), {123456789012345678, 987654321098765432})
        self.assertEqual(parse_id_set(None), set())

    def test_env_str_blank_uses_default(self):
        with mock.patch.dict(os.environ, {"LEARNDB_STORE_BACKEND": "  "}):
            self.assertEqual(env_str("LEARNDB_STORE_BACKEND", "redis"), "redis")
        with mock.patch.dict(os.environ, {"LEARNDB_STORE_BACKEND": "memory"}):
            self.assertEqual(env_str("LEARNDB_STORE_BACKEND", "redis"), "memory")

    def test_env_float_falls_back_on_bad_values(self):
        out = StringIO()
        with mock.patch.dict(os.environ, {"LEARNDB_STORE_TIMEOUT_SECONDS": "soon"}), redirect_stdout(out):
            self.assertEqual(env_float("LEARNDB_STORE_TIMEOUT_SECONDS", 5.0), 5.0)
        self.assertIn("[CFG] invalid LEARNDB_STORE_TIMEOUT_SECONDS", out.getvalue())

        with mock.patch.dict(os.environ, {"LEARNDB_STORE_TIMEOUT_SECONDS": "0"}), redirect_stdout(StringIO()):
            self.assertEqual(env_float("LEARNDB_STORE_TIMEOUT_SECONDS", 5.0, minimum=0.1), 5.0)

        with mock.patch.dict(os.environ, {"LEARNDB_STORE_TIMEOUT_SECONDS": "2.5"}):
            self.assertEqual(env_float("LEARNDB_STORE_TIMEOUT_SECONDS", 5.0), 2.5)

    def test_allowed_channels_env_overrides_defaults(self):
        with mock.patch.dict(os.environ, {"LEARNDB_ALLOWED_CHANNEL_IDS": "111111111111111111"}):
            self.assertEqual(resolve_allowed_channel_ids({222222222222222222}), {111111111111111111})
        with mock.patch.dict(os.environ, {"LEARNDB_ALLOWED_CHANNEL_IDS": ""}):
            self.assertEqual(resolve_allowed_channel_ids({222222222222222222}), {222222222222222222})


if __name__ == "__main__":
    unittest.main()
