"""Tests for the symkit configuration system."""

import json
import pathlib
import tempfile
import unittest

from symkit.core.config import (
    ConfigConstants,
    RuleConfiguration,
    SymkitConfiguration,
)


class TestRuleConfiguration(unittest.TestCase):
    def test_round_trip_through_dict(self):
        rule = RuleConfiguration(name="SumWithZero", is_activated=False, config={"a": 1})
        data = rule.to_dict()
        self.assertEqual(
            data, {"name": "SumWithZero", "is_activated": False, "config": {"a": 1}}
        )
        self.assertEqual(RuleConfiguration.from_dict(data), rule)


class TestSymkitConfiguration(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = pathlib.Path(self._tmp.name)
        self.config_path = self.tmp_path / "options.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_uses_defaults(self):
        config = SymkitConfiguration(self.config_path)
        self.assertEqual(config.max_passes, ConfigConstants.DEFAULT_MAX_PASSES)
        self.assertEqual(config.precision, ConfigConstants.DEFAULT_PRECISION)
        self.assertEqual(config.disabled_rules(), set())

    def test_corrupt_file_uses_defaults(self):
        self.config_path.write_text("{not json")
        config = SymkitConfiguration(self.config_path)
        self.assertEqual(config.max_passes, ConfigConstants.DEFAULT_MAX_PASSES)

    def test_non_object_file_uses_defaults(self):
        self.config_path.write_text("[1, 2]")
        config = SymkitConfiguration(self.config_path)
        self.assertEqual(config.precision, ConfigConstants.DEFAULT_PRECISION)
        self.assertEqual(config.rules, [])

    def test_values_are_read_from_file(self):
        self.config_path.write_text(json.dumps({"max_passes": 3, "precision": 30}))
        config = SymkitConfiguration.from_file(self.config_path)
        self.assertEqual(config.max_passes, 3)
        self.assertEqual(config.precision, 30)

    def test_disabled_rules_are_lower_cased(self):
        self.config_path.write_text(
            json.dumps(
                {
                    "rules": [
                        {"name": "SumWithZero", "is_activated": False, "config": {}},
                        {"name": "ProductWithOne", "is_activated": True, "config": {}},
                    ]
                }
            )
        )
        config = SymkitConfiguration(self.config_path)
        self.assertEqual(config.disabled_rules(), {"sumwithzero"})

    def test_save_creates_parent_directories(self):
        nested = self.tmp_path / "a" / "b" / "options.json"
        config = SymkitConfiguration(nested)
        config["precision"] = 80
        config.save()
        self.assertEqual(json.loads(nested.read_text())["precision"], 80)

    def test_log_dir_defaults_below_user_dir(self):
        config = SymkitConfiguration(self.config_path, user_dir=self.tmp_path)
        self.assertEqual(config.log_dir, self.tmp_path / "logs")

    def test_defaults_never_reads_disk(self):
        config = SymkitConfiguration.defaults()
        self.assertIsNone(config.get("max_passes"))
        self.assertEqual(config.max_passes, ConfigConstants.DEFAULT_MAX_PASSES)

    def test_get_and_set(self):
        config = SymkitConfiguration.defaults()
        config.set("max_passes", 2)
        self.assertEqual(config.get("max_passes"), 2)
        self.assertEqual(config["max_passes"], 2)
        self.assertEqual(config.max_passes, 2)


if __name__ == "__main__":
    unittest.main()
