import tempfile
import unittest
from pathlib import Path

from srl_extent.config import DEFAULT_CONFIG_PATH, get_layout, load_config


class TestConfig(unittest.TestCase):
    def write_yaml(self, tmp: str, text: str) -> Path:
        path = Path(tmp) / "extractor.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg["format"], "conll2008")
        self.assertEqual(cfg["roles"], ["A0", "A1"])
        self.assertEqual(cfg["singleton_policy"], "allow")

    def test_shipped_config_matches_defaults(self):
        self.assertEqual(load_config(DEFAULT_CONFIG_PATH), load_config())

    def test_yaml_overlay_and_overrides(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self.write_yaml(tmp, "format: conll2009\nroles: [A0, A1, A2]\n")
            cfg = load_config(path, singleton_policy="strict", roles=None)

        self.assertEqual(cfg["format"], "conll2009")
        self.assertEqual(cfg["roles"], ["A0", "A1", "A2"])
        self.assertEqual(cfg["singleton_policy"], "strict")

    def test_unknown_keys_are_ignored_with_warning(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self.write_yaml(tmp, "colour: blue\n")
            with self.assertLogs("srl_extent.config", level="WARNING"):
                cfg = load_config(path)

        self.assertNotIn("colour", cfg)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            load_config(format="conllu")
        with self.assertRaises(ValueError):
            load_config(singleton_policy="sometimes")
        with self.assertRaises(ValueError):
            load_config(validation_level="loose")
        with self.assertRaises(ValueError):
            load_config(roles=[])

    def test_layouts(self):
        self.assertEqual(get_layout("conll2008")["first_role_column"], 11)
        self.assertEqual(get_layout("conll2009")["first_role_column"], 14)
        self.assertEqual(get_layout("conll2008")["fields"][8], "head")
        self.assertEqual(get_layout("conll2008")["fields"][10], "pred")


if __name__ == '__main__':
    unittest.main()
