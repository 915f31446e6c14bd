import unittest
import os
import yaml
from unittest.mock import patch, mock_open
from pydantic import ValidationError
from core.config_loader import load_config, get_default_config, AppConfig


class TestConfigLoader(unittest.TestCase):

    def setUp(self):
        self.sample_config = {
            "extraction": {"max_chars": 20000, "antiword_path": "/usr/bin/antiword"},
            "scorer": {"weight_skills": 0.3, "weight_experience": 0.5, "weight_education": 0.2},
            "analysis": {"admission_control": False, "version": "2.0.0"},
            "logging": {"level": "DEBUG"},
        }
        self.config_yaml = yaml.dump(self.sample_config)

    def test_load_config_default(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                config = load_config("dummy_path.yaml")
                self.assertIsInstance(config, AppConfig)
                self.assertEqual(config.extraction.max_chars, 20000)
                self.assertEqual(config.extraction.antiword_path, "/usr/bin/antiword")
                self.assertEqual(config.scorer.weight_experience, 0.5)
                self.assertFalse(config.analysis.admission_control)
                self.assertEqual(config.analysis.version, "2.0.0")

    def test_missing_file_uses_defaults(self):
        with patch("os.path.exists", return_value=False):
            with patch.dict(os.environ, {}, clear=True):
                config = load_config("missing.yaml")
                self.assertEqual(config, get_default_config())
                self.assertEqual(config.scorer.weight_skills, 0.35)
                self.assertTrue(config.analysis.admission_control)

    def test_empty_file_uses_defaults(self):
        with patch("builtins.open", mock_open(read_data="")):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {}, clear=True):
                    config = load_config("empty.yaml")
                    self.assertEqual(config.extraction.txt_encoding, "utf-8")

    def test_env_var_override_log_level(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {"CV_ANALYZER_LOG_LEVEL": "WARNING"}):
                    config = load_config("dummy_path.yaml")
                    self.assertEqual(config.logging.level, "WARNING")

    def test_env_var_override_antiword(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {"ANTIWORD_PATH": "/opt/antiword/bin/antiword"}):
                    config = load_config("dummy_path.yaml")
                    self.assertEqual(config.extraction.antiword_path, "/opt/antiword/bin/antiword")

    def test_env_var_override_admission_control(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {"CV_ANALYZER_ADMISSION_CONTROL": "on"}):
                    config = load_config("dummy_path.yaml")
                    self.assertTrue(config.analysis.admission_control)

    def test_invalid_weights_rejected(self):
        bad_yaml = yaml.dump({"scorer": {"weight_skills": 0.9, "weight_experience": 0.4, "weight_education": 0.25}})
        with patch("builtins.open", mock_open(read_data=bad_yaml)):
            with patch("os.path.exists", return_value=True):
                with self.assertRaises(ValidationError):
                    load_config("dummy_path.yaml")


if __name__ == '__main__':
    unittest.main()
