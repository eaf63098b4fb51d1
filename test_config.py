#!/usr/bin/env python3
"""
Tests for configuration loading
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from nodecmp.comparison_components.config_helper import (
    ENV_CLIENT_VERSION,
    ENV_TIMEOUT,
    NodecmpConfig,
    create_config,
    load_default_settings,
)
from nodecmp.core.errors import ConfigError


class TestDefaults(unittest.TestCase):
    """Test the packaged defaults"""

    def test_packaged_defaults(self):
        settings = load_default_settings()
        self.assertEqual(settings["timeout"], 60.0)
        self.assertEqual(settings["strict_timeout"], 0.1)
        self.assertEqual(settings["client_version"], "1.2.0")

    @patch.dict(os.environ, {}, clear=True)
    def test_create_config_defaults(self):
        self.assertEqual(create_config(), NodecmpConfig())


@patch.dict(os.environ, {}, clear=True)
class TestCreateConfig(unittest.TestCase):
    """Test layering of configuration sources"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write_config(self, content: str) -> str:
        path = os.path.join(self.tmpdir.name, "nodecmp.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_config_file(self):
        path = self.write_config("timeout: 2.5\nclient_version: '1.3.0'\nunknown: true\n")
        config = create_config(config_file=path)
        self.assertEqual(config.timeout, 2.5)
        self.assertEqual(config.client_version, "1.3.0")

    def test_environment_overrides_file(self):
        path = self.write_config("timeout: 2.5\n")
        with patch.dict(os.environ, {ENV_TIMEOUT: "4", ENV_CLIENT_VERSION: "1.4.0"}):
            config = create_config(config_file=path)
        self.assertEqual(config.timeout, 4.0)
        self.assertEqual(config.client_version, "1.4.0")

    def test_arguments_override_environment(self):
        with patch.dict(os.environ, {ENV_TIMEOUT: "4"}):
            config = create_config(timeout=0.25, client_version="9.0.0")
        self.assertEqual(config.timeout, 0.25)
        self.assertEqual(config.client_version, "9.0.0")

    def test_strict_preset(self):
        self.assertEqual(create_config(strict=True).timeout, 0.1)

    def test_explicit_timeout_beats_strict(self):
        self.assertEqual(create_config(timeout=3, strict=True).timeout, 3.0)

    def test_invalid_values(self):
        for kwargs in [{"timeout": 0}, {"timeout": -1}, {"timeout": "soon"},
                       {"client_version": ""}, {"client_version": "1.2.0-é"}]:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigError):
                    create_config(**kwargs)

    def test_invalid_yaml(self):
        path = self.write_config("timeout: [1, 2\n")
        with self.assertRaises(ConfigError):
            create_config(config_file=path)

    def test_yaml_not_mapping(self):
        path = self.write_config("- 1\n- 2\n")
        with self.assertRaises(ConfigError):
            create_config(config_file=path)

    def test_bad_max_version_length(self):
        path = self.write_config("max_version_length: 0\n")
        with self.assertRaises(ConfigError):
            create_config(config_file=path)

    def test_missing_config_file(self):
        with self.assertRaises(ConfigError) as ctx:
            create_config(config_file=os.path.join(self.tmpdir.name, "absent.yaml"))
        self.assertTrue(str(ctx.exception).startswith("invalid configuration: "))


if __name__ == "__main__":
    unittest.main(verbosity=2)
