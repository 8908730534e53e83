import unittest
from unittest.mock import patch

from github_stats.config import SAMPLE_CONFIG, CollectorConfig
from github_stats.domain.exceptions import ConfigurationError


class TestCollectorConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = CollectorConfig()

        self.assertEqual(config.repos, [])
        self.assertEqual(config.api_base_url, "")
        self.assertEqual(config.access_token, "")
        self.assertEqual(config.timeout, 10)
        self.assertFalse(config.debug)

    def test_from_env_reads_github_variables(self) -> None:
        config = CollectorConfig.from_env({
            "GITHUB_REPOS": "influxdata/telegraf, octocat/hello-world,,",
            "GITHUB_API_BASE_URL": "https://github.example.com",
            "GITHUB_TOKEN": "secret",
            "GITHUB_TIMEOUT": "30",
            "GITHUB_DEBUG": "True",
        })

        self.assertEqual(config.repos, ["influxdata/telegraf", "octocat/hello-world"])
        self.assertEqual(config.api_base_url, "https://github.example.com")
        self.assertEqual(config.access_token, "secret")
        self.assertEqual(config.timeout, 30)
        self.assertTrue(config.debug)

    def test_from_env_with_nothing_set(self) -> None:
        config = CollectorConfig.from_env({})

        self.assertEqual(config.repos, [])
        self.assertEqual(config.timeout, 10)
        self.assertFalse(config.debug)

    def test_invalid_timeout_is_a_configuration_error(self) -> None:
        for timeout in ["soon", "0", "-1"]:
            with self.subTest(timeout=timeout):
                with self.assertRaises(ConfigurationError):
                    CollectorConfig.from_env({"GITHUB_REPOS": "a/b", "GITHUB_TIMEOUT": timeout})

    def test_from_env_loads_dotenv_when_no_mapping_is_given(self) -> None:
        with patch("github_stats.config.load_dotenv") as mock_load_dotenv, \
                patch.dict("os.environ", {"GITHUB_REPOS": "a/b"}, clear=True):
            config = CollectorConfig.from_env()

        mock_load_dotenv.assert_called_once()
        self.assertEqual(config.repos, ["a/b"])

    def test_sample_config_mentions_every_setting(self) -> None:
        for variable in ["GITHUB_REPOS", "GITHUB_API_BASE_URL", "GITHUB_TOKEN", "GITHUB_TIMEOUT", "GITHUB_DEBUG"]:
            self.assertIn(variable, SAMPLE_CONFIG)
