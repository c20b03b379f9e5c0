"""Tests for YAML config loading and environment overrides."""

import pytest

from luxgifts.core.config import DEFAULT_API_URL, LuxGiftsConfig, get_config, set_config

ENV_VARS = ("LUXGIFTS_API_URL", "LUXGIFTS_SOCKET_URL", "LUXGIFTS_REQUEST_TIMEOUT", "RAZORPAY_KEY_ID")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestFromYaml:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "api:\n"
            "  url: https://shop.example.com/api\n"
            "  timeout: 30\n"
            "checkout:\n"
            "  tax_rate: 0.18\n"
            "  flat_shipping_cents: 4900\n"
            "payment:\n"
            "  razorpay_key_id: rzp_live_x\n"
            "push:\n"
            "  reconnection_attempts: 3\n"
        )
        config = LuxGiftsConfig.from_yaml(path)
        assert config.api_url == "https://shop.example.com/api"
        assert config.request_timeout == 30.0
        assert config.tax_rate == 0.18
        assert config.flat_shipping_cents == 4900
        assert config.razorpay_key_id == "rzp_live_x"
        assert config.reconnection_attempts == 3
        assert config.push_url == "https://shop.example.com"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = LuxGiftsConfig.from_yaml(tmp_path / "absent.yaml")
        assert config.api_url == DEFAULT_API_URL
        assert config.currency == "INR"
        assert config.tax_rate == 0.05
        assert config.flat_shipping_cents == 1000

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert LuxGiftsConfig.from_yaml(path).reconnection_delay == 1.0


class TestEnvOverrides:
    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("api:\n  url: http://file.local/api\n")
        monkeypatch.setenv("LUXGIFTS_API_URL", "https://env.example.com/api/")
        monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_env")
        monkeypatch.setenv("LUXGIFTS_REQUEST_TIMEOUT", "5")

        config = LuxGiftsConfig.from_yaml(path)
        assert config.api_url == "https://env.example.com/api"
        assert config.razorpay_key_id == "rzp_env"
        assert config.request_timeout == 5.0

    def test_socket_url_override(self, monkeypatch):
        monkeypatch.setenv("LUXGIFTS_SOCKET_URL", "wss://push.example.com/")
        config = LuxGiftsConfig().with_env_overrides()
        assert config.push_url == "wss://push.example.com"


class TestGlobalConfig:
    def test_set_and_get(self):
        custom = LuxGiftsConfig(currency="USD")
        set_config(custom)
        assert get_config() is custom
