"""
Configuration management for the Luxury Gifts client.

Loads settings from the YAML config file, lets environment variables
override the deployment-specific values, and provides typed access.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import yaml

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()


def _project_root() -> Path:
    """Return project root (parent of luxgifts package)."""
    return Path(__file__).resolve().parent.parent.parent


DEFAULT_CONFIG_PATH = _project_root() / "config" / "default.yaml"

DEFAULT_API_URL = "http://localhost:5000/api"


def socket_url_from_api_url(api_url: str) -> str:
    """Derive the push-channel URL from the REST base URL (drops a trailing /api)."""
    url = api_url.rstrip("/")
    if url.endswith("/api"):
        return url[: -len("/api")]
    return url


@dataclass
class LuxGiftsConfig:
    """Configuration for the storefront client."""

    # Backend endpoints
    api_url: str = DEFAULT_API_URL
    socket_url: Optional[str] = None     # None = derived from api_url
    request_timeout: float = 15.0        # seconds

    # Checkout pricing
    currency: str = "INR"
    tax_rate: float = 0.05
    flat_shipping_cents: int = 1000

    # Payment gateway
    razorpay_key_id: str = ""
    razorpay_script_url: str = "https://checkout.razorpay.com/v1/checkout.js"
    merchant_name: str = "Luxury Gifts"

    # Push channel reconnection policy
    reconnection_attempts: int = 5
    reconnection_delay: float = 1.0      # seconds

    @property
    def push_url(self) -> str:
        return self.socket_url or socket_url_from_api_url(self.api_url)

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "LuxGiftsConfig":
        """Load configuration from YAML file, then apply environment overrides."""
        path = config_path or DEFAULT_CONFIG_PATH
        data = {}
        if path.exists():
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}

        api_config = data.get('api', {})
        checkout_config = data.get('checkout', {})
        payment_config = data.get('payment', {})
        push_config = data.get('push', {})

        config = cls(
            api_url=api_config.get('url', DEFAULT_API_URL),
            socket_url=api_config.get('socket_url'),
            request_timeout=float(api_config.get('timeout', 15.0)),
            currency=checkout_config.get('currency', 'INR'),
            tax_rate=float(checkout_config.get('tax_rate', 0.05)),
            flat_shipping_cents=int(checkout_config.get('flat_shipping_cents', 1000)),
            razorpay_key_id=payment_config.get('razorpay_key_id', ''),
            razorpay_script_url=payment_config.get(
                'razorpay_script_url', "https://checkout.razorpay.com/v1/checkout.js"
            ),
            merchant_name=payment_config.get('merchant_name', 'Luxury Gifts'),
            reconnection_attempts=int(push_config.get('reconnection_attempts', 5)),
            reconnection_delay=float(push_config.get('reconnection_delay', 1.0)),
        )
        return config.with_env_overrides()

    def with_env_overrides(self) -> "LuxGiftsConfig":
        """Apply LUXGIFTS_* / RAZORPAY_* environment variables on top of file values."""
        api_url = os.getenv("LUXGIFTS_API_URL")
        if api_url:
            self.api_url = api_url.rstrip("/")
        socket_url = os.getenv("LUXGIFTS_SOCKET_URL")
        if socket_url:
            self.socket_url = socket_url.rstrip("/")
        timeout = os.getenv("LUXGIFTS_REQUEST_TIMEOUT")
        if timeout:
            self.request_timeout = float(timeout)
        key_id = os.getenv("RAZORPAY_KEY_ID")
        if key_id:
            self.razorpay_key_id = key_id
        return self


# Global config instance
_config: Optional[LuxGiftsConfig] = None


def get_config() -> LuxGiftsConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = LuxGiftsConfig.from_yaml()
    return _config


def set_config(config: LuxGiftsConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
