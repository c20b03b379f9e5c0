"""Configuration for the Luxury Gifts client."""
from luxgifts.core.config import LuxGiftsConfig, get_config, set_config

__all__ = ["LuxGiftsConfig", "get_config", "set_config"]
