"""Push-event channel shared by the entity stores."""
from luxgifts.core.config import socket_url_from_api_url
from luxgifts.push.channel import PushChannel

__all__ = ["PushChannel", "socket_url_from_api_url"]
