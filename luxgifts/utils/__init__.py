from luxgifts.utils.formatters import format_cents, format_currency, format_date, format_phone
from luxgifts.utils.logger import get_logger, set_log_level

__all__ = ["format_cents", "format_currency", "format_date", "format_phone", "get_logger", "set_log_level"]
