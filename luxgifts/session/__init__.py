from luxgifts.session.manager import SessionManager

__all__ = ["SessionManager"]
