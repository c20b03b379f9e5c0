"""In-app notifications: one page of the inbox plus the unread badge count."""

from typing import Any, Dict, List, Optional

from luxgifts.api.account import NotificationService
from luxgifts.api.client import Pagination, page_of
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.base import ALL_ROLES, DomainStore, logger
from luxgifts.stores.cache import Entity, entity_id_of

PAGE_SIZE = 10


def _unread_from(response: Dict[str, Any]) -> Optional[int]:
    data = response.get("data")
    count = data.get("count") if isinstance(data, dict) else response.get("count")
    try:
        return max(0, int(count))
    except (TypeError, ValueError):
        return None


class NotificationStore(DomainStore):
    name = "notifications"
    required_roles = ALL_ROLES

    def __init__(self, service: NotificationService, notifier: Optional[Notifier] = None) -> None:
        super().__init__(notifier)
        self.service = service
        self.notifications: List[Entity] = []
        self.unread_count = 0
        self.pagination = Pagination(limit=PAGE_SIZE)
        self.loading = False
        self.error: Optional[str] = None

    def refresh(self) -> None:
        self.fetch()
        self.fetch_unread_count()

    def reset(self) -> None:
        with self._lock:
            self.notifications = []
            self.unread_count = 0
            self.pagination = Pagination(limit=PAGE_SIZE)
            self.error = None
            self.loading = False

    def fetch(
        self, page: int = 1, limit: int = PAGE_SIZE, read: Optional[bool] = None, kind: Optional[str] = None
    ) -> Optional[List[Entity]]:
        if not self._authorized("fetch"):
            return None
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if read is not None:
            params["read"] = "true" if read else "false"
        if kind:
            params["type"] = kind
        self.loading = True
        try:
            response = self.service.get_notifications(params)
        except ApiError as e:
            self.error = e.message or "Failed to fetch notifications"
            self.notifier.error(self.error)
            return None
        finally:
            self.loading = False
        items, pagination = page_of(response, page, limit)
        with self._lock:
            self.notifications = [item for item in items if isinstance(item, dict)]
            self.pagination = pagination
            self.error = None
        return list(self.notifications)

    def fetch_unread_count(self) -> Optional[int]:
        if not self._authorized("fetch_unread_count"):
            return None
        try:
            count = _unread_from(self.service.get_unread_count())
        except ApiError as e:
            # Badge only; no toast
            logger.error("store: name=notifications unread count failed: %s", e.message)
            return None
        if count is not None:
            self.unread_count = count
        return self.unread_count

    def _find(self, notification_id: str) -> Optional[Entity]:
        for notification in self.notifications:
            if entity_id_of(notification) == notification_id:
                return notification
        return None

    def mark_read(self, notification_id: str) -> bool:
        if not self._authorized("mark_read"):
            return False
        if self._mutate(lambda: self.service.mark_as_read(notification_id), "Failed to mark notification as read") is None:
            return False
        with self._lock:
            target = self._find(notification_id)
            self.notifications = [
                {**n, "isRead": True} if entity_id_of(n) == notification_id else n for n in self.notifications
            ]
            # Already read on this page: count unchanged
            if target is None or not target.get("isRead"):
                self.unread_count = max(0, self.unread_count - 1)
        self.notifier.success("Notification marked as read")
        return True

    def mark_all_read(self) -> bool:
        if not self._authorized("mark_all_read"):
            return False
        if self._mutate(self.service.mark_all_as_read, "Failed to mark all notifications as read") is None:
            return False
        with self._lock:
            self.notifications = [{**n, "isRead": True} for n in self.notifications]
            self.unread_count = 0
        self.notifier.success("All notifications marked as read")
        return True

    def remove(self, notification_id: str) -> bool:
        if not self._authorized("remove"):
            return False
        if self._mutate(lambda: self.service.delete_notification(notification_id), "Failed to delete notification") is None:
            return False
        with self._lock:
            removed = self._find(notification_id)
            self.notifications = [n for n in self.notifications if entity_id_of(n) != notification_id]
            if removed is not None and not removed.get("isRead"):
                self.unread_count = max(0, self.unread_count - 1)
        self.notifier.success("Notification deleted")
        return True

    def clear_read(self) -> bool:
        if not self._authorized("clear_read"):
            return False
        if self._mutate(self.service.delete_read_notifications, "Failed to delete read notifications") is None:
            return False
        with self._lock:
            self.notifications = [n for n in self.notifications if not n.get("isRead")]
        self.notifier.success("Read notifications cleared")
        return True
