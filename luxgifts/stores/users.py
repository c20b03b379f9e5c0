"""Signed-in user's own profile."""

from typing import Any, Dict, Optional

from luxgifts.api.catalog import UserService
from luxgifts.errors import ApiError
from luxgifts.notify import Notifier
from luxgifts.stores.base import ALL_ROLES, DomainStore, logger
from luxgifts.stores.cache import Entity, entity_id_of, is_newer


class UserStore(DomainStore):
    name = "user"
    required_roles = ALL_ROLES

    def __init__(self, service: UserService, notifier: Optional[Notifier] = None) -> None:
        super().__init__(notifier)
        self.service = service
        self.profile: Optional[Entity] = None
        self.loading = False
        self.error: Optional[str] = None

    def event_handlers(self):
        return {"userProfileUpdated": self._on_profile_updated}

    def refresh(self) -> None:
        self.fetch_profile()

    def reset(self) -> None:
        with self._lock:
            self.profile = None
            self.error = None
            self.loading = False

    def fetch_profile(self) -> Optional[Entity]:
        if not self._authorized("fetch_profile"):
            return None
        self.loading = True
        try:
            response = self.service.get_profile()
            if response.get("success"):
                with self._lock:
                    self.profile = response.get("data")
            self.error = None
            return self.profile
        except ApiError as e:
            self.error = e.message
            self.notifier.error(e.message)
            return None
        finally:
            self.loading = False

    def update_profile(self, profile_data: Dict[str, Any]) -> Optional[Entity]:
        if not self._authorized("update_profile"):
            return None
        self.loading = True
        try:
            response = self.service.update_profile(profile_data)
            if response.get("success"):
                self._merge(response.get("data"))
                self.notifier.success("Profile updated successfully")
            self.error = None
            return self.profile
        except ApiError as e:
            self.error = e.message
            self.notifier.error(e.message)
            return None
        finally:
            self.loading = False

    def _merge(self, incoming: Any) -> bool:
        if not isinstance(incoming, dict):
            return False
        with self._lock:
            if self.profile is not None and is_newer(self.profile, incoming):
                return False
            self.profile = incoming
            return True

    def _on_profile_updated(self, profile: Entity) -> None:
        # Other users' profile events are not ours to apply
        current_id = entity_id_of(self.profile) if self.profile else None
        if current_id is None or entity_id_of(profile) != current_id:
            logger.debug("store: name=user ignoring profile event for another user")
            return
        if self._merge(profile):
            self.notifier.info("Your profile has been updated")
