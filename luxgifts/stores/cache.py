"""
Keyed entity cache driven by explicit actions.

reduce() is a pure function: given the current CacheState and an Action it
returns the next state. All cache rules live here so they can be tested
without a network or a push connection:

- FETCH_START bumps request_id; a FETCH_SUCCESS / FETCH_ERROR carrying an
  older request_id is stale and ignored.
- ENTITY_CREATED prepends an unknown id and merges a known one.
- ENTITY_UPDATED merges a known id; an unknown id is left alone.
- ENTITY_DELETED drops the id (unknown ids are a no-op) and tombstones it so
  a late echo of its creation is not re-inserted.
- Merging keeps whichever copy is newer by updatedAt (or __v), so a local
  mutation and its push echo converge no matter which arrives first.
- Entity actions applied while a fetch is in flight are kept in ``pending``
  and replayed over the fetched list, so a push event that lands during a
  fetch survives the fetch result.
- Secondary indexes are rebuilt from the primary list in the same step.
"""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from luxgifts.errors import ApiError
from luxgifts.notify import LoggingNotifier, Notifier
from luxgifts.utils.logger import get_logger

logger = get_logger("stores.cache")

Entity = Dict[str, Any]
IndexPredicate = Callable[[Entity], bool]
Listener = Callable[["CacheState"], None]


class ActionType(str, Enum):
    FETCH_START = "fetch_start"
    FETCH_SUCCESS = "fetch_success"
    FETCH_ERROR = "fetch_error"
    ENTITY_CREATED = "entity_created"
    ENTITY_UPDATED = "entity_updated"
    ENTITY_DELETED = "entity_deleted"
    RESET = "reset"


@dataclass(frozen=True)
class Action:
    type: ActionType
    payload: Any = None
    request_id: Optional[int] = None


@dataclass(frozen=True)
class CacheState:
    items: List[Entity] = field(default_factory=list)
    indexes: Dict[str, List[Entity]] = field(default_factory=dict)
    loading: bool = False
    error: Optional[str] = None
    request_id: int = 0
    tombstones: FrozenSet[str] = frozenset()
    pending: Tuple[Action, ...] = ()

    def get(self, entity_id: str) -> Optional[Entity]:
        for item in self.items:
            if entity_id_of(item) == entity_id:
                return item
        return None

    def ids(self) -> List[str]:
        return [entity_id_of(item) for item in self.items]


def entity_id_of(entity: Any) -> Optional[str]:
    """Mongo-style ``_id`` first, then ``id``; a bare string is its own id."""
    if isinstance(entity, str):
        return entity
    if isinstance(entity, dict):
        value = entity.get("_id") or entity.get("id")
        return str(value) if value is not None else None
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def is_newer(current: Entity, incoming: Entity) -> bool:
    """True when ``current`` is strictly newer than ``incoming``."""
    current_ts = parse_timestamp(current.get("updatedAt"))
    incoming_ts = parse_timestamp(incoming.get("updatedAt"))
    if current_ts is not None and incoming_ts is not None:
        try:
            return current_ts > incoming_ts
        except TypeError:
            # naive vs aware timestamps; fall through to __v
            pass
    current_v = current.get("__v")
    incoming_v = incoming.get("__v")
    if isinstance(current_v, int) and isinstance(incoming_v, int):
        return current_v > incoming_v
    return False


def _with_indexes(state: CacheState, items: List[Entity], index_predicates: Mapping[str, IndexPredicate]) -> CacheState:
    indexes = {name: [item for item in items if predicate(item)] for name, predicate in index_predicates.items()}
    return replace(state, items=items, indexes=indexes)


def reduce(
    state: CacheState,
    action: Action,
    index_predicates: Optional[Mapping[str, IndexPredicate]] = None,
) -> CacheState:
    """
    Return the state that follows ``action``.

    Unchanged input returns the same object, except while a fetch is in
    flight: every entity action is then recorded for replay.
    """
    predicates = index_predicates or {}
    kind = action.type

    if kind == ActionType.FETCH_START:
        return replace(state, loading=True, error=None, request_id=state.request_id + 1, pending=())

    if kind == ActionType.FETCH_SUCCESS:
        if action.request_id is not None and action.request_id != state.request_id:
            logger.debug("cache: dropping stale fetch result request_id=%s current=%s", action.request_id, state.request_id)
            return state
        items = [item for item in (action.payload or []) if isinstance(item, dict)]
        fetched = {entity_id_of(item) for item in items}
        next_state = replace(state, loading=False, error=None, tombstones=state.tombstones - fetched, pending=())
        next_state = _with_indexes(next_state, items, predicates)
        for pending in state.pending:
            next_state = _apply_entity(next_state, pending, predicates)
        if state.pending:
            logger.debug("cache: replayed %s event(s) over fetch result", len(state.pending))
        return next_state

    if kind == ActionType.FETCH_ERROR:
        if action.request_id is not None and action.request_id != state.request_id:
            return state
        return replace(
            state, loading=False, pending=(), error=str(action.payload) if action.payload else "Request failed"
        )

    if kind == ActionType.RESET:
        return _with_indexes(CacheState(request_id=state.request_id + 1), [], predicates)

    next_state = _apply_entity(state, action, predicates)
    if state.loading:
        return replace(next_state, pending=state.pending + (action,))
    return next_state


def _apply_entity(state: CacheState, action: Action, predicates: Mapping[str, IndexPredicate]) -> CacheState:
    kind = action.type
    entity = action.payload
    entity_id = entity_id_of(entity)
    if entity_id is None:
        logger.warning("cache: ignoring %s without an id", kind.value)
        return state

    existing_pos = next((i for i, item in enumerate(state.items) if entity_id_of(item) == entity_id), None)

    if kind == ActionType.ENTITY_DELETED:
        if existing_pos is None:
            return replace(state, tombstones=state.tombstones | {entity_id})
        items = state.items[:existing_pos] + state.items[existing_pos + 1:]
        next_state = replace(state, tombstones=state.tombstones | {entity_id})
        return _with_indexes(next_state, items, predicates)

    if not isinstance(entity, dict):
        logger.warning("cache: %s payload for id=%s is not an entity", kind.value, entity_id)
        return state

    if existing_pos is None:
        if kind == ActionType.ENTITY_UPDATED or entity_id in state.tombstones:
            return state
        return _with_indexes(state, [entity] + state.items, predicates)

    current = state.items[existing_pos]
    if is_newer(current, entity):
        logger.debug("cache: keeping newer cached copy id=%s", entity_id)
        return state
    items = list(state.items)
    items[existing_pos] = entity
    return _with_indexes(state, items, predicates)


class EntityStore:
    """
    One cached collection with change listeners.

    dispatch() is serialized by a lock because push events arrive on the
    transport's thread while API calls complete on the caller's.
    """

    def __init__(
        self,
        name: str,
        index_predicates: Optional[Mapping[str, IndexPredicate]] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.name = name
        self.index_predicates = dict(index_predicates or {})
        self.notifier = notifier or LoggingNotifier()
        self._state = _with_indexes(CacheState(), [], self.index_predicates)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def items(self) -> List[Entity]:
        return list(self._state.items)

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    def index(self, name: str) -> List[Entity]:
        return list(self._state.indexes.get(name, []))

    def get(self, entity_id: str) -> Optional[Entity]:
        return self._state.get(entity_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def dispatch(self, action: Action) -> CacheState:
        with self._lock:
            previous = self._state
            self._state = reduce(previous, action, self.index_predicates)
            current = self._state
            listeners = list(self._listeners) if current is not previous else []
        for listener in listeners:
            try:
                listener(current)
            except Exception:
                logger.exception("cache: listener failed store=%s", self.name)
        return current

    def fetch(self, loader: Callable[[], Dict[str, Any]], failure_message: str) -> Optional[List[Entity]]:
        """
        Replace the collection with the result of ``loader``.

        ``loader`` returns a normalized API response. Failures are reported
        through the notifier, leave the cached items in place and return None.
        """
        request_id = self.dispatch(Action(ActionType.FETCH_START)).request_id
        try:
            response = loader()
        except ApiError as e:
            message = e.message or failure_message
            logger.error("store: name=%s fetch failed: %s", self.name, message)
            self.dispatch(Action(ActionType.FETCH_ERROR, message, request_id))
            self.notifier.error(message)
            return None
        if not response.get("success"):
            message = response.get("message") or failure_message
            logger.warning("store: name=%s fetch unsuccessful: %s", self.name, message)
            self.dispatch(Action(ActionType.FETCH_ERROR, message, request_id))
            return None
        data = response.get("data")
        if not isinstance(data, list):
            data = []
        self.dispatch(Action(ActionType.FETCH_SUCCESS, data, request_id))
        return self.items

    def created(self, entity: Entity) -> CacheState:
        return self.dispatch(Action(ActionType.ENTITY_CREATED, entity))

    def updated(self, entity: Entity) -> CacheState:
        return self.dispatch(Action(ActionType.ENTITY_UPDATED, entity))

    def deleted(self, entity_or_id: Any) -> CacheState:
        return self.dispatch(Action(ActionType.ENTITY_DELETED, entity_or_id))

    def reset(self) -> CacheState:
        return self.dispatch(Action(ActionType.RESET))
