"""
Order status display and tracking timeline.

Orders move through four linear stages (pending, processing, shipped,
delivered). Cancelled sits outside that line: it has no step and no progress
value, so a progress bar is hidden rather than drawn at some percentage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from luxgifts.utils.formatters import format_date


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Any) -> "OrderStatus":
        """Unknown or missing statuses display as pending."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.PENDING


LINEAR_STAGES = (OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED)


@dataclass(frozen=True)
class StatusDisplay:
    status: OrderStatus
    icon: str
    label: str
    color: str
    step: Optional[int]
    progress: Optional[int]

    @property
    def show_progress(self) -> bool:
        return self.progress is not None


_ICONS = {
    OrderStatus.PENDING: "clock",
    OrderStatus.PROCESSING: "package",
    OrderStatus.SHIPPED: "truck",
    OrderStatus.DELIVERED: "check-circle",
    OrderStatus.CANCELLED: "x-circle",
}

_COLORS = {
    OrderStatus.PENDING: "gray",
    OrderStatus.PROCESSING: "yellow",
    OrderStatus.SHIPPED: "blue",
    OrderStatus.DELIVERED: "green",
    OrderStatus.CANCELLED: "red",
}


def status_display(status: Any) -> StatusDisplay:
    parsed = OrderStatus.parse(status)
    if parsed == OrderStatus.CANCELLED:
        step = None
    else:
        step = LINEAR_STAGES.index(parsed) + 1
    return StatusDisplay(
        status=parsed,
        icon=_ICONS[parsed],
        label=parsed.value.capitalize(),
        color=_COLORS[parsed],
        step=step,
        progress=step * 25 if step is not None else None,
    )


@dataclass
class TimelineStage:
    status: OrderStatus
    title: str
    reached: bool
    date: Optional[str] = None
    note: str = ""


_STAGE_TITLES = {
    OrderStatus.PENDING: "Order Placed",
    OrderStatus.PROCESSING: "Processing",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}

_PENDING_NOTES = {
    OrderStatus.PROCESSING: "In progress",
    OrderStatus.SHIPPED: "In transit",
    OrderStatus.DELIVERED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
}


def _history_date(history: List[Dict[str, Any]], status: OrderStatus) -> Optional[str]:
    for entry in history:
        if isinstance(entry, dict) and entry.get("status") == status.value and entry.get("date"):
            return entry["date"]
    return None


def tracking_timeline(order: Dict[str, Any]) -> List[TimelineStage]:
    """
    Build the tracking timeline for an order.

    Stage dates come from ``trackingHistory``; the placed stage uses
    ``createdAt``. A cancelled stage is appended for cancelled orders.
    """
    display = status_display(order.get("status"))
    history = order.get("trackingHistory") or []
    stages = []

    for position, stage in enumerate(LINEAR_STAGES, start=1):
        if stage == OrderStatus.PENDING:
            raw_date = order.get("createdAt") or _history_date(history, stage)
            reached = True
        else:
            raw_date = _history_date(history, stage)
            reached = display.step is not None and display.step >= position
        stages.append(TimelineStage(
            status=stage,
            title=_STAGE_TITLES[stage],
            reached=reached,
            date=format_date(raw_date) if raw_date else None,
            note="" if raw_date else _PENDING_NOTES.get(stage, ""),
        ))

    if display.status == OrderStatus.CANCELLED:
        raw_date = _history_date(history, OrderStatus.CANCELLED)
        stages.append(TimelineStage(
            status=OrderStatus.CANCELLED,
            title=_STAGE_TITLES[OrderStatus.CANCELLED],
            reached=True,
            date=format_date(raw_date) if raw_date else None,
            note="" if raw_date else _PENDING_NOTES[OrderStatus.CANCELLED],
        ))
    return stages
