"""Order status display, tracking timelines and read-only order pages."""
from luxgifts.orders.tracking import OrderStatus, StatusDisplay, TimelineStage, status_display, tracking_timeline
from luxgifts.orders.views import OrderSummary, OrderViews, TrackingView, summarize

__all__ = [
    "OrderStatus",
    "StatusDisplay",
    "TimelineStage",
    "status_display",
    "tracking_timeline",
    "OrderSummary",
    "OrderViews",
    "TrackingView",
    "summarize",
]
