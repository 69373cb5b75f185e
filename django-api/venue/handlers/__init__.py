from venue.handlers.views import (
    AccountListView,
    CustomerSearchView,
    CustomerTicketsView,
    HandlerHistoryView,
    MenuView,
    NotificationListView,
    OccupationListView,
    OrderListView,
    PurchaseView,
    ResourceListView,
    ResourceScheduleView,
    SeatMapView,
)

__all__ = [
    "AccountListView",
    "CustomerSearchView",
    "CustomerTicketsView",
    "HandlerHistoryView",
    "MenuView",
    "NotificationListView",
    "OccupationListView",
    "OrderListView",
    "PurchaseView",
    "ResourceListView",
    "ResourceScheduleView",
    "SeatMapView",
]
