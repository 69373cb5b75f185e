from django.urls import path

from venue.handlers import (
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

urlpatterns = [
    path("resources", ResourceListView.as_view(), name="resource-list"),
    path(
        "resources/<str:resource_id>/schedule",
        ResourceScheduleView.as_view(),
        name="resource-schedule",
    ),
    path("occupations", OccupationListView.as_view(), name="occupation-list"),
    path("occupations/<str:occupation_id>/seats", SeatMapView.as_view(), name="seat-map"),
    path(
        "occupations/<str:occupation_id>/purchases",
        PurchaseView.as_view(),
        name="purchase",
    ),
    path("menu", MenuView.as_view(), name="menu"),
    path("orders", OrderListView.as_view(), name="order-list"),
    path("accounts", AccountListView.as_view(), name="account-list"),
    path(
        "accounts/<str:nickname>/notifications",
        NotificationListView.as_view(),
        name="notification-list",
    ),
    path("accounts/<str:nickname>/history", HandlerHistoryView.as_view(), name="handler-history"),
    path("customers", CustomerSearchView.as_view(), name="customer-search"),
    path(
        "customers/<str:nickname>/tickets",
        CustomerTicketsView.as_view(),
        name="customer-tickets",
    ),
]
