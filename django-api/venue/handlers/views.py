"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from datetime import date

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from venue.container import get_services
from venue.domain.errors import DomainError, ErrorCode, PermissionDeniedError, SelectionFailure
from venue.domain.models import Account, Role
from venue.handlers.serializers import (
    AccountRequestSerializer,
    AccountSerializer,
    ComboSerializer,
    OccupationSerializer,
    OrderRequestSerializer,
    OrderSerializer,
    PurchaseRequestSerializer,
    ReceiptSerializer,
    ResourceSerializer,
    ScheduleEntrySerializer,
    ScheduleRequestSerializer,
)
from venue.services import account_service
from venue.services.concession_service import COMBOS, ItemRequest

logger = logging.getLogger(__name__)

ACCOUNT_HEADER = "X-Venue-Account"

STATUS_BY_CODE = {
    ErrorCode.SCHEDULE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.PAYMENT_INTERRUPTED: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.STORAGE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.OCCUPATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_ACCOUNT: status.HTTP_409_CONFLICT,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.UNKNOWN_MENU_ITEM: status.HTTP_400_BAD_REQUEST,
}

STATUS_BY_SELECTION_FAILURE = {
    SelectionFailure.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    SelectionFailure.ALREADY_OCCUPIED: status.HTTP_409_CONFLICT,
    SelectionFailure.DUPLICATE: status.HTTP_409_CONFLICT,
    SelectionFailure.MALFORMED: status.HTTP_400_BAD_REQUEST,
    SelectionFailure.EMPTY: status.HTTP_400_BAD_REQUEST,
}


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    if error.code is ErrorCode.SEAT_SELECTION_INVALID:
        body["reason"] = error.reason.value
        return Response(body, status=STATUS_BY_SELECTION_FAILURE[error.reason])
    if error.code is ErrorCode.SCHEDULE_CONFLICT:
        body["conflicting_occupation"] = error.conflicting.id.value
    return Response(body, status=STATUS_BY_CODE[error.code])


class VenueView(APIView):
    """Base view mapping domain errors to responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            if exc.code is ErrorCode.STORAGE_FAILURE:
                logger.error("Storage failure on %s: %s", self.request.path, exc)
            return error_response(exc)
        return super().handle_exception(exc)

    def acting_account(self, request: Request, action: str) -> Account:
        nickname = request.headers.get(ACCOUNT_HEADER, "")
        return get_services().accounts.authorize(nickname, action)


class ResourceListView(VenueView):
    """Handler for GET /api/resources"""

    def get(self, request: Request) -> Response:
        resources = get_services().scheduling.list_resources()
        return Response(ResourceSerializer(resources, many=True).data)


class ResourceScheduleView(VenueView):
    """Handler for GET /api/resources/{resource_id}/schedule?date=YYYY-MM-DD"""

    def get(self, request: Request, resource_id: str) -> Response:
        try:
            day = date.fromisoformat(request.query_params.get("date", ""))
        except ValueError:
            return Response(
                {"code": "INVALID_DATE", "message": "Use date=YYYY-MM-DD"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        entries = get_services().scheduling.schedule_for(resource_id, day)
        return Response(ScheduleEntrySerializer(entries, many=True).data)


class OccupationListView(VenueView):
    """Handler for POST /api/occupations"""

    def post(self, request: Request) -> Response:
        admin = self.acting_account(request, account_service.SCHEDULE)
        serializer = ScheduleRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        occupation = get_services().scheduling.validate_and_schedule(
            scheduled_by=admin, **serializer.validated_data
        )
        return Response(OccupationSerializer(occupation).data, status=status.HTTP_201_CREATED)


class SeatMapView(VenueView):
    """Handler for GET /api/occupations/{occupation_id}/seats"""

    def get(self, request: Request, occupation_id: str) -> Response:
        services = get_services()
        occupation = services.scheduling.get_occupation(occupation_id)
        return Response(
            {
                "occupation": OccupationSerializer(occupation).data,
                "rows": services.reservations.seat_map(occupation_id),
            }
        )


class PurchaseView(VenueView):
    """Handler for POST /api/occupations/{occupation_id}/purchases"""

    def post(self, request: Request, occupation_id: str) -> Response:
        customer = self.acting_account(request, account_service.PURCHASE)
        serializer = PurchaseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        receipt = get_services().reservations.purchase(
            occupation_id, serializer.validated_data["seats"], customer
        )
        return Response(ReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)


class MenuView(VenueView):
    """Handler for GET /api/menu"""

    def get(self, request: Request) -> Response:
        prices = get_services().concessions.prices()
        return Response(
            {
                "combos": ComboSerializer(COMBOS.values(), many=True).data,
                "prices": {key: str(price) for key, price in sorted(prices.items())},
            }
        )


class OrderListView(VenueView):
    """Handler for POST /api/orders"""

    def post(self, request: Request) -> Response:
        customer = self.acting_account(request, account_service.ORDER)
        serializer = OrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = get_services().concessions.checkout(
            customer,
            combo=data.get("combo"),
            items=[ItemRequest(**item) for item in data.get("items", [])],
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_202_ACCEPTED)


class AccountListView(VenueView):
    """Handler for POST /api/accounts

    Customers sign themselves up; staff accounts are created by an
    administrator named in the account header.
    """

    def post(self, request: Request) -> Response:
        serializer = AccountRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account = serializer.to_account()
        if account.role is not Role.CUSTOMER:
            self.acting_account(request, account_service.REGISTER_STAFF)
        get_services().accounts.register(account)
        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)


class NotificationListView(VenueView):
    """Handler for GET /api/accounts/{nickname}/notifications"""

    def get(self, request: Request, nickname: str) -> Response:
        account = self.acting_account(request, account_service.READ_NOTIFICATIONS)
        if account.nickname != nickname:
            return error_response(PermissionDeniedError("read_notifications"))
        return Response({"messages": get_services().concessions.notifications_for(nickname)})


class HandlerHistoryView(VenueView):
    """Handler for GET /api/accounts/{nickname}/history"""

    def get(self, request: Request, nickname: str) -> Response:
        account = self.acting_account(request, account_service.READ_HANDLER_HISTORY)
        if account.nickname != nickname:
            return error_response(PermissionDeniedError("read_handler_history"))
        return Response({"entries": get_services().concessions.handler_history(nickname)})


class CustomerSearchView(VenueView):
    """Handler for GET /api/customers?search="""

    def get(self, request: Request) -> Response:
        self.acting_account(request, account_service.VIEW_CUSTOMER_HISTORY)
        services = get_services()
        customers = services.accounts.search_customers(request.query_params.get("search", ""))
        return Response(
            [
                {
                    "nickname": customer.nickname,
                    "name": customer.full_name,
                    "tickets": services.reservations.ticket_count(customer.nickname),
                }
                for customer in customers
            ]
        )


class CustomerTicketsView(VenueView):
    """Handler for GET /api/customers/{nickname}/tickets"""

    def get(self, request: Request, nickname: str) -> Response:
        self.acting_account(request, account_service.VIEW_CUSTOMER_HISTORY)
        services = get_services()
        customer = services.accounts.get(nickname)
        return Response(
            {
                "nickname": customer.nickname,
                "tickets": services.reservations.tickets_for(customer.nickname),
            }
        )
