"""Serializers for request parsing and domain-model responses."""

from rest_framework import serializers

from venue.conf import to_local

from venue.domain.models import (
    Account,
    AdministratorProfile,
    CustomerProfile,
    HandlerProfile,
    Role,
    Shift,
)


class ResourceSerializer(serializers.Serializer):
    """Serializer for Resource domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    capacity = serializers.IntegerField(source="layout.capacity.value")
    rows = serializers.SerializerMethodField()

    def get_rows(self, resource) -> list[dict]:
        return [{"label": label, "seats": count} for label, count in resource.layout.rows]


class ScheduleEntrySerializer(serializers.Serializer):
    """Serializer for ScheduleEntry domain model."""

    occupation_id = serializers.CharField(source="occupation_id.value")
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    title = serializers.CharField()


class OccupationSerializer(serializers.Serializer):
    """Serializer for Occupation domain model."""

    id = serializers.CharField(source="id.value")
    resource_id = serializers.CharField(source="resource_id.value")
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    title = serializers.CharField()
    free_seats = serializers.IntegerField(source="seats.free_count")


class ScheduleRequestSerializer(serializers.Serializer):
    resource_id = serializers.CharField(max_length=20)
    starts_at = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(min_value=1, max_value=24 * 60)
    title = serializers.CharField(max_length=255)

    def validate_starts_at(self, value):
        return to_local(value)


class PurchaseRequestSerializer(serializers.Serializer):
    seats = serializers.ListField(child=serializers.CharField(max_length=8), allow_empty=True)


class TicketSerializer(serializers.Serializer):
    receipt_id = serializers.CharField()
    seat = serializers.CharField()


class ReceiptSerializer(serializers.Serializer):
    """Serializer for PurchaseReceipt domain model."""

    occupation_id = serializers.CharField(source="occupation_id.value")
    title = serializers.CharField()
    starts_at = serializers.DateTimeField()
    resource_id = serializers.CharField(source="resource_id.value")
    purchaser = serializers.CharField()
    tickets = TicketSerializer(many=True)
    total = serializers.CharField()
    card = serializers.CharField()


class ItemRequestSerializer(serializers.Serializer):
    product = serializers.CharField(max_length=40)
    size = serializers.CharField(max_length=40)
    flavor = serializers.CharField(max_length=40, allow_blank=True, default="")


class OrderRequestSerializer(serializers.Serializer):
    combo = serializers.CharField(max_length=2, required=False)
    items = ItemRequestSerializer(many=True, required=False)

    def validate(self, attrs):
        if ("combo" in attrs) == bool(attrs.get("items")):
            raise serializers.ValidationError("Choose either a combo or a list of items")
        return attrs


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    key = serializers.CharField(source="key.value")
    owner = serializers.CharField()
    handler = serializers.CharField()
    created_at = serializers.DateTimeField()
    description = serializers.CharField()
    total = serializers.CharField()


class ComboSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()
    contents = serializers.CharField()
    price = serializers.CharField()


class AccountRequestSerializer(serializers.Serializer):
    nickname = serializers.RegexField(r"^[A-Za-z0-9_.-]{1,40}$")
    first_name = serializers.CharField(max_length=80)
    last_name = serializers.CharField(max_length=80)
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=[role.value for role in Role])
    card_number = serializers.RegexField(r"^\d{16}$", required=False)
    shift = serializers.ChoiceField(choices=[shift.value for shift in Shift], default=Shift.MORNING.value)
    weekend = serializers.BooleanField(default=False)
    rest_day = serializers.CharField(max_length=20, default="Sunday")

    def validate(self, attrs):
        if attrs["role"] == Role.CUSTOMER.value and "card_number" not in attrs:
            raise serializers.ValidationError({"card_number": "Customers need a 16-digit card number"})
        return attrs

    def to_account(self) -> Account:
        data = self.validated_data
        role = Role(data["role"])
        if role is Role.CUSTOMER:
            profile = CustomerProfile(card_number=data["card_number"])
        elif role is Role.ADMINISTRATOR:
            profile = AdministratorProfile(shift=Shift(data["shift"]), weekend=data["weekend"])
        else:
            profile = HandlerProfile(shift=Shift(data["shift"]), rest_day=data["rest_day"])
        return Account(
            nickname=data["nickname"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=data["email"],
            role=role,
            profile=profile,
        )


class AccountSerializer(serializers.Serializer):
    """Serializer for Account domain model. Card numbers are shown masked."""

    nickname = serializers.CharField()
    name = serializers.CharField(source="full_name")
    email = serializers.CharField()
    role = serializers.CharField(source="role.value")
    card = serializers.CharField(source="profile.masked_card", default="")
