"""
Wire <-> domain translation for the assignment API.

Couriers and pickup sites arrive as flat {id, lat, lng} records; orders point
at their pickup site through `cookId`. Missing top-level collections default
to empty ones.
"""
import math

from rest_framework import serializers

from dispatch.dispatcher import DispatchSnapshot
from drivers.models import Driver
from orders.models import Order, PickupSite


class FiniteFloatField(serializers.FloatField):
    default_error_messages = {
        "non_finite": "A finite number is required.",
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if not math.isfinite(value):
            self.fail("non_finite")
        return value


class IdentifierField(serializers.CharField):
    """Ids are opaque: numbers are accepted and stringified, whitespace kept."""

    def __init__(self, **kwargs):
        kwargs.setdefault("trim_whitespace", False)
        kwargs.setdefault("allow_blank", True)
        super().__init__(**kwargs)


class OrderSerializer(serializers.Serializer):
    id = IdentifierField()
    # Absent or null: the order is kept and reported as unresolvable
    cookId = IdentifierField(required=False, allow_null=True)


class PositionSerializer(serializers.Serializer):
    id = IdentifierField()
    lat = FiniteFloatField()
    lng = FiniteFloatField()


class AssignRequestSerializer(serializers.Serializer):
    orders = OrderSerializer(many=True, required=False, allow_null=True)
    drivers = PositionSerializer(many=True, required=False, allow_null=True)
    cooks = PositionSerializer(many=True, required=False, allow_null=True)
    driverScores = serializers.DictField(
        child=FiniteFloatField(allow_null=True), required=False, allow_null=True
    )

    def to_snapshot(self) -> DispatchSnapshot:
        data = self.validated_data
        return DispatchSnapshot(
            orders=[Order(id=o["id"], pickup_id=o.get("cookId")) for o in data.get("orders") or []],
            drivers=[Driver.new(d["id"], d["lat"], d["lng"]) for d in data.get("drivers") or []],
            pickup_sites=[PickupSite.new(c["id"], c["lat"], c["lng"]) for c in data.get("cooks") or []],
            reliability=dict(data.get("driverScores") or {}),
        )


class AssignmentSerializer(serializers.Serializer):
    orderId = serializers.CharField(source="order_id")
    driverId = serializers.CharField(source="driver_id")
    score = serializers.FloatField()
    distanceKm = serializers.FloatField(source="distance_km")
    estimatedPickupMinutes = serializers.IntegerField(source="estimated_pickup_minutes")


class SkippedOrderSerializer(serializers.Serializer):
    orderId = serializers.CharField(source="order_id")
    reason = serializers.CharField(source="reason.value")


class DispatchResultSerializer(serializers.Serializer):
    assignments = AssignmentSerializer(many=True)
    skippedCount = serializers.IntegerField(source="skipped_count")
    skippedOrders = SkippedOrderSerializer(many=True, source="skipped")
