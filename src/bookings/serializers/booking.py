from rest_framework import serializers

from src.bookings.conflicts import RejectReason, checkout_for
from src.bookings.models import Booking

DATE_ERRORS = {
    "invalid": "Invalid date or format. Expected YYYY-MM-DD and a real calendar date."
}

# Longest stay, or extension, accepted in one request.
MAX_NIGHTS = 3650


class BookingSerializer(serializers.ModelSerializer):
    """Read-only projection of a stored booking."""

    class Meta:
        model = Booking
        fields = (
            "id",
            "guest_name", "unit_id",
            "check_in_date", "check_out_date", "number_of_nights",
            "created_at", "updated_at",
        )
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """Input for a new booking. Business rules are applied by BookingService."""
    guest_name = serializers.CharField(max_length=255)
    unit_id = serializers.CharField(max_length=64)
    check_in_date = serializers.DateField(input_formats=["iso-8601"], error_messages=DATE_ERRORS)
    number_of_nights = serializers.IntegerField(min_value=1, max_value=MAX_NIGHTS)

    def validate(self, attrs):
        try:
            checkout_for(attrs["check_in_date"], attrs["number_of_nights"])
        except ValueError:
            raise serializers.ValidationError(
                {"number_of_nights": "Checkout date would be past the last supported date."}
            )
        return attrs


class ExtendStaySerializer(serializers.Serializer):
    guest_name = serializers.CharField(max_length=255)
    unit_id = serializers.CharField(max_length=64)
    additional_nights = serializers.IntegerField(min_value=1, max_value=MAX_NIGHTS)


class BookingSnapshotSerializer(serializers.Serializer):
    """Booking as returned by the service layer (works for any store)."""
    id = serializers.IntegerField()
    guest_name = serializers.CharField()
    unit_id = serializers.CharField()
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    number_of_nights = serializers.IntegerField()


class BookingResultSerializer(serializers.Serializer):
    detail = serializers.CharField()
    booking = BookingSnapshotSerializer()


class RejectionSerializer(serializers.Serializer):
    detail = serializers.CharField()
    reason = serializers.ChoiceField(choices=RejectReason.choices)
