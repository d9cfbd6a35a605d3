from rest_framework import serializers


class AvailabilityItemSerializer(serializers.Serializer):
    """Busy range on a unit, clipped to the requested window."""
    booking_id = serializers.IntegerField(allow_null=True)
    date_from = serializers.DateField()
    date_to = serializers.DateField()
    status = serializers.ChoiceField(choices=[("booked", "Booked"), ("available", "Available")])
