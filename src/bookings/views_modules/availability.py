from datetime import timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import (
    extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)

from ..conflicts import overlaps
from ..serializers import AvailabilityItemSerializer
from ..store import DjangoReservationStore
from ..throttling import ScopedRateThrottleIsolated

DEFAULT_WINDOW_DAYS = 30


@extend_schema(
    summary="Get unit availability",
    description=(
            "Busy ranges of a unit inside `[from_date, to_date)`, clipped to the window. "
            "Defaults to the next 30 days. An empty unit returns one `available` item "
            "spanning the window."
    ),
    parameters=[
        OpenApiParameter("from_date", OpenApiTypes.DATE, description="Start date (YYYY-MM-DD)"),
        OpenApiParameter("to_date", OpenApiTypes.DATE, description="End date, exclusive (YYYY-MM-DD)"),
    ],
    responses={
        200: OpenApiResponse(
            response=AvailabilityItemSerializer(many=True),
            examples=[
                OpenApiExample(
                    "One booking",
                    value=[{"booking_id": 7, "date_from": "2025-09-01",
                            "date_to": "2025-09-06", "status": "booked"}],
                )
            ],
        ),
        400: OpenApiResponse(description="Invalid parameters"),
    },
    tags=["availability"],
)
class UnitAvailabilityView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = (ScopedRateThrottleIsolated,)
    throttle_scope = 'availability'

    def get(self, request, unit_id):
        from_raw = request.query_params.get('from_date')
        to_raw = request.query_params.get('to_date')

        try:
            from_date = parse_date(from_raw) if from_raw else timezone.localdate()
            if from_date is None:
                raise ValueError("Invalid from_date")
            to_date = parse_date(to_raw) if to_raw else from_date + timedelta(days=DEFAULT_WINDOW_DAYS)
            if to_date is None:
                raise ValueError("Invalid to_date")
        except (ValueError, OverflowError):
            # parse_date returns None for bad formats and raises for impossible dates;
            # the default window can run past date.max
            return Response(
                {"detail": "Invalid date format. Use YYYY-MM-DD."},
                status=status.HTTP_400_BAD_REQUEST
            )

        if from_date >= to_date:
            return Response(
                {"detail": "from_date must be before to_date."},
                status=status.HTTP_400_BAD_REQUEST
            )

        items = [
            {
                'booking_id': booking.id,
                'date_from': max(booking.check_in_date, from_date),
                'date_to': min(booking.check_out_date, to_date),
                'status': 'booked',
            }
            for booking in DjangoReservationStore().find_by_unit(unit_id)
            if overlaps(from_date, to_date, booking.check_in_date, booking.check_out_date)
        ]
        items.sort(key=lambda item: item['date_from'])

        if not items:
            items.append({
                'booking_id': None,
                'date_from': from_date,
                'date_to': to_date,
                'status': 'available',
            })

        return Response(AvailabilityItemSerializer(items, many=True).data)
