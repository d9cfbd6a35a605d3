from django_filters import rest_framework as df
from rest_framework import filters, mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)

from ..exceptions import BookingRejected
from ..models import Booking
from ..pagination import BookingPagination
from ..serializers import (
    BookingSerializer, BookingCreateSerializer, ExtendStaySerializer,
    BookingSnapshotSerializer, BookingResultSerializer, RejectionSerializer,
)
from ..services import get_booking_service
from ..throttling import ScopedRateThrottleIsolated


def _rejection_response(exc: BookingRejected):
    return Response(
        {"detail": exc.reason.label, "reason": exc.reason.value},
        status=exc.status_code,
    )


@extend_schema(tags=["bookings"])
@extend_schema_view(
    list=extend_schema(
        summary="List bookings",
        description=(
                "**Filters:**\n"
                "- `guest_name=` — exact guest name\n"
                "- `unit_id=` — exact unit id\n"
                "- `ordering=` — check_in_date, check_out_date, created_at, id"
        ),
        parameters=[
            OpenApiParameter("guest_name", OpenApiTypes.STR, description="Filter by guest name"),
            OpenApiParameter("unit_id", OpenApiTypes.STR, description="Filter by unit id"),
        ],
    ),
    retrieve=extend_schema(
        summary="Retrieve booking",
        responses={
            200: BookingSerializer,
            404: OpenApiResponse(description="Booking not found"),
        },
    ),
)
class BookingViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """
    - list/retrieve: stored bookings
    - create: book a unit for a guest
    - extend: push an existing booking's checkout forward
    """
    queryset = Booking.objects.all()
    serializer_class = BookingSerializer
    permission_classes = (permissions.AllowAny,)
    pagination_class = BookingPagination
    filter_backends = (df.DjangoFilterBackend, filters.OrderingFilter)
    filterset_fields = ("guest_name", "unit_id")
    ordering_fields = ("id", "check_in_date", "check_out_date", "created_at")
    ordering = ("id",)
    throttle_classes = (ScopedRateThrottleIsolated,)

    def get_throttles(self):
        scope_map = {
            'list': 'bookings_read',
            'retrieve': 'bookings_read',
            'create': 'bookings_mutation',
            'extend': 'bookings_mutation',
        }
        self.throttle_scope = scope_map.get(getattr(self, 'action', None))
        return super().get_throttles()

    def get_serializer_class(self):
        if self.action == 'create':
            return BookingCreateSerializer
        if self.action == 'extend':
            return ExtendStaySerializer
        return BookingSerializer

    @extend_schema(
        summary="Create booking",
        description=(
                "Rules, checked in order:\n"
                "1. a guest cannot book the same unit twice (any dates)\n"
                "2. a guest can hold only one booking at all\n"
                "3. the unit must be free for `[check_in_date, check_in_date + number_of_nights)`\n\n"
                "A checkout on day D does not block a check-in on day D."
        ),
        request=BookingCreateSerializer,
        examples=[
            OpenApiExample(
                "Create booking",
                value={"guest_name": "GuestA", "unit_id": "1",
                       "check_in_date": "2025-09-01", "number_of_nights": 5},
                request_only=True,
            ),
            OpenApiExample(
                "Unit occupied",
                value={"detail": "For the given dates, the unit is already occupied",
                       "reason": "unit occupied for requested dates"},
                response_only=True,
                status_codes=["400"],
            ),
        ],
        responses={
            201: OpenApiResponse(response=BookingResultSerializer, description="Booking created"),
            400: OpenApiResponse(response=RejectionSerializer, description="Rejected or invalid input"),
        },
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            booking = get_booking_service().create_booking(
                guest_name=data["guest_name"],
                unit_id=data["unit_id"],
                check_in_date=data["check_in_date"],
                number_of_nights=data["number_of_nights"],
            )
        except BookingRejected as exc:
            return _rejection_response(exc)

        return Response(
            {
                "detail": "Booking created successfully",
                "booking": BookingSnapshotSerializer(booking).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Extend stay",
        description=(
                "Adds `additional_nights` to the guest's booking of `unit_id`.\n\n"
                "Rejected when the new checkout would run into a booking that starts "
                "after this one on the same unit."
        ),
        request=ExtendStaySerializer,
        examples=[
            OpenApiExample(
                "Extend by 3 nights",
                value={"guest_name": "GuestA", "unit_id": "1", "additional_nights": 3},
                request_only=True,
            ),
        ],
        responses={
            200: OpenApiResponse(response=BookingResultSerializer, description="Stay extended"),
            400: OpenApiResponse(response=RejectionSerializer, description="Rejected or invalid input"),
            404: OpenApiResponse(description="No booking for this guest and unit"),
        },
    )
    @action(detail=False, methods=['put'], url_path='extend')
    def extend(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            booking = get_booking_service().extend_stay(
                guest_name=data["guest_name"],
                unit_id=data["unit_id"],
                additional_nights=data["additional_nights"],
            )
        except BookingRejected as exc:
            return _rejection_response(exc)
        except ValueError as exc:
            raise ValidationError({"additional_nights": [str(exc)]})

        return Response(
            {
                "detail": "Stay extended successfully",
                "booking": BookingSnapshotSerializer(booking).data,
            },
            status=status.HTTP_200_OK,
        )
