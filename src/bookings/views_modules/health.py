from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse


@extend_schema(
    summary="Health check",
    responses={200: OpenApiResponse(
        description="Service is up",
        examples=[OpenApiExample("OK", value={"message": "OK"})],
    )},
    auth=[],
    tags=["health"],
)
class HealthCheckView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = ()

    def get(self, request):
        return Response({"message": "OK"})
