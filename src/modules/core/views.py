import structlog
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes

from modules.core.exceptions import ErrorCode
from modules.core.responses import envelope, success_response

logger = structlog.get_logger()

SERVICE_NAME = "Orders Service"


@api_view(["GET"])
@authentication_classes([])
@permission_classes([])
def health_check(request):
    logger.info("health_check_completed", status="healthy")
    return success_response(
        {
            "status": "OK",
            "service": SERVICE_NAME,
            "timestamp": timezone.now().isoformat(),
        }
    )


def route_not_found(request: HttpRequest, exception=None) -> JsonResponse:
    """Django ``handler404``: unknown routes still answer with the envelope."""
    return JsonResponse(
        envelope(
            False,
            None,
            {"code": ErrorCode.NOT_FOUND.value, "message": "Route not found"},
        ),
        status=404,
    )
