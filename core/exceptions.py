from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response
from rest_framework import exceptions, status
import logging

logger = logging.getLogger("collab")


# ---- Error taxonomy ---------------------------------------------------
# Services raise these; the handler below renders them.


class Unauthenticated(exceptions.NotAuthenticated):
    default_detail = "Not authenticated."
    default_code = "unauthenticated"


class PermissionDenied(exceptions.PermissionDenied):
    default_detail = "You do not have permission to perform this action."
    default_code = "permission_denied"


class NotFound(exceptions.NotFound):
    default_detail = "Not found."
    default_code = "not_found"


class InvalidArgument(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid argument."
    default_code = "invalid_argument"


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


_CODES_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: InvalidArgument.default_code,
    status.HTTP_401_UNAUTHORIZED: Unauthenticated.default_code,
    status.HTTP_403_FORBIDDEN: PermissionDenied.default_code,
    status.HTTP_404_NOT_FOUND: NotFound.default_code,
    status.HTTP_409_CONFLICT: Conflict.default_code,
}


def _error_code(exc, status_code):
    if isinstance(exc, (Unauthenticated, PermissionDenied, NotFound, InvalidArgument, Conflict)):
        return exc.default_code
    return _CODES_BY_STATUS.get(status_code, "error")


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        return Response(
            {
                "success": False,
                "status_code": response.status_code,
                "code": _error_code(exc, response.status_code),
                "errors": response.data,
            },
            status=response.status_code,
            headers={
                key: value
                for key, value in response.items()
                if key in ("WWW-Authenticate", "Retry-After")
            },
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "code": "internal",
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
