"""
Response envelope helpers shared by marketplace views.

Every body is {"success": bool, "message"?: str, "data"?: ...}; failures add
"error" with the machine-readable code.
"""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorKinds, ServiceResult

STATUS_BY_KIND = {
    ErrorKinds.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKinds.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKinds.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKinds.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKinds.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKinds.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(result: ServiceResult) -> int:
    return STATUS_BY_KIND.get(result.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def success_response(data=None, message: str = None, status_code: int = status.HTTP_200_OK, **extra) -> Response:
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return Response(body, status=status_code)


def error_response(result: ServiceResult) -> Response:
    """Render a failed ServiceResult with the status of its error kind."""
    return Response(result.to_dict(), status=status_for(result))


def invalid_request_response(errors) -> Response:
    """Render request serializer errors."""
    return Response(
        {"success": False, "message": "Invalid request data", "error": "validation_error", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )
