import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

FALLBACK_CODES = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_403_FORBIDDEN: "permission_denied",
    status.HTTP_404_NOT_FOUND: "not_found",
}


def _message_from(data) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        return "Invalid request data"
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def envelope_exception_handler(exc, context):
    """
    Wrap framework errors (authentication, parsing, throttling, unhandled
    exceptions) in the same envelope the services use.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(f"Unhandled exception in {view.__class__.__name__ if view else 'view'}: {exc}", exc_info=True)
        return Response(
            {"success": False, "message": "Internal server error", "error": "internal_error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    codes = exc.get_codes() if hasattr(exc, "get_codes") else None
    if not isinstance(codes, str):
        codes = FALLBACK_CODES.get(response.status_code, "error")
    body = {
        "success": False,
        "message": _message_from(response.data),
        "error": codes,
    }
    if isinstance(response.data, dict) and "detail" not in response.data:
        body["errors"] = response.data
    response.data = body
    return response
