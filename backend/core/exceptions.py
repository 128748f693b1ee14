"""
Error types and the central error handlers.

Every failure that reaches the client is a JSON body `{"error": "..."}` plus
a status code. Validation problems say what went wrong (400), unknown routes
are a plain 404, and for anything else the real cause is only written to the
server log.
"""
from __future__ import annotations

import logging

from django.http import Http404, JsonResponse
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal Server Error"
NOT_FOUND = "Not found"


class ValidationFailed(APIException):
    """Bad input: wrong config fields, wrong file type, file too big..."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"
    default_code = "invalid"


class PersistenceError(APIException):
    """
    Reading or writing one of the JSON files failed.

    The message is a fixed, safe sentence ("Failed to read data"), so it is
    fine to show it to the client even though the status is 500.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage failure"
    default_code = "storage_error"


def _message_from_detail(detail) -> str:
    """Flatten DRF's error detail (str / list / dict) into one string."""
    if isinstance(detail, dict):
        parts = [f"{key}: {_message_from_detail(value)}" for key, value in detail.items()]
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return "; ".join(_message_from_detail(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF `EXCEPTION_HANDLER`: turn any exception raised in an API view into
    the `{"error": ...}` shape.
    """
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown view"

    if isinstance(exc, Http404):
        return Response({"error": NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, APIException):
        status_code = exc.status_code
        if status_code >= 500 and not isinstance(exc, PersistenceError):
            logger.error("%s failed: %s", view_name, exc, exc_info=exc)
            message = GENERIC_SERVER_ERROR
        else:
            if status_code >= 500:
                logger.error("%s failed: %s", view_name, exc, exc_info=exc.__cause__ or exc)
            else:
                logger.warning("%s rejected request: %s", view_name, exc.detail)
            message = _message_from_detail(exc.detail)
        return Response({"error": message}, status=status_code)

    # Anything else is a bug or an I/O problem we did not expect.
    logger.exception("Unhandled error in %s", view_name, exc_info=exc)
    return Response(
        {"error": GENERIC_SERVER_ERROR},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def not_found(request, exception=None):
    """Django `handler404`, used for routes outside DRF."""
    return JsonResponse({"error": NOT_FOUND}, status=404)


def server_error(request):
    """Django `handler500`; Django already logged the traceback."""
    return JsonResponse({"error": GENERIC_SERVER_ERROR}, status=500)
