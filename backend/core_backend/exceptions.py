"""
API error handling shared by every app.

Domain exceptions raised from services are plain Python exceptions carrying a
``status_code`` and a ``code`` class attribute. The handler below renders them,
together with DRF's own exceptions, into a single error shape:

    {"error": "<message>", "code": "<machine code>"}

Anything else is logged and surfaced as a generic 500.
"""
import logging

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"


def _first_message(detail):
    """Pull the first human readable message out of a DRF error structure."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if message:
                if key in ("non_field_errors", "detail", "error"):
                    return message
                return f"{key}: {message}"
        return None
    if isinstance(detail, (list, tuple)):
        for item in detail:
            message = _first_message(item)
            if message:
                return message
        return None
    return str(detail) if detail is not None else None


def _error_code(exc, fallback):
    codes = getattr(exc, "get_codes", None)
    if callable(codes):
        value = codes()
        if isinstance(value, str):
            return value
    return getattr(exc, "default_code", None) or fallback


def api_exception_handler(exc, context):
    request = context.get("request")
    path = getattr(request, "path", "?")

    # Domain exceptions (services never import DRF)
    domain_status = getattr(exc, "status_code", None)
    if not isinstance(exc, (APIException, Http404)) and isinstance(domain_status, int):
        logger.info("%s on %s: %s", exc.__class__.__name__, path, exc)
        return Response(
            {"error": str(exc), "code": getattr(exc, "code", "error")},
            status=domain_status,
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.error("Unexpected error on %s", path, exc_info=exc)
        return Response(
            {"error": "An unexpected error occurred.", "code": "unexpected"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {
            "error": _first_message(exc.detail) or "Invalid request.",
            "code": "validation_failed",
            "details": exc.detail,
        }
    elif isinstance(exc, Http404):
        response.data = {"error": "Not found.", "code": "not_found"}
    else:
        response.data = {
            "error": _first_message(response.data) or str(exc),
            "code": _error_code(exc, "error"),
        }
    return response
