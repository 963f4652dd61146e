import logging

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class TranslationValidationError(exceptions.APIException):
    """
    Malformed or missing input. Carries field level detail in ``errors``.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "The given data was invalid."
    default_code = "invalid"

    def __init__(self, errors, message=None):
        super().__init__(detail=message or self.default_detail)
        self.errors = {field: messages if isinstance(messages, list) else [messages]
                       for field, messages in dict(errors).items()}


class Conflict(exceptions.APIException):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "The resource already exists."
    default_code = "conflict"


class NotFound(exceptions.NotFound):
    default_detail = "Resource not found."


class TransactionFailure(exceptions.APIException):
    """
    Unexpected storage error in a multi-step write. The transaction has
    already been rolled back when this is raised.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "The operation could not be completed."
    default_code = "transaction_failure"


def api_exception_handler(exc, context):
    """
    Render domain errors with the payload shapes the API clients expect:
    ``{"message", "errors"}`` for 422s, ``{"error"}`` for 404s and a
    generic ``{"message"}`` for anything unexpected.
    """
    if isinstance(exc, TranslationValidationError):
        set_rollback()
        return Response({"message": str(exc.detail), "errors": exc.errors}, status=exc.status_code)

    if isinstance(exc, exceptions.ValidationError):
        set_rollback()
        errors = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
        return Response(
            {"message": TranslationValidationError.default_detail, "errors": errors},
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    if isinstance(exc, Conflict):
        set_rollback()
        return Response({"message": str(exc.detail)}, status=exc.status_code)

    if isinstance(exc, (Http404, exceptions.NotFound)):
        set_rollback()
        detail = exc.detail if isinstance(exc, exceptions.NotFound) else NotFound.default_detail
        return Response({"error": str(detail)}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, TransactionFailure):
        set_rollback()
        return Response({"message": str(exc.detail)}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "unknown view")
        set_rollback()
        return Response({"message": "Server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return response
