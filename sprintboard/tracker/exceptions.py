# ============================================
# tracker/exceptions.py
# ============================================
"""
Domain errors raised by tracker services and the DRF handler that turns them
(and Django's own ValidationError / ObjectDoesNotExist) into JSON responses.

- validation            -> 400 (Django ValidationError, DRF ValidationError)
- missing object        -> 404
- invariant violation   -> 409 (sprint lifecycle, workflow transitions)
"""
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvariantViolation(TrackerError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Operation conflicts with the current state"


class SprintStateError(InvariantViolation):
    default_message = "Sprint is not in a state that allows this operation"


class WorkflowTransitionError(InvariantViolation):
    default_message = "Status transition is not allowed by the project workflow"

    def __init__(self, from_status: str = None, to_status: str = None, message: str = None):
        self.from_status = from_status
        self.to_status = to_status
        if message is None and from_status and to_status:
            message = f"Transition from '{from_status}' to '{to_status}' is not allowed by the project workflow"
        super().__init__(message)


def _django_validation_detail(exc: DjangoValidationError):
    if hasattr(exc, "error_dict"):
        return exc.message_dict
    return {"detail": exc.messages[0] if len(exc.messages) == 1 else exc.messages}


def tracker_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "-"

    if isinstance(exc, TrackerError):
        logger.info("[tracker] %s rejected in %s: %s", exc.__class__.__name__, view_name, exc.message)
        return Response({"detail": exc.message}, status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(detail=_django_validation_detail(exc))
    elif isinstance(exc, ObjectDoesNotExist):
        exc = NotFound(str(exc) or "Not found.")

    response = exception_handler(exc, context)
    if response is not None and response.status_code >= 400:
        logger.info("[tracker] %s -> %s in %s", exc.__class__.__name__, response.status_code, view_name)
    return response
