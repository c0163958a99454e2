# views/utils.py
"""
Shared drf-spectacular helpers for the tracker APIView classes.
"""
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.exceptions import NotFound, ValidationError

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="Error",
    fields={"detail": serializers.CharField()}
)

# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description)

def q_date(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.DATE, OpenApiParameter.QUERY, required=required, description=description)


ISSUE_FILTER_PARAMS = [
    q_str("type", "Issue type(s), comma separated"),
    q_str("status", "Status(es), comma separated"),
    q_str("priority", "Priority(ies), comma separated"),
    q_str("assignee", "Assignee id(s) or 'unassigned'"),
    q_str("q", "Case-insensitive text on title or key"),
]

# ---- Convenience for common responses

def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs


def conflict_errors():
    return std_errors({409: OpenApiResponse(ErrorSerializer, description="Conflict")})


def get_or_404(obj, label: str):
    """Selectors return None for missing rows; views turn that into a 404."""
    if obj is None:
        raise NotFound(f"{label} not found")
    return obj


def int_param(request, name: str):
    """Optional integer query parameter; garbage is a 400"""
    raw = request.query_params.get(name)
    if raw in (None, ''):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: ["A valid integer is required."]})
