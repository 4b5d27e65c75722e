"""
ShopGate Django Adapter — Error Mapping
=========================================
Stable transport mapping for Decisions and configuration errors.

    denial               → 403 AUTHORIZATION_DENIED
    configuration error  → 500 POLICY_CONFIGURATION_ERROR
    malformed request    → 400 INVALID_REQUEST
    no actor             → 401 AUTHENTICATION_REQUIRED
"""

from __future__ import annotations

from typing import Any, Optional

from django.http import JsonResponse

from shopgate.exceptions import PolicyConfigurationError
from shopgate.policy import Decision

AUTHORIZATION_DENIED = "AUTHORIZATION_DENIED"
POLICY_CONFIGURATION_ERROR = "POLICY_CONFIGURATION_ERROR"
INVALID_REQUEST = "INVALID_REQUEST"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    payload = {"ok": True, "data": data}
    if meta is not None:
        payload["meta"] = meta
    return payload


def denial_response(decision: Decision) -> JsonResponse:
    return JsonResponse(
        error_response(
            code=AUTHORIZATION_DENIED,
            message=decision.message,
            details={
                "reason_code": decision.reason_code,
                "ability": decision.ability,
                "resource_type": decision.resource_type,
            },
        ),
        status=403,
    )


def configuration_error_response(exc: PolicyConfigurationError) -> JsonResponse:
    return JsonResponse(
        error_response(
            code=POLICY_CONFIGURATION_ERROR,
            message=str(exc),
            details={"error_type": type(exc).__name__},
        ),
        status=500,
    )


def invalid_request_response(message: str) -> JsonResponse:
    return JsonResponse(
        error_response(code=INVALID_REQUEST, message=message),
        status=400,
    )


def method_not_allowed_response() -> JsonResponse:
    return JsonResponse(
        error_response(
            code=METHOD_NOT_ALLOWED,
            message="Method not allowed for this endpoint.",
        ),
        status=405,
    )


def unauthenticated_response() -> JsonResponse:
    return JsonResponse(
        error_response(
            code=AUTHENTICATION_REQUIRED,
            message="No actor is attached to this request.",
        ),
        status=401,
    )
