"""
ShopGate Django Adapter Views
===============================
JSON endpoints over the PolicyRegistry for UIs and remote callers.

    GET  policies              registered types and their abilities
    POST policies/check        one Decision
    POST policies/ability-map  {ability: allowed} for show/hide

Actors and resources arrive as their to_dict() payloads. A context
value that is an object carrying "resource_type" is read as a
Resource snapshot.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.responses import (
    configuration_error_response,
    invalid_request_response,
    method_not_allowed_response,
    success_response,
)
from adapters.django_api.wiring import get_policy_registry
from shopgate.exceptions import PolicyConfigurationError
from shopgate.primitives import Resource, actor_from_dict

logger = logging.getLogger("shopgate.adapters")


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except ValueError as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_actor(body: dict[str, Any]):
    payload = body.get("actor")
    if not isinstance(payload, dict):
        raise ValueError("actor must be an object.")
    return actor_from_dict(payload)


def _parse_resource(payload: Any, field_name: str) -> Resource | None:
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise ValueError(f"{field_name} must be an object.")
    return Resource.from_dict(payload)


def _parse_context(body: dict[str, Any]) -> dict[str, Any] | None:
    payload = body.get("context")
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise ValueError("context must be an object.")
    context = {}
    for key, value in payload.items():
        if isinstance(value, dict) and "resource_type" in value:
            context[key] = _parse_resource(value, f"context.{key}")
        else:
            context[key] = value
    return context


def _require_str(body: dict[str, Any], field_name: str) -> str:
    value = body.get(field_name)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{field_name} is required.")
    return value


@csrf_exempt
def policies_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return method_not_allowed_response()
    registry = get_policy_registry()
    data = [
        registry.policy(resource_type).to_dict()
        for resource_type in registry.resource_types()
    ]
    return JsonResponse(success_response(data, meta={"count": len(data)}))


@csrf_exempt
def check_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return method_not_allowed_response()
    try:
        body = _parse_json_body(request)
        actor = _parse_actor(body)
        ability = _require_str(body, "ability")
        resource_type = _require_str(body, "resource_type")
        resource = _parse_resource(body.get("resource"), "resource")
        context = _parse_context(body)
    except (ValueError, KeyError, TypeError) as exc:
        return invalid_request_response(str(exc))

    try:
        decision = get_policy_registry().can(
            actor, ability, resource_type, resource, context
        )
    except PolicyConfigurationError as exc:
        logger.error(f"Policy check {resource_type}.{ability} failed: {exc}")
        return configuration_error_response(exc)
    return JsonResponse(success_response(decision.to_dict()))


@csrf_exempt
def ability_map_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return method_not_allowed_response()
    try:
        body = _parse_json_body(request)
        actor = _parse_actor(body)
        resource_type = _require_str(body, "resource_type")
        resource = _parse_resource(body.get("resource"), "resource")
        context = _parse_context(body)
    except (ValueError, KeyError, TypeError) as exc:
        return invalid_request_response(str(exc))

    try:
        abilities = get_policy_registry().ability_map(
            actor, resource_type, resource, context
        )
    except PolicyConfigurationError as exc:
        logger.error(f"Ability map for {resource_type} failed: {exc}")
        return configuration_error_response(exc)
    return JsonResponse(
        success_response(
            abilities,
            meta={"resource_type": resource_type},
        )
    )
