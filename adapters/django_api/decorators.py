"""
ShopGate Django Adapter — View Guard
======================================
policy_required wraps a Django view with one registry.can() call.

The host application authenticates and attaches the actor; the
engine never looks it up on its own. By default the actor is read
from request.shopgate_actor.

Usage:
    @policy_required(
        "approve", "wage_advance",
        resource=lambda request, advance_id: load_advance(advance_id),
    )
    def approve_advance(request, advance_id):
        ...
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Mapping, Optional

from django.http import HttpRequest

from adapters.django_api.responses import (
    configuration_error_response,
    denial_response,
    unauthenticated_response,
)
from adapters.django_api.wiring import get_policy_registry
from shopgate.exceptions import PolicyConfigurationError

logger = logging.getLogger("shopgate.adapters")

ACTOR_ATTRIBUTE = "shopgate_actor"
DECISION_ATTRIBUTE = "shopgate_decision"


def request_actor(request: HttpRequest) -> Any:
    return getattr(request, ACTOR_ATTRIBUTE, None)


def policy_required(
    ability: str,
    resource_type: str,
    *,
    resource: Optional[Callable[..., Any]] = None,
    context: Optional[Callable[..., Mapping[str, Any]]] = None,
    actor: Callable[[HttpRequest], Any] = request_actor,
    registry: Optional[Callable[[], Any]] = None,
):
    """
    resource:  (request, *args, **kwargs) → Resource or None
    context:   (request, *args, **kwargs) → context mapping
    actor:     (request) → Actor or None
    registry:  () → PolicyRegistry (defaults to the adapter singleton)
    """
    registry_factory = registry or get_policy_registry

    def decorator(view):
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            who = actor(request)
            if who is None:
                return unauthenticated_response()

            target = resource(request, *args, **kwargs) if resource else None
            extra = context(request, *args, **kwargs) if context else None
            try:
                decision = registry_factory().can(
                    who, ability, resource_type, target, extra
                )
            except PolicyConfigurationError as exc:
                logger.error(
                    f"Policy configuration error in view "
                    f"{view.__name__} ({resource_type}.{ability}): {exc}"
                )
                return configuration_error_response(exc)

            if not decision:
                return denial_response(decision)

            setattr(request, DECISION_ATTRIBUTE, decision)
            return view(request, *args, **kwargs)

        return wrapper

    return decorator
