"""Audit logging utilities."""

from __future__ import annotations

import inspect
import json
import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict

logger = logging.getLogger("contacts.audit")


class AuditLogger:
    """Structured audit logger."""

    def record(self, action: str, actor: str, details: Dict[str, Any]) -> None:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "actor": actor,
            "details": details,
        }
        logger.info(json.dumps(payload, default=str))


audit_logger = AuditLogger()


def audit_log(func: Callable) -> Callable:
    """Decorator that emits structured audit records around an async service call.

    The actor is taken from the `caller` argument; contact ids are recorded
    when the wrapped function receives a `contact_id`.
    """

    signature = inspect.signature(func)

    @wraps(func)
    async def async_wrapper(*args, **kwargs):
        bound = signature.bind_partial(*args, **kwargs)
        actor = _resolve_actor(bound.arguments)
        metadata = _build_metadata(func, bound.arguments)
        audit_logger.record("start", actor, metadata)
        try:
            result = await func(*args, **kwargs)
        except Exception as exc:
            audit_logger.record("error", actor, metadata | {"error": type(exc).__name__})
            raise
        audit_logger.record("success", actor, metadata)
        return result

    return async_wrapper


def _resolve_actor(arguments: Dict[str, Any]) -> str:
    caller = arguments.get("caller")
    username = getattr(caller, "username", None)
    if username:
        return str(username)
    return "anonymous"


def _build_metadata(func: Callable, arguments: Dict[str, Any]) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"operation": func.__qualname__}
    if "contact_id" in arguments:
        metadata["contact_id"] = arguments["contact_id"]
    caller = arguments.get("caller")
    role = getattr(caller, "role", None)
    if role is not None:
        metadata["role"] = getattr(role, "value", role)
    payload = arguments.get("payload")
    if isinstance(payload, (list, tuple)):
        metadata["records"] = len(payload)
    return metadata


__all__ = ["audit_logger", "audit_log", "AuditLogger"]
