"""Helpers shared by the feature controllers: session guards, JSON bodies, error mapping."""

from __future__ import annotations

import inspect
import logging
from dataclasses import asdict, is_dataclass
from enum import Enum
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (InvalidCredentialsError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)

HIDDEN_FIELDS = ("password_hash",)


def _signed_out():
    return jsonify({"error": "Please sign in to continue"}), 401


def login_required(view):
    if inspect.iscoroutinefunction(view):

        @wraps(view)
        async def async_wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _signed_out()
            return await view(*args, **kwargs)

        return async_wrapper

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return _signed_out()
        return view(*args, **kwargs)

    return wrapper


def load_actor(container):
    """Capabilities of the signed-in user, resolved fresh for this request."""
    user = container.store.users.get_by_id(session.get("user_id"))
    if not user:
        session.clear()
        raise AuthorizationError("Your account no longer exists")
    caps = container.access_resolver.resolve(user, session.get("active_org_id"))
    session["active_org_id"] = caps.active_org_id
    return caps


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def pop_version(body: dict):
    value = body.pop("version", None)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("version must be an integer")


def dump(obj):
    """JSON-ready form of entities and reports (enums as values, secrets removed)."""
    if is_dataclass(obj) and not isinstance(obj, type):
        data = {k: dump(v) for k, v in asdict(obj).items() if k not in HIDDEN_FIELDS}
        name = getattr(type(obj), "name", None)
        if isinstance(name, property):
            data["name"] = obj.name
        return data
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: dump(v) for k, v in obj.items() if k not in HIDDEN_FIELDS}
    if isinstance(obj, (list, tuple)):
        return [dump(v) for v in obj]
    return obj


def register_error_handlers(app: Flask) -> None:
    def handle_domain_error(e: DomainError):
        for error_cls, status in STATUS_BY_ERROR:
            if isinstance(e, error_cls):
                return jsonify({"error": str(e)}), status
        logger.error("Unmapped domain error: %s", e)
        return jsonify({"error": str(e)}), 400

    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return jsonify({"error": f"Internal error: {e}"}), 500
        return jsonify({"error": "Internal error"}), 500

    app.register_error_handler(DomainError, handle_domain_error)
    app.register_error_handler(Exception, handle_unexpected)
