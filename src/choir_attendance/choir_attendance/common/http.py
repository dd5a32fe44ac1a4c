from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, ValidationError
from .datetime_utils import now_local, parse_strict_date
from .json_utils import to_jsonable

logger = logging.getLogger(__name__)


def ok(data: Any = None, status: int = 200, **extra: Any):
    body = {"success": True, "data": to_jsonable(data)}
    body.update({k: to_jsonable(v) for k, v in extra.items()})
    return jsonify(body), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def json_api(view):
    """Map domain errors to 400 and anything unexpected to 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return fail("Internal server error", 500)

    return wrapper


def body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def date_arg(value: Any, *, default_today: bool = False) -> Optional[date]:
    if not value:
        return now_local().date() if default_today else None
    return parse_strict_date(str(value))


def int_arg(value: Any, field_name: str, *, default: Optional[int] = None) -> int:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
