from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any

from flask import jsonify, request, session

from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError, WriteError

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    WriteError: 409,
}


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_ok(**data: Any):
    return jsonify({"success": True, **data})


def request_data() -> dict:
    """JSON body when present, otherwise form fields."""
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form.to_dict()


def api_view(container: "Container"):
    """Decorator for JSON endpoints.

    Resolves the caller's RequestContext from the session and passes it as the
    first argument. Domain errors map to 400/403/404/409, anything else to 500.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user_id = session.get("user_id")
            if not user_id:
                return json_error("Authentication required", 401)
            try:
                ctx = container.profile_service.context_for(str(user_id))
                return view(ctx, *args, **kwargs)
            except DomainError as e:
                status = next((s for cls, s in ERROR_STATUS.items() if isinstance(e, cls)), 400)
                return json_error(str(e), status)
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return json_error("Internal server error", 500)

        return wrapper

    return decorator
