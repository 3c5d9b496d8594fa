from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Internal server error"


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def api_errors(view):
    """Translate every error raised by a JSON view into ``{"error": ...}``.

    Domain errors carry their own status; anything else is logged and
    reported as a generic 500 without details.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e), e.status_code)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return json_error(SERVER_ERROR_MESSAGE, 500)

    return wrapper


def register_error_handlers(app) -> None:
    """Routing failures (unknown URL, bad converter, wrong method) also answer in JSON."""

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return json_error(e.description or e.name, e.code or 500)
