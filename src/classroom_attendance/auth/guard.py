from __future__ import annotations

from functools import wraps

from flask import Response, g, request

from ..core.constants import TOKEN_COOKIE_NAME
from ..core.exceptions import AuthenticationMissing
from .tokens import CredentialService


def teacher_required(credentials: CredentialService):
    """Verify the credential cookie on every call and expose ``g.teacher_id``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = request.cookies.get(TOKEN_COOKIE_NAME)
            if not token:
                raise AuthenticationMissing("Token not found")
            g.teacher_id = credentials.verify_credential(token)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def set_credential_cookie(response: Response, token: str, *, max_age: int, secure: bool) -> Response:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=max_age,
        httponly=True,
        secure=secure,
        samesite="Lax",
        path="/",
    )
    return response


def clear_credential_cookie(response: Response, *, secure: bool) -> Response:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        "",
        max_age=0,
        expires=0,
        httponly=True,
        secure=secure,
        samesite="Lax",
        path="/",
    )
    return response
