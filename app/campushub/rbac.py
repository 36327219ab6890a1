"""
Access control guards.

Composed per route as auth -> role -> ownership:

    @bp.patch("/<int:post_id>/claim")
    @require_auth
    def claim(post_id): ...
        require_owner_or_admin(current_user(), post)

`g.current_user` is populated from the bearer token by auth.load_current_user.
"""
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g, request

from app.campushub.constants import ROLE_ADMIN
from app.campushub.errors import Forbidden, Unauthenticated
from app.campushub.models import User


def current_user() -> User:
    user: User | None = getattr(g, "current_user", None)
    if user is None:
        raise Unauthenticated()
    return user


def user_has_role(user: User | None, *roles: str) -> bool:
    if not user:
        return False
    return user.role in roles


def is_owner_or_admin(user: User | None, owner_id: int | None) -> bool:
    if not user:
        return False
    if user.role == ROLE_ADMIN:
        return True
    return owner_id is not None and owner_id == user.id


def require_owner_or_admin(user: User, resource: Any, *, owner_attr: str = "posted_by_user_id", message: str | None = None) -> None:
    """Pass iff the user is an admin or owns `resource`; raise Forbidden otherwise."""
    if is_owner_or_admin(user, getattr(resource, owner_attr, None)):
        return
    current_app.logger.warning(
        "Forbidden: user_id=%s is not owner of %s id=%s request_id=%s",
        user.id,
        type(resource).__name__,
        getattr(resource, "id", None),
        getattr(g, "request_id", None),
    )
    raise Forbidden(message)


def require_auth(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        if getattr(g, "current_user", None) is None:
            raise Unauthenticated(getattr(g, "auth_error", None))
        return fn(*args, **kwargs)

    return wrapped


def require_role(*roles: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(fn)
        def wrapped(*args: Any, **kwargs: Any):
            user: User | None = getattr(g, "current_user", None)
            # Unauthenticated never reaches the role check.
            if user is None:
                raise Unauthenticated(getattr(g, "auth_error", None))
            if not user_has_role(user, *roles):
                current_app.logger.warning(
                    "Forbidden: role=%s path=%s request_id=%s", user.role, request.path, getattr(g, "request_id", None)
                )
                raise Forbidden(f"User role {user.role} is not authorized to access this route")
            return fn(*args, **kwargs)

        return wrapped

    return decorator


require_admin = require_role(ROLE_ADMIN)
