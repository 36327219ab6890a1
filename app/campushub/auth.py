from __future__ import annotations

import uuid

from flask import Blueprint, current_app, g, request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from app.campushub.audit import record_event
from app.campushub.constants import DEFAULT_ADMIN_DEPARTMENT, ROLE_ADMIN, ROLE_STUDENT, ROLES
from app.campushub.db import db_session
from app.campushub.errors import Conflict, NotFound, Unauthenticated, ValidationError
from app.campushub.models import User
from app.campushub.rbac import current_user, require_admin, require_auth
from app.campushub.responses import created, ok
from app.campushub.tokens import InvalidCredential, bearer_token, issue_for_app, verify_for_app
from app.campushub.validation import check_email, check_required, json_body, optional_text, raise_first, text

bp = Blueprint("auth", __name__)

MIN_PASSWORD_LENGTH = 6


def load_current_user() -> None:
    """
    Loads g.current_user from the bearer token.
    Also assigns a simple per-request request_id (for audit/log correlation).
    """
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    g.current_user = None
    g.auth_error = None

    token = bearer_token(request.headers.get("Authorization"))
    if not token:
        return

    try:
        identity = verify_for_app(token)
    except InvalidCredential as e:
        current_app.logger.info("Rejected bearer token (%s) request_id=%s", e, g.request_id)
        g.auth_error = "Not authorized to access this route"
        return

    user = db_session().get(User, identity.user_id)
    if user is None:
        g.auth_error = "User no longer exists"
        return
    g.current_user = user


def validate_account_payload(payload: dict) -> list[str]:
    errors: list[str] = []
    check_required(errors, payload, "name", "Name is required", max_len=50, too_long="Name cannot be more than 50 characters")
    check_email(errors, payload)
    password = payload.get("password") or ""
    if not isinstance(password, str) or not password:
        errors.append("Password is required")
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return errors


def create_user(s: Session, payload: dict, *, role: str, department: str | None = None) -> User:
    """Insert a user; raises Conflict when the email is taken."""
    if role not in ROLES:
        raise ValueError(f"Unknown role {role!r}")
    email = text(payload, "email").lower()
    if s.query(User).filter(User.email == email).one_or_none():
        raise Conflict("User already exists with this email")
    user = User(
        name=text(payload, "name"),
        email=email,
        password_hash=generate_password_hash(payload["password"]),
        role=role,
        enrollment_number=optional_text(payload, "enrollmentNumber"),
        department=department if department is not None else optional_text(payload, "department"),
    )
    s.add(user)
    try:
        s.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        s.rollback()
        raise Conflict("User already exists with this email")
    return user


def _token_payload(user: User) -> dict:
    return {
        "token": issue_for_app(user.id, user.role),
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "enrollmentNumber": user.enrollment_number,
            "department": user.department,
        },
    }


@bp.post("/register")
def register():
    payload = json_body()
    raise_first(validate_account_payload(payload))

    s = db_session()
    # Self-registration always yields a student; any submitted role is ignored.
    user = create_user(s, payload, role=ROLE_STUDENT)
    record_event(s, actor=user, action="auth.register", entity_type="User", entity_id=str(user.id))
    s.commit()
    return created("Registration successful", _token_payload(user))


@bp.post("/login")
def login():
    payload = json_body()
    errors: list[str] = []
    check_email(errors, payload)
    if not payload.get("password"):
        errors.append("Password is required")
    raise_first(errors)

    email = text(payload, "email").lower()
    password = payload.get("password")
    s = db_session()
    user = s.query(User).filter(User.email == email).one_or_none()
    if not user or not isinstance(password, str) or not check_password_hash(user.password_hash, password):
        record_event(
            s,
            actor=None,
            action="auth.login_failed",
            entity_type="User",
            entity_id=email,
            reason="Invalid credentials",
            metadata={"email": email},
        )
        s.commit()
        current_app.logger.warning("Failed login (email=%s request_id=%s)", email, getattr(g, "request_id", None))
        raise Unauthenticated("Invalid credentials")

    record_event(s, actor=user, action="auth.login", entity_type="User", entity_id=str(user.id))
    s.commit()
    return ok("Login successful", _token_payload(user))


@bp.get("/me")
@require_auth
def me():
    return ok("User retrieved successfully", current_user().to_dict())


@bp.post("/logout")
@require_auth
def logout():
    # Tokens are stateless; the client discards its copy.
    s = db_session()
    user = current_user()
    record_event(s, actor=user, action="auth.logout", entity_type="User", entity_id=str(user.id))
    s.commit()
    return ok("Logged out successfully")


# ============================================================================
# ADMIN ACCOUNT MANAGEMENT (Admin Only)
# ============================================================================

@bp.get("/admins")
@require_admin
def admins_list():
    s = db_session()
    admins = s.query(User).filter(User.role == ROLE_ADMIN).order_by(User.created_at.asc(), User.id.asc()).all()
    return ok("Admins retrieved successfully", [a.to_dict() for a in admins])


@bp.post("/create-admin")
@require_admin
def admins_create():
    payload = json_body()
    raise_first(validate_account_payload(payload))

    s = db_session()
    u = current_user()
    admin = create_user(
        s,
        payload,
        role=ROLE_ADMIN,
        department=optional_text(payload, "department") or DEFAULT_ADMIN_DEPARTMENT,
    )
    record_event(
        s,
        actor=u,
        action="user.create_admin",
        entity_type="User",
        entity_id=str(admin.id),
        metadata={"email": admin.email},
    )
    s.commit()
    return created(
        "Admin created successfully",
        {"id": admin.id, "name": admin.name, "email": admin.email, "role": admin.role, "department": admin.department},
    )


@bp.delete("/admins/<int:user_id>")
@require_admin
def admins_delete(user_id: int):
    s = db_session()
    u = current_user()
    if user_id == u.id:
        raise ValidationError("You cannot delete your own account")

    admin = s.get(User, user_id)
    if not admin:
        raise NotFound("Admin not found")
    if admin.role != ROLE_ADMIN:
        raise ValidationError("User is not an admin")

    record_event(
        s,
        actor=u,
        action="user.delete_admin",
        entity_type="User",
        entity_id=str(admin.id),
        metadata={"email": admin.email},
    )
    s.delete(admin)
    s.commit()
    return ok("Admin deleted successfully")
