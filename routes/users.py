"""사용자/권한 관리 블루프린트 (관리자 전용)."""

import logging
import re

from flask import Blueprint, g, request
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from models import Permission, User, db
from models.user import ROLE_ADMIN, ROLE_USER
from routes.utils import fail, json_body, ok, parse_bool, require_admin, require_permission
from services.auth_service import hash_password
from services.search import contains

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__, url_prefix="/api/users")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _load_permissions(ids):
    if not isinstance(ids, list):
        raise ValueError("permissions must be a list of ids")
    if not ids:
        return []
    found = Permission.query.filter(Permission.id.in_(ids)).all()
    if len(found) != len(set(ids)):
        raise ValueError("Unknown permission id")
    return found


@users_bp.route("", methods=["GET"])
@require_admin
def list_users():
    query = User.query
    search = request.args.get("search", "").strip()
    if search:
        query = query.filter(or_(contains(User.username, search), contains(User.email, search)))
    if "isActive" in request.args:
        query = query.filter(User.is_active.is_(parse_bool(request.args["isActive"])))
    return ok([u.to_dict() for u in query.order_by(User.created_at.desc()).all()])


@users_bp.route("/permissions/all", methods=["GET"])
@require_admin
def all_permissions():
    perms = Permission.query.order_by(Permission.module, Permission.action).all()
    return ok([p.to_dict() for p in perms])


@users_bp.route("/<user_id>", methods=["GET"])
@require_admin
def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return fail("User not found", 404)
    return ok(user.to_dict())


@users_bp.route("", methods=["POST"])
@require_admin
def create_user():
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    username = str(data.get("username", "")).strip()
    email = str(data.get("email", "")).strip()
    password = str(data.get("password", ""))
    role = str(data.get("role", ROLE_USER)).strip()

    if not username or not email or not password:
        return fail("Username, email and password are required", 400)
    if not EMAIL_PATTERN.match(email):
        return fail("Invalid email address", 400)
    if len(password) < 8:
        return fail("Password must be at least 8 characters", 400)
    if role not in (ROLE_ADMIN, ROLE_USER):
        return fail("Role must be admin or user", 400)

    try:
        permissions = _load_permissions(data.get("permissions", []))
    except ValueError as exc:
        return fail(str(exc), 400)

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
        permissions=permissions,
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return fail("Username or email already exists", 409)

    logger.info("User %s created by %s", username, g.principal.username)
    return ok(user.to_dict(), message="User created successfully", status=201)


@users_bp.route("/<user_id>", methods=["PUT"])
@require_admin
def update_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return fail("User not found", 404)

    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    if "email" in data:
        email = str(data["email"]).strip()
        if not EMAIL_PATTERN.match(email):
            return fail("Invalid email address", 400)
        user.email = email
    if "role" in data:
        role = str(data["role"]).strip()
        if role not in (ROLE_ADMIN, ROLE_USER):
            return fail("Role must be admin or user", 400)
        user.role = role
    if "isActive" in data:
        user.is_active = parse_bool(data["isActive"])
    if data.get("password"):
        password = str(data["password"])
        if len(password) < 8:
            return fail("Password must be at least 8 characters", 400)
        user.password_hash = hash_password(password)
    if "permissions" in data:
        try:
            user.permissions = _load_permissions(data["permissions"])
        except ValueError as exc:
            db.session.rollback()
            return fail(str(exc), 400)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return fail("Email already exists", 409)
    return ok(user.to_dict(), message="User updated successfully")


@users_bp.route("/<user_id>", methods=["DELETE"])
@require_admin
def delete_user(user_id):
    if user_id == g.principal.user_id:
        return fail("Cannot delete your own account", 400)

    user = db.session.get(User, user_id)
    if not user or not user.is_active:
        return fail("User not found", 404)

    user.is_active = False
    db.session.commit()
    logger.info("User %s deactivated by %s", user.username, g.principal.username)
    return ok(message="User deleted successfully")


@users_bp.route("/<user_id>/reset-password", methods=["POST"])
@require_permission("users", "update")
def reset_password(user_id):
    data = json_body() or {}
    new_password = str(data.get("newPassword", ""))
    if not new_password:
        return fail("New password is required", 400)
    if len(new_password) < 8:
        return fail("Password must be at least 8 characters", 400)

    user = User.query.filter_by(id=user_id, is_active=True).first()
    if not user:
        return fail("User not found", 404)

    user.password_hash = hash_password(new_password)
    db.session.commit()
    logger.info("Password reset for %s by %s", user.username, g.principal.username)
    return ok(message="Password reset successfully")
