import logging
import time
from datetime import datetime, timedelta

from flask import Blueprint, current_app, g, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import limiter
from models import LoginAttempt, User, db
from routes.utils import fail, json_body, ok, require_auth
from services.auth_service import authenticate, hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _client_ip() -> str:
    # ProxyFix 가 X-Forwarded-For 를 remote_addr 에 반영한다
    return request.remote_addr or "unknown"


def _recent_attempt_count(ip: str, block_seconds: int) -> int:
    cutoff = datetime.now() - timedelta(seconds=block_seconds)
    return LoginAttempt.query.filter(
        LoginAttempt.ip == ip,
        LoginAttempt.created_at >= cutoff,
    ).count()


def _clear_attempts(ip: str) -> None:
    LoginAttempt.query.filter(LoginAttempt.ip == ip).delete()


def _purge_expired_attempts(block_seconds: int) -> None:
    """만료된 로그인 시도 레코드 전체 정리 (DB 무한 증가 방지)"""
    cutoff = datetime.now() - timedelta(seconds=block_seconds)
    LoginAttempt.query.filter(LoginAttempt.created_at < cutoff).delete()


def _login_rate_limit():
    return current_app.config.get("LOGIN_RATE_LIMIT", "20 per minute")


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_rate_limit)
def login():
    data = json_body() or {}
    username = str(data.get("username", "")).strip()
    password = str(data.get("password", ""))
    if not username or not password:
        return fail("Username and password are required", 400)

    ip = _client_ip()
    max_attempts = int(current_app.config.get("LOGIN_MAX_ATTEMPTS", 5))
    block_seconds = int(current_app.config.get("LOGIN_BLOCK_SECONDS", 300))

    try:
        _purge_expired_attempts(block_seconds)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()

    if _recent_attempt_count(ip, block_seconds) >= max_attempts:
        logger.warning("Login blocked for IP %s due to too many failed attempts", ip)
        return fail("Too many login attempts. Try again later.", 429)

    user = authenticate(username, password)
    if not user:
        try:
            db.session.add(LoginAttempt(ip=ip, username=username))
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
        logger.warning("Login failed for %s from %s", username, ip)
        if not current_app.config.get("TESTING"):
            time.sleep(1)
        return fail("Invalid credentials", 401)

    try:
        _clear_attempts(ip)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()

    logger.info("Login success: %s from %s", username, ip)
    return ok({"token": issue_token(user), "user": user.to_dict()})


@auth_bp.route("/verify", methods=["POST"])
@require_auth
def verify():
    """토큰 검증 + 최신 권한 재적재."""
    user = User.query.filter_by(id=g.principal.user_id, is_active=True).first()
    if not user:
        return fail("User not found or inactive", 401)
    return ok({"user": user.to_dict()})


@auth_bp.route("/change-password", methods=["POST"])
@require_auth
def change_password():
    data = json_body() or {}
    current = str(data.get("currentPassword", ""))
    new = str(data.get("newPassword", ""))
    if not current or not new:
        return fail("Current password and new password are required", 400)
    if len(new) < 8:
        return fail("New password must be at least 8 characters", 400)

    user = db.session.get(User, g.principal.user_id)
    if not user:
        return fail("User not found", 404)
    if not verify_password(current, user.password_hash):
        return fail("Current password is incorrect", 400)

    try:
        user.password_hash = hash_password(new)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Password change failed for %s", user.id)
        return fail("Failed to change password", 500)

    logger.info("Password changed for %s", user.username)
    return ok(message="Password changed successfully")
