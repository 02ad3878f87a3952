"""인증 서비스: bcrypt 비밀번호, JWT 발급/검증, Principal."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from flask import current_app
from jose import JWTError, jwt

from models import User
from models.user import ROLE_ADMIN

logger = logging.getLogger(__name__)


class Principal:
    """요청을 수행하는 인증된 사용자.

    permissions 는 로그인 시점에 적재한 (module, action) 집합이다.
    """

    __slots__ = ("user_id", "username", "role", "permissions")

    def __init__(self, user_id, username="", role="user", permissions=()):
        self.user_id = user_id
        self.username = username
        self.role = role
        self.permissions = frozenset(
            (p["module"], p["action"]) if isinstance(p, dict) else tuple(p)
            for p in permissions
        )

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def has_permission(self, module, action):
        return (module, action) in self.permissions

    @classmethod
    def from_user(cls, user):
        return cls(user.id, user.username, user.role, user.permission_pairs())

    def __repr__(self):
        return f"<Principal {self.username or self.user_id} ({self.role})>"


class InvalidToken(Exception):
    pass


# ── 비밀번호 ──


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, stored: str) -> bool:
    if not plain or not stored:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        # 해시 형식이 아닌 값이 저장된 경우
        logger.warning("Stored password is not a valid bcrypt hash")
        return False


# ── 토큰 ──


def issue_token(user: User) -> str:
    """사용자 정보와 권한 목록을 담은 JWT 를 발급한다."""
    expires = datetime.now(timezone.utc) + timedelta(
        hours=current_app.config.get("JWT_EXPIRES_HOURS", 24)
    )
    payload = {
        "userId": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "permissions": user.permission_pairs(),
        "exp": expires,
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def decode_token(token: str) -> Principal:
    try:
        payload = jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
        )
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    user_id = payload.get("userId")
    if not user_id:
        raise InvalidToken("userId claim missing")
    return Principal(
        user_id,
        payload.get("username", ""),
        payload.get("role", "user"),
        payload.get("permissions") or [],
    )


def authenticate(username: str, password: str):
    """활성 사용자 중 비밀번호가 일치하는 사용자를 반환한다. 실패 시 None."""
    user = User.query.filter_by(username=username, is_active=True).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
