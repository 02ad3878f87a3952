import hmac
from functools import wraps

from flask import current_app, g, jsonify, request

from services.auth_service import InvalidToken, decode_token


# ── 응답 봉투 ──
def ok(data=None, message=None, status=200):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(error, status=400):
    return jsonify({"success": False, "error": error}), status


def json_body():
    """JSON 본문을 dict 로 반환한다. 없거나 형식이 다르면 None."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def parse_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


# ── 인증 데코레이터 ──
def _bearer_token():
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[7:].strip() or None


def load_principal():
    """Authorization 헤더의 토큰을 해석해 g.principal 에 둔다. 실패 시 None."""
    token = _bearer_token()
    if not token:
        return None
    try:
        g.principal = decode_token(token)
    except InvalidToken:
        return None
    return g.principal


def require_auth(f):
    """Bearer 토큰 인증 데코레이터. 미인증 시 JSON 401 응답."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not load_principal():
            return fail("Authentication required", 401)
        return f(*args, **kwargs)

    return decorated_function


def require_permission(module, action):
    """(module, action) 권한 보유 여부 확인. require_auth 포함."""

    def decorator(f):
        @wraps(f)
        @require_auth
        def decorated_function(*args, **kwargs):
            if not g.principal.has_permission(module, action):
                return fail("Permission denied", 403)
            return f(*args, **kwargs)

        return decorated_function

    return decorator


def require_admin(f):
    """관리자 역할 전용. require_auth 포함."""

    @wraps(f)
    @require_auth
    def decorated_function(*args, **kwargs):
        if not g.principal.is_admin:
            return fail("Admin access required", 403)
        return f(*args, **kwargs)

    return decorated_function


def is_cron_request():
    """X-Cron-Secret 헤더가 설정값과 일치하는지 확인한다."""
    secret = current_app.config.get("CRON_SECRET")
    supplied = request.headers.get("X-Cron-Secret", "")
    return bool(secret) and hmac.compare_digest(supplied, secret)
