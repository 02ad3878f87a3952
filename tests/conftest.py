import os
from pathlib import Path

import pytest

# Configure a dedicated SQLite DB for tests before importing the Flask app.
TEST_DB_PATH = Path(__file__).resolve().parent / "pytest_cprice.db"
os.environ["FLASK_ENV"] = "development"
os.environ["SECRET_KEY"] = "test_secret_key"
os.environ["JWT_SECRET"] = "test_jwt_secret"
os.environ["CRON_SECRET"] = "test_cron_secret"
os.environ["SCHEDULER_DISABLED"] = "1"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH.as_posix()}"

from app import app as _flask_app, db
from extensions import limiter
from models import CustomerInquiry, Permission, User
from services.auth_service import Principal, hash_password, issue_token

TEST_PASSWORD = "test_password_123"
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def flask_app():
    _flask_app.config["TESTING"] = True
    _flask_app.config["RATELIMIT_ENABLED"] = False
    limiter.enabled = False
    _flask_app.config["CRON_SECRET"] = "test_cron_secret"

    with _flask_app.app_context():
        db.session.remove()
        db.drop_all()
        db.create_all()
        yield _flask_app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


def _permission(module, action):
    perm = Permission.query.filter_by(module=module, action=action).first()
    if not perm:
        perm = Permission(module=module, action=action)
        db.session.add(perm)
        db.session.flush()
    return perm


@pytest.fixture
def make_user(flask_app):
    """사용자 생성 헬퍼. permissions 는 (module, action) 목록."""

    def _make(username, role="user", permissions=(), is_active=True):
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=_PASSWORD_HASH,
            role=role,
            is_active=is_active,
            permissions=[_permission(m, a) for m, a in permissions],
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(flask_app):
    def _headers(user):
        return {
            "Authorization": f"Bearer {issue_token(user)}",
            "Content-Type": "application/json",
        }

    return _headers


@pytest.fixture
def principal_of():
    return Principal.from_user


@pytest.fixture
def make_inquiry(flask_app):
    def _make(**overrides):
        values = {
            "customer_name": "张伟",
            "customer_email": "zhangwei@example.com",
            "customer_phone": "13812345678",
            "customer_region": "上海",
            "business_type": "sea",
            "origin": "Shanghai",
            "destination": "Busan",
        }
        values.update(overrides)
        inquiry = CustomerInquiry(**values)
        db.session.add(inquiry)
        db.session.commit()
        return inquiry

    return _make
