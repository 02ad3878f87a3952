"""
초기 데이터 생성 스크립트
권한 목록, 기본 업무 유형, 관리자 계정, 기본 시스템 설정을 만든다. 여러 번 실행해도 안전하다.
사용법: ADMIN_PASSWORD=... python scripts/init_db.py
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from models import BusinessType, Permission, SystemSetting, User, db
from models.user import PERMISSION_ACTIONS, PERMISSION_MODULES, ROLE_ADMIN
from services.auth_service import hash_password
from services.settings_service import reset_settings

DEFAULT_BUSINESS_TYPES = [
    ("해운", "sea", "해상 운송"),
    ("항공", "air", "항공 운송"),
    ("특송", "express", "국제 특송"),
    ("철도", "rail", "철도 운송"),
]


def seed_permissions():
    created = 0
    for module in PERMISSION_MODULES:
        for action in PERMISSION_ACTIONS:
            if Permission.query.filter_by(module=module, action=action).first():
                continue
            db.session.add(Permission(module=module, action=action, description=f"{module}:{action}"))
            created += 1
    db.session.commit()
    return created


def seed_business_types():
    created = 0
    for name, code, description in DEFAULT_BUSINESS_TYPES:
        if BusinessType.query.filter_by(code=code).first():
            continue
        db.session.add(BusinessType(name=name, code=code, description=description))
        created += 1
    db.session.commit()
    return created


def seed_admin(password):
    username = os.environ.get("ADMIN_USERNAME", "admin")
    if User.query.filter_by(username=username).first():
        return False
    admin = User(
        username=username,
        email=os.environ.get("ADMIN_EMAIL", "admin@example.com"),
        password_hash=hash_password(password),
        role=ROLE_ADMIN,
        permissions=Permission.query.all(),
    )
    db.session.add(admin)
    db.session.commit()
    return True


def main():
    password = os.environ.get("ADMIN_PASSWORD")
    if not password:
        print("ADMIN_PASSWORD 환경변수를 설정하세요.")
        return 1

    with app.app_context():
        db.create_all()
        perms = seed_permissions()
        types = seed_business_types()
        admin_created = seed_admin(password)
        if SystemSetting.query.count() == 0:
            reset_settings()

    print(f"권한 {perms}건, 업무 유형 {types}건 생성")
    print("관리자 계정 생성" if admin_created else "관리자 계정이 이미 존재합니다")
    return 0


if __name__ == "__main__":
    sys.exit(main())
