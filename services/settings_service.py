"""시스템 설정 (사이트 이름, 연락처 등) 조회/변경/초기화."""

import logging

from models import SystemSetting, db

logger = logging.getLogger(__name__)

# (key, 기본값, 설명): 허용 키 목록이기도 하다
DEFAULT_SETTINGS = (
    ("system_name", "CPrice 物流价格系统", "系统名称"),
    ("system_subtitle", "专业的货运代理物流服务平台", "系统副标题"),
    ("system_logo", "", "系统图标URL"),
    ("footer_text", "© 2024 CPrice 物流. 保留所有权利.", "页脚文本"),
    ("contact_email", "contact@cprice.com", "联系邮箱"),
    ("contact_phone", "400-123-4567", "联系电话"),
    ("company_address", "中国上海市浦东新区", "公司地址"),
)

ALLOWED_KEYS = {key: description for key, _, description in DEFAULT_SETTINGS}


def _defaults():
    return {
        key: {"value": value, "type": "string", "description": description, "updated_at": ""}
        for key, value, description in DEFAULT_SETTINGS
    }


def get_settings():
    """저장된 설정 전체. 하나도 없으면 기본값."""
    rows = SystemSetting.query.order_by(SystemSetting.key).all()
    if not rows:
        return _defaults()
    return {row.key: row.to_dict() for row in rows}


def public_settings():
    rows = SystemSetting.query.filter(SystemSetting.key.in_(list(ALLOWED_KEYS))).all()
    if not rows:
        return {key: value for key, value, _ in DEFAULT_SETTINGS}
    return {row.key: row.value for row in rows}


def update_settings(payload):
    """허용된 키만 반영하고 키별 성공/실패를 집계한다."""
    results = {"success": 0, "failed": 0, "errors": []}
    for key, value in payload.items():
        if key not in ALLOWED_KEYS:
            results["failed"] += 1
            results["errors"].append(f"Setting key not allowed: {key}")
            continue
        if not isinstance(value, str):
            results["failed"] += 1
            results["errors"].append(f"{key}: value must be a string")
            continue

        setting = db.session.get(SystemSetting, key)
        if setting is None:
            setting = SystemSetting(key=key, type="string", description=ALLOWED_KEYS[key])
            db.session.add(setting)
        setting.value = value
        results["success"] += 1

    db.session.commit()
    logger.info("Settings updated: %d ok, %d failed", results["success"], results["failed"])
    return results


def reset_settings():
    """모든 설정을 기본값으로 되돌린다."""
    SystemSetting.query.filter(SystemSetting.key.not_in(list(ALLOWED_KEYS))).delete(synchronize_session=False)
    for key, value, description in DEFAULT_SETTINGS:
        setting = db.session.get(SystemSetting, key)
        if setting is None:
            setting = SystemSetting(key=key)
            db.session.add(setting)
        setting.value = value
        setting.type = "string"
        setting.description = description
    db.session.commit()
    logger.info("Settings reset to defaults")
