"""시스템 설정 블루프린트 (조회/변경/초기화는 관리자, 공개 조회는 누구나)."""

import logging

from flask import Blueprint
from sqlalchemy.exc import SQLAlchemyError

from models import db
from routes.utils import fail, json_body, ok, require_admin
from services import settings_service

logger = logging.getLogger(__name__)

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.route("", methods=["GET"])
@require_admin
def get_settings():
    return ok(settings_service.get_settings())


@settings_bp.route("", methods=["PUT"])
@require_admin
def update_settings():
    data = json_body()
    if not data:
        return fail("Invalid settings data", 400)

    try:
        results = settings_service.update_settings(data)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Settings update failed")
        return fail("Failed to update settings", 500)
    return ok(
        results,
        message=f"Settings updated: {results['success']} succeeded, {results['failed']} failed",
    )


@settings_bp.route("/reset", methods=["POST"])
@require_admin
def reset_settings():
    try:
        settings_service.reset_settings()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Settings reset failed")
        return fail("Failed to reset settings", 500)
    return ok(message="Settings reset to defaults")


@settings_bp.route("/public", methods=["GET"])
def public_settings():
    return ok(settings_service.public_settings())
