"""대시보드 블루프린트: 문의 가져가기/반환/상태 변경."""

import logging

from flask import Blueprint, g
from sqlalchemy.exc import SQLAlchemyError

from models import db
from routes.utils import fail, is_cron_request, json_body, load_principal, ok, require_auth
from services import claim_service
from services.dashboard_service import build_dashboard
from services.errors import InquiryError, PermissionDenied

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
@require_auth
def dashboard():
    try:
        return ok(build_dashboard(g.principal))
    except SQLAlchemyError:
        logger.exception("Dashboard query failed for %s", g.principal.user_id)
        return fail("Failed to fetch dashboard data", 500)


@dashboard_bp.route("/claim-inquiry/<inquiry_id>", methods=["POST"])
@require_auth
def claim_inquiry(inquiry_id):
    try:
        claim_service.claim_inquiry(inquiry_id, g.principal)
    except InquiryError as exc:
        # 없음/이미 배정 모두 404
        return fail("Inquiry not found or already claimed", exc.status_code)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Claim failed: inquiry=%s user=%s", inquiry_id, g.principal.user_id)
        return fail("Failed to claim inquiry", 500)
    return ok(message="Inquiry claimed successfully")


@dashboard_bp.route("/release-inquiry/<inquiry_id>", methods=["POST"])
@require_auth
def release_inquiry(inquiry_id):
    try:
        claim_service.release_inquiry(inquiry_id, g.principal)
    except InquiryError as exc:
        return fail(exc.message, exc.status_code)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Release failed: inquiry=%s user=%s", inquiry_id, g.principal.user_id)
        return fail("Failed to release inquiry", 500)
    return ok(message="Inquiry released successfully")


@dashboard_bp.route("/inquiry/<inquiry_id>/status", methods=["PUT"])
@require_auth
def update_inquiry_status(inquiry_id):
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    # notes 는 받기만 하고 저장하지 않는다
    status = str(data.get("status", "")).strip()
    try:
        claim_service.advance_status(inquiry_id, g.principal, status)
    except PermissionDenied as exc:
        return fail(exc.message, 404)
    except InquiryError as exc:
        return fail(exc.message, exc.status_code)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Status update failed: inquiry=%s", inquiry_id)
        return fail("Failed to update status", 500)
    return ok(message="Status updated successfully")


@dashboard_bp.route("/auto-release-expired", methods=["POST"])
def auto_release_expired():
    """운영용 엔드포인트: 크론 시크릿 또는 관리자 토큰 필요."""
    if not is_cron_request():
        principal = load_principal()
        if not principal:
            return fail("Authentication required", 401)
        if not principal.is_admin:
            return fail("Admin access required", 403)

    try:
        released = claim_service.auto_release_expired()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Auto release failed")
        return fail("Failed to auto release inquiries", 500)
    return ok({"released": released}, message=f"Released {released} expired inquiries")
