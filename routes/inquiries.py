"""문의 관리 블루프린트: 목록/상세/상태 지정/관리자 재배정."""

import logging

from flask import Blueprint, g, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from routes.utils import fail, json_body, ok, require_admin, require_permission
from services import claim_service
from services.errors import InquiryError
from services.inquiry_service import InquiryQuery, get_inquiry, list_inquiries

logger = logging.getLogger(__name__)

inquiries_bp = Blueprint("inquiries", __name__, url_prefix="/api/inquiries")


@inquiries_bp.route("", methods=["GET"])
@require_permission("inquiries", "view")
def inquiry_list():
    try:
        query = InquiryQuery.from_args(request.args)
        return ok(list_inquiries(query, g.principal))
    except SQLAlchemyError:
        logger.exception("Inquiry list query failed")
        return fail("Failed to fetch inquiries", 500)


@inquiries_bp.route("/<inquiry_id>", methods=["GET"])
@require_permission("inquiries", "view")
def inquiry_detail(inquiry_id):
    try:
        return ok(get_inquiry(inquiry_id, g.principal))
    except InquiryError as exc:
        return fail(exc.message, exc.status_code)
    except SQLAlchemyError:
        logger.exception("Inquiry fetch failed: %s", inquiry_id)
        return fail("Failed to fetch inquiry", 500)


@inquiries_bp.route("/<inquiry_id>/assign", methods=["PUT"])
@require_admin
def assign_inquiry(inquiry_id):
    data = json_body()
    if data is None:
        return fail("JSON body required", 400)

    try:
        claim_service.reassign_inquiry(inquiry_id, g.principal, data.get("assignedTo"))
    except InquiryError as exc:
        return fail(exc.message, exc.status_code)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Assign failed: inquiry=%s", inquiry_id)
        return fail("Failed to assign inquiry", 500)
    return ok(message="Inquiry assigned successfully")


@inquiries_bp.route("/<inquiry_id>/status", methods=["PUT"])
@require_permission("inquiries", "update")
def set_inquiry_status(inquiry_id):
    """담당자 또는 관리자가 상태를 직접 지정한다 (4개 상태 모두 허용)."""
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    status = str(data.get("status", "")).strip()
    try:
        claim_service.override_status(inquiry_id, g.principal, status)
    except InquiryError as exc:
        return fail(exc.message, exc.status_code)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Status override failed: inquiry=%s", inquiry_id)
        return fail("Failed to update status", 500)
    return ok(message="Status updated successfully")
