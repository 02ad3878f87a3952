"""퍼블릭 블루프린트: 로그인 없이 사용하는 가격 조회/업무 유형/문의 접수."""

import logging
from datetime import date

from flask import Blueprint, current_app, request
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from models import BusinessType, Price, db
from routes.utils import fail, json_body, ok
from services.inquiry_service import submit_inquiry
from services.search import contains

logger = logging.getLogger(__name__)

public_bp = Blueprint("public", __name__, url_prefix="/api/public")


@public_bp.route("/prices")
def public_prices():
    page = max(request.args.get("page", 1, type=int), 1)
    page_size = request.args.get("pageSize", current_app.config["DEFAULT_PAGE_SIZE"], type=int)
    page_size = min(max(page_size, 1), current_app.config["MAX_PAGE_SIZE"])

    query = Price.query.join(BusinessType).filter(
        Price.is_active.is_(True),
        Price.price_type == "public",
        or_(Price.valid_to.is_(None), Price.valid_to >= date.today()),
    )
    business_type = request.args.get("businessType")
    if business_type:
        query = query.filter(BusinessType.code == business_type)
    origin = request.args.get("origin", "").strip()
    if origin:
        query = query.filter(contains(Price.origin, origin))
    destination = request.args.get("destination", "").strip()
    if destination:
        query = query.filter(contains(Price.destination, destination))

    try:
        pagination = query.order_by(Price.created_at.desc(), Price.id.desc()).paginate(
            page=page, per_page=page_size, error_out=False
        )
    except SQLAlchemyError:
        logger.exception("Public price search failed")
        return fail("Failed to fetch prices", 500)

    return ok({
        "data": [p.to_dict() for p in pagination.items],
        "total": pagination.total,
        "page": page,
        "pageSize": page_size,
        "totalPages": pagination.pages,
    })


@public_bp.route("/business-types")
def public_business_types():
    types = BusinessType.query.filter_by(is_active=True).order_by(BusinessType.name).all()
    return ok([{"id": t.id, "name": t.name, "code": t.code, "description": t.description} for t in types])


@public_bp.route("/inquiries", methods=["POST"])
def public_submit_inquiry():
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    try:
        inquiry = submit_inquiry(data)
    except ValueError as exc:
        return fail(str(exc), 400)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Inquiry submission failed")
        return fail("Failed to submit inquiry", 500)
    return ok({"id": inquiry.id}, message="Inquiry submitted successfully", status=201)
