"""업무 유형(해운/항공/특송 등) 관리 블루프린트."""

import logging

from flask import Blueprint, request
from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError

from models import BusinessType, CustomerInquiry, Price, db
from models.inquiry import INQUIRY_STATUSES
from routes.utils import fail, json_body, ok, parse_bool, require_permission
from services.search import contains

logger = logging.getLogger(__name__)

business_types_bp = Blueprint("business_types", __name__, url_prefix="/api/business-types")


@business_types_bp.route("", methods=["GET"])
@require_permission("business_types", "view")
def list_business_types():
    query = BusinessType.query
    if "isActive" in request.args:
        query = query.filter(BusinessType.is_active.is_(parse_bool(request.args["isActive"])))
    search = request.args.get("search", "").strip()
    if search:
        query = query.filter(contains(BusinessType.name, search) | contains(BusinessType.code, search))
    return ok([t.to_dict() for t in query.order_by(BusinessType.name).all()])


@business_types_bp.route("/<int:type_id>", methods=["GET"])
@require_permission("business_types", "view")
def get_business_type(type_id):
    btype = db.session.get(BusinessType, type_id)
    if not btype:
        return fail("Business type not found", 404)
    return ok(btype.to_dict())


@business_types_bp.route("", methods=["POST"])
@require_permission("business_types", "create")
def create_business_type():
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    name = str(data.get("name", "")).strip()
    code = str(data.get("code", "")).strip()
    if not name or not code:
        return fail("Name and code are required", 400)

    btype = BusinessType(
        name=name,
        code=code,
        description=str(data.get("description", "")).strip(),
    )
    try:
        db.session.add(btype)
        db.session.commit()
        return ok(btype.to_dict(), message="Business type created successfully", status=201)
    except IntegrityError:
        db.session.rollback()
        return fail(f"Business type code '{code}' already exists", 409)


@business_types_bp.route("/<int:type_id>", methods=["PUT"])
@require_permission("business_types", "update")
def update_business_type(type_id):
    btype = db.session.get(BusinessType, type_id)
    if not btype:
        return fail("Business type not found", 404)

    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    if "name" in data:
        name = str(data["name"]).strip()
        if not name:
            return fail("Name cannot be empty", 400)
        btype.name = name
    if "code" in data:
        code = str(data["code"]).strip()
        if not code:
            return fail("Code cannot be empty", 400)
        btype.code = code
    if "description" in data:
        btype.description = str(data["description"]).strip()
    if "isActive" in data:
        btype.is_active = parse_bool(data["isActive"])

    try:
        db.session.commit()
        return ok(btype.to_dict(), message="Business type updated successfully")
    except IntegrityError:
        db.session.rollback()
        return fail("Business type code already exists", 409)


@business_types_bp.route("/<int:type_id>", methods=["DELETE"])
@require_permission("business_types", "delete")
def delete_business_type(type_id):
    btype = db.session.get(BusinessType, type_id)
    if not btype or not btype.is_active:
        return fail("Business type not found", 404)

    active_prices = Price.query.filter_by(business_type_id=type_id, is_active=True).count()
    if active_prices:
        return fail("Cannot delete business type with active price records", 400)

    btype.is_active = False
    db.session.commit()
    return ok(message="Business type deleted successfully")


def _count_when(condition):
    return func.count(case((condition, 1)))


@business_types_bp.route("/<int:type_id>/stats", methods=["GET"])
@require_permission("business_types", "view")
def business_type_stats(type_id):
    """업무 유형별 가격/문의 통계."""
    btype = db.session.get(BusinessType, type_id)
    if not btype:
        return fail("Business type not found", 404)

    price_row = db.session.query(
        func.count(Price.id),
        _count_when(Price.price_type == "cost"),
        _count_when(Price.price_type == "public"),
        func.avg(Price.price),
        func.min(Price.price),
        func.max(Price.price),
    ).filter(Price.business_type_id == type_id, Price.is_active.is_(True)).one()
    total, cost, public, avg_price, min_price, max_price = price_row

    inquiry_row = db.session.query(
        func.count(CustomerInquiry.id),
        *[_count_when(CustomerInquiry.status == s) for s in INQUIRY_STATUSES],
    ).filter(CustomerInquiry.business_type == btype.code).one()

    inquiry_stats = {"total_inquiries": inquiry_row[0]}
    for status, count in zip(INQUIRY_STATUSES, inquiry_row[1:]):
        inquiry_stats[f"{status}_inquiries"] = count

    return ok({
        "businessType": btype.to_dict(),
        "priceStats": {
            "total_prices": total,
            "cost_prices": cost,
            "public_prices": public,
            "avg_price": float(avg_price) if avg_price is not None else None,
            "min_price": float(min_price) if min_price is not None else None,
            "max_price": float(max_price) if max_price is not None else None,
        },
        "inquiryStats": inquiry_stats,
    })
