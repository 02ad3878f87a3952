"""가격 관리 블루프린트: 원가/공시가 CRUD."""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from flask import Blueprint, current_app, g, request
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from models import BusinessType, Price, db
from models.price import PRICE_TYPES
from routes.utils import fail, json_body, ok, parse_bool, require_permission
from services.search import contains

logger = logging.getLogger(__name__)

prices_bp = Blueprint("prices", __name__, url_prefix="/api/prices")

SORTABLE = {
    "created_at": Price.created_at,
    "price": Price.price,
    "origin": Price.origin,
    "destination": Price.destination,
    "valid_from": Price.valid_from,
}


def _parse_date(value):
    if value in (None, ""):
        return None
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date: {value}")


def _parse_price(value):
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError("Price must be a number")
    if not amount.is_finite():
        raise ValueError("Price must be a number")
    if amount < 0:
        raise ValueError("Price must not be negative")
    return amount


def _apply_payload(price, data, creating=False):
    """요청 본문을 Price 에 반영. 잘못된 값이면 ValueError."""
    if creating or "businessTypeId" in data:
        btype = db.session.get(BusinessType, data.get("businessTypeId")) if data.get("businessTypeId") else None
        if not btype or not btype.is_active:
            raise ValueError("Business type not found")
        price.business_type_id = btype.id

    for key, attr in (("origin", "origin"), ("destination", "destination")):
        if creating or key in data:
            value = str(data.get(key, "")).strip()
            if not value:
                raise ValueError(f"{key} is required")
            setattr(price, attr, value)

    if creating or "priceType" in data:
        price_type = str(data.get("priceType", "public")).strip()
        if price_type not in PRICE_TYPES:
            raise ValueError("priceType must be cost or public")
        price.price_type = price_type

    if creating or "price" in data:
        price.price = _parse_price(data.get("price"))

    if "currency" in data:
        price.currency = str(data["currency"]).strip().upper() or "CNY"
    if "unit" in data:
        price.unit = str(data["unit"]).strip() or "kg"
    if "description" in data:
        price.description = str(data["description"]).strip()

    if creating or "validFrom" in data:
        valid_from = _parse_date(data.get("validFrom"))
        if not valid_from:
            raise ValueError("validFrom is required")
        price.valid_from = valid_from
    if "validTo" in data:
        price.valid_to = _parse_date(data["validTo"])
    if price.valid_to and price.valid_to < price.valid_from:
        raise ValueError("validTo must not be before validFrom")

    if "isActive" in data:
        price.is_active = parse_bool(data["isActive"])


@prices_bp.route("", methods=["GET"])
@require_permission("prices", "view")
def list_prices():
    page = max(request.args.get("page", 1, type=int), 1)
    page_size = request.args.get("pageSize", current_app.config["DEFAULT_PAGE_SIZE"], type=int)
    page_size = min(max(page_size, 1), current_app.config["MAX_PAGE_SIZE"])

    query = Price.query
    search = request.args.get("search", "").strip()
    if search:
        query = query.filter(or_(
            contains(Price.origin, search),
            contains(Price.destination, search),
            contains(Price.description, search),
        ))
    business_type_id = request.args.get("businessTypeId", type=int)
    if business_type_id:
        query = query.filter(Price.business_type_id == business_type_id)
    price_type = request.args.get("priceType")
    if price_type:
        query = query.filter(Price.price_type == price_type)
    if "isActive" in request.args:
        query = query.filter(Price.is_active.is_(parse_bool(request.args["isActive"])))

    column = SORTABLE.get(request.args.get("sortBy", "created_at"), Price.created_at)
    order = column.asc() if request.args.get("sortOrder", "desc").lower() == "asc" else column.desc()

    try:
        pagination = query.order_by(order, Price.id.desc()).paginate(
            page=page, per_page=page_size, error_out=False
        )
    except SQLAlchemyError:
        logger.exception("Price list query failed")
        return fail("Failed to fetch prices", 500)

    return ok({
        "data": [p.to_dict() for p in pagination.items],
        "total": pagination.total,
        "page": page,
        "pageSize": page_size,
        "totalPages": pagination.pages,
    })


@prices_bp.route("/<int:price_id>", methods=["GET"])
@require_permission("prices", "view")
def get_price(price_id):
    price = db.session.get(Price, price_id)
    if not price:
        return fail("Price not found", 404)
    return ok(price.to_dict())


@prices_bp.route("", methods=["POST"])
@require_permission("prices", "create")
def create_price():
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    price = Price(created_by=g.principal.user_id)
    try:
        _apply_payload(price, data, creating=True)
    except ValueError as exc:
        return fail(str(exc), 400)

    try:
        db.session.add(price)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Price create failed")
        return fail("Failed to create price", 500)
    logger.info("Price %s created by %s", price.id, g.principal.username)
    return ok(price.to_dict(), message="Price created successfully", status=201)


@prices_bp.route("/<int:price_id>", methods=["PUT"])
@require_permission("prices", "update")
def update_price(price_id):
    price = db.session.get(Price, price_id)
    if not price:
        return fail("Price not found", 404)

    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    try:
        _apply_payload(price, data)
    except ValueError as exc:
        db.session.rollback()
        return fail(str(exc), 400)

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Price update failed: %s", price_id)
        return fail("Failed to update price", 500)
    return ok(price.to_dict(), message="Price updated successfully")


@prices_bp.route("/<int:price_id>", methods=["DELETE"])
@require_permission("prices", "delete")
def delete_price(price_id):
    price = db.session.get(Price, price_id)
    if not price or not price.is_active:
        return fail("Price not found", 404)

    price.is_active = False
    db.session.commit()
    return ok(message="Price deleted successfully")
