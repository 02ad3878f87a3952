"""문의 조회/필터/페이지네이션 및 연락처 마스킹."""

import logging
import re

from flask import current_app
from sqlalchemy import or_

from models import CustomerInquiry, db
from models.inquiry import STATUS_PENDING
from services.errors import NotFound
from services.search import contains

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "created_at": CustomerInquiry.created_at,
    "customer_name": CustomerInquiry.customer_name,
    "status": CustomerInquiry.status,
    "assigned_at": CustomerInquiry.assigned_at,
}

REQUIRED_SUBMIT_FIELDS = (
    "customerName", "customerEmail", "customerPhone", "customerRegion",
    "businessType", "origin", "destination",
)

_EMAIL_MASK = re.compile(r"(.{2}).*(@.*)")
_PHONE_MASK = re.compile(r"(\d{3})\d{4}(\d{4})")


# ── 마스킹 ──


def mask_email(email):
    """'@' 앞 두 글자만 남긴다: abcdef@x.com → ab***@x.com"""
    if not email:
        return email
    return _EMAIL_MASK.sub(r"\1***\2", email, count=1)


def mask_phone(phone):
    """11자리 번호 가운데 4자리를 가린다: 13812345678 → 138****5678"""
    if not phone:
        return phone
    return _PHONE_MASK.sub(r"\1****\2", phone, count=1)


def redact(inquiry, principal):
    """조회자가 담당자도 관리자도 아니면 연락처를 가린 사본을 돌려준다.

    원본 dict 와 DB 데이터는 변경하지 않는다.
    """
    owner = inquiry.get("assigned_to")
    if not owner or owner == principal.user_id or principal.is_admin:
        return inquiry
    masked = dict(inquiry)
    masked["customer_email"] = mask_email(inquiry.get("customer_email"))
    masked["customer_phone"] = mask_phone(inquiry.get("customer_phone"))
    return masked


def serialize(inquiries, principal):
    return [redact(i.to_dict(), principal) for i in inquiries]


# ── 조회 ──


def _parse_positive_int(value, default):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


class InquiryQuery:
    """목록 조회 조건. 요청 파라미터 이름(camelCase)을 그대로 받는다."""

    def __init__(self, page=1, page_size=None, search=None, status=None,
                 business_type=None, region=None, assigned_to=None,
                 sort_by="created_at", sort_order="desc"):
        default_size = current_app.config.get("DEFAULT_PAGE_SIZE", 20)
        max_size = current_app.config.get("MAX_PAGE_SIZE", 100)
        self.page = _parse_positive_int(page, 1)
        self.page_size = min(_parse_positive_int(page_size, default_size), max_size)
        self.search = (search or "").strip()
        self.status = status or None
        self.business_type = business_type or None
        self.region = (region or "").strip()
        self.assigned_to = assigned_to or None
        self.sort_by = sort_by if sort_by in SORTABLE_COLUMNS else "created_at"
        self.sort_order = "asc" if str(sort_order).lower() == "asc" else "desc"

    @classmethod
    def from_args(cls, args):
        return cls(
            page=args.get("page"),
            page_size=args.get("pageSize"),
            search=args.get("search"),
            status=args.get("status"),
            business_type=args.get("businessType"),
            region=args.get("region"),
            assigned_to=args.get("assignedTo"),
            sort_by=args.get("sortBy", "created_at"),
            sort_order=args.get("sortOrder", "desc"),
        )


def _apply_filters(query, q, principal):
    if q.search:
        query = query.filter(or_(
            contains(CustomerInquiry.customer_name, q.search),
            contains(CustomerInquiry.customer_email, q.search),
            contains(CustomerInquiry.origin, q.search),
            contains(CustomerInquiry.destination, q.search),
        ))
    if q.status:
        query = query.filter(CustomerInquiry.status == q.status)
    if q.business_type:
        query = query.filter(CustomerInquiry.business_type == q.business_type)
    if q.region:
        query = query.filter(contains(CustomerInquiry.customer_region, q.region))
    if q.assigned_to == "me":
        query = query.filter(CustomerInquiry.assigned_to == principal.user_id)
    elif q.assigned_to == "unassigned":
        query = query.filter(CustomerInquiry.assigned_to.is_(None))
    elif q.assigned_to:
        query = query.filter(CustomerInquiry.assigned_to == q.assigned_to)
    return query


def list_inquiries(q, principal):
    """필터된 문의 한 페이지와 전체 건수를 반환한다."""
    column = SORTABLE_COLUMNS[q.sort_by]
    order = column.asc() if q.sort_order == "asc" else column.desc()

    query = _apply_filters(CustomerInquiry.query, q, principal)
    pagination = query.order_by(order, CustomerInquiry.id).paginate(
        page=q.page, per_page=q.page_size, error_out=False, count=True
    )
    return {
        "data": serialize(pagination.items, principal),
        "total": pagination.total,
        "page": q.page,
        "pageSize": q.page_size,
        "totalPages": pagination.pages,
    }


def get_inquiry(inquiry_id, principal):
    inquiry = db.session.get(CustomerInquiry, inquiry_id)
    if not inquiry:
        raise NotFound()
    return redact(inquiry.to_dict(), principal)


# ── 공개 접수 ──


def _optional_float(value):
    if value in (None, ""):
        return None
    return float(value)


def submit_inquiry(payload):
    """공개 견적 문의를 접수한다. 필수 항목 누락 시 ValueError."""
    missing = [f for f in REQUIRED_SUBMIT_FIELDS if not str(payload.get(f) or "").strip()]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    try:
        weight = _optional_float(payload.get("estimatedWeight"))
        volume = _optional_float(payload.get("estimatedVolume"))
    except (TypeError, ValueError):
        raise ValueError("estimatedWeight/estimatedVolume must be numbers")

    inquiry = CustomerInquiry(
        customer_name=str(payload["customerName"]).strip(),
        customer_email=str(payload["customerEmail"]).strip(),
        customer_phone=str(payload["customerPhone"]).strip(),
        customer_region=str(payload["customerRegion"]).strip(),
        business_type=str(payload["businessType"]).strip(),
        origin=str(payload["origin"]).strip(),
        destination=str(payload["destination"]).strip(),
        cargo_description=payload.get("cargoDescription") or None,
        estimated_weight=weight,
        estimated_volume=volume,
        expected_ship_date=payload.get("expectedShipDate") or None,
        additional_requirements=payload.get("additionalRequirements") or None,
        status=STATUS_PENDING,
    )
    db.session.add(inquiry)
    db.session.commit()
    logger.info("Inquiry submitted: %s (%s → %s)", inquiry.id, inquiry.origin, inquiry.destination)
    return inquiry
