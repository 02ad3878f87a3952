"""사용자별 대시보드 조합 (읽기 전용)."""

from flask import current_app
from sqlalchemy import func

from models import Announcement, CustomerInquiry, Price, db
from models.inquiry import STATUS_ASSIGNED, STATUS_PENDING, STATUS_QUOTED
from services.inquiry_service import serialize


def build_dashboard(principal):
    limit = current_app.config.get("DASHBOARD_LIST_LIMIT", 10)
    notice_limit = current_app.config.get("DASHBOARD_ANNOUNCEMENT_LIMIT", 5)

    # ── 공지 ──
    announcements = Announcement.query.filter_by(is_active=True).order_by(
        Announcement.priority_rank().desc(),
        Announcement.created_at.desc(),
    ).limit(notice_limit).all()

    # ── 대기 중 (가져가기 대상) ──
    pending = CustomerInquiry.query.filter_by(status=STATUS_PENDING).order_by(
        CustomerInquiry.created_at.desc()
    ).limit(limit).all()

    # ── 다른 사람이 가져간 문의 (연락처 마스킹) ──
    taken = CustomerInquiry.query.filter(
        CustomerInquiry.status == STATUS_ASSIGNED,
        CustomerInquiry.assigned_to != principal.user_id,
    ).order_by(CustomerInquiry.assigned_at.desc()).limit(limit).all()

    # ── 내 문의 ──
    mine = CustomerInquiry.query.filter(
        CustomerInquiry.assigned_to == principal.user_id,
        CustomerInquiry.status.in_((STATUS_ASSIGNED, STATUS_QUOTED)),
    ).order_by(CustomerInquiry.assigned_at.desc()).limit(limit).all()

    stats = {
        "totalPrices": Price.query.filter_by(is_active=True).count(),
        "totalInquiries": db.session.query(func.count(CustomerInquiry.id)).scalar() or 0,
        "pendingInquiries": CustomerInquiry.query.filter_by(status=STATUS_PENDING).count(),
        "myInquiries": CustomerInquiry.query.filter_by(assigned_to=principal.user_id).count(),
    }

    return {
        "announcements": [a.to_dict() for a in announcements],
        "pendingInquiries": serialize(pending, principal),
        "assignedInquiries": serialize(taken, principal),
        "myInquiries": serialize(mine, principal),
        "stats": stats,
    }
