"""고객 물류 견적 문의 모델."""

import uuid
from datetime import datetime

from models._base import db

STATUS_PENDING = "pending"
STATUS_ASSIGNED = "assigned"
STATUS_QUOTED = "quoted"
STATUS_COMPLETED = "completed"

INQUIRY_STATUSES = (STATUS_PENDING, STATUS_ASSIGNED, STATUS_QUOTED, STATUS_COMPLETED)


def _new_inquiry_id():
    return f"inq_{uuid.uuid4().hex}"


def _iso(value):
    return value.isoformat() if value else None


class CustomerInquiry(db.Model):
    __tablename__ = "customer_inquiries"
    __table_args__ = (
        db.Index("ix_customer_inquiries_status_release", "status", "auto_release_at"),
    )

    id = db.Column(db.String(64), primary_key=True, default=_new_inquiry_id)

    # 고객 정보 (개인정보)
    customer_name = db.Column(db.String(100), nullable=False, index=True)
    customer_email = db.Column(db.String(120), nullable=False, index=True)
    customer_phone = db.Column(db.String(30), nullable=False)
    customer_region = db.Column(db.String(100), nullable=False, index=True)

    # 운송 정보
    business_type = db.Column(db.String(50), nullable=False, index=True)
    origin = db.Column(db.String(200), nullable=False)
    destination = db.Column(db.String(200), nullable=False)
    cargo_description = db.Column(db.Text)
    estimated_weight = db.Column(db.Float)
    estimated_volume = db.Column(db.Float)
    expected_ship_date = db.Column(db.String(20))
    additional_requirements = db.Column(db.Text)

    # 배정 상태
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING, index=True)
    assigned_to = db.Column(
        db.String(64),
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assigned_at = db.Column(db.DateTime, nullable=True)
    auto_release_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    assignee = db.relationship("User", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "customer_region": self.customer_region,
            "business_type": self.business_type,
            "origin": self.origin,
            "destination": self.destination,
            "cargo_description": self.cargo_description,
            "estimated_weight": self.estimated_weight,
            "estimated_volume": self.estimated_volume,
            "expected_ship_date": self.expected_ship_date,
            "additional_requirements": self.additional_requirements,
            "status": self.status,
            "assigned_to": self.assigned_to,
            "assigned_to_name": self.assignee.username if self.assignee else None,
            "assigned_at": _iso(self.assigned_at),
            "auto_release_at": _iso(self.auto_release_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
