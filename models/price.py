from datetime import datetime

from models._base import db

PRICE_TYPES = ("cost", "public")


class Price(db.Model):
    __tablename__ = "prices"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    business_type_id = db.Column(
        db.Integer,
        db.ForeignKey("business_types.id"),
        nullable=False,
        index=True,
    )
    origin = db.Column(db.String(200), nullable=False, index=True)
    destination = db.Column(db.String(200), nullable=False, index=True)
    price_type = db.Column(db.String(10), nullable=False, default="public")
    price = db.Column(db.Numeric(12, 2), nullable=False)
    currency = db.Column(db.String(10), nullable=False, default="CNY")
    unit = db.Column(db.String(20), nullable=False, default="kg")
    valid_from = db.Column(db.Date, nullable=False)
    valid_to = db.Column(db.Date, nullable=True)
    description = db.Column(db.Text, default="")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_by = db.Column(db.String(64), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    business_type = db.relationship("BusinessType", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "business_type_id": self.business_type_id,
            "business_type_name": self.business_type.name if self.business_type else None,
            "business_type_code": self.business_type.code if self.business_type else None,
            "origin": self.origin,
            "destination": self.destination,
            "price_type": self.price_type,
            "price": float(self.price) if self.price is not None else None,
            "currency": self.currency,
            "unit": self.unit,
            "valid_from": self.valid_from.strftime("%Y-%m-%d") if self.valid_from else "",
            "valid_to": self.valid_to.strftime("%Y-%m-%d") if self.valid_to else "",
            "description": self.description,
            "is_active": self.is_active,
            "created_by": self.created_by,
        }
