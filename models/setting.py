from datetime import datetime

from models._base import db


class SystemSetting(db.Model):
    """사이트 표시용 키-값 설정."""

    __tablename__ = "system_settings"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False, default="")
    type = db.Column(db.String(20), nullable=False, default="string")
    description = db.Column(db.String(200), default="")
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    def to_dict(self):
        return {
            "value": self.value,
            "type": self.type,
            "description": self.description,
            "updated_at": self.updated_at.strftime("%Y-%m-%d %H:%M") if self.updated_at else "",
        }
