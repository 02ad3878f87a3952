from datetime import datetime

from sqlalchemy import case

from models._base import db

ANNOUNCEMENT_PRIORITIES = ("low", "medium", "high")


class Announcement(db.Model):
    __tablename__ = "announcements"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(10), nullable=False, default="medium")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_by = db.Column(db.String(64), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    author = db.relationship("User", lazy="joined")

    @classmethod
    def priority_rank(cls):
        """high > medium > low 정렬용 식."""
        return case(
            (cls.priority == "high", 3),
            (cls.priority == "medium", 2),
            else_=1,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "priority": self.priority,
            "is_active": self.is_active,
            "created_by": self.created_by,
            "created_by_name": self.author.username if self.author else None,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else "",
        }
