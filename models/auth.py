from datetime import datetime

from models._base import db


class LoginAttempt(db.Model):
    __tablename__ = "login_attempts"
    __table_args__ = (db.Index("ix_login_attempt_ip_created", "ip", "created_at"),)

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    ip = db.Column(db.String(64), nullable=False, index=True)
    username = db.Column(db.String(50), default="")
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
