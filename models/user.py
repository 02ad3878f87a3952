import uuid
from datetime import datetime

from models._base import db

ROLE_ADMIN = "admin"
ROLE_USER = "user"

PERMISSION_MODULES = ("prices", "inquiries", "announcements", "business_types", "users")
PERMISSION_ACTIONS = ("view", "create", "update", "delete", "export")


def _new_user_id():
    return f"user_{uuid.uuid4().hex}"


user_permissions = db.Table(
    "user_permissions",
    db.Column("user_id", db.String(64), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("permission_id", db.Integer, db.ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Permission(db.Model):
    __tablename__ = "permissions"
    __table_args__ = (
        db.UniqueConstraint("module", "action", name="uq_permission_module_action"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    module = db.Column(db.String(50), nullable=False)
    action = db.Column(db.String(20), nullable=False)
    description = db.Column(db.String(200), default="")

    def to_dict(self):
        return {
            "id": self.id,
            "module": self.module,
            "action": self.action,
            "description": self.description,
        }


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(64), primary_key=True, default=_new_user_id)
    username = db.Column(db.String(50), nullable=False, unique=True, index=True)
    email = db.Column(db.String(120), nullable=False, unique=True)
    password_hash = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(10), nullable=False, default=ROLE_USER)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    permissions = db.relationship(
        "Permission", secondary=user_permissions, lazy="selectin", order_by="Permission.id"
    )

    def permission_pairs(self):
        return [{"module": p.module, "action": p.action} for p in self.permissions]

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "is_active": self.is_active,
            "permissions": self.permission_pairs(),
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else "",
        }
