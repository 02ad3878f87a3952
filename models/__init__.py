from models._base import db
from models.announcement import Announcement
from models.auth import LoginAttempt
from models.business_type import BusinessType
from models.inquiry import CustomerInquiry
from models.price import Price
from models.setting import SystemSetting
from models.user import Permission, User, user_permissions

__all__ = [
    "db",
    "Announcement",
    "LoginAttempt",
    "BusinessType",
    "CustomerInquiry",
    "Price",
    "SystemSetting",
    "Permission",
    "User",
    "user_permissions",
]
