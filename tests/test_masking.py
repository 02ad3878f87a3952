"""연락처 마스킹 테스트"""
from services.auth_service import Principal
from services.inquiry_service import mask_email, mask_phone, redact


def _inquiry(**overrides):
    data = {
        "id": "inq_1",
        "customer_email": "zhangwei@example.com",
        "customer_phone": "13812345678",
        "assigned_to": "user_owner",
    }
    data.update(overrides)
    return data


def test_mask_email_keeps_two_chars_and_domain():
    assert mask_email("zhangwei@example.com") == "zh***@example.com"


def test_mask_email_short_local_part_unchanged():
    assert mask_email("a@example.com") == "a@example.com"


def test_mask_phone_hides_middle_digits():
    assert mask_phone("13812345678") == "138****5678"


def test_mask_phone_other_format_unchanged():
    assert mask_phone("010-1234") == "010-1234"


def test_mask_empty_values():
    assert mask_email("") == ""
    assert mask_phone(None) is None


def test_redact_for_other_user():
    original = _inquiry()
    masked = redact(original, Principal("user_other"))

    assert masked["customer_email"] == "zh***@example.com"
    assert masked["customer_phone"] == "138****5678"
    # 원본은 그대로
    assert original["customer_email"] == "zhangwei@example.com"
    assert original["customer_phone"] == "13812345678"


def test_redact_owner_sees_full_contact():
    data = redact(_inquiry(), Principal("user_owner"))
    assert data["customer_email"] == "zhangwei@example.com"
    assert data["customer_phone"] == "13812345678"


def test_redact_admin_sees_full_contact():
    data = redact(_inquiry(), Principal("user_admin", role="admin"))
    assert data["customer_phone"] == "13812345678"


def test_redact_unassigned_inquiry_is_visible():
    data = redact(_inquiry(assigned_to=None), Principal("user_other"))
    assert data["customer_email"] == "zhangwei@example.com"
