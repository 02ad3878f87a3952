"""문의 배정(claim) 워크플로 서비스.

상태 전이: pending → assigned → quoted → completed.

동시성 보장은 전적으로 DB 의 단일 조건부 UPDATE 에 맡긴다.
claim 은 `WHERE status = 'pending'` 을 UPDATE 와 같은 문장에 묶어 실행하고,
갱신된 행 수(rowcount)로 승패를 판정한다. 같은 문의에 대한 동시 claim 은
정확히 한 건만 1행을 갱신하고 나머지는 0행을 본다.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy import update

from config import Config
from models import CustomerInquiry, User, db
from models.inquiry import (
    INQUIRY_STATUSES,
    STATUS_ASSIGNED,
    STATUS_COMPLETED,
    STATUS_PENDING,
    STATUS_QUOTED,
)
from services.errors import AlreadyClaimed, InvalidStatus, NotFound, PermissionDenied, UserNotFound

logger = logging.getLogger(__name__)

# 담당자가 직접 변경할 수 있는 상태 (순서 강제 없음)
ADVANCEABLE_STATUSES = (STATUS_ASSIGNED, STATUS_QUOTED, STATUS_COMPLETED)

_CLEARED_ASSIGNMENT = {
    "status": STATUS_PENDING,
    "assigned_to": None,
    "assigned_at": None,
    "auto_release_at": None,
}


def auto_release_deadline(assigned_at):
    return assigned_at + timedelta(days=Config.INQUIRY_AUTO_RELEASE_DAYS)


def _execute(stmt):
    """조건부 UPDATE 1건을 실행하고 커밋한 뒤 갱신 행 수를 돌려준다."""
    result = db.session.execute(stmt.execution_options(synchronize_session=False))
    db.session.commit()
    return result.rowcount


def _exists(inquiry_id):
    return db.session.query(CustomerInquiry.id).filter_by(id=inquiry_id).first() is not None


def _is_released(inquiry_id):
    row = db.session.query(CustomerInquiry.status, CustomerInquiry.assigned_to).filter_by(id=inquiry_id).first()
    return row is not None and row.status == STATUS_PENDING and row.assigned_to is None


def claim_inquiry(inquiry_id, principal, now=None):
    """대기 중인 문의를 principal 에게 배정한다.

    존재 확인은 NotFound/AlreadyClaimed 구분용 진단일 뿐이며,
    정합성은 조건부 UPDATE 가 보장한다.
    """
    now = now or datetime.now()
    if not _exists(inquiry_id):
        raise NotFound()

    stmt = (
        update(CustomerInquiry)
        .where(
            CustomerInquiry.id == inquiry_id,
            CustomerInquiry.status == STATUS_PENDING,
        )
        .values(
            status=STATUS_ASSIGNED,
            assigned_to=principal.user_id,
            assigned_at=now,
            auto_release_at=auto_release_deadline(now),
            updated_at=now,
        )
    )
    if _execute(stmt) != 1:
        logger.info("Claim lost: inquiry=%s user=%s", inquiry_id, principal.user_id)
        raise AlreadyClaimed()

    logger.info("Inquiry claimed: inquiry=%s user=%s", inquiry_id, principal.user_id)


def release_inquiry(inquiry_id, principal, now=None):
    """배정을 해제하고 대기 상태로 되돌린다 (담당자 또는 관리자)."""
    now = now or datetime.now()
    inquiry = db.session.get(CustomerInquiry, inquiry_id)
    if not inquiry:
        raise NotFound()

    if inquiry.status == STATUS_PENDING and inquiry.assigned_to is None:
        # 이미 대기 상태: 변경 없이 성공
        return

    if inquiry.assigned_to != principal.user_id and not principal.is_admin:
        raise PermissionDenied()

    stmt = (
        update(CustomerInquiry)
        .where(CustomerInquiry.id == inquiry_id)
        .values(updated_at=now, **_CLEARED_ASSIGNMENT)
    )
    if not principal.is_admin:
        # 읽은 뒤 담당자가 바뀌었으면 갱신하지 않는다
        stmt = stmt.where(CustomerInquiry.assigned_to == principal.user_id)
    if _execute(stmt) != 1:
        if _is_released(inquiry_id):
            # 동시에 자동 반환됨: 결과 상태가 같으므로 성공
            logger.info("Inquiry already released: inquiry=%s", inquiry_id)
            return
        raise PermissionDenied()
    logger.info("Inquiry released: inquiry=%s by=%s", inquiry_id, principal.user_id)


def advance_status(inquiry_id, principal, new_status, now=None):
    """담당자가 문의 상태를 변경한다.

    관리자라도 담당자가 아니면 변경할 수 없다. 배정 정보는 유지한다.
    """
    if new_status not in ADVANCEABLE_STATUSES:
        raise InvalidStatus()
    now = now or datetime.now()

    stmt = (
        update(CustomerInquiry)
        .where(
            CustomerInquiry.id == inquiry_id,
            CustomerInquiry.assigned_to == principal.user_id,
        )
        .values(status=new_status, updated_at=now)
    )
    if _execute(stmt) == 1:
        logger.info(
            "Inquiry status changed: inquiry=%s -> %s by=%s",
            inquiry_id, new_status, principal.user_id,
        )
        return

    if not _exists(inquiry_id):
        raise NotFound()
    raise PermissionDenied("Inquiry not found or not assigned to you")


def override_status(inquiry_id, principal, new_status, now=None):
    """관리 화면의 상태 직접 지정 (담당자 또는 관리자).

    pending 으로 바꾸면 반환과 같이 배정 정보를 지운다. 그 외 상태는
    배정된 문의에만 적용되며 배정 정보는 유지한다.
    """
    if new_status not in INQUIRY_STATUSES:
        raise InvalidStatus()
    now = now or datetime.now()

    if new_status == STATUS_PENDING:
        values = dict(_CLEARED_ASSIGNMENT)
    else:
        values = {"status": new_status}
    stmt = (
        update(CustomerInquiry)
        .where(CustomerInquiry.id == inquiry_id)
        .values(updated_at=now, **values)
    )
    if new_status != STATUS_PENDING:
        stmt = stmt.where(CustomerInquiry.assigned_to.is_not(None))
    if not principal.is_admin:
        stmt = stmt.where(CustomerInquiry.assigned_to == principal.user_id)

    if _execute(stmt) == 1:
        logger.info(
            "Inquiry status set: inquiry=%s -> %s by=%s",
            inquiry_id, new_status, principal.user_id,
        )
        return

    inquiry = db.session.get(CustomerInquiry, inquiry_id)
    if not inquiry:
        raise NotFound()
    if not principal.is_admin and inquiry.assigned_to != principal.user_id:
        raise PermissionDenied()
    raise InvalidStatus("Inquiry must be assigned first")


def reassign_inquiry(inquiry_id, principal, target_user_id, now=None):
    """관리자 재배정. target_user_id 가 없으면 배정을 해제한다.

    현재 상태와 무관하게 적용된다 (completed 포함).
    """
    if not principal.is_admin:
        raise PermissionDenied("Admin access required")
    now = now or datetime.now()

    if not _exists(inquiry_id):
        raise NotFound()

    if target_user_id:
        target = User.query.filter_by(id=target_user_id, is_active=True).first()
        if not target:
            raise UserNotFound()
        values = {
            "status": STATUS_ASSIGNED,
            "assigned_to": target.id,
            "assigned_at": now,
            "auto_release_at": auto_release_deadline(now),
        }
    else:
        values = dict(_CLEARED_ASSIGNMENT)

    stmt = (
        update(CustomerInquiry)
        .where(CustomerInquiry.id == inquiry_id)
        .values(updated_at=now, **values)
    )
    _execute(stmt)
    logger.info(
        "Inquiry reassigned: inquiry=%s -> %s by=%s",
        inquiry_id, target_user_id or "(unassigned)", principal.user_id,
    )


def auto_release_expired(now=None):
    """보류 기간이 지난 배정을 한 번의 UPDATE 로 일괄 해제한다.

    Returns:
        int: 해제된 문의 수
    """
    now = now or datetime.now()
    stmt = (
        update(CustomerInquiry)
        .where(
            CustomerInquiry.status == STATUS_ASSIGNED,
            CustomerInquiry.auto_release_at <= now,
        )
        .values(updated_at=now, **_CLEARED_ASSIGNMENT)
    )
    released = _execute(stmt)
    if released:
        logger.info("[자동반환] %d건 대기 상태로 복귀", released)
    return released
