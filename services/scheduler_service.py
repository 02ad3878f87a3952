"""APScheduler 기반 문의 자동 반환 서비스.

주기적으로 실행되어 보류 기한(auto_release_at)이 지난 배정 문의를
대기 상태로 되돌린다. gunicorn --preload 모드에서 단일 스케줄러만
동작하도록 설계.
"""

import logging
import os

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)


def _release_expired_inquiries(app):
    """보류 기한이 지난 문의를 일괄 반환한다."""
    with app.app_context():
        from models import db
        from services.claim_service import auto_release_expired

        try:
            auto_release_expired()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[자동반환] 처리 실패")


def init_scheduler(app):
    """Flask 앱에 APScheduler를 연결하고 자동 반환 작업을 등록한다.

    환경변수 SCHEDULER_DISABLED=1 로 비활성화 가능 (gunicorn 멀티워커 시 활용).
    """
    if scheduler.running:
        return
    if os.environ.get("SCHEDULER_DISABLED", "") == "1":
        logger.info("[스케줄러] SCHEDULER_DISABLED=1: 스케줄러 비활성화")
        return

    interval = int(app.config.get("AUTO_RELEASE_INTERVAL_SECONDS", 300))
    scheduler.add_job(
        func=_release_expired_inquiries,
        trigger="interval",
        seconds=interval,
        args=[app],
        id="inquiry_auto_release",
        replace_existing=True,
        max_instances=1,
    )
    scheduler.start()
    logger.info("[스케줄러] APScheduler 시작: 자동 반환 체크 주기: %d초", interval)
