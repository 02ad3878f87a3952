"""공지사항 블루프린트: 관리자 CRUD (삭제는 비활성화)."""

import logging

from flask import Blueprint, current_app, g, request
from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError

from models import Announcement, db
from models.announcement import ANNOUNCEMENT_PRIORITIES
from routes.utils import fail, json_body, ok, parse_bool, require_permission
from services.search import contains

logger = logging.getLogger(__name__)

announcements_bp = Blueprint("announcements", __name__, url_prefix="/api/announcements")

SORTABLE = {
    "created_at": Announcement.created_at,
    "title": Announcement.title,
}


@announcements_bp.route("", methods=["GET"])
@require_permission("announcements", "view")
def list_announcements():
    page = max(request.args.get("page", 1, type=int), 1)
    page_size = request.args.get("pageSize", current_app.config["DEFAULT_PAGE_SIZE"], type=int)
    page_size = min(max(page_size, 1), current_app.config["MAX_PAGE_SIZE"])

    query = Announcement.query
    search = request.args.get("search", "").strip()
    if search:
        query = query.filter(or_(
            contains(Announcement.title, search),
            contains(Announcement.content, search),
        ))
    priority = request.args.get("priority")
    if priority:
        query = query.filter(Announcement.priority == priority)
    if "isActive" in request.args:
        query = query.filter(Announcement.is_active.is_(parse_bool(request.args["isActive"])))

    sort_by = request.args.get("sortBy", "created_at")
    if sort_by == "priority":
        column = Announcement.priority_rank()
    else:
        column = SORTABLE.get(sort_by, Announcement.created_at)
    order = column.asc() if request.args.get("sortOrder", "desc").lower() == "asc" else column.desc()

    pagination = query.order_by(order, Announcement.id.desc()).paginate(
        page=page, per_page=page_size, error_out=False
    )
    return ok({
        "data": [a.to_dict() for a in pagination.items],
        "total": pagination.total,
        "page": page,
        "pageSize": page_size,
        "totalPages": pagination.pages,
    })


@announcements_bp.route("/<int:announcement_id>", methods=["GET"])
@require_permission("announcements", "view")
def get_announcement(announcement_id):
    notice = db.session.get(Announcement, announcement_id)
    if not notice:
        return fail("Announcement not found", 404)
    return ok(notice.to_dict())


@announcements_bp.route("", methods=["POST"])
@require_permission("announcements", "create")
def create_announcement():
    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    title = str(data.get("title", "")).strip()
    content = str(data.get("content", "")).strip()
    priority = str(data.get("priority", "medium")).strip()

    if not title:
        return fail("Title is required", 400)
    if not content:
        return fail("Content is required", 400)
    if priority not in ANNOUNCEMENT_PRIORITIES:
        return fail("Priority must be one of low, medium, high", 400)

    try:
        notice = Announcement(
            title=title,
            content=content,
            priority=priority,
            is_active=parse_bool(data.get("isActive", True)),
            created_by=g.principal.user_id,
        )
        db.session.add(notice)
        db.session.commit()
        return ok(notice.to_dict(), message="Announcement created successfully", status=201)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Announcement create error: %s", exc)
        return fail("Failed to create announcement", 500)


@announcements_bp.route("/<int:announcement_id>", methods=["PUT"])
@require_permission("announcements", "update")
def update_announcement(announcement_id):
    notice = db.session.get(Announcement, announcement_id)
    if not notice:
        return fail("Announcement not found", 404)

    data = json_body()
    if not data:
        return fail("JSON body required", 400)

    try:
        if "title" in data:
            title = str(data["title"]).strip()
            if not title:
                return fail("Title is required", 400)
            notice.title = title

        if "content" in data:
            content = str(data["content"]).strip()
            if not content:
                return fail("Content is required", 400)
            notice.content = content

        if "priority" in data:
            priority = str(data["priority"]).strip()
            if priority not in ANNOUNCEMENT_PRIORITIES:
                return fail("Priority must be one of low, medium, high", 400)
            notice.priority = priority

        if "isActive" in data:
            notice.is_active = parse_bool(data["isActive"])

        db.session.commit()
        return ok(notice.to_dict(), message="Announcement updated successfully")
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Announcement update error: %s", exc)
        return fail("Failed to update announcement", 500)


@announcements_bp.route("/<int:announcement_id>", methods=["DELETE"])
@require_permission("announcements", "delete")
def delete_announcement(announcement_id):
    notice = db.session.get(Announcement, announcement_id)
    if not notice or not notice.is_active:
        return fail("Announcement not found", 404)

    try:
        notice.is_active = False
        db.session.commit()
        return ok(message="Announcement deleted successfully")
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Announcement delete error: %s", exc)
        return fail("Failed to delete announcement", 500)


@announcements_bp.route("/batch/status", methods=["PUT"])
@require_permission("announcements", "update")
def batch_update_status():
    """여러 공지의 활성 상태를 한 번에 변경."""
    data = json_body() or {}
    ids = data.get("ids")
    is_active = data.get("isActive")

    if not isinstance(ids, list) or not ids or not all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
        return fail("Invalid IDs array", 400)
    if not isinstance(is_active, bool):
        return fail("isActive must be a boolean", 400)

    try:
        result = db.session.execute(
            update(Announcement)
            .where(Announcement.id.in_(ids))
            .values(is_active=is_active)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Announcement batch update error: %s", exc)
        return fail("Failed to update announcements", 500)
    return ok(message=f"{result.rowcount} announcements updated successfully")
