"""문의 목록/상세/재배정 API 테스트"""
import json

from services import claim_service

VIEW = [("inquiries", "view")]


def test_list_requires_token(client):
    resp = client.get("/api/inquiries")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_list_requires_permission(client, make_user, auth_headers):
    user = make_user("noperm")
    resp = client.get("/api/inquiries", headers=auth_headers(user))
    assert resp.status_code == 403


def test_list_returns_page_envelope(client, make_user, make_inquiry, auth_headers):
    user = make_user("alice", permissions=VIEW)
    for i in range(3):
        make_inquiry(customer_name=f"customer{i}")

    resp = client.get("/api/inquiries?pageSize=2", headers=auth_headers(user))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    page = body["data"]
    assert page["total"] == 3
    assert page["page"] == 1
    assert page["pageSize"] == 2
    assert page["totalPages"] == 2
    assert len(page["data"]) == 2


def test_page_beyond_last_is_empty(client, make_user, make_inquiry, auth_headers):
    user = make_user("alice", permissions=VIEW)
    for i in range(3):
        make_inquiry(customer_name=f"customer{i}")

    resp = client.get("/api/inquiries?page=5&pageSize=2", headers=auth_headers(user))
    page = resp.get_json()["data"]
    assert page["data"] == []
    assert page["total"] == 3
    assert page["totalPages"] == 2


def test_empty_list_has_zero_pages(client, make_user, auth_headers):
    user = make_user("alice", permissions=VIEW)
    page = client.get("/api/inquiries", headers=auth_headers(user)).get_json()["data"]
    assert page["total"] == 0
    assert page["totalPages"] == 0


def test_list_filters_and_search(client, make_user, make_inquiry, auth_headers, principal_of):
    user = make_user("alice", permissions=VIEW)
    mine = make_inquiry(customer_name="Mine", business_type="air")
    make_inquiry(customer_name="Other", destination="Tokyo")
    claim_service.claim_inquiry(mine.id, principal_of(user))
    headers = auth_headers(user)

    data = client.get("/api/inquiries?assignedTo=me", headers=headers).get_json()["data"]
    assert [i["customer_name"] for i in data["data"]] == ["Mine"]

    data = client.get("/api/inquiries?assignedTo=unassigned", headers=headers).get_json()["data"]
    assert [i["customer_name"] for i in data["data"]] == ["Other"]

    data = client.get("/api/inquiries?search=Tokyo", headers=headers).get_json()["data"]
    assert data["total"] == 1

    data = client.get("/api/inquiries?businessType=air", headers=headers).get_json()["data"]
    assert data["total"] == 1

    data = client.get("/api/inquiries?status=assigned", headers=headers).get_json()["data"]
    assert data["total"] == 1


def test_unknown_sort_column_falls_back(client, make_user, make_inquiry, auth_headers):
    user = make_user("alice", permissions=VIEW)
    make_inquiry()
    resp = client.get("/api/inquiries?sortBy=customer_phone;drop&sortOrder=asc", headers=auth_headers(user))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["total"] == 1


def test_list_masks_contact_of_others(client, make_user, make_inquiry, auth_headers, principal_of):
    alice = make_user("alice", permissions=VIEW)
    bob = make_user("bob", permissions=VIEW)
    inquiry = make_inquiry()
    claim_service.claim_inquiry(inquiry.id, principal_of(alice))

    row = client.get("/api/inquiries", headers=auth_headers(bob)).get_json()["data"]["data"][0]
    assert row["customer_email"] == "zh***@example.com"
    assert row["customer_phone"] == "138****5678"

    row = client.get("/api/inquiries", headers=auth_headers(alice)).get_json()["data"]["data"][0]
    assert row["customer_email"] == "zhangwei@example.com"
    assert row["assigned_to_name"] == "alice"


def test_detail_and_missing(client, make_user, make_inquiry, auth_headers):
    user = make_user("alice", permissions=VIEW)
    inquiry = make_inquiry()

    resp = client.get(f"/api/inquiries/{inquiry.id}", headers=auth_headers(user))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["id"] == inquiry.id

    resp = client.get("/api/inquiries/inq_missing", headers=auth_headers(user))
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Inquiry not found"


def test_assign_endpoint_admin_only(client, make_user, make_inquiry, auth_headers):
    alice = make_user("alice", permissions=VIEW)
    inquiry = make_inquiry()

    resp = client.put(f"/api/inquiries/{inquiry.id}/assign",
        data=json.dumps({"assignedTo": alice.id}), headers=auth_headers(alice))
    assert resp.status_code == 403


def test_assign_endpoint(client, make_user, make_inquiry, auth_headers):
    admin = make_user("boss", role="admin")
    alice = make_user("alice")
    inquiry = make_inquiry()

    resp = client.put(f"/api/inquiries/{inquiry.id}/assign",
        data=json.dumps({"assignedTo": alice.id}), headers=auth_headers(admin))
    assert resp.status_code == 200

    resp = client.put(f"/api/inquiries/{inquiry.id}/assign",
        data=json.dumps({"assignedTo": "user_nobody"}), headers=auth_headers(admin))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "User not found"

    resp = client.put("/api/inquiries/inq_missing/assign",
        data=json.dumps({"assignedTo": alice.id}), headers=auth_headers(admin))
    assert resp.status_code == 404


def test_search_wildcards_match_literally(client, make_user, make_inquiry, auth_headers):
    user = make_user("alice", permissions=VIEW)
    make_inquiry(customer_name="Plain")
    make_inquiry(customer_name="Zhang_Wei")
    headers = auth_headers(user)

    data = client.get("/api/inquiries?search=%25", headers=headers).get_json()["data"]
    assert data["total"] == 0

    data = client.get("/api/inquiries?search=_", headers=headers).get_json()["data"]
    assert [i["customer_name"] for i in data["data"]] == ["Zhang_Wei"]

    make_inquiry(customer_name="100% Cargo")
    data = client.get("/api/inquiries?search=%25", headers=headers).get_json()["data"]
    assert [i["customer_name"] for i in data["data"]] == ["100% Cargo"]


# ── 상태 직접 지정 ──

UPDATE = [("inquiries", "view"), ("inquiries", "update")]


def _set_status(client, headers, inquiry_id, status):
    return client.put(f"/api/inquiries/{inquiry_id}/status",
        data=json.dumps({"status": status}), headers=headers)


def test_status_override_requires_permission(client, make_user, make_inquiry, auth_headers, principal_of):
    alice = make_user("alice", permissions=VIEW)
    inquiry = make_inquiry()
    claim_service.claim_inquiry(inquiry.id, principal_of(alice))

    resp = _set_status(client, auth_headers(alice), inquiry.id, "quoted")
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Permission denied"


def test_status_override_by_owner(client, make_user, make_inquiry, auth_headers, principal_of):
    alice = make_user("alice", permissions=UPDATE)
    inquiry = make_inquiry()
    claim_service.claim_inquiry(inquiry.id, principal_of(alice))

    resp = _set_status(client, auth_headers(alice), inquiry.id, "quoted")
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Status updated successfully"

    detail = client.get(f"/api/inquiries/{inquiry.id}", headers=auth_headers(alice)).get_json()["data"]
    assert detail["status"] == "quoted"
    assert detail["assigned_to"] == alice.id


def test_status_override_by_admin(client, make_user, make_inquiry, auth_headers, principal_of):
    alice = make_user("alice", permissions=UPDATE)
    admin = make_user("boss", role="admin", permissions=UPDATE)
    inquiry = make_inquiry()
    claim_service.claim_inquiry(inquiry.id, principal_of(alice))
    headers = auth_headers(admin)

    assert _set_status(client, headers, inquiry.id, "completed").status_code == 200
    detail = client.get(f"/api/inquiries/{inquiry.id}", headers=headers).get_json()["data"]
    assert detail["status"] == "completed"

    assert _set_status(client, headers, inquiry.id, "pending").status_code == 200
    detail = client.get(f"/api/inquiries/{inquiry.id}", headers=headers).get_json()["data"]
    assert detail["status"] == "pending"
    assert detail["assigned_to"] is None


def test_status_override_refusals(client, make_user, make_inquiry, auth_headers, principal_of):
    alice = make_user("alice", permissions=UPDATE)
    bob = make_user("bob", permissions=UPDATE)
    admin = make_user("boss", role="admin", permissions=UPDATE)
    claimed = make_inquiry()
    waiting = make_inquiry()
    claim_service.claim_inquiry(claimed.id, principal_of(alice))

    resp = _set_status(client, auth_headers(bob), claimed.id, "completed")
    assert resp.status_code == 403

    resp = _set_status(client, auth_headers(admin), waiting.id, "quoted")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Inquiry must be assigned first"

    resp = _set_status(client, auth_headers(admin), claimed.id, "archived")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid status"

    resp = _set_status(client, auth_headers(admin), "inq_missing", "quoted")
    assert resp.status_code == 404

    resp = client.put(f"/api/inquiries/{claimed.id}/status", data="not json", headers=auth_headers(alice))
    assert resp.status_code == 400
