"""가격 관리 API 테스트"""
import json

from models import BusinessType, Price, db

ALL = [("prices", a) for a in ("view", "create", "update", "delete")]


def _business_type():
    btype = BusinessType(name="해운", code="sea")
    db.session.add(btype)
    db.session.commit()
    return btype.id


def _payload(type_id, **overrides):
    data = {
        "businessTypeId": type_id,
        "origin": "Shanghai",
        "destination": "Busan",
        "priceType": "public",
        "price": "15.50",
        "validFrom": "2026-01-01",
    }
    data.update(overrides)
    return data


def test_create_price(client, make_user, auth_headers):
    headers = auth_headers(make_user("pricer", permissions=ALL))
    type_id = _business_type()

    resp = client.post("/api/prices", data=json.dumps(_payload(type_id)), headers=headers)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["price"] == 15.5
    assert data["currency"] == "CNY"
    assert data["business_type_code"] == "sea"


def test_create_price_validation(client, make_user, auth_headers):
    headers = auth_headers(make_user("pricer", permissions=ALL))
    type_id = _business_type()

    cases = [
        _payload(type_id, price="abc"),
        _payload(type_id, price="-1"),
        _payload(type_id, priceType="secret"),
        _payload(type_id, validFrom="not-a-date"),
        _payload(type_id, validTo="2025-01-01"),
        _payload(999),
        _payload(type_id, origin=""),
    ]
    for payload in cases:
        resp = client.post("/api/prices", data=json.dumps(payload), headers=headers)
        assert resp.status_code == 400, payload
    assert Price.query.count() == 0


def test_list_search_and_sort(client, make_user, auth_headers):
    headers = auth_headers(make_user("pricer", permissions=ALL))
    type_id = _business_type()
    for origin, price in (("Shanghai", "20"), ("Ningbo", "10"), ("Qingdao", "30")):
        client.post("/api/prices", data=json.dumps(_payload(type_id, origin=origin, price=price)), headers=headers)

    page = client.get("/api/prices?sortBy=price&sortOrder=asc", headers=headers).get_json()["data"]
    assert [p["origin"] for p in page["data"]] == ["Ningbo", "Shanghai", "Qingdao"]

    page = client.get("/api/prices?search=Qing", headers=headers).get_json()["data"]
    assert page["total"] == 1


def test_update_and_delete(client, make_user, auth_headers):
    headers = auth_headers(make_user("pricer", permissions=ALL))
    type_id = _business_type()
    price_id = client.post("/api/prices", data=json.dumps(_payload(type_id)), headers=headers).get_json()["data"]["id"]

    resp = client.put(f"/api/prices/{price_id}", data=json.dumps({"price": 18, "currency": "usd"}), headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["price"] == 18.0
    assert data["currency"] == "USD"

    assert client.delete(f"/api/prices/{price_id}", headers=headers).status_code == 200
    db.session.expire_all()
    assert db.session.get(Price, price_id).is_active is False


def test_view_only_user_cannot_create(client, make_user, auth_headers):
    headers = auth_headers(make_user("viewer", permissions=[("prices", "view")]))
    type_id = _business_type()
    resp = client.post("/api/prices", data=json.dumps(_payload(type_id)), headers=headers)
    assert resp.status_code == 403


def test_non_finite_price_rejected(client, make_user, auth_headers):
    headers = auth_headers(make_user("pricer", permissions=ALL))
    type_id = _business_type()

    for bad in ("NaN", "Infinity", "-Infinity", "sNaN"):
        resp = client.post("/api/prices", data=json.dumps(_payload(type_id, price=bad)), headers=headers)
        assert resp.status_code == 400, bad
        assert resp.get_json()["error"] == "Price must be a number"
    assert Price.query.count() == 0

    price_id = client.post("/api/prices", data=json.dumps(_payload(type_id)), headers=headers).get_json()["data"]["id"]
    resp = client.put(f"/api/prices/{price_id}", data=json.dumps({"price": "NaN"}), headers=headers)
    assert resp.status_code == 400


def test_search_wildcards_are_literal(client, make_user, auth_headers):
    headers = auth_headers(make_user("pricer", permissions=ALL))
    type_id = _business_type()
    client.post("/api/prices", data=json.dumps(_payload(type_id, origin="Shanghai")), headers=headers)
    client.post("/api/prices", data=json.dumps(_payload(type_id, origin="100%_port")), headers=headers)

    page = client.get("/api/prices?search=%25", headers=headers).get_json()["data"]
    assert [p["origin"] for p in page["data"]] == ["100%_port"]

    page = client.get("/api/prices?search=_", headers=headers).get_json()["data"]
    assert page["total"] == 1
