from datetime import date, time

from conftest import auth


def _book(client, users, key, slot_id):
    return client.post(
        "/user_bookings",
        json={"userId": users[key][0], "bookingSlotId": slot_id},
        headers=auth(users, key),
    )


def test_admin_views_require_admin(client, users):
    assert client.get("/admin/bookings?date=2024-01-08").status_code == 401
    assert client.get("/admin/bookings?date=2024-01-08", headers=auth(users, "member")).status_code == 403
    assert client.get("/admin/slot-bookings?slotId=1", headers=auth(users, "member")).status_code == 403
    assert client.get("/admin/audit-logs", headers=auth(users, "member")).status_code == 403


def test_bookings_by_slot(client, users, make_slot):
    slot_id = make_slot(capacity=3)
    _book(client, users, "member", slot_id)
    _book(client, users, "other", slot_id)

    resp = client.get(f"/admin/bookings?slotId={slot_id}", headers=auth(users, "admin"))
    assert resp.status_code == 200
    rows = resp.get_json()["data"]
    assert [r["email"] for r in rows] == ["member@gym.test", "other@gym.test"]
    assert rows[0]["slot_id"] == slot_id
    assert rows[0]["booked"] == 2
    assert rows[0]["time"] == "10:00:00"


def test_bookings_by_day_ordered_by_time(client, users, make_slot):
    late = make_slot(day=date(2024, 1, 8), at=time(18, 0))
    early = make_slot(day=date(2024, 1, 8), at=time(9, 0))
    other_day = make_slot(day=date(2024, 1, 9), at=time(9, 0))
    _book(client, users, "member", late)
    _book(client, users, "other", early)
    _book(client, users, "member", other_day)

    rows = client.get("/admin/bookings?date=2024-01-08", headers=auth(users, "admin")).get_json()["data"]
    assert [r["slot_id"] for r in rows] == [early, late]


def test_bookings_requires_a_filter(client, users):
    resp = client.get("/admin/bookings", headers=auth(users, "admin"))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Either date or slotId is required"

    assert client.get("/admin/bookings?slotId=abc", headers=auth(users, "admin")).status_code == 400
    assert client.get("/admin/bookings?date=yesterday", headers=auth(users, "admin")).status_code == 400


def test_slot_bookings(client, users, make_slot):
    slot_id = make_slot(capacity=3)
    _book(client, users, "other", slot_id)

    resp = client.get(f"/admin/slot-bookings?slotId={slot_id}", headers=auth(users, "admin"))
    assert resp.status_code == 200
    bookings = resp.get_json()["data"]["bookings"]
    assert len(bookings) == 1
    assert bookings[0]["name"] == "Oscar Other"
    assert bookings[0]["booking_slot_id"] == slot_id


def test_slot_bookings_validation(client, users):
    resp = client.get("/admin/slot-bookings", headers=auth(users, "admin"))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Slot ID is required"

    resp = client.get("/admin/slot-bookings?slotId=x1", headers=auth(users, "admin"))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid slot ID"


def test_audit_log_filters(client, users, make_slot):
    slot_id = make_slot()
    _book(client, users, "member", slot_id)

    resp = client.get("/admin/audit-logs?action=BOOKING_CREATE", headers=auth(users, "admin"))
    rows = resp.get_json()["data"]
    assert len(rows) == 1
    assert rows[0]["user_id"] == users["member"][0]
    assert rows[0]["entity"] == "booking"

    resp = client.get(f"/admin/audit-logs?user_id={users['other'][0]}", headers=auth(users, "admin"))
    assert resp.get_json()["data"] == []
