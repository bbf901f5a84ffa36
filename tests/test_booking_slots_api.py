from datetime import date, time

from conftest import auth, slot_state


def test_list_slots_envelope_and_order(client, make_slot):
    later = make_slot(at=time(12, 0))
    earlier = make_slot(at=time(9, 0))

    resp = client.get("/booking_slots")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert [s["id"] for s in data] == [earlier, later]
    assert data[0] == {
        "id": earlier,
        "date": "2024-01-08",
        "time": "09:00:00",
        "capacity": 2,
        "booked": 0,
        "is_available": True,
        "spots_left": 2,
    }


def test_list_hides_out_of_hours_slots_by_default(client, make_slot):
    open_slot = make_slot(day=date(2024, 1, 6), at=time(10, 0))
    make_slot(day=date(2024, 1, 6), at=time(17, 0))
    make_slot(day=date(2024, 1, 7), at=time(10, 0))

    ids = [s["id"] for s in client.get("/booking_slots").get_json()["data"]]
    assert ids == [open_slot]

    all_ids = [s["id"] for s in client.get("/booking_slots?valid_only=false").get_json()["data"]]
    assert len(all_ids) == 3


def test_list_filter_by_date(client, make_slot):
    monday = make_slot(day=date(2024, 1, 8))
    make_slot(day=date(2024, 1, 9))

    data = client.get("/booking_slots?date=2024-01-08").get_json()["data"]
    assert [s["id"] for s in data] == [monday]


def test_list_rejects_bad_date(client):
    resp = client.get("/booking_slots?date=08/01/2024")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid date. Use YYYY-MM-DD"


def test_upcoming_hides_past_slots(client, make_slot):
    make_slot(day=date(2020, 1, 6), at=time(10, 0))
    future = make_slot(day=date(2099, 1, 5), at=time(10, 0))

    data = client.get("/booking_slots?upcoming=true").get_json()["data"]
    assert [s["id"] for s in data] == [future]


def test_get_slot(client, make_slot):
    slot_id = make_slot(capacity=4)
    resp = client.get(f"/booking_slots/{slot_id}")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["capacity"] == 4

    resp = client.get("/booking_slots/9999")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Booking slot not found"


def test_patch_requires_admin(client, users, make_slot):
    slot_id = make_slot()
    assert client.patch(f"/booking_slots/{slot_id}", json={"capacity": 5}).status_code == 401
    resp = client.patch(f"/booking_slots/{slot_id}", json={"capacity": 5}, headers=auth(users, "member"))
    assert resp.status_code == 403


def test_patch_capacity_reopens_full_slot(client, app, users, make_slot):
    slot_id = make_slot(capacity=1)
    client.post(
        "/user_bookings",
        json={"userId": users["member"][0], "bookingSlotId": slot_id},
        headers=auth(users, "member"),
    )
    assert slot_state(app, slot_id) == (1, False)

    resp = client.patch(f"/booking_slots/{slot_id}", json={"capacity": 3}, headers=auth(users, "admin"))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["capacity"] == 3
    assert slot_state(app, slot_id) == (1, True)


def test_patch_capacity_keeps_manually_closed_slot_closed(client, app, users, make_slot):
    slot_id = make_slot(capacity=2, is_available=False)

    resp = client.patch(f"/booking_slots/{slot_id}", json={"capacity": 6}, headers=auth(users, "admin"))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["capacity"] == 6
    assert slot_state(app, slot_id) == (0, False)

    resp = client.patch(f"/booking_slots/{slot_id}", json={"is_available": True}, headers=auth(users, "admin"))
    assert slot_state(app, slot_id) == (0, True)


def test_patch_cannot_drop_capacity_below_booked(client, app, users, make_slot):
    slot_id = make_slot(capacity=2)
    for key in ("member", "other"):
        client.post(
            "/user_bookings",
            json={"userId": users[key][0], "bookingSlotId": slot_id},
            headers=auth(users, key),
        )

    resp = client.patch(f"/booking_slots/{slot_id}", json={"capacity": 1}, headers=auth(users, "admin"))
    assert resp.status_code == 400
    assert slot_state(app, slot_id) == (2, False)


def test_patch_can_close_slot(client, app, users, make_slot):
    slot_id = make_slot(capacity=5)
    resp = client.patch(f"/booking_slots/{slot_id}", json={"is_available": False}, headers=auth(users, "admin"))
    assert resp.status_code == 200
    assert slot_state(app, slot_id) == (0, False)

    resp = client.post(
        "/user_bookings",
        json={"userId": users["member"][0], "bookingSlotId": slot_id},
        headers=auth(users, "member"),
    )
    assert resp.status_code == 400


def test_patch_rejects_booked_and_bad_values(client, users, make_slot):
    slot_id = make_slot()
    admin = auth(users, "admin")

    resp = client.patch(f"/booking_slots/{slot_id}", json={"booked": 0}, headers=admin)
    assert resp.status_code == 400

    for body in ({"capacity": 0}, {"capacity": "10"}, {"capacity": True}, {"is_available": "no"}, {"price": 1}, {}, [1, 2]):
        assert client.patch(f"/booking_slots/{slot_id}", json=body, headers=admin).status_code == 400

    assert client.patch("/booking_slots/9999", json={"capacity": 3}, headers=admin).status_code == 404
