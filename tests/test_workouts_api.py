from conftest import auth


def test_default_schedule(client):
    resp = client.get("/workout_schedule")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["version"] == 1
    assert data["workouts"]["Monday"] == "Leg Day"
    assert data["workouts"]["Sunday"] == "Rest"


def test_admin_updates_schedule_and_bumps_version(client, users):
    admin = auth(users, "admin")
    resp = client.put(
        "/workout_schedule",
        json={"startDate": "2024-07-10", "endDate": "2024-12-10", "workouts": {"Tuesday": "Arms"}},
        headers=admin,
    )
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["version"] == 2
    assert data["startDate"] == "2024-07-10"
    assert data["workouts"]["Tuesday"] == "Arms"
    assert data["workouts"]["Monday"] == "Leg Day"

    resp = client.put("/workout_schedule", json={"workouts": {"Friday": "Cardio"}}, headers=admin)
    assert resp.get_json()["data"]["version"] == 3

    data = client.get("/workout_schedule").get_json()["data"]
    assert data["version"] == 3
    assert data["workouts"]["Friday"] == "Cardio"
    assert data["workouts"]["Tuesday"] == "Arms"


def test_schedule_update_requires_admin(client, users):
    body = {"workouts": {"Monday": "Rest"}}
    assert client.put("/workout_schedule", json=body).status_code == 401
    assert client.put("/workout_schedule", json=body, headers=auth(users, "member")).status_code == 403


def test_schedule_validation(client, users):
    admin = auth(users, "admin")
    assert client.put("/workout_schedule", json={}, headers=admin).status_code == 400
    assert client.put("/workout_schedule", json=["Monday"], headers=admin).status_code == 400
    assert client.put("/workout_schedule", json={"workouts": {"Funday": "Yoga"}}, headers=admin).status_code == 400
    assert client.put("/workout_schedule", json={"workouts": {"Monday": ""}}, headers=admin).status_code == 400
    resp = client.put(
        "/workout_schedule",
        json={"workouts": {"Monday": "Legs"}, "startDate": "2024-12-10", "endDate": "2024-07-10"},
        headers=admin,
    )
    assert resp.status_code == 400
