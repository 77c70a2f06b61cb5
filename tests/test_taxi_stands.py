import math

from app.db.models.audit_log import AuditLog
from app.db.models.location import Location
from app.db.models.taxi_stand import TaxiStand
from app.utils.geo import EARTH_RADIUS_METERS

METERS_PER_DEGREE = EARTH_RADIUS_METERS * math.pi / 180


def stand_payload(**overrides):
    payload = {
        "name": "Posta Stand",
        "capacity": 12,
        "location": {"latitude": -6.8162, "longitude": 39.2894, "address": "Posta"},
    }
    payload.update(overrides)
    return payload


def test_city_admin_manages_stands(client, db, factory, auth):
    admin = factory.city_admin()

    created = client.post("/api/v1/taxi-stands/", json=stand_payload(), headers=auth(admin))
    assert created.status_code == 201
    stand_id = created.json()["id"]
    assert created.json()["location"]["address"] == "Posta"
    assert created.json()["is_active"] is True

    updated = client.put(
        f"/api/v1/taxi-stands/{stand_id}",
        json={"capacity": 20, "location": {"latitude": -6.8}},
        headers=auth(admin),
    )
    assert updated.json()["capacity"] == 20
    assert updated.json()["location"]["latitude"] == -6.8
    assert updated.json()["location"]["longitude"] == 39.2894

    listed = client.get("/api/v1/taxi-stands/", headers=auth(admin))
    assert [s["id"] for s in listed.json()] == [stand_id]

    deleted = client.delete(f"/api/v1/taxi-stands/{stand_id}", headers=auth(admin))
    assert deleted.status_code == 200
    assert db.query(TaxiStand).count() == 0
    assert db.query(Location).count() == 0
    assert client.get(f"/api/v1/taxi-stands/{stand_id}", headers=auth(admin)).status_code == 404


def test_stand_validation(client, factory, auth):
    admin = factory.city_admin()

    zero_capacity = client.post("/api/v1/taxi-stands/", json=stand_payload(capacity=0), headers=auth(admin))
    assert zero_capacity.status_code == 400
    assert zero_capacity.json()["error"].startswith("capacity:")

    no_coordinates = client.post(
        "/api/v1/taxi-stands/", json=stand_payload(location={"address": "Posta"}), headers=auth(admin)
    )
    assert no_coordinates.status_code == 400


def test_store_owner_cannot_manage_stands(client, factory, auth):
    response = client.post("/api/v1/taxi-stands/", json=stand_payload(), headers=auth(factory.store_owner()))
    assert response.status_code == 403


def test_nearby_boundary(client, factory, auth):
    inside = factory.taxi_stand(4999 / METERS_PER_DEGREE, 0.0, name="Inside")
    factory.taxi_stand(5001 / METERS_PER_DEGREE, 0.0, name="Outside")
    factory.taxi_stand(5000 / METERS_PER_DEGREE, 0.0, name="Edge")
    here = factory.taxi_stand(0.0, 0.0, name="Here", is_active=False)

    response = client.post(
        "/api/v1/taxi-stands/nearby",
        json={"latitude": 0, "longitude": 0},
        headers=auth(factory.user()),
    )

    assert response.status_code == 200
    body = response.json()
    assert [s["id"] for s in body] == [here.id, inside.id]
    assert body[0]["distance"] == 0
    assert abs(body[1]["distance"] - 4999) < 0.01


def test_nearby_validates_coordinates(client, factory, auth):
    response = client.post(
        "/api/v1/taxi-stands/nearby",
        json={"latitude": 91, "longitude": 0},
        headers=auth(factory.user()),
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("latitude:")


def test_nearby_requires_authentication(client):
    response = client.post("/api/v1/taxi-stands/nearby", json={"latitude": 0, "longitude": 0})
    assert response.status_code == 401


def test_stand_location_change_is_audited(client, db, factory, auth):
    admin = factory.city_admin()
    stand = factory.taxi_stand(-6.8, 39.28)

    client.put(f"/api/v1/taxi-stands/{stand.id}", json={"location": {"longitude": 39.3}}, headers=auth(admin))

    log = db.query(AuditLog).filter(AuditLog.resource == "TaxiStand").one()
    assert log.old_values["location"]["longitude"] == 39.28
    assert log.new_values["location"]["longitude"] == 39.3
