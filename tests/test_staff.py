from app.db.models.audit_log import AuditLog
from app.db.models.store import StoreStaff


def test_add_staff_member(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    cashier = factory.user()

    response = client.post(
        "/api/v1/stores/staff",
        json={"store_id": store.id, "user_id": cashier.id, "role": "CASHIER"},
        headers=auth(owner),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "CASHIER"
    assert body["is_active"] is True
    assert body["user"]["email"] == cashier.email
    assert db.query(AuditLog).filter(AuditLog.resource == "StoreStaff").count() == 1


def test_duplicate_staff_conflicts(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    member = factory.user()
    factory.staff(store, member)

    response = client.post(
        "/api/v1/stores/staff",
        json={"store_id": store.id, "user_id": member.id, "role": "MANAGER"},
        headers=auth(owner),
    )

    assert response.status_code == 409
    assert response.json()["error"] == "User is already a staff member of this store"
    assert db.query(StoreStaff).count() == 1


def test_add_staff_unknown_user_or_store(client, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)

    unknown_user = client.post(
        "/api/v1/stores/staff",
        json={"store_id": store.id, "user_id": 9999, "role": "CASHIER"},
        headers=auth(owner),
    )
    assert unknown_user.status_code == 404

    unknown_store = client.post(
        "/api/v1/stores/staff",
        json={"store_id": 9999, "user_id": factory.user().id, "role": "CASHIER"},
        headers=auth(owner),
    )
    assert unknown_store.status_code == 404


def test_invalid_staff_role_is_rejected(client, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    response = client.post(
        "/api/v1/stores/staff",
        json={"store_id": store.id, "user_id": factory.user().id, "role": "JANITOR"},
        headers=auth(owner),
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("role:")


def test_list_staff_is_scoped_and_filtered(client, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    manager = factory.staff(store, factory.user(), role="MANAGER")
    factory.staff(store, factory.user(), role="DELIVERY")
    factory.staff(factory.store(factory.store_owner()), factory.user(), role="MANAGER")

    everyone = client.get("/api/v1/stores/staff", headers=auth(owner)).json()
    assert len(everyone) == 2

    managers = client.get("/api/v1/stores/staff?role=MANAGER", headers=auth(owner)).json()
    assert [s["id"] for s in managers] == [manager.id]


def test_update_and_remove_staff(client, db, factory, auth):
    owner = factory.store_owner()
    member = factory.staff(factory.store(owner), factory.user())
    member_id = member.id

    updated = client.put(
        f"/api/v1/stores/staff/{member_id}",
        json={"role": "INVENTORY", "is_active": False},
        headers=auth(owner),
    )
    assert updated.status_code == 200
    assert updated.json()["role"] == "INVENTORY"
    assert updated.json()["is_active"] is False

    removed = client.delete(f"/api/v1/stores/staff/{member_id}", headers=auth(owner))
    assert removed.status_code == 200
    assert db.query(StoreStaff).count() == 0


def test_other_owner_cannot_touch_staff(client, factory, auth):
    member = factory.staff(factory.store(factory.store_owner()), factory.user())
    intruder = factory.store_owner()

    assert client.put(
        f"/api/v1/stores/staff/{member.id}", json={"is_active": False}, headers=auth(intruder)
    ).status_code == 403
    assert client.delete(f"/api/v1/stores/staff/{member.id}", headers=auth(intruder)).status_code == 403
